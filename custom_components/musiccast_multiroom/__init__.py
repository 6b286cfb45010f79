"""MusicCast Multiroom integration for Home Assistant.

One server device distributes its audio to any number of client devices.
Every device gets its own entities; all of them share one HTTP client, one
state store and one tiered polling scheduler.
"""

from __future__ import annotations

import logging

from homeassistant.const import EVENT_HOMEASSISTANT_STOP, Platform
from homeassistant.core import Event, HomeAssistant
from homeassistant.helpers import discovery
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.typing import ConfigType

from .api import MusicCastClient, MusicCastError, group_id_for
from .config import CONFIG_SCHEMA, build_device_configs  # noqa: F401
from .const import DOMAIN
from .coordinator import MusicCastCoordinator
from .data import MusicCastDevice

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [
    Platform.SELECT,  # volume steps, input/preset source
    Platform.SWITCH,  # power, mute, lip sync, surround decoder
    Platform.NUMBER,  # continuous volume
]


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Set up MusicCast Multiroom from YAML configuration."""
    if DOMAIN not in config:
        return True

    multiroom = build_device_configs(config[DOMAIN])
    server_host = multiroom.server.host

    client = MusicCastClient(
        session=async_get_clientsession(hass),
        group_id=group_id_for(server_host),
        preset_info_regex=multiroom.preset_info_regex,
    )
    coordinator = MusicCastCoordinator(
        hass,
        client,
        intervals=multiroom.intervals,
        convergence_interval=multiroom.convergence_interval,
        convergence_timeout=multiroom.convergence_timeout,
    )

    devices: list[MusicCastDevice] = []
    for device_config in multiroom.devices:
        device = MusicCastDevice(device_config, coordinator)
        try:
            await device.async_setup()
        except MusicCastError as err:
            _LOGGER.error("Skipping %s, initial fetch failed: %s", device_config.host, err)
            continue
        coordinator.subscribe(device.host, device.async_refresh)
        devices.append(device)
        _LOGGER.info("Set up %s (%s)", device.name, device)

    if not devices:
        _LOGGER.error("None of the configured MusicCast devices could be reached")
        return False

    hass.data[DOMAIN] = {"coordinator": coordinator, "devices": devices}

    for platform in PLATFORMS:
        hass.async_create_task(discovery.async_load_platform(hass, platform, DOMAIN, {}, config))

    await coordinator.async_start()

    async def _async_stop(event: Event) -> None:
        await coordinator.async_stop()

    hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _async_stop)
    return True
