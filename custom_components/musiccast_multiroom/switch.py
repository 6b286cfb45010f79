"""MusicCast switch platform.

Power is exposed for every device. Mute only exists for the continuous volume
profile. Lip sync and surround decoder exist on the server only, and only when
it lists both of their values in its features.
"""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.switch import SwitchEntity
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.typing import ConfigType, DiscoveryInfoType

from .const import DOMAIN
from .data import MusicCastDevice
from .entity import MusicCastEntity
from .utils import musiccast_command

_LOGGER = logging.getLogger(__name__)


async def async_setup_platform(
    hass: HomeAssistant,
    config: ConfigType,
    async_add_entities: AddEntitiesCallback,
    discovery_info: DiscoveryInfoType | None = None,
) -> None:
    """Set up MusicCast switches."""
    if discovery_info is None:
        return

    devices: list[MusicCastDevice] = hass.data[DOMAIN]["devices"]
    entities: list[SwitchEntity] = []
    for device in devices:
        entities.append(MusicCastPowerSwitch(device))
        if not device.uses_volume_steps:
            entities.append(MusicCastMuteSwitch(device))
        if not device.is_server:
            continue
        if device.supports_lip_sync:
            entities.append(MusicCastLipSyncSwitch(device))
        else:
            _LOGGER.debug("Skipping lip sync switch for %s - not supported", device.host)
        if device.supports_surround_decoder:
            entities.append(MusicCastSurroundDecoderSwitch(device))
        else:
            _LOGGER.debug("Skipping surround decoder switch for %s - not supported", device.host)

    async_add_entities(entities)
    _LOGGER.info("Created %d switch entities for %d devices", len(entities), len(devices))


class MusicCastPowerSwitch(MusicCastEntity, SwitchEntity):
    """Main zone power. Turning a client on joins it to the server's group."""

    _attr_icon = "mdi:power"
    _attr_name = "Power"

    def __init__(self, device: MusicCastDevice) -> None:
        super().__init__(device, "power")

    @property
    def is_on(self) -> bool:
        return self.device.is_on

    async def async_turn_on(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "turn on"):
            await self.device.async_set_power(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "turn off"):
            await self.device.async_set_power(False)


class MusicCastMuteSwitch(MusicCastEntity, SwitchEntity):
    _attr_icon = "mdi:volume-off"
    _attr_name = "Mute"

    def __init__(self, device: MusicCastDevice) -> None:
        super().__init__(device, "mute")

    @property
    def is_on(self) -> bool | None:
        return self.device.is_muted

    async def async_turn_on(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "mute"):
            await self.device.async_set_mute(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "unmute"):
            await self.device.async_set_mute(False)


class MusicCastLipSyncSwitch(MusicCastEntity, SwitchEntity):
    """On selects lip sync, off selects audio sync for the link audio delay."""

    _attr_icon = "mdi:account-voice"
    _attr_name = "Lip Sync"

    def __init__(self, device: MusicCastDevice) -> None:
        super().__init__(device, "lip_sync")

    @property
    def is_on(self) -> bool:
        return self.device.lip_sync

    async def async_turn_on(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "enable lip sync"):
            await self.device.async_set_lip_sync(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "disable lip sync"):
            await self.device.async_set_lip_sync(False)


class MusicCastSurroundDecoderSwitch(MusicCastEntity, SwitchEntity):
    """On selects the surround decoder sound program, off selects straight."""

    _attr_icon = "mdi:surround-sound"
    _attr_name = "Surround Decoder"

    def __init__(self, device: MusicCastDevice) -> None:
        super().__init__(device, "surround_decoder")

    @property
    def is_on(self) -> bool:
        return self.device.surround_decoder

    async def async_turn_on(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "enable surround decoder"):
            await self.device.async_set_surround_decoder(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        async with musiccast_command(self.device.name, "disable surround decoder"):
            await self.device.async_set_surround_decoder(False)
