"""MusicCast number platform.

Raw volume slider for devices configured with the continuous volume profile.
"""

from __future__ import annotations

import logging

from homeassistant.components.number import NumberEntity, NumberMode
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
    """Set up MusicCast number entities."""
    if discovery_info is None:
        return

    devices: list[MusicCastDevice] = hass.data[DOMAIN]["devices"]
    entities = [MusicCastVolume(device) for device in devices if not device.uses_volume_steps]

    async_add_entities(entities)
    _LOGGER.info("Created %d number entities for %d devices", len(entities), len(devices))


class MusicCastVolume(MusicCastEntity, NumberEntity):
    """Raw device volume, limited to the device's volume range."""

    _attr_mode = NumberMode.SLIDER
    _attr_native_step = 1
    _attr_icon = "mdi:volume-high"
    _attr_name = "Volume"

    def __init__(self, device: MusicCastDevice) -> None:
        """Initialize the volume entity."""
        super().__init__(device, "volume")
        self._attr_native_min_value = device.config.volume_min
        self._attr_native_max_value = device.volume_max

    @property
    def native_value(self) -> float | None:
        return self.device.volume

    async def async_set_native_value(self, value: float) -> None:
        async with musiccast_command(self.device.name, "set volume"):
            _LOGGER.debug("Setting volume to %s for %s", value, self.device.name)
            await self.device.async_set_volume(value)
