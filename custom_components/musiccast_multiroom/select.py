"""Select entities for MusicCast Multiroom integration."""

from __future__ import annotations

import logging

from homeassistant.components.select import SelectEntity
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
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
    """Set up MusicCast select entities."""
    if discovery_info is None:
        return

    devices: list[MusicCastDevice] = hass.data[DOMAIN]["devices"]
    entities: list[SelectEntity] = []
    for device in devices:
        if device.uses_volume_steps:
            entities.append(MusicCastVolumeStepSelect(device))
        if device.is_server:
            entities.append(MusicCastInputPresetSelect(device))

    async_add_entities(entities)
    _LOGGER.info("Created %d select entities for %d devices", len(entities), len(devices))


class MusicCastVolumeStepSelect(MusicCastEntity, SelectEntity):
    """Volume collapsed to a handful of labelled steps."""

    _attr_icon = "mdi:volume-high"
    _attr_name = "Volume"

    def __init__(self, device: MusicCastDevice) -> None:
        super().__init__(device, "volume_step")

    @property
    def options(self) -> list[str]:
        return [step.label for step in self.device.volume_steps]

    @property
    def current_option(self) -> str | None:
        step_id = self.device.volume_step_id
        for step in self.device.volume_steps:
            if step.id == step_id:
                return step.label
        return None

    async def async_select_option(self, option: str) -> None:
        step = next((step for step in self.device.volume_steps if step.label == option), None)
        if step is None:
            raise HomeAssistantError(f"Unknown volume step '{option}'")
        async with musiccast_command(self.device.name, f"set volume step '{option}'"):
            await self.device.async_set_volume_step(step.id)


class MusicCastInputPresetSelect(MusicCastEntity, SelectEntity):
    """Configured inputs followed by the device's radio and server presets.

    When neither a playing preset nor a configured input matches, the last
    resolved option is kept.
    """

    _attr_icon = "mdi:radio"
    _attr_name = "Source"

    def __init__(self, device: MusicCastDevice) -> None:
        super().__init__(device, "input_preset")
        self._last_option: str | None = None

    def _option_map(self) -> dict[str, int]:
        """Option label -> identifier; a duplicate label keeps its first identifier."""
        mapping: dict[str, int] = {}
        for item in self.device.config.inputs:
            mapping.setdefault(item.name, item.identifier)
        for preset in self.device.presets:
            mapping.setdefault(preset.display_text, preset.identifier)
        return mapping

    @property
    def options(self) -> list[str]:
        return list(self._option_map())

    @property
    def current_option(self) -> str | None:
        identifier = self.device.input_preset_id
        if identifier is not None:
            for option, option_id in self._option_map().items():
                if option_id == identifier:
                    self._last_option = option
                    break
        return self._last_option

    async def async_select_option(self, option: str) -> None:
        identifier = self._option_map().get(option)
        if identifier is None:
            raise HomeAssistantError(f"Unknown source '{option}'")
        async with musiccast_command(self.device.name, f"select source '{option}'"):
            await self.device.async_select_input_preset(identifier)
