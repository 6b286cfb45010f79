"""Base entity class for MusicCast Multiroom integration - minimal HA glue only."""

from __future__ import annotations

from homeassistant.core import callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from .api_base import host_url
from .const import DOMAIN, MANUFACTURER
from .data import MusicCastDevice


class MusicCastEntity(Entity):
    """Base class for all MusicCast entities.

    State is pushed: the device notifies its listeners after every scheduled
    refresh, so entities never poll on their own.
    """

    _attr_should_poll = False
    _attr_has_entity_name = True

    def __init__(self, device: MusicCastDevice, key: str) -> None:
        """Initialize with the device and a key unique per device."""
        self.device = device
        self._attr_unique_id = f"{device.unique_id}_{key}"

    @property
    def device_info(self) -> DeviceInfo:
        """Return device info from the cached deviceInfo payload."""
        info = self.device.device_info
        return DeviceInfo(
            identifiers={(DOMAIN, self.device.unique_id)},
            manufacturer=MANUFACTURER,
            name=self.device.name,
            model=info.model_name if info else None,
            sw_version=str(info.system_version) if info and info.system_version is not None else None,
            configuration_url=f"http://{host_url(self.device.host)}/",
        )

    @property
    def available(self) -> bool:
        """Return if entity is available."""
        return self.device.available

    async def async_added_to_hass(self) -> None:
        await super().async_added_to_hass()
        self.async_on_remove(self.device.add_listener(self._handle_device_update))

    @callback
    def _handle_device_update(self) -> None:
        self.async_write_ha_state()
