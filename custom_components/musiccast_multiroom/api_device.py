"""Device and zone helpers for the MusicCast HTTP client.

Contains the static information calls (device info, features) and the
main-zone status/controls. All networking is provided by the base client
(`api_base.MusicCastClient`).
"""

from __future__ import annotations

from urllib.parse import quote

from .const import (
    API_ENDPOINT_DEVICE_INFO,
    API_ENDPOINT_FEATURES,
    API_ENDPOINT_INPUT,
    API_ENDPOINT_LINK_AUDIO_DELAY,
    API_ENDPOINT_MUTE,
    API_ENDPOINT_POWER,
    API_ENDPOINT_SOUND_PROGRAM,
    API_ENDPOINT_STATUS,
    API_ENDPOINT_VOLUME,
    POWER_ON,
    POWER_STANDBY,
)
from .models import DeviceInfo, Features, Status


class DeviceAPI:
    """Device-information and main-zone helpers."""

    # The mixin relies on the base client providing `_request` and `zone`.

    # ------------------------------------------------------------------
    # Information helpers
    # ------------------------------------------------------------------

    async def get_device_info(self, host: str) -> DeviceInfo:  # type: ignore[override]
        """Return a pydantic-validated :class:`DeviceInfo`."""
        return DeviceInfo.model_validate(await self._request(host, API_ENDPOINT_DEVICE_INFO))  # type: ignore[attr-defined]

    async def get_features(self, host: str) -> Features:  # type: ignore[override]
        return Features.model_validate(await self._request(host, API_ENDPOINT_FEATURES))  # type: ignore[attr-defined]

    async def get_status(self, host: str) -> Status:  # type: ignore[override]
        endpoint = API_ENDPOINT_STATUS.format(zone=self.zone)  # type: ignore[attr-defined]
        return Status.model_validate(await self._request(host, endpoint))  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Zone controls
    # ------------------------------------------------------------------

    async def set_power(self, host: str, on: bool) -> None:  # type: ignore[override]
        """Switch the zone on, or to standby."""
        power = POWER_ON if on else POWER_STANDBY
        await self._zone_command(host, API_ENDPOINT_POWER, power)

    async def set_volume(self, host: str, volume: int) -> None:  # type: ignore[override]
        """Set the absolute (device-scale) volume."""
        await self._zone_command(host, API_ENDPOINT_VOLUME, str(int(volume)))

    async def set_mute(self, host: str, mute: bool) -> None:  # type: ignore[override]
        await self._zone_command(host, API_ENDPOINT_MUTE, "true" if mute else "false")

    async def set_input(self, host: str, input_code: str) -> None:  # type: ignore[override]
        await self._zone_command(host, API_ENDPOINT_INPUT, input_code)

    async def set_sound_program(self, host: str, program: str) -> None:  # type: ignore[override]
        await self._zone_command(host, API_ENDPOINT_SOUND_PROGRAM, program)

    async def set_link_audio_delay(self, host: str, delay: str) -> None:  # type: ignore[override]
        await self._zone_command(host, API_ENDPOINT_LINK_AUDIO_DELAY, delay)

    async def _zone_command(self, host: str, endpoint: str, value: str) -> None:
        path = endpoint.format(zone=self.zone) + quote(value, safe="")  # type: ignore[attr-defined]
        await self._request(host, path)  # type: ignore[attr-defined]
