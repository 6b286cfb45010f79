"""Net/USB playback helpers for the MusicCast HTTP client.

All networking (`_request`) is supplied by ``api_base.MusicCastClient``. This
mix-in must therefore be inherited **before** the base client in the final MRO.
"""

from __future__ import annotations

from urllib.parse import quote

from .const import API_ENDPOINT_PLAY_INFO, API_ENDPOINT_PLAYBACK
from .models import PlayInfo


class PlaybackAPI:
    """Transport-level playback info and controls."""

    # pylint: disable=no-member

    async def get_play_info(self, host: str) -> PlayInfo:  # type: ignore[override]
        """Return what the net/usb source is currently playing."""
        return PlayInfo.model_validate(await self._request(host, API_ENDPOINT_PLAY_INFO))  # type: ignore[attr-defined]

    async def set_playback(self, host: str, playback: str) -> None:  # type: ignore[override]
        """Send a playback command (``play``, ``pause``, ``stop`` …)."""
        await self._request(host, f"{API_ENDPOINT_PLAYBACK}{quote(playback, safe='')}")  # type: ignore[attr-defined]
