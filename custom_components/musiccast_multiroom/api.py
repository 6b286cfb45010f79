"""MusicCast API modular façade.

Keeps the public import path (`custom_components.musiccast_multiroom.api.MusicCastClient`)
stable while endpoint groups live in smaller `api_*` modules. The mixins are
composed with the transport-only client from `api_base.py`.
"""

from __future__ import annotations

import hashlib

from .api_base import (
    MusicCastClient as _TransportClient,
)
from .api_base import (
    MusicCastConnectionError,
    MusicCastError,
    MusicCastInvalidDataError,
    MusicCastRequestError,
    MusicCastResponseError,
    MusicCastTimeoutError,
)
from .api_device import DeviceAPI
from .api_group import GroupAPI
from .api_playback import PlaybackAPI
from .api_preset import PresetAPI


# Order is important: mixins first, transport client last so its `__init__` is
# called exactly once via Python's MRO.
class MusicCastClient(
    DeviceAPI,
    PlaybackAPI,
    PresetAPI,
    GroupAPI,
    _TransportClient,
):
    """Aggregated MusicCast HTTP API client.

    - DeviceAPI: device info, features, zone status and controls
    - PlaybackAPI: net/usb play info and transport
    - PresetAPI: preset listing and recall
    - GroupAPI: multiroom distribution
    """


def group_id_for(server_host: str) -> str:
    """Return the distribution group id derived from the server host."""
    return hashlib.md5(server_host.encode()).hexdigest()  # noqa: S324


# after class definition, export exceptions for `from .api import` compatibility
__all__ = [
    "MusicCastClient",
    "MusicCastError",
    "MusicCastRequestError",
    "MusicCastResponseError",
    "MusicCastTimeoutError",
    "MusicCastConnectionError",
    "MusicCastInvalidDataError",
    "group_id_for",
]
