"""Per-host state snapshot store for MusicCast devices."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

_LOGGER = logging.getLogger(__name__)


class StateCategory(str, Enum):
    """Categories of device state kept per host."""

    DEVICE_INFO = "deviceInfo"
    STATUS = "status"
    PLAY_INFO = "playInfo"
    PRESET_INFO = "presetInfo"
    FEATURES = "features"


class HostStateStore:
    """Latest known state snapshot per device host.

    A category is either absent (never fetched) or holds the single latest
    value; no history is kept. Storage is never handed out, callers go
    through :meth:`get` and :meth:`set` only.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, dict[StateCategory, Any]] = {}

    def set(self, host: str, category: StateCategory | str, value: Any) -> Any:
        """Overwrite the *category* slot for *host* and return *value*."""
        self._snapshots.setdefault(host, {})[StateCategory(category)] = value
        return value

    def get(self, host: str, category: StateCategory | str) -> Any | None:
        """Return the stored value, or ``None`` if it was never populated.

        A missing value is logged but is not fatal: before the first refresh
        completes every category is absent.
        """
        category = StateCategory(category)
        snapshot = self._snapshots.get(host)
        if snapshot is not None and category in snapshot:
            return snapshot[category]
        _LOGGER.error("cache not found %s %s", host, category.value)
        return None

    def has(self, host: str, category: StateCategory | str) -> bool:
        return StateCategory(category) in self._snapshots.get(host, {})

    def __contains__(self, host: object) -> bool:
        return host in self._snapshots

    def __repr__(self) -> str:
        hosts = ", ".join(
            f"{host}=[{', '.join(c.value for c in snapshot)}]" for host, snapshot in self._snapshots.items()
        )
        return f"HostStateStore({hosts})"


def serialize_snapshot(value: Any) -> str:
    """Return a canonical JSON rendering of a snapshot for equality checks."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    return json.dumps(value, sort_keys=True, default=str)


def status_changed(previous: Any, new: Any) -> bool:
    """Return True if the serialized *previous* and *new* snapshots differ.

    A difference is the only evidence of activity the integration did not
    cause itself (remote control, app or front panel).
    """
    changed = serialize_snapshot(previous) != serialize_snapshot(new)
    if changed:
        _LOGGER.debug("Status change: %s -> %s", previous, new)
    return changed
