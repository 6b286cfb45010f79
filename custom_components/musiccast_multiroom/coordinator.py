"""MusicCast coordinator - single owner of the shared per-host state.

All reads and writes of snapshots, activity pings and refresh subscriptions
go through this object. It lives on the Home Assistant event loop, so no
locking is needed as long as nothing else touches the underlying stores.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from homeassistant.core import HomeAssistant

from .api import MusicCastClient
from .smart_polling import (
    ActivityRecord,
    ActivityTracker,
    CallbackRegistry,
    PollingIntervals,
    Subscription,
    TieredPollScheduler,
)
from .state import HostStateStore, StateCategory

_LOGGER = logging.getLogger(__name__)


class MusicCastCoordinator:
    """Shared cache, activity tracking and polling for every configured host."""

    def __init__(
        self,
        hass: HomeAssistant,
        client: MusicCastClient,
        intervals: PollingIntervals | None = None,
        convergence_interval: float = 1,
        convergence_timeout: float = 10,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the coordinator."""
        self.hass = hass
        self.client = client
        self.convergence_interval = convergence_interval
        self.convergence_timeout = convergence_timeout
        self._store = HostStateStore()
        self._tracker = ActivityTracker(clock)
        self._registry = CallbackRegistry()
        self._scheduler = TieredPollScheduler(hass, self._tracker, self._registry, intervals, clock)

    # ------------------------------------------------------------------
    # Accessory-facing surface
    # ------------------------------------------------------------------

    def subscribe(self, host: str, callback: Callable[..., Any], *args: Any) -> Subscription:
        """Run *callback(*args)* every time *host* is due for a refresh."""
        return self._scheduler.subscribe(host, callback, *args)

    def ping(self, host: str, powered_on: bool | None = None, user_activity: bool | None = None) -> None:
        self._tracker.ping(host, powered_on, user_activity)

    def get(self, host: str, category: StateCategory | str) -> Any | None:
        return self._store.get(host, category)

    def set(self, host: str, category: StateCategory | str, value: Any) -> Any:
        return self._store.set(host, category, value)

    def has(self, host: str, category: StateCategory | str) -> bool:
        return self._store.has(host, category)

    def activity(self, host: str) -> ActivityRecord:
        """Return a copy of the activity record for *host* (diagnostics/tests)."""
        return self._tracker.record(host)

    @property
    def hosts(self) -> list[str]:
        return self._tracker.hosts

    @property
    def intervals(self) -> PollingIntervals:
        return self._scheduler.intervals

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._scheduler.running

    async def async_tick(self, now: float | None = None) -> list[asyncio.Task]:
        return await self._scheduler.async_tick(now)

    async def async_start(self) -> None:
        await self._scheduler.async_start()

    async def async_stop(self) -> None:
        await self._scheduler.async_stop()
