"""Tiered adaptive polling for MusicCast hosts.

One periodic driver decides, per host, whether a refresh is due. The cadence
depends on what the host has been doing recently:

- Floor (60s): every registered host, even powered-off and idle ones
- Powered on (20s): the host was seen powered on within the last floor window
- User activity (1s): a command was issued, or an external change was
  detected, within the powered-on window

Subscribers registered for a host are run in registration order whenever the
host is due. Timestamps come from an injectable monotonic clock so ticks can
be driven deterministically.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum, auto
from typing import Any

from homeassistant.core import CALLBACK_TYPE, HomeAssistant
from homeassistant.helpers.event import async_track_time_interval

from .const import (
    DOMAIN,
    POWERED_OFF_INTERVAL,
    POWERED_ON_INTERVAL,
    TICK_INTERVAL,
    USER_ACTIVITY_INTERVAL,
)

_LOGGER = logging.getLogger(__name__)


class PollingTier(Enum):
    """Polling tier that made a host due."""

    FLOOR = auto()  # nothing recent - 60s
    POWERED_ON = auto()  # powered on recently - 20s
    USER_ACTIVITY = auto()  # user activity recently - 1s


@dataclass(frozen=True)
class PollingIntervals:
    """Tier thresholds in seconds."""

    powered_off: float = POWERED_OFF_INTERVAL
    powered_on: float = POWERED_ON_INTERVAL
    user_activity: float = USER_ACTIVITY_INTERVAL
    tick: float = TICK_INTERVAL


@dataclass
class ActivityRecord:
    """Activity timestamps for one host (clock seconds)."""

    last_user_activity: float
    last_powered_on: float
    last_status_update: float


def due_tier(record: ActivityRecord, now: float, intervals: PollingIntervals) -> PollingTier | None:
    """Return the tier that makes the host due at *now*, or None if it is not due."""
    if record.last_status_update <= now - intervals.powered_off:
        return PollingTier.FLOOR
    if (
        record.last_status_update <= now - intervals.powered_on
        and record.last_powered_on >= now - intervals.powered_off
    ):
        return PollingTier.POWERED_ON
    if (
        record.last_status_update <= now - intervals.user_activity
        and record.last_user_activity >= now - intervals.powered_on
    ):
        return PollingTier.USER_ACTIVITY
    return None


class ActivityTracker:
    """Per-host activity timestamps.

    ``last_status_update`` belongs to the scheduler; the other two are set by
    whoever observes the event. Timestamps never move backwards.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._records: dict[str, ActivityRecord] = {}

    def register(self, host: str, now: float | None = None) -> bool:
        """Start tracking *host*; returns False if it was already tracked.

        A new host counts as just updated, powered on and active, so it is
        polled quickly while its accessories settle.
        """
        if host in self._records:
            return False
        now = self._clock() if now is None else now
        self._records[host] = ActivityRecord(now, now, now)
        _LOGGER.debug("Activity tracking started for %s", host)
        return True

    def record(self, host: str) -> ActivityRecord:
        """Return a copy of the record for *host* (KeyError if unknown)."""
        return replace(self._records[host])

    @property
    def hosts(self) -> list[str]:
        return list(self._records)

    def ping(self, host: str, powered_on: bool | None = None, user_activity: bool | None = None) -> None:
        """Report observed activity for *host*.

        ``powered_on`` and ``user_activity`` are independent; a falsy or
        omitted value leaves the matching timestamp alone.
        """
        record = self._records.get(host)
        if record is None:
            _LOGGER.debug("Ignoring ping for untracked host %s", host)
            return
        now = self._clock()
        if powered_on:
            record.last_powered_on = max(record.last_powered_on, now)
        if user_activity:
            record.last_user_activity = max(record.last_user_activity, now)

    def mark_updated(self, host: str, now: float) -> None:
        record = self._records[host]
        record.last_status_update = max(record.last_status_update, now)


@dataclass(frozen=True)
class Subscription:
    """A refresh callback with the fixed arguments it is called with."""

    host: str
    callback: Callable[..., Any]
    args: tuple[Any, ...] = ()

    async def async_invoke(self) -> None:
        result = self.callback(*self.args)
        if inspect.isawaitable(result):
            await result


class CallbackRegistry:
    """Ordered refresh subscriptions per host."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[Subscription]] = {}

    def add(self, host: str, callback: Callable[..., Any], *args: Any) -> Subscription:
        subscription = Subscription(host, callback, args)
        self._subscriptions.setdefault(host, []).append(subscription)
        return subscription

    def subscriptions(self, host: str) -> tuple[Subscription, ...]:
        return tuple(self._subscriptions.get(host, ()))

    @property
    def hosts(self) -> list[str]:
        return list(self._subscriptions)


class TieredPollScheduler:
    """Single periodic driver refreshing every registered host on its tier.

    The driver is a Home Assistant time interval firing every ``tick``
    seconds. Each due host gets one background task running its subscribers.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        tracker: ActivityTracker,
        registry: CallbackRegistry,
        intervals: PollingIntervals | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.hass = hass
        self._tracker = tracker
        self._registry = registry
        self.intervals = intervals or PollingIntervals()
        self._clock = clock
        self._unsub_tick: CALLBACK_TYPE | None = None
        self._host_tasks: dict[str, asyncio.Task] = {}

    @property
    def running(self) -> bool:
        return self._unsub_tick is not None

    def subscribe(self, host: str, callback: Callable[..., Any], *args: Any) -> Subscription:
        """Register a refresh subscriber; the first one also registers the host."""
        self._tracker.register(host, self._clock())
        return self._registry.add(host, callback, *args)

    def due_hosts(self, now: float) -> list[tuple[str, PollingTier]]:
        due = []
        for host in self._registry.hosts:
            tier = due_tier(self._tracker.record(host), now, self.intervals)
            if tier is not None:
                due.append((host, tier))
        return due

    async def async_tick(self, now: float | None = None) -> list[asyncio.Task]:
        """Run one scheduling pass and return the refresh tasks it started.

        A due host is stamped as updated *before* its subscribers run so a
        slow refresh does not make it due again on the next tick. A host whose
        previous refresh is still in flight is skipped.
        """
        now = self._clock() if now is None else now
        started: list[asyncio.Task] = []

        for host, tier in self.due_hosts(now):
            in_flight = self._host_tasks.get(host)
            if in_flight is not None and not in_flight.done():
                _LOGGER.debug("Refresh for %s still running, skipping this tick", host)
                continue

            self._tracker.mark_updated(host, now)
            _LOGGER.debug("Refreshing %s (tier=%s)", host, tier.name)
            task = self.hass.async_create_background_task(
                self._async_refresh_host(host), f"{DOMAIN} refresh {host}"
            )
            self._host_tasks[host] = task
            started.append(task)

        return started

    async def _async_refresh_host(self, host: str) -> None:
        for subscription in self._registry.subscriptions(host):
            try:
                await subscription.async_invoke()
            except asyncio.CancelledError:
                raise
            except Exception:  # noqa: BLE001
                _LOGGER.exception("Refresh subscriber %s failed for %s", subscription.callback, host)

    async def _async_on_interval(self, _now: datetime) -> None:
        await self.async_tick()

    async def async_start(self) -> None:
        """Start the periodic driver (no-op if already running)."""
        if self.running:
            return
        self._unsub_tick = async_track_time_interval(
            self.hass,
            self._async_on_interval,
            timedelta(seconds=self.intervals.tick),
            name=f"{DOMAIN} polling",
        )
        _LOGGER.info(
            "Polling started for %d host(s) (tiers %ss/%ss/%ss)",
            len(self._registry.hosts),
            self.intervals.powered_off,
            self.intervals.powered_on,
            self.intervals.user_activity,
        )

    async def async_stop(self) -> None:
        """Stop the driver and cancel refreshes still in flight."""
        if self._unsub_tick is not None:
            self._unsub_tick()
            self._unsub_tick = None
        tasks = [task for task in self._host_tasks.values() if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._host_tasks.clear()
        _LOGGER.info("Polling stopped")
