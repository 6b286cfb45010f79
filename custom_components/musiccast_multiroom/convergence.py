"""Best-effort waiting for device state to catch up with a command.

The waiter only *reads* the shared store; fresh values arrive through the
scheduler, which polls at its fastest tier right after a command pings user
activity. A timeout is not an error: the caller carries on and the next
scheduled refresh reconciles whatever is still out of date.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from .const import CONVERGENCE_INTERVAL, CONVERGENCE_TIMEOUT
from .models import Status
from .state import StateCategory

if TYPE_CHECKING:
    from .coordinator import MusicCastCoordinator

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "async_wait_for",
    "async_wait_for_identifier",
    "async_wait_for_power",
]


async def async_wait_for(
    read: Callable[[], Any],
    target: Any,
    interval: float = CONVERGENCE_INTERVAL,
    timeout: float = CONVERGENCE_TIMEOUT,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    description: str = "state",
) -> bool:
    """Poll ``read()`` every *interval* seconds until it equals *target*.

    Returns True as soon as the values match, or False once *timeout*
    seconds of waiting have been spent.
    """
    elapsed = 0.0
    while True:
        if read() == target:
            _LOGGER.debug("%s converged to %s after %.1fs", description, target, elapsed)
            return True
        if elapsed >= timeout:
            _LOGGER.debug("%s did not reach %s within %.1fs", description, target, timeout)
            return False
        await sleep(interval)
        elapsed += interval


def _power_reader(coordinator: MusicCastCoordinator, host: str) -> Callable[[], bool | None]:
    def read() -> bool | None:
        if not coordinator.has(host, StateCategory.STATUS):
            return None
        status: Status = coordinator.get(host, StateCategory.STATUS)
        return status.is_on

    return read


async def async_wait_for_power(
    coordinator: MusicCastCoordinator,
    host: str,
    on: bool,
    interval: float | None = None,
    timeout: float | None = None,
) -> bool:
    """Wait until the cached status of *host* reports power *on* (or standby)."""
    return await async_wait_for(
        _power_reader(coordinator, host),
        on,
        interval=coordinator.convergence_interval if interval is None else interval,
        timeout=coordinator.convergence_timeout if timeout is None else timeout,
        description=f"{host} power",
    )


async def async_wait_for_identifier(
    coordinator: MusicCastCoordinator,
    read_identifier: Callable[[], int | None],
    identifier: int,
    host: str = "",
) -> bool:
    """Wait until the resolved input/preset identifier equals *identifier*."""
    return await async_wait_for(
        read_identifier,
        identifier,
        interval=coordinator.convergence_interval,
        timeout=coordinator.convergence_timeout,
        description=f"{host} input/preset",
    )
