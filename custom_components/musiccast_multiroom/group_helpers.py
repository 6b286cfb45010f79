"""Command sequences spanning a server device and its clients.

These helpers only need the coordinator and the HTTP client, not entities.

Every step is awaited before the next one starts: each step relies on the
device-side state the previous one produced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .api import MusicCastClient, MusicCastError
from .const import SERVER_INFO_ADD, SERVER_INFO_REMOVE
from .convergence import async_wait_for_power

if TYPE_CHECKING:
    from .coordinator import MusicCastCoordinator

_LOGGER = logging.getLogger(__name__)
__all__ = [
    "async_link_client",
    "async_power_off_clients",
]


async def async_link_client(
    coordinator: MusicCastCoordinator,
    client: MusicCastClient,
    client_host: str,
    server_host: str,
) -> None:
    """Join *client_host* to the distribution group of *server_host*.

    Powers the server on and waits for both devices to report power before
    touching group membership. The stale-membership removal is allowed to
    fail; everything else propagates.
    """
    _LOGGER.debug("Linking %s with server %s", client_host, server_host)

    await client.set_power(server_host, True)
    coordinator.ping(server_host, powered_on=True, user_activity=True)
    await async_wait_for_power(coordinator, server_host, True)
    await async_wait_for_power(coordinator, client_host, True)

    await client.set_client_info(client_host, server_host)
    try:
        await client.set_server_info(client_host, server_host, SERVER_INFO_REMOVE)
    except MusicCastError as err:
        _LOGGER.debug("Removing stale membership of %s on %s failed: %s", client_host, server_host, err)
    await client.set_server_info(client_host, server_host, SERVER_INFO_ADD)
    await client.start_distribution(server_host)

    _LOGGER.info("Linked %s with server %s", client_host, server_host)


async def async_power_off_clients(
    coordinator: MusicCastCoordinator,
    client: MusicCastClient,
    client_hosts: Iterable[str],
) -> int:
    """Put every client in standby, one after the other.

    A failing client is logged and the rest still get their command. Every
    client is pinged, acknowledged or not. Returns the number of clients that
    acknowledged.
    """
    hosts = list(client_hosts)
    succeeded = 0
    for host in hosts:
        try:
            await client.set_power(host, False)
        except MusicCastError as err:
            _LOGGER.warning("Powering off client %s failed: %s", host, err)
        else:
            succeeded += 1
        finally:
            coordinator.ping(host, powered_on=False, user_activity=True)

    if succeeded < len(hosts):
        _LOGGER.debug("%d/%d client power-off commands failed", len(hosts) - succeeded, len(hosts))
    return succeeded
