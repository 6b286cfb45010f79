"""Multi-room (distribution) helpers for the MusicCast HTTP client.

All networking is delegated to the base client. Ordering of these calls is
the caller's business. See :mod:`.group_helpers` for the link sequence.
"""

from __future__ import annotations

from .const import (
    API_ENDPOINT_CLIENT_INFO,
    API_ENDPOINT_SERVER_INFO,
    API_ENDPOINT_START_DISTRIBUTION,
)


class GroupAPI:
    """Helpers for building a server → client distribution group."""

    # pylint: disable=no-member

    async def set_client_info(self, client_host: str, server_host: str) -> None:  # type: ignore[override]
        """Tell *client_host* which server and group it belongs to."""
        payload = {
            "group_id": self.group_id,  # type: ignore[attr-defined]
            "zone": [self.zone],  # type: ignore[attr-defined]
            "server_ip_address": server_host,
        }
        await self._request(client_host, API_ENDPOINT_CLIENT_INFO, payload)  # type: ignore[attr-defined]

    async def set_server_info(self, client_host: str, server_host: str, type_: str) -> None:  # type: ignore[override]
        """Add (``type_="add"``) or remove (``"remove"``) *client_host* on the server."""
        payload = {
            "group_id": self.group_id,  # type: ignore[attr-defined]
            "zone": self.zone,  # type: ignore[attr-defined]
            "type": type_,
            "client_list": [client_host],
        }
        await self._request(server_host, API_ENDPOINT_SERVER_INFO, payload)  # type: ignore[attr-defined]

    async def start_distribution(self, server_host: str) -> None:  # type: ignore[override]
        await self._request(server_host, API_ENDPOINT_START_DISTRIBUTION)  # type: ignore[attr-defined]
