"""MusicCast HTTP API core client.

Contains only the networking/transport layer and the exception hierarchy.
Endpoint helpers (device, playback, presets, distribution) live in the
``api_*`` mix-ins and are composed in :mod:`.api`.

Unlike a per-device client, one instance serves every host: each call takes
the target host as its first argument so a single shared session (and group
id) covers the whole multiroom topology.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any

import aiohttp
import async_timeout
from aiohttp import ClientSession

from .const import API_BASE_PATH, DEFAULT_TIMEOUT, ZONE_MAIN

_LOGGER = logging.getLogger(__name__)


HEADERS: dict[str, str] = {"Accept": "application/json"}

# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class MusicCastError(Exception):
    """Base exception for all MusicCast API errors."""


class MusicCastRequestError(MusicCastError):
    """Raised when there is an error communicating with a MusicCast device."""

    def __init__(
        self,
        message: str,
        host: str | None = None,
        endpoint: str | None = None,
        last_error: Exception | None = None,
    ) -> None:
        """Initialize request error with context.

        Args:
            message: The error message
            host: Device the request was sent to
            endpoint: API endpoint that failed
            last_error: The underlying exception that caused this error
        """
        self.host = host
        self.endpoint = endpoint
        self.last_error = last_error
        super().__init__(message)

    def __str__(self) -> str:
        context_parts = []
        if self.host:
            context_parts.append(f"host={self.host}")
        if self.endpoint:
            context_parts.append(f"endpoint={self.endpoint}")
        if context_parts:
            return f"{super().__str__()} ({', '.join(context_parts)})"
        return super().__str__()


class MusicCastTimeoutError(MusicCastRequestError):
    """Raised when a request to a MusicCast device times out."""


class MusicCastConnectionError(MusicCastRequestError):
    """Raised on network-level connectivity problems (unreachable, refused, …)."""


class MusicCastInvalidDataError(MusicCastError):
    """The device responded with malformed or non-JSON data."""


class MusicCastResponseError(MusicCastError):
    """Raised when the device answers with a non-zero ``response_code``."""

    def __init__(self, message: str, response_code: int) -> None:
        self.response_code = response_code
        super().__init__(message)


# -----------------------------------------------------------------------------
# Transport
# -----------------------------------------------------------------------------


def host_url(host: str) -> str:
    """Return *host* normalised for URL contexts (IPv6 needs brackets)."""
    if ":" in host and not host.startswith("["):
        # "a.b.c.d:port" keeps its port, bare IPv6 gets brackets
        if host.count(":") > 1:
            return f"[{host}]"
    return host


class MusicCastClient:
    """MusicCast HTTP transport."""

    def __init__(
        self,
        session: ClientSession | None = None,
        group_id: str = "",
        preset_info_regex: re.Pattern[str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        zone: str = ZONE_MAIN,
    ) -> None:
        """Instantiate the client.

        Args:
            session: Optional shared *aiohttp* session.
            group_id: Distribution group id used by the multiroom helpers.
            preset_info_regex: Pattern stripped from preset names for display.
            timeout: Network timeout (seconds).
            zone: Zone addressed by zone-level endpoints.
        """
        self._session = session
        self._owns_session = False
        self.group_id = group_id
        self.preset_info_regex = preset_info_regex
        self.timeout = timeout
        self.zone = zone

    def _url(self, host: str, endpoint: str) -> str:
        return f"http://{host_url(host)}{API_BASE_PATH}{endpoint}"

    async def _request(self, host: str, endpoint: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Perform a GET (or a JSON POST when *payload* is given) and return the decoded body.

        Raises:
            MusicCastTimeoutError: the device did not answer within ``timeout``
            MusicCastConnectionError: the device could not be reached
            MusicCastRequestError: any other transport failure
            MusicCastInvalidDataError: the body was not a JSON object
            MusicCastResponseError: the device reported a non-zero response code
        """
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            self._owns_session = True

        url = self._url(host, endpoint)
        method = "POST" if payload is not None else "GET"
        kwargs: dict[str, Any] = {"headers": HEADERS}
        if payload is not None:
            kwargs["json"] = payload

        _LOGGER.debug("%s %s %s", method, url, payload if payload is not None else "")
        try:
            async with async_timeout.timeout(self.timeout):
                resp = await self._session.request(method, url, **kwargs)
                async with resp:
                    resp.raise_for_status()
                    text = await resp.text()
        except asyncio.TimeoutError as err:
            raise MusicCastTimeoutError(
                f"Timeout after {self.timeout}s", host=host, endpoint=endpoint, last_error=err
            ) from err
        except (aiohttp.ClientConnectorError, aiohttp.ServerDisconnectedError) as err:
            raise MusicCastConnectionError(
                f"Cannot connect: {err}", host=host, endpoint=endpoint, last_error=err
            ) from err
        except aiohttp.ClientError as err:
            raise MusicCastRequestError(
                f"Request failed: {err}", host=host, endpoint=endpoint, last_error=err
            ) from err

        try:
            result = json.loads(text)
        except json.JSONDecodeError as err:
            _LOGGER.error("Failed to parse JSON response from %s%s: %s", host, endpoint, text)
            raise MusicCastInvalidDataError(f"Invalid JSON response from {host}{endpoint}: {err}") from err

        if not isinstance(result, dict):
            raise MusicCastInvalidDataError(f"Unexpected payload from {host}{endpoint}: {result!r}")

        response_code = result.get("response_code", 0)
        if response_code != 0:
            raise MusicCastResponseError(
                f"{host}{endpoint} returned response_code {response_code}", response_code=response_code
            )

        _LOGGER.debug("Response from %s%s: %s", host, endpoint, result)
        return result

    async def close(self) -> None:
        """Close the underlying session when it was created by this client."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
