"""Shared utility functions for MusicCast Multiroom integration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from homeassistant.exceptions import HomeAssistantError

from .api import MusicCastConnectionError, MusicCastError, MusicCastTimeoutError

_LOGGER = logging.getLogger(__name__)


def is_connection_error(err: Exception) -> bool:
    """Check if error is a connection or timeout error (including in exception chain)."""
    if isinstance(err, (MusicCastConnectionError, MusicCastTimeoutError, TimeoutError)):
        return True
    cause = getattr(err, "__cause__", None)
    return isinstance(cause, (MusicCastConnectionError, MusicCastTimeoutError, TimeoutError))


@asynccontextmanager
async def musiccast_command(entity_name: str, operation: str):
    """Context manager for consistent MusicCast command error handling.

    Args:
        entity_name: Name of the entity performing the operation
        operation: Description of the operation (e.g., "set volume", "select preset")

    Raises:
        HomeAssistantError: Wrapped MusicCast error with appropriate message
    """
    try:
        yield
    except MusicCastError as err:
        if is_connection_error(err):
            _LOGGER.warning("%s: %s failed (connection issue): %s", entity_name, operation, err)
            raise HomeAssistantError(f"{operation} on {entity_name}: device unreachable") from err
        _LOGGER.error("%s: %s failed: %s", entity_name, operation, err, exc_info=True)
        raise HomeAssistantError(f"Failed to {operation}: {err}") from err
