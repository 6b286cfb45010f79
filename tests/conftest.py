"""Global fixtures for MusicCast Multiroom integration tests."""

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add repository root to path for custom_components imports
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from custom_components.musiccast_multiroom.config import DeviceConfig  # noqa: E402
from custom_components.musiccast_multiroom.coordinator import MusicCastCoordinator  # noqa: E402
from custom_components.musiccast_multiroom.models import (  # noqa: E402
    DeviceInfo,
    Features,
    PlayInfo,
    PresetInfo,
    Status,
)
from custom_components.musiccast_multiroom.state_resolver import InputConfig  # noqa: E402

from .const import (  # noqa: E402
    CLIENT_HOST,
    MOCK_DEVICE_INFO,
    MOCK_FEATURES,
    MOCK_PLAY_INFO,
    MOCK_PRESET_INFO,
    MOCK_STATUS,
    SECOND_CLIENT_HOST,
    SERVER_HOST,
)

pytest_plugins = "pytest_homeassistant_custom_component"


@pytest.fixture
def event_loop() -> asyncio.AbstractEventLoop:
    """Provide legacy `event_loop` fixture for HA pytest plugin compatibility."""
    loop = asyncio.new_event_loop()
    try:
        yield loop
    finally:
        loop.close()


# ============================================================================
# Autouse Fixtures (applied to all tests automatically)
# ============================================================================


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    """Enable custom integrations for all tests."""
    yield


@pytest.fixture(autouse=True)
def allow_unwatched_threads() -> bool:  # noqa: D401
    """Tell pytest-homeassistant that background threads are expected."""
    return True


# ============================================================================
# Core Mock Fixtures (basic mocks for unit tests)
# ============================================================================


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(name="mock_client")
def mock_client_fixture():
    """Mock MusicCast API client answering with the canned payloads."""
    client = MagicMock()
    client.group_id = "group"
    client.get_device_info = AsyncMock(return_value=DeviceInfo.model_validate(MOCK_DEVICE_INFO))
    client.get_features = AsyncMock(return_value=Features.model_validate(MOCK_FEATURES))
    client.get_status = AsyncMock(return_value=Status.model_validate(MOCK_STATUS))
    client.get_play_info = AsyncMock(return_value=PlayInfo.model_validate(MOCK_PLAY_INFO))
    client.get_preset_info = AsyncMock(return_value=PresetInfo.model_validate(MOCK_PRESET_INFO))
    client.set_power = AsyncMock()
    client.set_volume = AsyncMock()
    client.set_mute = AsyncMock()
    client.set_input = AsyncMock()
    client.set_sound_program = AsyncMock()
    client.set_link_audio_delay = AsyncMock()
    client.set_playback = AsyncMock()
    client.recall_preset = AsyncMock()
    client.set_client_info = AsyncMock()
    client.set_server_info = AsyncMock()
    client.start_distribution = AsyncMock()
    return client


@pytest.fixture(name="coordinator")
def coordinator_fixture(hass, mock_client, clock):
    """Real coordinator around the mock client with a zero-length convergence timeout."""
    return MusicCastCoordinator(hass, mock_client, convergence_interval=1, convergence_timeout=0, clock=clock)


@pytest.fixture
def server_config() -> DeviceConfig:
    return DeviceConfig(
        host=SERVER_HOST,
        clients=(CLIENT_HOST, SECOND_CLIENT_HOST),
        inputs=(InputConfig("tv", "TV", 100), InputConfig("hdmi1", "Apple TV", 101)),
    )


@pytest.fixture
def client_config() -> DeviceConfig:
    return DeviceConfig(host=CLIENT_HOST, server_host=SERVER_HOST)
