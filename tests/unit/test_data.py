"""Unit tests for MusicCastDevice - setup, refresh and commands."""

import logging
from dataclasses import replace
from unittest.mock import call

import pytest

from custom_components.musiccast_multiroom.api import MusicCastConnectionError
from custom_components.musiccast_multiroom.data import MusicCastDevice
from custom_components.musiccast_multiroom.models import Features, PlayInfo, Status
from custom_components.musiccast_multiroom.state import StateCategory
from custom_components.musiccast_multiroom.state_resolver import VolumeProfile

from ..const import CLIENT_HOST, MOCK_STATUS, SECOND_CLIENT_HOST, SERVER_HOST


@pytest.fixture
async def server(server_config, coordinator):
    device = MusicCastDevice(server_config, coordinator)
    await device.async_setup()
    coordinator.subscribe(device.host, device.async_refresh)
    return device


@pytest.fixture
async def client_device(client_config, coordinator):
    device = MusicCastDevice(client_config, coordinator)
    await device.async_setup()
    coordinator.subscribe(device.host, device.async_refresh)
    return device


class TestSetup:
    """Test the initial fetch."""

    @pytest.mark.asyncio
    async def test_all_categories_cached(self, server, coordinator):
        for category in StateCategory:
            assert coordinator.has(SERVER_HOST, category)
        assert server.available is True

    @pytest.mark.asyncio
    async def test_volume_steps_built_from_max_volume(self, server):
        # max_volume 161 between 25% and 65%
        assert [step.volume for step in server.volume_steps] == [40, 53, 66, 79, 92, 105]

    @pytest.mark.asyncio
    async def test_identity(self, server):
        assert server.name == "RX-V685"
        assert server.unique_id == "Y123456AB"
        assert server.is_server is True

    @pytest.mark.asyncio
    async def test_unreachable_device_raises(self, server_config, coordinator, mock_client):
        mock_client.get_device_info.side_effect = MusicCastConnectionError("unreachable")
        device = MusicCastDevice(server_config, coordinator)
        with pytest.raises(MusicCastConnectionError):
            await device.async_setup()
        assert device.available is False


class TestResolvedState:
    @pytest.mark.asyncio
    async def test_values(self, server):
        assert server.is_on is True
        assert server.volume_step_id == 3  # 82 is closest to 79
        assert server.is_muted is False
        assert server.input_preset_id == 200  # Radio Paradise is playing
        assert server.lip_sync is False
        assert server.surround_decoder is False
        assert server.supports_lip_sync is True
        assert server.supports_surround_decoder is True

    @pytest.mark.asyncio
    async def test_feature_support_needs_both_values(self, server, coordinator):
        coordinator.set(
            SERVER_HOST,
            StateCategory.FEATURES,
            Features.model_validate({"zone": [{"id": "main", "link_audio_delay_list": ["lip_sync"]}]}),
        )
        assert server.supports_lip_sync is False
        assert server.supports_surround_decoder is False

    @pytest.mark.asyncio
    async def test_continuous_volume_is_clamped(self, server_config, coordinator):
        config = replace(server_config, volume_profile=VolumeProfile.CONTINUOUS, volume_max=60)
        device = MusicCastDevice(config, coordinator)
        await device.async_setup()
        assert device.uses_volume_steps is False
        assert device.volume == 60

    @pytest.mark.asyncio
    async def test_continuous_volume_range_defaults_to_device_maximum(self, server_config, coordinator, mock_client):
        mock_client.get_status.return_value = Status.model_validate({**MOCK_STATUS, "volume": 150})
        config = replace(server_config, volume_profile=VolumeProfile.CONTINUOUS)
        device = MusicCastDevice(config, coordinator)
        assert device.volume_max == 100

        await device.async_setup()
        assert device.volume_max == 161
        assert device.volume == 150

        await device.async_set_volume(200)
        mock_client.set_volume.assert_awaited_once_with(SERVER_HOST, 161)

    @pytest.mark.asyncio
    async def test_unresolved_source_is_none(self, server, coordinator):
        coordinator.set(SERVER_HOST, StateCategory.PLAY_INFO, PlayInfo(input="spotify", playback="play"))
        coordinator.set(SERVER_HOST, StateCategory.STATUS, Status(power="on", input="spotify"))
        assert server.input_preset_id is None


class TestRefresh:
    """Test the scheduled refresh subscriber."""

    @pytest.mark.asyncio
    async def test_unchanged_status_is_not_user_activity(self, server, coordinator, clock):
        clock.advance(100)
        await server.async_refresh()
        record = coordinator.activity(SERVER_HOST)
        assert record.last_powered_on == clock.now
        assert record.last_user_activity == clock.now - 100

    @pytest.mark.asyncio
    async def test_changed_status_is_user_activity(self, server, coordinator, mock_client, clock):
        mock_client.get_status.return_value = Status.model_validate({**MOCK_STATUS, "volume": 90})
        clock.advance(100)
        await server.async_refresh()
        assert coordinator.activity(SERVER_HOST).last_user_activity == clock.now
        assert server.volume_step_id == 4

    @pytest.mark.asyncio
    async def test_standby_does_not_ping_power_or_fetch_play_info(self, server, coordinator, mock_client, clock):
        mock_client.get_status.return_value = Status.model_validate({**MOCK_STATUS, "power": "standby"})
        mock_client.get_play_info.reset_mock()
        clock.advance(100)
        await server.async_refresh()
        assert coordinator.activity(SERVER_HOST).last_powered_on == clock.now - 100
        mock_client.get_play_info.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_never_fetches_play_info(self, client_device, mock_client):
        mock_client.get_play_info.reset_mock()
        await client_device.async_refresh()
        mock_client.get_play_info.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_listeners_notified(self, server):
        calls = []
        remove = server.add_listener(lambda: calls.append("update"))
        await server.async_refresh()
        remove()
        await server.async_refresh()
        assert calls == ["update"]

    @pytest.mark.asyncio
    async def test_failure_keeps_last_status_and_marks_unavailable(self, server, coordinator, mock_client, caplog):
        previous = coordinator.get(SERVER_HOST, StateCategory.STATUS)
        mock_client.get_status.side_effect = MusicCastConnectionError("unreachable")

        with caplog.at_level(logging.WARNING):
            await server.async_refresh()
            await server.async_refresh()

        assert coordinator.get(SERVER_HOST, StateCategory.STATUS) is previous
        assert server.available is False
        assert caplog.text.count("Status refresh failed") == 1

        mock_client.get_status.side_effect = None
        await server.async_refresh()
        assert server.available is True


class TestCommands:
    """Test command handlers."""

    @pytest.mark.asyncio
    async def test_set_volume_step(self, server, mock_client, coordinator, clock):
        clock.advance(100)
        await server.async_set_volume_step(2)
        mock_client.set_volume.assert_awaited_once_with(SERVER_HOST, 66)
        assert coordinator.activity(SERVER_HOST).last_user_activity == clock.now

    @pytest.mark.asyncio
    async def test_unknown_volume_step_sends_zero(self, server, mock_client):
        await server.async_set_volume_step(42)
        mock_client.set_volume.assert_awaited_once_with(SERVER_HOST, 0)

    @pytest.mark.asyncio
    async def test_set_volume_is_clamped(self, server_config, coordinator, mock_client):
        config = replace(server_config, volume_profile=VolumeProfile.CONTINUOUS, volume_min=10, volume_max=60)
        device = MusicCastDevice(config, coordinator)
        await device.async_set_volume(75.4)
        mock_client.set_volume.assert_awaited_once_with(SERVER_HOST, 60)

    @pytest.mark.asyncio
    async def test_set_mute(self, server, mock_client):
        await server.async_set_mute(True)
        mock_client.set_mute.assert_awaited_once_with(SERVER_HOST, True)

    @pytest.mark.asyncio
    async def test_select_input(self, server, mock_client):
        await server.async_select_input_preset(101)
        mock_client.set_input.assert_awaited_once_with(SERVER_HOST, "hdmi1")
        mock_client.recall_preset.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_select_other_preset_pauses_first(self, server, mock_client):
        await server.async_select_input_preset(202)
        assert mock_client.mock_calls[-2:] == [
            call.set_playback(SERVER_HOST, "pause"),
            call.recall_preset(SERVER_HOST, 3),
        ]

    @pytest.mark.asyncio
    async def test_select_current_preset_does_not_pause(self, server, mock_client):
        await server.async_select_input_preset(200)
        mock_client.set_playback.assert_not_awaited()
        mock_client.recall_preset.assert_awaited_once_with(SERVER_HOST, 1)

    @pytest.mark.asyncio
    async def test_select_unknown_identifier_does_nothing(self, server, mock_client):
        await server.async_select_input_preset(299)
        mock_client.set_input.assert_not_awaited()
        mock_client.recall_preset.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lip_sync_and_surround_decoder(self, server, mock_client):
        await server.async_set_lip_sync(True)
        await server.async_set_lip_sync(False)
        await server.async_set_surround_decoder(True)
        await server.async_set_surround_decoder(False)
        assert mock_client.set_link_audio_delay.await_args_list == [
            call(SERVER_HOST, "lip_sync"),
            call(SERVER_HOST, "audio_sync"),
        ]
        assert mock_client.set_sound_program.await_args_list == [
            call(SERVER_HOST, "surr_decoder"),
            call(SERVER_HOST, "straight"),
        ]


class TestPower:
    """Test power with the multiroom side effects."""

    @pytest.mark.asyncio
    async def test_client_power_on_links_to_server(self, client_device, mock_client):
        await client_device.async_set_power(True)
        assert mock_client.set_power.await_args_list == [call(CLIENT_HOST, True), call(SERVER_HOST, True)]
        mock_client.set_client_info.assert_awaited_once_with(CLIENT_HOST, SERVER_HOST)
        mock_client.start_distribution.assert_awaited_once_with(SERVER_HOST)

    @pytest.mark.asyncio
    async def test_client_power_off_does_not_touch_server(self, client_device, mock_client):
        await client_device.async_set_power(False)
        mock_client.set_power.assert_awaited_once_with(CLIENT_HOST, False)
        mock_client.set_client_info.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_server_power_off_cascades_to_clients(self, server, mock_client):
        await server.async_set_power(False)
        assert mock_client.set_power.await_args_list == [
            call(SERVER_HOST, False),
            call(CLIENT_HOST, False),
            call(SECOND_CLIENT_HOST, False),
        ]

    @pytest.mark.asyncio
    async def test_server_power_on_does_not_link(self, server, mock_client, coordinator, clock):
        clock.advance(100)
        await server.async_set_power(True)
        mock_client.set_power.assert_awaited_once_with(SERVER_HOST, True)
        mock_client.set_client_info.assert_not_awaited()
        assert coordinator.activity(SERVER_HOST).last_powered_on == clock.now
