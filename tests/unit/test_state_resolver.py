"""Unit tests for volume steps and input/preset resolution."""

import pytest

from custom_components.musiccast_multiroom.models import PlayInfo, PresetEntry, Status
from custom_components.musiccast_multiroom.state_resolver import (
    InputConfig,
    VolumeStep,
    assign_input_identifiers,
    build_volume_steps,
    clamp_volume,
    effective_volume_bounds,
    resolve_input_preset,
    resolve_volume_step,
)

PRESETS = [
    PresetEntry(input="net_radio", text="Radio Paradise", preset_id=1, identifier=200, display_text="Radio Paradise"),
    PresetEntry(input="server", text="Miles Davis", preset_id=4, identifier=203, display_text="Miles Davis"),
]
INPUTS = assign_input_identifiers([InputConfig("tv", "TV"), InputConfig("net_radio", "Radio")])


class TestVolumeSteps:
    """Test volume step construction."""

    def test_default_bounds(self):
        steps = build_volume_steps(200, 25, 65, 6)
        assert [step.volume for step in steps] == [50, 66, 82, 98, 114, 130]
        assert [step.id for step in steps] == [0, 1, 2, 3, 4, 5]

    def test_defaults_match_explicit_values(self):
        assert build_volume_steps(200) == build_volume_steps(200, 25, 65, 6)

    def test_labels(self):
        steps = build_volume_steps(100, count=3)
        assert [step.label for step in steps] == ["■□□", "■■□", "■■■"]

    def test_half_values_round_up(self):
        # 10% and 15% of 25 are 2.5 and 3.75
        steps = build_volume_steps(25, 10, 15, 2)
        assert [step.volume for step in steps] == [3, 4]

    def test_count_below_two_is_rejected(self):
        with pytest.raises(ValueError):
            build_volume_steps(100, count=1)

    def test_low_not_below_high_falls_back_to_default_low(self):
        assert effective_volume_bounds(70, 60) == (25, 60)
        assert effective_volume_bounds(60, 60) == (25, 60)
        assert effective_volume_bounds(10, 60) == (10, 60)
        assert effective_volume_bounds(None, None) == (25, 65)


class TestResolveVolumeStep:
    """Test snapping raw volume to the nearest step."""

    def test_exact_values_resolve_to_their_step(self):
        steps = build_volume_steps(200)
        for step in steps:
            assert resolve_volume_step(steps, step.volume) == step.id

    def test_nearest_step_wins(self):
        steps = build_volume_steps(200)
        assert resolve_volume_step(steps, 0) == 0
        assert resolve_volume_step(steps, 70) == 1
        assert resolve_volume_step(steps, 200) == 5

    def test_exact_tie_resolves_to_lower_step(self):
        steps = [VolumeStep(0, "■□", 10), VolumeStep(1, "■■", 20)]
        assert resolve_volume_step(steps, 15) == 0

    def test_selecting_resolved_step_is_stable(self):
        """Reading back the volume a step wrote yields that same step."""
        steps = build_volume_steps(161, 20, 80, 8)
        for step in steps:
            assert resolve_volume_step(steps, step.volume) == step.id

    def test_empty_steps_rejected(self):
        with pytest.raises(ValueError):
            resolve_volume_step([], 10)


def test_clamp_volume():
    assert clamp_volume(5, 10, 60) == 10
    assert clamp_volume(75, 10, 60) == 60
    assert clamp_volume(30, 10, 60) == 30


class TestResolveInputPreset:
    """Test input/preset identifier resolution."""

    def test_input_identifiers_start_at_hundred(self):
        assert [item.identifier for item in INPUTS] == [100, 101]

    def test_playing_preset_matched_by_track(self):
        play_info = PlayInfo(input="net_radio", playback="play", track="Radio Paradise")
        assert resolve_input_preset(play_info, PRESETS, Status(input="net_radio"), INPUTS) == 200

    def test_playing_preset_matched_by_artist(self):
        play_info = PlayInfo(input="server", playback="play", artist="Miles Davis", track="So What")
        assert resolve_input_preset(play_info, PRESETS, Status(input="server"), INPUTS) == 203

    def test_preset_wins_over_static_input(self):
        """net_radio is also a configured input, the playing preset still wins."""
        play_info = PlayInfo(input="net_radio", playback="play", track="Radio Paradise")
        assert resolve_input_preset(play_info, PRESETS, Status(input="net_radio"), INPUTS) == 200

    def test_paused_preset_falls_back_to_input(self):
        play_info = PlayInfo(input="net_radio", playback="pause", track="Radio Paradise")
        assert resolve_input_preset(play_info, PRESETS, Status(input="net_radio"), INPUTS) == 101

    def test_preset_input_must_be_radio_or_server(self):
        play_info = PlayInfo(input="spotify", playback="play", track="Radio Paradise")
        assert resolve_input_preset(play_info, PRESETS, Status(input="tv"), INPUTS) == 100

    def test_unresolved_returns_none(self):
        play_info = PlayInfo(input="spotify", playback="play", track="Something")
        assert resolve_input_preset(play_info, PRESETS, Status(input="spotify"), INPUTS) is None

    def test_missing_state_returns_none(self):
        assert resolve_input_preset(None, PRESETS, None, INPUTS) is None
