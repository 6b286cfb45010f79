"""Collapse continuous device state into the identifiers a control surface exposes.

Pure functions over payload models and plain config.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from .const import (
    DEFAULT_VOLUME_PERCENTAGE_HIGH,
    DEFAULT_VOLUME_PERCENTAGE_LOW,
    DEFAULT_VOLUME_STEP_COUNT,
    INPUT_IDENTIFIER_BASE,
    PLAYBACK_PLAY,
    PRESET_INPUTS,
    VOLUME_CHARACTER_ACTIVE,
    VOLUME_CHARACTER_INACTIVE,
    VOLUME_PROFILE_CONTINUOUS,
    VOLUME_PROFILE_STEPS,
)
from .models import PlayInfo, PresetEntry, Status

__all__ = [
    "InputConfig",
    "VolumeProfile",
    "VolumeStep",
    "assign_input_identifiers",
    "build_volume_steps",
    "clamp_volume",
    "effective_volume_bounds",
    "resolve_input_preset",
    "resolve_volume_step",
]


class VolumeProfile(str, Enum):
    """How a device exposes its volume."""

    STEPS = VOLUME_PROFILE_STEPS  # a few labelled steps between two percentages
    CONTINUOUS = VOLUME_PROFILE_CONTINUOUS  # raw volume within [min, max] plus mute


@dataclass(frozen=True)
class VolumeStep:
    """One selectable volume level."""

    id: int
    label: str
    volume: int


@dataclass(frozen=True)
class InputConfig:
    """A statically configured input (``input`` is the raw device code)."""

    input: str
    name: str
    identifier: int = 0


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def effective_volume_bounds(low: float | None = None, high: float | None = None) -> tuple[float, float]:
    """Return the (low, high) percentages actually used for the steps.

    A configured high always wins; a configured low is only honoured when it
    is strictly below the high, otherwise the default low is used.
    """
    effective_high = DEFAULT_VOLUME_PERCENTAGE_HIGH if high is None else high
    effective_low = DEFAULT_VOLUME_PERCENTAGE_LOW
    if low is not None and low < effective_high:
        effective_low = low
    return effective_low, effective_high


def volume_step_label(index: int, count: int) -> str:
    return VOLUME_CHARACTER_ACTIVE * (index + 1) + VOLUME_CHARACTER_INACTIVE * (count - index - 1)


def build_volume_steps(
    max_volume: int,
    low: float | None = None,
    high: float | None = None,
    count: int = DEFAULT_VOLUME_STEP_COUNT,
) -> list[VolumeStep]:
    """Return *count* equally spaced steps between ``max*low%`` and ``max*high%`` inclusive."""
    if count < 2:
        raise ValueError(f"At least two volume steps are required, got {count}")

    low, high = effective_volume_bounds(low, high)
    volume_low = max_volume / 100 * low
    volume_high = max_volume / 100 * high
    increment = (volume_high - volume_low) / (count - 1)

    return [
        VolumeStep(id=i, label=volume_step_label(i, count), volume=_round_half_up(volume_low + increment * i))
        for i in range(count)
    ]


def resolve_volume_step(steps: Sequence[VolumeStep], volume: float) -> int:
    """Return the id of the step closest to *volume*.

    The scan runs left to right and only replaces the candidate on a strictly
    smaller distance, so an exact tie resolves to the lower step.
    """
    if not steps:
        raise ValueError("No volume steps to resolve against")

    closest = steps[0]
    for step in steps[1:]:
        if abs(step.volume - volume) < abs(closest.volume - volume):
            closest = step
    return closest.id


def clamp_volume(volume: float, volume_min: float, volume_max: float) -> float:
    return max(volume_min, min(volume_max, volume))


# ---------------------------------------------------------------------------
# Inputs and presets
# ---------------------------------------------------------------------------


def assign_input_identifiers(inputs: Iterable[InputConfig]) -> list[InputConfig]:
    """Number configured inputs from ``INPUT_IDENTIFIER_BASE`` in configuration order."""
    return [
        InputConfig(input=item.input, name=item.name, identifier=INPUT_IDENTIFIER_BASE + index)
        for index, item in enumerate(inputs)
    ]


def _preset_matches(play_info: PlayInfo, preset: PresetEntry) -> bool:
    return preset.text == play_info.track or preset.text == play_info.artist


def resolve_input_preset(
    play_info: PlayInfo | None,
    presets: Sequence[PresetEntry],
    status: Status | None,
    inputs: Sequence[InputConfig],
) -> int | None:
    """Return the identifier of the active preset or input, or None if unresolved.

    A preset that is playing (matched by track or artist text) wins over a
    static input, since it is the more specific selection.
    """
    if (
        play_info is not None
        and play_info.playback == PLAYBACK_PLAY
        and play_info.input in PRESET_INPUTS
    ):
        for preset in presets:
            if _preset_matches(play_info, preset):
                return preset.identifier

    if status is not None and status.input is not None:
        for item in inputs:
            if item.input == status.input:
                return item.identifier

    return None
