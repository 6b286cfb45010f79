"""Typed Pydantic models for Yamaha Extended Control payloads.

- Only fields currently used by the integration are declared.
- Unknown keys are kept (extra="allow") so change detection sees the full payload.
- Every response carries ``response_code``; 0 means success.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "DeviceInfo",
    "Features",
    "ZoneFeatures",
    "PlayInfo",
    "PresetInfo",
    "PresetEntry",
    "Status",
]


class _MusicCastBase(BaseModel):
    """Base class with permissive extra handling for future-proofing."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    response_code: int = 0


class DeviceInfo(_MusicCastBase):
    """Subset of *system/getDeviceInfo*."""

    model_name: str = "MusicCast"
    system_version: float | str | None = None
    api_version: float | str | None = None
    serial_number: str | None = None
    device_id: str | None = None


class ZoneFeatures(_MusicCastBase):
    """One entry of the ``zone`` list in *system/getFeatures*."""

    id: str
    sound_program_list: list[str] = Field(default_factory=list)
    link_audio_delay_list: list[str] = Field(default_factory=list)


class Features(_MusicCastBase):
    """Subset of *system/getFeatures*."""

    zone: list[ZoneFeatures] = Field(default_factory=list)

    def get_zone(self, zone_id: str) -> ZoneFeatures | None:
        """Return the feature block for *zone_id* if the device reports it."""
        for zone in self.zone:
            if zone.id == zone_id:
                return zone
        return None


class Status(_MusicCastBase):
    """Subset of *main/getStatus*."""

    power: str | None = None
    volume: int = 0
    mute: bool = False
    max_volume: int = 0
    input: str | None = None
    input_text: str | None = None
    distribution_enable: bool | None = None
    sound_program: str | None = None
    link_audio_delay: str | None = None

    @property
    def is_on(self) -> bool:
        return self.power == "on"


class PlayInfo(_MusicCastBase):
    """Subset of *netusb/getPlayInfo*."""

    input: str | None = None
    playback: str | None = None
    play_time: int | None = None
    artist: str = ""
    album: str = ""
    track: str = ""


class PresetEntry(_MusicCastBase):
    """A single preset slot, numbered by the client after fetching.

    ``preset_id`` is the 1-based slot number used by *recallPreset*;
    ``identifier`` is the value exposed to the control surface.
    """

    input: str = ""
    text: str = ""
    preset_id: int = 0
    identifier: int = 0
    display_text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def _none_to_empty(cls, v: str | None) -> str:  # noqa: D401
        return v or ""


class PresetInfo(_MusicCastBase):
    """Subset of *netusb/getPresetInfo*."""

    preset_info: list[PresetEntry] = Field(default_factory=list)
