"""Per-device logic for MusicCast receivers and speakers.

``MusicCastDevice`` owns no state of its own beyond its volume steps and
listeners: every snapshot lives in the coordinator's store, and every value
an entity shows is resolved from there on demand.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .api import MusicCastError
from .const import (
    DEFAULT_VOLUME_MAX,
    LINK_AUDIO_DELAY_AUDIO_SYNC,
    LINK_AUDIO_DELAY_LIP_SYNC,
    PLAYBACK_PAUSE,
    SOUND_PROGRAM_STRAIGHT,
    SOUND_PROGRAM_SURROUND_DECODER,
    ZONE_MAIN,
)
from .convergence import async_wait_for_identifier, async_wait_for_power
from .group_helpers import async_link_client, async_power_off_clients
from .models import DeviceInfo, Features, PlayInfo, PresetEntry, PresetInfo, Status, ZoneFeatures
from .state import StateCategory, status_changed
from .state_resolver import (
    VolumeProfile,
    VolumeStep,
    build_volume_steps,
    clamp_volume,
    resolve_input_preset,
    resolve_volume_step,
)

if TYPE_CHECKING:
    from .config import DeviceConfig
    from .coordinator import MusicCastCoordinator

_LOGGER = logging.getLogger(__name__)

__all__ = ["MusicCastDevice"]


class MusicCastDevice:
    """One configured device: initial fetch, periodic refresh and commands."""

    def __init__(self, config: DeviceConfig, coordinator: MusicCastCoordinator) -> None:
        """Initialize device."""
        self.config = config
        self.coordinator = coordinator
        self.client = coordinator.client
        self.volume_steps: list[VolumeStep] = []
        self.available = False
        self._listeners: list[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def host(self) -> str:
        return self.config.host

    @property
    def is_server(self) -> bool:
        return self.config.is_server

    @property
    def device_info(self) -> DeviceInfo | None:
        return self._cached(StateCategory.DEVICE_INFO)

    @property
    def name(self) -> str:
        info = self.device_info
        return info.model_name if info else self.host

    @property
    def unique_id(self) -> str:
        """Serial number when known, host otherwise."""
        info = self.device_info
        if info and info.serial_number:
            return info.serial_number
        return self.host

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def async_setup(self) -> None:
        """Fetch every state category once and derive the volume steps.

        Raises MusicCastError when the device cannot be reached; the caller
        decides whether to skip the device.
        """
        host = self.host
        self.coordinator.set(host, StateCategory.DEVICE_INFO, await self.client.get_device_info(host))
        self.coordinator.set(host, StateCategory.PRESET_INFO, await self.client.get_preset_info(host))
        self.coordinator.set(host, StateCategory.STATUS, await self.client.get_status(host))
        self.coordinator.set(host, StateCategory.PLAY_INFO, await self.client.get_play_info(host))
        self.coordinator.set(host, StateCategory.FEATURES, await self.client.get_features(host))

        status: Status = self.coordinator.get(host, StateCategory.STATUS)
        self.volume_steps = build_volume_steps(
            status.max_volume,
            self.config.volume_percentage_low,
            self.config.volume_percentage_high,
            self.config.volume_step_count,
        )
        _LOGGER.debug("Volume steps for %s: %s", host, self.volume_steps)
        self.available = True

    async def async_refresh(self) -> None:
        """Refresh subscriber run by the scheduler.

        A status that differs from the previous one means someone else used
        the device, which promotes the host to the fast polling tier.
        """
        host = self.host
        previous = self._cached(StateCategory.STATUS)
        try:
            status = await self.client.get_status(host)
        except MusicCastError as err:
            self._mark_unavailable(err)
            return

        user_activity = status_changed(previous, status)
        self.coordinator.set(host, StateCategory.STATUS, status)
        self.coordinator.ping(host, powered_on=status.is_on, user_activity=user_activity)

        if status.is_on and self.is_server:
            try:
                self.coordinator.set(host, StateCategory.PLAY_INFO, await self.client.get_play_info(host))
            except MusicCastError as err:
                _LOGGER.debug("Play info refresh failed for %s: %s", host, err)

        if not self.available:
            _LOGGER.info("%s is reachable again", host)
        self.available = True
        self.async_notify_listeners()

    def _mark_unavailable(self, err: MusicCastError) -> None:
        if self.available:
            _LOGGER.warning("Status refresh failed for %s, keeping last state: %s", self.host, err)
            self.available = False
            self.async_notify_listeners()
        else:
            _LOGGER.debug("Status refresh failed for %s: %s", self.host, err)

    # ------------------------------------------------------------------
    # Listeners (push side of the accessory binding)
    # ------------------------------------------------------------------

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call *listener* after every refresh; returns a function removing it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def async_notify_listeners(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Resolved state
    # ------------------------------------------------------------------

    def _cached(self, category: StateCategory):
        if not self.coordinator.has(self.host, category):
            return None
        return self.coordinator.get(self.host, category)

    @property
    def status(self) -> Status | None:
        return self._cached(StateCategory.STATUS)

    @property
    def play_info(self) -> PlayInfo | None:
        return self._cached(StateCategory.PLAY_INFO)

    @property
    def presets(self) -> list[PresetEntry]:
        info: PresetInfo | None = self._cached(StateCategory.PRESET_INFO)
        return list(info.preset_info) if info else []

    @property
    def is_on(self) -> bool:
        status = self.status
        return bool(status and status.is_on)

    @property
    def volume_step_id(self) -> int | None:
        status = self.status
        if status is None or not self.volume_steps:
            return None
        return resolve_volume_step(self.volume_steps, status.volume)

    @property
    def volume_max(self) -> int:
        """Configured upper volume bound, else the maximum the device reports."""
        if self.config.volume_max is not None:
            return self.config.volume_max
        status = self.status
        if status is not None and status.max_volume:
            return status.max_volume
        return DEFAULT_VOLUME_MAX

    @property
    def volume(self) -> float | None:
        """Raw volume clamped to the configured range (continuous profile)."""
        status = self.status
        if status is None:
            return None
        return clamp_volume(status.volume, self.config.volume_min, self.volume_max)

    @property
    def is_muted(self) -> bool | None:
        status = self.status
        return status.mute if status else None

    @property
    def input_preset_id(self) -> int | None:
        return resolve_input_preset(self.play_info, self.presets, self.status, self.config.inputs)

    @property
    def lip_sync(self) -> bool:
        status = self.status
        return bool(status and status.link_audio_delay == LINK_AUDIO_DELAY_LIP_SYNC)

    @property
    def surround_decoder(self) -> bool:
        status = self.status
        return bool(status and status.sound_program == SOUND_PROGRAM_SURROUND_DECODER)

    def _main_zone(self) -> ZoneFeatures | None:
        features: Features | None = self._cached(StateCategory.FEATURES)
        return features.get_zone(ZONE_MAIN) if features else None

    @property
    def supports_lip_sync(self) -> bool:
        zone = self._main_zone()
        return bool(
            zone
            and LINK_AUDIO_DELAY_LIP_SYNC in zone.link_audio_delay_list
            and LINK_AUDIO_DELAY_AUDIO_SYNC in zone.link_audio_delay_list
        )

    @property
    def supports_surround_decoder(self) -> bool:
        zone = self._main_zone()
        return bool(
            zone
            and SOUND_PROGRAM_SURROUND_DECODER in zone.sound_program_list
            and SOUND_PROGRAM_STRAIGHT in zone.sound_program_list
        )

    @property
    def uses_volume_steps(self) -> bool:
        return self.config.volume_profile is VolumeProfile.STEPS

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def async_set_power(self, on: bool) -> None:
        """Switch power; clients join their server, a server takes its clients down."""
        await self.client.set_power(self.host, on)
        self.coordinator.ping(self.host, powered_on=on, user_activity=True)

        if on and self.config.server_host:
            await async_link_client(self.coordinator, self.client, self.host, self.config.server_host)
            return
        if not on and self.config.clients:
            await async_power_off_clients(self.coordinator, self.client, self.config.clients)
        await async_wait_for_power(self.coordinator, self.host, on)

    async def async_set_volume_step(self, step_id: int) -> None:
        step = next((step for step in self.volume_steps if step.id == step_id), None)
        if step is None:
            _LOGGER.warning("Unknown volume step %s for %s, sending volume 0", step_id, self.host)
        await self.client.set_volume(self.host, step.volume if step else 0)
        self.coordinator.ping(self.host, user_activity=True)

    async def async_set_volume(self, volume: float) -> None:
        value = clamp_volume(volume, self.config.volume_min, self.volume_max)
        await self.client.set_volume(self.host, round(value))
        self.coordinator.ping(self.host, user_activity=True)

    async def async_set_mute(self, mute: bool) -> None:
        await self.client.set_mute(self.host, mute)
        self.coordinator.ping(self.host, user_activity=True)

    async def async_select_input_preset(self, identifier: int) -> None:
        """Switch to a configured input or recall a preset by its identifier."""
        item = next((item for item in self.config.inputs if item.identifier == identifier), None)
        if item is not None:
            await self.client.set_input(self.host, item.input)
        else:
            preset = next((preset for preset in self.presets if preset.identifier == identifier), None)
            if preset is None:
                _LOGGER.warning("Unknown input/preset identifier %s for %s", identifier, self.host)
                return
            if self.input_preset_id != identifier:
                await self.client.set_playback(self.host, PLAYBACK_PAUSE)
            await self.client.recall_preset(self.host, preset.preset_id)

        self.coordinator.ping(self.host, user_activity=True)
        await async_wait_for_identifier(self.coordinator, lambda: self.input_preset_id, identifier, self.host)

    async def async_set_lip_sync(self, on: bool) -> None:
        delay = LINK_AUDIO_DELAY_LIP_SYNC if on else LINK_AUDIO_DELAY_AUDIO_SYNC
        await self.client.set_link_audio_delay(self.host, delay)
        self.coordinator.ping(self.host, user_activity=True)

    async def async_set_surround_decoder(self, on: bool) -> None:
        program = SOUND_PROGRAM_SURROUND_DECODER if on else SOUND_PROGRAM_STRAIGHT
        await self.client.set_sound_program(self.host, program)
        self.coordinator.ping(self.host, user_activity=True)

    def __repr__(self) -> str:
        role = "server" if self.is_server else f"client of {self.config.server_host}"
        return f"MusicCastDevice({self.host}, {role})"
