"""Constants for the MusicCast Multiroom integration.

This module defines all constants used throughout the integration, including
configuration keys, default values, polling tiers and API endpoints.

Configuration:
    - Server / client topology
    - Per-device volume profile and bounds
    - Polling tier thresholds and convergence timing

Identifiers:
    - Disjoint numeric ranges for volume steps, static inputs and presets

API Endpoints:
    - System, zone, netusb and distribution endpoints of the
      Yamaha Extended Control API
"""

from __future__ import annotations

from typing import Final

DOMAIN = "musiccast_multiroom"

# Integration metadata
NAME = "MusicCast Multiroom"
MANUFACTURER = "Yamaha"

# Config keys
CONF_SERVER = "server"
CONF_CLIENTS = "clients"
CONF_INPUTS = "inputs"
CONF_INPUT = "input"
CONF_PRESET_INFO_REGEX = "preset_info_regex"
CONF_VOLUME_PROFILE = "volume_profile"
CONF_VOLUME_MIN = "volume_min"
CONF_VOLUME_MAX = "volume_max"
CONF_VOLUME_PERCENTAGE_LOW = "volume_percentage_low"
CONF_VOLUME_PERCENTAGE_HIGH = "volume_percentage_high"
CONF_VOLUME_STEP_COUNT = "volume_step_count"
CONF_POLLING = "polling"
CONF_POWERED_OFF_INTERVAL = "powered_off_interval"
CONF_POWERED_ON_INTERVAL = "powered_on_interval"
CONF_USER_ACTIVITY_INTERVAL = "user_activity_interval"
CONF_CONVERGENCE = "convergence"
CONF_INTERVAL = "interval"
CONF_TIMEOUT = "timeout"

# Volume profiles
VOLUME_PROFILE_STEPS = "steps"
VOLUME_PROFILE_CONTINUOUS = "continuous"

# Defaults
DEFAULT_TIMEOUT = 5  # seconds per HTTP request
DEFAULT_VOLUME_STEP_COUNT = 6
DEFAULT_VOLUME_PERCENTAGE_LOW = 25
DEFAULT_VOLUME_PERCENTAGE_HIGH = 65
DEFAULT_VOLUME_MIN = 0
DEFAULT_VOLUME_MAX = 100
MAX_VOLUME_STEP_COUNT = 100

# Polling tiers (seconds)
TICK_INTERVAL: Final = 1
POWERED_OFF_INTERVAL: Final = 60  # floor - refresh at least once a minute
POWERED_ON_INTERVAL: Final = 20  # powered on within the last floor window
USER_ACTIVITY_INTERVAL: Final = 1  # user activity within the powered-on window

# Convergence waiting (seconds)
CONVERGENCE_INTERVAL: Final = 1
CONVERGENCE_TIMEOUT: Final = 10

# Identifier ranges exposed to the control surface.
# Volume steps use 0..count-1, inputs 100..199, presets 200+.
INPUT_IDENTIFIER_BASE: Final = 100
PRESET_IDENTIFIER_BASE: Final = 200
MAX_INPUTS: Final = PRESET_IDENTIFIER_BASE - INPUT_IDENTIFIER_BASE

# Volume step labels
VOLUME_CHARACTER_ACTIVE = "■"
VOLUME_CHARACTER_INACTIVE = "□"

# Device state values
ZONE_MAIN = "main"
POWER_ON = "on"
POWER_STANDBY = "standby"
PLAYBACK_PLAY = "play"
PLAYBACK_PAUSE = "pause"
PLAYBACK_STOP = "stop"
PRESET_INPUTS: Final = ("server", "net_radio")
LINK_AUDIO_DELAY_LIP_SYNC = "lip_sync"
LINK_AUDIO_DELAY_AUDIO_SYNC = "audio_sync"
SOUND_PROGRAM_SURROUND_DECODER = "surr_decoder"
SOUND_PROGRAM_STRAIGHT = "straight"
SERVER_INFO_ADD = "add"
SERVER_INFO_REMOVE = "remove"

# Yamaha Extended Control API endpoints
API_BASE_PATH = "/YamahaExtendedControl/v1"

# System
API_ENDPOINT_DEVICE_INFO = "/system/getDeviceInfo"
API_ENDPOINT_FEATURES = "/system/getFeatures"

# Zone (formatted with the zone name)
API_ENDPOINT_STATUS = "/{zone}/getStatus"
API_ENDPOINT_POWER = "/{zone}/setPower?power="
API_ENDPOINT_VOLUME = "/{zone}/setVolume?volume="
API_ENDPOINT_MUTE = "/{zone}/setMute?enable="
API_ENDPOINT_INPUT = "/{zone}/setInput?input="
API_ENDPOINT_SOUND_PROGRAM = "/{zone}/setSoundProgram?program="
API_ENDPOINT_LINK_AUDIO_DELAY = "/{zone}/setLinkAudioDelay?delay="

# Net/USB
API_ENDPOINT_PLAY_INFO = "/netusb/getPlayInfo"
API_ENDPOINT_PRESET_INFO = "/netusb/getPresetInfo"
API_ENDPOINT_PLAYBACK = "/netusb/setPlayback?playback="
API_ENDPOINT_RECALL_PRESET = "/netusb/recallPreset?zone={zone}&num="

# Distribution (multiroom)
API_ENDPOINT_CLIENT_INFO = "/dist/setClientInfo"
API_ENDPOINT_SERVER_INFO = "/dist/setServerInfo"
API_ENDPOINT_START_DISTRIBUTION = "/dist/startDistribution?num=0"
