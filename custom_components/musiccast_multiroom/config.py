"""YAML configuration schema and the plain config objects handed to the core.

Example::

    musiccast_multiroom:
      server:
        host: 192.168.1.20
        preset_info_regex: "\\(.*\\)"
        inputs:
          - input: tv
            name: TV
          - input: hdmi1
            name: Apple TV
      clients:
        - host: 192.168.1.21
        - host: 192.168.1.22
          volume_profile: continuous
          volume_max: 60

Every error here fails setup of the integration before polling starts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import voluptuous as vol
from homeassistant.const import CONF_HOST, CONF_NAME
import homeassistant.helpers.config_validation as cv

from .const import (
    CONF_CLIENTS,
    CONF_CONVERGENCE,
    CONF_INPUT,
    CONF_INPUTS,
    CONF_INTERVAL,
    CONF_POLLING,
    CONF_POWERED_OFF_INTERVAL,
    CONF_POWERED_ON_INTERVAL,
    CONF_PRESET_INFO_REGEX,
    CONF_SERVER,
    CONF_TIMEOUT,
    CONF_USER_ACTIVITY_INTERVAL,
    CONF_VOLUME_MAX,
    CONF_VOLUME_MIN,
    CONF_VOLUME_PERCENTAGE_HIGH,
    CONF_VOLUME_PERCENTAGE_LOW,
    CONF_VOLUME_PROFILE,
    CONF_VOLUME_STEP_COUNT,
    CONVERGENCE_INTERVAL,
    CONVERGENCE_TIMEOUT,
    DEFAULT_VOLUME_MIN,
    DEFAULT_VOLUME_STEP_COUNT,
    DOMAIN,
    MAX_INPUTS,
    MAX_VOLUME_STEP_COUNT,
    POWERED_OFF_INTERVAL,
    POWERED_ON_INTERVAL,
    USER_ACTIVITY_INTERVAL,
    VOLUME_PROFILE_CONTINUOUS,
    VOLUME_PROFILE_STEPS,
)
from .smart_polling import PollingIntervals
from .state_resolver import InputConfig, VolumeProfile, assign_input_identifiers

_PERCENTAGE = vol.All(vol.Coerce(float), vol.Range(min=0, max=100))
_SECONDS = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))


def _validate_volume_range(conf: dict[str, Any]) -> dict[str, Any]:
    volume_max = conf.get(CONF_VOLUME_MAX)
    if volume_max is not None and conf[CONF_VOLUME_MIN] >= volume_max:
        raise vol.Invalid(f"{CONF_VOLUME_MIN} ({conf[CONF_VOLUME_MIN]}) must be below {CONF_VOLUME_MAX} ({volume_max})")
    return conf


def _validate_tier_order(conf: dict[str, Any]) -> dict[str, Any]:
    if not (
        conf[CONF_USER_ACTIVITY_INTERVAL] < conf[CONF_POWERED_ON_INTERVAL] < conf[CONF_POWERED_OFF_INTERVAL]
    ):
        raise vol.Invalid(
            f"Polling intervals must increase: {CONF_USER_ACTIVITY_INTERVAL} < "
            f"{CONF_POWERED_ON_INTERVAL} < {CONF_POWERED_OFF_INTERVAL}"
        )
    return conf


def _validate_topology(conf: dict[str, Any]) -> dict[str, Any]:
    server_host = conf[CONF_SERVER][CONF_HOST]
    seen = {server_host}
    for client in conf[CONF_CLIENTS]:
        host = client[CONF_HOST]
        if host == server_host:
            raise vol.Invalid(f"Client {host} is also configured as the server")
        if host in seen:
            raise vol.Invalid(f"Client {host} is configured more than once")
        seen.add(host)
    return conf


_VOLUME_SCHEMA = {
    vol.Optional(CONF_VOLUME_PROFILE, default=VOLUME_PROFILE_STEPS): vol.In(
        [VOLUME_PROFILE_STEPS, VOLUME_PROFILE_CONTINUOUS]
    ),
    vol.Optional(CONF_VOLUME_MIN, default=DEFAULT_VOLUME_MIN): vol.All(vol.Coerce(int), vol.Range(min=0)),
    vol.Optional(CONF_VOLUME_MAX): vol.All(vol.Coerce(int), vol.Range(min=1)),
    vol.Optional(CONF_VOLUME_PERCENTAGE_LOW): _PERCENTAGE,
    vol.Optional(CONF_VOLUME_PERCENTAGE_HIGH): _PERCENTAGE,
    vol.Optional(CONF_VOLUME_STEP_COUNT, default=DEFAULT_VOLUME_STEP_COUNT): vol.All(
        vol.Coerce(int), vol.Range(min=2, max=MAX_VOLUME_STEP_COUNT)
    ),
}

INPUT_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_INPUT): cv.string,
        vol.Required(CONF_NAME): cv.string,
    }
)

CLIENT_SCHEMA = vol.All(
    vol.Schema({vol.Required(CONF_HOST): cv.string, **_VOLUME_SCHEMA}),
    _validate_volume_range,
)

SERVER_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(CONF_HOST): cv.string,
            vol.Optional(CONF_INPUTS, default=[]): vol.All(
                cv.ensure_list, [INPUT_SCHEMA], vol.Length(max=MAX_INPUTS)
            ),
            vol.Optional(CONF_PRESET_INFO_REGEX): cv.is_regex,
            **_VOLUME_SCHEMA,
        }
    ),
    _validate_volume_range,
)

POLLING_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(CONF_POWERED_OFF_INTERVAL, default=POWERED_OFF_INTERVAL): _SECONDS,
            vol.Optional(CONF_POWERED_ON_INTERVAL, default=POWERED_ON_INTERVAL): _SECONDS,
            vol.Optional(CONF_USER_ACTIVITY_INTERVAL, default=USER_ACTIVITY_INTERVAL): _SECONDS,
        }
    ),
    _validate_tier_order,
)

CONVERGENCE_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_INTERVAL, default=CONVERGENCE_INTERVAL): _SECONDS,
        vol.Optional(CONF_TIMEOUT, default=CONVERGENCE_TIMEOUT): _SECONDS,
    }
)

MULTIROOM_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(CONF_SERVER): SERVER_SCHEMA,
            vol.Optional(CONF_CLIENTS, default=[]): vol.All(cv.ensure_list, [CLIENT_SCHEMA]),
            vol.Optional(CONF_POLLING, default={}): POLLING_SCHEMA,
            vol.Optional(CONF_CONVERGENCE, default={}): CONVERGENCE_SCHEMA,
        }
    ),
    _validate_topology,
)

CONFIG_SCHEMA = vol.Schema({DOMAIN: MULTIROOM_SCHEMA}, extra=vol.ALLOW_EXTRA)


@dataclass(frozen=True)
class DeviceConfig:
    """Everything the core needs to know about one device."""

    host: str
    server_host: str | None = None
    clients: tuple[str, ...] = ()
    inputs: tuple[InputConfig, ...] = ()
    volume_profile: VolumeProfile = VolumeProfile.STEPS
    volume_min: int = DEFAULT_VOLUME_MIN
    volume_max: int | None = None
    volume_percentage_low: float | None = None
    volume_percentage_high: float | None = None
    volume_step_count: int = DEFAULT_VOLUME_STEP_COUNT

    @property
    def is_server(self) -> bool:
        return self.server_host is None


@dataclass(frozen=True)
class MultiroomConfig:
    """Validated integration configuration."""

    devices: tuple[DeviceConfig, ...]
    intervals: PollingIntervals = field(default_factory=PollingIntervals)
    convergence_interval: float = CONVERGENCE_INTERVAL
    convergence_timeout: float = CONVERGENCE_TIMEOUT
    preset_info_regex: re.Pattern[str] | None = None

    @property
    def server(self) -> DeviceConfig:
        return self.devices[0]


def _volume_kwargs(conf: dict[str, Any]) -> dict[str, Any]:
    return {
        "volume_profile": VolumeProfile(conf[CONF_VOLUME_PROFILE]),
        "volume_min": conf[CONF_VOLUME_MIN],
        "volume_max": conf.get(CONF_VOLUME_MAX),
        "volume_percentage_low": conf.get(CONF_VOLUME_PERCENTAGE_LOW),
        "volume_percentage_high": conf.get(CONF_VOLUME_PERCENTAGE_HIGH),
        "volume_step_count": conf[CONF_VOLUME_STEP_COUNT],
    }


def build_device_configs(conf: dict[str, Any]) -> MultiroomConfig:
    """Turn a validated ``MULTIROOM_SCHEMA`` dict into config objects, server first."""
    server_conf = conf[CONF_SERVER]
    server_host = server_conf[CONF_HOST]
    client_confs = conf[CONF_CLIENTS]

    inputs = assign_input_identifiers(
        InputConfig(input=item[CONF_INPUT], name=item[CONF_NAME]) for item in server_conf[CONF_INPUTS]
    )
    devices = [
        DeviceConfig(
            host=server_host,
            clients=tuple(client[CONF_HOST] for client in client_confs),
            inputs=tuple(inputs),
            **_volume_kwargs(server_conf),
        )
    ]
    devices.extend(
        DeviceConfig(host=client[CONF_HOST], server_host=server_host, **_volume_kwargs(client))
        for client in client_confs
    )

    polling = conf[CONF_POLLING]
    convergence = conf[CONF_CONVERGENCE]
    return MultiroomConfig(
        devices=tuple(devices),
        intervals=PollingIntervals(
            powered_off=polling[CONF_POWERED_OFF_INTERVAL],
            powered_on=polling[CONF_POWERED_ON_INTERVAL],
            user_activity=polling[CONF_USER_ACTIVITY_INTERVAL],
        ),
        convergence_interval=convergence[CONF_INTERVAL],
        convergence_timeout=convergence[CONF_TIMEOUT],
        preset_info_regex=server_conf.get(CONF_PRESET_INFO_REGEX),
    )
