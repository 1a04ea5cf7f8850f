# pingtrace/config.py
import logging
import math
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from pingtrace.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PING_EXE = shutil.which("ping") or "/bin/ping"

DEFAULT_PACKET_SIZE_BYTES = 56   # + 8 byte ICMP header = 64 byte packet
DEFAULT_TIMEOUT_SEC = 10
DEFAULT_INTERVAL_SEC = 0.5
DEFAULT_PINGS_PER_HOP = 3
DEFAULT_MAX_HOP_COUNT = 10

# request key -> (TraceConfig field, type, default)
PARAM_FIELDS = {
    "packet_size_byte": ("packet_size_bytes", int, DEFAULT_PACKET_SIZE_BYTES),
    "ping_timeout_sec": ("timeout_sec", int, DEFAULT_TIMEOUT_SEC),
    "ping_interval_sec": ("interval_sec", float, DEFAULT_INTERVAL_SEC),
    "pings_per_hop": ("pings_per_hop", int, DEFAULT_PINGS_PER_HOP),
    "max_ping_count": ("max_hop_count", int, DEFAULT_MAX_HOP_COUNT),
}


@dataclass(frozen=True)
class TraceConfig:
    target: str
    packet_size_bytes: int = DEFAULT_PACKET_SIZE_BYTES
    timeout_sec: int = DEFAULT_TIMEOUT_SEC
    interval_sec: float = DEFAULT_INTERVAL_SEC
    pings_per_hop: int = DEFAULT_PINGS_PER_HOP
    max_hop_count: int = DEFAULT_MAX_HOP_COUNT
    ping_exe: str = DEFAULT_PING_EXE

    def __post_init__(self):
        if not self.target or not self.target.strip():
            raise ConfigError("Target of traceroute cannot be empty", key="target")
        if self.packet_size_bytes <= 0:
            raise ConfigError("packet_size_byte must be positive", key="packet_size_byte", target=self.target)
        if self.timeout_sec <= 0:
            raise ConfigError("ping_timeout_sec must be positive", key="ping_timeout_sec", target=self.target)
        if self.interval_sec < 0:
            raise ConfigError("ping_interval_sec cannot be negative", key="ping_interval_sec", target=self.target)
        if self.pings_per_hop < 1:
            raise ConfigError("pings_per_hop must be at least 1", key="pings_per_hop", target=self.target)
        if self.max_hop_count < 1:
            raise ConfigError("max_ping_count must be at least 1", key="max_ping_count", target=self.target)


def _parse_number(key: str, raw: Any, kind: type):
    if isinstance(raw, bool):
        raise ConfigError(f"{key} must be a number, got {raw!r}", key=key)
    if kind is int and isinstance(raw, float):
        # YAML turns "3.0" into a float; only whole values are ints
        if not raw.is_integer():
            raise ConfigError(f"{key} must be an integer, got {raw!r}", key=key)
        return int(raw)
    try:
        value = kind(str(raw).strip()) if isinstance(raw, str) else kind(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be {kind.__name__}, got {raw!r}", key=key) from e
    if kind is float and not math.isfinite(value):
        raise ConfigError(f"{key} must be finite, got {raw!r}", key=key)
    return value


def validate(params: Optional[Mapping[str, Any]]) -> TraceConfig:
    """
    Turn a raw request mapping into a TraceConfig, filling defaults for
    absent keys. Raises ConfigError on a missing target, a value that does
    not parse, or one that breaks a TraceConfig invariant.
    """
    params = params or {}
    target = params.get("target")
    if target is None or not str(target).strip():
        raise ConfigError("Target of traceroute cannot be null", key="target")
    target = str(target).strip()

    kwargs: dict[str, Any] = {"target": target}
    for key, (field_name, kind, default) in PARAM_FIELDS.items():
        raw = params.get(key)
        if raw is None:
            kwargs[field_name] = default
            continue
        try:
            kwargs[field_name] = _parse_number(key, raw, kind)
        except ConfigError as e:
            e.target = target
            raise

    ping_exe = params.get("ping_exe")
    if ping_exe:
        kwargs["ping_exe"] = str(ping_exe)

    cfg = TraceConfig(**kwargs)
    logger.debug("validated trace config: %s", cfg)
    return cfg


def load_params_file(path) -> dict[str, Any]:
    """Read a YAML mapping of request keys (same names as ``validate`` takes)."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must hold a mapping, got {type(data).__name__}")
    return {str(k): v for k, v in data.items()}


def merge_params(*mappings: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Overlay mappings left to right; None values never override."""
    merged: dict[str, Any] = {}
    for m in mappings:
        if not m:
            continue
        for k, v in m.items():
            if v is not None:
                merged[k] = v
    return merged
