#!/usr/bin/env python3
"""
FortiProbe Core Types

Type definitions and data structures used throughout FortiProbe.
Uses dataclasses for clean, immutable data structures with type hints.

The HA checksum structures mirror the FortiOS JSON payload:

    { "results": [ { "is_manage_master": int, "is_root_master": int,
                     "serial_no": str,
                     "checksum": { "global": str, "root": str, "all": str,
                                   "vdoms": { "<name>": str, ... } } } ] }

Decoding follows the same rules as the upstream JSON decoder: missing
keys and nulls take the zero value, values of the wrong JSON type are
rejected with DecodeError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .exceptions import DecodeError


# =============================================================================
# DECODING HELPERS
# =============================================================================

def _decode_int(data: Dict[str, Any], key: str, where: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is a subclass of int but not a JSON number
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise DecodeError(f"Field '{where}.{key}' must be an integer", details=repr(value))


def _decode_str(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    raise DecodeError(f"Field '{where}.{key}' must be a string", details=repr(value))


def _decode_object(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    raise DecodeError(f"Field '{where}' must be an object", details=type(value).__name__)


# =============================================================================
# HA CHECKSUM WIRE STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class HAChecksum:
    """
    Checksum set reported by one cluster member.

    vdoms is always a mapping, empty when the member reports none.
    """
    global_: str = ""
    root: str = ""
    all: str = ""
    vdoms: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, where: str = "checksum") -> 'HAChecksum':
        data = _decode_object(data, where)
        raw_vdoms = _decode_object(data.get("vdoms"), f"{where}.vdoms")
        vdoms = {}
        for name, checksum in raw_vdoms.items():
            if checksum is None:
                checksum = ""
            elif not isinstance(checksum, str):
                raise DecodeError(
                    f"Field '{where}.vdoms.{name}' must be a string",
                    details=repr(checksum)
                )
            vdoms[name] = checksum
        return cls(
            global_=_decode_str(data, "global", where),
            root=_decode_str(data, "root", where),
            all=_decode_str(data, "all", where),
            vdoms=vdoms,
        )


@dataclass(frozen=True)
class HAChecksumMember:
    """One cluster member as reported by the ha-checksums endpoint."""
    serial_no: str = ""
    is_manage_master: int = 0
    is_root_master: int = 0
    checksum: HAChecksum = field(default_factory=HAChecksum)

    @classmethod
    def from_dict(cls, data: Any, where: str = "results[0]") -> 'HAChecksumMember':
        data = _decode_object(data, where)
        return cls(
            serial_no=_decode_str(data, "serial_no", where),
            is_manage_master=_decode_int(data, "is_manage_master", where),
            is_root_master=_decode_int(data, "is_root_master", where),
            checksum=HAChecksum.from_dict(data.get("checksum"), f"{where}.checksum"),
        )


@dataclass(frozen=True)
class HAChecksumResponse:
    """
    One snapshot of the cluster.

    Order of results is significant: the first member is the reference
    that every other member is compared against.
    """
    results: List[HAChecksumMember] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'HAChecksumResponse':
        if not isinstance(data, dict):
            raise DecodeError(
                "Response body must be a JSON object",
                details=type(data).__name__
            )
        raw_results = data.get("results")
        if raw_results is None:
            return cls()
        if not isinstance(raw_results, list):
            raise DecodeError(
                "Field 'results' must be a list",
                details=type(raw_results).__name__
            )
        return cls(results=[
            HAChecksumMember.from_dict(item, f"results[{index}]")
            for index, item in enumerate(raw_results)
        ])


# =============================================================================
# METRIC STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class MetricDesc:
    """Immutable metric descriptor: name, help text and label names."""
    name: str
    documentation: str
    label_names: Tuple[str, ...]


@dataclass(frozen=True)
class MetricObservation:
    """
    A single gauge sample produced by a probe.

    Observations are produced fresh on every poll and never stored.
    """
    desc: MetricDesc
    label_values: Tuple[str, ...]
    value: float

    def __post_init__(self):
        if len(self.label_values) != len(self.desc.label_names):
            raise ValueError(
                f"{self.desc.name}: expected {len(self.desc.label_names)} "
                f"label values, got {len(self.label_values)}"
            )

    @property
    def name(self) -> str:
        return self.desc.name

    @property
    def labels(self) -> Dict[str, str]:
        return dict(zip(self.desc.label_names, self.label_values))
