"""SR Policy Preference, Weight and ENLP sub-TLVs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

PREFERENCE_STLV_LEN = 6


def _json_uint(obj: Mapping[str, Any], key: str, bits: int) -> int:
    value = obj.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an unsigned integer, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {key!r} value {value} does not fit in {bits} bits")
    return value


@dataclass
class Preference:
    """Preference of an SR Policy candidate path."""

    flags: int = 0
    preference: int = 0


@dataclass
class Weight:
    """Weight associated with a segment list."""

    flags: int = 0
    weight: int = 0


@dataclass
class ENLP:
    """Explicit NULL Label Policy sub-TLV."""

    flags: int = 0
    enlp: int = 0


def unmarshal_preference_stlv(data: bytes) -> Preference:
    """Decode a Preference sub-TLV value: flags, reserved byte, 4-byte preference."""
    if len(data) != PREFERENCE_STLV_LEN:
        raise ValueError("invalid length of preference stlv")
    return Preference(flags=data[0], preference=int.from_bytes(data[2:6], "big"))


def weight_from_json(obj: Mapping[str, Any]) -> Weight:
    """Build a Weight sub-TLV from its decoded JSON object."""
    if not isinstance(obj, Mapping):
        raise ValueError(f"weight must be an object, got {obj!r}")
    return Weight(flags=_json_uint(obj, "flags", 8), weight=_json_uint(obj, "weight", 32))