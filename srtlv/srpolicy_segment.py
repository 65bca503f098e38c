"""SR Policy Segment List sub-TLV and its segments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping

from srtlv.srpolicy_subtlv import Weight, weight_from_json

log = logging.getLogger(__name__)

WEIGHT_STLV = 9
_WEIGHT_LEN = 6
_TYPE_A_LEN = 6


class SegmentType(IntEnum):
    """Segment sub-TLV types."""

    A = 1
    B = 13
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 14  # noqa: E741
    J = 15
    K = 16


def _json_uint(obj: Mapping[str, Any], key: str, bits: int) -> int:
    value = obj.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an unsigned integer, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {key!r} value {value} does not fit in {bits} bits")
    return value


def _json_bool(obj: Mapping[str, Any], key: str) -> bool:
    value = obj.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean, got {value!r}")
    return value


@dataclass
class SegmentFlags:
    """Flags carried by a segment of a segment list."""

    v_flag: bool = False
    a_flag: bool = False
    s_flag: bool = False
    b_flag: bool = False

    def _to_json(self) -> dict[str, bool]:
        return {
            "v_flag": self.v_flag,
            "a_flag": self.a_flag,
            "s_flag": self.s_flag,
            "b_flag": self.b_flag,
        }


def new_segment_flags(value: int) -> SegmentFlags:
    """Decode the segment flags byte."""
    return SegmentFlags(
        v_flag=value & 0x80 == 0x80,
        a_flag=value & 0x40 == 0x40,
        s_flag=value & 0x20 == 0x20,
        b_flag=value & 0x10 == 0x10,
    )


def segment_flags_from_json(obj: Mapping[str, Any]) -> SegmentFlags:
    """Build segment flags from their decoded JSON object."""
    if not isinstance(obj, Mapping):
        raise ValueError(f"segment flags must be an object, got {obj!r}")
    return SegmentFlags(
        v_flag=_json_bool(obj, "v_flag"),
        a_flag=_json_bool(obj, "a_flag"),
        s_flag=_json_bool(obj, "s_flag"),
        b_flag=_json_bool(obj, "b_flag"),
    )


@dataclass
class TypeASegment:
    """Type A segment: a single SR-MPLS SID."""

    flags: SegmentFlags | None = None
    label: int = 0
    tc: int = 0
    s: bool = False
    ttl: int = 0

    @property
    def type(self) -> SegmentType:
        return SegmentType.A

    def to_json(self) -> dict[str, Any]:
        """JSON object, omitting zero values."""
        result: dict[str, Any] = {"segment_type": int(SegmentType.A)}
        if self.flags is not None:
            result["flags"] = self.flags._to_json()
        if self.label:
            result["label"] = self.label
        if self.tc:
            result["tc"] = self.tc
        if self.s:
            result["s"] = self.s
        if self.ttl:
            result["ttl"] = self.ttl
        return result


Segment = TypeASegment


def _weight_to_json(weight: Weight) -> dict[str, int]:
    result: dict[str, int] = {}
    if weight.flags:
        result["flags"] = weight.flags
    if weight.weight:
        result["weight"] = weight.weight
    return result


@dataclass
class SegmentList:
    """A single explicit path towards the endpoint."""

    weight: Weight | None = None
    segments: list[Segment] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        """JSON object, omitting an absent weight and an empty segment list."""
        result: dict[str, Any] = {}
        if self.weight is not None:
            result["weight_subtlv"] = _weight_to_json(self.weight)
        if self.segments:
            result["segments"] = [seg.to_json() for seg in self.segments]
        return result


def _type_a_from_json(obj: Mapping[str, Any]) -> TypeASegment:
    flags_obj = obj.get("flags")
    return TypeASegment(
        flags=None if flags_obj is None else segment_flags_from_json(flags_obj),
        label=_json_uint(obj, "label", 32),
        tc=_json_uint(obj, "tc", 8),
        s=_json_bool(obj, "s"),
        ttl=_json_uint(obj, "ttl", 8),
    )


def segment_list_from_json(obj: Mapping[str, Any]) -> SegmentList:
    """Build a Segment List from its decoded JSON object."""
    if not isinstance(obj, Mapping):
        raise ValueError(f"segment list must be an object, got {obj!r}")
    weight_obj = obj.get("weight_subtlv")
    result = SegmentList(weight=None if weight_obj is None else weight_from_json(weight_obj))
    items = obj.get("segments")
    if items is None:
        return result
    if not isinstance(items, list):
        raise ValueError("field 'segments' must be a list")
    for item in items:
        if not isinstance(item, Mapping):
            raise ValueError(f"segment must be an object, got {item!r}")
        if "segment_type" not in item:
            raise ValueError("segment is missing mandatory segment_type field")
        raw_type = item["segment_type"]
        if isinstance(raw_type, bool) or not isinstance(raw_type, int):
            raise ValueError(f"field 'segment_type' must be an integer, got {raw_type!r}")
        try:
            seg_type = SegmentType(raw_type)
        except ValueError:
            raise ValueError(f"unknown type of segment sub tlv {raw_type}") from None
        if seg_type is not SegmentType.A:
            raise ValueError(f"unsupported type of segment sub tlv {raw_type}")
        result.segments.append(_type_a_from_json(item))
    return result


def unmarshal_type_a_segment(data: bytes) -> TypeASegment:
    """Decode a Type A segment value: flags, reserved, label/TC/S/TTL word."""
    if len(data) != _TYPE_A_LEN:
        raise ValueError("invalid length of Type A Segment STLV")
    return TypeASegment(
        flags=new_segment_flags(data[0]),
        label=int.from_bytes(data[2:6], "big") >> 12,
        tc=(data[4] & 0x0E) >> 1,
        s=data[4] & 0x01 == 0x01,
        ttl=data[5],
    )


def unmarshal_segment_list_stlv(data: bytes) -> SegmentList:
    """Decode the value of a Segment List sub-TLV.

    Segment types other than A are recognised but not decoded; they are skipped.
    """
    result = SegmentList()
    pos = 0
    while pos < len(data):
        stype = data[pos]
        pos += 1
        if pos >= len(data):
            raise ValueError(f"not enough bytes to decode segment list sub tlv {stype}")
        length = data[pos]
        pos += 1
        end = pos + length
        if stype == WEIGHT_STLV:
            if result.weight is not None:
                raise ValueError("Segment List Sub TLV can carry a single instance of Weight")
            if length != _WEIGHT_LEN:
                raise ValueError(f"invalid length {length} of raw data for Weight Sub TLV")
            if end > len(data):
                raise ValueError("not enough bytes to decode Weight Sub TLV")
            result.weight = Weight(
                flags=data[pos], weight=int.from_bytes(data[pos + 2 : pos + 6], "big")
            )
        elif stype == SegmentType.A:
            if length != _TYPE_A_LEN:
                raise ValueError(
                    f"invalid length {length} of raw data for Type A Segment Sub TLV"
                )
            if end > len(data):
                raise ValueError("not enough bytes to decode Type A Segment Sub TLV")
            result.segments.append(unmarshal_type_a_segment(data[pos:end]))
        elif stype in SegmentType._value2member_map_:
            if end > len(data):
                raise ValueError(f"not enough bytes to decode segment sub tlv {stype}")
            log.info("Segment of type %s not implemented", SegmentType(stype).name)
        else:
            raise ValueError(f"unknown type of segment sub tlv {stype}")
        pos = end
    return result