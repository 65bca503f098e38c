"""SRv6 End.X SID TLV."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Mapping

from srtlv.srv6_subtlv import SubTLV, subtlvs_from_json, unmarshal_all_subtlvs

END_X_SID_TLV_MIN_LEN = 22


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


def _ip16_string(raw: bytes) -> str:
    addr = ipaddress.IPv6Address(raw)
    if addr.ipv4_mapped is not None:
        return str(addr.ipv4_mapped)
    return addr.compressed


@dataclass
class EndXSIDFlags:
    """End.X SID flags: Backup, Set and Persistent."""

    b_flag: bool = False
    s_flag: bool = False
    p_flag: bool = False


@dataclass
class EndXSIDTLV:
    """SRv6 End.X SID TLV."""

    type: int = 0
    length: int = 0
    endpoint_behavior: int = 0
    flags: EndXSIDFlags | None = None
    algorithm: int = 0
    weight: int = 0
    sid: str = ""
    sub_tlvs: list[SubTLV] | None = field(default=None)


def unmarshal_endx_sid_flags(data: bytes) -> EndXSIDFlags:
    """Decode the End.X SID flags byte."""
    if len(data) < 1:
        raise ValueError("not enough bytes to unmarshal SRv6 End.X SID Flags")
    b = data[0]
    return EndXSIDFlags(
        b_flag=b & 0x80 == 0x80,
        s_flag=b & 0x40 == 0x40,
        p_flag=b & 0x20 == 0x20,
    )


def unmarshal_endx_sid_tlv(data: bytes) -> EndXSIDTLV:
    """Decode an End.X SID TLV value, including any trailing sub-TLVs."""
    if len(data) < END_X_SID_TLV_MIN_LEN:
        raise ValueError(
            f"invalid length of data {len(data)}, expected minimum of {END_X_SID_TLV_MIN_LEN}"
        )
    tlv = EndXSIDTLV(
        endpoint_behavior=int.from_bytes(data[0:2], "big"),
        flags=unmarshal_endx_sid_flags(data[2:3]),
        algorithm=data[3],
        weight=data[4],
        # data[5] is reserved
        sid=_ip16_string(bytes(data[6:22])),
    )
    if len(data) > END_X_SID_TLV_MIN_LEN:
        tlv.sub_tlvs = unmarshal_all_subtlvs(data[END_X_SID_TLV_MIN_LEN:])
    return tlv


def endx_sid_tlv_from_json(obj: Mapping[str, Any]) -> EndXSIDTLV:
    """Build an End.X SID TLV from its decoded JSON object."""
    flags_obj = obj.get("flags")
    flags = None
    if flags_obj is not None:
        if not isinstance(flags_obj, Mapping):
            raise ValueError(f"field 'flags' must be an object, got {flags_obj!r}")
        flags = EndXSIDFlags(
            b_flag=_json_bool(flags_obj, "b_flag"),
            s_flag=_json_bool(flags_obj, "s_flag"),
            p_flag=_json_bool(flags_obj, "p_flag"),
        )
    sid = obj.get("sid", "")
    if sid is None:
        sid = ""
    if not isinstance(sid, str):
        raise ValueError(f"field 'sid' must be a string, got {sid!r}")
    sub_tlvs = None
    items = obj.get("sub_tlvs")
    if items is not None:
        if not isinstance(items, list):
            raise ValueError("field 'sub_tlvs' must be a list")
        sub_tlvs = subtlvs_from_json(items)
    return EndXSIDTLV(
        type=_json_uint(obj, "type", 16),
        length=_json_uint(obj, "length", 16),
        endpoint_behavior=_json_uint(obj, "endpoint_behavior", 16),
        flags=flags,
        algorithm=_json_uint(obj, "algorithm", 8),
        weight=_json_uint(obj, "weight", 8),
        sid=sid,
        sub_tlvs=sub_tlvs,
    )