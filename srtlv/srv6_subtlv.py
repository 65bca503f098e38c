"""SRv6 sub-TLVs: the SID Structure sub-TLV and opaque unknown sub-TLVs."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

SID_STRUCTURE_TYPE = 1252
_HEADER_LEN = 4


def _json_uint(obj: Mapping[str, Any], key: str, bits: int) -> int:
    """Read an unsigned integer of the given width from a decoded JSON object."""
    value = obj.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an unsigned integer, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {key!r} value {value} does not fit in {bits} bits")
    return value


@dataclass
class SIDStructure:
    """SRv6 SID Structure TLV (code point 1252)."""

    type: int = 0
    length: int = 0
    lb_length: int = 0
    ln_length: int = 0
    fun_length: int = 0
    arg_length: int = 0


@dataclass
class UnknownSRv6SubTLV:
    """A sub-TLV whose type is not decoded; the value is kept verbatim."""

    type: int = 0
    length: int = 0
    value: bytes = b""


SubTLV = Union[SIDStructure, UnknownSRv6SubTLV]


def unmarshal_sid_structure(data: bytes) -> SIDStructure:
    """Decode the value part of a SID Structure TLV."""
    if len(data) < 4:
        raise ValueError("not enough bytes to unmarshal SRv6 SID Structure TLV")
    lb, ln, fun, arg = data[:4]
    return SIDStructure(lb_length=lb, ln_length=ln, fun_length=fun, arg_length=arg)


def sid_structure_from_json(obj: Mapping[str, Any]) -> SIDStructure:
    """Build a SID Structure TLV from its decoded JSON object."""
    return SIDStructure(
        type=_json_uint(obj, "type", 16),
        length=_json_uint(obj, "length", 16),
        lb_length=_json_uint(obj, "locator_block_length", 8),
        ln_length=_json_uint(obj, "locator_node_length", 8),
        fun_length=_json_uint(obj, "function_length", 8),
        arg_length=_json_uint(obj, "argument_length", 8),
    )


def unmarshal_subtlv(data: bytes) -> SubTLV:
    """Decode one sub-TLV from the start of ``data``.

    The returned object's ``length`` is the total length on the wire,
    header included.
    """
    if len(data) < _HEADER_LEN:
        raise ValueError("not enough bytes to unmarshal SRv6 Sub TLV")
    tlv_type = int.from_bytes(data[0:2], "big")
    value_len = int.from_bytes(data[2:4], "big")
    end = _HEADER_LEN + value_len
    if end > len(data):
        raise ValueError("not enough bytes to unmarshal SRv6 Sub TLV")
    value = bytes(data[_HEADER_LEN:end])
    if tlv_type == SID_STRUCTURE_TYPE:
        stlv = unmarshal_sid_structure(value)
        stlv.type = tlv_type
        stlv.length = end
        return stlv
    return UnknownSRv6SubTLV(type=tlv_type, length=end, value=value)


def unmarshal_all_subtlvs(data: bytes) -> list[SubTLV] | None:
    """Decode consecutive sub-TLVs; returns None when there are none."""
    stlvs: list[SubTLV] = []
    pos = 0
    while pos < len(data):
        stlv = unmarshal_subtlv(data[pos:])
        pos += stlv.length
        stlvs.append(stlv)
    return stlvs or None


def subtlvs_from_json(items: Sequence[Mapping[str, Any]]) -> list[SubTLV] | None:
    """Build sub-TLVs from decoded JSON objects; returns None when empty."""
    result: list[SubTLV] = []
    for item in items:
        if "type" not in item:
            raise ValueError("sub-tlv is missing mandatory type field")
        tlv_type = _json_uint(item, "type", 16)
        if "length" not in item:
            raise ValueError("sub-tlv is missing mandatory length field")
        length = _json_uint(item, "length", 16)
        if tlv_type == SID_STRUCTURE_TYPE:
            result.append(sid_structure_from_json(item))
            continue
        raw = item.get("value")
        if raw is None:
            value = b""
        elif isinstance(raw, str):
            try:
                value = base64.b64decode(raw, validate=True)
            except binascii.Error as exc:
                raise ValueError(f"invalid base64 value {raw!r}") from exc
        else:
            raise ValueError(f"sub-tlv value must be a base64 string, got {raw!r}")
        result.append(UnknownSRv6SubTLV(type=tlv_type, length=length, value=value))
    return result or None