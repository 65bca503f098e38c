"""SRv6 L2 and L3 Service TLVs with their sub-TLVs and sub-sub-TLVs."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Union

INFORMATION_SUBTLV_TYPE = 1
SID_STRUCTURE_SUBSUBTLV_TYPE = 1
_SID_STRUCTURE_SUBSUBTLV_LEN = 6
_INFORMATION_SUBTLV_FIXED_LEN = 20


def _json_uint(obj: Mapping[str, Any], key: str, bits: int) -> int:
    value = obj.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an unsigned integer, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {key!r} value {value} does not fit in {bits} bits")
    return value


def _ip16_string(raw: bytes) -> str:
    addr = ipaddress.IPv6Address(raw)
    if addr.ipv4_mapped is not None:
        return str(addr.ipv4_mapped)
    return addr.compressed


def _iter_tlvs(data: bytes, start: int) -> Iterator[tuple[int, bytes]]:
    """Yield (type, value) pairs of 1-byte type, 2-byte length TLVs."""
    pos = start
    while pos < len(data):
        if pos + 3 > len(data):
            raise ValueError("not enough bytes to decode SRv6 Service TLV header")
        tlv_type = data[pos]
        length = int.from_bytes(data[pos + 1 : pos + 3], "big")
        pos += 3
        end = pos + length
        if end > len(data):
            raise ValueError(f"not enough bytes to decode SRv6 Service TLV of type {tlv_type}")
        yield tlv_type, bytes(data[pos:end])
        pos = end


def _collect(
    data: bytes, start: int, known_type: int, decoder: Callable[[bytes], Any]
) -> dict[int, list[Any]]:
    result: dict[int, list[Any]] = {}
    for tlv_type, value in _iter_tlvs(data, start):
        item = decoder(value) if tlv_type == known_type else value
        result.setdefault(tlv_type, []).append(item)
    return result


def _parse_type_key(key: str) -> int:
    try:
        return int(key)
    except ValueError as exc:
        raise ValueError(f"invalid TLV type key {key!r}") from exc


@dataclass
class SIDStructureSubSubTLV:
    """SID Structure sub-sub-TLV of an SRv6 Information sub-TLV."""

    local_block_length: int = 0
    local_node_length: int = 0
    function_length: int = 0
    argument_length: int = 0
    transposition_length: int = 0
    transposition_offset: int = 0


SvcSubSubTLV = Union[SIDStructureSubSubTLV, bytes]


@dataclass
class InformationSubTLV:
    """SRv6 Information sub-TLV (type 1)."""

    sid: str = ""
    flags: int = 0
    endpoint_behavior: int = 0
    sub_sub_tlvs: dict[int, list[SvcSubSubTLV]] | None = None


SvcSubTLV = Union[InformationSubTLV, bytes]


@dataclass
class L3Service:
    """SRv6 L3 Service TLV: sub-TLVs grouped by type."""

    sub_tlvs: dict[int, list[SvcSubTLV]] = field(default_factory=dict)


@dataclass
class L2Service:
    """SRv6 L2 Service TLV; it carries no decoded fields."""


def unmarshal_sid_structure_subsub_tlv(data: bytes) -> SIDStructureSubSubTLV:
    """Decode the value of a SID Structure sub-sub-TLV."""
    if len(data) < _SID_STRUCTURE_SUBSUBTLV_LEN:
        raise ValueError("not enough bytes to decode SID Structure Sub Sub TLV")
    lb, ln, fun, arg, tl, to = data[:_SID_STRUCTURE_SUBSUBTLV_LEN]
    return SIDStructureSubSubTLV(
        local_block_length=lb,
        local_node_length=ln,
        function_length=fun,
        argument_length=arg,
        transposition_length=tl,
        transposition_offset=to,
    )


def unmarshal_information_subtlv(data: bytes) -> InformationSubTLV:
    """Decode the value of an SRv6 Information sub-TLV."""
    if len(data) < _INFORMATION_SUBTLV_FIXED_LEN:
        raise ValueError("not enough bytes to decode SRv6 Information Sub TLV")
    # data[0] is reserved
    tlv = InformationSubTLV(
        sid=_ip16_string(bytes(data[1:17])),
        flags=data[17],
        endpoint_behavior=int.from_bytes(data[18:20], "big"),
    )
    if len(data) > _INFORMATION_SUBTLV_FIXED_LEN:
        tlv.sub_sub_tlvs = unmarshal_l3_service_subsubtlvs(data[_INFORMATION_SUBTLV_FIXED_LEN:])
    return tlv


def unmarshal_l3_service_subtlvs(data: bytes) -> dict[int, list[SvcSubTLV]]:
    """Decode L3 Service sub-TLVs; unknown types are kept as raw bytes."""
    return _collect(data, 0, INFORMATION_SUBTLV_TYPE, unmarshal_information_subtlv)


def unmarshal_l3_service_subsubtlvs(data: bytes) -> dict[int, list[SvcSubSubTLV]]:
    """Decode sub-sub-TLVs following a leading reserved byte."""
    return _collect(
        data, 1, SID_STRUCTURE_SUBSUBTLV_TYPE, unmarshal_sid_structure_subsub_tlv
    )


def unmarshal_l3_service(data: bytes) -> L3Service:
    """Decode an SRv6 L3 Service TLV value (a reserved byte, then sub-TLVs)."""
    if len(data) < 1:
        raise ValueError("not enough bytes to decode SRv6 L3 Service")
    return L3Service(sub_tlvs=unmarshal_l3_service_subtlvs(data[1:]))


def _sid_structure_subsub_from_json(obj: Mapping[str, Any]) -> SIDStructureSubSubTLV:
    if not isinstance(obj, Mapping):
        raise ValueError(f"SID Structure Sub Sub TLV must be an object, got {obj!r}")
    return SIDStructureSubSubTLV(
        local_block_length=_json_uint(obj, "locator_block_length", 8),
        local_node_length=_json_uint(obj, "locator_node_length", 8),
        function_length=_json_uint(obj, "function_length", 8),
        argument_length=_json_uint(obj, "argument_length", 8),
        transposition_length=_json_uint(obj, "transposition_length", 8),
        transposition_offset=_json_uint(obj, "transposition_offset", 8),
    )


def information_subtlv_from_json(obj: Mapping[str, Any]) -> InformationSubTLV:
    """Build an Information sub-TLV from its decoded JSON object."""
    if not isinstance(obj, Mapping):
        raise ValueError(f"Information Sub TLV must be an object, got {obj!r}")
    sid = obj.get("sid", "")
    if sid is None:
        sid = ""
    if not isinstance(sid, str):
        raise ValueError(f"field 'sid' must be a string, got {sid!r}")
    tlv = InformationSubTLV(
        sid=sid,
        flags=_json_uint(obj, "flags", 8),
        endpoint_behavior=_json_uint(obj, "endpoint_behavior", 16),
        sub_sub_tlvs={},
    )
    raw = obj.get("sub_sub_tlvs")
    if not isinstance(raw, Mapping):
        return tlv
    for key, items in raw.items():
        tlv_type = _parse_type_key(key)
        if tlv_type != SID_STRUCTURE_SUBSUBTLV_TYPE:
            raise ValueError(f"unknown SRv6 L3 Service Sub Sub TLV type {tlv_type}")
        if not isinstance(items, list):
            raise ValueError("sub sub tlvs must be a list")
        tlv.sub_sub_tlvs.setdefault(tlv_type, []).extend(
            _sid_structure_subsub_from_json(item) for item in items
        )
    return tlv


def l3_service_from_json(obj: Mapping[str, Any]) -> L3Service:
    """Build an L3 Service from its decoded JSON object."""
    if not isinstance(obj, Mapping):
        raise ValueError(f"L3 Service must be an object, got {obj!r}")
    if "sub_tlvs" not in obj:
        raise ValueError("L3 Service is missing sub_tlvs field")
    raw = obj["sub_tlvs"]
    service = L3Service()
    if raw is None:
        return service
    if not isinstance(raw, Mapping):
        raise ValueError("field 'sub_tlvs' must be an object")
    for key, items in raw.items():
        tlv_type = _parse_type_key(key)
        if tlv_type != INFORMATION_SUBTLV_TYPE:
            raise ValueError(f"unknown SRv6 L3 Service Sub TLV type {tlv_type}")
        if not isinstance(items, list):
            raise ValueError("sub tlvs must be a list")
        service.sub_tlvs.setdefault(tlv_type, []).extend(
            information_subtlv_from_json(item) for item in items
        )
    return service