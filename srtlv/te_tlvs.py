"""TE Policy descriptor TLVs: candidate path descriptor and MPLS cross connect."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Union

TUNNEL_ID_TYPE = 550
LSP_ID_TYPE = 551
TUNNEL_HEAD_END_ADDR_TYPE = 552
TUNNEL_TAIL_END_ADDR_TYPE = 553
POLICY_CANDIDATE_PATH_DESCRIPTOR_TYPE = 554
LOCAL_MPLS_CROSS_CONNECT_TYPE = 555
MPLS_CROSS_CONNECT_INTERFACE_TYPE = 556
MPLS_CROSS_CONNECT_FEC_TYPE = 557

_CANDIDATE_PATH_LENGTHS = (24, 36, 48)
_INTERFACE_LENGTHS = (9, 23)


class ProtocolOriginType(IntEnum):
    """Protocol responsible for the instantiation of a path."""

    PCEP = 1
    BGP_SR_POLICY = 2
    LOCAL = 3


@dataclass
class PolicyCandidatePathDescriptor:
    """Policy Candidate Path Descriptor TLV."""

    protocol_origin: ProtocolOriginType
    e_flag: bool = False
    o_flag: bool = False
    endpoint: bytes = b""
    color: int = 0
    originator_asn: int = 0
    originator_addr: bytes = b""
    discriminator: int = 0


@dataclass
class LocalMPLSCrossConnectFEC:
    """Local MPLS Cross Connect FEC sub-TLV."""

    flag4: bool = False
    mask_length: int = 0
    prefix: bytes = b""

    def to_json(self) -> dict[str, Any]:
        """JSON object; the prefix is base64 encoded."""
        return {
            "4_flag": self.flag4,
            "mask_length": self.mask_length,
            "prefix": base64.b64encode(self.prefix).decode("ascii"),
        }


@dataclass
class LocalMPLSCrossConnectInterface:
    """Local MPLS Cross Connect Interface sub-TLV."""

    i_flag: bool = False
    local_interface_id: int = 0
    interface_addr: bytes | None = None

    def to_json(self) -> dict[str, Any]:
        """JSON object; the address is base64 encoded, or null when absent."""
        addr = None
        if self.interface_addr is not None:
            addr = base64.b64encode(self.interface_addr).decode("ascii")
        return {
            "i_flag": self.i_flag,
            "local_interface_id": self.local_interface_id,
            "interface_address": addr,
        }


CrossConnectSubTLV = Union[LocalMPLSCrossConnectFEC, LocalMPLSCrossConnectInterface]


@dataclass
class LocalMPLSCrossConnect:
    """Local MPLS state: incoming and outgoing labels with optional sub-TLVs."""

    incoming_label: int = 0
    outgoing_label: int = 0
    sub_tlvs: dict[int, CrossConnectSubTLV] = field(default_factory=dict)


def _take(data: bytes, pos: int, count: int) -> bytes:
    if pos + count > len(data):
        raise ValueError("not enough bytes to decode Policy Candidate Path Descriptor")
    return bytes(data[pos : pos + count])


def unmarshal_policy_candidate_path_descriptor(data: bytes) -> PolicyCandidatePathDescriptor:
    """Decode a Policy Candidate Path Descriptor TLV value."""
    if len(data) not in _CANDIDATE_PATH_LENGTHS:
        raise ValueError(f"invalid length of bytes {len(data)}")
    try:
        origin = ProtocolOriginType(data[0])
    except ValueError:
        raise ValueError(f"invalid protocol origin {data[0]}") from None
    e_flag = data[1] & 0x80 == 0x80
    o_flag = data[1] & 0x40 == 0x40
    pos = 3  # data[2] is reserved
    endpoint = _take(data, pos, 16 if e_flag else 4)
    pos += len(endpoint)
    color = int.from_bytes(_take(data, pos, 4), "big")
    pos += 4
    asn = int.from_bytes(_take(data, pos, 4), "big")
    pos += 4
    originator = _take(data, pos, 16 if o_flag else 4)
    pos += len(originator)
    discriminator = int.from_bytes(_take(data, pos, 4), "big")
    return PolicyCandidatePathDescriptor(
        protocol_origin=origin,
        e_flag=e_flag,
        o_flag=o_flag,
        endpoint=endpoint,
        color=color,
        originator_asn=asn,
        originator_addr=originator,
        discriminator=discriminator,
    )


def unmarshal_local_mpls_cross_connect(data: bytes) -> LocalMPLSCrossConnect:
    """Decode a Local MPLS Cross Connect TLV value."""
    if len(data) < 8:
        raise ValueError("not enough bytes to decode Local MPLS Cross Connect")
    result = LocalMPLSCrossConnect(
        incoming_label=int.from_bytes(data[0:4], "big"),
        outgoing_label=int.from_bytes(data[4:8], "big"),
    )
    if len(data) > 8:
        result.sub_tlvs = unmarshal_local_mpls_cross_connect_subtlvs(data[8:])
    return result


def unmarshal_local_mpls_cross_connect_subtlvs(data: bytes) -> dict[int, CrossConnectSubTLV]:
    """Decode Local MPLS Cross Connect sub-TLVs keyed by type."""
    result: dict[int, CrossConnectSubTLV] = {}
    pos = 0
    while pos < len(data):
        if pos + 4 > len(data):
            raise ValueError("not enough bytes to decode Local MPLS Cross Connect Sub TLVs")
        tlv_type = int.from_bytes(data[pos : pos + 2], "big")
        length = int.from_bytes(data[pos + 2 : pos + 4], "big")
        pos += 4
        end = pos + length
        if end > len(data):
            raise ValueError("not enough bytes to decode Local MPLS Cross Connect Sub TLVs")
        value = bytes(data[pos:end])
        if tlv_type == MPLS_CROSS_CONNECT_FEC_TYPE:
            result[tlv_type] = unmarshal_local_mpls_cross_connect_fec(value)
        elif tlv_type == MPLS_CROSS_CONNECT_INTERFACE_TYPE:
            result[tlv_type] = unmarshal_local_mpls_cross_connect_interface(value)
        else:
            raise ValueError(f"unexpected Local MPLS Cross Connect Sub TLV type {tlv_type}")
        pos = end
    return result


def unmarshal_local_mpls_cross_connect_fec(data: bytes) -> LocalMPLSCrossConnectFEC:
    """Decode a Local MPLS Cross Connect FEC sub-TLV value."""
    if len(data) < 2:
        raise ValueError(
            f"invalid length {len(data)} to decode Local MPLS Cross Connect FEC Sub TLV"
        )
    flag4 = data[0] & 0x80 == 0x80
    mask_length = data[1]
    prefix_len = (mask_length + 7) // 8
    if 2 + prefix_len != len(data):
        raise ValueError(
            f"invalid length {len(data)} to decode Local MPLS Cross Connect FEC Sub TLV"
        )
    size = 4 if flag4 else 16
    prefix = (bytes(data[2:]) + bytes(size))[:size]
    return LocalMPLSCrossConnectFEC(flag4=flag4, mask_length=mask_length, prefix=prefix)


def unmarshal_local_mpls_cross_connect_interface(data: bytes) -> LocalMPLSCrossConnectInterface:
    """Decode a Local MPLS Cross Connect Interface sub-TLV value."""
    if len(data) not in _INTERFACE_LENGTHS:
        raise ValueError(
            f"invalid length {len(data)} to decode Local MPLS Cross Connect Interface Sub TLV"
        )
    size = 4 if len(data) == 9 else 16
    return LocalMPLSCrossConnectInterface(
        i_flag=data[0] & 0x80 == 0x80,
        local_interface_id=int.from_bytes(data[1:5], "big"),
        interface_addr=bytes(data[5 : 5 + size]),
    )