"""SRv6 BGP Peer Node SID, Capabilities and Endpoint Behavior TLVs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BGPPeerNodeFlags:
    """BGP Peer Node SID flags: Backup, Set and Persistent."""

    b_flag: bool = False
    s_flag: bool = False
    p_flag: bool = False


@dataclass
class BGPPeerNodeSID:
    """SRv6 BGP Peer Node SID TLV."""

    flags: BGPPeerNodeFlags
    weight: int = 0
    peer_asn: int = 0
    peer_id: bytes = b""


@dataclass
class CapabilityTLV:
    """SRv6 Capabilities TLV."""

    o_flag: bool = False


@dataclass
class EndpointBehavior:
    """SRv6 Endpoint Behavior TLV."""

    endpoint_behavior: int = 0
    flag: int = 0
    algorithm: int = 0


def unmarshal_bgp_peer_node_flags(data: bytes) -> BGPPeerNodeFlags:
    """Decode the BGP Peer Node SID flags byte."""
    if len(data) < 1:
        raise ValueError("not enough bytes to unmarshal BGP Peer Node SID Flags")
    b = data[0]
    return BGPPeerNodeFlags(
        b_flag=b & 0x80 == 0x80,
        s_flag=b & 0x40 == 0x40,
        p_flag=b & 0x20 == 0x20,
    )


def unmarshal_bgp_peer_node_sid_tlv(data: bytes) -> BGPPeerNodeSID:
    """Decode a BGP Peer Node SID TLV value.

    Layout: flags, weight, one reserved byte, peer ASN (4), peer ID (4).
    """
    if len(data) < 11:
        raise ValueError("not enough bytes to unmarshal SRv6 BGP Peer Node SID TLV")
    return BGPPeerNodeSID(
        flags=unmarshal_bgp_peer_node_flags(data[0:1]),
        weight=data[1],
        peer_asn=int.from_bytes(data[3:7], "big"),
        peer_id=bytes(data[7:11]),
    )


def unmarshal_capability_tlv(data: bytes) -> CapabilityTLV:
    """Decode an SRv6 Capabilities TLV value."""
    if len(data) < 4:
        raise ValueError("not enough bytes to decode SRv6 Capability TLV")
    return CapabilityTLV(o_flag=data[0] & 0x40 == 0x40)


def unmarshal_endpoint_behavior_tlv(data: bytes) -> EndpointBehavior:
    """Decode an SRv6 Endpoint Behavior TLV value."""
    if len(data) < 4:
        raise ValueError("not enough bytes to decode SRv6 Endpoint Behavior TLV")
    return EndpointBehavior(
        endpoint_behavior=int.from_bytes(data[0:2], "big"),
        flag=data[2],
        algorithm=data[3],
    )