"""SR Policy tunnel encapsulation attribute with its sub-TLVs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from srtlv.srpolicy_bsid import BindingSID, unmarshal_bsid_stlv
from srtlv.srpolicy_segment import (
    WEIGHT_STLV,
    SegmentList,
    unmarshal_segment_list_stlv,
)
from srtlv.srpolicy_subtlv import ENLP, Preference, unmarshal_preference_stlv

log = logging.getLogger(__name__)

SR_POLICY_TUNNEL_TYPE = 15
SEGMENT_LIST_STLV = 128
BSID_STLV = 13
SRV6_STLV = 255
PREFERENCE_STLV = 12
ENLP_STLV = 14
PRIORITY_STLV = 15
PATH_NAME_STLV = 129
POLICY_NAME_STLV = 254

__all__ = [
    "SRPolicyTLV",
    "unmarshal_sr_policy_tlv",
    "SR_POLICY_TUNNEL_TYPE",
    "WEIGHT_STLV",
]


@dataclass
class SRPolicyTLV:
    """Sub-TLVs describing an SR Policy candidate path."""

    preference: Preference | None = None
    binding_sid: BindingSID | None = None
    name: str = ""
    path_name: str = ""
    priority: int = 0
    enlp: ENLP | None = None
    segment_list: list[SegmentList] = field(default_factory=list)


def _require(data: bytes, pos: int, count: int, what: str) -> None:
    if pos + count > len(data):
        raise ValueError(f"not enough bytes to decode {what}")


def unmarshal_sr_policy_tlv(data: bytes) -> SRPolicyTLV | None:
    """Decode an SR Policy tunnel encapsulation TLV.

    Empty input (as in an MP_UNREACH message) yields None.
    """
    if len(data) == 0:
        return None
    if len(data) < 4:
        raise ValueError(f"invalid data length {len(data)}")
    tunnel_type = int.from_bytes(data[0:2], "big")
    if tunnel_type != SR_POLICY_TUNNEL_TYPE:
        raise ValueError(f"unexpected tunnel type {tunnel_type}")
    encoded = int.from_bytes(data[2:4], "big") + 4
    if encoded != len(data):
        raise ValueError(
            f"encoded in data length: {encoded} does not match with actual data length {len(data)}"
        )
    tlv = SRPolicyTLV()
    pos = 4
    while pos < len(data):
        stype = data[pos]
        pos += 1
        if stype == SEGMENT_LIST_STLV:
            _require(data, pos, 3, "Segment List Sub TLV")
            length = int.from_bytes(data[pos : pos + 2], "big") - 1
            pos += 3  # length and a reserved byte
            if length < 0:
                raise ValueError("invalid length of Segment List Sub TLV")
            _require(data, pos, length, "Segment List Sub TLV")
            tlv.segment_list.append(unmarshal_segment_list_stlv(data[pos : pos + length]))
            pos += length
            continue
        _require(data, pos, 1, f"Sub TLV {stype}")
        length = data[pos]
        pos += 1
        _require(data, pos, length, f"Sub TLV {stype}")
        value = bytes(data[pos : pos + length])
        if stype == BSID_STLV:
            bsid = unmarshal_bsid_stlv(value)
            tlv.binding_sid = BindingSID(type=bsid.type, bsid=bsid)
        elif stype == PREFERENCE_STLV:
            tlv.preference = unmarshal_preference_stlv(value)
        elif stype == ENLP_STLV:
            if tlv.enlp is not None:
                raise ValueError("only 1 instance of ENLP allowed in SR Policy attributes")
            if len(value) < 3:
                raise ValueError("not enough bytes to decode ENLP Sub TLV")
            tlv.enlp = ENLP(flags=value[0], enlp=value[2])
        elif stype == PRIORITY_STLV:
            if len(value) < 1:
                raise ValueError("not enough bytes to decode Priority Sub TLV")
            tlv.priority = value[0]
        elif stype == PATH_NAME_STLV:
            tlv.path_name = value.decode("utf-8", errors="replace")
        else:
            log.warning("SR Policy Sub TLV %d is not supported", stype)
        pos += length
    return tlv