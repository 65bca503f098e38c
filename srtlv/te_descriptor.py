"""TE Policy Descriptor: the TLVs describing an advertised TE Policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from srtlv.te_tlvs import (
    LSP_ID_TYPE,
    POLICY_CANDIDATE_PATH_DESCRIPTOR_TYPE,
    TUNNEL_HEAD_END_ADDR_TYPE,
    TUNNEL_ID_TYPE,
    TUNNEL_TAIL_END_ADDR_TYPE,
    PolicyCandidatePathDescriptor,
    unmarshal_policy_candidate_path_descriptor,
)

log = logging.getLogger(__name__)


@dataclass
class TLV:
    """A raw type-length-value element."""

    type: int
    length: int
    value: bytes


@dataclass
class PolicyDescriptor:
    """TE Policy Descriptor TLVs keyed by type."""

    tlvs: dict[int, TLV] = field(default_factory=dict)

    def exists(self, tlv_type: int) -> bool:
        """Whether a TLV of the given type is present."""
        return tlv_type in self.tlvs

    def all_tlv_ids(self) -> list[int]:
        """Types of all TLVs present."""
        return list(self.tlvs)

    def _uint16(self, tlv_type: int) -> int:
        tlv = self.tlvs.get(tlv_type)
        if tlv is None:
            return 0
        if tlv.length != 2:
            raise ValueError(f"invalid tlv {tlv.type} length {tlv.length}")
        return int.from_bytes(tlv.value, "big")

    def _address(self, tlv_type: int) -> bytes | None:
        tlv = self.tlvs.get(tlv_type)
        if tlv is None:
            return None
        if tlv.length not in (4, 16):
            raise ValueError(f"invalid tlv {tlv.type} length {tlv.length}")
        return tlv.value

    def tunnel_id(self) -> int:
        """Tunnel ID, or 0 when absent."""
        return self._uint16(TUNNEL_ID_TYPE)

    def lsp_id(self) -> int:
        """LSP ID, or 0 when absent."""
        return self._uint16(LSP_ID_TYPE)

    def tunnel_head_end_addr(self) -> bytes | None:
        """Tunnel head-end address (IPv4 or IPv6 bytes), or None when absent."""
        return self._address(TUNNEL_HEAD_END_ADDR_TYPE)

    def tunnel_tail_end_addr(self) -> bytes | None:
        """Tunnel tail-end address (IPv4 or IPv6 bytes), or None when absent."""
        return self._address(TUNNEL_TAIL_END_ADDR_TYPE)

    def policy_candidate_path_descriptor(self) -> PolicyCandidatePathDescriptor | None:
        """Decoded Policy Candidate Path Descriptor, or None when absent."""
        tlv = self.tlvs.get(POLICY_CANDIDATE_PATH_DESCRIPTOR_TYPE)
        if tlv is None:
            return None
        return unmarshal_policy_candidate_path_descriptor(tlv.value)


def unmarshal_policy_descriptor(data: bytes) -> PolicyDescriptor:
    """Decode a sequence of TE Policy Descriptor TLVs.

    A duplicate TLV type is logged and skipped; the first one is kept.
    """
    tlvs: dict[int, TLV] = {}
    pos = 0
    while pos < len(data):
        if pos + 4 >= len(data):
            raise ValueError("not enough bytes to process TE Policy Descriptor")
        tlv_type = int.from_bytes(data[pos : pos + 2], "big")
        length = int.from_bytes(data[pos + 2 : pos + 4], "big")
        pos += 4
        end = pos + length
        if end > len(data):
            raise ValueError("not enough bytes to process TE Policy Descriptor")
        if tlv_type in tlvs:
            log.warning(
                "Found duplicate TLV of type %d in the list of TE Policy Descriptor's TLVs",
                tlv_type,
            )
        else:
            tlvs[tlv_type] = TLV(type=tlv_type, length=length, value=bytes(data[pos:end]))
        pos = end
    return PolicyDescriptor(tlvs=tlvs)