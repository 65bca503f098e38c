"""SR Policy NLRI (SAFI 73)."""

from __future__ import annotations

from dataclasses import dataclass

NLRI73_MIN_LEN = 13


@dataclass
class NLRI73:
    """SR Policy NLRI; ``length`` is stored in bytes, not bits."""

    length: int = 0
    distinguisher: int = 0
    color: int = 0
    endpoint: bytes = b""


def unmarshal_nlri73(data: bytes) -> NLRI73:
    """Decode an SR Policy NLRI with an IPv4 or IPv6 endpoint."""
    if len(data) < NLRI73_MIN_LEN:
        raise ValueError("invalid length of byte slice")
    endpoint = bytes(data[9:])
    if len(endpoint) not in (4, 16):
        raise ValueError("invalid length of byte slice")
    return NLRI73(
        length=data[0] // 8,
        distinguisher=int.from_bytes(data[1:5], "big"),
        color=int.from_bytes(data[5:9], "big"),
        endpoint=endpoint,
    )