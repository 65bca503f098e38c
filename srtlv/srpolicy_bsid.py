"""SR Policy Binding SID sub-TLV."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Union

from srtlv.srv6_tlvs import EndpointBehavior


class BSIDType(IntEnum):
    """Kind of value a Binding SID sub-TLV carries."""

    NOBSID = 1
    LABELBSID = 2
    SRV6BSID = 3


def _json_uint(obj: Mapping[str, Any], key: str, bits: int) -> int:
    value = obj.get(key, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an unsigned integer, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {key!r} value {value} does not fit in {bits} bits")
    return value


def _json_bytes(obj: Mapping[str, Any], key: str) -> bytes:
    raw = obj.get(key)
    if raw is None:
        return b""
    if not isinstance(raw, str):
        raise ValueError(f"field {key!r} must be a base64 string, got {raw!r}")
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 value {raw!r}") from exc


@dataclass
class NoBSID:
    """Binding SID sub-TLV that carries no SID."""

    flags: int = 0

    @property
    def type(self) -> BSIDType:
        return BSIDType.NOBSID

    def _raw_bsid(self) -> bytes:
        return b""

    def to_json(self) -> dict[str, Any]:
        """JSON object, omitting zero values."""
        return {"flags": self.flags} if self.flags else {}


@dataclass
class LabelBSID:
    """Binding SID sub-TLV that carries an MPLS label."""

    flags: int = 0
    bsid: int = 0

    @property
    def type(self) -> BSIDType:
        return BSIDType.LABELBSID

    def _raw_bsid(self) -> bytes:
        return self.bsid.to_bytes(4, "big")

    def to_json(self) -> dict[str, Any]:
        """JSON object, omitting zero values."""
        result: dict[str, Any] = {}
        if self.flags:
            result["flags"] = self.flags
        if self.bsid:
            result["label_bsid"] = self.bsid
        return result


@dataclass
class SRv6BSID:
    """Binding SID sub-TLV that carries an SRv6 SID."""

    flags: int = 0
    bsid: bytes = b""
    endpoint_behavior: EndpointBehavior | None = None

    @property
    def type(self) -> BSIDType:
        return BSIDType.SRV6BSID

    def _raw_bsid(self) -> bytes:
        return self.bsid

    def to_json(self) -> dict[str, Any]:
        """JSON object, omitting zero values; the SID is base64 encoded."""
        result: dict[str, Any] = {}
        if self.flags:
            result["flags"] = self.flags
        if self.bsid:
            result["srv6_bsid"] = base64.b64encode(self.bsid).decode("ascii")
        return result


BSID = Union[NoBSID, LabelBSID, SRv6BSID]


@dataclass
class BindingSID:
    """A Binding SID together with its type."""

    type: int
    bsid: BSID | None = None

    def to_json(self) -> dict[str, Any]:
        """JSON object with ``bsid_type`` and the SID object built for that type."""
        try:
            bsid_type = BSIDType(self.type)
        except ValueError:
            raise ValueError(f"unknown type of bsid {self.type}") from None
        if self.bsid is None:
            raise ValueError("binding sid carries no bsid object")
        flags = self.bsid.flags
        raw = self.bsid._raw_bsid()
        if bsid_type is BSIDType.NOBSID:
            sid: BSID = NoBSID(flags=flags)
        elif bsid_type is BSIDType.LABELBSID:
            if len(raw) < 4:
                raise ValueError("label binding sid requires 4 bytes of value")
            sid = LabelBSID(flags=flags, bsid=int.from_bytes(raw[:4], "big"))
        else:
            sid = SRv6BSID(flags=flags, bsid=raw)
        return {"bsid_type": int(bsid_type), "bsid": sid.to_json()}


def binding_sid_from_json(obj: Mapping[str, Any]) -> BindingSID:
    """Build a Binding SID from its decoded JSON object; ``bsid_type`` is mandatory."""
    if not isinstance(obj, Mapping):
        raise ValueError(f"binding sid must be an object, got {obj!r}")
    if "bsid_type" not in obj:
        raise ValueError("binding sid is missing mandatory bsid_type field")
    raw_type = obj["bsid_type"]
    if isinstance(raw_type, bool) or not isinstance(raw_type, int):
        raise ValueError(f"field 'bsid_type' must be an integer, got {raw_type!r}")
    try:
        bsid_type = BSIDType(raw_type)
    except ValueError:
        raise ValueError(f"unknown type of bsid {raw_type}") from None
    body = obj.get("bsid")
    if body is None:
        body = {}
    if not isinstance(body, Mapping):
        raise ValueError(f"field 'bsid' must be an object, got {body!r}")
    flags = _json_uint(body, "flags", 8)
    if bsid_type is BSIDType.NOBSID:
        sid: BSID = NoBSID(flags=flags)
    elif bsid_type is BSIDType.LABELBSID:
        sid = LabelBSID(flags=flags, bsid=_json_uint(body, "label_bsid", 32))
    else:
        sid = SRv6BSID(flags=flags, bsid=_json_bytes(body, "srv6_bsid"))
    return BindingSID(type=bsid_type, bsid=sid)


def unmarshal_bsid_stlv(data: bytes) -> BSID:
    """Decode a Binding SID sub-TLV value; its length selects the kind."""
    if len(data) == 2:
        return NoBSID(flags=data[0])
    if len(data) == 6:
        return LabelBSID(flags=data[0], bsid=int.from_bytes(data[2:6], "big") >> 12)
    if len(data) == 18:
        return SRv6BSID(flags=data[0], bsid=bytes(data[2:18]))
    raise ValueError("invalid length of binding sid stlv")