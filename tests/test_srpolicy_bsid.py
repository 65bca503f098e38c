import base64

import pytest

from srtlv.srpolicy_bsid import (
    BindingSID,
    BSIDType,
    LabelBSID,
    NoBSID,
    SRv6BSID,
    binding_sid_from_json,
    unmarshal_bsid_stlv,
)

SRV6_SID = bytes([0x20, 0x01, 0x04, 0x20, 0xFF, 0xFF, 0x10, 0x13] + [0] * 7 + [0x01])


def test_unmarshal_no_bsid():
    sid = unmarshal_bsid_stlv(bytes([0x40, 0x00]))
    assert sid == NoBSID(flags=0x40)
    assert sid.type is BSIDType.NOBSID


def test_unmarshal_label_bsid_shifts_label():
    wire = bytes([0x00, 0x00]) + (24001 << 12).to_bytes(4, "big")
    sid = unmarshal_bsid_stlv(wire)
    assert sid == LabelBSID(flags=0, bsid=24001)
    assert sid.type is BSIDType.LABELBSID


def test_unmarshal_srv6_bsid():
    sid = unmarshal_bsid_stlv(bytes([0x80, 0x00]) + SRV6_SID)
    assert sid.bsid == SRV6_SID
    assert sid.flags == 0x80
    assert sid.type is BSIDType.SRV6BSID


@pytest.mark.parametrize("length", [0, 1, 3, 5, 7, 17, 19])
def test_unmarshal_invalid_length(length):
    with pytest.raises(ValueError):
        unmarshal_bsid_stlv(bytes(length))


def test_label_to_json_omits_zero_flags():
    assert LabelBSID(flags=0, bsid=24001).to_json() == {"label_bsid": 24001}


def test_no_bsid_to_json_empty_when_zero():
    assert NoBSID().to_json() == {}


def test_binding_sid_to_json_label():
    b = BindingSID(type=BSIDType.LABELBSID, bsid=LabelBSID(flags=0, bsid=24001))
    assert b.to_json() == {"bsid_type": 2, "bsid": {"label_bsid": 24001}}


def test_srv6_to_json_base64_sid():
    j = SRv6BSID(flags=0, bsid=SRV6_SID).to_json()
    assert base64.b64decode(j["srv6_bsid"]) == SRV6_SID


@pytest.mark.parametrize(
    "binding",
    [
        BindingSID(type=BSIDType.NOBSID, bsid=NoBSID(flags=0x40)),
        BindingSID(type=BSIDType.LABELBSID, bsid=LabelBSID(flags=0x80, bsid=24001)),
        BindingSID(type=BSIDType.SRV6BSID, bsid=SRv6BSID(flags=0x40, bsid=SRV6_SID)),
    ],
)
def test_json_round_trip(binding):
    assert binding_sid_from_json(binding.to_json()) == binding


def test_from_json_without_bsid_body():
    assert binding_sid_from_json({"bsid_type": 1}) == BindingSID(type=BSIDType.NOBSID, bsid=NoBSID())


def test_from_json_missing_type():
    with pytest.raises(ValueError):
        binding_sid_from_json({"bsid": {}})


def test_from_json_unknown_type():
    with pytest.raises(ValueError):
        binding_sid_from_json({"bsid_type": 9})


def test_to_json_unknown_type():
    with pytest.raises(ValueError):
        BindingSID(type=9, bsid=NoBSID()).to_json()


def test_to_json_without_bsid_object():
    with pytest.raises(ValueError):
        BindingSID(type=BSIDType.NOBSID).to_json()