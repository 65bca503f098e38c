import base64

import pytest

from srtlv.srv6_subtlv import (
    SIDStructure,
    UnknownSRv6SubTLV,
    sid_structure_from_json,
    subtlvs_from_json,
    unmarshal_all_subtlvs,
    unmarshal_sid_structure,
    unmarshal_subtlv,
)

SID_STRUCTURE_BYTES = bytes([0x04, 0xE4, 0x00, 0x04, 0x28, 0x18, 0x10, 0x00])


def test_sid_structure_subtlv_decoded():
    got = unmarshal_subtlv(SID_STRUCTURE_BYTES)
    assert got == SIDStructure(
        type=1252, length=8, lb_length=40, ln_length=24, fun_length=16, arg_length=0
    )


def test_sid_structure_value_only():
    got = unmarshal_sid_structure(bytes([40, 24, 16, 0]))
    assert (got.lb_length, got.ln_length, got.fun_length, got.arg_length) == (40, 24, 16, 0)
    assert got.type == 0


def test_sid_structure_too_short():
    with pytest.raises(ValueError):
        unmarshal_sid_structure(b"\x01\x02")


def test_unknown_subtlv_keeps_value():
    data = b"\x00\x01\x00\x02\xab\xcd"
    got = unmarshal_subtlv(data)
    assert isinstance(got, UnknownSRv6SubTLV)
    assert got.type == 1
    assert got.value == b"\xab\xcd"
    assert got.length == len(data)


def test_subtlv_header_too_short():
    with pytest.raises(ValueError):
        unmarshal_subtlv(b"\x04\xe4\x00")


def test_subtlv_truncated_value():
    with pytest.raises(ValueError):
        unmarshal_subtlv(b"\x00\x01\x00\x05\xab")


def test_all_subtlvs_consumes_everything():
    unknown = b"\x00\x07\x00\x03\x01\x02\x03"
    data = SID_STRUCTURE_BYTES + unknown
    got = unmarshal_all_subtlvs(data)
    assert [s.type for s in got] == [1252, 7]
    assert sum(s.length for s in got) == len(data)
    assert got[1].value == b"\x01\x02\x03"


def test_all_subtlvs_empty_is_none():
    assert unmarshal_all_subtlvs(b"") is None


def test_all_subtlvs_propagates_error():
    with pytest.raises(ValueError):
        unmarshal_all_subtlvs(SID_STRUCTURE_BYTES + b"\x00\x01")


def test_sid_structure_from_json():
    obj = {
        "type": 1252,
        "length": 8,
        "locator_block_length": 40,
        "locator_node_length": 24,
        "function_length": 16,
        "argument_length": 0,
    }
    assert sid_structure_from_json(obj) == unmarshal_subtlv(SID_STRUCTURE_BYTES)


def test_sid_structure_from_json_rejects_out_of_range():
    with pytest.raises(ValueError):
        sid_structure_from_json({"locator_block_length": 300})


def test_subtlvs_from_json_mixed():
    value = b"\xab\xcd"
    items = [
        {"type": 1252, "length": 8, "locator_block_length": 40},
        {"type": 9, "length": 6, "value": base64.b64encode(value).decode()},
    ]
    got = subtlvs_from_json(items)
    assert isinstance(got[0], SIDStructure)
    assert got[0].lb_length == 40
    assert got[1] == UnknownSRv6SubTLV(type=9, length=6, value=value)


def test_subtlvs_from_json_missing_type():
    with pytest.raises(ValueError, match="type"):
        subtlvs_from_json([{"length": 4}])


def test_subtlvs_from_json_missing_length():
    with pytest.raises(ValueError, match="length"):
        subtlvs_from_json([{"type": 4}])


def test_subtlvs_from_json_empty_is_none():
    assert subtlvs_from_json([]) is None