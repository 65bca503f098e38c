import pytest

from srtlv.srv6_endx import (
    EndXSIDFlags,
    EndXSIDTLV,
    endx_sid_tlv_from_json,
    unmarshal_endx_sid_flags,
    unmarshal_endx_sid_tlv,
)
from srtlv.srv6_subtlv import SIDStructure

CASE_1 = bytes([
    0x00, 0x06, 0x00, 0x80, 0x00, 0x00, 0x20, 0x01, 0x04, 0x20, 0xFF, 0xFF, 0x10,
    0x77, 0x00, 0x40, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x04, 0xE4, 0x00, 0x04,
    0x28, 0x18, 0x10, 0x00,
])

CASE_1_EXPECT = EndXSIDTLV(
    endpoint_behavior=6,
    flags=EndXSIDFlags(b_flag=False, s_flag=False, p_flag=False),
    algorithm=128,
    sid="2001:420:ffff:1077:40::",
    sub_tlvs=[
        SIDStructure(
            type=1252, length=8, lb_length=40, ln_length=24, fun_length=16, arg_length=0
        )
    ],
)


def test_case_1():
    assert unmarshal_endx_sid_tlv(CASE_1) == CASE_1_EXPECT


def test_without_subtlvs():
    got = unmarshal_endx_sid_tlv(CASE_1[:22])
    assert got.sub_tlvs is None
    assert got.sid == "2001:420:ffff:1077:40::"


def test_too_short():
    with pytest.raises(ValueError):
        unmarshal_endx_sid_tlv(CASE_1[:21])


def test_broken_subtlv():
    with pytest.raises(ValueError):
        unmarshal_endx_sid_tlv(CASE_1[:25])


def test_flags_all_set():
    assert unmarshal_endx_sid_flags(b"\xe0") == EndXSIDFlags(True, True, True)


def test_flags_empty():
    with pytest.raises(ValueError):
        unmarshal_endx_sid_flags(b"")


def test_from_json_matches_wire():
    obj = {
        "endpoint_behavior": 6,
        "flags": {"b_flag": False, "s_flag": False, "p_flag": False},
        "algorithm": 128,
        "weight": 0,
        "sid": "2001:420:ffff:1077:40::",
        "sub_tlvs": [
            {
                "type": 1252,
                "length": 8,
                "locator_block_length": 40,
                "locator_node_length": 24,
                "function_length": 16,
                "argument_length": 0,
            }
        ],
    }
    assert endx_sid_tlv_from_json(obj) == CASE_1_EXPECT


def test_from_json_bad_sub_tlv():
    with pytest.raises(ValueError):
        endx_sid_tlv_from_json({"sub_tlvs": [{"length": 8}]})


def test_from_json_bad_algorithm():
    with pytest.raises(ValueError):
        endx_sid_tlv_from_json({"algorithm": "x"})