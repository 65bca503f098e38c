import pytest

from srtlv.te_descriptor import TLV, PolicyDescriptor, unmarshal_policy_descriptor
from srtlv.te_tlvs import (
    LSP_ID_TYPE,
    POLICY_CANDIDATE_PATH_DESCRIPTOR_TYPE,
    TUNNEL_HEAD_END_ADDR_TYPE,
    TUNNEL_ID_TYPE,
    TUNNEL_TAIL_END_ADDR_TYPE,
    ProtocolOriginType,
)


def _tlv(tlv_type, value):
    return tlv_type.to_bytes(2, "big") + len(value).to_bytes(2, "big") + value


HEAD = bytes([10, 0, 0, 1])
TAIL = bytes(range(16))


def _descriptor():
    data = (
        _tlv(TUNNEL_ID_TYPE, (100).to_bytes(2, "big"))
        + _tlv(LSP_ID_TYPE, (200).to_bytes(2, "big"))
        + _tlv(TUNNEL_HEAD_END_ADDR_TYPE, HEAD)
        + _tlv(TUNNEL_TAIL_END_ADDR_TYPE, TAIL)
    )
    return unmarshal_policy_descriptor(data)


def test_getters():
    pd = _descriptor()
    assert pd.tunnel_id() == 100
    assert pd.lsp_id() == 200
    assert pd.tunnel_head_end_addr() == HEAD
    assert pd.tunnel_tail_end_addr() == TAIL


def test_exists_and_ids():
    pd = _descriptor()
    assert pd.exists(TUNNEL_ID_TYPE)
    assert not pd.exists(POLICY_CANDIDATE_PATH_DESCRIPTOR_TYPE)
    assert sorted(pd.all_tlv_ids()) == sorted(
        [TUNNEL_ID_TYPE, LSP_ID_TYPE, TUNNEL_HEAD_END_ADDR_TYPE, TUNNEL_TAIL_END_ADDR_TYPE]
    )


def test_absent_values():
    pd = PolicyDescriptor()
    assert pd.tunnel_id() == 0
    assert pd.lsp_id() == 0
    assert pd.tunnel_head_end_addr() is None
    assert pd.tunnel_tail_end_addr() is None
    assert pd.policy_candidate_path_descriptor() is None


def test_invalid_lengths():
    pd = PolicyDescriptor(
        tlvs={
            TUNNEL_ID_TYPE: TLV(TUNNEL_ID_TYPE, 3, bytes(3)),
            TUNNEL_HEAD_END_ADDR_TYPE: TLV(TUNNEL_HEAD_END_ADDR_TYPE, 5, bytes(5)),
        }
    )
    with pytest.raises(ValueError):
        pd.tunnel_id()
    with pytest.raises(ValueError):
        pd.tunnel_head_end_addr()


def test_candidate_path_descriptor():
    value = (
        bytes([3, 0, 0])
        + HEAD
        + (99).to_bytes(4, "big")
        + (65000).to_bytes(4, "big")
        + HEAD
        + (1).to_bytes(4, "big")
        + bytes(1)
    )
    pd = unmarshal_policy_descriptor(_tlv(POLICY_CANDIDATE_PATH_DESCRIPTOR_TYPE, value))
    pc = pd.policy_candidate_path_descriptor()
    assert pc.protocol_origin is ProtocolOriginType.LOCAL
    assert pc.endpoint == HEAD
    assert pc.color == 99
    assert pc.originator_asn == 65000


def test_raw_tlv_kept():
    pd = unmarshal_policy_descriptor(_tlv(999, b"\x01\x02"))
    assert pd.tlvs[999] == TLV(type=999, length=2, value=b"\x01\x02")


def test_duplicate_keeps_first():
    data = _tlv(TUNNEL_ID_TYPE, (1).to_bytes(2, "big")) + _tlv(
        TUNNEL_ID_TYPE, (2).to_bytes(2, "big")
    )
    pd = unmarshal_policy_descriptor(data)
    assert pd.tunnel_id() == 1
    assert pd.all_tlv_ids() == [TUNNEL_ID_TYPE]


def test_truncated_value():
    data = _tlv(TUNNEL_ID_TYPE, bytes(2))[:-1]
    with pytest.raises(ValueError):
        unmarshal_policy_descriptor(data)


def test_header_only_is_rejected():
    with pytest.raises(ValueError):
        unmarshal_policy_descriptor(_tlv(TUNNEL_ID_TYPE, b""))


def test_empty_input():
    assert unmarshal_policy_descriptor(b"").tlvs == {}