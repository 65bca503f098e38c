import ipaddress

import pytest

from srtlv.srpolicy_nlri import NLRI73, unmarshal_nlri73


def test_sr_policy_v4():
    data = bytes([0x60, 0x00, 0x00, 0x00, 0x02, 0x00, 0x00, 0x00, 0x63, 0x0A, 0x00, 0x00, 0x0D])
    assert unmarshal_nlri73(data) == NLRI73(
        length=12,
        distinguisher=2,
        color=99,
        endpoint=ipaddress.IPv4Address("10.0.0.13").packed,
    )


def test_sr_policy_v6():
    data = bytes(
        [
            0xC0, 0x00, 0x00, 0x00, 0x06, 0x00, 0x00, 0x00, 0x06, 0x20, 0x01, 0x04,
            0x20, 0xFF, 0xFF, 0x10, 0x13, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x01,
        ]
    )
    assert unmarshal_nlri73(data) == NLRI73(
        length=24,
        distinguisher=6,
        color=6,
        endpoint=ipaddress.IPv6Address("2001:420:ffff:1013::1").packed,
    )


def test_too_short():
    with pytest.raises(ValueError):
        unmarshal_nlri73(bytes(12))


@pytest.mark.parametrize("length", [14, 20, 26])
def test_invalid_endpoint_length(length):
    with pytest.raises(ValueError):
        unmarshal_nlri73(bytes(length))