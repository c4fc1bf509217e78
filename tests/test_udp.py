import pytest

from slirpkit import udp


def test_pack_wire_bytes():
    header = udp.UDPHeader(sport=53, dport=1234, ulen=8, sum=0)
    assert header.pack() == b"\x00\x35\x04\xd2\x00\x08\x00\x00"


def test_round_trip():
    header = udp.UDPHeader(sport=67, dport=68, ulen=300, sum=0xFFFF)
    assert udp.UDPHeader.unpack(header.pack()) == header


def test_unpack_ignores_payload():
    header = udp.UDPHeader(sport=69, dport=4000, ulen=12)
    assert udp.UDPHeader.unpack(header.pack() + b"data") == header


def test_unpack_short_data():
    with pytest.raises(ValueError):
        udp.UDPHeader.unpack(b"\x00\x35\x04")


@pytest.mark.parametrize("kwargs", [{"sport": 65536}, {"dport": -1}, {"ulen": 70000}])
def test_out_of_range(kwargs):
    with pytest.raises(ValueError):
        udp.UDPHeader(**kwargs)


def test_header_size_matches_pack():
    assert len(udp.UDPHeader().pack()) == udp.UDPHeader.FORMAT.size