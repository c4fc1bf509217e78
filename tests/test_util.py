import logging
import socket
from contextlib import closing

import pytest

from slirpkit import util


@pytest.mark.parametrize("d", [1, 2, 8, 13])
@pytest.mark.parametrize("k", [0, 1, 5, 100])
def test_div_round_up_exact_and_above(d, k):
    assert util.div_round_up(d * k, d) == k
    if d > 1:
        assert util.div_round_up(d * k + 1, d) == k + 1


def test_pstrcpy_truncates_to_buffer():
    text = "hello world"
    result = util.pstrcpy(4, text)
    assert len(result) == 3
    assert text.startswith(result)


def test_pstrcpy_fits():
    assert util.pstrcpy(100, "abc") == "abc"


@pytest.mark.parametrize("size", [0, -3])
def test_pstrcpy_empty_buffer(size):
    assert util.pstrcpy(size, "abc") == ""


def test_fmt_formats():
    assert util.fmt(64, "%d-%s", 7, "x") == "7-x"


def test_fmt_truncation_logs(caplog):
    with caplog.at_level(logging.CRITICAL, logger="slirpkit"):
        result = util.fmt(4, "%s", "abcdef")
    assert len(result) == 3
    assert "abcdef".startswith(result)
    assert any("truncation" in r.getMessage() for r in caplog.records)


def test_fmt_no_truncation_no_log(caplog):
    with caplog.at_level(logging.CRITICAL, logger="slirpkit"):
        util.fmt(64, "%s", "abc")
    assert caplog.records == []


def test_fmt0_includes_terminator():
    result = util.fmt0(64, "%s", "abc")
    assert result.endswith("\0")
    assert len(result) == len("abc") + 1
    assert result[:-1] == "abc"


def test_fmt0_truncated_length_is_size(caplog):
    with caplog.at_level(logging.CRITICAL, logger="slirpkit"):
        result = util.fmt0(5, "%s", "abcdefgh")
    assert len(result) == 5
    assert result.endswith("\0")
    assert "abcdefgh".startswith(result[:-1])
    assert any("truncation" in r.getMessage() for r in caplog.records)


def test_fmt0_zero_size():
    assert util.fmt0(0, "%s", "abc") == ""


def test_fmt_negative_size_raises():
    with pytest.raises(ValueError):
        util.fmt(-1, "%s", "abc")
    with pytest.raises(ValueError):
        util.fmt0(-1, "%s", "abc")


def test_ether_ntoa_pinned():
    assert util.ether_ntoa(bytes.fromhex("020000000001")) == "02:00:00:00:00:01"


def test_ether_ntoa_round_trip_and_length():
    addr = bytes([0x52, 0x56, 0x0A, 0xFF, 0x00, 0x10])
    text = util.ether_ntoa(addr)
    assert len(text) == util.ETH_ADDRSTRLEN - 1
    assert bytes.fromhex(text.replace(":", "")) == addr
    assert text == text.lower()


@pytest.mark.parametrize("addr", [b"", b"\x01\x02\x03", bytes(7)])
def test_ether_ntoa_wrong_length(addr):
    with pytest.raises(ValueError):
        util.ether_ntoa(addr)


def test_ether_type_values():
    assert util.EtherType.IPV6 == 0x86DD
    assert util.EtherType(0x0800) is util.EtherType.IP


def test_have_valid_socket_descriptors():
    assert util.have_valid_socket(-1) is False
    assert util.have_valid_socket(0) is True


def test_have_valid_socket_objects():
    sock = util.create_socket(socket.AF_INET, socket.SOCK_DGRAM, 0)
    assert util.have_valid_socket(sock) is True
    sock.close()
    assert util.have_valid_socket(sock) is False


def test_create_socket_not_inheritable():
    with closing(util.create_socket(socket.AF_INET, socket.SOCK_DGRAM, 0)) as sock:
        assert sock.family == socket.AF_INET
        assert sock.type == socket.SOCK_DGRAM
        assert sock.get_inheritable() is False


def test_set_nonblock():
    with closing(util.create_socket(socket.AF_INET, socket.SOCK_DGRAM, 0)) as sock:
        assert sock.getblocking() is True
        util.set_nonblock(sock)
        assert sock.getblocking() is False


def test_set_nodelay():
    with closing(util.create_socket(socket.AF_INET, socket.SOCK_STREAM, 0)) as sock:
        util.set_nodelay(sock)
        assert sock.getsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY) > 0


def test_set_fast_reuse():
    with closing(util.create_socket(socket.AF_INET, socket.SOCK_STREAM, 0)) as sock:
        util.set_fast_reuse(sock)
        assert sock.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR) > 0


def test_set_v6only_on_ipv4_socket_fails():
    with closing(util.create_socket(socket.AF_INET, socket.SOCK_DGRAM, 0)) as sock:
        with pytest.raises(OSError):
            util.set_v6only(sock, True)