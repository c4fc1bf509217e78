"""Small helpers: bounded string formatting, MAC printing and socket setup."""

from __future__ import annotations

import enum
import socket
import sys
from typing import Union

from .debug import logger

SCALE_MS = 1_000_000

ETH_ALEN = 6
ETH_ADDRSTRLEN = 18  # "xx:xx:xx:xx:xx:xx" plus a terminator
ETH_HLEN = 14
ETH_MINLEN = 60


class EtherType(enum.IntEnum):
    """Ethernet frame payload types understood by the stack."""

    IP = 0x0800
    ARP = 0x0806
    IPV6 = 0x86DD
    VLAN = 0x8100
    DVLAN = 0x88A8
    NCSI = 0x88F8
    UNKNOWN = 0xFFFF


def div_round_up(n: int, d: int) -> int:
    """Divide n by d, rounding up."""
    return (n + d - 1) // d


def pstrcpy(buf_size: int, text: str) -> str:
    """Return what a terminated buffer of buf_size characters can hold of text."""
    if buf_size <= 0:
        return ""
    return text[: buf_size - 1]


def _format(size: int, template: str, args: tuple) -> tuple[str, bool]:
    full = template % args if args else template
    if size <= 0:
        return "", len(full) >= size
    truncated = len(full) >= size
    return full[: size - 1], truncated


def fmt(size: int, template: str, *args: object) -> str:
    """Format into a buffer of ``size`` characters; warn if the result is cut."""
    if size < 0:
        raise ValueError("size must not be negative")
    text, truncated = _format(size, template, args)
    if truncated:
        logger.critical("fmt() truncation")
    return text


def fmt0(size: int, template: str, *args: object) -> str:
    """Like fmt(), but the result always carries a trailing NUL unless size is 0.

    The length of the returned string is the number of characters written,
    terminator included.
    """
    if size < 0:
        raise ValueError("size must not be negative")
    text, truncated = _format(size, template, args)
    if truncated:
        logger.critical("fmt0() truncation")
    if size == 0:
        return ""
    return text + "\0"


def ether_ntoa(addr: bytes) -> str:
    """Render a 6-byte MAC address as colon-separated lower-case hex."""
    data = bytes(addr)
    if len(data) != ETH_ALEN:
        raise ValueError(f"a MAC address has {ETH_ALEN} bytes, got {len(data)}")
    return ":".join(f"{octet:02x}" for octet in data)


def have_valid_socket(fd: Union[int, socket.socket]) -> bool:
    """Return True if fd (a descriptor or a socket) refers to an open socket."""
    if isinstance(fd, socket.socket):
        fd = fd.fileno()
    return fd >= 0


def create_socket(family: int, type: int, proto: int = 0) -> socket.socket:
    """Open a socket that is not inherited by child processes."""
    sock = socket.socket(family, type, proto)
    sock.set_inheritable(False)
    return sock


def set_nonblock(sock: socket.socket) -> None:
    """Put the socket in non-blocking mode."""
    sock.setblocking(False)


def set_v6only(sock: socket.socket, value: bool) -> None:
    """Restrict an IPv6 socket to IPv6 traffic, or allow mapped IPv4."""
    sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, int(bool(value)))


def set_nodelay(sock: socket.socket) -> None:
    """Disable Nagle's algorithm on a TCP socket."""
    sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)


def set_fast_reuse(sock: socket.socket) -> None:
    """Allow quick rebinding of a local address still in TIME_WAIT."""
    if sys.platform == "win32":
        # Fast reuse is the default there and SO_REUSEADDR means something else.
        return
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)