"""IPv6 headers and address comparison helpers."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from typing import ClassVar, Union

from .util import ETH_ALEN, div_round_up

IP6VERSION = 6
IP6_HOP_LIMIT = 255

ALLNODES_MULTICAST = ipaddress.IPv6Address("ff02::1")
SOLICITED_NODE_PREFIX = ipaddress.IPv6Address("ff02::1:ff00:0")
LINKLOCAL_ADDR = ipaddress.IPv6Address("fe80::2")
ZERO_ADDR = ipaddress.IPv6Address("::")

Address6 = Union[ipaddress.IPv6Address, str, int, bytes]


def _packed(addr: Address6) -> bytes:
    return ipaddress.IPv6Address(addr).packed


def _check_prefix(prefix_len: int) -> None:
    if not 0 <= prefix_len <= 128:
        raise ValueError(f"prefix length {prefix_len} outside 0..128")


def in6_equal(a: Address6, b: Address6) -> bool:
    """Return True if the two addresses are equal."""
    return _packed(a) == _packed(b)


def in6_equal_net(a: Address6, b: Address6, prefix_len: int) -> bool:
    """Return True if the addresses share their first prefix_len bits."""
    _check_prefix(prefix_len)
    pa, pb = _packed(a), _packed(b)
    whole, rest = divmod(prefix_len, 8)
    if pa[:whole] != pb[:whole]:
        return False
    if rest == 0:
        return True
    shift = 8 - rest
    return pa[whole] >> shift == pb[whole] >> shift


def in6_equal_mach(a: Address6, b: Address6, prefix_len: int) -> bool:
    """Return True if the addresses agree on every bit after prefix_len."""
    _check_prefix(prefix_len)
    pa, pb = _packed(a), _packed(b)
    start = div_round_up(prefix_len, 8)
    if pa[start:] != pb[start:]:
        return False
    whole, rest = divmod(prefix_len, 8)
    if rest == 0:
        return True
    mask = (1 << (8 - rest)) - 1
    return pa[whole] & mask == pb[whole] & mask


def _equal_virtual(addr: Address6, prefix: Address6, prefix_len: int,
                   target: Address6) -> bool:
    return (
        in6_equal_net(addr, prefix, prefix_len)
        and in6_equal_mach(addr, target, prefix_len)
    ) or (
        in6_equal_net(addr, LINKLOCAL_ADDR, 64)
        and in6_equal_mach(addr, target, 64)
    )


def in6_equal_router(addr: Address6, prefix: Address6, prefix_len: int,
                     vhost: Address6) -> bool:
    """Return True if addr is the virtual router, in the prefix or link-local."""
    return _equal_virtual(addr, prefix, prefix_len, vhost)


def in6_equal_dns(addr: Address6, prefix: Address6, prefix_len: int,
                  vnameserver: Address6) -> bool:
    """Return True if addr is the virtual DNS server, in the prefix or link-local."""
    return _equal_virtual(addr, prefix, prefix_len, vnameserver)


def in6_equal_host(addr: Address6, prefix: Address6, prefix_len: int,
                   vhost: Address6, vnameserver: Address6) -> bool:
    """Return True if addr is either the virtual router or DNS server."""
    return in6_equal_router(addr, prefix, prefix_len, vhost) or in6_equal_dns(
        addr, prefix, prefix_len, vnameserver
    )


def in6_solicitednode_multicast(addr: Address6) -> bool:
    """Return True if addr lies in the solicited-node multicast network."""
    return in6_equal_net(addr, SOLICITED_NODE_PREFIX, 104)


def in6_zero(addr: Address6) -> bool:
    """Return True if addr is the unspecified address."""
    return in6_equal(addr, ZERO_ADDR)


def in6_compute_ethaddr(addr: Address6) -> bytes:
    """Derive the emulated host MAC address from its IPv6 address."""
    return b"\x52\x56" + _packed(addr)[16 - (ETH_ALEN - 2):]


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} {value} outside 0..{limit}")


@dataclass
class IP6Header:
    """The fixed 40-byte IPv6 header."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("!IHBB16s16s")

    payload_length: int = 0
    next_header: int = 0
    hop_limit: int = IP6_HOP_LIMIT
    src: ipaddress.IPv6Address = ZERO_ADDR
    dst: ipaddress.IPv6Address = ZERO_ADDR
    traffic_class: int = 0
    flow_label: int = 0
    version: int = IP6VERSION

    def __post_init__(self) -> None:
        self.src = ipaddress.IPv6Address(self.src)
        self.dst = ipaddress.IPv6Address(self.dst)
        _check_range("version", self.version, 0xF)
        _check_range("traffic class", self.traffic_class, 0xFF)
        _check_range("flow label", self.flow_label, 0xFFFFF)
        _check_range("payload length", self.payload_length, 0xFFFF)
        _check_range("next header", self.next_header, 0xFF)
        _check_range("hop limit", self.hop_limit, 0xFF)

    def pack(self) -> bytes:
        """Serialise the header in network byte order."""
        word = (self.version << 28) | (self.traffic_class << 20) | self.flow_label
        return self.FORMAT.pack(
            word,
            self.payload_length,
            self.next_header,
            self.hop_limit,
            self.src.packed,
            self.dst.packed,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "IP6Header":
        """Parse a header from the start of data."""
        data = bytes(data)
        if len(data) < cls.FORMAT.size:
            raise ValueError(
                f"IPv6 header needs {cls.FORMAT.size} bytes, got {len(data)}"
            )
        word, plen, nh, hl, src, dst = cls.FORMAT.unpack_from(data)
        return cls(
            payload_length=plen,
            next_header=nh,
            hop_limit=hl,
            src=ipaddress.IPv6Address(src),
            dst=ipaddress.IPv6Address(dst),
            traffic_class=(word >> 20) & 0xFF,
            flow_label=word & 0xFFFFF,
            version=word >> 28,
        )


@dataclass
class IP6PseudoHeader:
    """The pseudo-header covered by upper-layer checksums."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("!16s16sI3xB")

    src: ipaddress.IPv6Address = ZERO_ADDR
    dst: ipaddress.IPv6Address = ZERO_ADDR
    payload_length: int = 0
    next_header: int = 0

    def __post_init__(self) -> None:
        self.src = ipaddress.IPv6Address(self.src)
        self.dst = ipaddress.IPv6Address(self.dst)
        _check_range("payload length", self.payload_length, 0xFFFFFFFF)
        _check_range("next header", self.next_header, 0xFF)

    def pack(self) -> bytes:
        """Serialise the pseudo-header in network byte order."""
        return self.FORMAT.pack(
            self.src.packed, self.dst.packed, self.payload_length, self.next_header
        )