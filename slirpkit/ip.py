"""IPv4 header layout, option helpers and protocol parameters."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from typing import ClassVar, Union

IPVERSION = 4

IP_DF = 0x4000  # don't fragment flag
IP_MF = 0x2000  # more fragments flag
IP_OFFMASK = 0x1FFF  # mask for fragmenting bits

IP_MAXPACKET = 65535

IPTOS_LOWDELAY = 0x10
IPTOS_THROUGHPUT = 0x08
IPTOS_RELIABILITY = 0x04

IPOPT_CONTROL = 0x00
IPOPT_RESERVED1 = 0x20
IPOPT_DEBMEAS = 0x40
IPOPT_RESERVED2 = 0x60

IPOPT_EOL = 0
IPOPT_NOP = 1

IPOPT_RR = 7
IPOPT_TS = 68
IPOPT_SECURITY = 130
IPOPT_LSRR = 131
IPOPT_SATID = 136
IPOPT_SSRR = 137

IPOPT_OPTVAL = 0
IPOPT_OLEN = 1
IPOPT_OFFSET = 2
IPOPT_MINOFF = 4

IPOPT_TS_TSONLY = 0
IPOPT_TS_TSANDADDR = 1
IPOPT_TS_PRESPEC = 3

IPOPT_SECUR_UNCLASS = 0x0000
IPOPT_SECUR_CONFID = 0xF135
IPOPT_SECUR_EFTO = 0x789A
IPOPT_SECUR_MMMM = 0xBC4D
IPOPT_SECUR_RESTR = 0xAF13
IPOPT_SECUR_SECRET = 0xD788
IPOPT_SECUR_TOPSECRET = 0x6BC5

MAXTTL = 255
IPDEFTTL = 64
IPFRAGTTL = 60
IPTTLDEC = 1

IP_MSS = 576

HEADER_SIZE = 20

AddressLike = Union[ipaddress.IPv4Address, str, int, bytes]


def ipopt_copied(option: int) -> int:
    """Return the 'copied' bit of an option type."""
    return option & 0x80


def ipopt_class(option: int) -> int:
    """Return the class bits of an option type."""
    return option & 0x60


def ipopt_number(option: int) -> int:
    """Return the number bits of an option type."""
    return option & 0x1F


def _check_range(name: str, value: int, limit: int) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} {value} outside 0..{limit}")


@dataclass
class IPHeader:
    """An IPv4 header without options."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("!BBHHHBBH4s4s")

    tos: int = 0
    len: int = 0
    id: int = 0
    off: int = 0
    ttl: int = IPDEFTTL
    p: int = 0
    sum: int = 0
    src: ipaddress.IPv4Address = ipaddress.IPv4Address(0)
    dst: ipaddress.IPv4Address = ipaddress.IPv4Address(0)
    v: int = IPVERSION
    hl: int = HEADER_SIZE // 4

    def __post_init__(self) -> None:
        self.src = ipaddress.IPv4Address(self.src)
        self.dst = ipaddress.IPv4Address(self.dst)
        _check_range("version", self.v, 0xF)
        _check_range("header length", self.hl, 0xF)
        for name in ("tos", "ttl", "p"):
            _check_range(name, getattr(self, name), 0xFF)
        for name in ("len", "id", "off", "sum"):
            _check_range(name, getattr(self, name), 0xFFFF)

    @property
    def header_length(self) -> int:
        """Header length in bytes."""
        return self.hl * 4

    @property
    def dont_fragment(self) -> bool:
        return bool(self.off & IP_DF)

    @property
    def more_fragments(self) -> bool:
        return bool(self.off & IP_MF)

    @property
    def fragment_offset(self) -> int:
        """Fragment offset in 8-byte units."""
        return self.off & IP_OFFMASK

    def pack(self) -> bytes:
        """Serialise the header in network byte order."""
        return self.FORMAT.pack(
            (self.v << 4) | self.hl,
            self.tos,
            self.len,
            self.id,
            self.off,
            self.ttl,
            self.p,
            self.sum,
            self.src.packed,
            self.dst.packed,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "IPHeader":
        """Parse a header from the start of data."""
        data = bytes(data)
        if len(data) < cls.FORMAT.size:
            raise ValueError(
                f"IPv4 header needs {cls.FORMAT.size} bytes, got {len(data)}"
            )
        vhl, tos, length, ident, off, ttl, proto, csum, src, dst = (
            cls.FORMAT.unpack_from(data)
        )
        return cls(
            tos=tos,
            len=length,
            id=ident,
            off=off,
            ttl=ttl,
            p=proto,
            sum=csum,
            src=ipaddress.IPv4Address(src),
            dst=ipaddress.IPv4Address(dst),
            v=vhl >> 4,
            hl=vhl & 0xF,
        )