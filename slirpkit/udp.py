"""UDP header layout and protocol parameters."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

UDP_TTL = 0x60

UDPCTL_CHECKSUM = 1
UDPCTL_MAXID = 2


@dataclass
class UDPHeader:
    """The 8-byte UDP header."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("!HHHH")

    sport: int = 0
    dport: int = 0
    ulen: int = 0
    sum: int = 0

    def __post_init__(self) -> None:
        for name in ("sport", "dport", "ulen", "sum"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"{name} {value} outside 0..65535")

    def pack(self) -> bytes:
        """Serialise the header in network byte order."""
        return self.FORMAT.pack(self.sport, self.dport, self.ulen, self.sum)

    @classmethod
    def unpack(cls, data: bytes) -> "UDPHeader":
        """Parse a header from the start of data."""
        data = bytes(data)
        if len(data) < cls.FORMAT.size:
            raise ValueError(
                f"UDP header needs {cls.FORMAT.size} bytes, got {len(data)}"
            )
        return cls(*cls.FORMAT.unpack_from(data))