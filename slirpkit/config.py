"""Configuration of a virtual network instance and related enumerations."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass, field
from typing import Optional, Tuple

CONFIG_VERSION_MIN = 1
CONFIG_VERSION_MAX = 6

LOOPBACK_ADDR = ipaddress.IPv4Address("127.0.0.1")
LOOPBACK_MASK = ipaddress.IPv4Address("255.0.0.0")


class PollFlag(enum.IntFlag):
    """Events a socket may be polled for or report."""

    IN = 1 << 0
    OUT = 1 << 1
    PRI = 1 << 2
    ERR = 1 << 3
    HUP = 1 << 4


class TimerId(enum.IntEnum):
    """Timers the stack asks the application to create."""

    RA = 0


TIMER_COUNT = len(TimerId)


class HostFwdFlag(enum.IntFlag):
    """Options for a host-to-guest port forward."""

    UDP = 1
    V6ONLY = 2


class ConfigError(ValueError):
    """Raised when a configuration value is invalid."""


_V4_FIELDS = ("vnetwork", "vnetmask", "vhost", "vdhcp_start", "vnameserver")
_V6_FIELDS = ("vprefix_addr6", "vhost6", "vnameserver6")

_V4_ZERO = ipaddress.IPv4Address(0)
_V6_ZERO = ipaddress.IPv6Address(0)


def _to_v4(name: str, value: object) -> ipaddress.IPv4Address:
    if isinstance(value, ipaddress.IPv4Address):
        return value
    if isinstance(value, (str, int, bytes)) and not isinstance(value, bool):
        try:
            return ipaddress.IPv4Address(value)
        except ValueError as exc:
            raise ConfigError(f"{name}: invalid IPv4 address {value!r}") from exc
    raise ConfigError(f"{name}: expected an IPv4 address, got {value!r}")


def _to_v6(name: str, value: object) -> ipaddress.IPv6Address:
    if isinstance(value, ipaddress.IPv6Address):
        return value
    if isinstance(value, (str, int, bytes)) and not isinstance(value, bool):
        try:
            return ipaddress.IPv6Address(value)
        except ValueError as exc:
            raise ConfigError(f"{name}: invalid IPv6 address {value!r}") from exc
    raise ConfigError(f"{name}: expected an IPv6 address, got {value!r}")


@dataclass
class SlirpConfig:
    """Settings for one virtual network instance.

    Sizes of 0 for ``if_mtu`` and ``if_mru`` select the stack's defaults.
    Outbound addresses are ``(host, port)`` pairs or None.
    """

    version: int = CONFIG_VERSION_MAX
    # Introduced in version 1
    restricted: int = 0
    in_enabled: bool = False
    vnetwork: ipaddress.IPv4Address = _V4_ZERO
    vnetmask: ipaddress.IPv4Address = _V4_ZERO
    vhost: ipaddress.IPv4Address = _V4_ZERO
    in6_enabled: bool = False
    vprefix_addr6: ipaddress.IPv6Address = _V6_ZERO
    vprefix_len: int = 0
    vhost6: ipaddress.IPv6Address = _V6_ZERO
    vhostname: Optional[str] = None
    tftp_server_name: Optional[str] = None
    tftp_path: Optional[str] = None
    bootfile: Optional[str] = None
    vdhcp_start: ipaddress.IPv4Address = _V4_ZERO
    vnameserver: ipaddress.IPv4Address = _V4_ZERO
    vnameserver6: ipaddress.IPv6Address = _V6_ZERO
    vdnssearch: Tuple[str, ...] = ()
    vdomainname: Optional[str] = None
    if_mtu: int = 0
    if_mru: int = 0
    disable_host_loopback: bool = False
    enable_emu: bool = False
    # Introduced in version 2
    outbound_addr: Optional[Tuple[ipaddress.IPv4Address, int]] = None
    outbound_addr6: Optional[Tuple[ipaddress.IPv6Address, int]] = None
    # Introduced in version 3
    disable_dns: bool = False
    # Introduced in version 4
    disable_dhcp: bool = False
    # Introduced in version 5
    mfr_id: int = 0
    oob_eth_addr: bytes = field(default=bytes(6))

    def __post_init__(self) -> None:
        for name in _V4_FIELDS:
            setattr(self, name, _to_v4(name, getattr(self, name)))
        for name in _V6_FIELDS:
            setattr(self, name, _to_v6(name, getattr(self, name)))
        if isinstance(self.vdnssearch, str):
            self.vdnssearch = (self.vdnssearch,)
        else:
            self.vdnssearch = tuple(self.vdnssearch)
        try:
            self.oob_eth_addr = bytes(self.oob_eth_addr)
        except (TypeError, ValueError) as exc:
            raise ConfigError("oob_eth_addr: expected a sequence of bytes") from exc
        if self.outbound_addr is not None:
            host, port = self._split_outbound("outbound_addr", self.outbound_addr)
            self.outbound_addr = (_to_v4("outbound_addr", host), port)
        if self.outbound_addr6 is not None:
            host, port = self._split_outbound("outbound_addr6", self.outbound_addr6)
            self.outbound_addr6 = (_to_v6("outbound_addr6", host), port)

    @staticmethod
    def _split_outbound(name: str, value: object) -> Tuple[object, int]:
        try:
            host, port = value  # type: ignore[misc]
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{name}: expected a (host, port) pair") from exc
        return host, port

    def validate(self) -> "SlirpConfig":
        """Check every value is in range; return self or raise ConfigError."""
        if not CONFIG_VERSION_MIN <= self.version <= CONFIG_VERSION_MAX:
            raise ConfigError(
                f"version {self.version} outside "
                f"{CONFIG_VERSION_MIN}..{CONFIG_VERSION_MAX}"
            )
        if not 0 <= self.vprefix_len <= 128:
            raise ConfigError(f"vprefix_len {self.vprefix_len} outside 0..128")
        for name in ("if_mtu", "if_mru"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if not 0 <= self.mfr_id <= 0xFFFFFFFF:
            raise ConfigError(f"mfr_id {self.mfr_id} does not fit in 32 bits")
        if len(self.oob_eth_addr) != 6:
            raise ConfigError("oob_eth_addr must be exactly 6 bytes")
        for name in ("outbound_addr", "outbound_addr6"):
            value = getattr(self, name)
            if value is not None and not 0 <= value[1] <= 0xFFFF:
                raise ConfigError(f"{name}: port {value[1]} outside 0..65535")
        for name in ("vhostname", "tftp_server_name", "tftp_path", "bootfile",
                     "vdomainname"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name} must be a string or None")
        if not all(isinstance(entry, str) for entry in self.vdnssearch):
            raise ConfigError("vdnssearch entries must be strings")
        return self