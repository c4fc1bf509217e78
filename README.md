# slirpkit

Pieces of a user-mode (slirp-style) network stack, written in plain Python
with no third-party dependencies.

## What is inside

- `slirpkit.version`: `version_string()` returns `"4.8.0"`, and
  `check_version(major, minor, micro)` tells whether this version is at least
  the one given.
- `slirpkit.debug`: the `DebugFlag` bit set (`CALL`, `MISC`, `ERROR`, `TFTP`,
  `VERBOSE_CALL`), with `set_flags`, `get_flags`, `enabled` and `log`.
  `log(flag, message, *args)` sends the message to the `slirpkit` logger at
  debug level when its category is enabled, and returns whether it did.
- `slirpkit.config`: the `SlirpConfig` dataclass describing one virtual network
  (IPv4 and IPv6 addresses, DHCP/TFTP/DNS settings, MTU/MRU, outbound
  addresses, NC-SI manufacturer id and MAC). Address fields accept strings,
  integers or `ipaddress` objects and are converted on creation; `validate()`
  checks ranges and returns the config or raises `ConfigError`. The module also
  has the `PollFlag`, `TimerId` and `HostFwdFlag` enums.
- `slirpkit.util`: `div_round_up`, the bounded formatters `pstrcpy`, `fmt` and
  `fmt0`, `ether_ntoa`, the `EtherType` values, and socket helpers
  `create_socket`, `set_nonblock`, `set_v6only`, `set_nodelay`,
  `set_fast_reuse` and `have_valid_socket`.
- `slirpkit.ip`: the `IPHeader` dataclass (20-byte IPv4 header without
  options) with `pack()` and `unpack()`, the option helpers `ipopt_copied`,
  `ipopt_class` and `ipopt_number`, and IPv4 constants such as `IP_DF`,
  `IP_MF`, `IPDEFTTL` and `IP_MSS`.
- `slirpkit.ip6`: `IP6Header` (`pack()`/`unpack()`), `IP6PseudoHeader`
  (`pack()`), the address predicates `in6_equal`, `in6_equal_net`,
  `in6_equal_mach`, `in6_equal_router`, `in6_equal_dns`, `in6_equal_host`,
  `in6_solicitednode_multicast` and `in6_zero`, and `in6_compute_ethaddr`.
- `slirpkit.udp`: the `UDPHeader` dataclass with `pack()` and `unpack()`.

Header classes check that every field fits its width and raise `ValueError`
otherwise. `unpack()` raises `ValueError` when given too few bytes.

## Install

```
pip install .
pip install ".[test]"   # with pytest, to run the test suite
```

## Examples

```python
from slirpkit.version import version_string, check_version
from slirpkit.util import ether_ntoa, pstrcpy
from slirpkit.ip6 import in6_compute_ethaddr, in6_equal_net
from slirpkit.udp import UDPHeader

print(version_string())                      # "4.8.0"
assert check_version(4, 7, 0)

mac = in6_compute_ethaddr("fec0::2")
print(ether_ntoa(mac))                       # "52:56:00:00:00:02"

assert in6_equal_net("fec0::1", "fec0::2", 64)
assert pstrcpy(5, "hello world") == "hell"

header = UDPHeader(sport=1024, dport=53, ulen=8)
assert UDPHeader.unpack(header.pack()) == header
```

```python
from slirpkit.config import SlirpConfig

config = SlirpConfig(
    in_enabled=True,
    vnetwork="10.0.2.0",
    vnetmask="255.255.255.0",
    vhost="10.0.2.2",
    vdhcp_start="10.0.2.15",
    vnameserver="10.0.2.3",
).validate()
```

## What this package does not do

It does not run a network stack. There is no packet input or output path, no
TCP implementation, no UDP or TCP socket forwarding, no DHCP, DNS or TFTP
service, and no saving or restoring of stack state. It provides the
configuration, header layouts, address checks and helpers such a stack is
built from.

## Tests

```
pytest
```