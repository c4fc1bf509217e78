"""User-mode network stack building blocks: configuration, IPv4/IPv6/UDP headers and helpers."""

__version__ = "4.8.0"