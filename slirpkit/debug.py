"""Category-based debug logging controlled by a set of flags."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger("slirpkit")


class DebugFlag(enum.IntFlag):
    """Categories of debug output."""

    CALL = 1 << 0
    MISC = 1 << 1
    ERROR = 1 << 2
    TFTP = 1 << 3
    VERBOSE_CALL = 1 << 4


@dataclass
class _DebugState:
    flags: DebugFlag = DebugFlag(0)


_state = _DebugState()


def set_flags(flags: int) -> None:
    """Select which categories of debug output are emitted."""
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise TypeError("debug flags must be an integer")
    if flags < 0:
        raise ValueError("debug flags must not be negative")
    _state.flags = DebugFlag(flags)


def get_flags() -> DebugFlag:
    """Return the currently enabled debug categories."""
    return _state.flags


def enabled(flag: int) -> bool:
    """Return True if any of the given categories is enabled."""
    return bool(_state.flags & flag)


def log(flag: int, message: str, *args: object) -> bool:
    """Emit a debug message if its category is enabled; return whether it was."""
    if not enabled(flag):
        return False
    logger.debug(message, *args)
    return True