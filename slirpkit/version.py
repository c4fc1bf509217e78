"""Version information for the user-mode network stack."""

MAJOR_VERSION = 4
MINOR_VERSION = 8
MICRO_VERSION = 0
VERSION_STRING = "4.8.0"


def version_string() -> str:
    """Return the version of this implementation as a dotted string."""
    return VERSION_STRING


def check_version(major: int, minor: int, micro: int) -> bool:
    """Return True if this implementation is at least version major.minor.micro."""
    return (MAJOR_VERSION, MINOR_VERSION, MICRO_VERSION) >= (major, minor, micro)