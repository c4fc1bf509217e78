[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slirpkit"
version = "4.8.0"
description = "Building blocks of a user-mode network stack: configuration, IPv4/IPv6/UDP headers, IPv6 address checks and small socket helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["slirp", "networking", "ipv4", "ipv6", "udp", "user-mode networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slirpkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
