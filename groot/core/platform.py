"""
Platform detection for groot.

Release digests are keyed by Go-style platform identifiers such as
'linux/amd64' or 'darwin/amd64'. This module maps the running interpreter's
view of the system onto those tags.

Usage:
    from groot.core.platform import detect_platform

    platform_info = detect_platform()
    print(platform_info.dist())  # 'linux/amd64'
"""

import functools
import platform
import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Operating system and CPU architecture pair.

    Attributes:
        os: Go operating system tag ('linux', 'darwin', 'freebsd', 'windows', ...)
        arch: Go architecture tag ('amd64', '386', 'arm64', 'arm', ...)
    """

    os: str
    arch: str

    def dist(self) -> str:
        """
        Get the lookup key used by the release digest table.

        Example:
            >>> PlatformInfo("linux", "amd64").dist()
            'linux/amd64'
        """
        return f"{self.os}/{self.arch}"

    def __str__(self) -> str:
        return self.dist()


_OS_MAP = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
    "netbsd": "netbsd",
    "openbsd": "openbsd",
    "dragonfly": "dragonfly",
    "sunos": "solaris",
}

_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "mips": "mips",
    "mipsel": "mipsle",
    "mips64": "mips64",
    "mips64el": "mips64le",
}


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect the current platform.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def clear_platform_cache() -> None:
    """Clear the cached platform detection result."""
    detect_platform.cache_clear()


def _detect_os() -> str:
    system = platform.system().lower()
    if system == "linux" and hasattr(sys, "getandroidapilevel"):
        return "android"
    # Unknown systems keep their own name so lookups fail as "unknown".
    return _OS_MAP.get(system, system)


def _detect_architecture() -> str:
    machine = platform.machine().lower()

    if machine in _ARCH_MAP:
        arch = _ARCH_MAP[machine]
    elif machine.startswith("arm"):
        arch = "arm"
    else:
        arch = machine

    # A 32-bit interpreter on a 64-bit kernel needs the 32-bit release.
    if arch == "amd64" and sys.maxsize <= 2**32:
        return "386"
    if arch == "arm64" and sys.maxsize <= 2**32:
        return "arm"
    return arch
