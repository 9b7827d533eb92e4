"""
Pinned bootstrap release and its published SHA256 digests.

An empty digest marks a platform Go knows about but for which no binary
release was published at BINARY_RELEASE.
"""

from types import MappingProxyType
from typing import Mapping

from groot.core.exceptions import UnsupportedPlatformError
from groot.core.platform import PlatformInfo

BINARY_RELEASE = "1.9.2"

RELEASE_URL_TEMPLATE = (
    "https://redirector.gvt1.com/edgedl/go/go{version}.{os}-{arch}.tar.gz"
)

DIST_TO_HASH: Mapping[str, str] = MappingProxyType(
    {
        "android/386": "",
        "android/amd64": "",
        "android/arm": "",
        "android/arm64": "",
        "darwin/386": "",
        "darwin/amd64": "73fd5840d55f5566d8db6c0ffdd187577e8ebe650c783f68bd27cbf95bde6743",
        "darwin/arm": "",
        "darwin/arm64": "",
        "dragonfly/amd64": "",
        "freebsd/386": "809dcb0a8457c8d0abf954f20311a1ee353486d0ae3f921e9478189721d37677",
        "freebsd/amd64": "8be985c3e251c8e007fa6ecd0189bc53e65cc519f4464ddf19fa11f7ed251134",
        "freebsd/arm": "",
        "linux/386": "574b2c4b1a248e58ef7d1f825beda15429610a2316d9cbd3096d8d3fa8c0bc1a",
        "linux/amd64": "de874549d9a8d8d8062be05808509c09a88a248e77ec14eb77453530829ac02b",
        "linux/arm": "",
        "linux/arm64": "0016ac65ad8340c84f51bc11dbb24ee8265b0a4597dbfdf8d91776fc187456fa",
        "linux/mips": "",
        "linux/mips64": "",
        "linux/mips64le": "",
        "linux/mipsle": "",
        "linux/ppc64": "",
        "linux/ppc64le": "adb440b2b6ae9e448c253a20836d8e8aa4236f731d87717d9c7b241998dc7f9d",
        "linux/s390x": "a7137b4fbdec126823a12a4b696eeee2f04ec616e9fb8a54654c51d5884c1345",
        "nacl/386": "",
        "nacl/amd64p32": "",
        "nacl/arm": "",
        "netbsd/386": "",
        "netbsd/amd64": "",
        "netbsd/arm": "",
        "openbsd/386": "",
        "openbsd/amd64": "",
        "openbsd/arm": "",
        "plan9/386": "",
        "plan9/amd64": "",
        "plan9/arm": "",
        "solaris/amd64": "",
        "windows/386": "",
        "windows/amd64": "",
    }
)


def expected_digest(
    platform: PlatformInfo, digests: Mapping[str, str] = DIST_TO_HASH
) -> str:
    """
    Look up the pinned digest for a platform.

    Raises:
        UnsupportedPlatformError: If the platform is unknown, or known but
            without a published binary release.
    """
    dist = platform.dist()
    if dist not in digests:
        raise UnsupportedPlatformError(f"Unknown OS/Architecture: {dist}")

    digest = digests[dist]
    if not digest:
        raise UnsupportedPlatformError(f"Unsupported OS/Architecture: {dist}")
    return digest


def supported_platforms(digests: Mapping[str, str] = DIST_TO_HASH) -> list:
    """Platforms with a published binary release."""
    return sorted(dist for dist, digest in digests.items() if digest)


def release_url(
    platform: PlatformInfo,
    version: str = BINARY_RELEASE,
    template: str = RELEASE_URL_TEMPLATE,
) -> str:
    """
    Download URL of the binary release for a platform.

    Example:
        >>> release_url(PlatformInfo("linux", "amd64"))
        'https://redirector.gvt1.com/edgedl/go/go1.9.2.linux-amd64.tar.gz'
    """
    return template.format(version=version, os=platform.os, arch=platform.arch)
