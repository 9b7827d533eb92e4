"""
Verified acquisition of the bootstrap binary release.

The release archive is streamed from the network straight onto disk while
its SHA256 is computed over the compressed bytes. The digest is only
checked once extraction has finished, so a failed verification leaves an
untrusted tree behind: callers must treat the destination as usable only
when acquire() returns.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

import requests

from groot.core.download import StreamingHasher, iter_body, open_stream
from groot.core.exceptions import VerificationFailedError
from groot.core.extract import extract_tar_gz
from groot.core.platform import PlatformInfo, detect_platform
from groot.toolchain.releases import (
    BINARY_RELEASE,
    DIST_TO_HASH,
    RELEASE_URL_TEMPLATE,
    expected_digest,
    release_url,
)

logger = logging.getLogger(__name__)


class ReleaseAcquirer:
    """
    Downloads, extracts and verifies the pinned bootstrap release.

    Example:
        >>> acquirer = ReleaseAcquirer()
        >>> digest = acquirer.acquire(Path.home() / ".groot" / ".binary")
    """

    def __init__(
        self,
        release_version: str = BINARY_RELEASE,
        digests: Mapping[str, str] = DIST_TO_HASH,
        url_template: str = RELEASE_URL_TEMPLATE,
        platform: Optional[PlatformInfo] = None,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            release_version: Go release the digest table was pinned for
            digests: Platform ('os/arch') to SHA256 table
            url_template: Download URL with {version}, {os} and {arch} fields
            platform: Platform to acquire for (auto-detected if None)
            timeout: HTTP timeout in seconds
            session: Optional requests session
        """
        self.release_version = release_version
        self.digests = digests
        self.url_template = url_template
        self.platform = platform
        self.timeout = timeout
        self.session = session

    def pinned_digest(self) -> str:
        """
        SHA256 the release for this platform must have.

        Raises:
            UnsupportedPlatformError: No published release for this platform
        """
        return expected_digest(self.platform or detect_platform(), self.digests)

    def acquire(self, destination: Union[str, Path]) -> str:
        """
        Fetch the release for this platform into destination and verify it.

        Args:
            destination: Directory that receives the release's contents

        Returns:
            The verified SHA256 digest (lowercase hex)

        Raises:
            UnsupportedPlatformError: No published release for this platform
            NetworkError: Transport failure or non-200 response
            ArchiveExtractionError: Corrupt archive or write failure
            VerificationFailedError: Digest differs from the pinned value
        """
        destination = Path(destination)
        platform = self.platform or detect_platform()
        expected = self.pinned_digest()
        url = release_url(platform, self.release_version, self.url_template)

        logger.info(f"Acquiring Go {self.release_version} for {platform.dist()}")
        hasher = StreamingHasher("sha256")

        response = open_stream(url, timeout=self.timeout, session=self.session)
        try:
            count = extract_tar_gz(iter_body(response), destination, hasher)
        finally:
            response.close()

        actual = hasher.finalize()
        if not hasher.verify(expected):
            logger.error(
                "Downloaded binary release does not match published SHA256 hash."
            )
            raise VerificationFailedError(expected, actual)

        logger.info(f"Verified {count} entries in {destination} (sha256 {actual})")
        return actual
