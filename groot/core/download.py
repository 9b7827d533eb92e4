"""
HTTP download helpers with streaming checksum computation.

This module provides:
- StreamingHasher for incremental digests over a byte stream
- open_stream() to issue a streaming GET with consistent error reporting
- iter_body() to read a response body chunk by chunk
"""

import hashlib
import logging
import secrets
from typing import Iterator, Optional

import requests
from requests.exceptions import RequestException

from groot.core.exceptions import NetworkError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024


class StreamingHasher:
    """Compute hash incrementally for streaming downloads."""

    def __init__(self, algorithm: str = "sha256"):
        """
        Initialize streaming hasher.

        Args:
            algorithm: Hash algorithm ('sha256', 'sha512')

        Raises:
            ValueError: If algorithm is not supported
        """
        self.algorithm = algorithm.lower()

        if self.algorithm == "sha256":
            self.hasher = hashlib.sha256()
        elif self.algorithm == "sha512":
            self.hasher = hashlib.sha512()
        else:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    def update(self, data: bytes):
        """Add data to hash computation."""
        self.hasher.update(data)

    def finalize(self) -> str:
        """Get final hash value as lowercase hex string."""
        return self.hasher.hexdigest()

    def verify(self, expected_hash: str) -> bool:
        """
        Check if computed hash matches expected value.

        Uses a constant-time comparison.

        Args:
            expected_hash: Expected hash value (hex string)

        Returns:
            True if hashes match, False otherwise
        """
        return secrets.compare_digest(
            self.finalize(), expected_hash.strip().lower()
        )


def open_stream(
    url: str, timeout: int = 30, session: Optional[requests.Session] = None
) -> requests.Response:
    """
    Start a streaming GET request and check that it succeeded.

    Anything other than 200 OK is a failure. When the server explains itself
    in plain text, that explanation becomes part of the error.

    Args:
        url: URL to download
        timeout: Connect/read timeout in seconds
        session: Optional requests session (defaults to module-level requests)

    Returns:
        Response whose body has not been read yet. The caller closes it.

    Raises:
        NetworkError: On transport failure or unexpected status
    """
    http = session or requests
    logger.info(f"Downloading {url}")

    try:
        response = http.get(url, stream=True, timeout=timeout, allow_redirects=True)
    except RequestException as e:
        raise NetworkError(f"Download failed: {e}") from e

    if response.status_code != 200:
        detail = None
        content_type = response.headers.get("Content-Type", "")
        if "text/plain" in content_type:
            try:
                detail = response.text
            except RequestException as e:
                logger.debug(f"Could not read error body: {e}")
        response.close()
        raise NetworkError(
            f"Downloading binary release: unexpected status: "
            f"{response.status_code} {response.reason or ''}".rstrip(),
            status_code=response.status_code,
            detail=detail,
        )

    return response


def iter_body(response: requests.Response, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """
    Yield the raw response body in chunks.

    Transport errors while streaming are reported as NetworkError.
    """
    try:
        for chunk in response.iter_content(chunk_size=chunk_size):
            if chunk:
                yield chunk
    except RequestException as e:
        raise NetworkError(f"Download interrupted: {e}") from e
