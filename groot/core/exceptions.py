"""
Centralized exception hierarchy for groot.

Every error raised by the core and toolchain layers derives from GrootError,
so the CLI can report any failure as a single diagnostic line.
"""

from pathlib import Path
from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class GrootError(Exception):
    """Base exception for all groot errors."""

    pass


class ConfigurationError(GrootError):
    """Raised when configuration cannot be loaded or is invalid."""

    pass


class InvalidTagError(GrootError):
    """Raised when a version tag cannot be used as a worktree name."""

    def __init__(self, tag: str, reason: str):
        self.tag = tag
        super().__init__(f"Invalid tag {tag!r}: {reason}")


# ============================================================================
# Release Acquisition Exceptions
# ============================================================================


class UnsupportedPlatformError(GrootError):
    """Raised when no verified binary release exists for this platform."""

    pass


class NetworkError(GrootError):
    """Raised when the release download fails (transport or HTTP status)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.status_code = status_code
        self.detail = detail
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)


class VerificationFailedError(GrootError):
    """Raised when a downloaded release does not match its pinned digest."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Downloaded binary release does not match published SHA256 hash: "
            f"expected {expected}, got {actual}"
        )


# ============================================================================
# Workspace Exceptions
# ============================================================================


class ExternalToolError(GrootError):
    """Raised when git or the build script exits unsuccessfully."""

    def __init__(self, command: Sequence[str], returncode: Optional[int]):
        self.command = list(command)
        self.returncode = returncode
        if returncode is None:
            msg = f"Failed to run: {' '.join(self.command)}"
        else:
            msg = f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        super().__init__(msg)


class NotBuiltError(GrootError):
    """Raised when activating a version that has no built binaries."""

    def __init__(self, tag: str, path: Path):
        self.tag = tag
        self.path = path
        super().__init__(f"Version {tag} is not built: {path} does not exist")


class UnverifiedBootstrapError(GrootError):
    """Raised when building without a verified bootstrap release."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(
            f"Bootstrap release in {path} is not trusted: {reason}. "
            "Run groot init to acquire it again"
        )


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class FilesystemError(GrootError):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class UnsupportedEntryError(ArchiveExtractionError):
    """Archive contains an entry that is neither a directory nor a file."""

    def __init__(self, name: str, type_flag: bytes):
        self.name = name
        self.type_flag = type_flag
        super().__init__(
            f"Unexpected type {type_flag.decode('ascii', 'replace')!r} for {name}"
        )


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass
