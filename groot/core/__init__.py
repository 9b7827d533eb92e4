"""
Core functionality for groot.

This package contains the foundational modules that other components depend on.
"""

from .config import (
    GrootConfig,
    load_config,
    get_default_base_dir,
)

from .directory import (
    Workspace,
    validate_tag,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .download import StreamingHasher

from .extract import extract_tar_gz

from .process import (
    ToolRunner,
    SubprocessToolRunner,
)

from .exceptions import (
    GrootError,
    ConfigurationError,
    InvalidTagError,
    UnsupportedPlatformError,
    NetworkError,
    VerificationFailedError,
    ExternalToolError,
    NotBuiltError,
    UnverifiedBootstrapError,
    FilesystemError,
    ArchiveExtractionError,
    UnsupportedEntryError,
    InsecureArchiveError,
)

__all__ = [
    "GrootConfig",
    "load_config",
    "get_default_base_dir",
    "Workspace",
    "validate_tag",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "StreamingHasher",
    "extract_tar_gz",
    "ToolRunner",
    "SubprocessToolRunner",
    "GrootError",
    "ConfigurationError",
    "InvalidTagError",
    "UnsupportedPlatformError",
    "NetworkError",
    "VerificationFailedError",
    "ExternalToolError",
    "NotBuiltError",
    "UnverifiedBootstrapError",
    "FilesystemError",
    "ArchiveExtractionError",
    "UnsupportedEntryError",
    "InsecureArchiveError",
]
