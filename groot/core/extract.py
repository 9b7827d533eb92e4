"""
Streaming extraction of gzip-compressed tar archives with digest tracking.

The extractor is a pipeline of three stages, each usable on its own:

1. HashingReader: turns an iterable of byte chunks (an HTTP body, a list
   holding a fixed buffer) into a readable stream, feeding every byte to a
   hash accumulator before anything downstream sees it.
2. decompress(): gunzips the stream.
3. extract_tar_stream(): unpacks the tar entries (directories and regular
   files only) under a destination, dropping the archive's root folder.

extract_tar_gz() composes them so the archive is hashed, decompressed and
written to disk in one pass, without buffering the archive anywhere.
"""

import gzip
import io
import logging
import os
import shutil
import tarfile
import zlib
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterable, Union

from groot.core.exceptions import (
    ArchiveExtractionError,
    GrootError,
    InsecureArchiveError,
    UnsupportedEntryError,
)

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024

# Go release archives keep everything under a top-level "go/" folder.
ARCHIVE_ROOT = "go"


class HashingReader(io.RawIOBase):
    """
    Readable binary stream over byte chunks that hashes what it hands out.

    Bytes reach the hasher in stream order, exactly once, at the moment a
    reader consumes them.
    """

    def __init__(self, chunks: Iterable[bytes], hasher):
        """
        Args:
            chunks: Iterable of byte strings (empty chunks are skipped)
            hasher: Object with an update(bytes) method
        """
        super().__init__()
        self._chunks = iter(chunks)
        self._hasher = hasher
        self._pending = b""
        self.bytes_read = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0

        size = min(len(buffer), len(self._pending))
        data = self._pending[:size]
        self._pending = self._pending[size:]

        self._hasher.update(data)
        buffer[:size] = data
        self.bytes_read += size
        return size

    def drain(self) -> int:
        """Consume (and hash) the rest of the stream. Returns bytes consumed."""
        drained = 0
        while chunk := self.read(CHUNK_SIZE):
            drained += len(chunk)
        return drained


def decompress(stream: BinaryIO) -> gzip.GzipFile:
    """Wrap a compressed stream in a gzip decompressor."""
    return gzip.GzipFile(fileobj=stream, mode="rb")


def member_path(name: str, destination: Path, strip_root: str = ARCHIVE_ROOT) -> Path:
    """
    Map an archive member name to its location under destination.

    The leading strip_root component is removed, so 'go/bin/gofmt' lands at
    destination/bin/gofmt and 'go/' is destination itself.

    Raises:
        InsecureArchiveError: If the name is absolute or contains '..'
    """
    posix = PurePosixPath(name)
    if posix.is_absolute() or ".." in posix.parts:
        raise InsecureArchiveError(
            f"Archive member '{name}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )

    parts = [part for part in posix.parts if part != "."]
    if strip_root and parts and parts[0] == strip_root:
        parts = parts[1:]
    return destination.joinpath(*parts)


def extract_tar_stream(
    stream: BinaryIO, destination: Union[str, Path], strip_root: str = ARCHIVE_ROOT
) -> int:
    """
    Unpack an uncompressed tar stream into destination.

    Entries are read sequentially; the stream never needs to be seekable.
    Permission bits recorded in the archive are applied to each entry.

    Args:
        stream: Readable tar byte stream
        destination: Directory to extract to (created if missing)
        strip_root: Leading path component to drop from member names

    Returns:
        Number of entries written

    Raises:
        UnsupportedEntryError: On anything other than a directory or file
        InsecureArchiveError: On absolute or parent-relative member names
    """
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)
    count = 0

    with tarfile.open(fileobj=stream, mode="r|") as tar:
        for member in tar:
            target = member_path(member.name, destination, strip_root)
            mode = member.mode & 0o7777

            if member.isdir():
                logger.debug(f"Directory: {target}")
                target.mkdir(mode=mode, parents=True, exist_ok=True)
                os.chmod(target, mode)
            elif member.isreg():
                logger.debug(f"File: {target}")
                source = tar.extractfile(member)
                _write_file(target, source, mode)
            else:
                raise UnsupportedEntryError(member.name, member.type)

            count += 1

    return count


def _write_file(target: Path, source: BinaryIO, mode: int) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    # Files from an earlier extraction may be read-only.
    if target.is_file() and not target.is_symlink():
        target.unlink()

    fd = os.open(target, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as f:
        shutil.copyfileobj(source, f, CHUNK_SIZE)
    os.chmod(target, mode)


def extract_tar_gz(
    chunks: Iterable[bytes],
    destination: Union[str, Path],
    hasher,
    strip_root: str = ARCHIVE_ROOT,
) -> int:
    """
    Hash, decompress and extract a .tar.gz byte stream in a single pass.

    The hasher observes the raw compressed bytes. Once the tar entries are
    written, the remainder of the stream is consumed so the digest always
    covers the complete input.

    Already-written entries are left in place when extraction fails.

    Args:
        chunks: Compressed archive as an iterable of byte chunks
        destination: Directory to extract to
        hasher: Digest accumulator with an update(bytes) method
        strip_root: Leading path component to drop from member names

    Returns:
        Number of entries written

    Raises:
        ArchiveExtractionError: If reading, decompressing or writing fails

    Example:
        >>> hasher = StreamingHasher("sha256")
        >>> with open("go1.9.2.linux-amd64.tar.gz", "rb") as f:
        ...     extract_tar_gz(iter(lambda: f.read(8192), b""), dest, hasher)
        >>> hasher.finalize()
    """
    reader = HashingReader(chunks, hasher)
    try:
        with decompress(reader) as gz:
            count = extract_tar_stream(gz, destination, strip_root)
            while gz.read(CHUNK_SIZE):
                pass
        reader.drain()
    except GrootError:
        raise
    except (OSError, EOFError, tarfile.TarError, zlib.error) as e:
        raise ArchiveExtractionError(f"Failed to extract archive: {e}") from e

    logger.debug(f"Extracted {count} entries from {reader.bytes_read} bytes")
    return count
