"""
Read-only view over an uploaded zip archive.
Opens the archive in memory, runs safety validation, and exposes its entries.
"""

import io
import zipfile
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional
import logging

from zipprompt.core.config import settings
from zipprompt.services.policy import is_ignored_path

logger = logging.getLogger(__name__)


MAX_PATH_COMPONENT_LENGTH = 255


class ArchiveError(Exception):
    """Raised when an archive cannot be opened or parsed"""
    pass


class ArchiveSecurityError(ArchiveError):
    """Raised when an archive fails security validation"""
    pass


@dataclass(frozen=True)
class ArchiveEntry:
    """One record inside the archive: a directory marker or a file"""
    path: str
    is_dir: bool
    size: int
    reader: Callable[[], bytes] = field(repr=False, compare=False)
    is_symlink: bool = False

    def read(self) -> bytes:
        """Decompress and return the entry's bytes"""
        return self.reader()


def check_entry_name(filename: str) -> None:
    """
    Reject entry names that are never legitimate: null bytes and '..' components.

    Leading slashes are tolerated; entries are never extracted to disk and
    empty segments are dropped when the tree is built.

    Raises:
        ArchiveSecurityError: If the name is unsafe
    """
    if '\x00' in filename:
        raise ArchiveSecurityError(f"Null byte in filename: {repr(filename)}")

    if '..' in filename.replace('\\', '/').split('/'):
        raise ArchiveSecurityError(f"Directory traversal not allowed: {filename}")


def validate_zip_path(filename: str, max_depth: int) -> None:
    """
    Validate the path of an entry that will appear in the tree.

    Checks for:
    - Null bytes and directory traversal (see check_entry_name)
    - Excessive path depth
    - Overly long path components

    Raises:
        ArchiveSecurityError: If the path fails validation
    """
    check_entry_name(filename)

    components = filename.replace('\\', '/').split('/')

    if len(components) > max_depth:
        raise ArchiveSecurityError(f"Path too deep ({len(components)} levels): {filename}")

    for component in components:
        if len(component) > MAX_PATH_COMPONENT_LENGTH:
            raise ArchiveSecurityError(f"Path component too long ({len(component)} chars): {component[:50]}...")


def is_symlink(zip_info: zipfile.ZipInfo) -> bool:
    """
    Check if a zip entry is a symbolic link.

    The high 16 bits of external_attr hold the Unix mode; symlinks have
    file type 0o120000.
    """
    unix_mode = (zip_info.external_attr >> 16) & 0xFFFF
    return (unix_mode & 0o170000) == 0o120000


def validate_zip_archive(
    zf: zipfile.ZipFile,
    max_files: int,
    max_total_size: int,
    max_depth: int,
) -> None:
    """
    Validate an entire zip archive for security issues.

    Every entry name is checked for null bytes and traversal. The count,
    size and depth limits apply only to entries that survive the ignore
    policy, so a bundled node_modules or .git never fails an upload.

    Raises:
        ArchiveSecurityError: If the archive fails validation
    """
    kept = 0
    total_size = 0
    for info in zf.infolist():
        if is_ignored_path(info.filename):
            check_entry_name(info.filename)
            continue

        validate_zip_path(info.filename, max_depth)

        kept += 1
        if kept > max_files:
            raise ArchiveSecurityError(f"Too many files in archive (max: {max_files})")

        total_size += info.file_size
        if total_size > max_total_size:
            raise ArchiveSecurityError(
                f"Total uncompressed size exceeds limit: {total_size} bytes "
                f"(max: {max_total_size})"
            )


class Archive:
    """
    An opened, validated zip archive held entirely in memory.

    Use as a context manager; entries can only be read while it is open:

        with open_archive(data) as archive:
            for entry in archive.entries:
                ...
    """

    def __init__(self, zf: zipfile.ZipFile, size: int):
        self._zf = zf
        self.size = size
        self.entries: List[ArchiveEntry] = [
            ArchiveEntry(
                path=info.filename,
                is_dir=info.is_dir(),
                size=info.file_size,
                reader=partial(zf.read, info),
                is_symlink=is_symlink(info),
            )
            for info in zf.infolist()
        ]

    @property
    def paths(self) -> List[str]:
        return [entry.path for entry in self.entries]

    def close(self) -> None:
        self._zf.close()

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_archive(
    data: bytes,
    max_files: Optional[int] = None,
    max_total_size: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> Archive:
    """
    Open zip bytes and validate them.

    Limits left as None come from settings.

    Raises:
        ArchiveError: If the bytes are not a readable zip archive
        ArchiveSecurityError: If the archive fails security validation
    """
    if max_files is None:
        max_files = settings.MAX_FILES_IN_ARCHIVE
    if max_total_size is None:
        max_total_size = settings.max_total_uncompressed_bytes
    if max_depth is None:
        max_depth = settings.MAX_PATH_DEPTH

    try:
        zf = zipfile.ZipFile(io.BytesIO(data), 'r')
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, OSError, ValueError) as e:
        raise ArchiveError(f"Could not open zip archive: {e}") from e

    try:
        validate_zip_archive(zf, max_files, max_total_size, max_depth)
    except ArchiveSecurityError:
        zf.close()
        raise

    logger.debug(f"Opened archive: {len(zf.infolist())} entries, {len(data)} bytes")
    return Archive(zf, len(data))
