"""Tar-gzip extraction for release archives.

Entries are processed in stream order and resolved against an explicit
destination directory; the process working directory is never changed.
Supported entries are directories, regular files and symbolic links.
Archive-metadata entries are skipped; anything else aborts extraction.
Every entry passes through ``tarfile.data_filter`` first, so links and
paths that resolve outside the destination are refused.
"""

from __future__ import annotations

import gzip
import os
import tarfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from protonge_installer.constants import (
    CHUNK_SIZE,
    DEFAULT_DIR_MODE,
    PERMISSION_BITS,
)
from protonge_installer.exceptions import (
    ArchiveFormatError,
    FilesystemError,
    IntegrityError,
)
from protonge_installer.logger import get_logger

logger = get_logger(__name__)

# Entries that carry archive metadata only and have no filesystem effect
METADATA_TYPES = frozenset(
    {
        tarfile.XGLTYPE,
        tarfile.XHDTYPE,
        tarfile.SOLARIS_XHDTYPE,
        tarfile.GNUTYPE_LONGNAME,
        tarfile.GNUTYPE_LONGLINK,
    }
)


@dataclass(slots=True)
class ExtractionSummary:
    """Counts of filesystem objects created by an extraction."""

    directories: int = 0
    files: int = 0
    symlinks: int = 0
    skipped: int = 0


def _copy_exact(source: IO[bytes], target: int, size: int) -> int:
    """Copy up to ``size`` bytes from a file object to a descriptor."""
    written = 0
    while written < size:
        chunk = source.read(min(CHUNK_SIZE, size - written))
        if not chunk:
            break
        view = memoryview(chunk)
        while view:
            count = os.write(target, view)
            view = view[count:]
            written += count
    return written


class ArchiveExtractor:
    """Unpacks a ``.tar.gz`` archive into a destination directory."""

    def __init__(self) -> None:
        """Initialize extractor state."""
        self._made_dirs: set[Path] = set()

    def extract(
        self, archive_path: Path, destination_dir: Path
    ) -> ExtractionSummary:
        """Extract every entry of the archive below ``destination_dir``.

        There is no partial-success mode: on failure the entries written so
        far stay on disk.

        Args:
            archive_path: Path to the gzip-compressed tar archive
            destination_dir: Base directory for all entry paths

        Returns:
            ExtractionSummary with counts per entry kind

        Raises:
            ArchiveFormatError: On unsupported entries or corrupt data
            IntegrityError: If a file entry is shorter than declared
            FilesystemError: If a filesystem operation fails

        """
        self._made_dirs = set()
        summary = ExtractionSummary()
        base = destination_dir.resolve()
        logger.info("Extracting %s", archive_path.name)

        try:
            with tarfile.open(archive_path, mode="r|gz") as archive:
                for member in archive:
                    self._extract_member(archive, member, base, summary)
        except (
            tarfile.ReadError,
            EOFError,
            gzip.BadGzipFile,
            zlib.error,
        ) as e:
            msg = f"corrupt archive data: {e}"
            raise ArchiveFormatError(msg, target=str(archive_path)) from e
        except tarfile.TarError as e:
            msg = f"could not read archive: {e}"
            raise ArchiveFormatError(msg, target=str(archive_path)) from e
        except OSError as e:
            msg = f"could not extract archive: {e}"
            target = str(e.filename) if e.filename else str(archive_path)
            raise FilesystemError(msg, target=target) from e

        logger.debug(
            "Extracted %d directories, %d files, %d symlinks",
            summary.directories,
            summary.files,
            summary.symlinks,
        )
        return summary

    def _extract_member(
        self,
        archive: tarfile.TarFile,
        member: tarfile.TarInfo,
        base: Path,
        summary: ExtractionSummary,
    ) -> None:
        if member.type in METADATA_TYPES:
            summary.skipped += 1
            return

        path = self._resolve_entry_path(base, member.name)
        member = self._filter_member(member, base)

        if member.isdir():
            path.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
            self._made_dirs.add(path)
            summary.directories += 1
        elif member.isreg():
            self._write_file(archive, member, path)
            summary.files += 1
        elif member.issym():
            self._ensure_parent(path)
            if path.is_symlink() or path.is_file():
                path.unlink()
            os.symlink(member.linkname, path)
            summary.symlinks += 1
        else:
            msg = f"entry {member.name} has unsupported type {member.type!r}"
            raise ArchiveFormatError(msg)

    def _write_file(
        self,
        archive: tarfile.TarFile,
        member: tarfile.TarInfo,
        path: Path,
    ) -> None:
        self._ensure_parent(path)
        if path.is_symlink():
            path.unlink()
        source = archive.extractfile(member)
        if source is None:
            msg = f"entry {member.name} has no data"
            raise ArchiveFormatError(msg)

        fd = os.open(
            path,
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC | os.O_NOFOLLOW,
            member.mode & PERMISSION_BITS,
        )
        try:
            written = _copy_exact(source, fd, member.size)
        finally:
            os.close(fd)

        if written != member.size:
            msg = f"only wrote {written} bytes; expected {member.size}"
            raise IntegrityError(msg, target=str(path))

    def _ensure_parent(self, path: Path) -> None:
        # Entries may precede the directory entry of their parent
        parent = path.parent
        if parent not in self._made_dirs:
            parent.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
            self._made_dirs.add(parent)

    @staticmethod
    def _filter_member(
        member: tarfile.TarInfo, base: Path
    ) -> tarfile.TarInfo:
        try:
            return tarfile.data_filter(member, str(base))
        except tarfile.FilterError as e:
            msg = f"entry {member.name} rejected: {e}"
            raise ArchiveFormatError(msg) from e

    @staticmethod
    def _resolve_entry_path(base: Path, name: str) -> Path:
        relative = Path(name)
        if relative.is_absolute() or ".." in relative.parts:
            msg = f"entry {name} points outside the destination"
            raise ArchiveFormatError(msg)
        return base / relative
