"""Checksum verification for downloaded release archives.

GE-Proton publishes a ``<name>.sha512sum`` file next to each archive whose
first whitespace-separated token is the hex SHA-512 of the archive.
"""

from __future__ import annotations

import asyncio
import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from protonge_installer.constants import HASH_ALGORITHM, HASH_CHUNK_SIZE
from protonge_installer.exceptions import DecodeError, FilesystemError
from protonge_installer.logger import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from protonge_installer.download import DownloadService

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class VerificationResult:
    """Outcome of comparing a file against a published checksum."""

    passed: bool
    expected: str
    actual: str
    algorithm: str = HASH_ALGORITHM


def parse_checksum(content: str, source: str = "") -> str:
    """Return the digest token of a checksum file body.

    Args:
        content: Checksum file contents, e.g. "<hex>  GE-Proton9-20.tar.gz"
        source: URL of the checksum file, for diagnostics

    Returns:
        The first whitespace-separated token

    Raises:
        DecodeError: If the body is empty

    """
    fields = content.split()
    if not fields:
        msg = "checksum file is empty"
        raise DecodeError(msg, target=source or None)
    return fields[0]


def compute_hash(file_path: Path, algorithm: str = HASH_ALGORITHM) -> str:
    """Compute the hex digest of a file without loading it into memory.

    Raises:
        FilesystemError: If the file cannot be read

    """
    digest = hashlib.new(algorithm)
    try:
        with file_path.open("rb") as f:
            while chunk := f.read(HASH_CHUNK_SIZE):
                digest.update(chunk)
    except OSError as e:
        msg = f"could not read file for hashing: {e}"
        raise FilesystemError(msg, target=str(file_path)) from e
    return digest.hexdigest()


class ChecksumVerifier:
    """Verifies a downloaded artifact against a remote checksum file."""

    def __init__(
        self,
        download_service: DownloadService,
        algorithm: str = HASH_ALGORITHM,
    ) -> None:
        """Initialize verifier.

        Args:
            download_service: Service used to fetch the checksum file
            algorithm: hashlib algorithm name

        """
        self.download_service = download_service
        self.algorithm = algorithm

    async def verify(
        self, artifact_path: Path, checksum_url: str
    ) -> VerificationResult:
        """Compare the artifact digest with the published one.

        Args:
            artifact_path: Local file to verify
            checksum_url: URL of the detached checksum file

        Returns:
            VerificationResult; ``passed`` is False on mismatch

        Raises:
            TransportError: If the checksum file cannot be fetched
            DecodeError: If the checksum file is empty
            FilesystemError: If the artifact cannot be read

        """
        logger.debug(
            "Starting %s verification for %s",
            self.algorithm.upper(),
            artifact_path.name,
        )
        content = await self.download_service.fetch_text(checksum_url)
        expected = parse_checksum(content, checksum_url)
        logger.debug("   Expected hash: %s", expected)

        actual = await asyncio.to_thread(
            compute_hash, artifact_path, self.algorithm
        )
        logger.debug("   Computed hash: %s", actual)

        result = VerificationResult(
            passed=actual == expected,
            expected=expected,
            actual=actual,
            algorithm=self.algorithm,
        )
        if not result.passed:
            logger.error("%s verification FAILED!", self.algorithm.upper())
            logger.error("   Expected: %s", expected)
            logger.error("   Actual:   %s", actual)
            logger.error("   File: %s", artifact_path)
        return result
