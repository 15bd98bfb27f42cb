"""Tests for checksum parsing and verification."""

import hashlib
from unittest.mock import AsyncMock, MagicMock

import pytest

from protonge_installer.exceptions import DecodeError, FilesystemError
from protonge_installer.verification import (
    ChecksumVerifier,
    compute_hash,
    parse_checksum,
)
from tests.conftest import CHECKSUM_URL, PAYLOAD_NAME, sha512_hex

ARTIFACT_BYTES = b"GE-Proton archive bytes" * 1000


@pytest.fixture
def artifact(tmp_path):
    """A downloaded artifact on disk."""
    path = tmp_path / PAYLOAD_NAME
    path.write_bytes(ARTIFACT_BYTES)
    return path


def _download_service(content: str) -> MagicMock:
    service = MagicMock()
    service.fetch_text = AsyncMock(return_value=content)
    return service


class TestParseChecksum:
    """Test checksum file parsing."""

    def test_first_token_is_digest(self):
        """The digest precedes the file name."""
        assert parse_checksum(f"abc123  {PAYLOAD_NAME}\n") == "abc123"

    def test_digest_only(self):
        """A bare digest is accepted."""
        assert parse_checksum("abc123\n") == "abc123"

    def test_leading_whitespace(self):
        """Leading whitespace is ignored."""
        assert parse_checksum("\n  abc123 file") == "abc123"

    def test_empty_body_is_decode_error(self):
        """An empty checksum file cannot be used."""
        with pytest.raises(DecodeError) as exc_info:
            parse_checksum("  \n", CHECKSUM_URL)

        assert exc_info.value.target == CHECKSUM_URL


class TestComputeHash:
    """Test streaming hash computation."""

    def test_matches_hashlib(self, artifact):
        """Streaming digest equals a one-shot digest."""
        assert compute_hash(artifact) == hashlib.sha512(
            ARTIFACT_BYTES
        ).hexdigest()

    def test_deterministic(self, artifact):
        """Hashing the same bytes twice yields the same digest."""
        assert compute_hash(artifact) == compute_hash(artifact)

    def test_missing_file_is_filesystem_error(self, tmp_path):
        """Unreadable artifacts raise FilesystemError."""
        with pytest.raises(FilesystemError):
            compute_hash(tmp_path / "missing.tar.gz")


class TestChecksumVerifier:
    """Test ChecksumVerifier.verify."""

    @pytest.mark.asyncio
    async def test_matching_checksum_passes(self, artifact):
        """A matching digest passes."""
        expected = sha512_hex(ARTIFACT_BYTES)
        service = _download_service(f"{expected}  {PAYLOAD_NAME}\n")

        result = await ChecksumVerifier(service).verify(artifact, CHECKSUM_URL)

        assert result.passed
        assert result.expected == result.actual == expected
        assert result.algorithm == "sha512"
        service.fetch_text.assert_awaited_once_with(CHECKSUM_URL)

    @pytest.mark.asyncio
    async def test_mismatch_fails(self, artifact):
        """A different digest is reported as a mismatch."""
        service = _download_service(f"{'0' * 128}  {PAYLOAD_NAME}\n")

        result = await ChecksumVerifier(service).verify(artifact, CHECKSUM_URL)

        assert not result.passed
        assert result.actual == sha512_hex(ARTIFACT_BYTES)

    @pytest.mark.asyncio
    async def test_comparison_is_case_sensitive(self, artifact):
        """Uppercase hex does not equal the computed lowercase digest."""
        expected = sha512_hex(ARTIFACT_BYTES).upper()
        service = _download_service(expected)

        result = await ChecksumVerifier(service).verify(artifact, CHECKSUM_URL)

        assert not result.passed

    @pytest.mark.asyncio
    async def test_repeatable(self, artifact):
        """Verifying the same bytes twice gives the same answer."""
        service = _download_service(sha512_hex(ARTIFACT_BYTES))
        verifier = ChecksumVerifier(service)

        first = await verifier.verify(artifact, CHECKSUM_URL)
        second = await verifier.verify(artifact, CHECKSUM_URL)

        assert first == second
