"""Tests for exception classes."""

import pytest

from protonge_installer.exceptions import (
    ArchiveFormatError,
    ConfigurationError,
    DecodeError,
    FilesystemError,
    InstallerError,
    IntegrityError,
    MalformedReleaseError,
    ReleaseNotFoundError,
    TransportError,
)


class TestInstallerError:
    """Test the base error class."""

    def test_basic_initialization(self):
        """Test basic error initialization."""
        error = InstallerError("Test error")
        assert error.message == "Test error"
        assert error.target is None
        assert str(error) == "Operation failed: Test error"

    def test_initialization_with_target(self):
        """Test initialization with target parameter."""
        error = InstallerError("bad status: 500", target="https://x/y")
        assert error.target == "https://x/y"
        assert str(error) == (
            "Operation failed for 'https://x/y': bad status: 500"
        )

    def test_raise_and_catch(self):
        """Test raising and catching through the base class."""
        with pytest.raises(InstallerError) as exc_info:
            raise IntegrityError("checksums not matching", target="a.tar.gz")

        assert isinstance(exc_info.value, IntegrityError)
        assert "a.tar.gz" in str(exc_info.value)


@pytest.mark.parametrize(
    ("error_class", "prefix"),
    [
        (ConfigurationError, "Invalid configuration"),
        (TransportError, "Network request failed"),
        (ReleaseNotFoundError, "Release not found"),
        (DecodeError, "Malformed response"),
        (MalformedReleaseError, "Malformed release"),
        (ArchiveFormatError, "Unsupported archive"),
        (IntegrityError, "Integrity check failed"),
        (FilesystemError, "Filesystem operation failed"),
    ],
)
def test_error_prefixes(error_class, prefix):
    """Each error kind formats with its own prefix."""
    error = error_class("details")
    assert isinstance(error, InstallerError)
    assert str(error) == f"{prefix}: details"
