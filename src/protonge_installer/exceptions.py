"""Exception classes for protonge-installer operations."""


class InstallerError(Exception):
    """Base exception for protonge-installer operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional URL, file name or path involved in the failure.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class ConfigurationError(InstallerError):
    """Raised when command-line or environment settings are invalid."""

    error_prefix = "Invalid configuration"


class TransportError(InstallerError):
    """Raised on network failures and unexpected HTTP statuses."""

    error_prefix = "Network request failed"


class ReleaseNotFoundError(InstallerError):
    """Raised when the release API has no matching release."""

    error_prefix = "Release not found"


class DecodeError(InstallerError):
    """Raised when an API response or checksum file is malformed."""

    error_prefix = "Malformed response"


class MalformedReleaseError(InstallerError):
    """Raised when a release lacks exactly one payload and one checksum."""

    error_prefix = "Malformed release"


class ArchiveFormatError(InstallerError):
    """Raised on unsupported or corrupt archive entries."""

    error_prefix = "Unsupported archive"


class IntegrityError(InstallerError):
    """Raised when downloaded or extracted data fails an integrity check."""

    error_prefix = "Integrity check failed"


class FilesystemError(InstallerError):
    """Raised when a local filesystem operation fails."""

    error_prefix = "Filesystem operation failed"
