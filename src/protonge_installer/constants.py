"""Centralized constants module for protonge-installer.

Constants are organized by logical categories and use typing.Final
annotations to ensure immutability.

Usage:
    from protonge_installer.constants import PACKAGE_PREFIX
"""

from typing import Final

# =============================================================================
# Release API Constants
# =============================================================================

GITHUB_API_URL: Final[str] = "https://api.github.com/"
RELEASES_PATH: Final[str] = "repos/GloriousEggroll/proton-ge-custom/releases/"
TAGS_PATH: Final[str] = "tags/"

# Literal token selecting the most recent release
LATEST_TOKEN: Final[str] = "latest"

# Every release tag carries this prefix, e.g. GE-Proton9-20
PACKAGE_PREFIX: Final[str] = "GE-Proton"

# Suffix identifying the detached checksum asset
CHECKSUM_SUFFIX: Final[str] = "sha512sum"
HASH_ALGORITHM: Final[str] = "sha512"

API_ACCEPT_HEADER: Final[str] = "application/vnd.github+json"
USER_AGENT: Final[str] = "protonge-installer"

# =============================================================================
# Filesystem Constants
# =============================================================================

DEFAULT_STEAM_SUBDIR: Final[str] = ".steam"

# Path parts below the Steam root where Steam looks for compatibility tools
COMPAT_TOOLS_SUBPATH: Final[tuple[str, ...]] = (
    "root",
    "compatibilitytools.d",
)

DEFAULT_DIR_MODE: Final[int] = 0o755
PERMISSION_BITS: Final[int] = 0o777

# =============================================================================
# Network / Transfer Constants
# =============================================================================

DEFAULT_TIMEOUT_SECONDS: Final[int] = 10
CHUNK_SIZE: Final[int] = 64 * 1024
HASH_CHUNK_SIZE: Final[int] = 1024 * 1024
PROGRESS_INTERVAL_SECONDS: Final[float] = 1.0

# =============================================================================
# Environment Variables
# =============================================================================

ENV_LOG_DIR: Final[str] = "PROTONGE_INSTALLER_LOG_DIR"
ENV_TIMEOUT: Final[str] = "PROTONGE_INSTALLER_TIMEOUT"

# =============================================================================
# Logging Constants
# =============================================================================

DEFAULT_LOG_LEVEL: Final[str] = "DEBUG"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "INFO"
LOG_FILE_NAME: Final[str] = "protonge-installer.log"

# Maximum size for rotated log files (bytes)
LOG_MAX_FILE_SIZE_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Color mapping for console output levels
LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
