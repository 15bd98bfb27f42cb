"""Bootstrap settings for the logging system.

The installer reads no configuration file, so log settings come from
constants and the environment only.
"""

import os
from pathlib import Path

from protonge_installer.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    LOG_FILE_NAME,
)


def load_log_settings() -> tuple[str, str, Path | None]:
    """Load console level, file level and optional log file path.

    Environment Variable Override:
        PROTONGE_INSTALLER_LOG_DIR: When set, records are also written to
        $PROTONGE_INSTALLER_LOG_DIR/protonge-installer.log. When unset no
        log file is written.

    Returns:
        Tuple of (console_level, file_level, log_path) where log_path is
        None if file logging is disabled

    """
    env_log_dir = os.getenv(ENV_LOG_DIR)
    log_path = (
        Path(env_log_dir).expanduser() / LOG_FILE_NAME if env_log_dir else None
    )
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path
