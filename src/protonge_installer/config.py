"""Runtime configuration for protonge-installer.

The installer persists no settings of its own: every value comes from the
command line, the environment or a constant default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from protonge_installer.constants import (
    COMPAT_TOOLS_SUBPATH,
    DEFAULT_STEAM_SUBDIR,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_TIMEOUT,
    LATEST_TOKEN,
)
from protonge_installer.exceptions import ConfigurationError

if TYPE_CHECKING:
    from argparse import Namespace
    from collections.abc import Mapping


def default_steam_dir() -> Path:
    """Return the per-user Steam root, ``~/.steam``."""
    return Path.home() / DEFAULT_STEAM_SUBDIR


def compat_tools_dir(steam_dir: Path) -> Path:
    """Return the compatibility tools directory below a Steam root."""
    return steam_dir.joinpath(*COMPAT_TOOLS_SUBPATH)


@dataclass(slots=True, frozen=True)
class NetworkConfig:
    """Network settings shared by all HTTP requests.

    Attributes:
        timeout_seconds: Connect timeout; read and total timeouts scale
            from it

    """

    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> NetworkConfig:
        """Build network settings, honouring PROTONGE_INSTALLER_TIMEOUT.

        Raises:
            ConfigurationError: If the override is not a positive integer

        """
        raw = env.get(ENV_TIMEOUT)
        if raw is None or raw.strip() == "":
            return cls()
        try:
            timeout = int(raw)
        except ValueError:
            timeout = 0
        if timeout <= 0:
            msg = f"expected a positive number of seconds, got {raw!r}"
            raise ConfigurationError(msg, target=ENV_TIMEOUT)
        return cls(timeout_seconds=timeout)


@dataclass(slots=True, frozen=True)
class InstallerConfig:
    """Settings for a single installer invocation.

    Attributes:
        version: Version token, "latest" or a release identifier
        steam_dir: Steam root directory
        force: Overwrite an existing install of the same release
        verbose: Enable debug console output
        network: Network settings

    """

    version: str = LATEST_TOKEN
    steam_dir: Path = field(default_factory=default_steam_dir)
    force: bool = False
    verbose: bool = False
    network: NetworkConfig = field(default_factory=NetworkConfig)

    @property
    def destination_root(self) -> Path:
        """Directory that receives one sub-directory per installed release."""
        return compat_tools_dir(self.steam_dir)

    @classmethod
    def from_args(
        cls,
        args: Namespace,
        env: Mapping[str, str] | None = None,
    ) -> InstallerConfig:
        """Build configuration from parsed CLI arguments.

        A positional version argument wins over ``--version``.

        Args:
            args: Namespace produced by CLIParser
            env: Environment mapping (defaults to os.environ)

        Returns:
            InstallerConfig instance

        Raises:
            ConfigurationError: If a value is invalid

        """
        env = os.environ if env is None else env
        version = args.release or args.version or LATEST_TOKEN
        version = version.strip()
        if not version:
            msg = "version must not be empty"
            raise ConfigurationError(msg)

        steam_dir = (
            Path(args.steam_dir).expanduser()
            if args.steam_dir
            else default_steam_dir()
        )
        return cls(
            version=version,
            steam_dir=steam_dir,
            force=bool(args.force),
            verbose=bool(args.verbose),
            network=NetworkConfig.from_env(env),
        )
