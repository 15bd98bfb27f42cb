"""CLI runner for protonge-installer.

Parses arguments, runs the install pipeline and maps its result to an
exit code. This is the only place where pipeline errors are caught.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from protonge_installer.config import InstallerConfig
from protonge_installer.exceptions import InstallerError
from protonge_installer.http_session import create_http_session
from protonge_installer.install import InstallOrchestrator
from protonge_installer.logger import get_logger, set_console_level

from .parser import CLIParser

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    import aiohttp

    from protonge_installer.config import NetworkConfig

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(
        self,
        orchestrator_factory: Callable[
            [aiohttp.ClientSession, NetworkConfig], InstallOrchestrator
        ]
        | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize CLI runner.

        Args:
            orchestrator_factory: Builds the orchestrator for a session and
                its network settings
                (defaults to InstallOrchestrator.create_default)
            env: Environment mapping (defaults to os.environ)

        """
        self.orchestrator_factory = (
            orchestrator_factory or InstallOrchestrator.create_default
        )
        self.env = os.environ if env is None else env

    async def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the installer.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Process exit code

        """
        args = CLIParser().parse_args(argv)
        if args.verbose:
            set_console_level("DEBUG")

        try:
            config = InstallerConfig.from_args(args, self.env)
            logger.debug(
                "Installing %s into %s (force=%s)",
                config.version,
                config.destination_root,
                config.force,
            )
            async with create_http_session(config.network) as session:
                orchestrator = self.orchestrator_factory(
                    session, config.network
                )
                await orchestrator.install(
                    config.version, config.destination_root, config.force
                )
        except InstallerError as e:
            logger.error("%s", e)  # noqa: TRY400
            return EXIT_FAILURE

        return EXIT_OK
