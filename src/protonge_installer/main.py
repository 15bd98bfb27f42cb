"""Main CLI entry point for protonge-installer."""

import sys

import uvloop

from protonge_installer.cli import CLIRunner
from protonge_installer.logger import get_logger

logger = get_logger(__name__)


async def async_main() -> int:
    """Run the CLI asynchronously and return its exit code."""
    logger.debug("CLI started")
    runner = CLIRunner()
    return await runner.run()


def main() -> None:
    """Run the CLI application on a uvloop event loop.

    Exits with the runner's exit code; 1 on Ctrl-C or an unexpected error.
    """
    try:
        exit_code = uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
