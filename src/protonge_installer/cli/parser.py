"""CLI argument parser for protonge-installer."""

import argparse
from argparse import Namespace
from collections.abc import Sequence

from protonge_installer.constants import LATEST_TOKEN


class CLIParser:
    """Command-line argument parser for protonge-installer."""

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_options(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="protonge-installer",
            description="Install GE-Proton into Steam's compatibility tools",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Install the latest release
  %(prog)s

  # Install a specific release (prefix optional)
  %(prog)s 9-20
  %(prog)s --version GE-Proton9-20

  # Reinstall into a custom Steam root
  %(prog)s -f -d ~/.local/share/Steam
            """,
        )

    def _add_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "release",
            nargs="?",
            default=None,
            metavar="VERSION",
            help="GE version (release) to install; overrides --version",
        )
        parser.add_argument(
            "-v",
            "--version",
            default=None,
            help=f"GE version (release) to install (default: {LATEST_TOKEN})",
        )
        parser.add_argument(
            "-d",
            "--steam-dir",
            "--steam_dir",
            dest="steam_dir",
            default=None,
            help="Steam root dir (default: ~/.steam/)",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Force to override already existing install",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug output",
        )
