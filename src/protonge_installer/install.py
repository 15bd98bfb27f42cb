"""Install orchestration for GE-Proton releases.

Sequences resolve → check existing → download → verify → extract under a
single destination root. Every stage either completes or raises; the first
failure ends the run.
"""

from __future__ import annotations

import asyncio
import shutil
from enum import Enum
from typing import TYPE_CHECKING

from protonge_installer.download import DownloadService
from protonge_installer.exceptions import (
    FilesystemError,
    InstallerError,
    IntegrityError,
)
from protonge_installer.extract import ArchiveExtractor
from protonge_installer.github import ReleaseResolver, classify_assets
from protonge_installer.logger import get_logger
from protonge_installer.verification import ChecksumVerifier

if TYPE_CHECKING:
    from pathlib import Path

    import aiohttp

    from protonge_installer.config import NetworkConfig

logger = get_logger(__name__)


class InstallState(Enum):
    """States of a single install run."""

    RESOLVING = "resolving"
    CHECKING_EXISTING = "checking_existing"
    DOWNLOADING = "downloading"
    VERIFYING = "verifying"
    EXTRACTING = "extracting"
    DONE = "done"
    ALREADY_INSTALLED = "already_installed"
    FAILED = "failed"


class InstallOutcome(Enum):
    """Successful results of an install run."""

    INSTALLED = "installed"
    ALREADY_INSTALLED = "already_installed"


def remove_existing(path: Path) -> None:
    """Remove an installed release directory (or a stray file) entirely.

    Raises:
        FilesystemError: If removal fails

    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        msg = f"could not remove existing install: {e}"
        raise FilesystemError(msg, target=str(path)) from e


def ensure_destination_root(path: Path) -> None:
    """Create the destination root if missing.

    Raises:
        FilesystemError: If it exists but is not a directory, or cannot
            be created

    """
    try:
        if path.is_dir():
            return
        if path.exists():
            msg = "destination exists but is not a directory"
            raise FilesystemError(msg, target=str(path))
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"could not create destination directory: {e}"
        raise FilesystemError(msg, target=str(path)) from e
    logger.info("Created %s", path)


class InstallOrchestrator:
    """Runs the install pipeline for one version token.

    Attributes:
        resolver: Resolves version tokens to releases
        download_service: Downloads the payload archive
        verifier: Checks the archive against its checksum file
        extractor: Unpacks the verified archive
        state: Current InstallState, for diagnostics

    Example:
        >>> async with create_http_session(config.network) as session:
        ...     orchestrator = InstallOrchestrator.create_default(session)
        ...     outcome = await orchestrator.install(
        ...         "latest", config.destination_root
        ...     )

    """

    def __init__(
        self,
        resolver: ReleaseResolver,
        download_service: DownloadService,
        verifier: ChecksumVerifier,
        extractor: ArchiveExtractor,
    ) -> None:
        """Initialize orchestrator with its pipeline stages."""
        self.resolver = resolver
        self.download_service = download_service
        self.verifier = verifier
        self.extractor = extractor
        self.state = InstallState.RESOLVING
        self.history: list[InstallState] = []

    @classmethod
    def create_default(
        cls,
        session: aiohttp.ClientSession,
        network: NetworkConfig | None = None,
    ) -> InstallOrchestrator:
        """Create an orchestrator with the default stage implementations."""
        download_service = DownloadService(session, network=network)
        return cls(
            resolver=ReleaseResolver(session),
            download_service=download_service,
            verifier=ChecksumVerifier(download_service),
            extractor=ArchiveExtractor(),
        )

    def _transition(self, state: InstallState) -> None:
        logger.debug("Install state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    async def install(
        self,
        version: str,
        destination_root: Path,
        force: bool = False,  # noqa: FBT001, FBT002
    ) -> InstallOutcome:
        """Install a release below ``destination_root``.

        Args:
            version: "latest" or a version identifier
            destination_root: Directory holding one folder per release
            force: Remove and reinstall an existing copy

        Returns:
            INSTALLED, or ALREADY_INSTALLED when nothing had to be done

        Raises:
            InstallerError: Any stage failure; state is FAILED afterwards

        """
        self.history = []
        self._transition(InstallState.RESOLVING)
        try:
            return await self._run(version, destination_root, force)
        except BaseException:
            self._transition(InstallState.FAILED)
            raise

    async def _run(
        self,
        version: str,
        destination_root: Path,
        force: bool,  # noqa: FBT001
    ) -> InstallOutcome:
        release = await self.resolver.resolve(version)
        logger.info("Found release: %s", release.tag_name)

        self._transition(InstallState.CHECKING_EXISTING)
        install_dir = destination_root / release.tag_name
        if self._is_installed(install_dir):
            if not force:
                logger.info(
                    "%s already is installed under %s",
                    release.tag_name,
                    install_dir,
                )
                self._transition(InstallState.ALREADY_INSTALLED)
                return InstallOutcome.ALREADY_INSTALLED
            logger.info("Removing existing install %s", install_dir)
            await asyncio.to_thread(remove_existing, install_dir)

        ensure_destination_root(destination_root)
        selected = classify_assets(release.assets, release.tag_name)
        artifact = destination_root / selected.payload.name

        self._transition(InstallState.DOWNLOADING)
        try:
            await self.download_service.download_file(
                selected.payload.browser_download_url, artifact
            )
            logger.info("Successfully downloaded %s", selected.payload.name)

            self._transition(InstallState.VERIFYING)
            result = await self.verifier.verify(
                artifact, selected.checksum.browser_download_url
            )
            if not result.passed:
                msg = "checksums not matching"
                raise IntegrityError(msg, target=selected.payload.name)
            logger.info("Checksums matching!")

            self._transition(InstallState.EXTRACTING)
            try:
                await asyncio.to_thread(
                    self.extractor.extract, artifact, destination_root
                )
            except InstallerError:
                logger.warning(
                    "Extraction failed; %s may be incomplete, "
                    "reinstall with --force",
                    install_dir,
                )
                raise
        finally:
            self._remove_artifact(artifact)

        self._transition(InstallState.DONE)
        logger.info("Done! %s installed to %s", release.tag_name, install_dir)
        return InstallOutcome.INSTALLED

    @staticmethod
    def _is_installed(install_dir: Path) -> bool:
        try:
            return install_dir.exists() or install_dir.is_symlink()
        except OSError as e:
            msg = f"could not check for an existing install: {e}"
            raise FilesystemError(msg, target=str(install_dir)) from e

    @staticmethod
    def _remove_artifact(artifact: Path) -> None:
        try:
            artifact.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", artifact, e)
        else:
            logger.debug("Removed temporary archive %s", artifact)
