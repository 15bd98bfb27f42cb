"""Pytest configuration and fixtures for protonge-installer tests.

Provides:
- Log propagation so caplog sees records from the queue-based logger
- Mocked aiohttp sessions and responses
- A factory for building real ``.tar.gz`` archives
- Sample GitHub API release payloads
"""

import hashlib
import io
import logging
import tarfile
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import orjson
import pytest

from protonge_installer.progress import DotProgressReporter

TAG_NAME = "GE-Proton9-20"
PAYLOAD_NAME = f"{TAG_NAME}.tar.gz"
CHECKSUM_NAME = f"{TAG_NAME}.sha512sum"
PAYLOAD_URL = f"https://example.com/download/{PAYLOAD_NAME}"
CHECKSUM_URL = f"https://example.com/download/{CHECKSUM_NAME}"
LATEST_URL = (
    "https://api.github.com/repos/GloriousEggroll/proton-ge-custom/"
    "releases/latest"
)


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("protonge_installer"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


# =============================================================================
# HTTP Mocks
# =============================================================================


async def async_chunk_gen(
    chunks: list[bytes],
) -> AsyncGenerator[bytes, None]:
    """Async generator yielding chunks for simulating HTTP responses."""
    for chunk in chunks:
        yield chunk


def make_response(
    status: int = 200,
    body: bytes = b"",
    chunks: list[bytes] | None = None,
    reason: str = "OK",
) -> AsyncMock:
    """Build a mock aiohttp response usable with ``async with``.

    Args:
        status: HTTP status code
        body: Full body returned by read()/text()
        chunks: Chunks yielded by content.iter_chunked (defaults to [body])
        reason: HTTP reason phrase

    """
    response = AsyncMock()
    response.__aenter__.return_value = response
    response.__aexit__.return_value = None
    response.status = status
    response.reason = reason
    response.headers = {"Content-Length": str(len(body))}
    response.read = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=body.decode("utf-8", "replace"))
    stream = chunks if chunks is not None else [body]
    response.content.iter_chunked = lambda size: async_chunk_gen(stream)
    return response


@pytest.fixture
def response_factory() -> Callable[..., AsyncMock]:
    """Expose make_response to tests."""
    return make_response


@pytest.fixture
def mock_session() -> MagicMock:
    """Provide a mock aiohttp.ClientSession."""
    return MagicMock()


def route_session(session: MagicMock, routes: dict[str, Any]) -> None:
    """Answer session.get(url) from a URL → response (or exception) map."""

    def get(url: str, **kwargs: Any) -> Any:
        target = routes[url]
        if isinstance(target, BaseException):
            raise target
        return target

    session.get.side_effect = get


@pytest.fixture
def routed_session(mock_session: MagicMock) -> Callable[..., MagicMock]:
    """Return a function that wires URL routes into the mock session."""

    def _route(routes: dict[str, Any]) -> MagicMock:
        route_session(mock_session, routes)
        return mock_session

    return _route


@pytest.fixture
def quiet_progress() -> Callable[[], DotProgressReporter]:
    """Progress factory writing fast ticks to an in-memory stream."""
    return lambda: DotProgressReporter(interval=0.01, stream=io.StringIO())


# =============================================================================
# Archives
# =============================================================================

# (name, kind, payload, mode); payload is bytes for files, target for links
ArchiveEntry = tuple[str, str, bytes | str | None, int]


def build_targz(path: Path, entries: list[ArchiveEntry]) -> Path:
    """Write a gzip-compressed tar archive with the given entries in order."""
    with tarfile.open(path, mode="w:gz") as archive:
        for name, kind, payload, mode in entries:
            info = tarfile.TarInfo(name)
            info.mode = mode
            if kind == "dir":
                info.type = tarfile.DIRTYPE
                archive.addfile(info)
            elif kind == "file":
                data = payload if isinstance(payload, bytes) else b""
                info.size = len(data)
                archive.addfile(info, io.BytesIO(data))
            elif kind == "symlink":
                info.type = tarfile.SYMTYPE
                info.linkname = str(payload)
                archive.addfile(info)
            elif kind == "hardlink":
                info.type = tarfile.LNKTYPE
                info.linkname = str(payload)
                archive.addfile(info)
            elif kind == "fifo":
                info.type = tarfile.FIFOTYPE
                archive.addfile(info)
            else:
                msg = f"unknown entry kind {kind}"
                raise ValueError(msg)
    return path


def proton_entries() -> list[ArchiveEntry]:
    """Entries resembling a small GE-Proton release archive."""
    return [
        (f"{TAG_NAME}", "dir", None, 0o755),
        (f"{TAG_NAME}/proton", "file", b"#!/usr/bin/env python3\n", 0o755),
        (f"{TAG_NAME}/version", "file", b"1700000000 GE-Proton9-20\n", 0o644),
        (f"{TAG_NAME}/files/lib", "dir", None, 0o755),
        (f"{TAG_NAME}/files/lib/libfoo.so.1", "file", b"\x7fELF", 0o644),
        (f"{TAG_NAME}/files/lib/libfoo.so", "symlink", "libfoo.so.1", 0o777),
    ]


@pytest.fixture
def targz_factory(tmp_path: Path) -> Callable[..., Path]:
    """Return a function building archives inside a scratch directory."""
    scratch = tmp_path / "archives"
    scratch.mkdir()

    def _build(
        entries: list[ArchiveEntry], name: str = PAYLOAD_NAME
    ) -> Path:
        return build_targz(scratch / name, entries)

    return _build


@pytest.fixture
def proton_archive_bytes(targz_factory: Callable[..., Path]) -> bytes:
    """Bytes of a realistic release archive."""
    return targz_factory(proton_entries()).read_bytes()


def sha512_hex(data: bytes) -> str:
    """Hex SHA-512 of bytes."""
    return hashlib.sha512(data).hexdigest()


# =============================================================================
# Release payloads
# =============================================================================


def release_payload(
    tag_name: str = TAG_NAME,
    assets: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """GitHub API release JSON for a GE-Proton release."""
    if assets is None:
        assets = [
            {
                "name": PAYLOAD_NAME,
                "size": 1024,
                "browser_download_url": PAYLOAD_URL,
            },
            {
                "name": CHECKSUM_NAME,
                "size": 160,
                "browser_download_url": CHECKSUM_URL,
            },
        ]
    return {
        "tag_name": tag_name,
        "html_url": f"https://github.com/releases/tag/{tag_name}",
        "assets": assets,
    }


@pytest.fixture
def release_json() -> bytes:
    """Encoded release payload."""
    return orjson.dumps(release_payload())
