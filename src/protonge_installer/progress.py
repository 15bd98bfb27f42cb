"""Background progress indicator for long-running transfers.

The reporter prints a tick at a fixed interval from its own asyncio task
until it is told to stop. It is used as an async context manager so the
stop signal is sent, and the task awaited, on every exit path:

    async with DotProgressReporter():
        await transfer()
"""

from __future__ import annotations

import asyncio
import sys
from contextlib import suppress
from typing import TYPE_CHECKING, TextIO

from protonge_installer.constants import PROGRESS_INTERVAL_SECONDS
from protonge_installer.logger import get_logger

if TYPE_CHECKING:
    from types import TracebackType

logger = get_logger(__name__)


class DotProgressReporter:
    """Prints ``downloading ....`` while a transfer is in flight.

    The reporter shares nothing with the transfer except a one-shot
    asyncio.Event used as the stop signal.
    """

    def __init__(
        self,
        label: str = "downloading",
        interval: float = PROGRESS_INTERVAL_SECONDS,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            label: Text printed once before the first tick
            interval: Seconds between ticks
            stream: Output stream (defaults to sys.stdout)

        """
        self.label = label
        self.interval = interval
        self.stream = stream or sys.stdout
        self._stop = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0

    def is_running(self) -> bool:
        """Return True while the background task is alive."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background tick task."""
        if self._task is not None:
            logger.warning("Progress reporter already started")
            return
        self._stop.clear()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Signal the task to stop and wait until it has exited."""
        if self._task is None:
            return
        self._stop.set()
        try:
            await self._task
        finally:
            self._task = None

    async def _run(self) -> None:
        self._write(f"{self.label} ")
        try:
            while not self._stop.is_set():
                self._write(".")
                self.ticks += 1
                with suppress(TimeoutError):
                    await asyncio.wait_for(
                        self._stop.wait(), timeout=self.interval
                    )
        finally:
            self._write(". finished\n")

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    async def __aenter__(self) -> DotProgressReporter:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()
