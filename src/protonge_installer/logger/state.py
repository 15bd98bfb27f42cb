"""Process-wide bookkeeping for the installer's logging pipeline."""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener


class _LoggerState:
    """What setup_logging() built, so later calls can reuse or tear it down.

    Attributes:
        lock: Serializes the one-time setup of the ``protonge_installer``
            logger
        root_initialized: True once handlers are attached
        queue_listener: Thread writing queued records to console/file
        log_queue: Queue between QueueHandler and queue_listener

    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.root_initialized = False
        self.queue_listener: QueueListener | None = None
        self.log_queue: queue.Queue | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Return the logging bookkeeping shared by this process."""
    return _state
