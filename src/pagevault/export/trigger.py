"""Export control state and user notifications."""

from __future__ import annotations

from typing import List, Protocol

from ..logging import get_logger

logger = get_logger(__name__)

IDLE_LABEL = "Export PDF"
BUSY_LABEL = "Exporting PDF..."
EMPTY_STORE_WARNING = "No pages saved yet!"


class ExportInProgressError(Exception):
    """Raised when an export is requested while another is running."""


class Notifier(Protocol):
    def warn(self, message: str) -> None:
        ...


class LoggingNotifier:
    def warn(self, message: str) -> None:
        logger.warning(message)


class RecordingNotifier:
    """Keeps every warning shown to the user."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)
        logger.warning(message)


class ExportTrigger:
    """The on-screen export control: disabled and relabelled while busy."""

    def __init__(self) -> None:
        self._enabled = True
        self._label = IDLE_LABEL

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def label(self) -> str:
        return self._label

    def begin(self) -> None:
        if not self._enabled:
            raise ExportInProgressError("An export is already in progress")
        self._enabled = False
        self._label = BUSY_LABEL

    def finish(self) -> None:
        self._enabled = True
        self._label = IDLE_LABEL
