"""Export of captured pages into a single PDF."""

from .assembler import (
    AssemblerError,
    AssemblerProvider,
    AssemblerUnavailableError,
    DocumentAssembler,
    default_assembler_loader,
)
from .coordinator import ExportCoordinator, ExportResult, ExportStatus
from .geometry import PageGeometry
from .trigger import (
    BUSY_LABEL,
    EMPTY_STORE_WARNING,
    IDLE_LABEL,
    ExportInProgressError,
    ExportTrigger,
    LoggingNotifier,
    Notifier,
    RecordingNotifier,
)

__all__ = [
    "AssemblerError",
    "AssemblerProvider",
    "AssemblerUnavailableError",
    "DocumentAssembler",
    "default_assembler_loader",
    "ExportCoordinator",
    "ExportResult",
    "ExportStatus",
    "PageGeometry",
    "BUSY_LABEL",
    "EMPTY_STORE_WARNING",
    "IDLE_LABEL",
    "ExportInProgressError",
    "ExportTrigger",
    "LoggingNotifier",
    "Notifier",
    "RecordingNotifier",
]
