"""Export coordinator: drains captured pages into one output document."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from ..capture.raster import raster_dimensions
from ..capture.store import PageRecord, PageStore
from ..config import Settings
from ..logging import get_logger
from .assembler import AssemblerProvider, DocumentAssembler
from .geometry import PageGeometry
from .trigger import EMPTY_STORE_WARNING, ExportTrigger, LoggingNotifier, Notifier

logger = get_logger(__name__)


class ExportStatus(Enum):
    EXPORTED = "exported"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    status: ExportStatus
    path: Optional[Path] = None
    page_numbers: List[int] = field(default_factory=list)
    geometry: Optional[PageGeometry] = None
    error: Optional[str] = None

    @property
    def page_count(self) -> int:
        return len(self.page_numbers)


class ExportCoordinator:
    def __init__(
        self,
        store: PageStore,
        provider: AssemblerProvider,
        trigger: Optional[ExportTrigger] = None,
        notifier: Optional[Notifier] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._store = store
        self._provider = provider
        self._trigger = trigger or ExportTrigger()
        self._notifier = notifier or LoggingNotifier()
        self._settings = settings or Settings()

    @property
    def trigger(self) -> ExportTrigger:
        return self._trigger

    async def export_document(self) -> ExportResult:
        """
        Export every committed page, in ascending page order, as one PDF.

        Raises:
            ExportInProgressError: If another export holds the trigger.
        """
        self._trigger.begin()
        try:
            return await self._export()
        finally:
            self._trigger.finish()

    async def _export(self) -> ExportResult:
        settings = self._settings

        if not await self._store.wait_idle(settings.settle_timeout):
            logger.warning("Exporting without waiting for remaining in-flight captures")

        pages = self._store.snapshot()
        if not pages:
            self._notifier.warn(EMPTY_STORE_WARNING)
            return ExportResult(status=ExportStatus.EMPTY)

        page_numbers = [page.page_number for page in pages]
        logger.info(f"Exporting {len(pages)} pages: {page_numbers[0]}..{page_numbers[-1]}")

        try:
            # Every output page takes the size of the lowest-numbered page.
            width, height = await asyncio.to_thread(raster_dimensions, pages[0].raster)
            geometry = PageGeometry.from_pixels(width, height, settings.points_per_pixel)
            assembler = await self._provider.resolve()
            path = await asyncio.to_thread(
                self._assemble, assembler, pages, geometry, settings.output_path
            )
        except Exception as exc:
            logger.error(f"Export failed: {exc}")
            return ExportResult(status=ExportStatus.FAILED, page_numbers=page_numbers, error=str(exc))

        logger.info(f"Exported {len(pages)} pages to {path}")
        return ExportResult(
            status=ExportStatus.EXPORTED,
            path=path,
            page_numbers=page_numbers,
            geometry=geometry,
        )

    @staticmethod
    def _assemble(
        assembler: DocumentAssembler,
        pages: List[PageRecord],
        geometry: PageGeometry,
        path: Path,
    ) -> Path:
        handle: Any = assembler.create(geometry)
        try:
            for index, page in enumerate(pages):
                if index > 0:
                    assembler.append_page(handle, geometry)
                assembler.draw_image(
                    handle, page.raster, page.image_format, 0, 0, geometry.width, geometry.height
                )
                logger.debug(f"Added page {page.page_number} ({index + 1}/{len(pages)})")
        except Exception:
            assembler.close(handle)
            raise
        return assembler.persist(handle, path)
