"""
Capture session.

Wires the event channel, visibility monitor, region registrar, page store,
capture service and export coordinator together, and runs the single
consumer loop that turns viewer events into captures and exports.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Set

from .capture.service import PageCaptureService
from .capture.store import PageStore
from .config import Settings
from .events import EventChannel, ExportRequested, RegionsAdded, RegionVisible
from .export.assembler import AssemblerLoader, AssemblerProvider
from .export.coordinator import ExportCoordinator, ExportResult
from .export.trigger import ExportInProgressError, ExportTrigger, LoggingNotifier, Notifier
from .logging import get_logger
from .regions.model import CaptureRegion
from .regions.registrar import RegionRegistrar
from .regions.visibility import VisibilityMonitor

logger = get_logger(__name__)


class CaptureSession:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        assembler_loader: Optional[AssemblerLoader] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.store = PageStore()
        self.channel = EventChannel()
        self.monitor = VisibilityMonitor(self.channel, self.settings.visibility_threshold)
        self.registrar = RegionRegistrar(self.monitor, self.settings.region_prefix)
        self.capture_service = PageCaptureService(self.store, self.settings)
        self.trigger = ExportTrigger()
        self.notifier = notifier or LoggingNotifier()
        self.coordinator = ExportCoordinator(
            self.store,
            AssemblerProvider(assembler_loader),
            trigger=self.trigger,
            notifier=self.notifier,
            settings=self.settings,
        )
        self.exports: List[ExportResult] = []
        self._captures: Set[asyncio.Task] = set()
        self._export_tasks: Set[asyncio.Task] = set()
        self._runner: Optional[asyncio.Task] = None

    def start(self, regions: Iterable[CaptureRegion] = ()) -> asyncio.Task:
        """Register the regions present at startup and launch the consumer loop."""
        self.registrar.register_existing(regions)
        self._runner = asyncio.get_running_loop().create_task(self.run())
        return self._runner

    def regions_added(self, nodes: Iterable[CaptureRegion]) -> None:
        self.channel.put_nowait(RegionsAdded(tuple(nodes)))

    def visibility_changed(self, region_id: str, ratio: float) -> bool:
        return self.monitor.update(region_id, ratio)

    def request_export(self) -> None:
        self.channel.put_nowait(ExportRequested())

    async def run(self) -> None:
        while True:
            event = await self.channel.get()
            if event is None:
                break
            if isinstance(event, RegionVisible):
                self._spawn_capture(event.region)
            elif isinstance(event, RegionsAdded):
                self.registrar.on_nodes_added(event.nodes)
            elif isinstance(event, ExportRequested):
                self._spawn_export()
        logger.debug("Event channel closed, consumer loop stopped")

    async def close(self) -> None:
        """Stop the consumer loop and wait for outstanding captures and exports."""
        self.channel.close()
        if self._runner is not None:
            await self._runner
        if self._captures:
            await asyncio.gather(*self._captures)
        if self._export_tasks:
            await asyncio.gather(*self._export_tasks)

    def _spawn_capture(self, region: CaptureRegion) -> None:
        task = asyncio.get_running_loop().create_task(self.capture_service.capture(region))
        self._captures.add(task)
        task.add_done_callback(self._captures.discard)

    def _spawn_export(self) -> None:
        if not self.trigger.enabled:
            logger.info("Export already in progress, ignoring request")
            return
        task = asyncio.get_running_loop().create_task(self._export())
        self._export_tasks.add(task)
        task.add_done_callback(self._export_tasks.discard)

    async def _export(self) -> None:
        try:
            result = await self.coordinator.export_document()
        except ExportInProgressError:
            logger.info("Export already in progress, ignoring request")
            return
        self.exports.append(result)
