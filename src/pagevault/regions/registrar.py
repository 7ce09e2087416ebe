"""Region registrar: discovers page regions and hands them to the monitor."""

from __future__ import annotations

from typing import Dict, Iterable

from ..logging import get_logger
from .model import CaptureRegion, walk_regions
from .naming import DEFAULT_PREFIX, is_page_region
from .visibility import VisibilityMonitor

logger = get_logger(__name__)


class RegionRegistrar:
    def __init__(self, monitor: VisibilityMonitor, prefix: str = DEFAULT_PREFIX) -> None:
        self._monitor = monitor
        self._prefix = prefix
        self._registered: Dict[str, CaptureRegion] = {}

    @property
    def registered_ids(self) -> frozenset[str]:
        return frozenset(self._registered)

    def register_existing(self, regions: Iterable[CaptureRegion]) -> int:
        """Register page regions present at startup, including nested ones."""
        return self.on_nodes_added(regions)

    def on_nodes_added(self, nodes: Iterable[CaptureRegion]) -> int:
        """
        Handle a structural change in the viewer.

        Each added node is registered if it is a page region itself, and every
        page region nested beneath it is registered as well. A new region
        object under an id that is already registered replaces the old one.

        Returns:
            Number of regions newly registered or replaced by this call.
        """
        added = 0
        for node in nodes:
            for region in walk_regions(node):
                if self._register(region):
                    added += 1
        if added:
            logger.debug(f"Registered {added} new page regions ({len(self._registered)} total)")
        return added

    def _register(self, region: CaptureRegion) -> bool:
        region_id = region.region_id
        if not is_page_region(region_id, self._prefix):
            return False
        if self._registered.get(region_id) is region:
            return False
        self._registered[region_id] = region
        return self._monitor.observe(region)
