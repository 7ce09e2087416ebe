"""Visibility monitor raising capture triggers on threshold crossings."""

from __future__ import annotations

from typing import Dict, Optional

from ..events import EventChannel, RegionVisible
from ..logging import get_logger
from .model import CaptureRegion

logger = get_logger(__name__)


class VisibilityMonitor:
    """
    Track intersection ratios for observed regions.

    A ``RegionVisible`` event is published each time an observed region moves
    from below the threshold to at-or-above it. Regions may fire many times
    over their lifetime as the viewer scrolls back and forth.
    """

    def __init__(self, channel: EventChannel, threshold: float = 0.5) -> None:
        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"Visibility threshold must be in (0, 1]: {threshold}")
        self._channel = channel
        self._threshold = threshold
        self._regions: Dict[str, CaptureRegion] = {}
        self._visible: Dict[str, bool] = {}

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def observed_count(self) -> int:
        return len(self._regions)

    def observe(self, region: CaptureRegion) -> bool:
        """
        Begin observing a region.

        A different region arriving under an id that is already observed
        replaces the old one (the viewer swapped the container) and starts
        again from not visible.

        Returns:
            False if this exact region was already observed.
        """
        region_id = region.region_id
        current = self._regions.get(region_id)
        if current is region:
            return False
        self._regions[region_id] = region
        self._visible[region_id] = False
        if current is None:
            logger.debug(f"Observing region {region_id}")
        else:
            logger.debug(f"Region {region_id} was replaced, observing the new one")
        return True

    def region(self, region_id: str) -> Optional[CaptureRegion]:
        return self._regions.get(region_id)

    def is_observed(self, region_id: str) -> bool:
        return region_id in self._regions

    def update(self, region_id: str, ratio: float) -> bool:
        """
        Feed a new intersection ratio for a region.

        Returns:
            True if the update raised a visibility trigger.
        """
        region = self._regions.get(region_id)
        if region is None:
            logger.debug(f"Ignoring visibility update for unobserved region {region_id}")
            return False

        now_visible = ratio >= self._threshold
        was_visible = self._visible[region_id]
        self._visible[region_id] = now_visible

        if now_visible and not was_visible:
            logger.debug(f"Region {region_id} became visible (ratio={ratio:.2f})")
            self._channel.put_nowait(RegionVisible(region))
            return True
        return False
