"""Page capture service: converts visible page regions into page records."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

from ..config import Settings
from ..logging import get_logger
from ..regions.model import CaptureRegion
from ..regions.naming import parse_page_number
from .raster import encode_raster
from .store import PageRecord, PageStore

logger = get_logger(__name__)


class CaptureOutcome(Enum):
    CAPTURED = "captured"
    SKIPPED_NOT_PAGE = "skipped_not_page"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    SKIPPED_NO_IMAGE = "skipped_no_image"
    FAILED = "failed"


class PageCaptureService:
    def __init__(self, store: PageStore, settings: Optional[Settings] = None) -> None:
        self._store = store
        self._settings = settings or Settings()
        self.failures = 0

    async def capture(self, region: CaptureRegion) -> CaptureOutcome:
        """
        Capture one page region into the store, at most once per page.

        Failures are logged and leave the page absent so that a later
        visibility trigger can retry it. This method does not raise for
        load or encoding errors.
        """
        settings = self._settings
        page_number = parse_page_number(region.region_id, settings.region_prefix)
        if page_number is None:
            logger.debug(f"Ignoring region {region.region_id!r}: not a page region")
            return CaptureOutcome.SKIPPED_NOT_PAGE

        if not self._store.claim(page_number):
            logger.debug(f"Page {page_number} already {self._store.state(page_number).value}, skipping")
            return CaptureOutcome.SKIPPED_DUPLICATE

        image = region.find_image(settings.image_marker)
        if image is None:
            self._store.release(page_number)
            logger.debug(f"Page {page_number} has no image yet, skipping")
            return CaptureOutcome.SKIPPED_NO_IMAGE

        logger.info(f"Saving page {page_number}...")
        try:
            if not image.complete:
                await image.wait_loaded()
            content = image.snapshot()
            raster = await asyncio.to_thread(
                encode_raster, content, settings.image_format, settings.jpeg_quality
            )
        except Exception as exc:
            self._store.release(page_number)
            self.failures += 1
            logger.error(f"Error saving page {page_number}: {exc}")
            return CaptureOutcome.FAILED
        except BaseException:
            self._store.release(page_number)
            raise

        self._store.commit(
            PageRecord(
                page_number=page_number,
                raster=raster.data,
                width=raster.width,
                height=raster.height,
                image_format=raster.image_format,
            )
        )
        logger.info(f"Page {page_number} saved.")
        return CaptureOutcome.CAPTURED
