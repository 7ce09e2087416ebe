"""Page store: the single record of which pages have been captured."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set

from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PageRecord:
    """An encoded raster snapshot of one page. Identity is ``page_number``."""
    page_number: int
    raster: bytes
    width: int
    height: int
    image_format: str = "JPEG"


class PageState(Enum):
    ABSENT = "absent"
    IN_FLIGHT = "in_flight"
    COMMITTED = "committed"


class PageStoreError(Exception):
    """Base class for page store misuse."""


class PageAlreadyCommittedError(PageStoreError):
    """Raised when a page number is committed twice."""


class PageNotClaimedError(PageStoreError):
    """Raised when committing or releasing a page that was never claimed."""


class PageStore:
    """
    Write-once mapping of page number to ``PageRecord``.

    Each page number moves ABSENT -> IN_FLIGHT -> COMMITTED. A failed capture
    releases its claim back to ABSENT so a later trigger can retry it.
    Committed records are never replaced or removed during a session.

    All methods run on the event loop thread; ``claim`` does not suspend, so
    overlapping triggers for one page cannot both pass it.
    """

    def __init__(self) -> None:
        self._records: Dict[int, PageRecord] = {}
        self._in_flight: Set[int] = set()
        self._idle = asyncio.Event()
        self._idle.set()

    def __contains__(self, page_number: object) -> bool:
        return page_number in self._records

    def __len__(self) -> int:
        return len(self._records)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def state(self, page_number: int) -> PageState:
        if page_number in self._records:
            return PageState.COMMITTED
        if page_number in self._in_flight:
            return PageState.IN_FLIGHT
        return PageState.ABSENT

    def get(self, page_number: int) -> Optional[PageRecord]:
        return self._records.get(page_number)

    def claim(self, page_number: int) -> bool:
        """
        Mark a page as being captured.

        Returns:
            True if the caller now owns the capture, False if the page is
            already in flight or committed.
        """
        if page_number < 0:
            raise ValueError(f"Page number must be non-negative: {page_number}")
        if self.state(page_number) is not PageState.ABSENT:
            return False
        self._in_flight.add(page_number)
        self._idle.clear()
        return True

    def commit(self, record: PageRecord) -> None:
        page_number = record.page_number
        if page_number in self._records:
            raise PageAlreadyCommittedError(f"Page {page_number} is already committed")
        if page_number not in self._in_flight:
            raise PageNotClaimedError(f"Page {page_number} was not claimed before commit")
        self._records[page_number] = record
        self._finish(page_number)

    def release(self, page_number: int) -> None:
        if page_number not in self._in_flight:
            raise PageNotClaimedError(f"Page {page_number} is not in flight")
        self._finish(page_number)

    async def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until no capture is in flight.

        Returns:
            True once idle, False if ``timeout`` seconds elapsed first.
        """
        if self._idle.is_set():
            return True
        try:
            await asyncio.wait_for(self._idle.wait(), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out after {timeout}s with {self.in_flight} captures in flight")
            return False
        return True

    def snapshot(self) -> List[PageRecord]:
        """Point-in-time copy of committed records, ascending by page number."""
        return [self._records[n] for n in sorted(self._records)]

    def page_numbers(self) -> List[int]:
        return sorted(self._records)

    def _finish(self, page_number: int) -> None:
        self._in_flight.discard(page_number)
        if not self._in_flight:
            self._idle.set()
