"""Event channel feeding the capture session's consumer loop."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple, Union

if TYPE_CHECKING:
    from .regions.model import CaptureRegion


@dataclass(frozen=True)
class RegionVisible:
    """A registered region crossed the visibility threshold."""
    region: CaptureRegion


@dataclass(frozen=True)
class RegionsAdded:
    """Nodes were added to the viewer's structure."""
    nodes: Tuple[CaptureRegion, ...]


@dataclass(frozen=True)
class ExportRequested:
    """The user pressed the export control."""


Event = Union[RegionVisible, RegionsAdded, ExportRequested]

_CLOSED = object()


class ChannelClosedError(Exception):
    """Raised when publishing to a closed channel."""


class EventChannel:
    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put_nowait(self, event: Event) -> None:
        if self._closed:
            raise ChannelClosedError(f"Cannot publish {type(event).__name__} to a closed channel")
        self._queue.put_nowait(event)

    async def get(self) -> Optional[Event]:
        """Return the next event, or None once the channel is closed and drained."""
        item = await self._queue.get()
        if item is _CLOSED:
            return None
        return item

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)
