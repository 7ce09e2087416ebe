"""Capture region and image source ports.

A capture region is owned by the viewer; the pipeline only reads its
identifier and its image content, and never mutates it.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, Iterator, Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np
from PIL import Image

DEFAULT_IMAGE_MARKER = "img.mainViewerImg"

ImageContent = Union[Image.Image, np.ndarray]


class ImageLoadError(Exception):
    """Raised when a region's image content fails to load."""


@runtime_checkable
class ImageSource(Protocol):
    @property
    def complete(self) -> bool:
        ...

    async def wait_loaded(self) -> None:
        ...

    def snapshot(self) -> ImageContent:
        ...


@runtime_checkable
class CaptureRegion(Protocol):
    @property
    def region_id(self) -> str:
        ...

    def find_image(self, marker: str) -> Optional[ImageSource]:
        ...

    def children(self) -> Iterable["CaptureRegion"]:
        ...


class StaticImage:
    """In-memory image source, optionally gated until released."""

    def __init__(
        self,
        content: Optional[ImageContent] = None,
        *,
        complete: bool = True,
        gate: Optional[asyncio.Event] = None,
        load_error: Optional[Exception] = None,
    ) -> None:
        self._content = content
        self._complete = complete
        self._gate = gate
        self._load_error = load_error
        self.snapshot_count = 0

    @property
    def complete(self) -> bool:
        return self._complete

    async def wait_loaded(self) -> None:
        if self._gate is not None:
            await self._gate.wait()
        if self._load_error is not None:
            raise ImageLoadError(str(self._load_error)) from self._load_error
        self._complete = True

    def snapshot(self) -> ImageContent:
        self.snapshot_count += 1
        if self._content is None:
            raise ImageLoadError("Image has no content")
        return self._content


class FileImage:
    """Image source backed by a raster file on disk, loaded lazily."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._image: Optional[Image.Image] = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def complete(self) -> bool:
        return self._image is not None

    async def wait_loaded(self) -> None:
        if self._image is None:
            self._image = await asyncio.to_thread(self._load)

    def snapshot(self) -> ImageContent:
        if self._image is None:
            self._image = self._load()
        return self._image

    def _load(self) -> Image.Image:
        try:
            with Image.open(self._path) as img:
                img.load()
                return img.copy()
        except Exception as exc:
            raise ImageLoadError(f"Failed to load image {self._path}: {exc}") from exc


class StaticRegion:
    """A page region with at most one marked image and optional nested regions."""

    def __init__(
        self,
        region_id: str,
        image: Optional[ImageSource] = None,
        children: Sequence["StaticRegion"] = (),
        image_marker: str = DEFAULT_IMAGE_MARKER,
    ) -> None:
        self._region_id = region_id
        self._image = image
        self._children = list(children)
        self._image_marker = image_marker

    @property
    def region_id(self) -> str:
        return self._region_id

    def find_image(self, marker: str) -> Optional[ImageSource]:
        if marker != self._image_marker:
            return None
        return self._image

    def children(self) -> Iterator["StaticRegion"]:
        return iter(self._children)

    def __repr__(self) -> str:
        return f"StaticRegion({self._region_id!r})"


def walk_regions(root: CaptureRegion) -> Iterator[CaptureRegion]:
    """Yield a region and every region nested beneath it, depth first."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children())))
