from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Orientation = Literal["portrait", "landscape"]

# PDF points per CSS pixel (96 px/in rendered onto 72 pt/in)
POINTS_PER_PIXEL = 72.0 / 96.0


@dataclass(frozen=True)
class PageGeometry:
    """Output page size in PDF points."""
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Page geometry must be positive: {self.width}x{self.height}")

    @property
    def orientation(self) -> Orientation:
        return "landscape" if self.width > self.height else "portrait"

    @classmethod
    def from_pixels(
        cls, width: int, height: int, points_per_pixel: float = POINTS_PER_PIXEL
    ) -> PageGeometry:
        return cls(width=width * points_per_pixel, height=height * points_per_pixel)
