"""
Raster encoding for captured pages.

Turns the displayed image of a page region into an encoded blob that the
document assembler can place on an output page.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image

from ..logging import get_logger
from ..regions.model import ImageContent

logger = get_logger(__name__)

SUPPORTED_FORMATS = ("JPEG", "PNG")


class RasterEncodingError(Exception):
    """Raised when an image cannot be encoded or decoded."""


@dataclass(frozen=True)
class EncodedRaster:
    data: bytes
    width: int
    height: int
    image_format: str


def _to_pil(image: ImageContent) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    if isinstance(image, np.ndarray):
        if image.dtype != np.uint8:
            image = np.clip(image, 0, 255).astype(np.uint8)
        return Image.fromarray(image)
    raise RasterEncodingError(f"Unsupported image content: {type(image).__name__}")


def encode_raster(
    image: ImageContent,
    image_format: str = "JPEG",
    quality: int = 92,
) -> EncodedRaster:
    """
    Encode an image into a raster blob.

    Args:
        image: Pillow image or numpy array (H x W or H x W x C, RGB order)
        image_format: "JPEG" or "PNG"
        quality: JPEG quality (ignored for PNG)

    Returns:
        EncodedRaster with the encoded bytes and pixel dimensions

    Raises:
        RasterEncodingError: If the image is empty or cannot be encoded
    """
    image_format = image_format.upper()
    if image_format not in SUPPORTED_FORMATS:
        raise RasterEncodingError(f"Unsupported raster format: {image_format}")

    try:
        pil_image = _to_pil(image)
        width, height = pil_image.size
        if width == 0 or height == 0:
            raise RasterEncodingError(f"Image has zero area ({width}x{height})")

        # JPEG has no alpha channel
        if image_format == "JPEG" and pil_image.mode != "RGB":
            pil_image = pil_image.convert("RGB")

        buffer = io.BytesIO()
        if image_format == "JPEG":
            pil_image.save(buffer, format="JPEG", quality=quality)
        else:
            pil_image.save(buffer, format="PNG")
    except RasterEncodingError:
        raise
    except Exception as exc:
        raise RasterEncodingError(f"Failed to encode image as {image_format}: {exc}") from exc

    data = buffer.getvalue()
    logger.debug(f"Encoded {width}x{height} raster as {image_format} ({len(data)} bytes)")
    return EncodedRaster(data=data, width=width, height=height, image_format=image_format)


def raster_dimensions(blob: bytes) -> Tuple[int, int]:
    """Read the pixel dimensions of an encoded raster blob."""
    try:
        with Image.open(io.BytesIO(blob)) as img:
            return img.size
    except Exception as exc:
        raise RasterEncodingError(f"Cannot read raster dimensions: {exc}") from exc
