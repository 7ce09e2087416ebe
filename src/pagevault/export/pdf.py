"""PyMuPDF-backed document assembler."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import fitz  # type: ignore[import]

from ..logging import get_logger
from .assembler import AssemblerError
from .geometry import PageGeometry

logger = get_logger(__name__)


@dataclass
class PdfHandle:
    document: fitz.Document

    @property
    def page_count(self) -> int:
        return self.document.page_count


class PdfAssembler:
    """Compose raster pages into a PDF with PyMuPDF."""

    def create(self, geometry: PageGeometry) -> PdfHandle:
        document = fitz.open()
        try:
            document.new_page(width=geometry.width, height=geometry.height)
        except Exception as exc:
            document.close()
            raise AssemblerError(f"Failed to create document: {exc}") from exc
        logger.debug(
            f"Created PDF with {geometry.width:.1f}x{geometry.height:.1f}pt "
            f"{geometry.orientation} pages"
        )
        return PdfHandle(document=document)

    def append_page(self, handle: PdfHandle, geometry: PageGeometry) -> None:
        try:
            handle.document.new_page(width=geometry.width, height=geometry.height)
        except Exception as exc:
            raise AssemblerError(f"Failed to append page: {exc}") from exc

    def draw_image(
        self,
        handle: PdfHandle,
        raster: bytes,
        image_format: str,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Place a raster on the last page, stretched to the given box."""
        if handle.page_count == 0:
            raise AssemblerError("Document has no page to draw on")
        page = handle.document[handle.page_count - 1]
        rect = fitz.Rect(x, y, x + width, y + height)
        try:
            page.insert_image(rect, stream=raster, keep_proportion=False)
        except Exception as exc:
            raise AssemblerError(f"Failed to draw {image_format} image: {exc}") from exc

    def persist(self, handle: PdfHandle, path: Path) -> Path:
        """
        Save the document to ``path`` and close it.

        The PDF is written to a temporary file beside the destination and
        renamed into place, so a failed save leaves no partial file.
        """
        path = Path(path)
        tmp_path: Optional[Path] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".pdf", dir=path.parent)
            os.close(fd)
            tmp_path = Path(tmp_name)
            handle.document.save(str(tmp_path), garbage=3, deflate=True)
            os.replace(tmp_path, path)
        except Exception as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise AssemblerError(f"Failed to save PDF to {path}: {exc}") from exc
        finally:
            self.close(handle)
        logger.info(f"PDF saved to: {path}")
        return path

    def close(self, handle: PdfHandle) -> None:
        if not handle.document.is_closed:
            handle.document.close()
