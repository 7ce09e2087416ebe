"""
Document assembler port.

The export coordinator drives any object with this interface; the PDF
implementation lives in ``pagevault.export.pdf`` and is loaded on first use.
"""

from __future__ import annotations

import importlib
import inspect
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Protocol, Union, runtime_checkable

from ..logging import get_logger
from .geometry import PageGeometry

logger = get_logger(__name__)


class AssemblerError(Exception):
    """Raised when the assembler fails to build or persist a document."""


class AssemblerUnavailableError(AssemblerError):
    """Raised when the assembler cannot be loaded."""


@runtime_checkable
class DocumentAssembler(Protocol):
    def create(self, geometry: PageGeometry) -> Any:
        ...

    def append_page(self, handle: Any, geometry: PageGeometry) -> None:
        ...

    def draw_image(
        self,
        handle: Any,
        raster: bytes,
        image_format: str,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        ...

    def persist(self, handle: Any, path: Path) -> Path:
        ...

    def close(self, handle: Any) -> None:
        ...


AssemblerLoader = Callable[[], Union[DocumentAssembler, Awaitable[DocumentAssembler]]]


def default_assembler_loader() -> DocumentAssembler:
    """Import the PyMuPDF assembler on demand."""
    module = importlib.import_module("pagevault.export.pdf")
    return module.PdfAssembler()


class AssemblerProvider:
    """
    Resolve the document assembler lazily and memoize it.

    Only a successful load is memoized; a failed load is reported as
    ``AssemblerUnavailableError`` and attempted again on the next export.
    """

    def __init__(self, loader: Optional[AssemblerLoader] = None) -> None:
        self._loader = loader or default_assembler_loader
        self._assembler: Optional[DocumentAssembler] = None

    @property
    def loaded(self) -> bool:
        return self._assembler is not None

    async def resolve(self) -> DocumentAssembler:
        if self._assembler is not None:
            return self._assembler

        try:
            result = self._loader()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            raise AssemblerUnavailableError(f"Document assembler could not be loaded: {exc}") from exc

        if not isinstance(result, DocumentAssembler):
            raise AssemblerUnavailableError(
                f"Loader returned {type(result).__name__}, not a document assembler"
            )

        logger.debug(f"Loaded document assembler {type(result).__name__}")
        self._assembler = result
        return result

    @classmethod
    def of(cls, assembler: DocumentAssembler) -> AssemblerProvider:
        """Provider for an already constructed assembler."""
        return cls(lambda: assembler)
