"""
Directory replay.

Feeds page snapshots saved on disk as ``<prefix>_<n>.<ext>`` through a capture
session, as if each page had scrolled into view, and exports them once.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config import Settings
from .export.assembler import AssemblerLoader
from .export.coordinator import ExportResult
from .export.trigger import Notifier
from .logging import get_logger
from .regions.model import FileImage, StaticRegion
from .regions.naming import page_region_id, parse_page_number
from .session import CaptureSession

logger = get_logger(__name__)

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".tif", ".tiff"}


def discover_page_files(directory: Path, prefix: str) -> Dict[int, Path]:
    """Map page numbers to image files named ``<prefix>_<n>.<ext>``."""
    pages: Dict[int, Path] = {}
    for path in sorted(Path(directory).iterdir()):
        if not path.is_file() or path.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        page_number = parse_page_number(path.stem, prefix)
        if page_number is None:
            logger.debug(f"Skipping {path.name}: not a page snapshot")
            continue
        if page_number in pages:
            logger.warning(f"Duplicate snapshot for page {page_number}: keeping {pages[page_number].name}")
            continue
        pages[page_number] = path
    return pages


def build_regions(pages: Dict[int, Path], settings: Settings) -> List[StaticRegion]:
    return [
        StaticRegion(
            page_region_id(page_number, settings.region_prefix),
            image=FileImage(path),
            image_marker=settings.image_marker,
        )
        for page_number, path in pages.items()
    ]


async def replay_regions(
    regions: Sequence[StaticRegion],
    settings: Settings,
    order: Optional[Sequence[int]] = None,
    assembler_loader: Optional[AssemblerLoader] = None,
    notifier: Optional[Notifier] = None,
) -> ExportResult:
    """
    Make each region visible (in ``order`` when given), then export once.

    Args:
        regions: Page regions to register at startup
        settings: Session settings
        order: Page numbers in the order they should become visible
        assembler_loader: Override for the document assembler loader
        notifier: Receiver for user-facing warnings

    Returns:
        The result of the single export
    """
    session = CaptureSession(settings, assembler_loader=assembler_loader, notifier=notifier)
    session.start(regions)

    by_page = {parse_page_number(r.region_id, settings.region_prefix): r for r in regions}
    sequence = list(order) if order is not None else sorted(n for n in by_page if n is not None)
    for page_number in sequence:
        region = by_page.get(page_number)
        if region is None:
            logger.warning(f"No snapshot for page {page_number}")
            continue
        session.visibility_changed(region.region_id, 1.0)

    session.request_export()
    await session.close()
    return session.exports[-1]


def replay_directory(
    directory: Path,
    settings: Optional[Settings] = None,
    order: Optional[Sequence[int]] = None,
    assembler_loader: Optional[AssemblerLoader] = None,
    notifier: Optional[Notifier] = None,
) -> ExportResult:
    settings = settings or Settings()
    pages = discover_page_files(directory, settings.region_prefix)
    logger.info(f"Found {len(pages)} page snapshots in {directory}")
    regions = build_regions(pages, settings)
    return asyncio.run(replay_regions(regions, settings, order, assembler_loader, notifier))
