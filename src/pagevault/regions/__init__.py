"""
Page region discovery and visibility tracking.

Regions follow the ``<prefix>_<pageNumber>`` naming convention and carry one
marked image holding the page's visual content.
"""

from .model import (
    CaptureRegion,
    FileImage,
    ImageLoadError,
    ImageSource,
    StaticImage,
    StaticRegion,
    walk_regions,
)
from .naming import is_page_region, page_region_id, parse_page_number
from .registrar import RegionRegistrar
from .visibility import VisibilityMonitor

__all__ = [
    'CaptureRegion',
    'FileImage',
    'ImageLoadError',
    'ImageSource',
    'StaticImage',
    'StaticRegion',
    'walk_regions',
    'is_page_region',
    'page_region_id',
    'parse_page_number',
    'RegionRegistrar',
    'VisibilityMonitor',
]
