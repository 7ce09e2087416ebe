"""Page capture: raster encoding, the page store and the capture service."""

from .raster import EncodedRaster, RasterEncodingError, encode_raster, raster_dimensions
from .service import CaptureOutcome, PageCaptureService
from .store import (
    PageAlreadyCommittedError,
    PageNotClaimedError,
    PageRecord,
    PageState,
    PageStore,
    PageStoreError,
)

__all__ = [
    "EncodedRaster",
    "RasterEncodingError",
    "encode_raster",
    "raster_dimensions",
    "CaptureOutcome",
    "PageCaptureService",
    "PageAlreadyCommittedError",
    "PageNotClaimedError",
    "PageRecord",
    "PageState",
    "PageStore",
    "PageStoreError",
]
