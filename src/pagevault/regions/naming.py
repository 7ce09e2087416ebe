"""Page region naming convention: ``<prefix>_<pageNumber>``."""

import re
from typing import Optional

DEFAULT_PREFIX = "mainPageContainer"


def parse_page_number(region_id: Optional[str], prefix: str = DEFAULT_PREFIX) -> Optional[int]:
    """
    Extract the page number from a region identifier.

    Args:
        region_id: Identifier of the region (e.g. ``mainPageContainer_12``)
        prefix: Fixed prefix shared by all page regions

    Returns:
        The base-10 page number, or None when the identifier does not
        follow the ``<prefix>_<pageNumber>`` convention.
    """
    if not region_id:
        return None

    match = re.fullmatch(re.escape(prefix) + r"_([0-9]+)", region_id)
    if match is None:
        return None

    return int(match.group(1), 10)


def is_page_region(region_id: Optional[str], prefix: str = DEFAULT_PREFIX) -> bool:
    return parse_page_number(region_id, prefix) is not None


def page_region_id(page_number: int, prefix: str = DEFAULT_PREFIX) -> str:
    if page_number < 0:
        raise ValueError(f"Page number must be non-negative: {page_number}")
    return f"{prefix}_{page_number}"
