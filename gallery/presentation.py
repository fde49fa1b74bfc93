"""Console-side handling of an extraction result: empty-state guidance and
opening images in the browser."""

from __future__ import annotations

import time
import webbrowser

from gallery.models import ExtractionResult
from gallery.utils import get_logger

logger = get_logger(__name__)

NO_IMAGES_MESSAGE = (
    "No public image assets were detected. This usually happens with private "
    "listings, off-market homes, or highly protected listing pages."
)

OPEN_DELAY_SECONDS = 0.4


def address_hint(listing: str) -> str:
    """Guess an address-only query from a listing URL's last path segment."""
    last = listing.split("/")[-1].replace("-", " ")
    return last or listing


def empty_message(listing: str) -> str:
    return f"{NO_IMAGES_MESSAGE}\nTry this instead: search by address only -> \"{address_hint(listing)}\""


def open_all(result: ExtractionResult, delay: float = OPEN_DELAY_SECONDS, opener=webbrowser.open_new_tab) -> int:
    """Open every image in a new browser tab, ``delay`` seconds apart."""
    opened = 0
    for idx, img in enumerate(result.property.images):
        if idx and delay:
            time.sleep(delay)
        if opener(img.url):
            opened += 1
        else:
            logger.warning("browser refused to open %s", img.url)
    logger.info("opened images=%d of=%d", opened, len(result.property.images))
    return opened
