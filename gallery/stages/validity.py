from __future__ import annotations

import re
import typing as t

from gallery.models import ImageCandidate
from gallery.utils import get_logger

logger = get_logger(__name__)

_IMAGE_EXT = re.compile(r"\.(jpg|jpeg|png|webp|avif)(?:[?#].*)?$", re.IGNORECASE)

GENERIC_MARKERS: t.Tuple[str, ...] = ("photo", "cdn")

# Static-image hosts whose asset URLs carry neither an extension nor a generic marker.
DEFAULT_HOST_MARKERS: t.Tuple[str, ...] = ("zillowstatic", "rdcpix", "images.kw.com")


def is_likely_image(
    candidate: ImageCandidate,
    host_markers: t.Sequence[str] = DEFAULT_HOST_MARKERS,
) -> bool:
    """High-recall heuristic: any single signal is enough to keep the URL."""
    url = candidate.url
    if _IMAGE_EXT.search(url):
        return True
    low = url.lower()
    return any(m in low for m in GENERIC_MARKERS) or any(m.lower() in low for m in host_markers)


def filter_images(
    candidates: t.Iterable[ImageCandidate],
    host_markers: t.Sequence[str] = DEFAULT_HOST_MARKERS,
) -> t.List[ImageCandidate]:
    items = list(candidates)
    out = [c for c in items if is_likely_image(c, host_markers)]
    logger.info("validity.filter: kept=%d from=%d", len(out), len(items))
    return out
