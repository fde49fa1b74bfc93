import os
import re
from typing import List, Optional

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from gallery.models import ExtractionResult
from gallery.stages.canonical import canonicalize
from gallery.utils import get_logger

logger = get_logger(__name__)

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"

_EXT = re.compile(r"\.(jpg|jpeg|png|webp|avif)$", re.IGNORECASE)


def photo_filename(url: str, index: int) -> str:
    m = _EXT.search(canonicalize(url))
    ext = m.group(1).lower() if m else "jpg"
    return f"property-photo-{index + 1}.{ext}"


@retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=1, max=8),
       retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)), reraise=True)
def fetch_image(url: str, timeout: float = 20.0, session: Optional[requests.Session] = None) -> bytes:
    http = session or requests
    r = http.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    r.raise_for_status()
    return r.content


def download_images(result: ExtractionResult, out_dir: str, timeout: float = 20.0,
                    session: Optional[requests.Session] = None) -> List[str]:
    """Save every gallery image; a failing image is logged and skipped."""
    os.makedirs(out_dir, exist_ok=True)
    saved = []
    images = result.property.images
    for idx, img in enumerate(images):
        path = os.path.join(out_dir, photo_filename(img.url, idx))
        try:
            data = fetch_image(img.url, timeout=timeout, session=session)
        except requests.RequestException as e:
            logger.warning("download failed url=%s: %s", img.url, e)
            continue
        with open(path, "wb") as f:
            f.write(data)
        saved.append(path)
    logger.info("downloaded images=%d of=%d dir=%s", len(saved), len(images), out_dir)
    return saved
