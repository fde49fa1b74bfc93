from __future__ import annotations

import typing as t

from gallery.models import DEFAULT_DESCRIPTION, ImageCandidate
from gallery.stages.canonical import canonicalize
from gallery.stages.resolution import DEFAULT_POLICY, ResolutionPolicy, preferred
from gallery.utils import get_logger

logger = get_logger(__name__)


def _as_candidate(raw: t.Any) -> t.Optional[ImageCandidate]:
    if isinstance(raw, ImageCandidate):
        url, desc = raw.url, raw.description
    elif isinstance(raw, t.Mapping):
        url, desc = raw.get("url"), raw.get("description")
    else:
        return None
    if not url or not isinstance(url, str) or not url.startswith("http"):
        return None
    if not isinstance(desc, str) or not desc.strip():
        desc = DEFAULT_DESCRIPTION
    return ImageCandidate(url=url, description=desc)


def aggregate(
    raw: t.Iterable[t.Any],
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> t.Dict[str, ImageCandidate]:
    """Fold raw image entries into an insertion-ordered ``key -> candidate`` table.

    Entries without an http(s) URL are dropped. A key keeps the position of
    its first occurrence; later duplicates can only replace the content held
    there, as decided by :func:`preferred`.
    """
    table: t.Dict[str, ImageCandidate] = {}
    seen = 0
    for item in raw or []:
        seen += 1
        cand = _as_candidate(item)
        if cand is None:
            continue
        key = canonicalize(cand.url)
        current = table.get(key)
        if current is None:
            table[key] = cand
        else:
            table[key] = preferred(current, cand, key, policy)

    logger.info("dedup.aggregate: kept=%d from=%d", len(table), seen)
    return table
