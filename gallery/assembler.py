"""Turn a raw provider payload into an :class:`ExtractionResult`.

``parse_payload`` guards the structural boundary (text -> mapping); ``assemble``
runs the image stages and packages metadata and grounding sources.
"""

from __future__ import annotations

import json
import re
import typing as t

from gallery.errors import MissingRequiredField, ParseFailure
from gallery.models import DEFAULT_SOURCE_TITLE, ExtractionResult, ListingMetadata, SourceCitation
from gallery.stages.dedup import aggregate
from gallery.stages.resolution import DEFAULT_POLICY, ResolutionPolicy
from gallery.stages.validity import DEFAULT_HOST_MARKERS, filter_images
from gallery.utils import get_logger

logger = get_logger(__name__)

OPTIONAL_FIELDS = ("price", "beds", "baths", "sqft")

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def parse_payload(text: t.Optional[str]) -> t.Dict[str, t.Any]:
    """Decode the provider's JSON text into a mapping.

    Empty text decodes to ``{}`` and fails later on the missing address.
    """
    raw = (text or "").strip() or "{}"
    m = _FENCE.match(raw)
    if m:
        raw = m.group(1)
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.error("payload parse failed: %s raw=%.200s", e, raw)
        raise ParseFailure(raw=raw) from e
    if not isinstance(data, dict):
        logger.error("payload is %s, expected object", type(data).__name__)
        raise ParseFailure(raw=raw)
    return data


def _opt_str(value: t.Any) -> t.Optional[str]:
    # nested objects, lists and booleans carry no usable listing fact
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    s = value if isinstance(value, str) else str(value)
    return s.strip() or None


def map_sources(raw_sources: t.Optional[t.Iterable[t.Any]]) -> t.List[SourceCitation]:
    """Grounding chunks (``{"web": {"title", "uri"}}``) -> citations, dropping empty URIs."""
    out: t.List[SourceCitation] = []
    for chunk in raw_sources or []:
        web = chunk.get("web") if isinstance(chunk, t.Mapping) else None
        if not isinstance(web, t.Mapping):
            continue
        uri = web.get("uri")
        if not uri or not isinstance(uri, str):
            continue
        title = web.get("title")
        if not isinstance(title, str) or not title:
            title = DEFAULT_SOURCE_TITLE
        out.append(SourceCitation(title=title, uri=uri))
    return out


def assemble(
    metadata: t.Mapping[str, t.Any],
    raw_images: t.Any,
    raw_sources: t.Optional[t.Iterable[t.Any]] = None,
    *,
    policy: ResolutionPolicy = DEFAULT_POLICY,
    host_markers: t.Sequence[str] = DEFAULT_HOST_MARKERS,
) -> ExtractionResult:
    if not isinstance(metadata, t.Mapping):
        raise ParseFailure()
    address = _opt_str(metadata.get("address"))
    if not address:
        raise MissingRequiredField("address")

    if not isinstance(raw_images, list):
        raw_images = []
    table = aggregate(raw_images, policy)
    images = filter_images(table.values(), host_markers)
    if not images:
        logger.info("no public image assets survived filtering address=%s", address)

    prop = ListingMetadata(
        address=address,
        images=images,
        **{k: _opt_str(metadata.get(k)) for k in OPTIONAL_FIELDS},
    )
    sources = map_sources(raw_sources)
    logger.info("assembled images=%d sources=%d", len(images), len(sources))
    return ExtractionResult(property=prop, sources=sources)


def assemble_payload(
    text: t.Optional[str],
    raw_sources: t.Optional[t.Iterable[t.Any]] = None,
    **kwargs: t.Any,
) -> ExtractionResult:
    """Parse provider text and assemble in one step."""
    data = parse_payload(text)
    return assemble(data, data.get("images"), raw_sources, **kwargs)
