from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

from gallery.models import ImageCandidate


@dataclass(frozen=True)
class CdnFamily:
    """A listing platform CDN that serves several resolutions of one asset.

    ``hosts`` are substrings identifying the family in a canonical key;
    ``markers`` are filename tokens present only on the largest variant.
    """

    hosts: t.Tuple[str, ...]
    markers: t.Tuple[str, ...] = field(default_factory=tuple)

    def matches(self, key: str) -> bool:
        return any(h in key for h in self.hosts)

    def is_high_res(self, url: str) -> bool:
        return any(m in url for m in self.markers)


class ResolutionPolicy:
    """Mapping of CDN family id -> :class:`CdnFamily`.

    Keys outside every family fall back to first-seen-wins.
    """

    def __init__(self, families: t.Optional[t.Mapping[str, CdnFamily]] = None):
        self.families: t.Dict[str, CdnFamily] = dict(families or {})

    def family_for(self, key: str) -> t.Optional[CdnFamily]:
        for fam in self.families.values():
            if fam.matches(key):
                return fam
        return None

    def extended(self, extra: t.Mapping[str, t.Mapping[str, t.Any]]) -> "ResolutionPolicy":
        """Return a copy with families from config (``{id: {hosts, markers}}``) merged in."""
        families = dict(self.families)
        for fid, entry in (extra or {}).items():
            families[fid] = CdnFamily(
                hosts=tuple(entry.get("hosts") or ()),
                markers=tuple(entry.get("markers") or ()),
            )
        return ResolutionPolicy(families)


# Zillow suffixes _p_f / _p_h name the full-size and high-res renditions.
DEFAULT_POLICY = ResolutionPolicy({
    "zillow": CdnFamily(hosts=("zillowstatic",), markers=("_p_f", "_p_h")),
})


def preferred(
    existing: ImageCandidate,
    incoming: ImageCandidate,
    key: str,
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> ImageCandidate:
    fam = policy.family_for(key)
    if fam is None:
        return existing
    # Upgrade only: never replace a marked candidate, ties keep the first seen.
    if fam.is_high_res(incoming.url) and not fam.is_high_res(existing.url):
        return incoming
    return existing
