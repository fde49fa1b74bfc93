from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

DEFAULT_DESCRIPTION = "Property View"
DEFAULT_SOURCE_TITLE = "Search Result"


@dataclass(frozen=True)
class ImageCandidate:
    url: str
    description: str = DEFAULT_DESCRIPTION


class SourceCitation(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_SOURCE_TITLE
    uri: str


class ListingMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    price: Optional[str] = None
    beds: Optional[str] = None
    baths: Optional[str] = None
    sqft: Optional[str] = None
    images: Tuple[ImageCandidate, ...] = ()


class ExtractionResult(BaseModel):
    """Final pipeline output handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    property: ListingMetadata
    sources: Tuple[SourceCitation, ...] = ()

    @property
    def is_empty(self) -> bool:
        # Zero images is a valid outcome; callers present it as "no assets found".
        return not self.property.images
