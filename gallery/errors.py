"""Typed failures raised by the extraction pipeline.

Structural problems with a provider response always surface as one of these;
noisy content (bad URLs, duplicates, non-image links) is filtered silently.
"""


class GalleryError(Exception):
    """Base class for every failure the pipeline reports to its caller."""


class ParseFailure(GalleryError):
    """Provider response could not be read as structured listing data."""

    DEFAULT_MESSAGE = (
        "The search engine was unable to parse the gallery metadata. "
        "The listing may be too new, private, or unsupported."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE, raw: str = ""):
        super().__init__(message)
        self.raw = raw


class MissingRequiredField(GalleryError):
    def __init__(self, field: str):
        super().__init__(f"Listing metadata is missing required field: {field}")
        self.field = field


class ProviderError(GalleryError):
    """The AI extraction provider call failed before returning a payload."""
