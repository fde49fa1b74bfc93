def canonicalize(url: str) -> str:
    """Dedup key for an image URL: everything before the first ``?`` or ``#``.

    Only the key is stripped; callers keep and return the original URL.
    """
    return url.split("?", 1)[0].split("#", 1)[0]
