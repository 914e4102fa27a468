"""Normalization of storage locations read back from a catalog."""

from urllib.parse import urlsplit

# Suffix Spark appends to a Glue table location that is not final yet
PLACEHOLDER_SUFFIX = "-__PLACEHOLDER__"

_SCHEME_REWRITES = {"s3a": "s3"}


def rewrite_scheme(location: str) -> str:
    """Rewrite the URI scheme of ``location`` to the one callers expect.

    Only the scheme is touched: ``s3a://bucket/s3a/t`` becomes
    ``s3://bucket/s3a/t``. Locations without a rewritable scheme are returned
    unchanged.
    """
    scheme = urlsplit(location).scheme
    if not scheme:
        return location
    target = _SCHEME_REWRITES.get(scheme.lower())
    if target is None:
        return location
    return target + location[len(scheme):]


def strip_placeholder_suffix(location: str) -> str:
    """Remove exactly one trailing placeholder suffix, if present."""
    if location.endswith(PLACEHOLDER_SUFFIX):
        return location[: -len(PLACEHOLDER_SUFFIX)]
    return location


def normalize_storage_location(location: str) -> str:
    """Normalize a catalog location: scheme rewrite first, then suffix strip."""
    return strip_placeholder_suffix(rewrite_scheme(location))
