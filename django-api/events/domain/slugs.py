"""Slug helpers shared by the event pipeline and the slug route."""

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-+")


def slugify(value: str) -> str:
    """Convert a title into a URL-safe slug.

    Returns an empty string when nothing in ``value`` survives.
    """
    slug = value.lower().strip()
    slug = _INVALID_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _DASHES.sub("-", slug)
    return slug.strip("-")


def normalize_slug(raw: object) -> str | None:
    """Trim and lowercase a slug taken from a URL, or None if it is unusable."""
    if not isinstance(raw, str):
        return None
    slug = raw.strip().lower()
    if not slug or not SLUG_PATTERN.match(slug):
        return None
    return slug
