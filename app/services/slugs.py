"""Slug normalization for taxonomy entries."""

import re

from app.core.errors import ValidationError

_DISALLOWED = re.compile(r"[^a-z0-9_()]")
_MULTI_UNDERSCORE = re.compile(r"__+")
SLUG_PATTERN = re.compile(r"^[a-zA-Z0-9_()]+$")


def sluggify(value: str) -> str:
    """Lower-case, spaces to underscores, drop anything outside [a-z0-9_()], collapse '__'."""
    slug = value.lower().replace(" ", "_")
    slug = _DISALLOWED.sub("", slug)
    return _MULTI_UNDERSCORE.sub("_", slug)


def normalize_slug(value: str) -> str:
    """sluggify() and reject input that normalizes to nothing."""
    slug = sluggify(value.strip())
    if not SLUG_PATTERN.match(slug):
        raise ValidationError(f"Invalid slug: {value!r}")
    return slug
