"""Profile name normalization."""

import re

from claudectx.errors import InvalidProfileName

SEPARATOR = "-"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def slugify(name: str) -> str:
    """
    Map a user-chosen profile name to a filesystem-safe slug.

    "My Work Profile" -> "my-work-profile"
    "FG@Company"      -> "fg-company"

    Only ASCII letters and digits survive; every other run of characters
    becomes a single separator. The result may be empty.
    """
    return _NON_ALNUM.sub(SEPARATOR, name).strip(SEPARATOR).lower()


def require_slug(name: str) -> str:
    """Slugify `name`, raising InvalidProfileName when nothing is left."""
    slug = slugify(name)
    if not slug:
        raise InvalidProfileName(name)
    return slug
