"""Identifier derivation for user-supplied resource names.

A name is used exactly as typed for file names, collection names, URL
segments and JavaScript variable prefixes.  Only model/type identifiers use
the capitalized variant.
"""

from __future__ import annotations

from pydantic import BaseModel


class ResourceNames(BaseModel):
    """The casing variants of a single resource name."""

    raw: str
    capitalized: str


def capitalize_first(value: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    ``"userProfile"`` -> ``"UserProfile"`` (unlike ``str.capitalize``, which
    would lower-case the tail).
    """
    if not value:
        return value
    return value[0].upper() + value[1:]


def derive_names(name: str) -> ResourceNames:
    """Derive every casing variant needed by the templates.

    Raises:
        ValueError: If *name* is empty.
    """
    if not name:
        raise ValueError("Resource name must not be empty")
    return ResourceNames(raw=name, capitalized=capitalize_first(name))
