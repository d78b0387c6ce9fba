"""
Attribute filtering for the Kontent.ai rich text dialect.

Rich text elements only accept a fixed set of attributes.  Everything
else (``class``, ``style``, event handlers, ``alt`` ...) is silently
dropped when an element is re-emitted.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional

ALLOWED_ATTRIBUTES = (
    "data-item-id",
    "data-item-external-id",
    "data-item-codename",
    "data-asset-id",
    "data-asset-external-id",
    "data-asset-codename",
    "data-new-window",
    "title",
    "target",
    "href",
    "data-image-id",
    "data-rel",
    "data-type",
    "data-codename",
    "data-id",
    "data-external-id",
    "src",
    "type",
    "data-email-address",
    "data-email-subject",
    "data-phone-number",
)


def filter_attributes(
    attributes: Mapping[str, Optional[str]],
    allowed: Iterable[str] = ALLOWED_ATTRIBUTES,
) -> Dict[str, str]:
    """Return the allowed attributes with a value, in their original order."""
    allowed_set = frozenset(allowed)
    return {
        key: value
        for key, value in attributes.items()
        if key in allowed_set and value is not None
    }


def _escape_value(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;")


def serialize_attributes(attributes: Mapping[str, str]) -> str:
    """Render ``key="value"`` tokens separated by single spaces."""
    return " ".join(f'{key}="{_escape_value(value)}"' for key, value in attributes.items())


def format_attributes(
    attributes: Mapping[str, Optional[str]],
    allowed: Iterable[str] = ALLOWED_ATTRIBUTES,
) -> str:
    return serialize_attributes(filter_attributes(attributes, allowed))
