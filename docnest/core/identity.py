"""Document identity.

Assigns the stable ``_id`` and ``_type`` of a document. Ids are derived
from a class's ``key_fields`` when those fields carry values
(``"Madison Ave"`` -> ``"madison-ave"``), otherwise they are opaque tokens.
"""

from __future__ import annotations

import re
import uuid
from functools import lru_cache
from typing import Any, Iterable

# Runs of anything that is not a word character collapse to one dash
_SEPARATOR_PATTERN = re.compile(r"[^\w]+|_+")


@lru_cache(maxsize=256)
def slugify(value: str) -> str:
    """Lowercase *value* and join its words with dashes."""
    return _SEPARATOR_PATTERN.sub("-", value.strip().lower()).strip("-")


def generate_id() -> str:
    """Return an opaque unique token."""
    return uuid.uuid4().hex


def derive_id(attributes: dict[str, Any], key_fields: Iterable[str]) -> str | None:
    """Derive an id from the values of *key_fields*, or None.

    Returns None when no key fields are declared or any of them is empty.
    """
    parts: list[str] = []
    for name in key_fields:
        value = attributes.get(name)
        if value is None or value == "":
            return None
        parts.append(slugify(str(value)))
    if not parts:
        return None
    return "-".join(parts)


def identify(document: Any, taken: Iterable[Any] = ()) -> Any:
    """Assign ``_id`` and ``_type`` to *document* if missing.

    Args:
        document: The document to identify.
        taken: Ids already used by other elements of the containing list.
            An id colliding with one of them is replaced; a derived id that
            collides too falls back to an opaque token.

    Returns:
        The document's id.
    """
    attributes = document.raw_attributes
    attributes.setdefault("_type", document.type_name())
    used = set(taken)
    current = attributes.get("_id")
    if current is None or current in used:
        doc_id = derive_id(attributes, document.key_fields)
        if doc_id is None or doc_id in used:
            doc_id = generate_id()
        attributes["_id"] = doc_id
    return attributes["_id"]
