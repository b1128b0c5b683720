"""Embedded associations - proxies keeping child documents and stored arrays in sync."""

from __future__ import annotations

from docnest.associations.descriptors import (
    EmbeddedAssociation,
    EmbedsMany,
    EmbedsOne,
    embeds_many,
    embeds_one,
)
from docnest.associations.embed_many import EmbedMany
from docnest.associations.embed_one import EmbedOne
from docnest.associations.options import Options

__all__ = [
    "EmbedMany",
    "EmbedOne",
    "Options",
    "EmbeddedAssociation",
    "EmbedsMany",
    "EmbedsOne",
    "embeds_many",
    "embeds_one",
]
