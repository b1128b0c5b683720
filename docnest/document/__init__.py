"""Document layer - typed wrappers over attribute dicts."""

from __future__ import annotations

from docnest.document.base import Document, Field
from docnest.document.callbacks import (
    CallbackPipeline,
    after_create,
    after_save,
    before_create,
    before_save,
)

__all__ = [
    "Document",
    "Field",
    "CallbackPipeline",
    "before_save",
    "after_save",
    "before_create",
    "after_create",
]
