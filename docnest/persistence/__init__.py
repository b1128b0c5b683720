"""Persistence layer - cascading saves through the root document."""

from __future__ import annotations

from docnest.persistence.save import SaveCascade, SaveState, save

__all__ = [
    "SaveCascade",
    "SaveState",
    "save",
]
