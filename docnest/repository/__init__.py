"""Repository layer - DDD repository pattern."""

from __future__ import annotations

from docnest.repository.base import Repository

__all__ = [
    "Repository",
]
