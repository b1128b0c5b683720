"""Criteria layer - in-memory filtering, named scopes and pagination."""

from __future__ import annotations

from docnest.criteria.criteria import Criteria, Page, Scope, scope

__all__ = [
    "Criteria",
    "Page",
    "Scope",
    "scope",
]
