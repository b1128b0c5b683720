"""Cascading save.

A save requested on any document of an embedded tree is redirected up the
parent chain to the root. Every level validates and runs its save hooks;
only the root issues a storage write, with its full attribute tree.

Every level's before-save hooks have run by the time the root write is
attempted, so they observe an attempted save, not a confirmed one. A failed
write skips the after-save hooks of every level on the way back out.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from docnest.core.enums import LifecycleEvent
from docnest.core.exceptions import UnboundCollectionError

logger = logging.getLogger(__name__)


class SaveState(Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    BEFORE_SAVE = "before_save"
    CASCADING = "cascading"
    AFTER_SAVE = "after_save"
    COMMITTED = "committed"
    FAILED = "failed"


class SaveCascade:
    """One save invocation on one document.

    Args:
        document: The document to save.
        validate: Whether to gate the save on ``document.valid()``.
    """

    def __init__(self, document: Any, validate: bool = True) -> None:
        self._document = document
        self._validate = validate
        self._state = SaveState.PENDING

    @property
    def state(self) -> SaveState:
        return self._state

    def execute(self) -> bool:
        """Validate, run save hooks and cascade to the root.

        Returns:
            True if every level passed and the root write was acknowledged.

        Raises:
            UnboundCollectionError: If the root class has no collection, before
                any validation or hook runs.
        """
        document = self._document
        root = _root(document)
        if type(root).collection is None:
            raise UnboundCollectionError(type(root).__name__)

        self._state = SaveState.VALIDATING
        if self._validate and not document.valid():
            logger.debug("Save of %r rejected by validation", document)
            self._state = SaveState.FAILED
            return False

        self._state = SaveState.BEFORE_SAVE
        completed = document.callbacks.run(document, LifecycleEvent.SAVE, self._persist)
        if not completed:
            self._state = SaveState.FAILED
            return False

        self._state = SaveState.COMMITTED
        return True

    def _persist(self) -> bool:
        document = self._document
        self._state = SaveState.CASCADING
        document.new_record = False

        parent = document._parent
        if parent is not None:
            logger.debug("Cascading save of %r to parent %r", document, parent)
            saved = SaveCascade(parent, self._validate).execute()
        else:
            collection = type(document).collection
            logger.debug("Writing root %r to %r", document, collection)
            saved = collection.save(document.raw_attributes, safe=collection.persist_in_safe_mode)

        if not saved:
            return False
        self._state = SaveState.AFTER_SAVE
        return True


def _root(document: Any) -> Any:
    while document._parent is not None:
        document = document._parent
    return document


def save(document: Any, validate: bool = True) -> bool:
    """Save *document* through its root. See SaveCascade."""
    return SaveCascade(document, validate).execute()
