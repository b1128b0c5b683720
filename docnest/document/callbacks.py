"""Lifecycle callback pipeline.

Each document class owns a CallbackPipeline holding ordered hook lists per
(phase, event). Hooks are declared on methods with the decorators below:

    class Person(Document):
        @before_save
        def normalize(self):
            self.title = self.title.strip()

A hook returning ``False`` (exactly, not just falsy) halts the chain.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Union

from docnest.core.enums import CallbackPhase, LifecycleEvent

logger = logging.getLogger(__name__)

# A hook is a method name looked up on the document, or a callable taking it
Hook = Union[str, Callable[[Any], Any]]

_MARK = "__docnest_callbacks__"


def _declare(phase: CallbackPhase, event: LifecycleEvent) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        marks = list(getattr(func, _MARK, ()))
        marks.append((phase, event))
        setattr(func, _MARK, marks)
        return func

    return decorator


before_save = _declare(CallbackPhase.BEFORE, LifecycleEvent.SAVE)
after_save = _declare(CallbackPhase.AFTER, LifecycleEvent.SAVE)
before_create = _declare(CallbackPhase.BEFORE, LifecycleEvent.CREATE)
after_create = _declare(CallbackPhase.AFTER, LifecycleEvent.CREATE)


def declared_hooks(namespace: dict[str, Any]) -> list[tuple[CallbackPhase, LifecycleEvent, str]]:
    """Collect decorated methods from a class body, in definition order."""
    found = []
    for name, value in namespace.items():
        for phase, event in getattr(value, _MARK, ()):
            found.append((phase, event, name))
    return found


class CallbackPipeline:
    """Ordered before/after hooks per lifecycle event.

    Args:
        parent: Pipeline to inherit hooks from; its hooks run first.
    """

    def __init__(self, parent: CallbackPipeline | None = None) -> None:
        self._hooks: dict[tuple[CallbackPhase, LifecycleEvent], list[Hook]] = {}
        if parent is not None:
            for key, hooks in parent._hooks.items():
                self._hooks[key] = list(hooks)

    def register(self, phase: CallbackPhase, event: LifecycleEvent, hook: Hook) -> None:
        """Append *hook* to the chain for (phase, event)."""
        self._hooks.setdefault((phase, event), []).append(hook)

    def hooks(self, phase: CallbackPhase, event: LifecycleEvent) -> list[Hook]:
        return list(self._hooks.get((phase, event), ()))

    def run(self, document: Any, event: LifecycleEvent, block: Callable[[], Any]) -> bool:
        """Run *block* wrapped in the before/after hooks of *event*.

        Returns:
            False if a before-hook halted or the block returned False, in
            which case no after-hooks ran. True otherwise.
        """
        for hook in self.hooks(CallbackPhase.BEFORE, event):
            if _call(document, hook) is False:
                logger.debug("before_%s halted by %r on %r", event.value, hook, document)
                return False

        if block() is False:
            return False

        for hook in self.hooks(CallbackPhase.AFTER, event):
            if _call(document, hook) is False:
                logger.debug("after_%s halted by %r on %r", event.value, hook, document)
                break
        return True

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())


def _call(document: Any, hook: Hook) -> Any:
    if isinstance(hook, str):
        return getattr(document, hook)()
    return hook(document)
