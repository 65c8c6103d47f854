"""
Listener records - what the registry stores for every registration.

Core Concepts:
- Listener: callback + optional bound context + once flag
- ContextMatcher: comparison used when removal is narrowed by context

Records compare by identity, so registering the same callback twice yields
two records that must be removed separately.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
import operator
from typing import Any

type ContextMatcher = Callable[[Any, Any], bool]

equal_context: ContextMatcher = operator.eq
identical_context: ContextMatcher = operator.is_


@dataclass(eq=False, slots=True)
class Listener:
    """
    A single registration in the emitter registry.

    Attributes:
        callback: Callable invoked on emission
        context: Receiver passed as the first argument when present
        once: Remove the record right before its first invocation
        spent: Set once a dispatch has claimed a once-record
    """

    callback: Callable[..., Any]
    context: Any = None
    once: bool = False
    spent: bool = field(default=False, init=False)

    def invoke(self, *args: Any, **kwargs: Any) -> Any:
        """
        Call the callback, binding the context as receiver when present.

        A plain function written as ``def handler(self, payload)`` observes
        the context as ``self``.
        """
        if self.context is None:
            return self.callback(*args, **kwargs)
        return self.callback(self.context, *args, **kwargs)

    def matches(
        self,
        callback: Callable[..., Any] | None = None,
        context: Any = None,
        once: bool | None = None,
        context_equals: ContextMatcher = equal_context,
    ) -> bool:
        """
        Check the record against a removal filter.

        Every omitted criterion (None) matches anything.

        Args:
            callback: Required callback (compared with ==)
            context: Required context (compared with context_equals)
            once: Required once flag
            context_equals: Context comparison capability

        Returns:
            True if the record satisfies every supplied criterion
        """
        if callback is not None and self.callback != callback:
            return False
        if context is not None and not context_equals(self.context, context):
            return False
        return once is None or self.once == once

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"Listener(callback={name}, context={self.context!r}, once={self.once})"


__all__ = [
    "ContextMatcher",
    "Listener",
    "equal_context",
    "identical_context",
]
