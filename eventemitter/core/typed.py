"""
Typed event keys.

An EventKey carries the listener signature in its type parameter, so static
checkers verify that listeners and emit arguments agree:

    progress: EventKey[[float]] = EventKey("progress")
    end: EventKey[[]] = EventKey("end")

    emitter = TypedEventEmitter()
    emitter.on(progress, lambda ratio: print(f"{ratio:.0%}"))
    emitter.emit(progress, 0.5)
    emitter.emit(progress, "half")  # rejected by the type checker

Runtime behavior is exactly EventEmitter's; nothing is checked at dispatch.
"""

from collections.abc import Callable
from typing import Any, Concatenate, Self, overload

from eventemitter.core.emitter import EventEmitter


class EventKey[**P]:
    """
    Opaque unique event key.

    Keys hash and compare by identity: two keys with the same name are
    different events.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"EventKey({self.name!r})"


class TypedEventEmitter[ContextT](EventEmitter[ContextT]):
    """EventEmitter whose on/once/emit signatures follow EventKey parameters."""

    @overload
    def on[**P](self, event: EventKey[P], listener: Callable[P, object]) -> Self: ...

    @overload
    def on[**P](
        self,
        event: EventKey[P],
        listener: Callable[Concatenate[ContextT, P], object],
        context: ContextT,
    ) -> Self: ...

    def on(self, event: Any, listener: Any, context: Any = None) -> Self:  # type: ignore[override]
        return super().on(event, listener, context)

    @overload
    def once[**P](self, event: EventKey[P], listener: Callable[P, object]) -> Self: ...

    @overload
    def once[**P](
        self,
        event: EventKey[P],
        listener: Callable[Concatenate[ContextT, P], object],
        context: ContextT,
    ) -> Self: ...

    def once(self, event: Any, listener: Any, context: Any = None) -> Self:  # type: ignore[override]
        return super().once(event, listener, context)

    def emit[**P](  # type: ignore[override]
        self, event: EventKey[P], *args: P.args, **kwargs: P.kwargs
    ) -> bool:
        return super().emit(event, *args, **kwargs)


__all__ = [
    "EventKey",
    "TypedEventEmitter",
]
