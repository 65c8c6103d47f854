"""
EventEmitter - listener registry and synchronous dispatcher.

Responsibilities:
- Register listeners per event key (on/once), in insertion order
- Remove listeners by key, callback, context and once flag
- Report listeners, counts and live event keys as independent copies
- Dispatch emits synchronously on the caller's stack

Architecture:
- dict of event key -> list of Listener records; empty lists are pruned
- emit iterates a tuple snapshot, so listeners may freely call on/once/off/emit
  on the same emitter while it is dispatching
- listener exceptions propagate to the emit caller and stop the dispatch
"""

from collections.abc import Callable, Hashable
import logging
from typing import Any, Self

from eventemitter.core.config import EmitterConfig, get_default_config
from eventemitter.core.exceptions import InvalidArgumentError
from eventemitter.core.listener import ContextMatcher, Listener, equal_context, identical_context
from eventemitter.core.tracing import DispatchTracer

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class EventEmitter[ContextT]:
    """
    In-process publish/subscribe primitive.

    Listeners fire in registration order. A listener registered with a
    context receives it as its first positional argument (its receiver).
    Every mutating method returns the emitter for chaining.

    Usage:
        emitter = EventEmitter()
        emitter.on("data", print).once("end", lambda: print("done"))
        emitter.emit("data", "chunk")
        emitter.emit("end")

    Subclass it to make an object emit its own events:
        class Download(EventEmitter):
            def finish(self):
                self.emit("end")
    """

    def __init__(
        self,
        config: EmitterConfig | None = None,
        context_equals: ContextMatcher | None = None,
    ):
        """
        Initialize EventEmitter.

        Args:
            config: Emitter settings (process default when omitted)
            context_equals: Context comparison used by off(); overrides
                config.context_match when given
        """
        self._config = config or get_default_config()

        if context_equals is None:
            if self._config.context_match == "identity":
                context_equals = identical_context
            else:
                context_equals = equal_context
        elif not callable(context_equals):
            raise InvalidArgumentError(
                f"context_equals must be callable, got {type(context_equals).__name__}",
                argument="context_equals",
            )

        self._context_equals = context_equals
        self._events: dict[Hashable, list[Listener]] = {}
        self._leak_warned: set[Hashable] = set()
        self.tracer = DispatchTracer(
            enabled=self._config.trace_dispatch,
            max_traces=self._config.max_traces,
        )

    def on(
        self,
        event: Hashable,
        listener: Callable[..., Any],
        context: ContextT | None = None,
    ) -> Self:
        """
        Register a listener for every emit of an event.

        Args:
            event: Event key (any hashable value)
            listener: Callable invoked with the emit arguments
            context: Receiver prepended to the arguments on every call

        Raises:
            InvalidArgumentError: If listener is not callable or event is unhashable
        """
        return self._add_listener(event, listener, context, once=False)

    def add_listener(
        self,
        event: Hashable,
        listener: Callable[..., Any],
        context: ContextT | None = None,
    ) -> Self:
        """Same as on()."""
        return self.on(event, listener, context)

    def once(
        self,
        event: Hashable,
        listener: Callable[..., Any],
        context: ContextT | None = None,
    ) -> Self:
        """
        Register a listener for the next emit of an event only.

        The record is removed before it is invoked, so a nested emit of the
        same event from inside the listener does not reach it again.

        Raises:
            InvalidArgumentError: If listener is not callable or event is unhashable
        """
        return self._add_listener(event, listener, context, once=True)

    def off(
        self,
        event: Hashable = _MISSING,
        listener: Callable[..., Any] | None = None,
        context: ContextT | None = None,
        once: bool | None = None,
    ) -> Self:
        """
        Remove the listeners of an event that match every given criterion.

        Args:
            event: Event key (required)
            listener: Only remove records with this callback
            context: Only remove records whose context equals this one
            once: True for once-records only, False for persistent ones only

        Raises:
            InvalidArgumentError: If event is omitted or unhashable
        """
        if event is _MISSING:
            raise InvalidArgumentError(
                "off() requires an event key; use remove_all_listeners() to clear every event",
                argument="event",
            )
        records = self._records(event)
        if not records:
            return self

        survivors = [
            record
            for record in records
            if not record.matches(listener, context, once, self._context_equals)
        ]
        removed = len(records) - len(survivors)
        if not removed:
            return self

        if survivors:
            self._events[event] = survivors
        else:
            self._prune(event)

        logger.debug(f"Removed {removed} listener(s) from event {event!r}")
        self.tracer.trace("listener.removed", event=event, count=removed)
        return self

    def remove_listener(
        self,
        event: Hashable = _MISSING,
        listener: Callable[..., Any] | None = None,
        context: ContextT | None = None,
        once: bool | None = None,
    ) -> Self:
        """Same as off()."""
        return self.off(event, listener, context, once)

    def remove_all_listeners(self, event: Hashable = _MISSING) -> Self:
        """
        Remove every listener of one event, or of all events when omitted.
        """
        if event is _MISSING:
            self._events.clear()
            self._leak_warned.clear()
            logger.debug("Removed all listeners")
            self.tracer.trace("listener.removed", event=None)
            return self

        if self._records(event):
            self._prune(event)
            logger.debug(f"Removed all listeners from event {event!r}")
            self.tracer.trace("listener.removed", event=event)
        return self

    def listeners(self, event: Hashable) -> list[Callable[..., Any]]:
        """Callbacks registered for an event, in firing order (a fresh list)."""
        return [record.callback for record in self._records(event)]

    def listener_count(self, event: Hashable) -> int:
        """Number of listeners registered for an event."""
        return len(self._records(event))

    def event_names(self) -> list[Hashable]:
        """Event keys with at least one listener, oldest first (a fresh list)."""
        return list(self._events)

    def emit(self, event: Hashable, *args: Any, **kwargs: Any) -> bool:
        """
        Call every listener of an event with the given arguments.

        Listeners run synchronously in registration order, over a snapshot
        taken before the first call: registrations and removals made while
        dispatching only affect later emits. A listener exception propagates
        to the caller and the remaining listeners are skipped.

        Args:
            event: Event key
            *args: Positional arguments for the listeners
            **kwargs: Keyword arguments for the listeners

        Returns:
            True if the event had listeners, False otherwise
        """
        records = self._records(event)
        if not records:
            logger.debug(f"No listeners registered for event {event!r}")
            self.tracer.trace("emit.miss", event=event)
            return False

        snapshot = tuple(records)
        logger.debug(f"Emitting {event!r} to {len(snapshot)} listener(s)")
        self.tracer.trace("emit.start", event=event, listeners=len(snapshot))

        for record in snapshot:
            if record.once:
                # A nested emit may already have fired this record.
                if record.spent:
                    continue
                record.spent = True
                self._discard(event, record)
            self.tracer.trace("listener.invoked", event=event, listener=repr(record))
            record.invoke(*args, **kwargs)

        self.tracer.trace("emit.done", event=event, listeners=len(snapshot))
        return True

    def get_stats(self) -> dict[str, Any]:
        """Registry statistics for debugging."""
        return {
            "total_events": len(self._events),
            "total_listeners": sum(len(records) for records in self._events.values()),
            "listeners_by_event": {
                event: len(records) for event, records in self._events.items()
            },
        }

    def _add_listener(
        self,
        event: Hashable,
        listener: Callable[..., Any],
        context: ContextT | None,
        once: bool,
    ) -> Self:
        if not callable(listener):
            raise InvalidArgumentError(
                f"listener must be callable, got {type(listener).__name__}",
                argument="listener",
            )
        _check_event(event)

        record = Listener(listener, context, once)
        records = self._events.setdefault(event, [])
        records.append(record)

        logger.debug(f"Registered {record!r} for event {event!r}")
        self.tracer.trace("listener.added", event=event, listener=repr(record))
        self._check_leak(event, len(records))
        return self

    def _records(self, event: Hashable) -> list[Listener]:
        _check_event(event)
        return self._events.get(event, [])

    def _discard(self, event: Hashable, record: Listener) -> None:
        # Listener compares by identity, so this only ever drops this record.
        records = self._events.get(event)
        if records is None or record not in records:
            return

        records.remove(record)
        if not records:
            self._prune(event)
        logger.debug(f"Pruned once-listener {record!r} from event {event!r}")
        self.tracer.trace("listener.pruned", event=event, listener=repr(record))

    def _prune(self, event: Hashable) -> None:
        del self._events[event]
        self._leak_warned.discard(event)

    def _check_leak(self, event: Hashable, count: int) -> None:
        limit = self._config.max_listeners
        if not limit or count <= limit or event in self._leak_warned:
            return

        self._leak_warned.add(event)
        logger.warning(
            f"Possible listener leak: {count} listeners registered for event {event!r} "
            f"(max_listeners={limit})"
        )

    def __repr__(self) -> str:
        total = sum(len(records) for records in self._events.values())
        return f"{type(self).__name__}(events={len(self._events)}, listeners={total})"


def _check_event(event: Hashable) -> None:
    try:
        hash(event)
    except TypeError as e:
        raise InvalidArgumentError(
            f"event key must be hashable, got {type(event).__name__}",
            argument="event",
        ) from e


__all__ = [
    "EventEmitter",
]
