"""
Dispatch tracing - markers for every registry and dispatch step.

Traces help:
1. Verify dispatch order in tests
2. Debug reentrant emits (who removed what, when)
3. Inspect once-pruning without instrumenting listeners

Each emitter owns a tracer. Disabled tracers record nothing, so production
emitters pay a single attribute check per step.

Usage:
    >>> tracer = DispatchTracer(enabled=True)
    >>> tracer.trace("emit.start", event="ready", listeners=2)
    >>> tracer.has_trace("emit.start")
    True
    >>> tracer.get_traces("emit.*")[0].data["listeners"]
    2
"""

from collections import defaultdict, deque
from datetime import datetime
import logging
from typing import Any

logger = logging.getLogger(__name__)


class TraceEvent:
    """
    Single trace marker.

    Attributes:
        name: Marker name (e.g., "listener.invoked")
        timestamp: When the step happened
        data: Step details (event key, listener, counts)
    """

    def __init__(self, name: str, data: dict[str, Any] | None = None):
        self.name = name
        self.timestamp = datetime.now()
        self.data = data or {}

    def __repr__(self) -> str:
        return f"TraceEvent(name={self.name!r}, data={self.data})"


class DispatchTracer:
    """
    Bounded collector of trace markers.

    When max_traces is reached the oldest markers are dropped.
    """

    def __init__(self, enabled: bool = False, max_traces: int = 10000):
        """
        Initialize tracer.

        Args:
            enabled: Whether to collect markers
            max_traces: Max markers kept in memory (0=unlimited)
        """
        self.enabled = enabled
        self._traces: deque[TraceEvent] = deque(maxlen=max_traces or None)

    def enable(self) -> None:
        """Enable trace collection."""
        self.enabled = True
        logger.debug("DispatchTracer: enabled")

    def disable(self) -> None:
        """Disable trace collection."""
        self.enabled = False
        logger.debug("DispatchTracer: disabled")

    def trace(self, name: str, **data: Any) -> TraceEvent | None:
        """
        Record a marker.

        Returns:
            TraceEvent if enabled, None otherwise
        """
        if not self.enabled:
            return None

        event = TraceEvent(name=name, data=data)
        self._traces.append(event)
        return event

    def has_trace(self, name: str) -> bool:
        """Check if a marker with this exact name was recorded."""
        return any(event.name == name for event in self._traces)

    def get_traces(self, pattern: str | None = None) -> list[TraceEvent]:
        """
        Get markers, optionally filtered.

        Args:
            pattern: Exact name, or prefix ending in "*" (e.g. "listener.*")

        Returns:
            Matching markers in recording order
        """
        if pattern is None:
            return list(self._traces)

        if pattern.endswith("*"):
            prefix = pattern[:-1]
            return [event for event in self._traces if event.name.startswith(prefix)]
        return [event for event in self._traces if event.name == pattern]

    def count_traces(self, pattern: str | None = None) -> int:
        """Count markers matching pattern."""
        return len(self.get_traces(pattern))

    def clear(self) -> None:
        """Drop all collected markers."""
        self._traces.clear()

    def get_report(self) -> dict[str, Any]:
        """Summary of collected markers by name."""
        counts: dict[str, int] = defaultdict(int)
        for event in self._traces:
            counts[event.name] += 1

        return {
            "enabled": self.enabled,
            "total_traces": len(self._traces),
            "trace_counts": dict(counts),
        }

    def __repr__(self) -> str:
        return f"DispatchTracer(enabled={self.enabled}, traces={len(self._traces)})"


class TraceContext:
    """
    Context manager that enables a tracer for the duration of a block.

    Usage:
        >>> with TraceContext(emitter.tracer) as tracer:
        ...     emitter.emit("ready")
        ...     assert tracer.has_trace("listener.invoked")
    """

    def __init__(self, tracer: DispatchTracer, enabled: bool = True):
        self.enabled = enabled
        self.tracer = tracer
        self._old_enabled = tracer.enabled

    def __enter__(self) -> DispatchTracer:
        self._old_enabled = self.tracer.enabled
        self.tracer.enabled = self.enabled
        self.tracer.clear()
        return self.tracer

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.tracer.enabled = self._old_enabled
        return False


__all__ = [
    "DispatchTracer",
    "TraceContext",
    "TraceEvent",
]
