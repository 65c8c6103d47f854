"""
eventemitter - synchronous, in-process publish/subscribe.

Main Features:
- on/once registration with optional bound context
- Filtered removal by callback, context and once flag
- Snapshot dispatch: listeners may mutate the emitter while it emits
- Typed event keys for static signature checking

Quick Start:
    >>> from eventemitter import EventEmitter
    >>> emitter = EventEmitter()
    >>> emitter.on("greet", lambda name: print(f"hello {name}")).emit("greet", "world")
    hello world
    True
"""

__version__ = "0.1.0"

from eventemitter.core import (
    ConfigurationError,
    DispatchTracer,
    EmitterConfig,
    EventEmitter,
    EventEmitterError,
    EventKey,
    InvalidArgumentError,
    Listener,
    TraceContext,
    TypedEventEmitter,
    configure_logging,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ConfigurationError",
    "DispatchTracer",
    "EmitterConfig",
    "EventEmitter",
    "EventEmitterError",
    "EventKey",
    "InvalidArgumentError",
    "Listener",
    "TraceContext",
    "TypedEventEmitter",
    "__version__",
    "configure_logging",
    "get_default_config",
    "set_default_config",
]
