"""Core module for eventemitter - registry, dispatch, configuration."""

from eventemitter.core.config import (
    EmitterConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)
from eventemitter.core.emitter import EventEmitter
from eventemitter.core.exceptions import (
    ConfigurationError,
    EventEmitterError,
    InvalidArgumentError,
)
from eventemitter.core.listener import Listener, equal_context, identical_context
from eventemitter.core.tracing import DispatchTracer, TraceContext, TraceEvent
from eventemitter.core.typed import EventKey, TypedEventEmitter

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
    "TraceEvent",
    "TypedEventEmitter",
    "configure_logging",
    "equal_context",
    "get_default_config",
    "identical_context",
    "set_default_config",
]
