"""Custom exceptions for eventemitter."""


class EventEmitterError(Exception):
    """Base exception for all eventemitter errors."""


class InvalidArgumentError(EventEmitterError, TypeError):
    """Raised when an emitter operation receives an unusable argument."""

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class ConfigurationError(EventEmitterError, ValueError):
    """Raised when configuration is invalid."""
