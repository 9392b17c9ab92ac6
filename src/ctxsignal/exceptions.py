"""Exceptions raised by ctxsignal."""

from __future__ import annotations

from typing import Any


class SignalError(Exception):
    """Base class for all errors raised by this package."""


class InvalidHandlerError(SignalError, TypeError):
    """Raised when a non-callable value is subscribed to a signal."""

    def __init__(self, handler: Any):
        super().__init__(
            f"Handler must be callable, got {type(handler).__name__}: {handler!r}"
        )
        self.handler = handler
