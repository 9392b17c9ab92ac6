"""Synchronous signals with context-grouped subscriptions.

Handlers are registered under an owning context, so an object can drop
every subscription it made with a single call when it is torn down.

Example:
    class Hud:
        def on_damage(self, amount: int) -> None:
            ...

    damaged = Signal[int]("damaged")
    hud = Hud()
    damaged.add(hud.on_damage, hud)
    damaged.emit(10)
    damaged.remove_context(hud)
"""

from __future__ import annotations

from ctxsignal.core import Signal
from ctxsignal.declared import DeclaredSignal
from ctxsignal.exceptions import InvalidHandlerError, SignalError
from ctxsignal.group import SignalGroup
from ctxsignal.registry import HandlerRegistry, handler_key

__all__ = [
    "DeclaredSignal",
    "HandlerRegistry",
    "InvalidHandlerError",
    "Signal",
    "SignalError",
    "SignalGroup",
    "handler_key",
]

__version__ = "0.1.0"
