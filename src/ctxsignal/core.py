"""Synchronous signal with context-grouped subscriptions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic

from typing_extensions import TypeVar

from ctxsignal.exceptions import InvalidHandlerError
from ctxsignal.registry import HandlerRegistry


if TYPE_CHECKING:
    from collections.abc import Callable

    from ctxsignal.registry import Handler


logger = logging.getLogger(__name__)

T = TypeVar("T", default=None)


class Signal(Generic[T]):
    """Synchronous event dispatcher grouping handlers by owning context.

    Every handler is registered under a context, usually the object that owns
    it, so all subscriptions of that object can be dropped with one call to
    `remove_context` when it is torn down.

    Example:
        class Player:
            def __init__(self, health_changed: Signal[int]) -> None:
                health_changed.add(self.on_health, self)

            def on_health(self, value: int) -> None:
                ...

        health_changed = Signal[int]()
        player = Player(health_changed)
        health_changed.emit(90)
        health_changed.remove_context(player)

    Handlers are invoked as ``handler(data)``. Pass a bound method of the
    context to have the context act as receiver.
    """

    __slots__ = ("_handlers", "_name", "_once_handlers")

    def __init__(self, name: str | None = None) -> None:
        self._name = name
        self._handlers: HandlerRegistry[T] = HandlerRegistry()
        self._once_handlers: HandlerRegistry[T] = HandlerRegistry()

    @property
    def name(self) -> str | None:
        """Get the name of this signal."""
        return self._name

    def add(self, handler: Handler[T], context: object) -> Callable[[], None]:
        """Subscribe a handler under the given context.

        Args:
            handler: Callable receiving the emitted payload.
            context: Owner of the handler, used as key for `remove_context`.

        Returns:
            A callable that unsubscribes the handler. Calling it repeatedly
            is harmless.

        Raises:
            InvalidHandlerError: If the handler is not callable.
        """
        if not callable(handler):
            raise InvalidHandlerError(handler)
        self._handlers.add(handler, context)
        return lambda: self.remove(handler, context)

    def add_once(self, handler: Handler[T], context: object) -> Callable[[], None]:
        """Subscribe a handler that is dropped right after its first call.

        Args:
            handler: Callable receiving the emitted payload.
            context: Owner of the handler, used as key for `remove_context`.

        Returns:
            A callable that unsubscribes the handler.

        Raises:
            InvalidHandlerError: If the handler is not callable.
        """
        if not callable(handler):
            raise InvalidHandlerError(handler)
        self._once_handlers.add(handler, context)
        return lambda: self.remove(handler, context)

    def emit(self, data: T = None) -> None:  # type: ignore[assignment]
        """Call all handlers with the given payload.

        Regular handlers run first, in registration order, from a snapshot
        taken when the call starts. One-time handlers run afterwards; their
        registry is swapped for an empty one beforehand, so `add_once` calls
        made by them are kept for the next emit.

        Exceptions raised by handlers propagate and stop the dispatch.
        """
        for _context, handlers in self._handlers.snapshot():
            for handler in handlers:
                handler(data)

        once_handlers = self._once_handlers
        self._once_handlers = HandlerRegistry()
        for _context, handlers in once_handlers.snapshot():
            for handler in handlers:
                handler(data)

    def remove(self, handler: Handler[T], context: object) -> None:
        """Unsubscribe a handler from both regular and one-time handlers."""
        self._handlers.remove(handler, context)
        self._once_handlers.remove(handler, context)

    def remove_context(self, context: object) -> None:
        """Remove all handlers registered under the given context."""
        removed = self._handlers.discard_context(context)
        removed = self._once_handlers.discard_context(context) or removed
        if removed:
            logger.debug("Removed context %r from %r", context, self)

    def remove_all(self) -> None:
        """Remove all handlers, including one-time handlers."""
        self._handlers.clear()
        self._once_handlers.clear()
        logger.debug("Removed all handlers from %r", self)

    def has(self, handler: Handler[T], context: object) -> bool:
        """Check whether the handler is subscribed under the context."""
        return self._handlers.contains(handler, context) or self._once_handlers.contains(
            handler, context
        )

    def has_context(self, context: object) -> bool:
        """Check whether any handler is registered under the context."""
        return self._handlers.has_context(context) or self._once_handlers.has_context(
            context
        )

    def contexts(self) -> tuple[object, ...]:
        """Return all contexts with at least one handler.

        The result is a copy: regular contexts in registration order, followed
        by contexts that only hold one-time handlers.
        """
        seen: set[int] = set()
        result: list[object] = []
        for registry in (self._handlers, self._once_handlers):
            for context in registry.contexts():
                if id(context) not in seen:
                    seen.add(id(context))
                    result.append(context)
        return tuple(result)

    def listener_count(self) -> int:
        """Return the number of regular and one-time handlers."""
        return self._handlers.handler_count() + self._once_handlers.handler_count()

    def listener_count_for(self, context: object) -> int:
        """Return the number of handlers registered under the context."""
        return self._handlers.count_for(context) + self._once_handlers.count_for(context)

    def __repr__(self) -> str:
        name = f"{self._name!r}, " if self._name else ""
        return (
            f"{type(self).__name__}({name}listeners={self.listener_count()}, "
            f"contexts={len(self.contexts())})"
        )
