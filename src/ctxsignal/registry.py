"""Identity-keyed, insertion-ordered handler storage."""

from __future__ import annotations

from dataclasses import dataclass, field
import inspect
import types
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterator


type Handler[T] = Callable[[T], Any]


def handler_key(handler: Callable[..., Any]) -> Hashable:
    """Return the identity key of a handler.

    Bound methods, including builtin ones such as ``list.append`` of an
    instance, are recreated on every attribute access, so they are keyed by
    the identities of their receiver and function. Everything else is keyed by
    ``id()``. The registry keeps the handler alive, so the ids stay valid
    while the entry exists.
    """
    if inspect.ismethod(handler):
        return (id(handler.__self__), id(handler.__func__))
    if isinstance(handler, types.BuiltinMethodType | types.MethodWrapperType):
        receiver = handler.__self__
        # builtin functions are bound to their module and are not recreated
        if receiver is not None and not isinstance(receiver, types.ModuleType):
            return (id(receiver), handler.__name__)
    return id(handler)


@dataclass(slots=True)
class ContextEntry:
    """Handlers of one context, in registration order."""

    context: object
    handlers: dict[Hashable, Callable[..., Any]] = field(default_factory=dict)


class HandlerRegistry[T]:
    """Mapping of context -> ordered, duplicate-free handler set.

    Contexts are compared by identity and need not be hashable. An entry is
    dropped as soon as its last handler is removed.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[int, ContextEntry] = {}

    def add(self, handler: Handler[T], context: object) -> bool:
        """Insert the pair. Return False if it was already present."""
        entry = self._entries.get(id(context))
        if entry is None:
            entry = self._entries[id(context)] = ContextEntry(context)
        key = handler_key(handler)
        if key in entry.handlers:
            return False
        entry.handlers[key] = handler
        return True

    def remove(self, handler: Handler[T], context: object) -> bool:
        """Remove the pair. Return False if it was not present."""
        entry = self._entries.get(id(context))
        if entry is None:
            return False
        if entry.handlers.pop(handler_key(handler), None) is None:
            return False
        if not entry.handlers:
            del self._entries[id(context)]
        return True

    def discard_context(self, context: object) -> bool:
        """Drop every handler of the context. Return False if it had none."""
        return self._entries.pop(id(context), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def contains(self, handler: Handler[T], context: object) -> bool:
        entry = self._entries.get(id(context))
        return entry is not None and handler_key(handler) in entry.handlers

    def has_context(self, context: object) -> bool:
        return id(context) in self._entries

    def count_for(self, context: object) -> int:
        entry = self._entries.get(id(context))
        return 0 if entry is None else len(entry.handlers)

    def handler_count(self) -> int:
        return sum(len(entry.handlers) for entry in self._entries.values())

    def contexts(self) -> Iterator[object]:
        """Iterate contexts in first-registration order."""
        for entry in self._entries.values():
            yield entry.context

    def snapshot(self) -> list[tuple[object, tuple[Handler[T], ...]]]:
        """Copy the current state for dispatch.

        Later mutation of the registry does not affect the returned list.
        """
        return [
            (entry.context, tuple(entry.handlers.values()))
            for entry in self._entries.values()
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(contexts={len(self)}, "
            f"handlers={self.handler_count()})"
        )
