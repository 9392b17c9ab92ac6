"""Named collections of signals sharing context teardown."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ctxsignal.core import Signal


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


logger = logging.getLogger(__name__)


class SignalGroup:
    """Group of signals that can be cleaned up together.

    An object subscribed to several signals can drop all of its
    subscriptions with a single `remove_context` call on the group.

    Example:
        events = SignalGroup("game")
        damaged = events.register(Signal[int]())
        died = events.register(Signal())

        damaged.add(hud.on_damage, hud)
        died.add(hud.on_death, hud)
        events.remove_context(hud)  # hud is gone from both signals
    """

    __slots__ = ("_name", "_signals")

    def __init__(self, name: str = "default", signals: Iterable[Signal[Any]] = ()) -> None:
        self._name = name
        self._signals: list[Signal[Any]] = []
        for signal in signals:
            self.register(signal)

    @property
    def name(self) -> str:
        """Get the name of this group."""
        return self._name

    @property
    def signals(self) -> tuple[Signal[Any], ...]:
        """Member signals in registration order."""
        return tuple(self._signals)

    def register[S: Signal[Any]](self, signal: S) -> S:
        """Add a signal to the group and return it. No-op if already a member."""
        if signal not in self:
            self._signals.append(signal)
        return signal

    def unregister(self, signal: Signal[Any]) -> None:
        """Remove a signal from the group. Its handlers are left untouched."""
        self._signals = [s for s in self._signals if s is not signal]

    def remove_context(self, context: object) -> None:
        """Remove all handlers of the context from every member signal."""
        if not self.has_context(context):
            return
        for signal in self._signals:
            signal.remove_context(context)
        logger.debug("Removed context %r from group %r", context, self._name)

    def remove_all(self) -> None:
        """Remove all handlers from every member signal."""
        for signal in self._signals:
            signal.remove_all()
        logger.debug("Removed all handlers from group %r", self._name)

    def has_context(self, context: object) -> bool:
        return any(signal.has_context(context) for signal in self._signals)

    def contexts(self) -> tuple[object, ...]:
        """Return the contexts subscribed to any member, first seen first."""
        seen: set[int] = set()
        result: list[object] = []
        for signal in self._signals:
            for context in signal.contexts():
                if id(context) not in seen:
                    seen.add(id(context))
                    result.append(context)
        return tuple(result)

    def listener_count(self) -> int:
        return sum(signal.listener_count() for signal in self._signals)

    def listener_count_for(self, context: object) -> int:
        return sum(signal.listener_count_for(context) for signal in self._signals)

    def __contains__(self, signal: object) -> bool:
        return any(s is signal for s in self._signals)

    def __iter__(self) -> Iterator[Signal[Any]]:
        return iter(tuple(self._signals))

    def __len__(self) -> int:
        return len(self._signals)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, signals={len(self)})"
