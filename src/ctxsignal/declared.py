"""Class-level signal declarations."""

from __future__ import annotations

from typing import Generic, overload
from weakref import WeakKeyDictionary

from typing_extensions import Self, TypeVar

from ctxsignal.core import Signal


T = TypeVar("T", default=None)


class DeclaredSignal(Generic[T]):
    """Descriptor: define at class level, get a `Signal` per instance.

    Example:
        class Door:
            opened = DeclaredSignal[str]()

        door = Door()
        door.opened.add(alarm.on_door_opened, alarm)
        door.opened.emit("front")

    Per-instance signals are weakly keyed by their owner, so the declaration
    does not keep instances alive.
    """

    __slots__ = ("_name", "_owner_name", "_signals")

    def __init__(self) -> None:
        self._name: str = ""
        self._owner_name: str = ""
        self._signals: WeakKeyDictionary[object, Signal[T]] = WeakKeyDictionary()

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name
        self._owner_name = owner.__qualname__

    @overload
    def __get__(self, obj: None, owner: type | None = None) -> Self: ...

    @overload
    def __get__(self, obj: object, owner: type | None = None) -> Signal[T]: ...

    def __get__(self, obj: object | None, owner: type | None = None) -> Self | Signal[T]:
        if obj is None:
            return self
        try:
            return self._signals[obj]
        except KeyError:
            signal: Signal[T] = Signal(name=f"{self._owner_name}.{self._name}")
            self._signals[obj] = signal
            return signal

    def __set__(self, obj: object, value: object) -> None:
        msg = f"Declared signal {self._name!r} cannot be reassigned"
        raise AttributeError(msg)

    @property
    def name(self) -> str:
        """Get the attribute name this signal is declared under."""
        return self._name
