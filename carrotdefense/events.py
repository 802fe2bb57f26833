"""A minimal observer mechanism."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Observer(ABC):
    """Something that wants to hear about changes in a :class:`Subject`."""

    @abstractmethod
    def update(self, subject: "Subject") -> None:
        """React to a change in ``subject``."""


class Subject:
    """Keeps a list of observers and tells them when something changes."""

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        """Register ``observer``; the same observer may be added more than once."""
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        """Remove every registration of ``observer``."""
        self._observers = [o for o in self._observers if o is not observer]

    def notify_observers(self) -> None:
        """Call ``update`` on every observer in registration order."""
        for observer in list(self._observers):
            observer.update(self)