"""Minimal in-process event dispatch.

Listeners are registered per event name with an integer priority. Higher
priorities run first; listeners sharing a priority run in registration
order. A listener can stop propagation to skip the remaining listeners.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Protocol, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")

Listener = Callable[["Event"], None]


class Event:
    """Base class for dispatched events."""

    NAME: str = ""

    _propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self._propagation_stopped = True

    def is_propagation_stopped(self) -> bool:
        return self._propagation_stopped


@runtime_checkable
class EventSubscriber(Protocol):
    """An object that declares which events it listens to.

    ``get_subscribed_events`` maps an event name to a list of
    ``(method_name, priority)`` pairs.
    """

    def get_subscribed_events(self) -> Mapping[str, Sequence[tuple[str, int]]]: ...


class EventDispatcher:
    """Dispatches events to listeners registered by name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[int, int, Listener]]] = {}
        self._sequence = 0

    def add_listener(self, name: str, listener: Listener, priority: int = 0) -> None:
        """Register ``listener`` for events dispatched under ``name``."""
        self._sequence += 1
        self._listeners.setdefault(name, []).append(
            (priority, self._sequence, listener)
        )

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """Register every handler a subscriber declares."""
        for name, handlers in subscriber.get_subscribed_events().items():
            for method_name, priority in handlers:
                self.add_listener(name, getattr(subscriber, method_name), priority)

    def remove_listener(self, name: str, listener: Listener) -> None:
        listeners = self._listeners.get(name, [])
        self._listeners[name] = [item for item in listeners if item[2] != listener]

    def get_listeners(self, name: str) -> list[Listener]:
        """Listeners for ``name`` in call order."""
        ordered = sorted(
            self._listeners.get(name, []), key=lambda item: (-item[0], item[1])
        )
        return [listener for _, _, listener in ordered]

    def has_listeners(self, name: str) -> bool:
        return bool(self._listeners.get(name))

    def dispatch(self, event: E, name: str | None = None) -> E:
        """Call the listeners for ``name`` (default ``event.NAME``) and return the event."""
        event_name = name or event.NAME
        if not event_name:
            raise ValueError(f"Cannot dispatch {type(event).__name__} without a name")

        listeners = self.get_listeners(event_name)
        logger.debug("Dispatching %s to %d listener(s)", event_name, len(listeners))
        for listener in listeners:
            if event.is_propagation_stopped():
                break
            listener(event)
        return event
