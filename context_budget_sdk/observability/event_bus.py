"""Event bus for SDK observability."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol


@dataclass
class Event:
    event_type: str
    tags: dict[str, str] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], Any]


class EventBus(Protocol):
    def emit(self, event: Event) -> None: ...
    def on(self, event_type: str, handler: EventHandler) -> None: ...


class InMemoryEventBus:
    """Synchronous event bus; handlers run inline and recent events are kept."""

    def __init__(self, max_history: int = 1000) -> None:
        self._subscribers: dict[str, list[EventHandler]] = {}
        self._recent: deque[Event] = deque(maxlen=max_history)

    def emit(self, event: Event) -> None:
        self._recent.append(event)
        for handler in tuple(self._subscribers.get(event.event_type, ())):
            handler(event)

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._subscribers.setdefault(event_type, []).append(handler)

    @property
    def history(self) -> list[Event]:
        """Oldest first, at most ``max_history`` events."""
        return list(self._recent)

    def clear_history(self) -> None:
        self._recent.clear()
