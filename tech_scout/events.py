# File: tech_scout/events.py
"""tech_scout.events: minimal synchronous event bus."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

Listener = Callable[[Any], None]

__all__ = ["EventEmitter", "Listener"]


class EventEmitter:
    """Named events with listeners called in registration order."""

    def __init__(self) -> None:
        self.listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, callback: Listener) -> None:
        self.listeners[event].append(callback)

    def emit(self, event: str, payload: Any) -> None:
        for listener in list(self.listeners.get(event, ())):
            listener(payload)
