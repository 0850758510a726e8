"""Quick card: the village event log, an append-only audit trail of state changes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List

import config


@dataclass(frozen=True)
class Event:
    """Event card: one state-change notification with the moment it happened."""

    description: str
    date: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.date.strftime(config.EVENT_DATE_FORMAT)}  {self.description}"


class EventLog:
    """Log card: per-settlement, append-only event list.

    I keep every event for the life of the owning settlement; there is no
    retention limit, so a very long session grows this list without bound.
    Entities never reach for a global log: the settlement hands its log in as
    an explicit sink, and callers use ``mark``/``since`` to slice out what a
    single operation emitted.
    """

    def __init__(self) -> None:
        self._events: List[Event] = []

    def log_event(self, description: str) -> Event:
        """Append cue: record one notification and hand it back."""
        event = Event(description)
        self._events.append(event)
        return event

    def mark(self) -> int:
        """Bookmark cue: position to pass to ``since`` later."""
        return len(self._events)

    def since(self, mark: int) -> List[Event]:
        """Slice cue: events recorded after ``mark``."""
        return list(self._events[mark:])

    def descriptions(self) -> List[str]:
        return [event.description for event in self._events]

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)


def emit(log: EventLog | None, description: str) -> Event | None:
    """Sink helper: log when a sink was supplied, otherwise drop the notification."""
    if log is None:
        return None
    return log.log_event(description)
