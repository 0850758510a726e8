"""Quick card: Worker, the villager who eats every turn and may hold a job."""

from __future__ import annotations

from dataclasses import dataclass

from src.model.events import EventLog, emit


@dataclass(eq=False)
class Worker:
    """Villager card: a name plus an employment flag.

    Workers compare by identity, so two villagers called "Founder" stay
    distinct members of every list they sit in.
    """

    name: str
    employed: bool = False

    def set_employed(self, employed: bool, log: EventLog | None = None) -> None:
        """Job cue: flip the employment flag and note it."""
        if employed:
            emit(log, f"{self.name} is now working")
        else:
            emit(log, f"{self.name} is no longer working")
        self.employed = employed

    def rename(self, name: str, log: EventLog | None = None) -> None:
        emit(log, f"{self.name} was renamed to {name}")
        self.name = name
