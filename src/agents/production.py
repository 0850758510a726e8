"""Quick card: production sites, their categories, and what each one yields."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import config
from src.agents.worker import Worker
from src.model.events import EventLog, emit
from src.model.resources import ResourceKind


class SiteCategory(str, Enum):
    """Category card: closed set of site kinds; values double as display labels."""

    FARM = "Farm"
    MINE = "Mine"
    LUMBER_MILL = "Lumber Mill"
    OTHER = "Other"

    @classmethod
    def parse(cls, label: str) -> "SiteCategory":
        """Label cue: match a saved/type label case-insensitively, unknowns become OTHER."""
        wanted = (label or "").strip().upper()
        for category in cls:
            if category.value.upper() == wanted:
                return category
        return cls.OTHER


# Dispatch table: which stockpile each category feeds. OTHER feeds nothing.
SITE_OUTPUT: Dict[SiteCategory, Optional[ResourceKind]] = {
    SiteCategory.FARM: ResourceKind.FOOD,
    SiteCategory.MINE: ResourceKind.STONE,
    SiteCategory.LUMBER_MILL: ResourceKind.WOOD,
    SiteCategory.OTHER: None,
}

_missing = set(SiteCategory) - set(SITE_OUTPUT)
if _missing:
    raise RuntimeError(f"SITE_OUTPUT has no entry for {sorted(c.name for c in _missing)}")


def announce_rejected_assignment() -> bool:
    """Policy cue: should a full site still report that a worker was added?

    Flip ``config.ANNOUNCE_REJECTED_ASSIGNMENTS`` to stop the misleading notice.
    """
    return config.ANNOUNCE_REJECTED_ASSIGNMENTS


@dataclass(eq=False)
class ProductionSite:
    """Site card: a named building with a capped, first-in-first-out roster."""

    category: SiteCategory
    name: str
    capacity: int = config.DEFAULT_SITE_CAPACITY
    roster: List[Worker] = field(default_factory=list)

    @property
    def worker_count(self) -> int:
        return len(self.roster)

    @property
    def is_full(self) -> bool:
        return len(self.roster) >= self.capacity

    @property
    def output_kind(self) -> Optional[ResourceKind]:
        return SITE_OUTPUT[self.category]

    def produce(self) -> int:
        """Yield cue: output is a pure function of roster size."""
        return config.OUTPUT_PER_WORKER * len(self.roster)

    def assign(self, worker: Worker, log: EventLog | None = None) -> bool:
        """Roster cue: add the worker if there is room; a full site ignores the request.

        Returns whether the worker actually joined.
        """
        added = not self.is_full
        if added:
            self.roster.append(worker)
        if added or announce_rejected_assignment():
            emit(log, f"A worker was added to {self.name}")
        return added

    def unassign(self, log: EventLog | None = None) -> Worker | None:
        """Roster cue: release the longest-serving worker, or None when empty."""
        if not self.roster:
            return None
        worker = self.roster.pop(0)
        worker.set_employed(False, log)
        emit(log, f"A worker was removed from {self.name}")
        return worker

    def discard(self, worker: Worker) -> bool:
        """Cleanup note: drop a specific worker (by identity) without touching their flag."""
        for idx, member in enumerate(self.roster):
            if member is worker:
                del self.roster[idx]
                return True
        return False

    def rename(self, name: str, log: EventLog | None = None) -> None:
        emit(log, f"{self.name} was renamed to {name}")
        self.name = name
