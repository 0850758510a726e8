"""Quick card: the shared food/wood/stone stockpile and its guarded delta rules."""

from __future__ import annotations

from enum import Enum

import config
from src.model.events import EventLog, emit


class ResourceKind(str, Enum):
    FOOD = "food"
    WOOD = "wood"
    STONE = "stone"


class ResourcePool:
    """Stockpile card: three non-negative integer counters.

    Wood and stone refuse any delta that would take them below zero and stay
    untouched. Food is different: an underflow clamps the counter to 0 and
    still reports failure, so the last meal can empty the granary.
    """

    def __init__(
        self,
        food: int = config.STARTING_FOOD,
        wood: int = config.STARTING_WOOD,
        stone: int = config.STARTING_STONE,
    ) -> None:
        self._amounts: dict[ResourceKind, int] = {
            ResourceKind.FOOD: int(food),
            ResourceKind.WOOD: int(wood),
            ResourceKind.STONE: int(stone),
        }

    @property
    def food(self) -> int:
        return self._amounts[ResourceKind.FOOD]

    @property
    def wood(self) -> int:
        return self._amounts[ResourceKind.WOOD]

    @property
    def stone(self) -> int:
        return self._amounts[ResourceKind.STONE]

    def get(self, kind: ResourceKind) -> int:
        return self._amounts[kind]

    def apply_delta(self, kind: ResourceKind, amount: int, log: EventLog | None = None) -> bool:
        """Delta cue: add ``amount`` to one counter, returning whether it fit."""
        current = self._amounts[kind]
        if current + amount >= 0:
            self._amounts[kind] = current + amount
            emit(log, f"Total {kind.value.capitalize()} is now: {self._amounts[kind]}")
            return True
        if kind is ResourceKind.FOOD:
            self._amounts[kind] = 0
        return False

    def snapshot(self) -> dict[str, int]:
        """Snapshot cue: plain dict copy for recaps and history rows."""
        return {kind.value: amount for kind, amount in self._amounts.items()}
