"""Quick card: Mesa wiring for the village, its turn loop, and every player-facing mutation."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import mesa
import pandas as pd
from mesa.datacollection import DataCollector

import config
from src.agents.production import ProductionSite, SiteCategory
from src.agents.worker import Worker
from src.model.events import Event, EventLog
from src.model.resources import ResourceKind, ResourcePool

log = logging.getLogger(__name__)


def requeue_idle_worker(queue: List[Worker], worker: Worker) -> None:
    """Policy cue: put an idle worker back on the unemployed queue during upkeep.

    By default the queue is not de-duplicated, so a worker who stays idle for
    several turns shows up several times. ``config.DEDUPE_IDLE_QUEUE`` switches
    that off.
    """
    if config.DEDUPE_IDLE_QUEUE and any(member is worker for member in queue):
        return
    queue.append(worker)


def _without(queue: List[Worker], worker: Worker) -> List[Worker]:
    return [member for member in queue if member is not worker]


class Settlement(mesa.Model):
    """Model card: workers, sites, and the shared stockpile, advanced one turn at a time."""

    def __init__(self) -> None:
        """Init cue: lay out the starter sites and founders, first few already at work."""
        super().__init__()
        self.event_log = EventLog()
        self.workers: List[Worker] = []
        self.unemployed: List[Worker] = []
        self.sites: List[ProductionSite] = []
        self.resources = ResourcePool()
        self.last_turn_events: List[Event] = []
        self.last_culled: Worker | None = None

        for label, name in config.STARTER_SITES:
            self.sites.append(ProductionSite(SiteCategory.parse(label), name))
        for _ in range(config.FOUNDER_COUNT):
            self.workers.append(Worker(config.FOUNDER_NAME, employed=False))
        self.event_log.log_event("A village was created")

        # Setup note: founder i staffs starter site i, everyone else waits for work.
        for site, founder in zip(self.sites, self.workers):
            site.assign(founder, self.event_log)
            founder.set_employed(True, self.event_log)
        self.unemployed.extend(w for w in self.workers if not w.employed)

        self.restart_history()

    @property
    def food(self) -> int:
        return self.resources.food

    @property
    def wood(self) -> int:
        return self.resources.wood

    @property
    def stone(self) -> int:
        return self.resources.stone

    @property
    def population(self) -> int:
        return len(self.workers)

    @property
    def employed_workers(self) -> List[Worker]:
        return [w for w in self.workers if w.employed]

    def is_extinct(self) -> bool:
        """End check: report whether every villager is gone."""
        return not self.workers

    def snapshot(self) -> Dict[str, Any]:
        """Snapshot cue: shallow copy of the headline numbers for recaps."""
        return {
            **self.resources.snapshot(),
            "population": len(self.workers),
            "unemployed": len(self.unemployed),
            "sites": len(self.sites),
        }

    def restart_history(self) -> None:
        """History cue: start a fresh per-turn DataCollector from the current state."""
        self.datacollector = DataCollector(
            model_reporters={
                "food": lambda m: m.food,
                "wood": lambda m: m.wood,
                "stone": lambda m: m.stone,
                "population": lambda m: m.population,
                "employed": lambda m: len(m.employed_workers),
            }
        )
        self.datacollector.collect(self)

    def history_frame(self) -> pd.DataFrame:
        """Export cue: one row per collected turn, starting with the initial state."""
        return self.datacollector.get_model_vars_dataframe()

    def change_food(self, amount: int) -> bool:
        return self.resources.apply_delta(ResourceKind.FOOD, amount, self.event_log)

    def change_wood(self, amount: int) -> bool:
        return self.resources.apply_delta(ResourceKind.WOOD, amount, self.event_log)

    def change_stone(self, amount: int) -> bool:
        return self.resources.apply_delta(ResourceKind.STONE, amount, self.event_log)

    def build(
        self,
        category: SiteCategory | str,
        name: str,
        wood_cost: int | None = None,
        stone_cost: int | None = None,
    ) -> bool:
        """Build card: add a site only when both stocks strictly exceed its costs.

        Missing costs come from ``config.BUILD_COSTS``. On failure nothing changes.
        """
        if not isinstance(category, SiteCategory):
            category = SiteCategory.parse(category)
        if wood_cost is None or stone_cost is None:
            catalogue = config.BUILD_COSTS.get(category.value)
            if catalogue is None:
                raise ValueError(f"No catalogue cost for {category.value}; pass wood_cost and stone_cost")
            wood_cost = catalogue[0] if wood_cost is None else wood_cost
            stone_cost = catalogue[1] if stone_cost is None else stone_cost

        if not (self.stone > stone_cost and self.wood > wood_cost):
            log.debug(
                "Cannot build %s %r: wood %d/%d, stone %d/%d",
                category.value, name, self.wood, wood_cost, self.stone, stone_cost,
            )
            return False
        self.sites.append(ProductionSite(category, name))
        self.resources.apply_delta(ResourceKind.STONE, -stone_cost)
        self.resources.apply_delta(ResourceKind.WOOD, -wood_cost)
        self.event_log.log_event(f"A {category.value} named {name} was added to the village")
        return True

    def rename_site(self, index: int, name: str) -> ProductionSite:
        site = self.sites[self._checked_index(index, self.sites, "site")]
        site.rename(name, self.event_log)
        return site

    def add_worker(self, worker: Worker) -> None:
        """Arrival cue: new villagers without a job join the unemployed queue."""
        self.workers.append(worker)
        if not worker.employed:
            self.unemployed.append(worker)
        self.event_log.log_event(f"{worker.name} was added to the village")

    def remove_worker(self, index: int) -> Worker:
        """Departure cue: remove by position from the population and every queue/roster."""
        worker = self.workers[self._checked_index(index, self.workers, "worker")]
        self._drop_worker(worker)
        self.event_log.log_event(f"{worker.name} was removed from the village")
        return worker

    def rename_worker(self, index: int, name: str) -> Worker:
        worker = self.workers[self._checked_index(index, self.workers, "worker")]
        worker.rename(name, self.event_log)
        return worker

    def hire(self, site: ProductionSite, worker: Worker) -> bool:
        """Hiring card: move a worker onto a site's roster as one atomic step.

        Only workers waiting in the unemployed queue can be hired. A worker who is
        not queued, or a full site, leaves the roster, the flag, and the queue untouched.
        """
        self._require_member(worker)
        self._require_site(site)
        if not any(member is worker for member in self.unemployed):
            log.debug("%r is not in the unemployed queue; hire skipped", worker.name)
            return False
        if site.is_full:
            log.debug("Site %r is full (%d/%d); hire skipped", site.name, site.worker_count, site.capacity)
            return False
        site.assign(worker, self.event_log)
        worker.set_employed(True, self.event_log)
        self.unemployed[:] = _without(self.unemployed, worker)
        return True

    def fire(self, site: ProductionSite) -> Worker | None:
        """Firing card: release the longest-serving worker back to the unemployed queue."""
        self._require_site(site)
        worker = site.unassign(self.event_log)
        if worker is not None:
            self.unemployed.append(worker)
        return worker

    def advance_turn(self) -> List[Event]:
        """Turn cue: run one step and hand back the events it produced."""
        self.step()
        return list(self.last_turn_events)

    def step(self) -> None:
        """Loop card: production first, then upkeep; the order is part of the rules."""
        mark = self.event_log.mark()
        log.debug("Turn %s: production phase", self.steps)
        self._production_phase()
        log.debug("Turn %s: upkeep phase", self.steps)
        self.last_culled = self._upkeep_phase()
        self.event_log.log_event("Village updated for next turn")
        self.last_turn_events = self.event_log.since(mark)
        if self.is_extinct():
            self.running = False
        self.datacollector.collect(self)

    def _production_phase(self) -> None:
        for site in self.sites:
            kind = site.output_kind
            if kind is None:
                continue
            self.resources.apply_delta(kind, site.produce(), self.event_log)
        self.event_log.log_event("Resources were updated")

    def _upkeep_phase(self) -> Worker | None:
        """Upkeep cue: feed villagers in order; the first one met on an empty granary starves.

        At most one villager dies per turn, and feeding stops at that point.
        """
        culled: Worker | None = None
        for worker in self.workers:
            if not worker.employed:
                requeue_idle_worker(self.unemployed, worker)
            if self.resources.food <= 0:
                culled = worker
                break
            self._feed(worker)

        if culled is not None:
            self._drop_worker(culled)
            log.warning("%s starved to death (population now %d)", culled.name, len(self.workers))
            self.event_log.log_event(f"{culled.name} starved to death")
        self.event_log.log_event("Citizens were updated")
        return culled

    def _feed(self, worker: Worker) -> bool:
        ate = self.resources.apply_delta(ResourceKind.FOOD, -config.FOOD_PER_MEAL, self.event_log)
        if ate:
            self.event_log.log_event(f"{worker.name} was able to eat")
        else:
            log.warning("%s ate the last scraps; food clamped to 0", worker.name)
            self.event_log.log_event(f"{worker.name} went hungry")
        return ate

    def _drop_worker(self, worker: Worker) -> None:
        self.workers[:] = _without(self.workers, worker)
        self.unemployed[:] = _without(self.unemployed, worker)
        for site in self.sites:
            site.discard(worker)

    def _require_member(self, worker: Worker) -> None:
        if not any(member is worker for member in self.workers):
            raise ValueError(f"{worker.name!r} does not live in this village")

    def _require_site(self, site: ProductionSite) -> None:
        if not any(member is site for member in self.sites):
            raise ValueError(f"{site.name!r} is not a site of this village")

    @staticmethod
    def _checked_index(index: int, items: List[Any], label: str) -> int:
        if not 0 <= index < len(items):
            raise IndexError(f"{label} index {index} out of range (0..{len(items) - 1})")
        return index
