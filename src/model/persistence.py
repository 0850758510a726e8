"""Quick card: save and load a Settlement as a JSON document.

Document shape::

    {
      "totalFood": int, "totalWood": int, "totalStone": int,
      "citizens": [{"name": str, "isWorking": bool}, ...],
      "buildings": [{"type": str, "name": str, "maxWorkers": int,
                     "workers": [{"name": str, "isWorking": bool}, ...]}, ...]
    }

Each building's ``workers`` list is written but not read back: a loaded
village has its citizens and sites, but every site starts with an empty
roster and the caller decides who works where.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from src.agents.production import ProductionSite, SiteCategory
from src.agents.worker import Worker
from src.model.settlement import Settlement

log = logging.getLogger(__name__)


class SaveFileError(Exception):
    """Base error for anything that stops a save file from loading."""


class SaveNotFoundError(SaveFileError, FileNotFoundError):
    """The save file does not exist."""


class SaveFormatError(SaveFileError, ValueError):
    """The save file is not a well-formed village document."""


def worker_to_dict(worker: Worker) -> Dict[str, Any]:
    return {"name": worker.name, "isWorking": worker.employed}


def site_to_dict(site: ProductionSite) -> Dict[str, Any]:
    return {
        "type": site.category.value,
        "name": site.name,
        "maxWorkers": site.capacity,
        "workers": [worker_to_dict(w) for w in site.roster],
    }


def to_document(settlement: Settlement) -> Dict[str, Any]:
    """Export cue: the full village as a JSON-ready dict."""
    document = {
        "citizens": [worker_to_dict(w) for w in settlement.workers],
        "buildings": [site_to_dict(s) for s in settlement.sites],
        "totalWood": settlement.wood,
        "totalStone": settlement.stone,
        "totalFood": settlement.food,
    }
    settlement.event_log.log_event("Village state was saved")
    return document


def write_settlement(path: str | Path, settlement: Settlement) -> Path:
    """Save cue: write the village to ``path``, creating parent folders as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(to_document(settlement), f, indent=2)
    log.info("Saved village (%d citizens, %d sites) to %s", settlement.population, len(settlement.sites), path)
    return path


def _field(obj: Dict[str, Any], key: str, expected: type, where: str) -> Any:
    if key not in obj:
        raise SaveFormatError(f"{where}: missing field {key!r}")
    value = obj[key]
    # bool is an int subclass; keep the two apart.
    if expected is int and isinstance(value, bool):
        raise SaveFormatError(f"{where}: field {key!r} must be an integer, got a boolean")
    if not isinstance(value, expected):
        raise SaveFormatError(f"{where}: field {key!r} must be {expected.__name__}, got {type(value).__name__}")
    return value


def _object(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SaveFormatError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _parse_worker(raw: Any, where: str) -> Worker:
    obj = _object(raw, where)
    return Worker(_field(obj, "name", str, where), employed=_field(obj, "isWorking", bool, where))


def _parse_site(raw: Any, where: str) -> ProductionSite:
    obj = _object(raw, where)
    label = _field(obj, "type", str, where)
    name = _field(obj, "name", str, where)
    capacity = _field(obj, "maxWorkers", int, where)
    if capacity < 0:
        raise SaveFormatError(f"{where}: maxWorkers must not be negative")
    # Roster entries are validated so a broken file still fails loudly, then dropped.
    roster = obj.get("workers", [])
    if not isinstance(roster, list):
        raise SaveFormatError(f"{where}: field 'workers' must be list, got {type(roster).__name__}")
    for idx, entry in enumerate(roster):
        _parse_worker(entry, f"{where}.workers[{idx}]")
    return ProductionSite(SiteCategory.parse(label), name, capacity=capacity)


def from_document(document: Any) -> Settlement:
    """Import card: rebuild a village from a parsed document.

    I start from a brand-new default village and overwrite it: lists cleared,
    each stock zeroed and refilled through the normal delta rules (so a
    negative food total lands on 0 and a negative wood/stone total is refused,
    leaving 0), then sites and citizens appended in file order.
    """
    doc = _object(document, "document")
    total_food = _field(doc, "totalFood", int, "document")
    total_wood = _field(doc, "totalWood", int, "document")
    total_stone = _field(doc, "totalStone", int, "document")
    citizens = [
        _parse_worker(raw, f"citizens[{idx}]")
        for idx, raw in enumerate(_field(doc, "citizens", list, "document"))
    ]
    sites = [
        _parse_site(raw, f"buildings[{idx}]")
        for idx, raw in enumerate(_field(doc, "buildings", list, "document"))
    ]

    settlement = Settlement()
    settlement.workers.clear()
    settlement.unemployed.clear()
    settlement.sites.clear()

    settlement.change_food(-settlement.food)
    settlement.change_food(total_food)
    settlement.change_stone(-settlement.stone)
    settlement.change_stone(total_stone)
    settlement.change_wood(-settlement.wood)
    settlement.change_wood(total_wood)

    settlement.sites.extend(sites)
    for worker in citizens:
        settlement.add_worker(worker)
    settlement.restart_history()
    return settlement


def read_settlement(path: str | Path) -> Settlement:
    """Load cue: read ``path`` and return a fresh village, or raise a SaveFileError."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SaveNotFoundError(f"No save file at {path}") from exc
    except UnicodeDecodeError as exc:
        raise SaveFormatError(f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise SaveFileError(f"Could not read save file {path}: {exc.strerror or exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SaveFormatError(f"{path}: not valid JSON ({exc.msg} at line {exc.lineno})") from exc
    settlement = from_document(document)
    log.info("Loaded village (%d citizens, %d sites) from %s", settlement.population, len(settlement.sites), path)
    return settlement
