"""Quick card: console recaps for each turn, the history table, and the end-of-session event log."""

from __future__ import annotations

from typing import Any, Dict, Iterable

import pandas as pd

import config
from src.model.events import Event

RESOURCE_KEYS: tuple[str, ...] = ("food", "wood", "stone")


def fmt_res(value: Any) -> str:
    """Formatter note: keep resource numbers aligned using the configured width."""
    try:
        return f"{int(value):>{config.RESOURCE_DISPLAY_WIDTH}d}"
    except (TypeError, ValueError):
        return "n/a".rjust(config.RESOURCE_DISPLAY_WIDTH)


def print_turn_summary(
    turn: int,
    before: Dict[str, Any],
    after: Dict[str, Any],
    culled_name: str | None = None,
) -> None:
    """Showtime card: print the before/after resource table for one turn."""
    print(f"Turn {turn}:")
    for key in RESOURCE_KEYS:
        print(f"  {key:<6}| {fmt_res(before.get(key))} -> {fmt_res(after.get(key))}")
    print(
        f"  pop   | {fmt_res(before.get('population'))} -> {fmt_res(after.get('population'))}"
        f"  (unemployed queue {after.get('unemployed', 0)}, sites {after.get('sites', 0)})"
    )
    if culled_name is not None:
        print(f"  A CITIZEN STARVED TO DEATH DURING THE NIGHT! ({culled_name})")
    print("-" * 40)


def print_event_log(events: Iterable[Event]) -> None:
    """Audit card: dump the session's events, oldest first."""
    print("Event Log:")
    for event in events:
        print(f"  {event}")


def summarize_history(frame: pd.DataFrame) -> pd.DataFrame:
    """Stats cue: min/mean/max per tracked series."""
    if frame.empty:
        return pd.DataFrame()
    return frame.agg(["min", "mean", "max"]).transpose()


def print_history_summary(frame: pd.DataFrame) -> None:
    """I skim these stats so I can confirm the run looks sensible."""
    stats = summarize_history(frame)
    if stats.empty:
        print("History is empty.")
        return
    print("History summary:")
    print(f"  Turns recorded: {len(frame) - 1}")
    for series, row in stats.iterrows():
        print(f"  {series:<10} -> min {row['min']:.1f}, mean {row['mean']:.1f}, max {row['max']:.1f}")
