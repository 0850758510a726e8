"""I keep this as the headless entry point for the village simulation so I can start a fresh
village (or load a save), advance a batch of turns, and keep the save, history, and event log."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import config
from src.model.log_utils import print_event_log, print_history_summary, print_turn_summary
from src.model.persistence import SaveFileError, read_settlement, write_settlement
from src.model.settlement import Settlement


@dataclass
class RunConfig:
    """I centralise the run knobs (turn count, save/load paths, verbosity) in one place."""

    turns: int = config.DEFAULT_TURNS
    load_path: Optional[Path] = None
    save_path: Optional[Path] = Path(config.DEFAULT_SAVE_PATH)
    history_path: Optional[Path] = None
    quiet: bool = False

    def resolved_history_path(self) -> Optional[Path]:
        """I put the history CSV next to the save file unless told otherwise."""
        if self.history_path is not None:
            return self.history_path
        if self.save_path is not None:
            return self.save_path.with_name(f"{self.save_path.stem}_history.csv")
        return None


def run_demo(run: RunConfig) -> Settlement:
    """I drive the turn loop: build or load the village, step it, then persist what it produced.

    Loading errors propagate as ``SaveFileError`` so the caller never continues with a
    half-built village.
    """
    if run.load_path is not None:
        settlement = read_settlement(run.load_path)
        if not run.quiet:
            print(f"Loaded village from {run.load_path}")
    else:
        settlement = Settlement()
        if not run.quiet:
            print("Welcome to your new village!")

    for _ in range(run.turns):
        before = settlement.snapshot()
        settlement.advance_turn()
        if not run.quiet:
            culled = settlement.last_culled.name if settlement.last_culled is not None else None
            print_turn_summary(settlement.steps, before, settlement.snapshot(), culled)
        if settlement.is_extinct():
            print(f"The village has died out by turn {settlement.steps}. Ending early.")
            break

    if run.save_path is not None:
        write_settlement(run.save_path, settlement)
        print(f"Saved village to {run.save_path.resolve()}")

    history = settlement.history_frame()
    history_path = run.resolved_history_path()
    if history_path is not None:
        history_path.parent.mkdir(parents=True, exist_ok=True)
        history.to_csv(history_path, index=True)
    if not run.quiet:
        print_history_summary(history)
        print_event_log(settlement.event_log)
    return settlement


def parse_args(argv: Optional[List[str]] = None) -> RunConfig:
    parser = argparse.ArgumentParser(description="Advance a small village a number of turns.")
    parser.add_argument("--turns", "-t", type=int, default=config.DEFAULT_TURNS, help="Turns to simulate")
    parser.add_argument("--load", "-l", type=Path, help="Start from this save file instead of a new village")
    parser.add_argument("--save", "-s", type=Path, default=Path(config.DEFAULT_SAVE_PATH), help="Where to save")
    parser.add_argument("--no-save", action="store_true", help="Skip writing the save file")
    parser.add_argument("--history", type=Path, help="CSV path for the per-turn resource history")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print errors and final paths")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if args.turns < 0:
        parser.error("--turns must not be negative")
    return RunConfig(
        turns=args.turns,
        load_path=args.load,
        save_path=None if args.no_save else args.save,
        history_path=args.history,
        quiet=args.quiet,
    )


def main(argv: Optional[List[str]] = None) -> int:
    run = parse_args(argv)
    try:
        run_demo(run)
    except SaveFileError as exc:
        print(f"Could not load village: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
