"""Tracing module: logs solver and generator steps and writes to CSV."""

import csv
import os
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving or generation process."""

    timestamp: float
    step_number: int
    action_type: str  # 'place', 'backtrack', 'dead_end', 'seed_box', 'clear', 'conflict', etc.
    row: Optional[int] = None
    col: Optional[int] = None
    digit: Optional[int] = None
    depth: Optional[int] = None  # Recursion depth of the solver
    filled: Optional[int] = None  # Number of filled cells
    reason: Optional[str] = None  # Why backtracking occurred, etc.


class Tracer:
    """Records solver steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_place(self, row: int, col: int, digit: int, depth: int):
        """Log a tentative digit placement."""
        if not self.enabled:
            return
        self._record('place', row=row, col=col, digit=digit, depth=depth)

    def log_backtrack(self, row: int, col: int, digit: int, depth: int):
        """Log undoing a placement whose branch failed."""
        if not self.enabled:
            return
        self._record('backtrack', row=row, col=col, digit=digit, depth=depth,
                     reason="Branch has no completion")

    def log_dead_end(self, row: int, col: int, depth: int, reason: str = "No legal digit"):
        """Log a cell for which every digit failed."""
        if not self.enabled:
            return
        self._record('dead_end', row=row, col=col, depth=depth, reason=reason)

    def log_conflict(self, row: int, col: int, digit: int, reason: str = "Clues conflict"):
        """Log a given clue that clashes with a peer."""
        if not self.enabled:
            return
        self._record('conflict', row=row, col=col, digit=digit, reason=reason)

    def log_seed_box(self, row: int, col: int, digits: List[int]):
        """Log a diagonal box seeded with a random permutation."""
        if not self.enabled:
            return
        self._record('seed_box', row=row, col=col, reason="".join(str(d) for d in digits))

    def log_clear(self, row: int, col: int, digit: int, filled: int):
        """Log a cell cleared while carving a puzzle."""
        if not self.enabled:
            return
        self._record('clear', row=row, col=col, digit=digit, filled=filled)

    def log_solution_found(self, filled: int):
        """Log when a solution is found."""
        if not self.enabled:
            return
        self._record('solution_found', filled=filled)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'row', 'col', 'digit',
            'depth', 'filled', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)")

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_placements': action_counts.get('place', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
        }


def _enabled_from_env() -> bool:
    return os.environ.get("SUDOKU_TRACE", "1").strip().lower() not in {"0", "false", "off", "no"}


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=_enabled_from_env())
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
