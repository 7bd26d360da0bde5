"""Tracing module: logs deduction engine steps and writes them to CSV."""

import csv
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in the solving process."""

    timestamp: float
    step_number: int
    action_type: str  # 'deduction', 'contradiction', 'stuck', 'solved'
    rule: Optional[str] = None
    cells: Optional[str] = None  # e.g. "(0, 1)=A (0, 2)=A"
    filled_cells: Optional[int] = None  # Non-empty cells after the step
    reason: Optional[str] = None


class Tracer:
    """Records engine steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        if not self.enabled:
            return
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_deduction(self, rule: str, cells: str, filled_cells: int):
        """Log a successful rule application."""
        self._record('deduction', rule=rule, cells=cells, filled_cells=filled_cells)

    def log_contradiction(self, reason: str, rule: Optional[str] = None, filled_cells: Optional[int] = None):
        """Log a contradiction; the engine stops after this."""
        self._record('contradiction', rule=rule, reason=reason, filled_cells=filled_cells)

    def log_stuck(self, filled_cells: int):
        """Log a fixpoint reached on an incomplete grid."""
        self._record('stuck', filled_cells=filled_cells, reason="No rule makes progress")

    def log_solved(self, filled_cells: int):
        """Log when the grid is complete and valid."""
        self._record('solved', filled_cells=filled_cells)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write")
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'rule', 'cells',
            'filled_cells', 'reason'
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
        rule_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1
            if step.action_type == 'deduction' and step.rule:
                rule_counts[step.rule] = rule_counts.get(step.rule, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'rule_counts': rule_counts,
            'num_deductions': action_counts.get('deduction', 0),
            'num_contradictions': action_counts.get('contradiction', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
