"""
Module: extractor.timing

Purpose:
    Timing instrumentation for the sheet pipeline, so slow stages
    (usually keying on large sheets) show up in debug logs.

Key Classes:
    - TimingLog: Collects per-sheet phase durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - extractor.pipeline: process_sheet and process_batch
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Tuple


@dataclass
class TimingLog:
    """
    Timing metrics for the sheet pipeline.

    Attributes:
        sheet_timings: Dict of sheet_id -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log("sheet-0", "chroma_key", 0.084)
        >>> log.total("sheet-0")
        0.084
    """
    sheet_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def log(self, sheet_id: str, phase: str, duration: float) -> None:
        """Record the duration of one phase for one sheet."""
        self.sheet_timings.setdefault(sheet_id, {})[phase] = duration

    def total(self, sheet_id: str) -> float:
        """Total time recorded for a sheet (0.0 if unknown)."""
        return sum(self.sheet_timings.get(sheet_id, {}).values())

    def get_phase_averages(self) -> Dict[str, float]:
        """Calculate average time per phase across all sheets."""
        phase_totals: Dict[str, float] = {}
        phase_counts: Dict[str, int] = {}
        for phases in self.sheet_timings.values():
            for phase, duration in phases.items():
                phase_totals[phase] = phase_totals.get(phase, 0.0) + duration
                phase_counts[phase] = phase_counts.get(phase, 0) + 1
        return {phase: phase_totals[phase] / phase_counts[phase] for phase in phase_totals}

    def get_slowest_sheets(self, n: int = 3) -> List[Tuple[str, float]]:
        """Get the N slowest sheets with their total time."""
        totals = [(sheet_id, sum(phases.values())) for sheet_id, phases in self.sheet_timings.items()]
        totals.sort(key=lambda x: x[1], reverse=True)
        return totals[:n]

    def merge(self, other: TimingLog) -> None:
        """Fold another log's sheets into this one."""
        for sheet_id, phases in other.sheet_timings.items():
            self.sheet_timings.setdefault(sheet_id, {}).update(phases)

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Sheet Timing Summary ==="]

        averages = self.get_phase_averages()
        if averages:
            lines.append("Phase averages:")
            for phase, avg in sorted(averages.items(), key=lambda x: -x[1]):
                lines.append(f"  {phase:25s} {avg:.3f}s")

        slowest = self.get_slowest_sheets(3)
        if slowest:
            lines.append("")
            lines.append("Slowest sheets:")
            for sheet_id, total in slowest:
                lines.append(f"  {sheet_id}: {total:.3f}s")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "sheet_timings": self.sheet_timings,
            "phase_averages": self.get_phase_averages(),
        }


@contextmanager
def timed_phase(
    log: TimingLog,
    sheet_id: str,
    phase: str,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    The duration is recorded even if the block raises.

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "sheet-0", "slice"):
        ...     slots = slice_sheet(keyed, layout)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log(sheet_id, phase, time.perf_counter() - start)
