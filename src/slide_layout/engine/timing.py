"""
Module: engine.timing

Purpose:
    Timing instrumentation for layout calls, to check the staging and
    measurement cost against the expected tens of milliseconds for trees
    with thousands of nodes.

Key Classes:
    - TimingLog: Collects per-phase durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - engine.pipeline: layout_boxes()
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generator, List

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Timing metrics for layout calls.

    A phase timed more than once (e.g. several layout calls sharing one
    log) accumulates every duration.

    Attributes:
        phase_timings: Dict of phase_name -> list of durations in seconds

    Example:
        >>> log = TimingLog()
        >>> log.log_phase("stage_and_measure", 0.012)
        >>> log.total("stage_and_measure")
        0.012
    """
    phase_timings: Dict[str, List[float]] = field(default_factory=dict)

    def log_phase(self, phase: str, duration: float) -> None:
        """Record one duration for a phase."""
        self.phase_timings.setdefault(phase, []).append(duration)

    def total(self, phase: str) -> float:
        """Total time spent in a phase (0.0 if never timed)."""
        return sum(self.phase_timings.get(phase, []))

    def count(self, phase: str) -> int:
        return len(self.phase_timings.get(phase, []))

    def get_phase_averages(self) -> Dict[str, float]:
        """Average duration per phase."""
        return {
            phase: sum(durations) / len(durations)
            for phase, durations in self.phase_timings.items()
            if durations
        }

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Layout Timing Summary ==="]
        for phase, durations in sorted(self.phase_timings.items()):
            total_ms = sum(durations) * 1000
            lines.append(f"  {phase:25s} {total_ms:8.2f}ms  ({len(durations)} calls)")
        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "phase_timings": self.phase_timings,
            "phase_averages": self.get_phase_averages(),
        }

    def save(self, path: Path) -> None:
        """Save timing data to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Saved timing data to {path}")


@contextmanager
def timed_phase(log: TimingLog, phase: str) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    The duration is recorded even when the block raises.

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "normalize"):
        ...     root = normalize(box, measurement)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log_phase(phase, time.perf_counter() - start)
