"""
Simple timing helpers for the tilepack project.

These utilities provide lightweight ways to measure execution time for:

- Individual code blocks (context manager).
- Repeated calls, e.g. packing the same block list many times (benchmark).

Durations are reported through the `logging` module at INFO level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import logging
import statistics
import time

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Context-manager timer
# ---------------------------------------------------------------------------

@dataclass
class Timer:
    """
    Context manager for measuring wall-clock time of a code block.

    Usage
    -----
        from tilepack.utils.timing import Timer

        with Timer("pack 500 blocks") as t:
            build_tileset(blocks)
        print(t.elapsed)

    Attributes
    ----------
    name:
        Optional label logged when exiting the context.
    enabled:
        If False, time is still measured but nothing is logged.
    elapsed:
        Duration in seconds. Available after the context exits.
    """

    name: Optional[str] = None
    enabled: bool = True
    start: float = 0.0
    end: float = 0.0
    elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.end = time.perf_counter()
        self.elapsed = self.end - self.start
        if self.enabled:
            log.info("[Timer] %s%.4f s", f"{self.name}: " if self.name else "", self.elapsed)


# ---------------------------------------------------------------------------
# Simple benchmarking helper
# ---------------------------------------------------------------------------

def benchmark(
    func: Callable[..., Any],
    *args,
    repeats: int = 5,
    warmup: int = 1,
    **kwargs,
) -> Dict[str, float]:
    """
    Run a simple micro-benchmark of `func(*args, **kwargs)`.

    - Runs the function `warmup` times without recording.
    - Then runs it `repeats` times, recording elapsed durations.
    - Returns a dictionary with keys 'min', 'mean', 'max' and 'repeats'.
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")

    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(repeats):
        with Timer(enabled=False) as t:
            func(*args, **kwargs)
        times.append(t.elapsed)

    return {
        "min": min(times),
        "mean": statistics.mean(times),
        "max": max(times),
        "repeats": float(repeats),
    }


__all__ = [
    "Timer",
    "benchmark",
]
