"""Benchmark: Memory usage of the in-memory session store.

Uses tracemalloc to measure memory allocated while filling a MemoryStore
with sessions and then letting half of them expire.
"""
from __future__ import annotations

import json
import sys
import tracemalloc
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_session.session.state import Session
from simple_session.store.memory import MemoryStore

_ITERATIONS: int = 10_000


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


def bench_store_memory_usage() -> dict[str, object]:
    """Benchmark memory usage of MemoryStore set+evict cycles.

    Returns
    -------
    dict with keys: operation, iterations, peak_memory_kb, current_memory_kb,
    live_sessions, memory_peak_mb.
    """
    clock = _Clock()
    tracemalloc.start()

    store = MemoryStore(clock=clock)
    for i in range(_ITERATIONS):
        ttl = timedelta(minutes=1) if i % 2 else timedelta(hours=1)
        session = Session(
            id=f"sid-{i}",
            data={"user": i},
            expiration=clock.now + ttl,
            csrf_token=f"csrf-{i}",
        )
        store.set(session.id, session, ttl)

    clock.now += timedelta(minutes=2)
    live = len(store)

    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    result: dict[str, object] = {
        "operation": "store_memory_usage",
        "iterations": _ITERATIONS,
        "peak_memory_kb": round(peak / 1024, 2),
        "current_memory_kb": round(current / 1024, 2),
        "live_sessions": live,
        "memory_peak_mb": round(peak / 1024 / 1024, 4),
    }
    print(
        f"[bench_memory_usage] {result['operation']}: "
        f"peak {result['peak_memory_kb']:.2f} KB, {live} live of {_ITERATIONS}"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_store_memory_usage()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "memory_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
