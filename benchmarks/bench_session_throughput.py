"""Benchmark: Session create/lookup throughput — operations per second.

Measures how many session create+lookup round-trips can be completed per
second against the in-memory store.
"""
from __future__ import annotations

import json
import secrets
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_session.http import Cookie
from simple_session.session.manager import SessionManager
from simple_session.store.memory import MemoryStore

_ITERATIONS: int = 5_000


class _NullResponse:
    def set_cookie(self, cookie: Cookie) -> None:
        pass

    def send_error(self, status: int, message: str) -> None:
        raise RuntimeError(f"session creation failed with status {status}")


def bench_session_create_lookup_throughput() -> dict[str, object]:
    """Benchmark SessionManager create+lookup round-trip throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    manager = SessionManager(MemoryStore(), secrets.token_bytes(32))
    response = _NullResponse()

    latencies_ms: list[float] = []
    for i in range(_ITERATIONS):
        t0 = time.perf_counter()
        session = manager.create(response, {"user": f"bench-{i}"})
        manager.lookup(session.id)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    total = sum(latencies_ms) / 1000
    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)

    result: dict[str, object] = {
        "operation": "session_create_lookup_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_session_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_session_create_lookup_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
