"""Benchmark: Token verification latency — per-call p99.

Measures the per-call latency of Authenticator.verify() on freshly
created session-sized tokens.
"""
from __future__ import annotations

import json
import secrets
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_session.token import Authenticator

_WARMUP: int = 200
_ITERATIONS: int = 10_000


def bench_token_verify_latency() -> dict[str, object]:
    """Benchmark Authenticator.verify() per-call latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    auth = Authenticator(secrets.token_bytes(32))
    tokens = [auth.create(secrets.token_bytes(16)) for _ in range(_WARMUP + _ITERATIONS)]

    for token in tokens[:_WARMUP]:
        auth.verify(token)

    latencies_ms: list[float] = []
    for token in tokens[_WARMUP:]:
        t0 = time.perf_counter()
        auth.verify(token)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "token_verify_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_token_latency] {result['operation']}: "
        f"p99={result['p99_latency_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_token_verify_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
