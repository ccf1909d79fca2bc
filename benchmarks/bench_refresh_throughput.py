"""Benchmark: charge refresh throughput — skills refreshed per second.

Measures how many skills InMemorySkillStore.handle_refresh() can advance
per second when every skill is recharging on a duration recast.
"""
from __future__ import annotations

import asyncio
import datetime
import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skill_recast.convenience import duration_recast
from skill_recast.skills.events import CreateSkillEvent, RefreshChargeEvent
from skill_recast.skills.store import InMemorySkillStore

_N_SKILLS: int = 500
_ITERATIONS: int = 200
_START = datetime.datetime(2024, 1, 1)


async def _make_store() -> InMemorySkillStore:
    """Build a store of empty skills with staggered one-second recasts."""
    store = InMemorySkillStore()
    for i in range(_N_SKILLS):
        await store.handle_create(
            CreateSkillEvent(
                name=f"skill-{i}",
                casting_charge_limit=1000,
                recast=duration_recast(seconds=1 + i % 7),
                initially_available=False,
                created_at=_START,
            )
        )
    return store


async def bench_refresh_throughput() -> dict[str, object]:
    """Benchmark InMemorySkillStore.handle_refresh() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    store = await _make_store()
    latencies: list[float] = []

    start = time.perf_counter()
    for i in range(_ITERATIONS):
        now = _START + datetime.timedelta(seconds=i + 1)
        t0 = time.perf_counter()
        await store.handle_refresh(RefreshChargeEvent(now=now))
        latencies.append(time.perf_counter() - t0)
    total = time.perf_counter() - start

    latencies.sort()
    skills_refreshed = _ITERATIONS * _N_SKILLS
    result: dict[str, object] = {
        "operation": "refresh_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(skills_refreshed / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "p99_latency_ms": round(latencies[int(len(latencies) * 0.99) - 1] * 1000, 4),
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_refresh_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} skills/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms per refresh"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return asyncio.run(bench_refresh_throughput())


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "refresh_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
