#!/usr/bin/env python3
"""Request-latency profiler for the stage controller.

Usage:
    python scripts/profile_engine.py --requests 5000 --level 1
    python scripts/profile_engine.py --requests 20000 --cprofile profile.prof

Drives the controller with a fixed, repeating request script (steps in a
cycle of directions interleaved with enemy ticks), resetting the level
whenever it ends. Reports per-request timing for moves and ticks separately.
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lolo.config import GameConfig
from lolo.core.enums import GameState
from lolo.engine.stage_controller import StageController

_CYCLE = ("up", "right", ".", "down", "left", ".", "left", "up", ".")


def _run(cfg: GameConfig, num_requests: int) -> dict:
    controller = StageController(cfg)
    move_times: list[float] = []
    tick_times: list[float] = []
    resets = 0

    for i in range(num_requests):
        request = _CYCLE[i % len(_CYCLE)]
        t0 = time.perf_counter()
        if request == ".":
            controller.tick()
            tick_times.append(time.perf_counter() - t0)
        else:
            controller.move(request)
            move_times.append(time.perf_counter() - t0)

        if controller.state != GameState.PLAYING:
            controller.reset()
            resets += 1

    return {"move_times": move_times, "tick_times": tick_times, "resets": resets}


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    total = len(data["move_times"]) + len(data["tick_times"])
    if total == 0:
        print("No requests executed.")
        return

    print("\n" + "=" * 60)
    print("  STAGE CONTROLLER PERFORMANCE REPORT")
    print("=" * 60)
    print(f"\n  Requests executed: {total}")
    print(f"  Level resets:      {data['resets']}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {total / wall_time:.1f} requests/sec")

    print(f"\n  {'Request':<10} {'Count':>8} {'Avg (us)':>10} {'P95 (us)':>10} {'Max (us)':>10}")
    print(f"  {'-' * 10} {'-' * 8} {'-' * 10} {'-' * 10} {'-' * 10}")
    for name, times in (("move", data["move_times"]), ("tick", data["tick_times"])):
        if not times:
            continue
        print(f"  {name:<10} {len(times):>8} {statistics.mean(times) * 1e6:>10.1f} "
              f"{_percentile(times, 95) * 1e6:>10.1f} {max(times) * 1e6:>10.1f}")
    print("\n" + "=" * 60)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the stage controller")
    parser.add_argument("--requests", type=int, default=5000, help="Number of requests to send")
    parser.add_argument("--level", type=int, default=0, help="Level index")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = GameConfig(start_level=args.level, log_level="WARNING")
    print(f"Profiling: {args.requests} requests on level {args.level}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run(cfg, args.requests)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
