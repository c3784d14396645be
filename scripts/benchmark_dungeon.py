#!/usr/bin/env python3
"""Benchmark the dungeon generation pipeline, stage by stage."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

from undercroft.environment.generators import Dungeon

ROOM_COUNTS: tuple[int, ...] = (25, 50, 103, 200)

STAGES: tuple[str, ...] = (
    "generate_rooms",
    "stabilize",
    "build_corridors",
    "rasterize",
)


class DungeonBenchmark:
    """Benchmark runner for the rooms-and-corridors pipeline."""

    def __init__(self, iterations: int) -> None:
        self.iterations = iterations
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, room_count: int) -> dict[str, float]:
        """Run one room count and return average milliseconds per stage."""
        totals = dict.fromkeys(STAGES, 0.0)

        for i in range(self.iterations):
            dungeon = Dungeon(room_count, seed=f"bench:{room_count}:{i}")
            for stage in STAGES:
                start = time.perf_counter()
                getattr(dungeon, stage)()
                totals[stage] += time.perf_counter() - start

        averages = {
            f"{stage}_ms": (elapsed / self.iterations) * 1000.0
            for stage, elapsed in totals.items()
        }
        averages["total_ms"] = sum(averages.values())
        return averages

    def run(self) -> None:
        """Run all configured room-count benchmarks."""
        print("Dungeon Benchmark")
        print("=" * 72)
        print(f"Iterations per room count: {self.iterations}")
        print()
        print(
            f"{'Rooms':>6} {'Rooms (ms)':>11} {'Separate':>10} "
            f"{'Corridors':>10} {'Raster':>10} {'Total':>10}"
        )
        print("-" * 72)

        for room_count in ROOM_COUNTS:
            result = self._run_case(room_count)
            self.results[str(room_count)] = result

            print(
                f"{room_count:>6} {result['generate_rooms_ms']:11.2f} "
                f"{result['stabilize_ms']:10.2f} "
                f"{result['build_corridors_ms']:10.2f} "
                f"{result['rasterize_ms']:10.2f} {result['total_ms']:10.2f}"
            )

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for key, current in self.results.items():
            if key not in baseline:
                continue

            old_total = baseline[key].get("total_ms", 0.0)
            new_total = current["total_ms"]
            if old_total <= 0:
                continue

            delta_pct = ((new_total - old_total) / old_total) * 100.0
            speed_ratio = old_total / new_total if new_total > 0 else 0.0
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{key:>6} rooms: {new_total:8.2f}ms "
                f"vs {old_total:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark dungeon generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per room count (default: 5)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    args = parser.parse_args(argv)

    benchmark = DungeonBenchmark(iterations=args.iterations)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
