"""
Performance Benchmark
=====================

Measures swap resolution throughput for performance tuning.

Usage:
    python -m tools.benchmark_speed [--steps S] [--level L]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from breakfast_blitz.blitz_core.board import adjacent_swaps
from breakfast_blitz.blitz_core.config_loader import load_config
from breakfast_blitz.blitz_core.env_gym import BlitzEnv
from breakfast_blitz.blitz_core.level_catalog import LevelCatalog
from breakfast_blitz.blitz_core.session import GameSession


def benchmark_single_env(
    num_steps: int = 1000,
    level_id: int = 1,
    seed: int = 42
) -> dict:
    """
    Benchmark environment performance with a random valid-swap agent.

    Args:
        num_steps: Number of steps.
        level_id: Level played every episode.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    env = BlitzEnv(level_id=level_id)
    rng = np.random.default_rng(seed)

    def pick_action() -> int:
        valid = np.flatnonzero(env.valid_action_mask())
        if len(valid) == 0:
            return int(rng.integers(env.action_space.n))
        return int(rng.choice(valid))

    # Warmup
    env.reset(seed=seed)
    for _ in range(10):
        _, _, terminated, truncated, _ = env.step(pick_action())
        if terminated or truncated:
            env.reset()

    # Benchmark
    env.reset(seed=seed)
    start = time.perf_counter()

    episodes = 0
    for _ in range(num_steps):
        _, _, terminated, truncated, _ = env.step(pick_action())
        if terminated or truncated:
            episodes += 1
            env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env",
        "num_steps": num_steps,
        "episodes": episodes,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_session(
    num_steps: int = 1000,
    level_id: int = 1,
    seed: int = 42
) -> dict:
    """
    Benchmark raw GameSession without Gym overhead.

    Swaps are drawn uniformly from every adjacent pair, so many of them
    resolve to no-match rejections.

    Args:
        num_steps: Number of swaps attempted.
        level_id: Level played every episode.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    level = LevelCatalog(config).get_level(level_id)
    session = GameSession(config=config, seed=seed, level=level)
    swaps = adjacent_swaps(config.board.size)
    rng = np.random.default_rng(seed)

    start = time.perf_counter()

    matched = 0
    cascades = 0
    for _ in range(num_steps):
        source, destination = swaps[int(rng.integers(len(swaps)))]
        result = session.make_move(source.row, source.col, destination.row, destination.col)
        if result.matched:
            matched += 1
            cascades += result.cascades
        if session.is_over:
            session.reset_game()

    elapsed = time.perf_counter() - start

    return {
        "mode": "session",
        "num_steps": num_steps,
        "matched": matched,
        "avg_cascades": cascades / matched if matched else 0.0,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(steps: int = 500, level_id: int = 1) -> list:
    """Run comprehensive benchmarks."""
    results = []

    print("=" * 60)
    print("BREAKFAST BLITZ PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking GameSession (raw)...")
    result = benchmark_session(num_steps=steps, level_id=level_id)
    results.append(result)
    print(f"  Steps/sec:    {result['steps_per_second']:.1f}")
    print(f"  ms/step:      {result['ms_per_step']:.3f}")
    print(f"  Matched:      {result['matched']}/{steps}")
    print(f"  Avg cascades: {result['avg_cascades']:.2f}")
    print()

    print("Benchmarking BlitzEnv (valid-swap agent)...")
    result = benchmark_single_env(num_steps=steps, level_id=level_id)
    results.append(result)
    print(f"  Steps/sec: {result['steps_per_second']:.1f}")
    print(f"  ms/step:   {result['ms_per_step']:.3f}")
    print(f"  Episodes:  {result['episodes']}")
    print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 44)

    for r in results:
        print(f"{r['mode']:<20} {r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Breakfast Blitz resolution performance")
    parser.add_argument("--steps", type=int, default=500, help="Steps per benchmark")
    parser.add_argument("--level", type=int, default=1, help="Level id to play")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 100 if args.quick else args.steps

    run_all_benchmarks(steps=steps, level_id=args.level)

    return 0


if __name__ == "__main__":
    sys.exit(main())
