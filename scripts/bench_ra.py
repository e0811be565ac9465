#!/usr/bin/env python3
"""Benchmark raw draws and typed sampling.

Usage (from the repo root):
    python scripts/bench_ra.py                 # default: 3 iterations, 1,000,000 draws, F64
    python scripts/bench_ra.py -n 5            # 5 iterations
    python scripts/bench_ra.py -s 100000       # 100,000 draws per iteration
    python scripts/bench_ra.py -t U128         # time the U128 recipe
"""

import argparse
import statistics
import sys
import time
from pathlib import Path

# Add the repo root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from sungod import sample as recipes  # noqa: E402
from sungod.ra import DEFAULT_RANDOM_SEED, Ra  # noqa: E402

RECIPE_NAMES = [
    "Bool",
    "U8",
    "I8",
    "U16",
    "I16",
    "U32",
    "I32",
    "U64",
    "I64",
    "USize",
    "ISize",
    "U128",
    "I128",
    "F32",
    "F64",
]


def time_runs(label, fn, iterations, samples):
    """Run ``fn`` ``samples`` times per iteration and print timings."""
    print(f"{label}:")
    times_ms = []
    for i in range(iterations):
        start = time.perf_counter()
        for _ in range(samples):
            fn()
        elapsed_ms = (time.perf_counter() - start) * 1000
        times_ms.append(elapsed_ms)
        print(f"  Run {i + 1}: {elapsed_ms:.1f} ms")

    median = statistics.median(times_ms)
    print(f"  Median: {median:.1f} ms ({median * 1e6 / samples:.0f} ns/draw)")
    print(f"  Mean:   {statistics.mean(times_ms):.1f} ms")
    if len(times_ms) > 1:
        print(f"  Stdev:  {statistics.stdev(times_ms):.1f} ms")
    print()


def main():
    parser = argparse.ArgumentParser(description="Benchmark the generator")
    parser.add_argument(
        "-n",
        "--iterations",
        type=int,
        default=3,
        help="Number of iterations (default: 3)",
    )
    parser.add_argument(
        "-s",
        "--samples",
        type=int,
        default=1_000_000,
        help="Draws per iteration (default: 1000000)",
    )
    parser.add_argument(
        "-t",
        "--type",
        choices=RECIPE_NAMES,
        default="F64",
        help="Recipe to time alongside raw draws (default: F64)",
    )
    parser.add_argument(
        "--seed",
        type=lambda s: int(s, 0),
        default=DEFAULT_RANDOM_SEED,
        help="Generator seed, decimal or 0x-prefixed (default: 0xCAFEBABEDEADBEEF)",
    )
    args = parser.parse_args()

    try:
        ra = Ra(args.seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    ty = getattr(recipes, args.type)

    print(f"Benchmark: seed=0x{args.seed:X}, {args.samples} draws")
    print(f"Iterations: {args.iterations}")
    print()

    time_runs("next_word", ra.next_word, args.iterations, args.samples)
    time_runs(
        f"sample({args.type})",
        lambda: ra.sample(ty),
        args.iterations,
        args.samples,
    )


if __name__ == "__main__":
    main()
