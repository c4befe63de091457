"""
Benchmarks comparing lazy views, eager containers and plain Python.

Run from the repository root:
    python benchmarks/benchmark.py
"""

import time
from collections.abc import Callable
from typing import Any

from seqflow import Vec, count_from, flatten, nested, seq

# ---------------------------------------------------------------------------
# Module-level worker functions
# ---------------------------------------------------------------------------


def _square(x: int) -> int:
    return x * x


def _add(a: int, b: int) -> int:
    return a + b


# ---------------------------------------------------------------------------
# Benchmark harness
# ---------------------------------------------------------------------------


def benchmark(
    name: str,
    candidate_fn: Callable[[], Any],
    baseline_fn: Callable[[], Any],
    iterations: int = 3,
):
    """
    Benchmark a function against a baseline.

    Args:
        name: Name of the benchmark
        candidate_fn: Function being measured
        baseline_fn: Function it is compared against
        iterations: Number of times to run each function
    """
    print(f"\n{'=' * 60}")
    print(f"Benchmark: {name}")
    print(f"{'=' * 60}")

    candidate_fn()
    baseline_fn()

    candidate_times = []
    for _ in range(iterations):
        start = time.perf_counter()
        candidate_fn()
        candidate_times.append(time.perf_counter() - start)

    baseline_times = []
    for _ in range(iterations):
        start = time.perf_counter()
        baseline_fn()
        baseline_times.append(time.perf_counter() - start)

    avg_candidate = sum(candidate_times) / len(candidate_times)
    avg_baseline = sum(baseline_times) / len(baseline_times)
    speedup = avg_baseline / avg_candidate

    print(f"Candidate (avg): {avg_candidate:.4f} seconds")
    print(f"Baseline (avg):  {avg_baseline:.4f} seconds")
    print(f"Speedup:         {speedup:.2f}x")

    return speedup


# ---------------------------------------------------------------------------
# Individual benchmarks
# ---------------------------------------------------------------------------


def bench_short_circuit():
    """Benchmark: first match, lazy chain vs eager chain."""
    N = 1_000_000
    data = Vec(range(N))

    def lazy():
        return seq(data).map(_square).filter(lambda x: x > 10_000).first()

    def eager():
        return data.map(_square).filter(lambda x: x > 10_000)[0]

    return benchmark("Short-circuit first(filter(map))", lazy, eager)


def bench_take_from_infinite():
    """Benchmark: bounded prefix of an infinite source."""
    N = 100_000

    def lazy():
        return count_from().map(_square).take(N).collect()

    def plain():
        return [x * x for x in range(N)]

    return benchmark("take(n) from an infinite source", lazy, plain)


def bench_eager_map():
    """Benchmark: eager Vec.map vs a list comprehension."""
    data = Vec(range(500_000))

    def eager():
        return data.map(_square)

    def plain():
        return [_square(x) for x in data]

    return benchmark("Vec.map vs list comprehension", eager, plain)


def bench_reduce():
    """Benchmark: View.reduce vs the builtin sum."""
    data = Vec(range(1_000_000))

    def lazy():
        return seq(data).reduce(_add, 0)

    def plain():
        return sum(data)

    return benchmark("reduce vs sum", lazy, plain)


def bench_flatten():
    """Benchmark: flattening a nested tree vs a hand-written generator."""
    tree = [[i, [i + 1, [i + 2]]] for i in range(0, 30_000, 3)]
    branches = nested(tree)

    def walk(node):
        if isinstance(node, list):
            for child in node:
                yield from walk(child)
        else:
            yield node

    def lazy():
        return flatten(branches).collect()

    def plain():
        return list(walk(tree))

    return benchmark("flatten vs recursive generator", lazy, plain)


def main():
    """Run all benchmarks."""
    print("seqflow Benchmarks")
    print("=" * 60)

    speedups = [
        bench_short_circuit(),
        bench_take_from_infinite(),
        bench_eager_map(),
        bench_reduce(),
        bench_flatten(),
    ]

    print(f"\n{'=' * 60}")
    print("Summary")
    print(f"{'=' * 60}")
    print(f"Best speedup:  {max(speedups):.2f}x")
    print(f"Worst speedup: {min(speedups):.2f}x")


if __name__ == "__main__":
    main()
