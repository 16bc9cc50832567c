#!/usr/bin/env python3
"""
Performance profiling script for the 1D k-means dynamic programs.

Usage: uv run scripts/profile.py A B S T K

Where:
- A: Minimum dataset size
- B: Maximum dataset size
- S: Number of size points to test
- T: Number of trials per size
- K: Number of clusters

Outputs CSV format: N,quadratic_mean,linear_mean,quadratic_std,linear_std,max_cost_gap
"""

import sys
import time

import numpy as np

import optimal_kmeans_1d


def generate_test_data(n: int, seed: int | None = None) -> np.ndarray:
    """Generate test data for profiling."""
    rng = np.random.default_rng(seed)

    # Generate mixed distribution similar to real-world data
    data = np.concatenate(
        [
            rng.normal(0, 1, n // 3),
            rng.normal(10, 2, n // 3),
            rng.normal(20, 1, n - 2 * (n // 3)),  # Handle remainder
        ]
    )

    return data


algorithm_functions = {
    "quadratic": optimal_kmeans_1d.fit_quadratic,
    "linear": optimal_kmeans_1d.fit,
}


def time_algorithm(algorithm_name: str, data: np.ndarray, k: int) -> tuple[float, float]:
    """Time a single algorithm run, returning (seconds, total cost)."""
    func = algorithm_functions[algorithm_name]
    start = time.perf_counter()
    result = func(data, k)
    return time.perf_counter() - start, result.total_cost


def profile_size(n: int, k: int, trials: int) -> dict:
    """Profile both algorithms for a given dataset size."""
    results = {alg: [] for alg in algorithm_functions}
    cost_gap = 0.0

    for trial in range(trials):
        # Generate fresh data for each trial
        data = generate_test_data(n, seed=42 + trial)

        costs = {}
        for alg in algorithm_functions:
            elapsed, costs[alg] = time_algorithm(alg, data, k)
            results[alg].append(elapsed)
        cost_gap = max(cost_gap, abs(costs["linear"] - costs["quadratic"]))

    stats = {"max_cost_gap": cost_gap}
    for alg in algorithm_functions:
        times = np.array(results[alg])
        stats[f"{alg}_mean"] = np.mean(times)
        stats[f"{alg}_std"] = np.std(times)

    return stats


def main():
    if len(sys.argv) != 6:
        print("Usage: profile.py A B S T K", file=sys.stderr)
        print("  A: Minimum dataset size", file=sys.stderr)
        print("  B: Maximum dataset size", file=sys.stderr)
        print("  S: Number of size points to test", file=sys.stderr)
        print("  T: Number of trials per size", file=sys.stderr)
        print("  K: Number of clusters", file=sys.stderr)
        sys.exit(1)

    try:
        A = int(sys.argv[1])
        B = int(sys.argv[2])
        S = int(sys.argv[3])
        T = int(sys.argv[4])
        K = int(sys.argv[5])
    except ValueError:
        print("Error: All arguments must be integers", file=sys.stderr)
        sys.exit(1)

    if A <= 0 or B <= A or S <= 0 or T <= 0 or K <= 0 or K > A:
        print("Error: Invalid argument values", file=sys.stderr)
        sys.exit(1)

    # Warm up the JIT so compilation is not timed
    for func in algorithm_functions.values():
        func(generate_test_data(max(K, 3), seed=0), K)

    # Generate geometric progression of sizes
    log_sizes = np.linspace(np.log(A), np.log(B), S)
    sizes = np.round(np.exp(log_sizes)).astype(int)
    # Remove duplicates and sort
    sizes = np.unique(sizes)

    # Print CSV header
    print("N,quadratic_mean,linear_mean,quadratic_std,linear_std,max_cost_gap")

    # Profile each size
    for n in sizes:
        stats = profile_size(int(n), K, T)

        # Format output as CSV
        print(
            f"{n},{stats['quadratic_mean']:.6f},{stats['linear_mean']:.6f},"
            f"{stats['quadratic_std']:.6f},{stats['linear_std']:.6f},"
            f"{stats['max_cost_gap']:.3e}"
        )


if __name__ == "__main__":
    main()
