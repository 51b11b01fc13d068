"""Benchmark the algorithms over a range of instance sizes."""

from __future__ import annotations

import sys
from typing import Iterable, Sequence

from .locations import generate_timestamped_filename
from .pipeline import BenchmarkResult, run, save_benchmark_results

USAGE = (
    "Usage: benchmark <instance_amount> <n_step> <n_min> <n_max> <width> <height> "
    "<eps> <alpha> <delta> <gamma> <f_min> <f_max> [-s]"
)


def _mean_costs(pairs: Iterable[tuple[float, float]]) -> tuple[float, float]:
    pairs = list(pairs)
    facility, connection = zip(*pairs)
    return sum(facility) / len(pairs), sum(connection) / len(pairs)


def run_sizes(
    instance_amount: int,
    n_step: int,
    n_min: int,
    n_max: int,
    width: float,
    height: float,
    eps: float,
    alpha: float,
    delta: float,
    gamma: float,
    f_min: float,
    f_max: float,
    save_output: bool,
) -> list[BenchmarkResult]:
    """Average the costs of each algorithm over instances for n in [n_min, n_max]."""
    if instance_amount <= 0 or delta <= 0 or eps <= 0 or alpha <= 0 or f_min < 0 or f_max < 0:
        raise ValueError("All arguments must be positive numbers.")
    if n_step <= 0:
        raise ValueError("n_step must be positive.")

    averaged = []
    for curr_n in range(n_min, n_max + 1, n_step):
        print(f"Run pipeline for n={curr_n}...")
        results = run(
            instance_amount, curr_n, width, height, eps, alpha, delta, gamma, f_min, f_max,
            save_output,
        )
        averaged.append(
            BenchmarkResult(
                instance_name="",
                instance_size=curr_n,
                opt_sol_name="-",
                opt_costs=_mean_costs(r.opt_costs for r in results),
                reconn_sol_name="-",
                reconn_costs=_mean_costs(r.reconn_costs for r in results),
                reconn_validity=True,
                no_reconn_sol_name="-",
                no_reconn_costs=_mean_costs(r.no_reconn_costs for r in results),
                no_reconn_validity=False,
            )
        )
    return averaged


def _int_arg(text: str) -> int:
    return int(float(text))


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry: run the size benchmark and save averaged results as CSV."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not 12 <= len(args) <= 13:
        print(USAGE, file=sys.stderr)
        return 1
    try:
        instance_amount, n_step, n_min, n_max = (_int_arg(a) for a in args[0:4])
        width, height, eps, alpha, delta, gamma, f_min, f_max = (float(a) for a in args[4:12])
    except ValueError:
        print(USAGE, file=sys.stderr)
        return 1
    save_output = len(args) == 13 and args[12] == "-s"

    try:
        results = run_sizes(
            instance_amount, n_step, n_min, n_max, width, height, eps, alpha, delta, gamma,
            f_min, f_max, save_output,
        )
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    base_name = f"{n_min}_{n_max}_{n_step}"
    filename = generate_timestamped_filename("instance_size_n/out", base_name, ".csv")
    save_benchmark_results(results, filename)
    return 0


if __name__ == "__main__":
    sys.exit(main())