"""Benchmark the algorithms over a range of cluster densities gamma."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

from .locations import generate_timestamped_filename
from .pipeline import run

USAGE = (
    "Usage: gamma_benchmark <instance_amount> <n> <width> <height> <eps> <alpha> <delta> "
    "<gamma_min> <gamma_max> <gamma_step> <f_min> <f_max>"
)

CSV_HEADER = "gamma,opt_costs,no_reconn_costs,reconn_costs"


@dataclass
class GammaBenchmarkResult:
    """Average total costs of each algorithm for one gamma."""

    gamma: float
    opt_costs: float
    no_reconn_costs: float
    reconn_costs: float


def save_gamma_benchmark_results(results: Iterable[GammaBenchmarkResult], filename: str) -> None:
    """Write gamma benchmark results as CSV with a header row."""
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(CSV_HEADER + "\n")
        for result in results:
            handle.write(
                f"{result.gamma:.4f},{result.opt_costs:.4f},"
                f"{result.no_reconn_costs:.4f},{result.reconn_costs:.4f}\n"
            )
    print(f"Results saved to {filename}")


def run_gamma(
    instance_amount: int,
    n: int,
    width: float,
    height: float,
    eps: float,
    alpha: float,
    delta: float,
    gamma_min: float,
    gamma_max: float,
    gamma_step: float,
    f_min: float,
    f_max: float,
) -> list[GammaBenchmarkResult]:
    """Average costs for gamma from gamma_min to gamma_max and save them as CSV."""
    if gamma_step <= 0 and gamma_min <= gamma_max:
        raise ValueError("gamma_step must be positive.")

    benchmark_results = []
    curr_gamma = gamma_min
    while curr_gamma <= gamma_max:
        results = run(
            instance_amount, n, width, height, eps, alpha, delta, curr_gamma, f_min, f_max, False
        )
        count = len(results)
        benchmark_results.append(
            GammaBenchmarkResult(
                gamma=curr_gamma,
                opt_costs=sum(sum(r.opt_costs) for r in results) / count,
                no_reconn_costs=sum(sum(r.no_reconn_costs) for r in results) / count,
                reconn_costs=sum(sum(r.reconn_costs) for r in results) / count,
            )
        )
        curr_gamma += gamma_step

    base_name = f"{gamma_min:f}_{gamma_max:f}_{gamma_step:f}"
    filename = generate_timestamped_filename("gamma/out", base_name, ".csv")
    save_gamma_benchmark_results(benchmark_results, filename)
    return benchmark_results


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry: run the gamma benchmark."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 12:
        print(USAGE, file=sys.stderr)
        return 1
    try:
        instance_amount = int(float(args[0]))
        n = int(float(args[1]))
        width = float(int(float(args[2])))
        height, eps, alpha, delta, gamma_min, gamma_max, gamma_step, f_min, f_max = (
            float(a) for a in args[3:12]
        )
        run_gamma(
            instance_amount, n, width, height, eps, alpha, delta, gamma_min, gamma_max,
            gamma_step, f_min, f_max,
        )
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())