"""Benchmark the algorithms over a range of average client counts per location."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

from .generate import generate_instance
from .locations import apply_laplacian, generate_timestamped_filename
from .pipeline import pipeline

USAGE = (
    "Usage: b_benchmark <instance_amount> <n> <width> <height> <delta> <eps> <alpha> "
    "<gamma> <f_min> <f_max> <b_avg_max> <b_avg_step>"
)

CSV_HEADER = "instance_name,b_avg,opt_cost,reconn_cost,no_reconn_cost,normalized_cost"


@dataclass
class ClientsBenchmarkResult:
    """Total costs of each algorithm for one instance at one client count."""

    instance_name: str
    b_avg: float
    opt_costs: float
    reconn_costs: float
    no_reconn_costs: float
    normalized_costs: float


def _ratio(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def save_clients_benchmark_results(
    results: Iterable[ClientsBenchmarkResult], filename: str
) -> None:
    """Write client benchmark results as CSV with a header row."""
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(CSV_HEADER + "\n")
        for result in results:
            handle.write(
                f"{result.instance_name},{result.b_avg:.4f},{result.opt_costs:.4f},"
                f"{result.reconn_costs:.4f},{result.no_reconn_costs:.4f},"
                f"{result.normalized_costs:.4f}\n"
            )
    print(f"Results saved to {filename}")


def run_b(
    instance_amount: int,
    n: int,
    width: float,
    height: float,
    delta: float,
    eps: float,
    alpha: float,
    gamma: float,
    f_min: float,
    f_max: float,
    b_avg_max: float,
    b_avg_step: float,
) -> list[ClientsBenchmarkResult]:
    """Run each instance with every client count from 1 to b_avg_max and save as CSV."""
    if b_avg_step <= 0 and b_avg_max >= 1.0:
        raise ValueError("b_avg_step must be positive.")

    lambda_daughter = gamma**2 * math.log(n) ** 2
    lambda_parent = n / lambda_daughter

    results = []
    for i in range(instance_amount):
        print(f"Generate instance with number: {i}")
        instance = generate_instance(
            width, height, lambda_parent, lambda_daughter, delta, f_min, f_max, 1, 0, 1
        )
        instance_name = generate_timestamped_filename("input", "input", ".in")

        curr_avg = 1.0
        while curr_avg <= b_avg_max:
            print(f"Run instance {i} with avg {curr_avg:g}")
            for location in instance:
                location.b = curr_avg
            noisy_instance = apply_laplacian(instance, eps)
            result = pipeline(noisy_instance, instance_name, eps, alpha, delta, False)

            opt_costs = sum(result.opt_costs)
            reconn_costs = sum(result.reconn_costs)
            no_reconn_costs = sum(result.no_reconn_costs)
            results.append(
                ClientsBenchmarkResult(
                    instance_name=instance_name,
                    b_avg=curr_avg,
                    opt_costs=opt_costs,
                    reconn_costs=reconn_costs,
                    no_reconn_costs=no_reconn_costs,
                    normalized_costs=_ratio(reconn_costs - opt_costs, no_reconn_costs - opt_costs),
                )
            )
            curr_avg += b_avg_step

    base_name = f"{b_avg_max:f}_{b_avg_step:f}"
    filename = generate_timestamped_filename("clients_b/out", base_name, ".csv")
    save_clients_benchmark_results(results, filename)
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry: run the client count benchmark."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 12:
        print(USAGE, file=sys.stderr)
        return 1
    try:
        instance_amount = int(float(args[0]))
        n = int(float(args[1]))
        width = float(int(float(args[2])))
        height, delta, eps, alpha, gamma, f_min, f_max, b_avg_max, b_avg_step = (
            float(a) for a in args[3:12]
        )
        run_b(
            instance_amount, n, width, height, delta, eps, alpha, gamma, f_min, f_max,
            b_avg_max, b_avg_step,
        )
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())