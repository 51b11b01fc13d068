"""Sweep the reconnection radius delta and compare against the baselines."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from .generate import generate_instance, generate_instance_uniform
from .locations import (
    Location,
    apply_laplacian,
    compute_costs,
    generate_timestamped_filename,
    load_points_from_file,
    save_points_to_file,
    save_results_to_file,
    validate_solution,
)
from .opt import compute_assignments
from .privacy import private_assignment, private_reconnection_assignment

BENCHMARK_USAGE = (
    "Usage: delta_benchmark <instance_amount> <n> <width> <height> <delta> <delta_step> "
    "<eps> <alpha> <gamma> <f_min> <f_max> <use_uniform>"
)
PIPELINE_USAGE = "Usage: delta_pipeline <filename> <eps> <alpha> <delta_step> <delta_max>"

CSV_HEADER = "instance_name,delta,normalized_cost"

INVALID_COST = -1.0


@dataclass
class DeltaBenchmarkResult:
    """Costs of the baselines and of the reconnection algorithm for each delta.

    ``reconn_costs`` maps delta to total cost, or to -1 where the solution
    for that delta was not valid.
    """

    instance_name: str = ""
    opt_costs: float = 0.0
    no_reconn_costs: float = 0.0
    reconn_costs: dict[float, float] = field(default_factory=dict)
    best_delta: float | None = None
    best_reconn_out: list[Location] = field(default_factory=list)


def _ratio(numerator: float, denominator: float) -> float:
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def save_delta_benchmark_results(results: Iterable[DeltaBenchmarkResult], filename: str) -> None:
    """Write the normalised reconnection cost for each instance and delta as CSV.

    Instances whose cost without reconnection is zero are left out.
    """
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(CSV_HEADER + "\n")
        for result in results:
            if result.no_reconn_costs == 0:
                continue
            span = result.no_reconn_costs - result.opt_costs
            for delta, cost in sorted(result.reconn_costs.items()):
                normalized = _ratio(cost - result.opt_costs, span)
                handle.write(f"{result.instance_name},{delta:g},{normalized:g}\n")
    print(f"Saved benchmark results to {filename}")


def run_delta(
    instance: Iterable[Location],
    eps: float,
    alpha: float,
    delta_step: float,
    max_delta: float,
) -> DeltaBenchmarkResult:
    """Run the reconnection algorithm for delta = 0, delta_step, ... up to max_delta."""
    if delta_step <= 0 and max_delta >= 0:
        raise ValueError("delta_step must be positive.")
    instance = list(instance)
    result = DeltaBenchmarkResult()

    opt_out = compute_assignments(instance)
    result.opt_costs = sum(compute_costs(opt_out))
    save_results_to_file(opt_out, generate_timestamped_filename("out", "opt_out", ".out"))

    no_reconn_out = private_assignment(instance, eps, alpha)
    result.no_reconn_costs = sum(compute_costs(no_reconn_out))

    min_cost = sys.float_info.max
    curr_delta = 0.0
    while curr_delta <= max_delta:
        reconn_out = private_reconnection_assignment(instance, eps, alpha, curr_delta)
        if not validate_solution(reconn_out):
            result.reconn_costs[curr_delta] = INVALID_COST
        else:
            total = sum(compute_costs(reconn_out))
            result.reconn_costs[curr_delta] = total
            if total < min_cost:
                min_cost = total
                result.best_delta = curr_delta
                result.best_reconn_out = reconn_out
        curr_delta += delta_step

    return result


def run(
    instance_amount: int,
    n: int,
    width: float,
    height: float,
    delta: float,
    delta_step: float,
    eps: float,
    alpha: float,
    gamma: float,
    f_min: float,
    f_max: float,
    use_uniform: bool,
) -> list[DeltaBenchmarkResult]:
    """Generate instances, sweep delta over each and save the results as CSV."""
    results = []
    for _ in range(instance_amount):
        print("Generate instance.")
        if use_uniform:
            instance = generate_instance_uniform(width, height, n, f_min, f_max, 25, 50, 1000)
        else:
            lambda_daughter = gamma**2 * math.log(n) ** 2
            lambda_parent = n / lambda_daughter
            instance = generate_instance(
                width, height, lambda_parent, lambda_daughter, delta, f_min, f_max, 25, 5, 50
            )
        noisy_instance = apply_laplacian(instance, eps)

        instance_name = generate_timestamped_filename("input", "input", ".in")
        save_points_to_file(noisy_instance, instance_name)

        result = run_delta(noisy_instance, eps, alpha, delta_step, max(width, height))
        result.instance_name = instance_name

        best_name = generate_timestamped_filename("out", instance_name[6:] + "_out", ".out")
        save_results_to_file(result.best_reconn_out, best_name)

        results.append(result)

    filename = generate_timestamped_filename("delta/out", "delta_benchmark", ".csv")
    save_delta_benchmark_results(results, filename)
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry: generate instances and sweep delta over them."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 12:
        print(BENCHMARK_USAGE, file=sys.stderr)
        return 1
    try:
        instance_amount = int(float(args[0]))
        n = int(float(args[1]))
        width = float(int(float(args[2])))
        height, delta, delta_step, eps, alpha, gamma, f_min, f_max = (
            float(a) for a in args[3:11]
        )
        use_uniform = int(float(args[11])) != 0
        run(
            instance_amount, n, width, height, delta, delta_step, eps, alpha, gamma,
            f_min, f_max, use_uniform,
        )
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def pipeline_main(argv: Sequence[str] | None = None) -> int:
    """Command entry: sweep delta over an instance file and save the best assignment."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 5:
        print(PIPELINE_USAGE, file=sys.stderr)
        return 1
    try:
        input_file = args[0]
        print(f"Loading points from: {input_file}")
        eps, alpha, delta_step, delta_max = (float(a) for a in args[1:5])

        output_folder = Path("out")
        if not output_folder.exists():
            output_folder.mkdir()
            print(f"Created folder: {output_folder}")

        instance = load_points_from_file(input_file)
        print(f"Loaded {len(instance)} points.")

        result = run_delta(instance, eps, alpha, delta_step, delta_max)

        base_name = f"pipeline_{delta_max:f}_{delta_step:f}"
        filename = generate_timestamped_filename("delta/out", base_name, ".csv")
        save_results_to_file(result.best_reconn_out, filename)
    except (OSError, ValueError, ArithmeticError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())