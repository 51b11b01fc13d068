"""Sweep the privacy budget eps and record the cost of each algorithm."""

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
    "Usage: eps_benchmark <instance_amount> <n> <width> <height> <eps_step> <eps_min> "
    "<eps_max> <alpha> <delta> <gamma> <f_min> <f_max> <use_uniform>"
)
PIPELINE_USAGE = "Usage: eps_pipeline <filename> <eps_step> <eps_min> <eps_max> <alpha> <delta>"

CSV_HEADER = "instance_name,algorithm,eps,cost"

INVALID_COST = -1.0


@dataclass
class EpsBenchmarkResult:
    """Optimal cost and, per eps, the costs of both private algorithms.

    ``reconn_costs`` holds -1 for an eps whose solution was not valid.
    """

    instance_name: str = ""
    opt_costs: float = 0.0
    no_reconn_costs: dict[float, float] = field(default_factory=dict)
    reconn_costs: dict[float, float] = field(default_factory=dict)


def _results_filename(eps_min: float, eps_max: float, eps_step: float) -> str:
    base_name = f"{eps_min:f}_{eps_max:f}_{eps_step:f}"
    return generate_timestamped_filename("eps/out", base_name, ".csv")


def save_eps_benchmark_results(results: Iterable[EpsBenchmarkResult], filename: str) -> None:
    """Write one CSV row per instance, algorithm and eps."""
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(CSV_HEADER + "\n")
        for result in results:
            name = result.instance_name
            for eps in sorted(result.no_reconn_costs):
                handle.write(f"{name},opt,{eps:g},{result.opt_costs:g}\n")
            for eps, cost in sorted(result.no_reconn_costs.items()):
                handle.write(f"{name},no_reconn,{eps:g},{cost:g}\n")
            for eps, cost in sorted(result.reconn_costs.items()):
                handle.write(f"{name},reconn,{eps:g},{cost:g}\n")
    print(f"Saved benchmark results to {filename}")


def run_eps(
    instance: Iterable[Location],
    eps_step: float,
    eps_min: float,
    eps_max: float,
    alpha: float,
    delta: float,
) -> EpsBenchmarkResult:
    """Re-noise the instance for each eps in [eps_min, eps_max] and run both private algorithms."""
    if eps_step <= 0 and eps_min <= eps_max:
        raise ValueError("eps_step must be positive.")
    instance = list(instance)
    result = EpsBenchmarkResult()

    opt_out = compute_assignments(instance)
    result.opt_costs = sum(compute_costs(opt_out))
    save_results_to_file(opt_out, generate_timestamped_filename("out", "opt_out", ".out"))

    curr_eps = eps_min
    while curr_eps <= eps_max:
        instance = apply_laplacian(instance, curr_eps)

        no_reconn_out = private_assignment(instance, curr_eps, alpha)
        result.no_reconn_costs[curr_eps] = sum(compute_costs(no_reconn_out))

        reconn_out = private_reconnection_assignment(instance, curr_eps, alpha, delta)
        if validate_solution(reconn_out):
            result.reconn_costs[curr_eps] = sum(compute_costs(reconn_out))
        else:
            result.reconn_costs[curr_eps] = INVALID_COST
        curr_eps += eps_step

    return result


def run(
    instance_amount: int,
    n: int,
    width: float,
    height: float,
    eps_step: float,
    eps_min: float,
    eps_max: float,
    alpha: float,
    delta: float,
    gamma: float,
    f_min: float,
    f_max: float,
    use_uniform: bool,
) -> list[EpsBenchmarkResult]:
    """Generate instances, sweep eps over each and save the results as CSV."""
    results = []
    for _ in range(instance_amount):
        if use_uniform:
            instance = generate_instance_uniform(width, height, n, f_min, f_max, 2.5, 1.5, 8)
        else:
            lambda_daughter = gamma * math.log(n) ** 2
            lambda_parent = n / lambda_daughter
            instance = generate_instance(
                width, height, lambda_parent, lambda_daughter, delta, f_min, f_max, 2.5, 1.5, 8
            )

        instance_name = generate_timestamped_filename("input", "input", ".in")
        save_points_to_file(instance, instance_name)

        result = run_eps(instance, eps_step, eps_min, eps_max, alpha, delta)
        result.instance_name = instance_name
        results.append(result)

    save_eps_benchmark_results(results, _results_filename(eps_min, eps_max, eps_step))
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry: generate instances and sweep eps over them."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 13:
        print(BENCHMARK_USAGE, file=sys.stderr)
        return 1
    try:
        instance_amount = int(float(args[0]))
        n = int(float(args[1]))
        width = float(int(float(args[2])))
        height, eps_step, eps_min, eps_max, alpha, delta, gamma, f_min, f_max = (
            float(a) for a in args[3:12]
        )
        use_uniform = int(float(args[12])) != 0
        run(
            instance_amount, n, width, height, eps_step, eps_min, eps_max, alpha, delta,
            gamma, f_min, f_max, use_uniform,
        )
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def pipeline_main(argv: Sequence[str] | None = None) -> int:
    """Command entry: sweep eps over an instance file and save the costs as CSV."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 6:
        print(PIPELINE_USAGE, file=sys.stderr)
        return 1
    try:
        input_file = args[0]
        print(f"Loading points from: {input_file}")
        eps_step, eps_min, eps_max, alpha, delta = (float(a) for a in args[1:6])

        output_folder = Path("out")
        if not output_folder.exists():
            output_folder.mkdir()
            print(f"Created folder: {output_folder}")

        instance = load_points_from_file(input_file)
        print(f"Loaded {len(instance)} points.")

        result = run_eps(instance, eps_step, eps_min, eps_max, alpha, delta)
        result.instance_name = input_file
        save_eps_benchmark_results([result], _results_filename(eps_min, eps_max, eps_step))
    except (OSError, ValueError, ArithmeticError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())