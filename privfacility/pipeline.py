"""Run the optimal and both private assignments on instances and record their costs."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from .generate import generate_instance
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

USAGE = "Usage: ./pipeline <input_filename> <eps> <alpha> <delta>"

CSV_HEADER = (
    "instance_name,instance_size,opt_sol_name,opt_cost,opt_fac_cost,opt_conn_cost,"
    "reconn_sol_name,reconn_cost,reconn_fac_cost,reconn_conn_cost,reconn_validity,"
    "no_reconn_sol_name,no_reconn_cost,no_reconn_fac_cost,no_reconn_conn_cost,"
    "no_reconn_validity"
)


@dataclass
class BenchmarkResult:
    """Costs and validity of the three assignments computed for one instance."""

    instance_name: str
    instance_size: int
    opt_sol_name: str
    opt_costs: tuple[float, float]
    reconn_sol_name: str
    reconn_costs: tuple[float, float]
    reconn_validity: bool
    no_reconn_sol_name: str
    no_reconn_costs: tuple[float, float]
    no_reconn_validity: bool


def _cost_fields(costs: tuple[float, float]) -> str:
    facility, connection = costs
    return f"{facility + connection:.4f},{facility:.4f},{connection:.4f}"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def save_benchmark_results(results: Iterable[BenchmarkResult], filename: str) -> None:
    """Write benchmark results as CSV with a header row."""
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(CSV_HEADER + "\n")
        for result in results:
            handle.write(
                f"{result.instance_name},{result.instance_size},{result.opt_sol_name},"
                f"{_cost_fields(result.opt_costs)},"
                f"{result.reconn_sol_name},{_cost_fields(result.reconn_costs)},"
                f"{_flag(result.reconn_validity)},"
                f"{result.no_reconn_sol_name},{_cost_fields(result.no_reconn_costs)},"
                f"{_flag(result.no_reconn_validity)}\n"
            )
    print(f"Results saved to {filename}")


def _store(solution: Sequence[Location], base_name: str, save_output: bool) -> str:
    if not save_output:
        return "-"
    filename = generate_timestamped_filename("out", base_name, ".out")
    save_results_to_file(solution, filename)
    return filename


def pipeline(
    instance: Iterable[Location],
    instance_name: str,
    eps: float,
    alpha: float,
    delta: float,
    save_output: bool,
) -> BenchmarkResult:
    """Run all three algorithms on one instance and collect their costs."""
    instance = list(instance)

    opt_out = compute_assignments(instance)
    opt_costs = compute_costs(opt_out)
    opt_name = _store(opt_out, "opt", save_output)

    no_reconn_out = private_assignment(instance, eps, alpha)
    no_reconn_valid = validate_solution(no_reconn_out)
    no_reconn_costs = compute_costs(no_reconn_out)
    no_reconn_name = _store(no_reconn_out, "no_reconn", save_output)

    reconn_out = private_reconnection_assignment(instance, eps, alpha, delta)
    reconn_valid = validate_solution(reconn_out)
    reconn_costs = compute_costs(reconn_out)
    reconn_name = _store(reconn_out, "reconn", save_output)

    return BenchmarkResult(
        instance_name=instance_name,
        instance_size=len(instance),
        opt_sol_name=opt_name,
        opt_costs=opt_costs,
        reconn_sol_name=reconn_name,
        reconn_costs=reconn_costs,
        reconn_validity=reconn_valid,
        no_reconn_sol_name=no_reconn_name,
        no_reconn_costs=no_reconn_costs,
        no_reconn_validity=no_reconn_valid,
    )


def run(
    instance_amount: int,
    n: int,
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
    """Generate clustered instances with noisy clients and run the pipeline on each."""
    lambda_daughter = gamma * math.log(n) ** 2
    lambda_parent = n / (width * height * lambda_daughter)

    results = []
    for _ in range(instance_amount):
        instance = generate_instance(
            width, height, lambda_parent, lambda_daughter, delta, f_min, f_max, 20, 4, 40
        )
        instance = apply_laplacian(instance, eps)

        instance_name = generate_timestamped_filename("input", "input", ".in")
        save_points_to_file(instance, instance_name)
        print(f"Generated instance with {len(instance)} locations.")

        results.append(pipeline(instance, instance_name, eps, alpha, delta, save_output))
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Run the pipeline on an instance file: <input_filename> <eps> <alpha> <delta>."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        if len(args) != 4:
            raise ValueError(USAGE)
        input_file = args[0]
        print(f"Loading points from: {input_file}")
        eps, alpha, delta = (float(value) for value in args[1:])

        output_folder = Path("out")
        if not output_folder.exists():
            output_folder.mkdir()
            print(f"Created folder: {output_folder}")

        instance = load_points_from_file(input_file)
        print(f"Loaded {len(instance)} points.")
        pipeline(instance, input_file, eps, alpha, delta, True)
    except (OSError, ValueError, ArithmeticError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())