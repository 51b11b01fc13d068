"""Load real-world location data, prepare noisy instances and sweep delta over them."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from .delta import DeltaBenchmarkResult, run_delta, save_delta_benchmark_results
from .locations import (
    Location,
    apply_laplacian,
    generate_timestamped_filename,
    save_points_to_file,
)

BENCHMARK_USAGE = (
    "Usage: real_world_benchmark <filename> <instance_amount> <eps> <alpha> <f_min> <f_max>"
)
PREP_USAGE = "Usage: prep_data <filename> <out_filename> <f_min> <f_max> <eps>"

# The raw data has no row with id 101; later ids are shifted down to stay contiguous.
_MISSING_ID = 101


@dataclass(frozen=True)
class _RawRow:
    id: int
    x: float
    y: float
    b: float


def _parse_int(token: str) -> int:
    return int(float(token.strip()))


def _parse_row(line: str, filename: str) -> _RawRow:
    fields = line.rstrip("\r\n").split(",")
    if len(fields) < 4:
        raise ValueError(f"malformed line in {filename}: {line!r}")
    id_ = _parse_int(fields[0]) - 1
    if id_ >= _MISSING_ID:
        id_ -= 1
    return _RawRow(id_, float(fields[1]), float(fields[2]), float(fields[3]))


def _scale(value: float, low: float, high: float) -> float:
    span = high - low
    if span == 0:
        return math.nan
    return (value - low) / span


def load_real_world_locations(filename: str) -> list[Location]:
    """Read ``id,x,y,b`` rows after a header, scaling x and y into [0, 1].

    Ids become zero-based. Facility costs are left at zero.
    """
    with open(filename, encoding="utf-8") as handle:
        handle.readline()
        rows = [_parse_row(line, filename) for line in handle]

    if not rows:
        return []

    x_min = min(row.x for row in rows)
    x_max = max(row.x for row in rows)
    y_min = min(row.y for row in rows)
    y_max = max(row.y for row in rows)

    return [
        Location(
            id=row.id,
            x=_scale(row.x, x_min, x_max),
            y=_scale(row.y, y_min, y_max),
            f=0.0,
            b=row.b,
            capacity=0.0,
            connected_to=-1,
            b_noisy=0.0,
        )
        for row in rows
    ]


def prep_instance(
    instance: Iterable[Location], eps: float, f_min: float, f_max: float
) -> list[Location]:
    """Return copies with uniform facility costs in [f_min, f_max] and noisy clients."""
    rng = np.random.default_rng()
    costed = [replace(point, f=float(rng.uniform(f_min, f_max))) for point in instance]
    return apply_laplacian(costed, eps, rng)


def prepare_locations(
    filename: str, out_filename: str, f_min: float, f_max: float, eps: float
) -> list[Location]:
    """Load real-world data, add costs and noise, and save it as an instance file."""
    noisy_instance = prep_instance(load_real_world_locations(filename), eps, f_min, f_max)
    save_points_to_file(noisy_instance, out_filename)
    return noisy_instance


def run(
    filename: str,
    instance_amount: int,
    eps: float,
    alpha: float,
    f_min: float,
    f_max: float,
) -> list[DeltaBenchmarkResult]:
    """Sweep delta from 0 to 1 over fresh noisy versions of the real-world data."""
    instance = load_real_world_locations(filename)

    results = [
        run_delta(prep_instance(instance, eps, f_min, f_max), eps, alpha, 0.01, 1)
        for _ in range(instance_amount)
    ]

    base_name = f"{filename}_out_{f_min:f}_{f_max:f}"
    out_filename = generate_timestamped_filename("real_world/out", base_name, ".csv")
    Path(out_filename).parent.mkdir(parents=True, exist_ok=True)
    save_delta_benchmark_results(results, out_filename)
    return results


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry: run the delta sweep on a real-world data file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 6:
        print(BENCHMARK_USAGE, file=sys.stderr)
        return 1
    try:
        filename = args[0]
        instance_amount = _parse_int(args[1])
        eps, alpha, f_min, f_max = (float(a) for a in args[2:6])
        run(filename, instance_amount, eps, alpha, f_min, f_max)
    except (OSError, ValueError, ArithmeticError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def prep_main(argv: Sequence[str] | None = None) -> int:
    """Command entry: turn a real-world data file into a noisy instance file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 5:
        print(PREP_USAGE, file=sys.stderr)
        return 1
    try:
        filename, out_filename = args[0], args[1]
        f_min, f_max, eps = (float(a) for a in args[2:5])
        prepare_locations(filename, out_filename, f_min, f_max, eps)
        print("Locations prepared and saved successfully.")
    except (OSError, ValueError, ArithmeticError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())