"""Random instance generation for the facility location problem."""

from __future__ import annotations

import math

import numpy as np

from .locations import Location


def _rng(rng: np.random.Generator | None) -> np.random.Generator:
    return np.random.default_rng() if rng is None else rng


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def poisson_point_process(
    lam: float, width: float, height: float, rng: np.random.Generator | None = None
) -> list[Location]:
    """Scatter a Poisson(lam * area) number of points uniformly over the window."""
    rng = _rng(rng)
    count = int(rng.poisson(lam * width * height))
    points = []
    for i in range(count):
        x = float(rng.uniform(0.0, width))
        y = float(rng.uniform(0.0, height))
        points.append(Location(id=i, x=x, y=y))
    return points


def matern_point_process(
    lambda_parent: float,
    lambda_daughter: float,
    delta: float,
    width: float,
    height: float,
    rng: np.random.Generator | None = None,
) -> list[Location]:
    """Matérn cluster process: daughters spread uniformly in discs of radius delta."""
    rng = _rng(rng)
    num_centers = int(rng.poisson(lambda_parent))
    centers = [
        (float(rng.uniform(delta, width + delta)), float(rng.uniform(delta, height + delta)))
        for _ in range(num_centers)
    ]

    points = []
    for cx, cy in centers:
        num_daughters = int(rng.poisson(lambda_daughter))
        for _ in range(num_daughters):
            theta = float(rng.uniform(0.0, 2 * math.pi))
            rho = delta * math.sqrt(float(rng.uniform(0.0, 1.0)))
            points.append(
                Location(id=len(points), x=cx + rho * math.cos(theta), y=cy + rho * math.sin(theta))
            )
    return points


def _fill_costs_and_clients(
    points: list[Location],
    f_min: float,
    f_max: float,
    b_mean: float,
    b_std: float,
    b_max: int,
    rng: np.random.Generator,
) -> list[Location]:
    for point in points:
        point.f = float(rng.uniform(f_min, f_max))
        b = _round_half_away(float(rng.normal(b_mean, b_std)))
        point.b = float(max(0, min(b_max, b)))
    return points


def generate_instance(
    width: float,
    height: float,
    lambda_parent: float,
    lambda_daughter: float,
    delta: float,
    f_min: float,
    f_max: float,
    b_mean: float,
    b_std: float,
    b_max: int,
    rng: np.random.Generator | None = None,
) -> list[Location]:
    """Clustered instance: uniform costs in [f_min, f_max], clients rounded normal in [0, b_max]."""
    rng = _rng(rng)
    points = matern_point_process(lambda_parent, lambda_daughter, delta, width, height, rng)
    return _fill_costs_and_clients(points, f_min, f_max, b_mean, b_std, b_max, rng)


def generate_instance_uniform(
    width: float,
    height: float,
    lam: float,
    f_min: float,
    f_max: float,
    b_mean: float,
    b_std: float,
    b_max: int,
    rng: np.random.Generator | None = None,
) -> list[Location]:
    """Poisson instance: uniform costs in [f_min, f_max], clients rounded normal in [0, b_max]."""
    rng = _rng(rng)
    points = poisson_point_process(lam, width, height, rng)
    return _fill_costs_and_clients(points, f_min, f_max, b_mean, b_std, b_max, rng)