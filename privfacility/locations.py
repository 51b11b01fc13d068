"""Facility-location instances: the location record, file I/O, noise and cost helpers."""

from __future__ import annotations

import math
import secrets
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np


@dataclass
class Location:
    """A point that is both a potential facility and a group of clients."""

    id: int = -1
    x: float = 0.0
    y: float = 0.0
    f: float = 0.0
    b: float = 0.0
    capacity: float = 0.0
    connected_to: int = -1
    b_noisy: float = 0.0
    delta: float = 0.0

    def __str__(self) -> str:
        return (
            f"{{{self.id}, {self.x:g}, {self.y:g}, {self.f:g}, {self.b:g}, "
            f"{self.capacity:g}, {self.connected_to}}}"
        )


def generate_timestamped_filename(folder: str, base_name: str, extension: str) -> str:
    """Return ``folder/base_name_<timestamp>_<hex>extension``, creating the folder."""
    Path(folder).mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    code = secrets.randbelow(0x10000)
    return f"{folder}/{base_name}_{stamp}_{code:04x}{extension}"


def save_points_to_file(points: Iterable[Location], filename: str) -> None:
    """Write an instance as ``id,x,y,f,b,b_noisy`` lines."""
    with open(filename, "w", encoding="utf-8") as handle:
        for point in points:
            handle.write(
                f"{point.id},{point.x:.4f},{point.y:.4f},{point.f:.4f},"
                f"{point.b:.4f},{point.b_noisy:.4f}\n"
            )
    print(f"Points saved to {filename}")


def save_results_to_file(points: Iterable[Location], filename: str) -> None:
    """Write an assignment as ``id,x,y,capacity,connected_to,delta`` lines."""
    folder = Path(filename).parent
    if str(folder) not in ("", "."):
        folder.mkdir(parents=True, exist_ok=True)
    with open(filename, "w", encoding="utf-8") as handle:
        for point in points:
            handle.write(
                f"{point.id},{point.x:.4f},{point.y:.4f},{point.capacity:.4f},"
                f"{point.connected_to},{point.delta:.4f}\n"
            )
    print(f"Assignments saved to {filename}")


def load_points_from_file(filename: str) -> list[Location]:
    """Read an instance written by :func:`save_points_to_file`."""
    points = []
    with open(filename, encoding="utf-8") as handle:
        for line in handle:
            fields = line.rstrip("\r\n").split(",")
            if len(fields) < 6:
                raise ValueError(f"malformed line in {filename}: {line!r}")
            id_, x, y, f, b, noisy = fields[:6]
            points.append(
                Location(
                    id=int(id_),
                    x=float(x),
                    y=float(y),
                    f=float(f),
                    b=float(b),
                    capacity=0.0,
                    connected_to=-1,
                    b_noisy=float(noisy),
                )
            )
    return points


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Distance between two points in the plane."""
    return math.sqrt((x1 - x2) * (x1 - x2) + (y1 - y2) * (y1 - y2))


def laplacian(scale: float, rng: np.random.Generator | None = None) -> float:
    """Draw one sample of Laplace(0, scale) noise by inverting the CDF."""
    if rng is None:
        rng = np.random.default_rng()
    u = float(rng.uniform(0.0, 1.0)) - 0.5
    if u < 0:
        arg = 1 + 2 * u
        return scale * (math.log(arg) if arg > 0 else -math.inf)
    return scale * -math.log(1 - 2 * u)


def apply_laplacian(
    points: Iterable[Location], eps: float, rng: np.random.Generator | None = None
) -> list[Location]:
    """Return copies of the points with ``b_noisy = b + Laplace(1/eps)``."""
    if rng is None:
        rng = np.random.default_rng()
    scale = 1.0 / eps
    return [replace(point, b_noisy=point.b + laplacian(scale, rng)) for point in points]


def _target(points: Sequence[Location], index: int) -> Location:
    if not 0 <= index < len(points):
        raise IndexError(f"location is connected to unknown index {index}")
    return points[index]


def validate_solution(points: Sequence[Location]) -> bool:
    """Check that every facility can serve all clients connected to it."""
    assigned = [0] * len(points)
    for point in points:
        _target(points, point.connected_to)
        assigned[point.connected_to] = int(assigned[point.connected_to] + point.b)

    for point, clients in zip(points, assigned):
        if point.capacity < clients:
            print(
                f"Failure at location {point.id} capacity: {point.capacity:g} "
                f"assigned clients: {clients}"
            )
            return False
    return True


def compute_costs(points: Sequence[Location]) -> tuple[float, float]:
    """Return ``(facility_costs, connection_costs)`` of an assignment."""
    facility_costs = 0.0
    connection_costs = 0.0
    for point in points:
        target = _target(points, point.connected_to)
        facility_costs += point.capacity * point.f
        connection_costs += point.b * euclidean_distance(point.x, point.y, target.x, target.y)
    return facility_costs, connection_costs