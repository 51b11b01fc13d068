"""Non-private assignment of every location to its cheapest facility."""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import Iterable

from .locations import Location, euclidean_distance


def compute_assignments(points: Iterable[Location]) -> list[Location]:
    """Connect each location to the facility minimising ``f + distance``.

    Facilities receive the clients ``b`` of every location connected to them
    as capacity. Ties keep the first facility found.
    """
    assignment = [replace(point) for point in points]

    for u in assignment:
        min_value = sys.float_info.max
        best = None
        for v in assignment:
            value = v.f + euclidean_distance(u.x, u.y, v.x, v.y)
            if value < min_value:
                best = v
                min_value = value
        if best is None:
            continue
        best.capacity += u.b
        u.connected_to = best.id

    return assignment