"""Differentially private facility capacities, with and without reconnection."""

from __future__ import annotations

import math
import sys
from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from .locations import Location, euclidean_distance

Graph = Mapping[int, Iterable[int]]
ReverseAssignment = Mapping[int, Iterable[int]]


def _connect_to_cheapest(assignment: list[Location]) -> dict[int, set[int]]:
    """Connect every location to the facility minimising ``f + distance``.

    Returns the reverse assignment: facility id -> ids of connected locations.
    """
    reverse: dict[int, set[int]] = {}
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
        u.connected_to = best.id
        reverse.setdefault(best.id, set()).add(u.id)
    return reverse


def _add_private_capacities(
    assignment: list[Location],
    originals: Sequence[Location],
    reverse: Mapping[int, Iterable[int]],
    eps: float,
    alpha: float,
) -> None:
    """Give each open facility its noisy client count plus a privacy margin."""
    log_term = math.log(2 * len(originals) / alpha)
    for facility_id, members in reverse.items():
        members = list(members)
        facility = assignment[facility_id]
        for member in members:
            facility.capacity += originals[member].b_noisy
        facility.capacity += 2 / eps * math.sqrt(len(members)) * log_term


def private_assignment(points: Iterable[Location], eps: float, alpha: float) -> list[Location]:
    """Cheapest-facility assignment with capacities from noisy client counts."""
    originals = list(points)
    assignment = [replace(point) for point in originals]
    reverse = _connect_to_cheapest(assignment)
    _add_private_capacities(assignment, originals, reverse, eps, alpha)
    return assignment


def _greedy_mis(graph: Graph, marked_nodes: Iterable[int]) -> tuple[list[int], set[int]]:
    """Greedy maximal independent set over ``marked_nodes`` in the given order."""
    mis: set[int] = set()
    visited: set[int] = set()
    for node in marked_nodes:
        if node in visited:
            continue
        mis.add(node)
        visited.add(node)
        visited.update(graph[node])
    return sorted(mis), visited


def compute_mis_with_reassignment(
    graph: Graph,
    marked_nodes: Iterable[int],
    assignment: Sequence[Location],
    delta: float,
) -> list[Location]:
    """Open a greedy MIS of facilities and reassign every location to it.

    Locations within ``delta`` of an MIS facility join it; all others are
    connected to the cheapest MIS facility by ``f + distance``.
    """
    updated = [replace(point) for point in assignment]
    marked = list(marked_nodes)

    mis: set[int] = set()
    visited: set[int] = set()
    for node in marked:
        if node in visited:
            continue
        mis.add(node)
        updated[node].delta = delta
        visited.add(node)
        visited.update(graph[node])
    mis_order = sorted(mis)

    reconnected = [False] * len(assignment)
    for v_id in mis_order:
        v = updated[v_id]
        reconnected[v_id] = True
        for u in updated:
            if euclidean_distance(v.x, v.y, u.x, u.y) <= delta:
                reconnected[u.id] = True
                updated[u.id].connected_to = v_id

    for v in updated:
        if reconnected[v.id]:
            continue
        min_value = sys.float_info.max
        best_id = -1
        for u_id in mis_order:
            u = updated[u_id]
            value = u.f + euclidean_distance(u.x, u.y, v.x, v.y)
            if value < min_value:
                best_id = u.id
                min_value = value
        v.connected_to = best_id

    return updated


def compute_mis(
    graph: Graph,
    marked_nodes: Iterable[int],
    assignment: Sequence[Location],
    reverse_assignment: ReverseAssignment,
    delta: float,
) -> list[Location]:
    """Open a greedy MIS of facilities, moving clients of absorbed neighbours.

    Locations served by a neighbour of an MIS facility move to that facility,
    then every location within ``delta`` of an MIS facility joins it.
    """
    updated = [replace(point) for point in assignment]

    mis: set[int] = set()
    visited: set[int] = set()
    for node in marked_nodes:
        if node in visited:
            continue
        mis.add(node)
        updated[node].delta = delta
        visited.add(node)
        for neighbor in graph[node]:
            if neighbor in visited:
                continue
            visited.add(neighbor)
            for member in reverse_assignment.get(neighbor, ()):
                updated[member].connected_to = node

    for v_id in sorted(mis):
        v = updated[v_id]
        for u in assignment:
            if euclidean_distance(v.x, v.y, u.x, u.y) <= delta:
                updated[u.id].connected_to = v.id

    return updated


def reconnect(
    points: Sequence[Location], delta: float, reverse_assignment: ReverseAssignment
) -> list[Location]:
    """Merge open facilities closer than ``2 * delta`` and reassign locations.

    Open facilities are the keys of ``reverse_assignment``. They are visited
    by increasing facility cost, ties broken by id.
    """
    points = list(points)
    marked = sorted(reverse_assignment)

    graph: dict[int, set[int]] = {}
    for v_id in marked:
        v = points[v_id]
        graph.setdefault(v.id, set()).add(v.id)
        for u_id in marked:
            if u_id == v_id:
                continue
            u = points[u_id]
            if euclidean_distance(v.x, v.y, u.x, u.y) <= 2 * delta:
                graph[v.id].add(u.id)
                graph.setdefault(u.id, set()).add(v.id)

    ordered = sorted(graph, key=lambda node: (points[node].f, node))
    return compute_mis_with_reassignment(graph, ordered, points, delta)


def private_reconnection_assignment(
    points: Iterable[Location], eps: float, alpha: float, delta: float
) -> list[Location]:
    """Private assignment after merging nearby facilities within ``delta``."""
    originals = list(points)
    assignment = [replace(point) for point in originals]
    reverse = _connect_to_cheapest(assignment)

    reconnected = reconnect(assignment, delta, reverse)

    reconnected_reverse: dict[int, set[int]] = {}
    for point in reconnected:
        if not 0 <= point.connected_to < len(reconnected):
            raise IndexError(f"location {point.id} is connected to unknown index {point.connected_to}")
        reconnected_reverse.setdefault(point.connected_to, set()).add(point.id)

    _add_private_capacities(reconnected, originals, reconnected_reverse, eps, alpha)
    return reconnected