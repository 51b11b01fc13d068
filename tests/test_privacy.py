from dataclasses import replace

import pytest

from privfacility.locations import Location
from privfacility.privacy import (
    compute_mis,
    compute_mis_with_reassignment,
    private_assignment,
    private_reconnection_assignment,
    reconnect,
)


def _points(rows):
    return [Location(*row) for row in rows]


def _check(actual, expected):
    assert len(actual) == len(expected)
    for loc, (connected_to, capacity) in zip(actual, expected):
        assert loc.connected_to == connected_to, f"location {loc.id}"
        assert abs(loc.capacity - capacity) <= 1e-3, f"location {loc.id}"


GRID_COORDS = [
    (2.0, 8.0), (2.0, 2.0), (7.0, 5.0), (2.0, 7.0), (2.0, 9.0),
    (1.0, 8.0), (3.0, 8.0), (7.0, 4.0), (7.0, 6.0), (6.0, 5.0),
    (8.0, 5.0), (2.0, 1.0), (2.0, 3.0), (1.0, 2.0), (3.0, 2.0),
]


def _grid(other_cost):
    rows = []
    for i, (x, y) in enumerate(GRID_COORDS):
        f = 1.0 if i < 3 else other_cost
        rows.append((i, x, y, f, 2.0, 0, 0, 2.0))
    return _points(rows)


GRID_RECONN = [
    (0, 35.50809), (1, 35.50809), (2, 35.50809),
    (0, 0), (0, 0), (0, 0), (0, 0),
    (2, 0), (2, 0), (2, 0), (2, 0),
    (1, 0), (1, 0), (1, 0), (1, 0),
]


def test_case_1_reconnection():
    _check(private_reconnection_assignment(_grid(1.5), 1, 0.1, 1), GRID_RECONN)


def test_case_1_no_reconnection():
    expected = [(i, 13.40756) for i in range(15)]
    _check(private_assignment(_grid(1.5), 1, 0.1), expected)


def test_case_2_both_algorithms():
    points = _grid(4)
    _check(private_reconnection_assignment(points, 1, 0.1, 1), GRID_RECONN)
    _check(private_assignment(points, 1, 0.1), GRID_RECONN)


def _line(costs):
    coords = [(2.0, 5.0), (4.0, 5.0), (6.0, 5.0), (3.0, 5.0), (3.0, 5.0),
              (3.0, 5.0), (5.0, 5.0), (5.0, 5.0), (5.0, 5.0), (4.0, 4.0)]
    return _points(
        (i, x, y, costs[i] if i < 3 else 4, 2.0, 0, 0, 2.0) for i, (x, y) in enumerate(coords)
    )


def test_case_3():
    points = _line([1.0, 1.5, 1.0])
    expected_reconn = [(0, 37.95635), (0, 0), (2, 29.19327), (0, 0), (0, 0),
                       (0, 0), (2, 0), (2, 0), (2, 0), (0, 0)]
    expected_no_reconn = [(0, 29.19327), (1, 18.98590), (2, 29.19327), (0, 0), (0, 0),
                          (0, 0), (2, 0), (2, 0), (2, 0), (1, 0)]
    _check(private_reconnection_assignment(points, 1, 0.1, 1), expected_reconn)
    _check(private_assignment(points, 1, 0.1), expected_no_reconn)


def test_case_4():
    points = _line([1.5, 1.0, 1.5])
    expected_reconn = [(1, 0), (1, 53.5095)] + [(1, 0)] * 8
    expected_no_reconn = [(0, 12.59663), (1, 45.97181), (2, 12.59663)] + [(1, 0)] * 7
    _check(private_reconnection_assignment(points, 1, 0.1, 1), expected_reconn)
    _check(private_assignment(points, 1, 0.1), expected_no_reconn)


def _triangle(rows):
    return _points(rows)


REVERSE = {0: {0}, 1: {1}, 2: {2}}


def test_reconnect_1():
    points = _triangle([(0, 1, 3, 1, 1, 0, 0), (1, 2, 1, 1.5, 1, 0, 1), (2, 3, 3, 1.5, 1, 0, 2)])
    _check(reconnect(points, 2, REVERSE), [(0, 0), (0, 0), (0, 0)])


def test_reconnect_2():
    points = _triangle([(0, 1, 3, 1, 1, 0, 0), (1, 2, 1, 1.5, 1, 0, 1), (2, 3, 3, 1.5, 1, 0, 2)])
    _check(reconnect(points, 1, REVERSE), [(0, 0), (1, 0), (0, 0)])


def test_reconnect_3():
    points = _triangle([(0, 1, 2, 1, 1, 0, 0), (1, 2, 1, 1.1, 1, 0, 1), (2, 4, 3, 0.8, 1, 0, 2)])
    _check(reconnect(points, 1, REVERSE), [(0, 0), (0, 0), (2, 0)])


def test_reconnect_marks_mis_facilities_with_delta():
    points = _triangle([(0, 1, 2, 1, 1, 0, 0), (1, 2, 1, 1.1, 1, 0, 1), (2, 4, 3, 0.8, 1, 0, 2)])
    result = reconnect(points, 1, REVERSE)
    assert [loc.delta for loc in result] == [1, 0, 1]


def test_inputs_are_not_modified():
    points = _grid(1.5)
    snapshot = [replace(p) for p in points]
    private_reconnection_assignment(points, 1, 0.1, 1)
    private_assignment(points, 1, 0.1)
    assert points == snapshot


def test_compute_mis_moves_neighbour_clients():
    points = _triangle([(0, 1, 3, 1, 1, 0, 0), (1, 2, 1, 1.5, 1, 0, 1), (2, 3, 3, 1.5, 1, 0, 2)])
    graph = {0: {0, 1, 2}, 1: {0, 1, 2}, 2: {0, 1, 2}}
    result = compute_mis(graph, [0, 1, 2], points, REVERSE, 2)
    assert [loc.connected_to for loc in result] == [0, 0, 0]
    assert result[0].delta == 2
    assert [p.connected_to for p in points] == [0, 1, 2]


def test_compute_mis_with_reassignment_matches_reconnect():
    points = _triangle([(0, 1, 3, 1, 1, 0, 0), (1, 2, 1, 1.5, 1, 0, 1), (2, 3, 3, 1.5, 1, 0, 2)])
    graph = {0: {0}, 1: {1}, 2: {2}}
    result = compute_mis_with_reassignment(graph, [0, 1, 2], points, 0.5)
    assert [loc.connected_to for loc in result] == [0, 1, 2]
    assert all(loc.delta == 0.5 for loc in result)


def test_reconnection_every_location_served_by_open_facility():
    result = private_reconnection_assignment(_line([1.0, 1.5, 1.0]), 1, 0.1, 1)
    open_ids = {loc.connected_to for loc in result}
    assert all(result[i].capacity > 0 for i in open_ids)
    assert all(loc.capacity == 0 for loc in result if loc.id not in open_ids)


def test_empty_instance():
    assert private_assignment([], 1, 0.1) == []
    assert private_reconnection_assignment([], 1, 0.1, 1) == []


def test_reconnect_unknown_facility_raises():
    points = _triangle([(0, 1, 3, 1, 1, 0, 0)])
    with pytest.raises(IndexError):
        reconnect(points, 1, {5: {0}})