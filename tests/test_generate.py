import numpy as np
import pytest

from privfacility.generate import (
    generate_instance,
    generate_instance_uniform,
    matern_point_process,
    poisson_point_process,
)


def test_poisson_points_inside_window():
    points = poisson_point_process(5.0, 4.0, 2.0, np.random.default_rng(0))
    assert len(points) > 0
    assert [p.id for p in points] == list(range(len(points)))
    for p in points:
        assert 0.0 <= p.x < 4.0
        assert 0.0 <= p.y < 2.0


def test_poisson_zero_intensity_is_empty():
    assert poisson_point_process(0.0, 10.0, 10.0, np.random.default_rng(0)) == []


def test_poisson_reproducible():
    a = poisson_point_process(3.0, 2.0, 2.0, np.random.default_rng(11))
    b = poisson_point_process(3.0, 2.0, 2.0, np.random.default_rng(11))
    assert a == b


def test_poisson_negative_intensity_raises():
    with pytest.raises(ValueError):
        poisson_point_process(-1.0, 1.0, 1.0, np.random.default_rng(0))


def test_matern_points_bounds_and_ids():
    delta = 0.5
    points = matern_point_process(20.0, 10.0, delta, 3.0, 2.0, np.random.default_rng(4))
    assert len(points) > 0
    assert [p.id for p in points] == list(range(len(points)))
    for p in points:
        assert 0.0 <= p.x <= 3.0 + 2 * delta
        assert 0.0 <= p.y <= 2.0 + 2 * delta


def test_matern_no_parents_is_empty():
    assert matern_point_process(0.0, 10.0, 1.0, 5.0, 5.0, np.random.default_rng(0)) == []


def test_matern_zero_radius_stacks_daughters_on_centers():
    points = matern_point_process(3.0, 8.0, 0.0, 5.0, 5.0, np.random.default_rng(9))
    distinct = {(p.x, p.y) for p in points}
    assert len(distinct) <= len(points)
    assert len(points) > len(distinct)


def test_generate_instance_ranges():
    points = generate_instance(5.0, 5.0, 10.0, 10.0, 1.0, 1.0, 3.0, 4.0, 2.0, 6, np.random.default_rng(1))
    assert len(points) > 0
    for p in points:
        assert 1.0 <= p.f <= 3.0
        assert 0 <= p.b <= 6
        assert p.b == int(p.b)


def test_generate_instance_reproducible():
    args = (5.0, 5.0, 5.0, 5.0, 1.0, 1.0, 3.0, 4.0, 2.0, 6)
    first = generate_instance(*args, np.random.default_rng(3))
    second = generate_instance(*args, np.random.default_rng(3))
    assert len(first) > 0
    assert [p.id for p in first] == list(range(len(first)))
    assert first == second


def test_generate_instance_rounds_half_away_from_zero():
    points = generate_instance(5.0, 5.0, 5.0, 5.0, 1.0, 1.0, 2.0, 2.5, 0.0, 8, np.random.default_rng(2))
    assert len(points) > 0
    assert all(p.b == 3.0 for p in points)


def test_generate_instance_clamps_clients():
    high = generate_instance(5.0, 5.0, 5.0, 5.0, 1.0, 1.0, 2.0, 50.0, 0.0, 40, np.random.default_rng(2))
    low = generate_instance(5.0, 5.0, 5.0, 5.0, 1.0, 1.0, 2.0, -5.0, 0.0, 40, np.random.default_rng(2))
    assert high and low
    assert all(p.b == 40 for p in high)
    assert all(p.b == 0 for p in low)


def test_generate_instance_uniform_ranges():
    points = generate_instance_uniform(3.0, 3.0, 4.0, 0.5, 1.5, 2.5, 1.5, 8, np.random.default_rng(6))
    assert len(points) > 0
    assert [p.id for p in points] == list(range(len(points)))
    for p in points:
        assert 0.0 <= p.x < 3.0 and 0.0 <= p.y < 3.0
        assert 0.5 <= p.f <= 1.5
        assert 0 <= p.b <= 8 and p.b == int(p.b)
        assert p.connected_to == -1 and p.capacity == 0.0


def test_generate_instance_uniform_negative_std_raises():
    with pytest.raises(ValueError):
        generate_instance_uniform(3.0, 3.0, 4.0, 0.5, 1.5, 2.5, -1.0, 8, np.random.default_rng(6))