"""
Hilbert curve transform tests.
"""

import numpy as np
import pytest

from ipheatmap.errors import CurveError
from ipheatmap.hilbert import d2xy, d2xy_array


def _quadrant(x, y, mid):
    return {
        (False, False): "top-left",
        (True, False): "top-right",
        (False, True): "lower-left",
        (True, True): "lower-right",
    }[(x >= mid, y >= mid)]


def test_order_zero_is_origin():
    assert d2xy(0, 0) == (0, 0)


def test_order_one_walks_the_square():
    assert [d2xy(d, 1) for d in range(4)] == [(0, 0), (0, 1), (1, 1), (1, 0)]


def test_points_within_bounds():
    for order in range(1, 13):
        max_d = (1 << (2 * order)) - 1
        for d in (0, 1, max_d // 2, max_d):
            x, y = d2xy(d, order)
            assert 0 <= x < 1 << order
            assert 0 <= y < 1 << order


def test_bijection():
    for order in range(0, 6):
        points = {d2xy(d, order) for d in range(4 ** order)}
        side = 1 << order
        assert len(points) == side * side
        assert points == {(x, y) for x in range(side) for y in range(side)}


def test_consecutive_distances_are_adjacent():
    for order in range(1, 7):
        prev = d2xy(0, order)
        for d in range(1, 4 ** order):
            point = d2xy(d, order)
            dx = abs(point[0] - prev[0])
            dy = abs(point[1] - prev[1])
            assert dx + dy == 1, f"order={order} d={d}: {prev} -> {point}"
            prev = point


def test_ipv4_quadrants_at_eight_bits_per_pixel():
    order = 12
    cases = [
        (0, "top-left"),
        (64 << 24, "lower-left"),
        (128 << 24, "lower-right"),
        (192 << 24, "top-right"),
        (240 << 24, "top-right"),
    ]
    for ip, expected in cases:
        x, y = d2xy(ip >> 8, order)
        assert _quadrant(x, y, 2048) == expected, f"{ip >> 24}.0.0.0 -> ({x}, {y})"


def test_240_slash_4_in_upper_quarter():
    x, y = d2xy((240 << 24) >> 8, 12)
    assert x >= 2048
    assert y < 1024


def test_out_of_range_distance_rejected():
    with pytest.raises(CurveError):
        d2xy(16, 2)
    with pytest.raises(CurveError):
        d2xy(-1, 2)
    with pytest.raises(CurveError):
        d2xy(1, 0)
    with pytest.raises(CurveError):
        d2xy(0, -1)


def test_array_matches_scalar():
    order = 5
    distances = np.arange(4 ** order)
    xs, ys = d2xy_array(distances, order)
    expected = [d2xy(int(d), order) for d in distances]
    assert list(zip(xs.tolist(), ys.tolist())) == expected


def test_array_rejects_out_of_range():
    with pytest.raises(CurveError):
        d2xy_array([0, 16], 2)


def test_array_empty_input():
    xs, ys = d2xy_array(np.array([], dtype=np.int64), 4)
    assert xs.size == 0
    assert ys.size == 0
