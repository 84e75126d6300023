"""Tests for point set utilities."""

from __future__ import annotations

import numpy as np
import pytest

from mesh_aligner.geometry import (
    InvalidPointSetError,
    as_points,
    centroid,
    mean_ranked_delta,
    rank_point_distances,
)


def test_centroid_is_arithmetic_mean() -> None:
    points = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 4.0, 0.0], [2.0, 4.0, 8.0]])
    np.testing.assert_allclose(centroid(points), [1.0, 2.0, 2.0])


def test_rank_point_distances_sorts_ascending_and_displaces() -> None:
    points = np.array([[3.0, 0.0, 0.0], [1.0, 1.0, 0.0], [1.0, 0.0, 0.0]])
    center = np.array([1.0, 0.0, 0.0])

    ranked = rank_point_distances(points, center)

    assert [entry.dist for entry in ranked] == [0.0, 1.0, 4.0]
    np.testing.assert_allclose(ranked[-1].point, [2.0, 0.0, 0.0])
    np.testing.assert_allclose(ranked[1].point, [0.0, 1.0, 0.0])


def test_mean_ranked_delta_ignores_vertex_order(scattered_points: np.ndarray) -> None:
    shuffled = scattered_points[::-1]
    assert mean_ranked_delta(scattered_points, shuffled) == pytest.approx(0.0)


def test_mean_ranked_delta_of_shifted_points() -> None:
    points = np.array([[1.0, 0.0, 0.0], [0.0, 5.0, 0.0]])
    shifted = points + np.array([0.0, 0.0, 2.0])
    assert mean_ranked_delta(points, shifted) == pytest.approx(2.0)


@pytest.mark.parametrize(
    "values",
    [
        [],
        [[1.0, 2.0]],
        [[1.0, 2.0, float("nan")]],
        [1.0, 2.0, 3.0],
    ],
)
def test_as_points_rejects_invalid_input(values) -> None:
    with pytest.raises(InvalidPointSetError):
        as_points(values)


def test_as_points_converts_to_float_array() -> None:
    points = as_points([(1, 2, 3), (4, 5, 6)])
    assert points.dtype == np.float64
    assert points.shape == (2, 3)
