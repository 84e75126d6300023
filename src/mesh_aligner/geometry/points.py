"""Point set utilities: validation, centroids and distance ranking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

# Governs every near-zero / near-equal decision on squared distances and
# cross-product magnitudes.
FLOATING_TOLERANCE = 1e-10


class InvalidPointSetError(ValueError):
    """Raised when a point set cannot be aligned at all (empty, mismatched, non-finite)."""


@dataclass(slots=True)
class PointDistance:
    """A point displaced by a center together with its squared distance from it."""

    point: np.ndarray  # shape (3,)
    dist: float


def as_points(values, name: str = "points") -> np.ndarray:
    """Convert an ordered sequence of xyz triples into a float64 (N, 3) array."""
    points = np.asarray(values, dtype=np.float64)
    if points.ndim == 1 and points.size == 0:
        points = points.reshape(0, 3)
    if points.ndim != 2 or points.shape[1] != 3:
        raise InvalidPointSetError(f"{name} must have shape (N, 3), got {points.shape}")
    if len(points) == 0:
        raise InvalidPointSetError(f"{name} is empty")
    if not np.all(np.isfinite(points)):
        raise InvalidPointSetError(f"{name} contains non-finite coordinates")
    return points


def centroid(points: np.ndarray) -> np.ndarray:
    """Arithmetic mean of a non-empty point set."""
    return points.sum(axis=0) / len(points)


def rank_point_distances(points: np.ndarray, center: np.ndarray) -> List[PointDistance]:
    """
    Displace every point by ``center`` and sort by squared distance.

    Returns:
        PointDistance list in ascending distance order, so the farthest point
        sits at the end and can be consumed with ``list.pop()``.
    """
    offsets = points - center
    dists = np.einsum("ij,ij->i", offsets, offsets)
    order = np.argsort(dists, kind="stable")
    return [PointDistance(point=offsets[i], dist=float(dists[i])) for i in order]


def mean_ranked_delta(points: np.ndarray, reference_points: np.ndarray) -> float:
    """
    Mean distance between two point sets paired by their rank of distance from the origin.

    Both sets must have the same length.
    """
    origin = np.zeros(3)
    ranked = rank_point_distances(points, origin)
    ranked_ref = rank_point_distances(reference_points, origin)
    total = 0.0
    for entry, ref_entry in zip(ranked, ranked_ref):
        total += float(np.linalg.norm(entry.point - ref_entry.point))
    return total / len(ranked)
