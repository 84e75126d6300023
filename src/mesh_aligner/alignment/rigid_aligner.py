"""Rigid pose recovery between two index-matched copies of the same mesh."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import List, Sequence, Union

import numpy as np
from loguru import logger
from scipy.spatial.transform import Rotation

from mesh_aligner.alignment.anchors import find_nonconflicting_point
from mesh_aligner.geometry.points import (
    FLOATING_TOLERANCE,
    InvalidPointSetError,
    PointDistance,
    as_points,
    centroid,
    mean_ranked_delta,
    rank_point_distances,
)
from mesh_aligner.geometry.rotations import euler_degrees, rotation_between


class UndeterminedReason(str, enum.Enum):
    ANCHORS_EXHAUSTED = "anchors_exhausted"  # too few unambiguous points
    COLLINEAR_ANCHORS = "collinear_anchors"  # every anchor pair spanned no plane
    ZERO_VECTOR = "zero_vector"  # a rotation between vectors had a zero input


@dataclass(slots=True)
class AlignmentResult:
    """Pose of the moved mesh relative to the reference: ``reference ≈ R·moved + t``."""

    translation: np.ndarray  # shape (3,)
    rotation: Rotation

    @property
    def matrix(self) -> np.ndarray:
        return self.rotation.as_matrix()

    def euler_degrees(self, sequence: str = "xyz") -> np.ndarray:
        return euler_degrees(self.rotation, sequence)

    def transform(self, points: np.ndarray) -> np.ndarray:
        """Apply the pose to an (N, 3) array of moved points."""
        return self.rotation.apply(points) + self.translation


@dataclass(slots=True)
class Undetermined:
    """No unambiguous rotation could be derived for a point set."""

    reason: UndeterminedReason
    stage: str = field(default="local")  # "local" (centroid) or "global" (origin) pass

    def __str__(self) -> str:
        return f"{self.reason.value} during {self.stage} pass"


AlignmentOutcome = Union[AlignmentResult, Undetermined]


class RigidAligner:
    """Recovers translation and rotation between two poses of one mesh from anchor points."""

    def __init__(self, tolerance: float = FLOATING_TOLERANCE) -> None:
        """
        Args:
            tolerance: Threshold for treating squared distances as equal and
                squared cross-product magnitudes as zero.
        """
        if tolerance <= 0:
            raise ValueError("tolerance must be positive")
        self._tolerance = tolerance

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def align(self, moved: Sequence, reference: Sequence) -> AlignmentOutcome:
        """
        Estimate the rigid transform carrying ``moved`` onto ``reference``.

        Args:
            moved: Ordered (N, 3) points of the mesh in its moved pose.
            reference: Ordered (N, 3) points of the same mesh in the reference
                pose; ``reference[i]`` corresponds to ``moved[i]``.

        Returns:
            AlignmentResult, or Undetermined when no rotation can be derived.

        Raises:
            InvalidPointSetError: If either set is empty or malformed, or the
                lengths differ.
        """
        start_time = time.perf_counter()
        moved_points = as_points(moved, "moved")
        reference_points = as_points(reference, "reference")
        if len(moved_points) != len(reference_points):
            raise InvalidPointSetError(
                f"Point count mismatch: moved={len(moved_points)}, reference={len(reference_points)}"
            )

        if mean_ranked_delta(moved_points, reference_points) < self._tolerance:
            logger.debug("Point sets already coincide; returning identity pose")
            return AlignmentResult(translation=np.zeros(3), rotation=Rotation.identity())

        moved_centroid = centroid(moved_points)
        reference_centroid = centroid(reference_points)

        local = self.match_planar_rotation(
            rank_point_distances(moved_points, moved_centroid),
            rank_point_distances(reference_points, reference_centroid),
        )
        if isinstance(local, Undetermined):
            return local

        reference_origin = reference_centroid - local.apply(moved_centroid)

        global_rotation = self.match_planar_rotation(
            rank_point_distances(moved_points, np.zeros(3)),
            rank_point_distances(reference_points, reference_origin),
        )
        if isinstance(global_rotation, Undetermined):
            global_rotation.stage = "global"
            return global_rotation

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"Aligned {len(moved_points)} points in {elapsed_ms:.2f}ms")
        return AlignmentResult(translation=reference_origin, rotation=global_rotation)

    def match_planar_rotation(
        self,
        model_points: List[PointDistance],
        reference_points: List[PointDistance],
    ) -> Union[Rotation, Undetermined]:
        """
        Rotation carrying the model anchors onto the reference anchors.

        Both lists are consumed in place. The plane spanned by two anchors is
        rotated onto its reference counterpart, then a roll about the plane
        normal lines up the first anchor.
        """
        first_model = find_nonconflicting_point(model_points, self._tolerance)
        first_ref = find_nonconflicting_point(reference_points, self._tolerance)
        if first_model is None or first_ref is None:
            return Undetermined(UndeterminedReason.ANCHORS_EXHAUSTED)

        rejected_pairs = 0
        while True:
            second_model = find_nonconflicting_point(model_points, self._tolerance)
            second_ref = find_nonconflicting_point(reference_points, self._tolerance)
            if second_model is None or second_ref is None:
                if rejected_pairs:
                    logger.debug(f"All {rejected_pairs} anchor pair(s) were collinear")
                    return Undetermined(UndeterminedReason.COLLINEAR_ANCHORS)
                return Undetermined(UndeterminedReason.ANCHORS_EXHAUSTED)

            model_cross = np.cross(first_model.point, second_model.point)
            ref_cross = np.cross(first_ref.point, second_ref.point)
            if float(np.dot(model_cross, model_cross)) > self._tolerance:
                break
            rejected_pairs += 1

        orientation = rotation_between(model_cross, ref_cross, self._tolerance)
        roll = None
        if orientation is not None:
            rotated_first_model = orientation.apply(first_model.point)
            roll = rotation_between(rotated_first_model, first_ref.point, self._tolerance, axis_hint=ref_cross)
        if roll is None:
            return Undetermined(UndeterminedReason.ZERO_VECTOR)

        return roll * orientation
