"""Shortest-arc rotations between vectors and Euler reporting helpers."""

from __future__ import annotations

from typing import Optional

import numpy as np
from scipy.spatial.transform import Rotation

from mesh_aligner.geometry.points import FLOATING_TOLERANCE


def rotation_between(
    source: np.ndarray,
    target: np.ndarray,
    tolerance: float = FLOATING_TOLERANCE,
    axis_hint: Optional[np.ndarray] = None,
) -> Optional[Rotation]:
    """
    Minimal rotation mapping the direction of ``source`` onto ``target``.

    Args:
        source: Vector to rotate.
        target: Vector whose direction ``source`` should end up on.
        tolerance: Squared-norm threshold below which a vector counts as zero,
            and squared-sine threshold for treating the pair as antiparallel.
        axis_hint: Preferred half-turn axis when the vectors are antiparallel.

    Returns:
        The rotation, or None when either vector is (near) zero.
    """
    source_norm = float(np.linalg.norm(source))
    target_norm = float(np.linalg.norm(target))
    if source_norm ** 2 <= tolerance or target_norm ** 2 <= tolerance:
        return None

    unit_source = source / source_norm
    unit_target = target / target_norm
    sin_sq = float(np.sum(np.cross(unit_source, unit_target) ** 2))
    cos_angle = float(np.dot(unit_source, unit_target))
    if sin_sq > tolerance or cos_angle > 0.0:
        return _minimal_rotation(unit_source, unit_target)

    # Antiparallel: half-turn about a fixed perpendicular, then the small
    # remaining correction from -source to target.
    pivot = _perpendicular_axis(unit_source, axis_hint, tolerance)
    flip = Rotation.from_rotvec(np.pi * pivot)
    return _minimal_rotation(-unit_source, unit_target) * flip


def euler_degrees(rotation: Rotation, sequence: str = "xyz") -> np.ndarray:
    """Euler angles in degrees; lowercase sequences are extrinsic."""
    return rotation.as_euler(sequence, degrees=True)


def _minimal_rotation(unit_source: np.ndarray, unit_target: np.ndarray) -> Rotation:
    axis = np.cross(unit_source, unit_target)
    sin_angle = float(np.linalg.norm(axis))
    if sin_angle == 0.0:
        return Rotation.identity()
    angle = np.arctan2(sin_angle, float(np.dot(unit_source, unit_target)))
    return Rotation.from_rotvec(axis * (angle / sin_angle))


def _perpendicular_axis(
    unit_vector: np.ndarray,
    axis_hint: Optional[np.ndarray],
    tolerance: float,
) -> np.ndarray:
    """Unit axis orthogonal to ``unit_vector``, from the hint when usable."""
    if axis_hint is not None:
        hint_norm = float(np.linalg.norm(axis_hint))
        if hint_norm ** 2 > tolerance:
            hint = axis_hint / hint_norm
            projected = hint - np.dot(hint, unit_vector) * unit_vector
            projected_norm = float(np.linalg.norm(projected))
            if projected_norm ** 2 > tolerance:
                return projected / projected_norm
    # Basis axis least aligned with the vector.
    basis = np.eye(3)[int(np.argmin(np.abs(unit_vector)))]
    perpendicular = np.cross(unit_vector, basis)
    return perpendicular / np.linalg.norm(perpendicular)
