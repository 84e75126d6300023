"""Anchor-based rigid alignment of two poses of one mesh."""

from .anchors import find_nonconflicting_point
from .rigid_aligner import AlignmentOutcome, AlignmentResult, RigidAligner, Undetermined, UndeterminedReason

__all__ = [
    "AlignmentOutcome",
    "AlignmentResult",
    "RigidAligner",
    "Undetermined",
    "UndeterminedReason",
    "find_nonconflicting_point",
]
