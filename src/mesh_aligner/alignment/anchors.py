"""Anchor selection over distance-ranked point lists."""

from __future__ import annotations

from typing import List, Optional

from mesh_aligner.geometry.points import FLOATING_TOLERANCE, PointDistance


def find_nonconflicting_point(
    points: List[PointDistance],
    tolerance: float = FLOATING_TOLERANCE,
) -> Optional[PointDistance]:
    """
    Pop the farthest point whose distance no other remaining point shares.

    ``points`` must be sorted ascending by distance and is consumed in place
    from its far end, so repeated calls on the same list yield successively
    closer anchors. Points tied within ``tolerance`` are discarded as a whole
    group (ties chain from one popped point to the next).

    Returns:
        The anchor, or None once the list is exhausted. A candidate with no
        remaining point left to compare against counts as exhausted.
    """
    while points:
        candidate = points.pop()
        tied = False
        while points and abs(candidate.dist - points[-1].dist) < tolerance:
            candidate = points.pop()
            tied = True
        if tied:
            continue
        if not points:
            return None
        return candidate
    return None
