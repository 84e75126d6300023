"""High-level orchestration: match mesh groups by name and align each pair."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from mesh_aligner.alignment import AlignmentResult, RigidAligner, Undetermined
from mesh_aligner.config import AlignerConfig
from mesh_aligner.geometry import mean_ranked_delta
from mesh_aligner.mesh import MeshGroup, load_obj


class GroupStatus(str, enum.Enum):
    ALIGNED = "aligned"
    MISSING_PARTNER = "missing_partner"
    EMPTY_MESH = "empty_mesh"
    VERTEX_COUNT_MISMATCH = "vertex_count_mismatch"
    UNDETERMINED = "undetermined"


@dataclass(slots=True)
class GroupReport:
    name: str
    status: GroupStatus
    result: Optional[AlignmentResult] = None
    residual: Optional[float] = None  # mean ranked delta after applying the result
    reason: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is GroupStatus.ALIGNED


class AlignmentPipeline:
    """Aligns every group of a moved mesh onto its same-named reference group."""

    def __init__(self, aligner: RigidAligner) -> None:
        self._aligner = aligner

    @classmethod
    def from_config(cls, config: AlignerConfig) -> "AlignmentPipeline":
        aligner = RigidAligner(tolerance=config.alignment.floating_tolerance)
        logger.debug(f"Alignment pipeline initialized with tolerance {aligner.tolerance:g}")
        return cls(aligner)

    def align_files(self, moved_path: str | Path, reference_path: str | Path) -> List[GroupReport]:
        """Load both OBJ files and align their groups."""
        moved_groups = load_obj(moved_path)
        reference_groups = load_obj(reference_path)
        logger.info(
            f"Loaded {len(moved_groups)} moved and {len(reference_groups)} reference group(s)"
        )
        return self.align_groups(moved_groups, reference_groups)

    def align_groups(
        self,
        moved_groups: Sequence[MeshGroup],
        reference_groups: Sequence[MeshGroup],
    ) -> List[GroupReport]:
        """
        Align each moved group with the first reference group of the same name.

        Reference groups without a moved counterpart are ignored. A failing
        group is reported and does not stop the remaining ones.
        """
        reports: List[GroupReport] = []
        for moved in moved_groups:
            partner = next((ref for ref in reference_groups if ref.name == moved.name), None)
            if partner is None:
                logger.warning(f"Unable to find partner for model {moved.name}")
                reports.append(GroupReport(name=moved.name, status=GroupStatus.MISSING_PARTNER))
                continue
            reports.append(self.align_group(moved, partner))

        aligned = sum(1 for report in reports if report.succeeded)
        logger.info(f"Aligned {aligned}/{len(reports)} group(s)")
        return reports

    def align_group(self, moved: MeshGroup, reference: MeshGroup) -> GroupReport:
        if moved.vertex_count == 0 or reference.vertex_count == 0:
            logger.warning(f'Model "{moved.name}" has no vertices')
            return GroupReport(name=moved.name, status=GroupStatus.EMPTY_MESH)
        if moved.vertex_count != reference.vertex_count:
            logger.warning(
                f'Model "{moved.name}" does not have as many vertices as its reference '
                f"({moved.vertex_count} != {reference.vertex_count})"
            )
            return GroupReport(name=moved.name, status=GroupStatus.VERTEX_COUNT_MISMATCH)

        outcome = self._aligner.align(moved.vertices, reference.vertices)
        if isinstance(outcome, Undetermined):
            logger.warning(f'Model "{moved.name}": rotation could not be determined ({outcome})')
            return GroupReport(
                name=moved.name,
                status=GroupStatus.UNDETERMINED,
                reason=outcome.reason.value,
            )

        residual = mean_ranked_delta(outcome.transform(moved.vertices), reference.vertices)
        logger.debug(f'Model "{moved.name}": average point delta after alignment {residual:.3e}')
        return GroupReport(name=moved.name, status=GroupStatus.ALIGNED, result=outcome, residual=residual)
