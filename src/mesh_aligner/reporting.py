"""Render group reports as ``[name] / Position= / Rotation=`` text blocks."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np
from loguru import logger

from mesh_aligner.pipeline import GroupReport, GroupStatus


def remap_axes(
    position: np.ndarray,
    rotation_degrees: np.ndarray,
    convention: str = "native",
) -> Tuple[np.ndarray, np.ndarray]:
    """Permute a pose into another tool's axis convention (Y-up to Blender's Z-up)."""
    position = np.asarray(position, dtype=np.float64)
    rotation_degrees = np.asarray(rotation_degrees, dtype=np.float64)
    if convention == "native":
        return position, rotation_degrees
    if convention == "blender":
        return (
            np.array([position[0], -position[2], position[1]]),
            np.array([rotation_degrees[0], -rotation_degrees[2], rotation_degrees[1]]),
        )
    raise ValueError(f"Unsupported axis convention: {convention}")


def format_report(
    report: GroupReport,
    convention: str = "native",
    precision: Optional[int] = None,
    euler_sequence: str = "xyz",
) -> str:
    if report.status is GroupStatus.MISSING_PARTNER:
        return f"Unable to find partner for model {report.name}\n"
    if report.status is GroupStatus.EMPTY_MESH:
        return f'Model "{report.name}" has no vertices\n'
    if report.status is GroupStatus.VERTEX_COUNT_MISMATCH:
        return f'Model "{report.name}" does not have as many vertices as its reference\n'
    if report.status is GroupStatus.UNDETERMINED or report.result is None:
        return f'Model "{report.name}" rotation could not be determined ({report.reason})\n'

    position, angles = remap_axes(
        report.result.translation,
        report.result.euler_degrees(euler_sequence),
        convention,
    )
    return (
        f"[{report.name}]\n"
        f"Position={_join(position, precision)}\n"
        f"Rotation={_join(angles, precision)}\n\n"
    )


def format_reports(reports: Iterable[GroupReport], **kwargs) -> str:
    return "".join(format_report(report, **kwargs) for report in reports)


def write_reports(
    reports: Iterable[GroupReport],
    destination: Optional[Path] = None,
    **kwargs,
) -> None:
    """Write formatted reports to ``destination``, or stdout when None."""
    text = format_reports(reports, **kwargs)
    if destination is None:
        sys.stdout.write(text)
        return
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text, encoding="utf-8")
    logger.info(f"Wrote alignment report to {destination}")


def _join(values: np.ndarray, precision: Optional[int]) -> str:
    # Adding 0.0 folds negative zero into zero. Without a precision, values use
    # the shortest round-trip digits in positional notation ("5", "0.25").
    if precision is None:
        return ",".join(
            np.format_float_positional(float(value) + 0.0, unique=True, trim="-") for value in values
        )
    return ",".join(f"{round(float(value), precision) + 0.0:.{precision}f}" for value in values)
