"""Command-line entry point: report the pose of each moved mesh group."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from mesh_aligner.config import AXIS_CONVENTIONS, AlignerConfig, load_config
from mesh_aligner.mesh import ObjParseError
from mesh_aligner.pipeline import AlignmentPipeline
from mesh_aligner.reporting import write_reports
from mesh_aligner.utils import configure_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Estimate the translation and rotation that carry each group of a moved OBJ onto a reference OBJ"
    )
    parser.add_argument("moved", type=Path, help="OBJ file with the mesh in its moved pose")
    parser.add_argument("reference", type=Path, help="OBJ file with the same mesh in the reference pose")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument("--output", type=Path, help="Write the report to this file instead of stdout")
    parser.add_argument("--axis-convention", choices=AXIS_CONVENTIONS, help="Axis convention of the reported pose")
    parser.add_argument("--tolerance", type=float, help="Floating tolerance for squared-distance comparisons")
    parser.add_argument("--log-level", type=str, help="Log level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AlignerConfig:
    """Load the YAML configuration (or defaults) and apply command-line overrides."""
    cfg = load_config(args.config) if args.config else AlignerConfig()
    if args.tolerance is not None:
        cfg.alignment.floating_tolerance = args.tolerance
    if args.axis_convention is not None:
        cfg.reporting.axis_convention = args.axis_convention
    if args.output is not None:
        cfg.reporting.output = args.output
    if args.log_level is not None:
        cfg.logging.level = args.log_level
    return AlignerConfig.model_validate(cfg.model_dump())


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    cfg = build_config(args)
    configure_logging(cfg.logging)
    pipeline = AlignmentPipeline.from_config(cfg)

    try:
        reports = pipeline.align_files(args.moved, args.reference)
    except (OSError, ObjParseError) as exc:
        logger.error(f"Failed to load meshes: {exc}")
        return 1

    write_reports(
        reports,
        cfg.reporting.output,
        convention=cfg.reporting.axis_convention,
        precision=cfg.reporting.precision,
        euler_sequence=cfg.reporting.euler_sequence,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
