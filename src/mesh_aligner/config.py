"""Configuration schema and loader for the mesh pose aligner."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, validator

from mesh_aligner.geometry.points import FLOATING_TOLERANCE

AXIS_CONVENTIONS = ("native", "blender")


class AlignmentConfig(BaseModel):
    floating_tolerance: float = Field(FLOATING_TOLERANCE, gt=0.0)


class ReportingConfig(BaseModel):
    axis_convention: str = Field("native")
    euler_sequence: str = Field("xyz", min_length=3, max_length=3)
    precision: Optional[int] = Field(None, ge=0)
    output: Optional[Path] = None

    @validator("axis_convention")
    def check_axis_convention(cls, value: str) -> str:
        value = value.lower()
        if value not in AXIS_CONVENTIONS:
            raise ValueError(f"Unknown axis convention '{value}', expected one of {AXIS_CONVENTIONS}")
        return value

    @validator("euler_sequence")
    def check_euler_sequence(cls, value: str) -> str:
        # Lowercase axes are extrinsic, uppercase intrinsic; they cannot be mixed.
        if not (set(value) <= set("xyz") or set(value) <= set("XYZ")):
            raise ValueError(f"Euler sequence '{value}' must use only 'xyz' or only 'XYZ' axes")
        if value[0] == value[1] or value[1] == value[2]:
            raise ValueError(f"Euler sequence '{value}' repeats an axis consecutively")
        return value

    @validator("output", pre=True)
    def ensure_parent(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        path = Path(value)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path


class LoggingConfig(BaseModel):
    level: str = Field("INFO")
    output: str = Field("stderr")


class AlignerConfig(BaseModel):
    alignment: AlignmentConfig = Field(default_factory=AlignmentConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str | Path) -> AlignerConfig:
    """Load configuration from YAML file."""
    with open(path, "r", encoding="utf-8") as handle:
        raw: Dict[str, object] = yaml.safe_load(handle) or {}
    return AlignerConfig.model_validate(raw)
