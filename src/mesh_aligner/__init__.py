"""Rigid pose recovery between two poses of the same mesh."""

from .alignment import AlignmentResult, RigidAligner, Undetermined  # noqa: F401
from .config import AlignerConfig, load_config  # noqa: F401
from .pipeline import AlignmentPipeline, GroupReport, GroupStatus  # noqa: F401
