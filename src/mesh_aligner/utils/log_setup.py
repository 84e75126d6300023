"""Loguru sink configuration."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from mesh_aligner.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Replace loguru's default sink with the configured one."""
    logger.remove()
    level = config.level.upper()
    output = config.output.lower()
    if output == "stderr":
        logger.add(sys.stderr, level=level)
    elif output == "stdout":
        logger.add(sys.stdout, level=level)
    else:
        path = Path(config.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(path, level=level)
    logger.debug(f"Logging configured at {level} to {config.output}")
