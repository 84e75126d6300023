"""pytest configuration and fixtures for the mesh_aligner test suite."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Callable, Dict

import numpy as np
import pytest


@pytest.fixture
def scattered_points() -> np.ndarray:
    """Irregular point cloud: no two points share a distance from any relevant center."""
    rng = np.random.default_rng(7)
    return rng.normal(size=(12, 3)) * np.array([3.0, 2.0, 1.5])


@pytest.fixture
def cube_vertices() -> np.ndarray:
    """Unit cube centered on the origin; every vertex is equidistant from the center."""
    return np.array(list(itertools.product((-0.5, 0.5), repeat=3)), dtype=np.float64)


@pytest.fixture
def marked_cube(cube_vertices: np.ndarray) -> np.ndarray:
    """Unit cube plus three off-symmetry marker vertices."""
    markers = np.array(
        [
            [0.9, 0.2, 0.1],
            [0.1, 0.7, -0.3],
            [-0.2, 0.1, 0.6],
        ]
    )
    return np.vstack([cube_vertices, markers])


@pytest.fixture
def write_obj() -> Callable[[Path, Dict[str, np.ndarray]], Path]:
    """Write named point groups as an OBJ whose faces use the vertices in order."""

    def _write(path: Path, groups: Dict[str, np.ndarray]) -> Path:
        lines = []
        offset = 0
        for name, points in groups.items():
            lines.append(f"o {name}")
            for x, y, z in points:
                lines.append(f"v {float(x)!r} {float(y)!r} {float(z)!r}")
            count = len(points)
            for start in range(0, count, 3):
                face = [offset + 1 + (start + k) % count for k in range(3)]
                lines.append("f " + " ".join(str(index) for index in face))
            offset += count
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
