"""Wavefront OBJ reader producing ordered vertex groups per object/group name."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List

import numpy as np
from loguru import logger

DEFAULT_GROUP_NAME = "unnamed_object"


class ObjParseError(ValueError):
    """Raised for malformed OBJ statements."""

    def __init__(self, source: str, line_number: int, message: str) -> None:
        super().__init__(f"{source}:{line_number}: {message}")
        self.source = source
        self.line_number = line_number


@dataclass(slots=True)
class MeshGroup:
    """Vertices of one named OBJ object, in the order its faces first use them."""

    name: str
    vertices: np.ndarray  # shape (N, 3)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


class _GroupBuilder:
    def __init__(self, name: str) -> None:
        self.name = name
        self.face_count = 0
        self._index_map: Dict[int, int] = {}

    def add_face(self, indices: Iterable[int]) -> None:
        for index in indices:
            self._index_map.setdefault(index, len(self._index_map))
        self.face_count += 1

    def build(self, positions: List[List[float]]) -> MeshGroup:
        used = [positions[index] for index in self._index_map]
        vertices = np.array(used, dtype=np.float64).reshape(-1, 3)
        return MeshGroup(name=self.name, vertices=vertices)


def parse_obj(lines: Iterable[str], source: str = "<memory>") -> List[MeshGroup]:
    """
    Parse OBJ text into mesh groups.

    ``o`` and ``g`` statements start a new group; a group that received no
    faces is dropped, except the last one, which is always emitted. Statements
    other than ``v``, ``f``, ``o`` and ``g`` are ignored.
    """
    positions: List[List[float]] = []
    groups: List[MeshGroup] = []
    current = _GroupBuilder(DEFAULT_GROUP_NAME)

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        keyword, *remainder = line.split(None, 1)
        rest = remainder[0] if remainder else ""

        if keyword == "v":
            values = rest.split()
            if len(values) < 3:
                raise ObjParseError(source, line_number, "vertex needs at least three coordinates")
            try:
                positions.append([float(value) for value in values[:3]])
            except ValueError as exc:
                raise ObjParseError(source, line_number, f"invalid vertex coordinate ({exc})") from exc
        elif keyword == "f":
            tokens = rest.split()
            if len(tokens) < 3:
                raise ObjParseError(source, line_number, "face needs at least three vertices")
            current.add_face(_resolve_index(token, len(positions), source, line_number) for token in tokens)
        elif keyword in ("o", "g"):
            if current.face_count:
                groups.append(current.build(positions))
            current = _GroupBuilder(rest)

    groups.append(current.build(positions))
    logger.debug(f"Parsed {len(groups)} group(s) and {len(positions)} position(s) from {source}")
    return groups


def load_obj(path: str | Path) -> List[MeshGroup]:
    """Load mesh groups from an OBJ file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as handle:
        return parse_obj(handle, source=str(path))


def _resolve_index(token: str, position_count: int, source: str, line_number: int) -> int:
    """Zero-based position index from a ``v``, ``v/vt``, ``v//vn`` or ``v/vt/vn`` token."""
    try:
        index = int(token.split("/", 1)[0])
    except ValueError as exc:
        raise ObjParseError(source, line_number, f"invalid face index '{token}'") from exc
    resolved = index - 1 if index > 0 else position_count + index
    if index == 0 or not 0 <= resolved < position_count:
        raise ObjParseError(source, line_number, f"face index {index} out of range")
    return resolved
