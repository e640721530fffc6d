"""
Dependency graph walk over a root type.
"""

from __future__ import annotations

from collections import deque
from pathlib import PurePosixPath

from ..types import TS
from .path import normalize_location


def collect(root: TS) -> dict[PurePosixPath, list[TS]]:
    """Group the transitive closure of `root` by output location.

    Every reached type is followed through its `dependency_types()` and
    `generics()`, whether or not it is exportable itself. Each type is visited
    once (by identity), so cyclic dependencies terminate. Locations and the
    types at each location are in discovery order.

    Raises:
        ExportPathError: If a location escapes the output directory
    """
    files: dict[PurePosixPath, list[TS]] = {}
    visited = set()
    frontier = deque([root])
    while frontier:
        ty = frontier.popleft()
        identity = ty.identity()
        if identity in visited:
            continue
        visited.add(identity)

        location = ty.output_path()
        if location is not None:
            files.setdefault(normalize_location(location), []).append(ty)

        frontier.extend(ty.dependency_types())
        frontier.extend(ty.generics())
    return files
