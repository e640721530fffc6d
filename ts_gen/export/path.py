"""
Output locations and the import paths between them.
"""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath

from ..errors import ExportPathError


def normalize_location(location: PurePosixPath) -> PurePosixPath:
    """Normalize a location relative to the output directory.

    Raises:
        ExportPathError: If the location is absolute or escapes the output directory
    """
    text = str(location)
    if location.is_absolute():
        raise ExportPathError(f"Output path {text!r} must be relative to the output directory")
    normalized = posixpath.normpath(text)
    if normalized == ".." or normalized.startswith("../") or normalized == ".":
        raise ExportPathError(f"Output path {text!r} is outside of the output directory")
    return PurePosixPath(normalized)


def resolve_location(base: Path, location: PurePosixPath) -> Path:
    """Absolute-free file path of `location` under `base`."""
    return base.joinpath(*normalize_location(location).parts)


def import_path(importer: PurePosixPath, imported: PurePosixPath, *, esm: bool = False) -> str:
    """Module specifier used by the file at `importer` to import the file at `imported`.

    Examples:
        import_path("a/A.ts", "a/B.ts") -> "./B"
        import_path("a/A.ts", "C.ts") -> "../C"
        import_path("A.ts", "b/B.ts", esm=True) -> "./b/B.js"
    """
    importer = normalize_location(PurePosixPath(importer))
    imported = normalize_location(PurePosixPath(imported))
    start = str(importer.parent)
    relative = posixpath.relpath(str(imported), start=start)
    if relative.endswith(".ts"):
        relative = relative[: -len(".ts")]
    if not relative.startswith("../"):
        relative = f"./{relative}"
    if esm:
        relative = f"{relative}.js"
    return relative
