"""
Export of declarations to `.ts` files.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from ..config import ExportConfig, default_config
from ..errors import ExportError
from ..types import TS
from .formatter import DprintFormatter
from .graph import collect
from .path import import_path, normalize_location, resolve_location
from .writer import render_file, write_file

__all__ = [
    "DprintFormatter",
    "collect",
    "export_all_into",
    "export_into",
    "export_to_string",
    "import_path",
    "normalize_location",
    "render_file",
    "resolve_location",
]


def _location(ty: TS) -> PurePosixPath:
    location = ty.output_path()
    if location is None:
        raise ExportError(f"{ty.name()} cannot be exported")
    return normalize_location(location)


def _base_dir(out_dir: str | Path | None, config: ExportConfig) -> Path:
    return Path(out_dir) if out_dir is not None else config.export_path


def export_into(ty: TS, out_dir: str | Path | None = None, config: ExportConfig | None = None) -> Path:
    """Export `ty` alone, with imports for its dependencies but without writing them.

    Returns:
        The path of the written file
    """
    config = config or default_config()
    location = _location(ty)
    target = resolve_location(_base_dir(out_dir, config), location)
    return write_file(target, render_file(location, [ty], config), config)


def export_all_into(ty: TS, out_dir: str | Path | None = None, config: ExportConfig | None = None) -> list[Path]:
    """Export `ty` and every type it transitively depends on.

    All files are rendered before the first one is written.

    Returns:
        The paths of the written files, in discovery order
    """
    config = config or default_config()
    base = _base_dir(out_dir, config)
    files = collect(ty)
    planned = [(resolve_location(base, location), render_file(location, types, config)) for location, types in files.items()]
    return [write_file(target, content, config) for target, content in planned]


def export_to_string(ty: TS, config: ExportConfig | None = None) -> str:
    """Content of the file `ty` would be exported to, unformatted."""
    config = config or default_config()
    return render_file(_location(ty), [ty], config)
