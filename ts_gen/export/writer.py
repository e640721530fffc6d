"""
Rendering and writing of generated files.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

import jinja2

from ..config import ExportConfig
from ..errors import ExportError
from ..logging import get_logger
from ..types import TS
from ..utils import format_docs
from .formatter import DprintFormatter
from .path import import_path, normalize_location

CURRENT_DIR = Path(__file__).parent.parent
DEFAULT_GENERATOR = "ts_gen"

logger = get_logger("export.writer")

jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
file_template = jinja_env.from_string((CURRENT_DIR / "templates" / "file.ts.jinja2").read_text(encoding="utf-8"))


@dataclass
class ImportEntry:
    path: str
    names: list[str]


@dataclass
class DeclarationEntry:
    docs: str
    text: str


def unique_declarations(location: PurePosixPath, types: list[TS]) -> list[TS]:
    """Keep one type per name.

    Instantiations of one generic type share a declaration and collapse.

    Raises:
        ExportError: If two different declarations share a name in one file
    """
    by_name: dict[str, tuple[TS, str]] = {}
    out = []
    for ty in types:
        name = ty.ident()
        decl = ty.decl()
        if name in by_name:
            if by_name[name][1] != decl:
                raise ExportError(f"Conflicting declarations of {name} in {location}")
            continue
        by_name[name] = (ty, decl)
        out.append(ty)
    return out


def collect_imports(location: PurePosixPath, types: list[TS], *, esm: bool) -> list[ImportEntry]:
    """One import per other location, sorted by path, names sorted."""
    names: dict[PurePosixPath, set[str]] = {}
    for ty in types:
        for dep in ty.generic_form().dependencies():
            dep_location = normalize_location(dep.output_path)
            if dep_location == location:
                continue
            names.setdefault(dep_location, set()).add(dep.ts_name)
    entries = [ImportEntry(import_path(location, dep_location, esm=esm), sorted(ns)) for dep_location, ns in names.items()]
    return sorted(entries, key=lambda entry: entry.path)


def render_file(location: PurePosixPath, types: list[TS], config: ExportConfig) -> str:
    """Render the content of the file at `location` declaring `types`."""
    location = normalize_location(location)
    declared = unique_declarations(location, types)
    generator = getattr(declared[0], "crate", DEFAULT_GENERATOR) if declared else DEFAULT_GENERATOR
    return file_template.render(
        generator=generator,
        imports=collect_imports(location, declared, esm=config.import_esm),
        declarations=[DeclarationEntry(format_docs(ty.docs), ty.decl()) for ty in declared],
    )


def write_file(target: Path, content: str, config: ExportConfig) -> Path:
    """Write `content` to `target`, creating parent directories, then format it if enabled.

    Raises:
        FormattingError: If formatting fails; the unformatted file stays in place
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        f.write(content)
    logger.debug("Wrote %s", target)
    if config.format:
        DprintFormatter(config.formatter).format_file(target)
        logger.debug("Formatted %s", target)
    return target
