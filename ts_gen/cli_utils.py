"""
CLI utilities for command line reconstruction and module loading.
"""

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import click

PROGRAM = "ts_gen"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        return PROGRAM

    if not cli_args:
        return PROGRAM

    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        if isinstance(param, click.Argument):
            values = value if isinstance(value, (list, tuple)) else [value]
            arguments.extend(str(v) for v in values)
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, Path(str(value)).name if isinstance(value, (str, Path)) else str(value)])

    return " ".join([PROGRAM, *arguments, *options])


def load_module(target: str) -> ModuleType:
    """Import a module by dotted name, or load it from a `.py` file path.

    Raises:
        click.ClickException: If the module cannot be found
    """
    if target.endswith(".py"):
        path = Path(target).resolve()
        if not path.is_file():
            raise click.ClickException(f"No such file: {target}")
        name = f"_ts_gen_{path.stem}_{abs(hash(str(path)))}"
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        spec.loader.exec_module(module)
        return module
    try:
        return importlib.import_module(target)
    except ModuleNotFoundError as e:
        raise click.ClickException(f"Cannot import {target}: {e}") from e
