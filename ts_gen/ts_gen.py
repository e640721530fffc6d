import json

import click

from .cli_utils import load_module, reconstruct_command_line
from .config import ExportConfig, use_config
from .errors import TsGenError
from .export import DprintFormatter
from .logging import configure_logging
from .registry import default_registry, export_registered


@click.command()
@click.option("--out-dir", "-o", default=None, type=click.Path(file_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--no-warnings", is_flag=True, default=False, help="Do not report serde attributes that failed to parse")
@click.option("--esm-imports", is_flag=True, default=False, help="Add a .js suffix to import paths")
@click.option("--format", "format_", is_flag=True, default=False, help="Format the generated files with dprint")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("modules", nargs=-1, required=True)
def ts_gen(out_dir, config, no_warnings, esm_imports, format_, verbose, modules):
    """Export the TypeScript declarations of every exportable type derived by MODULES.

    MODULES are dotted module names or paths to `.py` files.
    """
    logger = configure_logging(verbose=verbose)
    logger.debug("Running: %s", reconstruct_command_line(ts_gen))

    export_config = ExportConfig.from_env()
    if config is not None:
        with open(config) as f:
            try:
                export_config = ExportConfig.from_dict(json.load(f), base=export_config)
            except (TsGenError, json.JSONDecodeError) as e:
                raise click.ClickException(f"Invalid config file {config}: {e}") from e

    # Flags override the config file
    if no_warnings:
        export_config.no_serde_warnings = True
    if esm_imports:
        export_config.import_esm = True
    if format_:
        export_config.format = True
    if out_dir is not None:
        export_config.export_dir = out_dir

    if export_config.format and not DprintFormatter(export_config.formatter).is_available():
        raise click.ClickException(f"Formatter {export_config.formatter.command[0]!r} is not available")

    try:
        # Types are derived while their modules are imported
        with use_config(export_config):
            for module in modules:
                load_module(module)

            for ty in default_registry:
                for diagnostic in ty.diagnostics:
                    logger.warning("%s: %s", ty.ident(), diagnostic)

            written = export_registered(config=export_config)
    except TsGenError as e:
        raise click.ClickException(str(e)) from e

    logger.info("Exported %d file(s) to %s", len(written), export_config.export_dir)
