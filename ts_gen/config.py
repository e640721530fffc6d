"""
Configuration for deriving and exporting TypeScript declarations.

Defaults can be overridden from the environment (`ExportConfig.from_env`) or
from a JSON configuration file (`ExportConfig.from_dict`). `use_config` makes a
config the default for `derive` and export within a block.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError

DEFAULT_EXPORT_DIR = "./bindings"

ENV_EXPORT_DIR = "TS_GEN_EXPORT_DIR"
ENV_NO_SERDE_WARNINGS = "TS_GEN_NO_SERDE_WARNINGS"
ENV_IMPORT_ESM = "TS_GEN_IMPORT_ESM"
ENV_FORMAT = "TS_GEN_FORMAT"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass
class FormatterConfig:
    """Configuration for the external TypeScript formatter."""

    # Executable and arguments; the file path is appended
    command: list[str] = field(default_factory=lambda: ["dprint", "fmt", "--stdin"])

    # dprint configuration file, None uses dprint's own lookup
    config_file: str | None = None

    # Seconds before the formatter is considered hung
    timeout: float = 30.0


@dataclass
class ExportConfig:
    """Configuration options for derivation and export."""

    # Base directory of the generated files
    export_dir: str = DEFAULT_EXPORT_DIR

    # Whether serde attributes are read at all
    serde_compat: bool = True

    # Drop the diagnostics of serde attributes that failed to parse
    no_serde_warnings: bool = False

    # Add a `.js` suffix to import paths, for ES modules
    import_esm: bool = False

    # Run the formatter on every generated file
    format: bool = False

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    @property
    def export_path(self) -> Path:
        return Path(self.export_dir)

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ExportConfig:
        """Create a config from the `TS_GEN_*` environment variables."""
        env = os.environ if env is None else env
        return ExportConfig(
            export_dir=env.get(ENV_EXPORT_DIR) or DEFAULT_EXPORT_DIR,
            no_serde_warnings=_env_flag(env, ENV_NO_SERDE_WARNINGS),
            import_esm=_env_flag(env, ENV_IMPORT_ESM),
            format=_env_flag(env, ENV_FORMAT),
        )

    @staticmethod
    def from_dict(d: dict, base: ExportConfig | None = None) -> ExportConfig:
        """Create a config from a dictionary, on top of a copy of `base` if given.

        Raises:
            ConfigError: If `formatter` is not a mapping
        """
        base = base if base is not None else ExportConfig()
        config = dataclasses.replace(base, formatter=dataclasses.replace(base.formatter))
        for k, v in d.items():
            if k == "formatter":
                if not isinstance(v, dict):
                    raise ConfigError(f"`formatter` must be an object, got {type(v).__name__}")
                config.formatter = FormatterConfig(**v)
            elif hasattr(config, k) and k != "export_path":
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "export_dir": self.export_dir,
            "serde_compat": self.serde_compat,
            "no_serde_warnings": self.no_serde_warnings,
            "import_esm": self.import_esm,
            "format": self.format,
            "formatter": {
                "command": list(self.formatter.command),
                "config_file": self.formatter.config_file,
                "timeout": self.formatter.timeout,
            },
        }


_active_config: ExportConfig | None = None


def default_config() -> ExportConfig:
    """The config used when none is given: the active one, else the environment's."""
    if _active_config is not None:
        return _active_config
    return ExportConfig.from_env()


@contextmanager
def use_config(config: ExportConfig) -> Iterator[ExportConfig]:
    """Make `config` the default for `derive` and export within the block.

    Modules loaded by the command line derive their types at import time,
    so the configuration has to be in place before they are imported.
    """
    global _active_config
    previous = _active_config
    _active_config = config
    try:
        yield config
    finally:
        _active_config = previous
