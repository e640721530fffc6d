"""
Post-processing formatter for generated TypeScript.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..config import FormatterConfig
from ..errors import FormattingError


class DprintFormatter:
    """Formatter using the dprint executable."""

    def __init__(self, config: FormatterConfig | None = None):
        self.config = config or FormatterConfig()
        self._available = None

    def is_available(self) -> bool:
        """Check if dprint is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [self.config.command[0], "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def format(self, code: str, path: Path) -> str:
        """
        Format TypeScript code.

        Args:
            code: TypeScript source code to format
            path: Path of the file, used by dprint to pick a plugin

        Returns:
            Formatted code

        Raises:
            FormattingError: If dprint is missing, times out or fails
        """
        cmd = list(self.config.command)
        if self.config.config_file:
            cmd.extend(["--config", self.config.config_file])
        cmd.append(str(path))
        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as e:
            raise FormattingError(f"Formatter {cmd[0]!r} not found") from e
        except subprocess.SubprocessError as e:
            raise FormattingError(f"Formatting {path} failed: {e}") from e
        if result.returncode != 0:
            raise FormattingError(f"Formatting {path} failed: {result.stderr.strip()}")
        return result.stdout

    def format_file(self, path: Path) -> None:
        """Format the file at `path` in place. The file is left unchanged on failure."""
        code = path.read_text(encoding="utf-8")
        formatted = self.format(code, path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(formatted)
