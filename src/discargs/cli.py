"""Shared CLI utilities for discargs commands.

Provides common Typer options, config-loading helpers and standardised
output / error helpers so every command gets the same ``--dialect``
handling, error reporting and JSON output.

Usage in a command module::

    import typer
    from discargs.cli import DialectOption, error_exit, json_print, resolve_dialect

    app = typer.Typer()

    @app.command()
    def main(dialect: str | None = DialectOption) -> None:
        d = resolve_dialect(dialect)
        ...
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console

from discargs.config import ToolConfig, load_config
from discargs.dialect import Dialect
from discargs.dialects import get_dialect

# Re-usable Typer option for --dialect
DialectOption: str | None = typer.Option(
    None,
    "--dialect",
    "-d",
    help="Backend dialect: creator, chef, redumper or dd (default: from discargs.toml).",
)

JsonOption: bool = typer.Option(False, "--json", help="Output as JSON.")


def get_config() -> ToolConfig:
    """Load discargs.toml, exiting with a message if it is unusable."""
    try:
        return load_config()
    except KeyError as exc:
        error_exit(f"discargs.toml: {exc.args[0]}")


def resolve_dialect(
    name: str | None, cfg: ToolConfig | None = None, *, json_mode: bool = False
) -> Dialect:
    """Return the dialect named on the command line, or the configured one."""
    if name is None:
        name = (cfg or get_config()).dialect
    try:
        return get_dialect(name)
    except KeyError as exc:
        error_exit(exc.args[0], json_mode=json_mode)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {msg}")
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))
