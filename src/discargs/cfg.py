"""discargs cfg: Programmatic editor for discargs.toml.

Uses tomlkit for format-preserving round-trip editing (comments,
ordering, and whitespace are retained).

Usage::

    discargs cfg init
    discargs cfg path
    discargs cfg show [KEY]
    discargs cfg set engine.dialect redumper
    discargs cfg set dialects.creator.quiet true
"""

import contextlib
from pathlib import Path

import tomlkit
import typer

from discargs.config import CONFIG_NAME, default_toml, find_root
from discargs.dialects import get_dialect

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_root() -> Path:
    root = find_root()
    if root is None:
        typer.secho(
            f"Error: Could not find {CONFIG_NAME} in any parent directory.\n"
            "Run 'discargs cfg init' to create one here.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    return root


def _load_toml(root: Path | None = None) -> tuple[tomlkit.TOMLDocument, Path]:
    """Load discargs.toml as a tomlkit document, preserving formatting."""
    if root is None:
        root = _require_root()
    toml_path = root / CONFIG_NAME
    doc = tomlkit.parse(toml_path.read_text(encoding="utf-8"))
    return doc, toml_path


def _save_toml(doc: tomlkit.TOMLDocument, path: Path) -> None:
    """Write tomlkit document back, preserving formatting."""
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def _coerce(value: str) -> str | int | float | bool:
    """Turn a command-line string into the TOML scalar it looks like."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    with contextlib.suppress(ValueError):
        return int(value, 16) if value.startswith(("0x", "0X")) else int(value)
    with contextlib.suppress(ValueError):
        return float(value)
    return value


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Read and edit discargs.toml programmatically.",
    rich_markup_mode="rich",
)


@app.command("init")
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Create discargs.toml in the current directory."""
    toml_path = Path.cwd() / CONFIG_NAME
    if toml_path.exists() and not force:
        typer.secho(
            f"Error: {toml_path} already exists (use --force to overwrite).",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    toml_path.write_text(default_toml(), encoding="utf-8")
    typer.secho(f"Wrote {toml_path}", fg=typer.colors.GREEN)


@app.command("path")
def path() -> None:
    """Print the location of the discargs.toml in effect."""
    typer.echo(str(_require_root() / CONFIG_NAME))


@app.command("show")
def show(
    key: str | None = typer.Argument(
        None, help="Dot-separated key to show, e.g. 'engine.dialect'"
    ),
) -> None:
    """Show the current config, or a specific key."""
    doc, _ = _load_toml()

    if key is None:
        typer.echo(tomlkit.dumps(doc))
        return

    current = doc
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            typer.secho(f"Key '{key}' not found.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    if isinstance(current, dict):
        typer.echo(tomlkit.dumps(current))
    else:
        typer.echo(str(current))


@app.command("set")
def set_value(
    key: str = typer.Argument(
        ..., help="Dot-separated key, e.g. 'engine.speed' or 'dialects.chef.executable'."
    ),
    value: str = typer.Argument(..., help="Value to set."),
) -> None:
    """Set a scalar config key."""
    doc, toml_path = _load_toml()

    parts = key.split(".")
    if len(parts) >= 2 and parts[0] == "dialects":
        try:
            get_dialect(parts[1])
        except KeyError as exc:
            typer.secho(f"Error: {exc.args[0]}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from None

    current = doc
    for part in parts[:-1]:
        if part not in current:
            current[part] = tomlkit.table()
        current = current[part]

    parsed_value = _coerce(value)
    current[parts[-1]] = parsed_value
    _save_toml(doc, toml_path)
    typer.secho(f"Set {key} = {parsed_value!r}", fg=typer.colors.GREEN)


def main_entry() -> None:
    """Run the cfg CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
