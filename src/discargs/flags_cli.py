"""flags_cli.py – Show a dialect's commands, flags and support table."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from discargs.cli import DialectOption, JsonOption, error_exit, json_print, resolve_dialect
from discargs.codec import ValueType
from discargs.dialect import Dialect, FlagSpec


def _arity(spec: FlagSpec) -> str:
    if spec.value_type is ValueType.PRESENCE:
        return ""
    lo = 0 if spec.optional_value else 1
    if spec.max_values == lo:
        return str(lo)
    return f"{lo}..{spec.max_values}"


def _command_label(dialect: Dialect, command: Any) -> str:
    if command == dialect.none:
        return "(global)"
    return dialect.command_spelling(command) or "(default)"


def describe(dialect: Dialect, command: Any = None) -> dict[str, Any]:
    """Vocabulary of *dialect*, restricted to *command* when given."""
    flags = dialect.flags_for(command) if command is not None else dialect.flags
    commands = (
        [dialect.command_spec(command)] if command is not None else list(dialect.commands)
    )
    return {
        "dialect": dialect.name,
        "tool": dialect.tool,
        "commands": [
            {
                "name": c.key.name,
                "spelling": c.text,
                "positionals": [p.name for p in c.positionals],
                "dumping": c.dumping,
            }
            for c in commands
            if c is not None
        ],
        "flags": [
            {
                "name": f.key.name,
                "long": f.long,
                "short": f.short,
                "type": f.value_type.value,
                "values": _arity(f),
                "required": f.required,
                "commands": sorted(
                    _command_label(dialect, c)
                    for c in dialect.supported_commands(f.key)
                ),
            }
            for f in flags
        ],
    }


app = typer.Typer(
    help="Show a dialect's commands and which flags each command accepts.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

discargs flags                          Every flag of the configured dialect

discargs flags -d chef -c "media dump"  Flags accepted by one command

discargs flags -d redumper --json       Machine-readable vocabulary""",
)


@app.command()
def main(
    command: str | None = typer.Option(None, "--command", "-c", help="Only this command."),
    dialect: str | None = DialectOption,
    json_output: bool = JsonOption,
) -> None:
    """List commands and flags."""
    d = resolve_dialect(dialect, json_mode=json_output)
    key = None
    if command is not None:
        key = d.command_by_name(command)
        if key is None:
            error_exit(f"unknown {d.tool} command {command!r}", json_mode=json_output)

    data = describe(d, key)
    if json_output:
        json_print(data)
        return

    console = Console()
    cmd_tbl = Table(title=f"{d.tool} commands", header_style="bold", box=None, padding=(0, 2))
    cmd_tbl.add_column("Command", style="cyan")
    cmd_tbl.add_column("Positionals")
    cmd_tbl.add_column("Dump", justify="center")
    for c in data["commands"]:
        cmd_tbl.add_row(c["spelling"] or "(default)", " ".join(c["positionals"]), "✓" if c["dumping"] else "")
    console.print(cmd_tbl)
    console.print()

    flag_tbl = Table(title=f"{d.tool} flags", header_style="bold", box=None, padding=(0, 2))
    flag_tbl.add_column("Flag", style="cyan")
    flag_tbl.add_column("Short")
    flag_tbl.add_column("Type", style="dim")
    flag_tbl.add_column("Values", justify="right")
    flag_tbl.add_column("Commands")
    for f in data["flags"]:
        flag_tbl.add_row(
            f["long"], f["short"] or "", f["type"], f["values"], ", ".join(f["commands"])
        )
    console.print(flag_tbl)


def main_entry() -> None:
    """Run the flags CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
