"""parse_cli.py – Validate and normalise a backend argument string.

Parses the string under a dialect, then regenerates it, so the output is the
canonical spelling of the same invocation (long flag names, decimal
integers, lowercase booleans, quoted paths).
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from discargs.cli import DialectOption, JsonOption, error_exit, json_print, resolve_dialect
from discargs.params import ParameterSet
from discargs.parser import parse


def _render(console: Console, params: ParameterSet) -> None:
    dialect = params.dialect
    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Kind", style="dim")
    tbl.add_column("Name", style="cyan")
    tbl.add_column("Value")

    tbl.add_row("command", dialect.command_spelling(params.command), params.command.name)
    for spec in dialect.flags:
        if not params.is_present(spec.key):
            continue
        value = params.value(spec.key)
        shown = "" if value is None else str(value)
        tbl.add_row("flag", spec.name, shown)
    for name, value in params.positionals.items():
        tbl.add_row("positional", name, str(value))

    console.print(tbl)
    if params.is_dumping_command():
        console.print(f"[green]dumping command[/green] ({dialect.tool})")


app = typer.Typer(
    help="Validate and normalise a backend argument string.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

discargs parse 'cd D "out.bin" 48 /c2 20'            DiscImageCreator line

discargs parse -d chef 'media dump --force true "\\\\?\\D:" "out.aaruf"'

discargs parse -d redumper 'disc --drive=D: --retries=20' --explain

discargs parse -d chef -- '--debug true media info "\\\\?\\D:"'

[dim]Put -- before a string that starts with a flag.
Exit status 1 when the string is not valid for the dialect.[/dim]""",
)


@app.command()
def main(
    arguments: str = typer.Argument(..., help="Argument string, without the executable."),
    dialect: str | None = DialectOption,
    json_output: bool = JsonOption,
    explain: bool = typer.Option(False, "--explain", help="Show the decoded flags as a table."),
) -> None:
    """Parse ARGUMENTS and print the normalised form."""
    d = resolve_dialect(dialect, json_mode=json_output)
    params = parse(d, arguments)
    if params is None:
        error_exit(f"not a valid {d.tool} argument string", json_mode=json_output)

    normalised = params.generate_parameters()
    if normalised is None:
        error_exit(f"parsed, but cannot regenerate a {d.tool} line", json_mode=json_output)

    if json_output:
        data = params.to_dict()
        data["arguments"] = normalised
        json_print(data)
        return

    if explain:
        _render(Console(stderr=True), params)
    typer.echo(normalised)


def main_entry() -> None:
    """Run the parse CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
