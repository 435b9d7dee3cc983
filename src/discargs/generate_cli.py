"""generate_cli.py – Build a backend argument string from named parts.

Flags are given by spelling (``/c2``, ``--retry-passes``) or by name
(``C2Opcode``); values are decoded with the same codec the parser uses, so
``--flag C2Opcode=0x14`` and ``--flag /c2=20`` mean the same thing.  Flags
that take several values separate them with commas.
"""

from __future__ import annotations

import typer

from discargs.cli import DialectOption, JsonOption, error_exit, json_print, resolve_dialect
from discargs.codec import MISSING, decode
from discargs.dialect import CommandSpec, Dialect
from discargs.params import ParameterSet


def _apply_flag(params: ParameterSet, item: str, *, json_mode: bool) -> None:
    dialect = params.dialect
    name, sep, raw = item.partition("=")
    key = dialect.flag_by_name(name)
    known = dialect.flag_spec(key) if key is not None else None
    if known is None:
        error_exit(f"unknown {dialect.tool} flag {name!r}", json_mode=json_mode)

    # A spelling shared by several flags means the one this command supports.
    spec, supported = dialect.match_flag(name, params.command)
    if spec is None:
        spec = known
        supported = dialect.is_supported(known.key, params.command)
    if not supported:
        error_exit(
            f"{spec.name} is not supported by {dialect.command_spelling(params.command)!r}",
            json_mode=json_mode,
        )

    if not sep:
        try:
            params.set_flag(spec.key)
        except TypeError as exc:
            error_exit(str(exc), json_mode=json_mode)
        return

    values = []
    for part in raw.split(",") if spec.multi else [raw]:
        value = decode(
            spec.value_type,
            part,
            bounds=spec.bounds,
            bool_syntax=dialect.bool_syntax,
            choices=spec.choices,
        )
        if value is None or value is MISSING:
            error_exit(f"invalid value {part!r} for {spec.name}", json_mode=json_mode)
        values.append(value)

    try:
        params.set_flag(spec.key, tuple(values) if spec.multi else values[0])
    except TypeError as exc:
        error_exit(str(exc), json_mode=json_mode)


def _apply_positional(
    params: ParameterSet, command: CommandSpec, item: str, *, json_mode: bool
) -> None:
    name, sep, raw = item.partition("=")
    pos = next((p for p in command.positionals if p.name == name), None)
    if not sep or pos is None:
        names = ", ".join(p.name for p in command.positionals) or "none"
        error_exit(
            f"expected NAME=VALUE with NAME one of: {names}", json_mode=json_mode
        )
    value = decode(pos.value_type, raw, bounds=pos.bounds)
    if value is None or value is MISSING:
        error_exit(f"invalid value {raw!r} for {name}", json_mode=json_mode)
    params.set_positional(name, value)  # type: ignore[arg-type]


def build(
    dialect: Dialect,
    command: str,
    flags: list[str],
    positionals: list[str],
    *,
    json_mode: bool = False,
) -> ParameterSet:
    """Assemble a ParameterSet from CLI-style ``NAME=VALUE`` items."""
    params = ParameterSet(dialect)
    key = dialect.command_by_name(command)
    spec = dialect.command_spec(key) if key is not None else None
    if spec is None:
        error_exit(f"unknown {dialect.tool} command {command!r}", json_mode=json_mode)
    params.command = spec.key
    for item in flags:
        _apply_flag(params, item, json_mode=json_mode)
    for item in positionals:
        _apply_positional(params, spec, item, json_mode=json_mode)
    return params


app = typer.Typer(
    help="Build a backend argument string from a command, flags and positionals.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

discargs generate cd -p drive=D -p filename=out.bin -p speed=48 -f /c2=20

discargs generate -d chef "media dump" -f Force=true -f Speed=8 -p input=D: -p output=x.aaruf

discargs generate -d redumper disc -f Drive=E: -f Verbose

[dim]Exit status 1 when the parts do not form a valid line.[/dim]""",
)


@app.command()
def main(
    command: str = typer.Argument(..., help="Command spelling (e.g. 'cd', 'media dump') or name."),
    flag: list[str] = typer.Option(
        [], "--flag", "-f", help="Flag as NAME or NAME=VALUE; repeatable."
    ),
    positional: list[str] = typer.Option(
        [], "--pos", "-p", help="Positional argument as NAME=VALUE; repeatable."
    ),
    dialect: str | None = DialectOption,
    json_output: bool = JsonOption,
) -> None:
    """Generate the argument string for COMMAND."""
    d = resolve_dialect(dialect, json_mode=json_output)
    params = build(d, command, flag, positional, json_mode=json_output)

    line = params.generate_parameters()
    if line is None:
        error_exit(
            f"incomplete or inconsistent {d.tool} parameters "
            "(missing positional or wrong number of values)",
            json_mode=json_output,
        )

    if json_output:
        data = params.to_dict()
        data["arguments"] = line
        json_print(data)
        return
    typer.echo(line)


def main_entry() -> None:
    """Run the generate CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
