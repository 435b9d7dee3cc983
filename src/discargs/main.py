"""main.py – Umbrella CLI entry point for discargs.

Imports and registers every subcommand typer app.  Single-command modules
are registered as flat ``app.command()`` entries; multi-command modules
(currently only ``cfg``) use ``add_typer()``.
"""

import importlib

import typer

app = typer.Typer(
    help="Generate, parse and derive command lines for disc-imaging tools.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  discargs cfg init                      Create discargs.toml in this directory
  discargs defaults -s PhilipsCDi -m CDROM --drive D --file cdi/game.bin
  discargs parse 'cd D "out.bin" 8 /c2 20 /nl'
  discargs flags -d chef -c "media dump"

[dim]Dialects: creator (DiscImageCreator), chef (DiscImageChef/Aaru), redumper, dd.
Run 'discargs <cmd> --help' for details.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

# Single-command modules – registered as flat commands via app.command().
_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("generate", "discargs.generate_cli", "Build an argument string from named parts."),
    ("parse", "discargs.parse_cli", "Validate and normalise an argument string."),
    ("defaults", "discargs.defaults_cli", "Derive default dump parameters for a disc."),
    ("flags", "discargs.flags_cli", "Show commands, flags and the support table."),
]

# Multi-command modules – registered as groups via app.add_typer().
_MULTI_COMMANDS: list[tuple[str, str, str]] = [
    ("cfg", "discargs.cfg", "Read and edit discargs.toml programmatically."),
]

for _name, _module, _help in _SINGLE_COMMANDS:
    _mod = importlib.import_module(_module)
    _epilog = getattr(_mod.app.info, "epilog", None)
    if not isinstance(_epilog, str):
        _epilog = None
    app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)

for _name, _module, _help in _MULTI_COMMANDS:
    _mod = importlib.import_module(_module)
    app.add_typer(_mod.app, name=_name, help=_help)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
