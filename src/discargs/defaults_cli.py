"""defaults_cli.py – Print the default dump command for a disc.

Combines the command-line preferences with ``discargs.toml`` (engine
defaults and per-dialect options) and prints the executable followed by the
derived argument string.
"""

from __future__ import annotations

import typer

from discargs.cli import (
    DialectOption,
    JsonOption,
    error_exit,
    get_config,
    json_print,
    resolve_dialect,
)
from discargs.defaults import derive_defaults
from discargs.systems import (
    get_valid_media_types,
    is_valid_combination,
    parse_media_type,
    parse_system,
)

app = typer.Typer(
    help="Derive default dump parameters for a system and media type.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

discargs defaults -s IBMPCCompatible -m CDROM --drive D --file out.bin --speed 48

discargs defaults -d chef -s SonyPlayStation2 -m DVD --drive E --file ps2/game.iso

discargs defaults -d redumper -s SegaDreamcast -m CDROM --drive D: --file dc/game --json

[dim]--speed, --retry and --paranoid default to the [engine] table of
discargs.toml; dialect options come from [dialects.<name>].[/dim]""",
)


@app.command()
def main(
    system: str = typer.Option(..., "--system", "-s", help="Known system, e.g. SonyPlayStation."),
    media: str = typer.Option(..., "--media", "-m", help="Media type, e.g. CDROM, DVD, GDROM."),
    drive: str = typer.Option(..., "--drive", help="Drive letter or device path."),
    filename: str = typer.Option(..., "--file", help="Output image path."),
    speed: int | None = typer.Option(None, "--speed", help="Drive speed (default: config)."),
    retry: int | None = typer.Option(
        None, "--retry", help="Reread count: -1 disables, 0 uses the dialect fallback."
    ),
    paranoid: bool | None = typer.Option(
        None, "--paranoid/--no-paranoid", help="Extra protection scanning and diagnostics."
    ),
    dialect: str | None = DialectOption,
    json_output: bool = JsonOption,
) -> None:
    """Print the executable and default arguments for dumping a disc."""
    cfg = get_config()
    d = resolve_dialect(dialect, cfg, json_mode=json_output)

    known = parse_system(system)
    if known is None:
        error_exit(f"unknown system {system!r}", json_mode=json_output)
    media_type = parse_media_type(media)
    if media_type is None:
        error_exit(f"unknown media type {media!r}", json_mode=json_output)

    params = derive_defaults(
        d,
        known,
        media_type,
        drive,
        filename,
        speed=speed if speed is not None else cfg.speed,
        paranoid=paranoid if paranoid is not None else cfg.paranoid,
        retry_count=retry if retry is not None else cfg.retry_count,
        options=cfg.options(d.name),
    )

    line = params.generate_parameters()
    if line is None:
        if is_valid_combination(known, media_type):
            error_exit(
                f"no usable {d.tool} parameters for {known.name} on {media_type.name} "
                "(check speed, retry count and drive)",
                json_mode=json_output,
            )
        valid = ", ".join(m.name for m in get_valid_media_types(known))
        error_exit(
            f"no {d.tool} parameters for {known.name} on {media_type.name} (valid media: {valid})",
            json_mode=json_output,
        )

    executable = cfg.executable(d.name)
    if json_output:
        data = params.to_dict()
        data["executable"] = executable
        data["arguments"] = line
        json_print(data)
        return
    typer.echo(f"{executable} {line}")


def main_entry() -> None:
    """Run the defaults CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
