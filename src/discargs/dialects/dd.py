"""dd.py – dd for Windows command-line dialect.

Grammar::

    [--list] [--flag | name=value]...

Dumping is the unnamed default operation; ``--list`` only enumerates
devices and takes no flags.  A dump needs both ``if=`` and ``of=``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from discargs.codec import ValueType
from discargs.dialect import CommandSpec, Dialect, FlagSpec, support_table
from discargs.systems import KnownSystem, MediaType


class Command(Enum):
    NONE = "none"
    Dump = ""
    List = "--list"


class Flag(Enum):
    Progress = "--progress"
    Size = "--size"
    BlockSize = "bs"
    Count = "count"
    Seek = "seek"
    Skip = "skip"
    Filter = "--filter"
    InputFile = "if"
    OutputFile = "of"


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(Command.Dump, (), dumping=True, description="Copy a device to a file"),
    CommandSpec(Command.List, ("--list",), description="List devices"),
)

_I64 = ValueType.INT64

FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec(Flag.Progress, Flag.Progress.value, description="Show progress"),
    FlagSpec(Flag.Size, Flag.Size.value, description="Show the device size"),
    FlagSpec(Flag.BlockSize, "bs", _I64, description="Block size in bytes"),
    FlagSpec(Flag.Count, "count", _I64, description="Number of blocks to copy"),
    FlagSpec(Flag.Seek, "seek", _I64, description="Blocks to skip in the output"),
    FlagSpec(Flag.Skip, "skip", _I64, description="Blocks to skip in the input"),
    FlagSpec(Flag.Filter, "--filter", ValueType.STRING,
             choices=("fixed", "removable", "disk", "partition"),
             description="Device class shown by --list"),
    FlagSpec(Flag.InputFile, "if", ValueType.STRING, quoted=True, required=True,
             description="Input device or file"),
    FlagSpec(Flag.OutputFile, "of", ValueType.STRING, quoted=True, required=True,
             description="Output file"),
)

SUPPORT = support_table({flag: (Command.Dump,) for flag in Flag})


# ---------------------------------------------------------------------------
# Default parameters
# ---------------------------------------------------------------------------

FLOPPY_BLOCK_SIZE = 1440 * 1024
DEFAULT_BLOCK_SIZE = 1024**3

_DRIVE_LETTER_RE = re.compile(r"([A-Za-z]):?\\?")


def device_path(drive: str) -> str:
    """Map a bare drive letter to the Windows volume path dd reads."""
    m = _DRIVE_LETTER_RE.fullmatch(drive)
    if m:
        return f"\\\\.\\{m.group(1).upper()}:"
    return drive


def derive(
    params: Any,
    *,
    system: KnownSystem | None,
    media_type: MediaType | None,
    drive: str,
    filename: str,
    speed: int | None,
    paranoid: bool,
    reread: int | None,
    options: dict[str, Any],
) -> None:
    # dd has no speed or retry control; those arguments are ignored.
    params.command = Command.Dump
    if drive:
        params.set_flag(Flag.InputFile, device_path(drive))
    if filename:
        params.set_flag(Flag.OutputFile, filename)

    block_size = options.get("block_size")
    if block_size is None:
        block_size = FLOPPY_BLOCK_SIZE if media_type is MediaType.FloppyDisk else DEFAULT_BLOCK_SIZE
    params.set_flag(Flag.BlockSize, block_size)

    params.enable(Flag.Progress)
    params.enable(Flag.Size)


DIALECT = Dialect(
    name="dd",
    tool="dd",
    none=Command.NONE,
    commands=COMMANDS,
    flags=FLAGS,
    support=SUPPORT,
    flag_prefix="-",
    use_equals=True,
    accepts_equals=True,
    executable="dd.exe",
    input_fields=(Flag.InputFile,),
    output_fields=(Flag.OutputFile,),
    default_command=Command.Dump,
    deriver=derive,
)
