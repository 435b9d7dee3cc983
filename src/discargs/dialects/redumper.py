"""redumper.py – redumper command-line dialect.

Grammar::

    <mode> [--flag | --flag=value]...

There are no positional arguments; the drive and output location are flags.
Every flag is accepted by every mode.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from discargs.codec import ValueType
from discargs.dialect import CommandSpec, Dialect, FlagSpec, support_table
from discargs.systems import KnownSystem, MediaType


class Command(Enum):
    NONE = ""
    Disc = "disc"
    CD = "cd"
    DVD = "dvd"
    BluRay = "bd"
    SACD = "sacd"
    Rings = "rings"
    Dump = "dump"
    DumpExtra = "dumpextra"
    Refine = "refine"
    Verify = "verify"
    DVDKey = "dvdkey"
    DVDIsoKey = "dvdisokey"
    Protection = "protection"
    Split = "split"
    Hash = "hash"
    Info = "info"
    Skeleton = "skeleton"
    Eject = "eject"


class Flag(Enum):
    # General
    Help = "--help"
    Version = "--version"
    Verbose = "--verbose"
    Continue = "--continue"
    AutoEject = "--auto-eject"
    Skeleton = "--skeleton"
    Debug = "--debug"
    DiscType = "--disc-type"
    Drive = "--drive"
    Speed = "--speed"
    Retries = "--retries"
    ImagePath = "--image-path"
    ImageName = "--image-name"
    Overwrite = "--overwrite"

    # Drive configuration
    DriveType = "--drive-type"
    DriveReadOffset = "--drive-read-offset"
    DriveC2Shift = "--drive-c2-shift"
    DrivePregapStart = "--drive-pregap-start"
    DriveReadMethod = "--drive-read-method"
    DriveSectorOrder = "--drive-sector-order"

    # Drive specific
    PlextorSkipLeadin = "--plextor-skip-leadin"
    PlextorLeadinRetries = "--plextor-leadin-retries"
    PlextorLeadinForceStore = "--plextor-leadin-force-store"
    AsusSkipLeadout = "--asus-skip-leadout"
    AsusLeadoutRetries = "--asus-leadout-retries"

    # Offset
    ForceOffset = "--force-offset"
    AudioSilenceThreshold = "--audio-silence-threshold"
    CorrectOffsetShift = "--correct-offset-shift"
    OffsetShiftRelocate = "--offset-shift-relocate"

    # Split
    ForceSplit = "--force-split"
    LeaveUnchanged = "--leave-unchanged"
    ForceQTOC = "--force-qtoc"
    SkipFill = "--skip-fill"
    ISO9660Trim = "--iso9660-trim"

    # Miscellaneous
    LBAStart = "--lba-start"
    LBAEnd = "--lba-end"
    RefineSubchannel = "--refine-subchannel"
    Skip = "--skip"
    DumpWriteOffset = "--dump-write-offset"
    DumpReadSize = "--dump-read-size"
    OverreadLeadout = "--overread-leadout"
    ForceUnscrambled = "--force-unscrambled"
    ForceRefine = "--force-refine"
    LegacySubs = "--legacy-subs"
    DisableCDText = "--disable-cdtext"
    SkipSubcodeDesync = "--skip-subcode-desync"
    DriveTestSkipPlextorLeadin = "--drive-test-skip-plextor-leadin"
    DriveTestSkipCacheRead = "--drive-test-skip-cache-read"


_DUMPING = {Command.Disc, Command.CD, Command.DVD, Command.BluRay, Command.SACD}

COMMANDS: tuple[CommandSpec, ...] = tuple(
    CommandSpec(key, (key.value,), dumping=key in _DUMPING)
    for key in Command
    if key is not Command.NONE
)

_I32 = ValueType.INT32
_STR = ValueType.STRING

# Flags that carry a value; everything else is a bare switch.
_VALUE_TYPES: dict[Flag, ValueType] = {
    Flag.Continue: _STR,
    Flag.DiscType: _STR,
    Flag.Drive: _STR,
    Flag.Speed: _I32,
    Flag.Retries: _I32,
    Flag.ImagePath: _STR,
    Flag.ImageName: _STR,
    Flag.DriveType: _STR,
    Flag.DriveReadOffset: _I32,
    Flag.DriveC2Shift: _I32,
    Flag.DrivePregapStart: _I32,
    Flag.DriveReadMethod: _STR,
    Flag.DriveSectorOrder: _STR,
    Flag.PlextorLeadinRetries: _I32,
    Flag.AsusLeadoutRetries: _I32,
    Flag.ForceOffset: _I32,
    Flag.AudioSilenceThreshold: _I32,
    Flag.SkipFill: ValueType.UINT8,
    Flag.LBAStart: _I32,
    Flag.LBAEnd: _I32,
    Flag.Skip: _STR,
    Flag.DumpWriteOffset: _I32,
    Flag.DumpReadSize: _I32,
}

_QUOTED = {Flag.ImagePath, Flag.ImageName}
_SHORTS = {Flag.Help: "-h"}

FLAGS: tuple[FlagSpec, ...] = tuple(
    FlagSpec(
        key,
        key.value,
        _VALUE_TYPES.get(key, ValueType.PRESENCE),
        short=_SHORTS.get(key),
        quoted=key in _QUOTED,
    )
    for key in Flag
)

_MODES = tuple(c.key for c in COMMANDS)
SUPPORT = support_table({flag: _MODES for flag in Flag})


# ---------------------------------------------------------------------------
# Default parameters
# ---------------------------------------------------------------------------

_DISC_MEDIA = {
    MediaType.CDROM,
    MediaType.DVD,
    MediaType.NintendoGameCubeGameDisc,
    MediaType.NintendoWiiOpticalDisc,
    MediaType.HDDVD,
    MediaType.BluRay,
    MediaType.NintendoWiiUOpticalDisc,
}


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


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
    if media_type not in _DISC_MEDIA:
        params.command = Command.NONE
        return
    params.command = Command.Disc

    if drive:
        params.set_flag(Flag.Drive, drive)
    if speed is not None and speed > 0:
        params.set_flag(Flag.Speed, speed)

    if _truthy(options.get("verbose", True)) or paranoid:
        params.enable(Flag.Verbose)
    if _truthy(options.get("debug", False)) or paranoid:
        params.enable(Flag.Debug)

    for option, flag in (
        ("read_method", Flag.DriveReadMethod),
        ("sector_order", Flag.DriveSectorOrder),
        ("drive_type", Flag.DriveType),
    ):
        value = options.get(option)
        if value and str(value).upper() != "NONE":
            params.set_flag(flag, str(value))

    if filename:
        image_path = os.path.dirname(filename)
        if image_path:
            params.set_flag(Flag.ImagePath, image_path)
        image_name = os.path.splitext(os.path.basename(filename))[0]
        if image_name:
            params.set_flag(Flag.ImageName, image_name)

    if reread is not None:
        params.set_flag(Flag.Retries, reread)

    leadin = options.get("leadin_retry_count")
    if leadin is not None:
        params.set_flag(Flag.PlextorLeadinRetries, int(leadin))


DIALECT = Dialect(
    name="redumper",
    tool="redumper",
    none=Command.NONE,
    commands=COMMANDS,
    flags=FLAGS,
    support=SUPPORT,
    flag_prefix="-",
    use_equals=True,
    accepts_equals=True,
    executable="redumper.exe",
    input_fields=(Flag.Drive,),
    output_fields=(Flag.ImagePath, Flag.ImageName),
    speed_field=Flag.Speed,
    deriver=derive,
)
