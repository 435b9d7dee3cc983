"""creator.py – DiscImageCreator command-line dialect.

Grammar::

    <command> <drive> "<filename>" <speed> [<start> <end>] [/flag [values...]]...

Positional arguments come right after the command; flags are ``/x`` tokens
that may carry zero or more integer (or ``raw``/``pack``) values.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from discargs.codec import Bounds, ValueType
from discargs.dialect import CommandSpec, Dialect, FlagSpec, PositionalSpec, support_table
from discargs.systems import KnownSystem, MediaType


class Command(Enum):
    NONE = ""
    Audio = "audio"
    BluRay = "bd"
    Close = "close"
    CompactDisc = "cd"
    Data = "data"
    DigitalVideoDisc = "dvd"
    Disk = "disk"
    DriveSpeed = "ls"
    Eject = "eject"
    Floppy = "fd"
    GDROM = "gd"
    MDS = "mds"
    Merge = "merge"
    Reset = "reset"
    SACD = "sacd"
    Start = "start"
    Stop = "stop"
    Sub = "sub"
    Swap = "swap"
    Tape = "tape"
    XBOX = "xbox"
    XBOXSwap = "xboxswap"
    XGD2Swap = "xgd2swap"
    XGD3Swap = "xgd3swap"


class Flag(Enum):
    AddOffset = "/a"
    AMSF = "/p"
    AtariJaguar = "/aj"
    BEOpcode = "/be"
    C2Opcode = "/c2"
    CopyrightManagementInformation = "/c"
    D8Opcode = "/d8"
    DisableBeep = "/q"
    ExtractMicroSoftCabFile = "/mscf"
    Fix = "/fix"
    ForceUnitAccess = "/f"
    MultiSession = "/ms"
    NoFixSubP = "/np"
    NoFixSubQ = "/nq"
    NoFixSubQLibCrypt = "/nl"
    NoFixSubRtoW = "/nr"
    NoFixSubQSecuROM = "/ns"
    NoSkipSS = "/nss"
    Raw = "/raw"
    Resume = "/re"
    Reverse = "/r"
    ScanAntiMod = "/am"
    ScanFileProtect = "/sf"
    ScanSectorProtect = "/ss"
    SeventyFour = "/74"
    SkipSector = "/sk"
    SubchannelReadLevel = "/s"
    UseAnchorVolumeDescriptorPointer = "/avdp"
    VideoNow = "/vn"
    VideoNowColor = "/vnc"
    VideoNowXP = "/vnx"


# ---------------------------------------------------------------------------
# Commands and positional layouts
# ---------------------------------------------------------------------------

DRIVE_PATTERN = r"[A-Z]:?\\?"

_DRIVE = PositionalSpec("drive", pattern=DRIVE_PATTERN)
_FILENAME = PositionalSpec("filename", quoted=True)
_SECOND_FILENAME = PositionalSpec("second_filename", quoted=True)
_LBA = Bounds(lower=0)
_START = PositionalSpec("start_lba", ValueType.INT32, bounds=_LBA)
_END = PositionalSpec("end_lba", ValueType.INT32, bounds=_LBA)


def _speed(upper: int) -> PositionalSpec:
    return PositionalSpec("speed", ValueType.INT32, bounds=Bounds(0, upper))


_CD_SPEED = _speed(72)
_DISC = (_DRIVE, _FILENAME, _CD_SPEED)


def _cmd(key: Command, positionals: tuple[PositionalSpec, ...] = (), **kwargs: Any) -> CommandSpec:
    return CommandSpec(key, (key.value,), positionals=positionals, **kwargs)


COMMANDS: tuple[CommandSpec, ...] = (
    _cmd(Command.Audio, (*_DISC, _START, _END), dumping=True, media_type=MediaType.CDROM,
         description="Dump a CD-DA disc over an LBA range"),
    _cmd(Command.BluRay, _DISC, dumping=True, media_type=MediaType.BluRay,
         description="Dump a Blu-ray disc"),
    _cmd(Command.Close, (_DRIVE,), description="Close the drive tray"),
    _cmd(Command.CompactDisc, _DISC, dumping=True, media_type=MediaType.CDROM,
         description="Dump a CD-ROM"),
    _cmd(Command.Data, (*_DISC, _START, _END), dumping=True, media_type=MediaType.CDROM,
         description="Dump a data CD over an LBA range"),
    _cmd(Command.DigitalVideoDisc, (_DRIVE, _FILENAME, _speed(24)), dumping=True,
         media_type=MediaType.DVD, description="Dump a DVD"),
    _cmd(Command.Disk, (_DRIVE, _FILENAME), dumping=True, media_type=MediaType.HardDisk,
         description="Dump a removable disk"),
    _cmd(Command.DriveSpeed, (_DRIVE,), description="Show the drive speed"),
    _cmd(Command.Eject, (_DRIVE,), description="Eject the drive tray"),
    _cmd(Command.Floppy, (_DRIVE, _FILENAME), dumping=True, media_type=MediaType.FloppyDisk,
         description="Dump a floppy disk"),
    _cmd(Command.GDROM, _DISC, dumping=True, media_type=MediaType.GDROM,
         description="Dump a GD-ROM high density area"),
    _cmd(Command.MDS, (_FILENAME,), description="Parse an .mds file"),
    _cmd(Command.Merge, (_FILENAME, _SECOND_FILENAME), description="Merge two dumps"),
    _cmd(Command.Reset, (_DRIVE,), description="Reset the drive"),
    _cmd(Command.SACD, (_DRIVE, _FILENAME, _speed(16)), dumping=True,
         media_type=MediaType.CDROM, description="Dump a Super Audio CD"),
    _cmd(Command.Start, (_DRIVE,), description="Spin up the disc"),
    _cmd(Command.Stop, (_DRIVE,), description="Spin down the disc"),
    _cmd(Command.Sub, (_FILENAME,), description="Parse a .sub file"),
    _cmd(Command.Swap, _DISC, dumping=True, media_type=MediaType.CDROM,
         description="Dump a CD using swap trick"),
    _cmd(Command.Tape, (_FILENAME,), dumping=True, media_type=MediaType.DataCartridge,
         description="Dump a tape"),
    _cmd(Command.XBOX, _DISC, dumping=True, media_type=MediaType.DVD,
         description="Dump an Xbox / Xbox 360 disc"),
    _cmd(Command.XBOXSwap, _DISC, dumping=True, media_type=MediaType.DVD,
         description="Dump an Xbox disc using swap trick"),
    _cmd(Command.XGD2Swap, _DISC, dumping=True, media_type=MediaType.DVD,
         description="Dump an XGD2 disc using swap trick"),
    _cmd(Command.XGD3Swap, _DISC, dumping=True, media_type=MediaType.DVD,
         description="Dump an XGD3 disc using swap trick"),
)


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------

_NON_NEGATIVE = Bounds(lower=0)


def _flag(key: Flag, value_type: ValueType = ValueType.PRESENCE, **kwargs: Any) -> FlagSpec:
    return FlagSpec(key, key.value, value_type, **kwargs)


FLAGS: tuple[FlagSpec, ...] = (
    _flag(Flag.AddOffset, ValueType.INT32, optional_value=True,
          description="Add sample offset"),
    _flag(Flag.AMSF, description="Dump AMSF from 00:00:00"),
    _flag(Flag.AtariJaguar, description="Atari Jaguar CD mode"),
    _flag(Flag.BEOpcode, ValueType.STRING, optional_value=True, choices=("raw", "pack"),
          suppressed_by=(Flag.D8Opcode,), description="Use 0xBE read opcode"),
    _flag(Flag.C2Opcode, ValueType.INT32, optional_value=True, max_values=4,
          bounds=_NON_NEGATIVE, description="C2 error reread count and offsets"),
    _flag(Flag.CopyrightManagementInformation, description="Read CMI per sector"),
    _flag(Flag.D8Opcode, description="Use 0xD8 read opcode"),
    _flag(Flag.DisableBeep, description="Disable the completion beep"),
    _flag(Flag.ExtractMicroSoftCabFile, description="Extract MS cab files for protection"),
    _flag(Flag.Fix, ValueType.INT32, bounds=_NON_NEGATIVE, description="Fix a broken DVD dump"),
    _flag(Flag.ForceUnitAccess, ValueType.INT32, optional_value=True, bounds=_NON_NEGATIVE,
          description="Force unit access with delay"),
    _flag(Flag.MultiSession, description="Read multi-session lead-in/out"),
    _flag(Flag.NoFixSubP, description="Do not fix subchannel P"),
    _flag(Flag.NoFixSubQ, description="Do not fix subchannel Q"),
    _flag(Flag.NoFixSubQLibCrypt, description="Do not fix LibCrypt subchannel Q"),
    _flag(Flag.NoFixSubRtoW, description="Do not fix subchannels R-W"),
    _flag(Flag.NoFixSubQSecuROM, description="Do not fix SecuROM subchannel Q"),
    _flag(Flag.NoSkipSS, ValueType.INT32, optional_value=True, bounds=_NON_NEGATIVE,
          description="Do not skip the security sector"),
    _flag(Flag.Raw, description="Dump DVD in raw mode"),
    _flag(Flag.Resume, description="Resume an interrupted dump"),
    _flag(Flag.Reverse, ValueType.INT32, optional_value=True, max_values=2,
          bounds=_NON_NEGATIVE,
          arity_by_command={
              Command.Audio: (0, 0),
              Command.Data: (0, 0),
              Command.DigitalVideoDisc: (2, 2),
          },
          description="Read the disc in reverse"),
    _flag(Flag.ScanAntiMod, description="Scan for anti-mod strings"),
    _flag(Flag.ScanFileProtect, ValueType.INT32, optional_value=True, bounds=_NON_NEGATIVE,
          description="Scan files for protection"),
    _flag(Flag.ScanSectorProtect, description="Scan sectors for protection"),
    _flag(Flag.SeventyFour, description="Read discs over 74 minutes"),
    _flag(Flag.SkipSector, ValueType.INT32, optional_value=True, max_values=2,
          bounds=_NON_NEGATIVE, description="Skip sectors"),
    _flag(Flag.SubchannelReadLevel, ValueType.INT32, optional_value=True,
          bounds=Bounds(0, 2), description="Subchannel reread level"),
    _flag(Flag.UseAnchorVolumeDescriptorPointer, description="Use AVDP for the disc size"),
    _flag(Flag.VideoNow, ValueType.INT32, optional_value=True, bounds=_NON_NEGATIVE,
          description="VideoNow disc with offset"),
    _flag(Flag.VideoNowColor, description="VideoNow Color disc"),
    _flag(Flag.VideoNowXP, description="VideoNow XP disc"),
)


# ---------------------------------------------------------------------------
# Support table
# ---------------------------------------------------------------------------

_C = Command
_READERS = (_C.Audio, _C.CompactDisc, _C.Data, _C.GDROM, _C.Swap)
_ALL_DISCS = (
    _C.Audio, _C.BluRay, _C.CompactDisc, _C.Data, _C.DigitalVideoDisc, _C.GDROM,
    _C.SACD, _C.Swap, _C.XBOX, _C.XBOXSwap, _C.XGD2Swap, _C.XGD3Swap,
)
_CD_LIKE = (_C.Audio, _C.CompactDisc, _C.Data, _C.Swap)
_CD_SWAP = (_C.CompactDisc, _C.Swap)
_XBOX_LIKE = (_C.BluRay, _C.XBOX, _C.XBOXSwap, _C.XGD2Swap, _C.XGD3Swap)

SUPPORT = support_table({
    Flag.AddOffset: (_C.Audio, _C.CompactDisc),
    Flag.AMSF: (_C.CompactDisc,),
    Flag.AtariJaguar: (_C.CompactDisc,),
    Flag.BEOpcode: _READERS,
    Flag.C2Opcode: _READERS,
    Flag.CopyrightManagementInformation: (_C.DigitalVideoDisc,),
    Flag.D8Opcode: _READERS,
    Flag.DisableBeep: _ALL_DISCS,
    Flag.ExtractMicroSoftCabFile: (_C.CompactDisc,),
    Flag.Fix: (_C.DigitalVideoDisc,),
    Flag.ForceUnitAccess: _ALL_DISCS,
    Flag.MultiSession: _CD_LIKE,
    Flag.NoFixSubP: _READERS,
    Flag.NoFixSubQ: _READERS,
    Flag.NoFixSubQLibCrypt: _CD_SWAP,
    Flag.NoFixSubRtoW: _READERS,
    Flag.NoFixSubQSecuROM: _CD_SWAP,
    Flag.NoSkipSS: _XBOX_LIKE,
    Flag.Raw: (_C.DigitalVideoDisc,),
    Flag.Resume: (_C.DigitalVideoDisc,),
    Flag.Reverse: (_C.Audio, _C.Data, _C.DigitalVideoDisc),
    Flag.ScanAntiMod: _CD_LIKE,
    Flag.ScanFileProtect: (*_CD_LIKE, _C.DigitalVideoDisc),
    Flag.ScanSectorProtect: _CD_LIKE,
    Flag.SeventyFour: _CD_SWAP,
    Flag.SkipSector: (_C.Audio, _C.Data),
    Flag.SubchannelReadLevel: _READERS,
    Flag.UseAnchorVolumeDescriptorPointer: (_C.BluRay, _C.DigitalVideoDisc, _C.XBOX),
    Flag.VideoNow: _CD_SWAP,
    Flag.VideoNowColor: _CD_SWAP,
    Flag.VideoNowXP: _CD_SWAP,
})


# ---------------------------------------------------------------------------
# Default parameters
# ---------------------------------------------------------------------------

_MEDIA_COMMANDS: dict[MediaType, Command] = {
    MediaType.CDROM: Command.CompactDisc,
    MediaType.DVD: Command.DigitalVideoDisc,
    MediaType.GDROM: Command.GDROM,
    MediaType.HDDVD: Command.DigitalVideoDisc,
    MediaType.BluRay: Command.BluRay,
    MediaType.NintendoGameCubeGameDisc: Command.DigitalVideoDisc,
    MediaType.NintendoWiiOpticalDisc: Command.DigitalVideoDisc,
    MediaType.FloppyDisk: Command.Floppy,
    MediaType.HardDisk: Command.Disk,
    MediaType.DataCartridge: Command.Tape,
}

_XBOX_SYSTEMS = {KnownSystem.MicrosoftXBOX, KnownSystem.MicrosoftXBOX360}


def base_command(system: KnownSystem | None, media_type: MediaType | None) -> Command:
    """Pick the dump command for a media type, refined by system."""
    if media_type is MediaType.CDROM and system is KnownSystem.SuperAudioCD:
        return Command.SACD
    if media_type is MediaType.DVD and system in _XBOX_SYSTEMS:
        return Command.XBOX
    return _MEDIA_COMMANDS.get(media_type, Command.NONE)  # type: ignore[arg-type]


def _set_c2(params: Any, reread: int | None) -> None:
    if not params.dialect.is_supported(Flag.C2Opcode, params.command):
        return
    if reread is None:
        params.enable(Flag.C2Opcode)
    else:
        params.set_flag(Flag.C2Opcode, (reread,))


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
    params.command = base_command(system, media_type)
    if params.command is Command.NONE:
        return

    params.set_positional("drive", drive[:1].upper() if drive else None)
    params.set_positional("filename", filename)
    if any(p.name == "speed" for p in params.dialect.command_spec(params.command).positionals):
        params.set_positional("speed", speed)

    if media_type is MediaType.CDROM:
        _set_c2(params, reread)
        if system in (KnownSystem.AppleMacintosh, KnownSystem.IBMPCCompatible):
            params.enable(Flag.NoFixSubQSecuROM)
            params.enable(Flag.ScanFileProtect)
            if paranoid:
                params.enable(Flag.ScanSectorProtect)
                params.set_flag(Flag.SubchannelReadLevel, 2)
        elif system is KnownSystem.AtariJaguarCD:
            params.enable(Flag.AtariJaguar)
        elif system in (KnownSystem.HasbroVideoNow, KnownSystem.HasbroVideoNowJr):
            params.set_flag(Flag.VideoNow, 18032)
        elif system is KnownSystem.HasbroVideoNowColor:
            params.enable(Flag.VideoNowColor)
        elif system is KnownSystem.HasbroVideoNowXP:
            params.enable(Flag.VideoNowXP)
        elif system is KnownSystem.SonyPlayStation:
            params.enable(Flag.ScanAntiMod)
            params.enable(Flag.NoFixSubQLibCrypt)
    elif media_type is MediaType.DVD:
        if paranoid:
            params.enable(Flag.CopyrightManagementInformation)
            params.enable(Flag.ScanFileProtect)
    elif media_type is MediaType.GDROM:
        _set_c2(params, reread)
    elif media_type is MediaType.HDDVD:
        if paranoid:
            params.enable(Flag.CopyrightManagementInformation)
    elif media_type in (MediaType.NintendoGameCubeGameDisc, MediaType.NintendoWiiOpticalDisc):
        params.enable(Flag.Raw)

    if options.get("quiet") and params.dialect.is_supported(Flag.DisableBeep, params.command):
        params.enable(Flag.DisableBeep)


DIALECT = Dialect(
    name="creator",
    tool="DiscImageCreator",
    none=Command.NONE,
    commands=COMMANDS,
    flags=FLAGS,
    support=SUPPORT,
    flag_prefix="/",
    positionals_first=True,
    executable="DiscImageCreator.exe",
    input_fields=("drive", "filename"),
    output_fields=("filename",),
    speed_field="speed",
    deriver=derive,
)
