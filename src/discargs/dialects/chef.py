"""chef.py – DiscImageChef (Aaru) command-line dialect.

Grammar::

    [global flags] <family> <verb> [--flag value]... "<input>" ["<output>"]

Boolean flags are always followed by ``true``/``false``; string values are
quoted.  Several flags share a short spelling (``-p``, ``-f``, ``-s``...),
the one the current command supports is meant.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from discargs.codec import ValueType
from discargs.dialect import CommandSpec, Dialect, FlagSpec, PositionalSpec, support_table
from discargs.systems import KnownSystem, MediaType


class Command(Enum):
    NONE = ""

    # Database family
    DatabaseStats = "database stats"
    DatabaseUpdate = "database update"

    # Device family
    DeviceInfo = "device info"
    DeviceList = "device list"
    DeviceReport = "device report"

    # Filesystem family
    FilesystemExtract = "filesystem extract"
    FilesystemList = "filesystem list"
    FilesystemOptions = "filesystem options"

    # Image family
    ImageAnalyze = "image analyze"
    ImageChecksum = "image checksum"
    ImageCompare = "image compare"
    ImageConvert = "image convert"
    ImageCreateSidecar = "image create-sidecar"
    ImageDecode = "image decode"
    ImageEntropy = "image entropy"
    ImageInfo = "image info"
    ImageOptions = "image options"
    ImagePrint = "image print"
    ImageVerify = "image verify"

    # Media family
    MediaDump = "media dump"
    MediaInfo = "media info"
    MediaScan = "media scan"

    # Standalone
    Configure = "configure"
    Formats = "formats"
    ListEncodings = "list-encodings"
    ListNamespaces = "list-namespaces"
    Remote = "remote"


class Flag(Enum):
    # Boolean
    Adler32 = "--adler32"
    Clear = "--clear"
    ClearAll = "--clear-all"
    CRC16 = "--crc16"
    CRC32 = "--crc32"
    CRC64 = "--crc64"
    Debug = "--debug"
    DiskTags = "--disk-tags"
    DuplicatedSectors = "--duplicated-sectors"
    ExtendedAttributes = "--xattrs"
    Filesystems = "--filesystems"
    FirstPregap = "--first-pregap"
    FixOffset = "--fix-offset"
    Fletcher16 = "--fletcher16"
    Fletcher32 = "--fletcher32"
    Force = "--force"
    LongFormat = "--long-format"
    LongSectors = "--long-sectors"
    MD5 = "--md5"
    Metadata = "--metadata"
    Partitions = "--partitions"
    Persistent = "--persistent"
    Resume = "--resume"
    SectorTags = "--sector-tags"
    SeparatedTracks = "--separated-tracks"
    SHA1 = "--sha1"
    SHA256 = "--sha256"
    SHA384 = "--sha384"
    SHA512 = "--sha512"
    SpamSum = "--spamsum"
    StopOnError = "--stop-on-error"
    Tape = "--tape"
    Trim = "--trim"
    Verbose = "--verbose"
    VerifyDisc = "--verify-disc"
    VerifySectors = "--verify-sectors"
    Version = "--version"
    WholeDisc = "--whole-disc"

    # Int8
    Speed = "--speed"

    # Int16
    RetryPasses = "--retry-passes"
    Width = "--width"

    # Int32
    BlockSize = "--block-size"
    Count = "--count"
    MediaLastSequence = "--media-lastsequence"
    MediaSequence = "--media-sequence"
    Skip = "--skip"

    # Int64
    Length = "--length"
    Start = "--start"

    # String
    Comments = "--comments"
    Creator = "--creator"
    DriveManufacturer = "--drive-manufacturer"
    DriveModel = "--drive-model"
    DriveRevision = "--drive-revision"
    DriveSerial = "--drive-serial"
    Encoding = "--encoding"
    FormatConvert = "--format (convert)"
    FormatDump = "--format (dump)"
    ImgBurnLog = "--ibg-log"
    MediaBarcode = "--media-barcode"
    MediaManufacturer = "--media-manufacturer"
    MediaModel = "--media-model"
    MediaPartNumber = "--media-partnumber"
    MediaSerial = "--media-serial"
    MediaTitle = "--media-title"
    MHDDLog = "--mhdd-log"
    Namespace = "--namespace"
    Options = "--options"
    OutputPrefix = "--output-prefix"
    ResumeFile = "--resume-file"
    Subchannel = "--subchannel"
    XMLSidecar = "--cicm-xml"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

_FAMILY_ALIASES: dict[str, tuple[str, ...]] = {
    "database": ("db",),
    "device": ("dev",),
    "filesystem": ("fs", "fi"),
    "image": ("i",),
    "media": ("m",),
}

_VERB_ALIASES: dict[str, tuple[str, ...]] = {
    "filesystem list": ("ls",),
    "image checksum": ("chk",),
    "image compare": ("cmp",),
}

_INPUT = PositionalSpec("input", quoted=True)
_INPUT1 = PositionalSpec("input1", quoted=True)
_INPUT2 = PositionalSpec("input2", quoted=True)
_OUTPUT = PositionalSpec("output", quoted=True)
_REMOTE_HOST = PositionalSpec("remote_host", quoted=True)

_POSITIONALS: dict[Command, tuple[PositionalSpec, ...]] = {
    Command.DeviceInfo: (_INPUT,),
    Command.DeviceReport: (_INPUT,),
    Command.FilesystemList: (_INPUT,),
    Command.ImageAnalyze: (_INPUT,),
    Command.ImageChecksum: (_INPUT,),
    Command.ImageCreateSidecar: (_INPUT,),
    Command.ImageDecode: (_INPUT,),
    Command.ImageEntropy: (_INPUT,),
    Command.ImageInfo: (_INPUT,),
    Command.ImagePrint: (_INPUT,),
    Command.ImageVerify: (_INPUT,),
    Command.MediaInfo: (_INPUT,),
    Command.MediaScan: (_INPUT,),
    Command.ImageCompare: (_INPUT1, _INPUT2),
    Command.FilesystemExtract: (_INPUT, _OUTPUT),
    Command.ImageConvert: (_INPUT, _OUTPUT),
    Command.MediaDump: (_INPUT, _OUTPUT),
    Command.DeviceList: (_REMOTE_HOST,),
    Command.Remote: (_REMOTE_HOST,),
}


def _aliases(spelling: tuple[str, ...]) -> tuple[tuple[str, ...], ...]:
    if len(spelling) == 1:
        return ()
    family, verb = spelling
    families = (family, *_FAMILY_ALIASES.get(family, ()))
    verbs = (verb, *_VERB_ALIASES.get(f"{family} {verb}", ()))
    return tuple((f, v) for f in families for v in verbs if (f, v) != spelling)


def _commands() -> tuple[CommandSpec, ...]:
    specs = []
    for key in Command:
        if key is Command.NONE:
            continue
        spelling = tuple(key.value.split())
        specs.append(CommandSpec(
            key,
            spelling,
            aliases=_aliases(spelling),
            positionals=_POSITIONALS.get(key, ()),
            dumping=key is Command.MediaDump,
        ))
    return tuple(specs)


COMMANDS = _commands()


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------

_B = ValueType.BOOLEAN
_S = ValueType.STRING


def _flag(
    key: Flag, value_type: ValueType, short: str | None = None, long: str | None = None,
    **kwargs: Any,
) -> FlagSpec:
    if value_type is _S:
        kwargs.setdefault("quoted", True)
    return FlagSpec(key, long or key.value, value_type, short=short, **kwargs)


FLAGS: tuple[FlagSpec, ...] = (
    # Global, before the command
    _flag(Flag.Debug, _B, "-d", pre_command=True),
    _flag(Flag.Verbose, _B, "-v", pre_command=True),
    _flag(Flag.Version, _B, pre_command=True),

    _flag(Flag.Adler32, _B, "-a"),
    _flag(Flag.Clear, _B),
    _flag(Flag.ClearAll, _B),
    _flag(Flag.CRC16, _B),
    _flag(Flag.CRC32, _B, "-c"),
    _flag(Flag.CRC64, _B),
    _flag(Flag.DiskTags, _B, "-f"),
    _flag(Flag.DuplicatedSectors, _B, "-p"),
    _flag(Flag.ExtendedAttributes, _B, "-x"),
    _flag(Flag.Filesystems, _B, "-f"),
    _flag(Flag.FirstPregap, _B),
    _flag(Flag.FixOffset, _B),
    _flag(Flag.Fletcher16, _B),
    _flag(Flag.Fletcher32, _B),
    _flag(Flag.Force, _B, "-f"),
    _flag(Flag.LongFormat, _B, "-l"),
    _flag(Flag.LongSectors, _B, "-r"),
    _flag(Flag.MD5, _B, "-m"),
    _flag(Flag.Metadata, _B),
    _flag(Flag.Partitions, _B, "-p"),
    _flag(Flag.Persistent, _B),
    _flag(Flag.Resume, _B, "-r"),
    _flag(Flag.SectorTags, _B, "-p"),
    _flag(Flag.SeparatedTracks, _B, "-t"),
    _flag(Flag.SHA1, _B, "-s"),
    _flag(Flag.SHA256, _B),
    _flag(Flag.SHA384, _B),
    _flag(Flag.SHA512, _B),
    _flag(Flag.SpamSum, _B, "-f"),
    _flag(Flag.StopOnError, _B, "-s"),
    _flag(Flag.Tape, _B, "-t"),
    _flag(Flag.Trim, _B),
    _flag(Flag.VerifyDisc, _B, "-w"),
    _flag(Flag.VerifySectors, _B, "-s"),
    _flag(Flag.WholeDisc, _B, "-w"),

    _flag(Flag.Speed, ValueType.INT8),
    _flag(Flag.RetryPasses, ValueType.INT16, "-p"),
    _flag(Flag.Width, ValueType.INT16, "-w"),

    _flag(Flag.BlockSize, ValueType.INT32, "-b"),
    _flag(Flag.Count, ValueType.INT32, "-c"),
    _flag(Flag.MediaLastSequence, ValueType.INT32),
    _flag(Flag.MediaSequence, ValueType.INT32),
    _flag(Flag.Skip, ValueType.INT32, "-k"),

    _flag(Flag.Length, ValueType.INT64, "-l"),
    _flag(Flag.Start, ValueType.INT64, "-s"),

    _flag(Flag.Comments, _S),
    _flag(Flag.Creator, _S),
    _flag(Flag.DriveManufacturer, _S),
    _flag(Flag.DriveModel, _S),
    _flag(Flag.DriveRevision, _S),
    _flag(Flag.DriveSerial, _S),
    _flag(Flag.Encoding, _S, "-e"),
    _flag(Flag.FormatConvert, _S, "-p", long="--format"),
    _flag(Flag.FormatDump, _S, "-t", long="--format"),
    _flag(Flag.ImgBurnLog, _S, "-b"),
    _flag(Flag.MediaBarcode, _S),
    _flag(Flag.MediaManufacturer, _S),
    _flag(Flag.MediaModel, _S),
    _flag(Flag.MediaPartNumber, _S),
    _flag(Flag.MediaSerial, _S),
    _flag(Flag.MediaTitle, _S),
    _flag(Flag.MHDDLog, _S, "-m"),
    _flag(Flag.Namespace, _S, "-n"),
    _flag(Flag.Options, _S, "-O"),
    _flag(Flag.OutputPrefix, _S, "-w"),
    _flag(Flag.ResumeFile, _S, "-r"),
    _flag(Flag.Subchannel, _S),
    _flag(Flag.XMLSidecar, _S, "-x"),
)


# ---------------------------------------------------------------------------
# Support table
# ---------------------------------------------------------------------------

_C = Command
_CHECKSUM = (_C.ImageChecksum,)
_CONVERT = (_C.ImageConvert,)
_DUMP = (_C.MediaDump,)

SUPPORT = support_table({
    Flag.Debug: (_C.NONE,),
    Flag.Verbose: (_C.NONE,),
    Flag.Version: (_C.NONE,),

    Flag.Adler32: _CHECKSUM,
    Flag.Clear: (_C.DatabaseUpdate,),
    Flag.ClearAll: (_C.DatabaseUpdate,),
    Flag.CRC16: _CHECKSUM,
    Flag.CRC32: _CHECKSUM,
    Flag.CRC64: _CHECKSUM,
    Flag.DiskTags: (_C.ImageDecode,),
    Flag.DuplicatedSectors: (_C.ImageEntropy,),
    Flag.ExtendedAttributes: (_C.FilesystemExtract,),
    Flag.Filesystems: (_C.ImageAnalyze,),
    Flag.FirstPregap: _DUMP,
    Flag.FixOffset: _DUMP,
    Flag.Fletcher16: _CHECKSUM,
    Flag.Fletcher32: _CHECKSUM,
    Flag.Force: (_C.ImageConvert, _C.MediaDump),
    Flag.LongFormat: (_C.FilesystemList,),
    Flag.LongSectors: (_C.ImagePrint,),
    Flag.MD5: _CHECKSUM,
    Flag.Metadata: _DUMP,
    Flag.Partitions: (_C.ImageAnalyze,),
    Flag.Persistent: _DUMP,
    Flag.Resume: _DUMP,
    Flag.SectorTags: (_C.ImageDecode,),
    Flag.SeparatedTracks: (_C.ImageChecksum, _C.ImageEntropy),
    Flag.SHA1: _CHECKSUM,
    Flag.SHA256: _CHECKSUM,
    Flag.SHA384: _CHECKSUM,
    Flag.SHA512: _CHECKSUM,
    Flag.SpamSum: _CHECKSUM,
    Flag.StopOnError: _DUMP,
    Flag.Tape: (_C.ImageCreateSidecar,),
    Flag.Trim: _DUMP,
    Flag.VerifyDisc: (_C.ImageAnalyze, _C.ImageVerify),
    Flag.VerifySectors: (_C.ImageAnalyze, _C.ImageVerify),
    Flag.WholeDisc: (_C.ImageChecksum, _C.ImageEntropy),

    Flag.Speed: _DUMP,
    Flag.RetryPasses: _DUMP,
    Flag.Width: (_C.ImagePrint,),

    Flag.BlockSize: (_C.ImageCreateSidecar,),
    Flag.Count: _CONVERT,
    Flag.MediaLastSequence: _CONVERT,
    Flag.MediaSequence: _CONVERT,
    Flag.Skip: _DUMP,

    Flag.Length: (_C.ImageDecode, _C.ImagePrint),
    Flag.Start: (_C.ImageDecode, _C.ImagePrint),

    Flag.Comments: _CONVERT,
    Flag.Creator: _CONVERT,
    Flag.DriveManufacturer: _CONVERT,
    Flag.DriveModel: _CONVERT,
    Flag.DriveRevision: _CONVERT,
    Flag.DriveSerial: _CONVERT,
    Flag.Encoding: (
        _C.FilesystemExtract, _C.FilesystemList, _C.ImageAnalyze, _C.ImageCreateSidecar,
        _C.MediaDump,
    ),
    Flag.FormatConvert: _CONVERT,
    Flag.FormatDump: _DUMP,
    Flag.ImgBurnLog: (_C.MediaScan,),
    Flag.MediaBarcode: _CONVERT,
    Flag.MediaManufacturer: _CONVERT,
    Flag.MediaModel: _CONVERT,
    Flag.MediaPartNumber: _CONVERT,
    Flag.MediaSerial: _CONVERT,
    Flag.MediaTitle: _CONVERT,
    Flag.MHDDLog: (_C.MediaScan,),
    Flag.Namespace: (_C.FilesystemExtract, _C.FilesystemList),
    Flag.Options: (_C.FilesystemExtract, _C.FilesystemList, _C.ImageConvert, _C.MediaDump),
    Flag.OutputPrefix: (_C.DeviceInfo, _C.MediaInfo),
    Flag.ResumeFile: _CONVERT,
    Flag.Subchannel: _DUMP,
    Flag.XMLSidecar: (_C.ImageConvert, _C.MediaDump),
})


# ---------------------------------------------------------------------------
# Default parameters
# ---------------------------------------------------------------------------

_DRIVE_LETTER_RE = re.compile(r"([A-Za-z]):?\\?")


def device_path(drive: str) -> str:
    """Map a bare drive letter to the Windows raw device path."""
    m = _DRIVE_LETTER_RE.fullmatch(drive)
    if m:
        return f"\\\\?\\{m.group(1).upper()}:"
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
    params.command = Command.MediaDump
    params.set_positional("input", device_path(drive) if drive else None)
    params.set_positional("output", filename or None)
    params.set_flag(Flag.Force, True)

    if speed is not None:
        params.set_flag(Flag.Speed, speed)
    if reread is not None:
        params.set_flag(Flag.RetryPasses, reread)

    if paranoid:
        params.set_flag(Flag.Debug, True)
        params.set_flag(Flag.Verbose, True)

    if media_type is MediaType.CDROM:
        params.set_flag(Flag.FirstPregap, True)
        params.set_flag(Flag.FixOffset, True)
        params.set_flag(Flag.Subchannel, "any")


DIALECT = Dialect(
    name="chef",
    tool="DiscImageChef",
    none=Command.NONE,
    commands=COMMANDS,
    flags=FLAGS,
    support=SUPPORT,
    flag_prefix="-",
    accepts_equals=True,
    executable="DiscImageChef.exe",
    input_fields=("input", "input1"),
    output_fields=("output",),
    speed_field=Flag.Speed,
    deriver=derive,
)
