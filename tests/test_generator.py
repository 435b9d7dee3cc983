"""Tests for argument-string generation."""

from discargs.codec import PRESENT, PresentWithValue
from discargs.dialects import chef, creator, dd, redumper
from discargs.generator import generate
from discargs.params import ParameterSet

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _creator(command: creator.Command = creator.Command.CompactDisc, **positionals) -> ParameterSet:
    params = ParameterSet(creator.DIALECT)
    params.command = command
    values = {"drive": "D", "filename": "out.bin", "speed": 8}
    values.update(positionals)
    for name, value in values.items():
        params.set_positional(name, value)
    return params


def _chef_dump() -> ParameterSet:
    params = ParameterSet(chef.DIALECT)
    params.command = chef.Command.MediaDump
    params.set_positional("input", "\\\\?\\D:")
    params.set_positional("output", "out.aaruf")
    return params


# ---------------------------------------------------------------------------
# Structural failures
# ---------------------------------------------------------------------------


class TestInvalid:
    def test_no_command(self) -> None:
        assert generate(ParameterSet(creator.DIALECT)) is None
        assert generate(ParameterSet(chef.DIALECT)) is None
        assert generate(ParameterSet(redumper.DIALECT)) is None

    def test_missing_required_positional(self) -> None:
        params = _creator()
        params.set_positional("speed", None)
        assert generate(params) is None

    def test_speed_out_of_bounds(self) -> None:
        assert generate(_creator(speed=73)) is None
        assert generate(_creator(command=creator.Command.DigitalVideoDisc, speed=25)) is None
        assert generate(_creator(command=creator.Command.DigitalVideoDisc, speed=24)) is not None

    def test_bad_drive_letter(self) -> None:
        assert generate(_creator(drive="DD")) is None
        assert generate(_creator(drive="D:\\")) is not None

    def test_filename_with_quote(self) -> None:
        assert generate(_creator(filename='bad"name.bin')) is None

    def test_arity_mismatch(self) -> None:
        params = _creator(command=creator.Command.DigitalVideoDisc)
        params.set_flag(creator.Flag.Reverse, 5)
        assert generate(params) is None
        params.set_flag(creator.Flag.Reverse, (0, 5))
        assert generate(params) == 'dvd D "out.bin" 8 /r 0 5'

    def test_bare_flag_that_needs_values(self) -> None:
        params = _creator(command=creator.Command.DigitalVideoDisc)
        params.enable(creator.Flag.Reverse)
        assert generate(params) is None


# ---------------------------------------------------------------------------
# DiscImageCreator
# ---------------------------------------------------------------------------


class TestCreator:
    def test_positionals_before_flags(self) -> None:
        params = _creator(speed=48)
        params.set_flag(creator.Flag.C2Opcode, 20)
        params.enable(creator.Flag.NoFixSubQSecuROM)
        params.enable(creator.Flag.ScanFileProtect)
        assert generate(params) == 'cd D "out.bin" 48 /c2 20 /ns /sf'

    def test_filename_always_quoted(self) -> None:
        params = _creator(filename="C:\\My Dumps\\out.bin")
        assert generate(params) == 'cd D "C:\\My Dumps\\out.bin" 8'

    def test_bare_c2(self) -> None:
        params = _creator()
        params.enable(creator.Flag.C2Opcode)
        assert generate(params) == 'cd D "out.bin" 8 /c2'

    def test_c2_with_offsets(self) -> None:
        params = _creator()
        params.set_flag(creator.Flag.C2Opcode, (20, 0, 0, 1))
        assert generate(params) == 'cd D "out.bin" 8 /c2 20 0 0 1'

    def test_unsupported_flag_skipped(self) -> None:
        params = _creator()
        params.enable(creator.Flag.Raw)
        assert generate(params) == 'cd D "out.bin" 8'

    def test_be_suppressed_by_d8(self) -> None:
        params = _creator()
        params.set_flag(creator.Flag.BEOpcode, "raw")
        params.enable(creator.Flag.D8Opcode)
        assert generate(params) == 'cd D "out.bin" 8 /d8'
        params.clear_flag(creator.Flag.D8Opcode)
        assert generate(params) == 'cd D "out.bin" 8 /be raw'

    def test_audio_range(self) -> None:
        params = _creator(command=creator.Command.Audio, start_lba=0, end_lba=1000)
        params.enable(creator.Flag.Reverse)
        assert generate(params) == 'audio D "out.bin" 8 0 1000 /r'

    def test_drive_only_command(self) -> None:
        params = ParameterSet(creator.DIALECT)
        params.command = creator.Command.Eject
        params.set_positional("drive", "E")
        assert generate(params) == "eject E"

    def test_merge(self) -> None:
        params = ParameterSet(creator.DIALECT)
        params.command = creator.Command.Merge
        params.set_positional("filename", "a.bin")
        params.set_positional("second_filename", "b.bin")
        assert generate(params) == 'merge "a.bin" "b.bin"'


# ---------------------------------------------------------------------------
# DiscImageChef
# ---------------------------------------------------------------------------


class TestChef:
    def test_booleans_carry_values(self) -> None:
        params = _chef_dump()
        params.set_flag(chef.Flag.Force, True)
        params.set_flag(chef.Flag.Resume, False)
        assert generate(params) == (
            'media dump --force true --resume false "\\\\?\\D:" "out.aaruf"'
        )

    def test_global_flags_before_command(self) -> None:
        params = _chef_dump()
        params.set_flag(chef.Flag.Debug, True)
        params.set_flag(chef.Flag.Verbose, True)
        assert generate(params) == (
            '--debug true --verbose true media dump "\\\\?\\D:" "out.aaruf"'
        )

    def test_strings_quoted(self) -> None:
        params = _chef_dump()
        params.set_flag(chef.Flag.Subchannel, "any")
        params.set_flag(chef.Flag.Encoding, "utf-8")
        assert generate(params) == (
            'media dump --encoding "utf-8" --subchannel "any" "\\\\?\\D:" "out.aaruf"'
        )

    def test_long_spelling_preferred(self) -> None:
        params = ParameterSet(chef.DIALECT)
        params.command = chef.Command.ImageChecksum
        params.set_positional("input", "img.aaruf")
        params.set_flag(chef.Flag.SpamSum, True)
        params.set_flag(chef.Flag.WholeDisc, False)
        assert generate(params) == (
            'image checksum --spamsum true --whole-disc false "img.aaruf"'
        )

    def test_flag_not_supported_by_command_skipped(self) -> None:
        params = _chef_dump()
        params.set_flag(chef.Flag.Adler32, True)
        assert generate(params) == 'media dump "\\\\?\\D:" "out.aaruf"'

    def test_format_flag_picks_variant_by_command(self) -> None:
        params = ParameterSet(chef.DIALECT)
        params.command = chef.Command.ImageConvert
        params.set_positional("input", "in.cue")
        params.set_positional("output", "out.aaruf")
        params.set_flag(chef.Flag.FormatConvert, "aaru")
        params.set_flag(chef.Flag.FormatDump, "ignored")
        assert generate(params) == 'image convert --format "aaru" "in.cue" "out.aaruf"'

    def test_missing_output(self) -> None:
        params = _chef_dump()
        params.set_positional("output", None)
        assert generate(params) is None

    def test_no_positional_command(self) -> None:
        params = ParameterSet(chef.DIALECT)
        params.command = chef.Command.Formats
        assert generate(params) == "formats"


# ---------------------------------------------------------------------------
# redumper
# ---------------------------------------------------------------------------


class TestRedumper:
    def test_equals_form(self) -> None:
        params = ParameterSet(redumper.DIALECT)
        params.command = redumper.Command.Disc
        params.enable(redumper.Flag.Verbose)
        params.set_flag(redumper.Flag.Drive, "D:")
        params.set_flag(redumper.Flag.Speed, 8)
        params.set_flag(redumper.Flag.ImageName, "game")
        assert generate(params) == 'disc --verbose --drive=D: --speed=8 --image-name="game"'

    def test_mode_alone(self) -> None:
        params = ParameterSet(redumper.DIALECT)
        params.command = redumper.Command.Eject
        assert generate(params) == "eject"

    def test_path_with_spaces(self) -> None:
        params = ParameterSet(redumper.DIALECT)
        params.command = redumper.Command.Disc
        params.set_flag(redumper.Flag.ImagePath, "C:\\My Dumps")
        assert generate(params) == 'disc --image-path="C:\\My Dumps"'

    def test_negative_offset(self) -> None:
        params = ParameterSet(redumper.DIALECT)
        params.command = redumper.Command.Split
        params.set_flag(redumper.Flag.ForceOffset, -647)
        assert generate(params) == "split --force-offset=-647"

    def test_state_objects(self) -> None:
        params = ParameterSet(redumper.DIALECT)
        params.command = redumper.Command.Disc
        params.set_state(redumper.Flag.Retries, PresentWithValue(5))
        params.set_state(redumper.Flag.Overwrite, PRESENT)
        assert generate(params) == "disc --retries=5 --overwrite"


# ---------------------------------------------------------------------------
# dd
# ---------------------------------------------------------------------------


class TestDd:
    def _dump(self) -> ParameterSet:
        params = ParameterSet(dd.DIALECT)
        params.command = dd.Command.Dump
        params.set_flag(dd.Flag.InputFile, "\\\\.\\E:")
        params.set_flag(dd.Flag.OutputFile, "out.iso")
        return params

    def test_no_command_word(self) -> None:
        params = self._dump()
        params.set_flag(dd.Flag.Count, 10)
        params.enable(dd.Flag.Progress)
        assert generate(params) == '--progress count=10 if="\\\\.\\E:" of="out.iso"'

    def test_missing_output(self) -> None:
        params = self._dump()
        params.clear_flag(dd.Flag.OutputFile)
        assert generate(params) is None

    def test_list_ignores_dump_flags(self) -> None:
        params = self._dump()
        params.command = dd.Command.List
        assert generate(params) == "--list"

    def test_none(self) -> None:
        assert generate(ParameterSet(dd.DIALECT)) is None
