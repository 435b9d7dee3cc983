"""Tests for the default-parameter deriver."""

import pytest

from discargs.defaults import derive_defaults, resolve_retry_count
from discargs.dialects import chef, creator, dd, redumper
from discargs.parser import parse
from discargs.systems import VALID_MEDIA_TYPES, KnownSystem, MediaType

CREATOR = creator.DIALECT
CHEF = chef.DIALECT
REDUMPER = redumper.DIALECT
DD = dd.DIALECT

# ---------------------------------------------------------------------------
# Retry convention
# ---------------------------------------------------------------------------


class TestResolveRetryCount:
    def test_negative_means_no_count(self) -> None:
        assert resolve_retry_count(-1, 20) is None

    def test_zero_uses_fallback(self) -> None:
        assert resolve_retry_count(0, 20) == 20
        assert resolve_retry_count(0, 5) == 5

    def test_positive_used_as_is(self) -> None:
        assert resolve_retry_count(3, 20) == 3


# ---------------------------------------------------------------------------
# DiscImageCreator
# ---------------------------------------------------------------------------


class TestCreatorDefaults:
    def test_pc_cdrom(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.IBMPCCompatible, MediaType.CDROM, "D", "out.bin", 48
        )
        assert params.generate_parameters() == 'cd D "out.bin" 48 /c2 20 /ns /sf'
        assert params.is_dumping_command()

    def test_round_trip(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.IBMPCCompatible, MediaType.CDROM, "D", "out.bin", 48
        )
        assert parse(CREATOR, params.generate_parameters()) == params

    def test_drive_normalised_to_letter(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SonyPlayStation, MediaType.CDROM, "e:\\", "ps1.bin", 8
        )
        assert params.positional("drive") == "E"

    def test_negative_retry_gives_bare_c2(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SegaSaturn, MediaType.CDROM, "D", "ss.bin", 8, retry_count=-1
        )
        assert params.generate_parameters() == 'cd D "ss.bin" 8 /c2'

    def test_explicit_retry(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SegaSaturn, MediaType.CDROM, "D", "ss.bin", 8, retry_count=5
        )
        assert params.generate_parameters() == 'cd D "ss.bin" 8 /c2 5'

    def test_reread_count_option_is_the_fallback(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SegaSaturn, MediaType.CDROM, "D", "ss.bin", 8,
            options={"reread_count": 7},
        )
        assert params.value(creator.Flag.C2Opcode) == (7,)

    def test_paranoid_pc(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.IBMPCCompatible, MediaType.CDROM, "D", "out.bin", 8,
            paranoid=True,
        )
        assert params.generate_parameters() == 'cd D "out.bin" 8 /c2 20 /ns /sf /ss /s 2'

    def test_playstation(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SonyPlayStation, MediaType.CDROM, "D", "ps1.bin", 8
        )
        assert params.generate_parameters() == 'cd D "ps1.bin" 8 /c2 20 /nl /am'

    def test_videonow(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.HasbroVideoNow, MediaType.CDROM, "D", "vn.bin", 8
        )
        assert params.value(creator.Flag.VideoNow) == 18032

    def test_xbox_dvd(self) -> None:
        params = derive_defaults(CREATOR, KnownSystem.MicrosoftXBOX, MediaType.DVD, "D", "x.iso", 8)
        assert params.command is creator.Command.XBOX
        assert params.generate_parameters() == 'xbox D "x.iso" 8'

    def test_paranoid_dvd(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SonyPlayStation2, MediaType.DVD, "D", "ps2.iso", 4, paranoid=True
        )
        assert params.generate_parameters() == 'dvd D "ps2.iso" 4 /c /sf'

    def test_gamecube_raw(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.NintendoGameCube, MediaType.NintendoGameCubeGameDisc,
            "D", "gc.iso", 4,
        )
        assert params.generate_parameters() == 'dvd D "gc.iso" 4 /raw'

    def test_floppy_has_no_speed(self) -> None:
        params = derive_defaults(CREATOR, KnownSystem.IBMPCCompatible, MediaType.FloppyDisk,
                                 "A", "disk.img", 48)
        assert params.generate_parameters() == 'fd A "disk.img"'

    def test_quiet_option(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SegaSaturn, MediaType.CDROM, "D", "ss.bin", 8,
            options={"quiet": True},
        )
        assert params.generate_parameters() == 'cd D "ss.bin" 8 /c2 20 /q'

    def test_sacd_has_no_c2(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.SuperAudioCD, MediaType.CDROM, "D", "sacd.iso", 4
        )
        assert params.generate_parameters() == 'sacd D "sacd.iso" 4'
        assert not params.is_present(creator.Flag.C2Opcode)

    def test_quiet_ignored_for_floppy(self) -> None:
        params = derive_defaults(
            CREATOR, KnownSystem.IBMPCCompatible, MediaType.FloppyDisk, "A", "disk.img",
            options={"quiet": True},
        )
        assert params.present_flags() == []

    def test_missing_speed_does_not_generate(self) -> None:
        params = derive_defaults(CREATOR, KnownSystem.SegaSaturn, MediaType.CDROM, "D", "ss.bin")
        assert params.command is creator.Command.CompactDisc
        assert params.generate_parameters() is None


# ---------------------------------------------------------------------------
# DiscImageChef
# ---------------------------------------------------------------------------


class TestChefDefaults:
    def test_pc_cdrom(self) -> None:
        params = derive_defaults(
            CHEF, KnownSystem.IBMPCCompatible, MediaType.CDROM, "D", "out.bin", 48
        )
        assert params.generate_parameters() == (
            "media dump --first-pregap true --fix-offset true --force true --speed 48 "
            '--retry-passes 20 --subchannel "any" "\\\\?\\D:" "out.bin"'
        )

    def test_round_trip(self) -> None:
        params = derive_defaults(
            CHEF, KnownSystem.IBMPCCompatible, MediaType.CDROM, "D", "out.bin", 48
        )
        assert parse(CHEF, params.generate_parameters()) == params

    def test_dvd_without_speed_or_retries(self) -> None:
        params = derive_defaults(
            CHEF, KnownSystem.SonyPlayStation2, MediaType.DVD, "E", "ps2.aaruf", retry_count=-1
        )
        assert params.generate_parameters() == 'media dump --force true "\\\\?\\E:" "ps2.aaruf"'

    def test_paranoid_sets_globals(self) -> None:
        params = derive_defaults(
            CHEF, KnownSystem.SonyPlayStation2, MediaType.DVD, "E", "ps2.aaruf", 4, paranoid=True
        )
        line = params.generate_parameters()
        assert line.startswith("--debug true --verbose true media dump ")
        assert parse(CHEF, line) == params

    def test_device_path_kept(self) -> None:
        params = derive_defaults(
            CHEF, KnownSystem.SonyPlayStation2, MediaType.DVD, "/dev/sr0", "ps2.aaruf"
        )
        assert params.input_path == "/dev/sr0"

    def test_speed_out_of_int8(self) -> None:
        params = derive_defaults(CHEF, KnownSystem.SonyPlayStation2, MediaType.DVD, "E", "x", 300)
        assert params.command is chef.Command.NONE
        assert params.generate_parameters() is None

    def test_retry_count_out_of_int16(self) -> None:
        params = derive_defaults(
            CHEF, KnownSystem.IBMPCCompatible, MediaType.CDROM, "D", "x.bin", 48, retry_count=40000
        )
        assert params.generate_parameters() is None


# ---------------------------------------------------------------------------
# redumper
# ---------------------------------------------------------------------------


class TestRedumperDefaults:
    def test_cdrom(self) -> None:
        params = derive_defaults(
            REDUMPER, KnownSystem.SegaDreamcast, MediaType.CDROM, "D:", "dumps/game.bin", 8
        )
        assert params.generate_parameters() == (
            'disc --verbose --drive=D: --speed=8 --retries=20 '
            '--image-path="dumps" --image-name="game"'
        )

    def test_round_trip(self) -> None:
        params = derive_defaults(
            REDUMPER, KnownSystem.SegaDreamcast, MediaType.CDROM, "D:", "dumps/game.bin", 8
        )
        assert parse(REDUMPER, params.generate_parameters()) == params

    def test_zero_speed_omitted(self) -> None:
        params = derive_defaults(REDUMPER, KnownSystem.SonyPlayStation, MediaType.CDROM,
                                 "D:", "game.bin", 0)
        assert not params.is_present(redumper.Flag.Speed)
        assert not params.is_present(redumper.Flag.ImagePath)
        assert params.value(redumper.Flag.ImageName) == "game"

    def test_retry_count_out_of_int32(self) -> None:
        params = derive_defaults(
            REDUMPER, KnownSystem.SegaDreamcast, MediaType.CDROM, "D:", "game.bin",
            retry_count=2**31,
        )
        assert params.generate_parameters() is None

    def test_paranoid_and_options(self) -> None:
        params = derive_defaults(
            REDUMPER, KnownSystem.SonyPlayStation, MediaType.CDROM, "D:", "game.bin", 8,
            paranoid=True,
            options={
                "read_method": "BE",
                "sector_order": "NONE",
                "drive_type": "PLEXTOR",
                "leadin_retry_count": 4,
            },
        )
        assert params.is_present(redumper.Flag.Debug)
        assert params.value(redumper.Flag.DriveReadMethod) == "BE"
        assert not params.is_present(redumper.Flag.DriveSectorOrder)
        assert params.value(redumper.Flag.DriveType) == "PLEXTOR"
        assert params.value(redumper.Flag.PlextorLeadinRetries) == 4

    def test_verbose_can_be_disabled(self) -> None:
        params = derive_defaults(
            REDUMPER, KnownSystem.SonyPlayStation, MediaType.CDROM, "D:", "game.bin", 8,
            options={"verbose": False},
        )
        assert not params.is_present(redumper.Flag.Verbose)

    def test_non_disc_media(self) -> None:
        params = derive_defaults(
            REDUMPER, KnownSystem.IBMPCCompatible, MediaType.FloppyDisk, "A:", "disk.img", 8
        )
        assert params.command is redumper.Command.NONE
        assert params.generate_parameters() is None


# ---------------------------------------------------------------------------
# dd
# ---------------------------------------------------------------------------


class TestDdDefaults:
    def test_cdrom(self) -> None:
        params = derive_defaults(DD, KnownSystem.IBMPCCompatible, MediaType.CDROM, "d", "out.iso", 48)
        assert params.generate_parameters() == (
            '--progress --size bs=1073741824 if="\\\\.\\D:" of="out.iso"'
        )

    def test_floppy_block_size(self) -> None:
        params = derive_defaults(
            DD, KnownSystem.IBMPCCompatible, MediaType.FloppyDisk, "A:", "disk.img"
        )
        assert params.value(dd.Flag.BlockSize) == 1440 * 1024
        assert params.input_path == "\\\\.\\A:"

    def test_block_size_option(self) -> None:
        params = derive_defaults(
            DD, KnownSystem.IBMPCCompatible, MediaType.HardDisk, "E", "hd.img",
            options={"block_size": 4096},
        )
        assert params.value(dd.Flag.BlockSize) == 4096

    def test_round_trip(self) -> None:
        params = derive_defaults(DD, KnownSystem.SonyPlayStation, MediaType.CDROM, "D", "game.bin")
        assert parse(DD, params.generate_parameters()) == params

    def test_missing_output_does_not_generate(self) -> None:
        params = derive_defaults(DD, KnownSystem.SonyPlayStation, MediaType.CDROM, "D", "")
        assert params.command is dd.Command.Dump
        assert params.generate_parameters() is None


# ---------------------------------------------------------------------------
# Shared policy
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("dialect", [CREATOR, CHEF, REDUMPER, DD], ids=lambda d: d.name)
class TestInvalidCombination:
    def test_media_not_valid_for_system(self, dialect) -> None:
        params = derive_defaults(dialect, KnownSystem.SegaDreamcast, MediaType.BluRay, "D", "x", 8)
        assert params.command == dialect.none
        assert params.generate_parameters() is None

    def test_no_system(self, dialect) -> None:
        params = derive_defaults(dialect, None, MediaType.CDROM, "D", "x", 8)
        assert params.generate_parameters() is None

    def test_no_media(self, dialect) -> None:
        params = derive_defaults(dialect, KnownSystem.SonyPlayStation, MediaType.NONE, "D", "x", 8)
        assert params.generate_parameters() is None


@pytest.mark.parametrize("dialect", [CREATOR, CHEF, REDUMPER, DD], ids=lambda d: d.name)
def test_every_optical_default_round_trips(dialect) -> None:
    for system, media_types in VALID_MEDIA_TYPES.items():
        for media_type in media_types:
            if not media_type.is_optical:
                continue
            params = derive_defaults(dialect, system, media_type, "D", "dumps/out.bin", 4)
            line = params.generate_parameters()
            if line is None:
                continue
            assert parse(dialect, line) == params, (system, media_type, line)
