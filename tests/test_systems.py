"""Tests for known systems and valid media combinations."""

from discargs.systems import (
    VALID_MEDIA_TYPES,
    KnownSystem,
    MediaType,
    get_valid_media_types,
    is_valid_combination,
    parse_media_type,
    parse_system,
)


class TestValidMediaTypes:
    def test_known_system(self) -> None:
        assert get_valid_media_types(KnownSystem.SegaDreamcast) == (MediaType.CDROM, MediaType.GDROM)

    def test_unknown_system(self) -> None:
        assert get_valid_media_types(KnownSystem.NONE) == (MediaType.NONE,)
        assert get_valid_media_types(None) == (MediaType.NONE,)

    def test_every_entry_is_non_empty(self) -> None:
        for system, media in VALID_MEDIA_TYPES.items():
            assert media, system
            assert MediaType.NONE not in media


class TestCombination:
    def test_valid(self) -> None:
        assert is_valid_combination(KnownSystem.SonyPlayStation2, MediaType.DVD)

    def test_wrong_media(self) -> None:
        assert not is_valid_combination(KnownSystem.SegaDreamcast, MediaType.BluRay)

    def test_none_media_never_valid(self) -> None:
        assert not is_valid_combination(KnownSystem.NONE, MediaType.NONE)
        assert not is_valid_combination(KnownSystem.SonyPlayStation, None)


class TestLookup:
    def test_case_insensitive(self) -> None:
        assert parse_system("sonyplaystation2") is KnownSystem.SonyPlayStation2
        assert parse_media_type("cdrom") is MediaType.CDROM

    def test_unknown(self) -> None:
        assert parse_system("Atari2600") is None
        assert parse_media_type("Vinyl") is None

    def test_optical(self) -> None:
        assert MediaType.GDROM.is_optical
        assert not MediaType.FloppyDisk.is_optical
