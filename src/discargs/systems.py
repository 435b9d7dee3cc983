"""systems.py – Known systems, media types and which combinations are valid.

The deriver refuses to build parameters for a (system, media type) pair that
is not listed here.  Systems without an entry only accept ``MediaType.NONE``.
"""

from __future__ import annotations

from enum import Enum


class MediaType(Enum):
    NONE = "NONE"

    # Tape
    Cassette = "Cassette"
    DataCartridge = "DataCartridge"
    OpenReel = "OpenReel"

    # Disc
    BluRay = "BluRay"
    CDROM = "CDROM"
    DVD = "DVD"
    FloppyDisk = "FloppyDisk"
    Floptical = "Floptical"
    GDROM = "GDROM"
    HDDVD = "HDDVD"
    HardDisk = "HardDisk"
    IomegaBernoulliDisk = "IomegaBernoulliDisk"
    IomegaJaz = "IomegaJaz"
    IomegaZip = "IomegaZip"
    LaserDisc = "LaserDisc"
    Nintendo64DD = "Nintendo64DD"
    NintendoFamicomDiskSystem = "NintendoFamicomDiskSystem"
    NintendoGameCubeGameDisc = "NintendoGameCubeGameDisc"
    NintendoWiiOpticalDisc = "NintendoWiiOpticalDisc"
    NintendoWiiUOpticalDisc = "NintendoWiiUOpticalDisc"
    UMD = "UMD"

    # Solid state
    Cartridge = "Cartridge"
    CED = "CED"
    CompactFlash = "CompactFlash"
    MMC = "MMC"
    SDCard = "SDCard"
    FlashDrive = "FlashDrive"

    @property
    def is_optical(self) -> bool:
        return self in _OPTICAL


_OPTICAL = frozenset({
    MediaType.BluRay,
    MediaType.CDROM,
    MediaType.DVD,
    MediaType.GDROM,
    MediaType.HDDVD,
    MediaType.NintendoGameCubeGameDisc,
    MediaType.NintendoWiiOpticalDisc,
    MediaType.NintendoWiiUOpticalDisc,
})


class KnownSystem(Enum):
    NONE = "NONE"

    # Consoles
    AtariJaguarCD = "AtariJaguarCD"
    BandaiPlaydiaQuickInteractiveSystem = "BandaiPlaydiaQuickInteractiveSystem"
    BandaiApplePippin = "BandaiApplePippin"
    CommodoreAmigaCD32 = "CommodoreAmigaCD32"
    CommodoreAmigaCDTV = "CommodoreAmigaCDTV"
    EnvizionsEVOSmartConsole = "EnvizionsEVOSmartConsole"
    FujitsuFMTownsMarty = "FujitsuFMTownsMarty"
    HasbroVideoNow = "HasbroVideoNow"
    HasbroVideoNowColor = "HasbroVideoNowColor"
    HasbroVideoNowJr = "HasbroVideoNowJr"
    HasbroVideoNowXP = "HasbroVideoNowXP"
    MattelHyperscan = "MattelHyperscan"
    MicrosoftXBOX = "MicrosoftXBOX"
    MicrosoftXBOX360 = "MicrosoftXBOX360"
    MicrosoftXBOXOne = "MicrosoftXBOXOne"
    NECPCEngineTurboGrafxCD = "NECPCEngineTurboGrafxCD"
    NECPCFX = "NECPCFX"
    NintendoGameCube = "NintendoGameCube"
    NintendoSonySuperNESCDROMSystem = "NintendoSonySuperNESCDROMSystem"
    NintendoWii = "NintendoWii"
    NintendoWiiU = "NintendoWiiU"
    Panasonic3DOInteractiveMultiplayer = "Panasonic3DOInteractiveMultiplayer"
    PhilipsCDi = "PhilipsCDi"
    PioneerLaserActive = "PioneerLaserActive"
    SegaCDMegaCD = "SegaCDMegaCD"
    SegaDreamcast = "SegaDreamcast"
    SegaSaturn = "SegaSaturn"
    SNKNeoGeoCD = "SNKNeoGeoCD"
    SonyPlayStation = "SonyPlayStation"
    SonyPlayStation2 = "SonyPlayStation2"
    SonyPlayStation3 = "SonyPlayStation3"
    SonyPlayStation4 = "SonyPlayStation4"
    SonyPlayStationPortable = "SonyPlayStationPortable"
    TandyMemorexVisualInformationSystem = "TandyMemorexVisualInformationSystem"
    VMLabsNuon = "VMLabsNuon"
    VTechVFlashVSmilePro = "VTechVFlashVSmilePro"
    ZAPiTGamesGameWaveFamilyEntertainmentSystem = "ZAPiTGamesGameWaveFamilyEntertainmentSystem"

    # Computers
    AcornArchimedes = "AcornArchimedes"
    AppleMacintosh = "AppleMacintosh"
    CommodoreAmiga = "CommodoreAmiga"
    FujitsuFMTowns = "FujitsuFMTowns"
    IBMPCCompatible = "IBMPCCompatible"
    NECPC88 = "NECPC88"
    NECPC98 = "NECPC98"
    SharpX68000 = "SharpX68000"

    # Arcade
    KonamiFirebeat = "KonamiFirebeat"
    NamcoSystem357 = "NamcoSystem357"
    SegaLindbergh = "SegaLindbergh"
    SegaNu = "SegaNu"

    # Other
    AudioCD = "AudioCD"
    BDVideo = "BDVideo"
    DVDVideo = "DVDVideo"
    EnhancedCD = "EnhancedCD"
    HDDVDVideo = "HDDVDVideo"
    PhotoCD = "PhotoCD"
    SuperAudioCD = "SuperAudioCD"
    VideoCD = "VideoCD"


_M = MediaType
_S = KnownSystem

VALID_MEDIA_TYPES: dict[KnownSystem, tuple[MediaType, ...]] = {
    # Consoles
    _S.AtariJaguarCD: (_M.CDROM,),
    _S.BandaiPlaydiaQuickInteractiveSystem: (_M.CDROM,),
    _S.BandaiApplePippin: (_M.CDROM,),
    _S.CommodoreAmigaCD32: (_M.CDROM,),
    _S.CommodoreAmigaCDTV: (_M.CDROM,),
    _S.EnvizionsEVOSmartConsole: (_M.CDROM, _M.DVD),
    _S.FujitsuFMTownsMarty: (_M.CDROM, _M.FloppyDisk),
    _S.HasbroVideoNow: (_M.CDROM,),
    _S.HasbroVideoNowColor: (_M.CDROM,),
    _S.HasbroVideoNowJr: (_M.CDROM,),
    _S.HasbroVideoNowXP: (_M.CDROM,),
    _S.MattelHyperscan: (_M.CDROM,),
    _S.MicrosoftXBOX: (_M.CDROM, _M.DVD),
    _S.MicrosoftXBOX360: (_M.CDROM, _M.DVD),
    _S.MicrosoftXBOXOne: (_M.BluRay,),
    _S.NECPCEngineTurboGrafxCD: (_M.CDROM,),
    _S.NECPCFX: (_M.CDROM,),
    _S.NintendoGameCube: (_M.NintendoGameCubeGameDisc,),
    _S.NintendoSonySuperNESCDROMSystem: (_M.CDROM,),
    _S.NintendoWii: (_M.NintendoWiiOpticalDisc,),
    _S.NintendoWiiU: (_M.NintendoWiiUOpticalDisc,),
    _S.Panasonic3DOInteractiveMultiplayer: (_M.CDROM,),
    _S.PhilipsCDi: (_M.CDROM,),
    _S.PioneerLaserActive: (_M.CDROM, _M.LaserDisc),
    _S.SegaCDMegaCD: (_M.CDROM,),
    _S.SegaDreamcast: (_M.CDROM, _M.GDROM),
    _S.SegaSaturn: (_M.CDROM,),
    _S.SNKNeoGeoCD: (_M.CDROM,),
    _S.SonyPlayStation: (_M.CDROM,),
    _S.SonyPlayStation2: (_M.CDROM, _M.DVD),
    _S.SonyPlayStation3: (_M.BluRay, _M.CDROM, _M.DVD),
    _S.SonyPlayStation4: (_M.BluRay,),
    _S.SonyPlayStationPortable: (_M.UMD, _M.CDROM, _M.DVD),
    _S.TandyMemorexVisualInformationSystem: (_M.CDROM,),
    _S.VMLabsNuon: (_M.DVD,),
    _S.VTechVFlashVSmilePro: (_M.CDROM,),
    _S.ZAPiTGamesGameWaveFamilyEntertainmentSystem: (_M.DVD,),
    # Computers
    _S.AcornArchimedes: (_M.CDROM, _M.FloppyDisk),
    _S.AppleMacintosh: (_M.CDROM, _M.DVD, _M.FloppyDisk, _M.HardDisk),
    _S.CommodoreAmiga: (_M.CDROM, _M.FloppyDisk),
    _S.FujitsuFMTowns: (_M.CDROM,),
    _S.IBMPCCompatible: (_M.CDROM, _M.DVD, _M.FloppyDisk, _M.HardDisk),
    _S.NECPC88: (_M.CDROM, _M.FloppyDisk),
    _S.NECPC98: (_M.CDROM, _M.DVD, _M.FloppyDisk),
    _S.SharpX68000: (_M.CDROM, _M.FloppyDisk),
    # Arcade
    _S.KonamiFirebeat: (_M.CDROM, _M.DVD),
    _S.NamcoSystem357: (_M.CDROM, _M.DVD, _M.BluRay),
    _S.SegaLindbergh: (_M.DVD,),
    _S.SegaNu: (_M.BluRay,),
    # Other
    _S.AudioCD: (_M.CDROM,),
    _S.BDVideo: (_M.BluRay,),
    _S.DVDVideo: (_M.DVD,),
    _S.EnhancedCD: (_M.CDROM,),
    _S.HDDVDVideo: (_M.HDDVD,),
    _S.PhotoCD: (_M.CDROM,),
    _S.SuperAudioCD: (_M.CDROM,),
    _S.VideoCD: (_M.CDROM,),
}


def get_valid_media_types(system: KnownSystem | None) -> tuple[MediaType, ...]:
    """Media types a system is known to ship on; ``(NONE,)`` if unknown."""
    if system is None:
        return (MediaType.NONE,)
    return VALID_MEDIA_TYPES.get(system, (MediaType.NONE,))


def is_valid_combination(system: KnownSystem | None, media_type: MediaType | None) -> bool:
    if media_type is None or media_type is MediaType.NONE:
        return False
    return media_type in get_valid_media_types(system)


def parse_system(name: str) -> KnownSystem | None:
    """Case-insensitive lookup by enum name."""
    folded = name.casefold()
    for system in KnownSystem:
        if system.name.casefold() == folded:
            return system
    return None


def parse_media_type(name: str) -> MediaType | None:
    folded = name.casefold()
    for media in MediaType:
        if media.name.casefold() == folded:
            return media
    return None
