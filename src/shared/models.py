"""Pydantic models for DCP structure and metadata.

This module defines the core data structures used throughout the inspector:
- Shared vocabulary (document format, asset type, content kind)
- Asset map models (assets and their file chunks)
- Composition playlist models (reels and their picture/sound/subtitle assets)
- Packing list models
- The assembled package

All models use Pydantic v2 and are immutable once built.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

NonNegativeInt = Annotated[int, Field(ge=0)]


class Format(str, Enum):
    """DCP schema generation that produced a document."""

    UNKNOWN = "Unknown"
    INTEROP = "Interop"
    SMPTE = "SMPTE"


class AssetType(IntEnum):
    """Classification of a file referenced by a DCP.

    MXF_PICTURE and MXF_SOUND are refinements of MXF and must stay
    directly after it; is_mxf relies on the ordering.
    """

    UNKNOWN = 0
    CPL = 1
    PKL = 2
    MXF = 3
    MXF_PICTURE = 4
    MXF_SOUND = 5

    @property
    def is_mxf(self) -> bool:
        """Check if this type is any kind of MXF essence."""
        return is_mxf(self)


def is_mxf(asset_type: AssetType) -> bool:
    """Check if an asset type falls in the MXF range."""
    return AssetType.MXF <= asset_type <= AssetType.MXF_SOUND


class ContentKind(str, Enum):
    """Kind of content a composition playlist describes."""

    UNKNOWN = "unknown"
    TEST = "test"
    FEATURE = "feature"
    ADVERTISEMENT = "advertisement"


# =============================================================================
# Asset map
# =============================================================================


class Chunk(BaseModel):
    """A single physical file that makes up all or part of an asset."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(
        default="",
        description="File path relative to the DCP root directory",
    )
    size: NonNegativeInt = Field(
        default=0,
        description="Declared length in bytes (the Chunk's Length element)",
    )
    volume_index: NonNegativeInt | None = Field(
        default=None,
        description="Volume holding the chunk, for multi-volume packages",
    )
    offset: NonNegativeInt = Field(
        default=0,
        description="Byte offset of this chunk within the asset",
    )


class AMAsset(BaseModel):
    """An asset map entry.

    The type is only a guess made from the manifest; the assembler
    classifies the file again from its content.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Asset UUID (urn:uuid:...)")
    type: AssetType = Field(
        default=AssetType.UNKNOWN,
        description="Type guessed from the PackingList flag and chunk filenames",
    )
    chunks: list[Chunk] = Field(default=[], description="File chunks in document order")

    @property
    def size(self) -> int:
        """Total declared size of all chunks."""
        return sum(chunk.size for chunk in self.chunks)

    @property
    def paths(self) -> list[str]:
        """File paths of all chunks."""
        return [chunk.path for chunk in self.chunks]


class AssetMap(BaseModel):
    """Root manifest of a DCP, listing every physical file."""

    model_config = ConfigDict(frozen=True)

    format: Format = Field(default=Format.UNKNOWN)
    id: str = Field(default="")
    creator: str = Field(default="")
    volume_count: Annotated[int, Field(ge=0, le=255)] = Field(default=0)
    issuer: str = Field(default="")
    issue_date: datetime | None = Field(default=None)
    assets: list[AMAsset] = Field(default=[])

    @property
    def size(self) -> int:
        """Summed size of all the assets referenced by the asset map."""
        return sum(asset.size for asset in self.assets)

    @property
    def paths(self) -> list[str]:
        """All asset file paths in document order."""
        return [path for asset in self.assets for path in asset.paths]

    def find_asset(self, asset_id: str) -> AMAsset | None:
        """Look up an asset by its ID."""
        for asset in self.assets:
            if asset.id == asset_id:
                return asset
        return None


# =============================================================================
# Composition playlist
# =============================================================================


class CPLAsset(BaseModel):
    """Fields shared by every asset a reel references."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="")
    annotation_text: str = Field(default="")
    edit_rate: str = Field(default="", description="Edit rate, e.g. '24 1'")
    intrinsic_duration: NonNegativeInt = Field(default=0, description="Frames")
    entry_point: NonNegativeInt = Field(default=0, description="Frames")
    duration: NonNegativeInt = Field(default=0, description="Frames")


class Picture(CPLAsset):
    """MainPicture asset of a reel."""

    frame_rate: str = Field(default="")
    screen_aspect_ratio: str = Field(default="")


class Sound(CPLAsset):
    """MainSound asset of a reel."""

    language: str = Field(default="")


class Subtitle(CPLAsset):
    """MainSubtitle asset of a reel."""

    language: str = Field(default="")


class Reel(BaseModel):
    """One segment of a composition. Any of its assets may be absent."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="")
    picture: Picture | None = Field(default=None)
    sound: Sound | None = Field(default=None)
    subtitle: Subtitle | None = Field(default=None)

    @property
    def assets(self) -> list[CPLAsset]:
        """The reel's present assets, picture first."""
        return [a for a in (self.picture, self.sound, self.subtitle) if a is not None]


class CPL(BaseModel):
    """Composition playlist: how reels are sequenced into a presentation."""

    model_config = ConfigDict(frozen=True)

    format: Format = Field(default=Format.UNKNOWN)
    id: str = Field(default="")
    annotation_text: str = Field(default="")
    creator: str = Field(default="")
    content_title_text: str = Field(default="")
    issue_date: datetime | None = Field(default=None)
    content_kind: ContentKind = Field(default=ContentKind.UNKNOWN)
    reels: list[Reel] = Field(default=[])

    @property
    def pictures(self) -> list[Picture]:
        """All picture assets, in reel order."""
        return [reel.picture for reel in self.reels if reel.picture is not None]

    @property
    def sounds(self) -> list[Sound]:
        """All sound assets, in reel order."""
        return [reel.sound for reel in self.reels if reel.sound is not None]

    @property
    def subtitles(self) -> list[Subtitle]:
        """All subtitle assets, in reel order."""
        return [reel.subtitle for reel in self.reels if reel.subtitle is not None]


# =============================================================================
# Packing list
# =============================================================================


class PKLAsset(BaseModel):
    """An asset listed in a packing list."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="")
    annotation_text: str = Field(default="")
    hash: str = Field(
        default="",
        description="Digest as written in the PKL; stored verbatim, never verified",
    )
    size: NonNegativeInt = Field(default=0)
    mime_type: str = Field(default="", description="Raw content of the Type element")
    type: AssetType = Field(
        default=AssetType.UNKNOWN,
        description="Type mapped from mime_type",
    )


class PKL(BaseModel):
    """Packing list: package contents with hashes and MIME types."""

    model_config = ConfigDict(frozen=True)

    format: Format = Field(default=Format.UNKNOWN)
    id: str = Field(default="")
    annotation_text: str = Field(default="")
    issue_date: datetime | None = Field(default=None)
    issuer: str = Field(default="")
    creator: str = Field(default="")
    assets: list[PKLAsset] = Field(default=[])


# =============================================================================
# Assembled package
# =============================================================================


class DCP(BaseModel):
    """All the components found within a DCP.

    Built in one go by package_assembler.generate_dcp and never
    modified afterwards.
    """

    model_config = ConfigDict(frozen=True)

    root_dir: str = Field(description="Root directory of the DCP")
    asset_map: AssetMap
    cpls: list[CPL] = Field(default=[])
    pkls: list[PKL] = Field(default=[])
    asset_map_file: str = Field(description="Filename of the asset map within root_dir")

    @property
    def format(self) -> Format:
        """Format of the DCP, as declared by its asset map."""
        return self.asset_map.format

    @property
    def files(self) -> list[str]:
        """The physical files that comprise the DCP, asset map first."""
        return [self.asset_map_file, *self.asset_map.paths]

    def __str__(self) -> str:
        lines = []
        if self.format is not Format.UNKNOWN:
            lines.append(f"Type: {self.format.value}")
        lines.append(f"AssetMap: {self.asset_map.id}")
        lines.extend(f"CPL: {cpl.annotation_text}" for cpl in self.cpls)
        lines.extend(f"PKL: {pkl.annotation_text}" for pkl in self.pkls)
        return "".join(f"{line}\n" for line in lines)
