"""Shared utilities for the DCP inspector."""

from .config import Settings, get_settings
from .exceptions import (
    DCPPackageError,
    MalformedDocumentError,
    AssetNotFoundError,
    AssetMapNotFoundError,
    SizeMismatchError,
    AssetReadError,
)
from .models import (
    Format,
    AssetType,
    ContentKind,
    is_mxf,
    Chunk,
    AMAsset,
    AssetMap,
    CPLAsset,
    Picture,
    Sound,
    Subtitle,
    Reel,
    CPL,
    PKLAsset,
    PKL,
    DCP,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "DCPPackageError",
    "MalformedDocumentError",
    "AssetNotFoundError",
    "AssetMapNotFoundError",
    "SizeMismatchError",
    "AssetReadError",
    # Models
    "Format",
    "AssetType",
    "ContentKind",
    "is_mxf",
    "Chunk",
    "AMAsset",
    "AssetMap",
    "CPLAsset",
    "Picture",
    "Sound",
    "Subtitle",
    "Reel",
    "CPL",
    "PKLAsset",
    "PKL",
    "DCP",
]
