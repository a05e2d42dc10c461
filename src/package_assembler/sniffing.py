"""Content-based asset classification.

Reads the leading bytes of a file and classifies it independently of
its filename:
- XML documents by their root element name (PackingList, CompositionPlaylist)
- MXF essence by the fixed 28-byte partition pack key

This is the authoritative classification; the asset map's filename
based guess is only a hint.
"""

from pathlib import Path
from typing import BinaryIO

from ..shared.config import get_settings
from ..shared.models import AssetType

# Leading bytes of an audio or picture MXF file
MXF_HEADER_KEY = bytes([
    0x06, 0x0E, 0x2B, 0x34, 0x02, 0x05, 0x01, 0x01,
    0x0D, 0x01, 0x02, 0x01, 0x01, 0x02, 0x04, 0x00,
    0x83, 0x00, 0x00, 0x78, 0x00, 0x01, 0x00, 0x02,
    0x00, 0x00, 0x00, 0x01,
])


def read_header(file_obj: BinaryIO, size: int) -> bytes:
    """Read up to `size` leading bytes; fewer if the file is shorter."""
    return file_obj.read(size)


def sniff_asset_type(header: bytes) -> AssetType:
    """Classify a file from its leading bytes.

    A header shorter than the MXF key can never match it.

    Args:
        header: Leading bytes of the file

    Returns:
        PKL, CPL or MXF, or AssetType.UNKNOWN if nothing matched
    """
    if b"PackingList" in header:
        return AssetType.PKL
    if b"CompositionPlaylist" in header:
        return AssetType.CPL
    if header.startswith(MXF_HEADER_KEY):
        return AssetType.MXF
    return AssetType.UNKNOWN


def classify_file(path: str | Path, header_size: int | None = None) -> AssetType:
    """Classify a file on disk from its leading bytes.

    Open and read failures yield AssetType.UNKNOWN instead of raising.

    Args:
        path: File to classify
        header_size: Bytes to read (default from settings)

    Returns:
        Classified asset type

    Example:
        >>> classify_file("d65572db-2e09-4745-817d-a2881222e2db_cpl.xml")
        <AssetType.CPL: 1>
    """
    if header_size is None:
        header_size = get_settings().header_sniff_bytes

    try:
        with open(path, "rb") as f:
            header = read_header(f, header_size)
    except OSError:
        return AssetType.UNKNOWN

    return sniff_asset_type(header)
