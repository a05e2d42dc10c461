"""Asset map parsing.

The asset map is the top-level manifest of a DCP: it lists every
physical file in the package and its declared size.
http://en.wikipedia.org/wiki/Digital_Cinema_Package#Asset_map_file
"""

import re
from pathlib import Path
from typing import Any

from lxml import etree

from ..shared.models import AssetMap, AssetType, Format
from .xml_parser import (
    detect_format,
    find_path,
    get_raw_text,
    get_text,
    load_document,
    parse_datetime,
    parse_int,
    parse_optional_int,
    read_document_file,
    validate_document,
)

ASSET_MAP_NAMESPACES = {
    "http://www.digicine.com/PROTO-ASDCP-AM-20040311#": Format.INTEROP,
    "http://www.smpte-ra.org/schemas/429-9/2007/AM": Format.SMPTE,
}

# Filename patterns for guessing an asset's type; the guess may be wrong
CPL_PATH_PATTERN = re.compile(r"(cpl|CPL)\.(xml|XML)$")
PKL_PATH_PATTERN = re.compile(r"(pkl|PKL)\.(xml|XML)$")
MXF_PATH_PATTERN = re.compile(r"\.(mxf|MXF)$")


def parse_asset_map_file(path: str | Path) -> AssetMap:
    """Parse an asset map XML file.

    Raises:
        AssetNotFoundError: If the file does not exist
        AssetReadError: If the file cannot be read
        MalformedDocumentError: If the XML cannot be decoded
    """
    return parse_asset_map(read_document_file(path))


def parse_asset_map(xml_content: bytes | str) -> AssetMap:
    """Parse asset map XML into an AssetMap.

    Missing elements are tolerated and decode to type defaults.

    Args:
        xml_content: Raw XML bytes or string

    Returns:
        Parsed AssetMap with a guessed type for every asset

    Raises:
        MalformedDocumentError: If the XML is malformed or holds undecodable values

    Example:
        >>> with open("ASSETMAP.xml", "rb") as f:
        ...     asset_map = parse_asset_map(f.read())
        >>> asset_map.paths[0]
        '4d9e98c3-c923-4910-ae0e-9f5951c9cc5f_pkl.xml'
    """
    root = load_document(xml_content, "AssetMap")

    data = {
        "format": detect_format(root, ASSET_MAP_NAMESPACES),
        "id": get_text(root, "Id"),
        "creator": get_text(root, "Creator"),
        "volume_count": parse_int(root, "VolumeCount"),
        "issuer": get_text(root, "Issuer"),
        "issue_date": parse_datetime(root, "IssueDate"),
        "assets": [_parse_asset(elem) for elem in find_path(root, "AssetList", "Asset")],
    }
    return validate_document(AssetMap, data, "AssetMap")


def _parse_asset(elem: etree._Element) -> dict[str, Any]:
    """Parse an AssetList/Asset element and guess its type."""
    chunks = [_parse_chunk(chunk) for chunk in find_path(elem, "ChunkList", "Chunk")]
    return {
        "id": get_text(elem, "Id"),
        "type": guess_asset_type(
            get_raw_text(elem, "PackingList"),
            [chunk["path"] for chunk in chunks],
        ),
        "chunks": chunks,
    }


def _parse_chunk(elem: etree._Element) -> dict[str, Any]:
    """Parse a ChunkList/Chunk element."""
    return {
        "path": get_text(elem, "Path"),
        "size": parse_int(elem, "Length"),
        "volume_index": parse_optional_int(elem, "VolumeIndex"),
        "offset": parse_int(elem, "Offset"),
    }


def guess_asset_type(packing_list: str | None, paths: list[str]) -> AssetType:
    """Guess an asset's type from the manifest alone.

    An explicit PackingList flag of 'true' wins. Otherwise every chunk
    path is matched in order and the last match decides.

    Args:
        packing_list: Text of the asset's PackingList element, if any
        paths: The asset's chunk paths in document order

    Returns:
        Guessed type, AssetType.UNKNOWN if nothing matched
    """
    if packing_list == "true":
        return AssetType.PKL

    asset_type = AssetType.UNKNOWN
    for path in paths:
        if CPL_PATH_PATTERN.search(path):
            asset_type = AssetType.CPL
        elif PKL_PATH_PATTERN.search(path):
            asset_type = AssetType.PKL
        elif MXF_PATH_PATTERN.search(path):
            asset_type = AssetType.MXF
    return asset_type
