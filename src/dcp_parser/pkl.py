"""Packing list (PKL) parsing.

http://en.wikipedia.org/wiki/Digital_Cinema_Package#Packing_list_file_or_PKL_Package_key_list
"""

from pathlib import Path
from typing import Any

from lxml import etree

from ..shared.models import PKL, AssetType, Format
from .xml_parser import (
    detect_format,
    find_path,
    get_raw_text,
    get_text,
    load_document,
    parse_datetime,
    parse_int,
    read_document_file,
    validate_document,
)

PKL_NAMESPACES = {
    "http://www.digicine.com/PROTO-ASDCP-PKL-20040311#": Format.INTEROP,
    "http://www.smpte-ra.org/schemas/429-8/2007/PKL": Format.SMPTE,
}

# Exact-match MIME types; the only source of MXF_PICTURE and MXF_SOUND
MIME_ASSET_TYPES = {
    "application/x-smpte-mxf;asdcpKind=Picture": AssetType.MXF_PICTURE,
    "application/x-smpte-mxf;asdcpKind=Sound": AssetType.MXF_SOUND,
    "text/xml;asdcpKind=CPL": AssetType.CPL,
}


def parse_pkl_file(path: str | Path) -> PKL:
    """Parse a PKL XML file.

    Raises:
        AssetNotFoundError: If the file does not exist
        AssetReadError: If the file cannot be read
        MalformedDocumentError: If the XML cannot be decoded
    """
    return parse_pkl(read_document_file(path))


def parse_pkl(xml_content: bytes | str) -> PKL:
    """Parse packing list XML into a PKL.

    Asset hashes are kept as written and never verified.

    Args:
        xml_content: Raw XML bytes or string

    Returns:
        Parsed PKL with a mapped type for every asset

    Raises:
        MalformedDocumentError: If the XML is malformed or holds undecodable values
    """
    root = load_document(xml_content, "PKL")

    data = {
        "format": detect_format(root, PKL_NAMESPACES),
        "id": get_text(root, "Id"),
        "annotation_text": get_text(root, "AnnotationText"),
        "issue_date": parse_datetime(root, "IssueDate"),
        "issuer": get_text(root, "Issuer"),
        "creator": get_text(root, "Creator"),
        "assets": [_parse_asset(elem) for elem in find_path(root, "AssetList", "Asset")],
    }
    return validate_document(PKL, data, "PKL")


def asset_type_from_mime(mime_type: str) -> AssetType:
    """Map a PKL asset's MIME type; unmapped values are UNKNOWN."""
    return MIME_ASSET_TYPES.get(mime_type, AssetType.UNKNOWN)


def _parse_asset(elem: etree._Element) -> dict[str, Any]:
    """Parse an AssetList/Asset element."""
    mime_type = get_raw_text(elem, "Type") or ""
    return {
        "id": get_text(elem, "Id"),
        "annotation_text": get_text(elem, "AnnotationText"),
        "hash": get_text(elem, "Hash"),
        "size": parse_int(elem, "Size"),
        "mime_type": mime_type,
        "type": asset_type_from_mime(mime_type),
    }
