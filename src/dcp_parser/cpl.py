"""Composition playlist (CPL) parsing.

http://en.wikipedia.org/wiki/Digital_Cinema_Package#Composition_playlist_file
"""

from pathlib import Path
from typing import Any

from lxml import etree

from ..shared.models import CPL, ContentKind, Format
from .xml_parser import (
    detect_format,
    find_path,
    get_text,
    load_document,
    parse_datetime,
    parse_int,
    read_document_file,
    validate_document,
)

CPL_NAMESPACES = {
    "http://www.digicine.com/PROTO-ASDCP-CPL-20040511#": Format.INTEROP,
    "http://www.smpte-ra.org/schemas/429-7/2006/CPL": Format.SMPTE,
}

# Exact, case-sensitive ContentKind values
CONTENT_KINDS = {
    "test": ContentKind.TEST,
    "feature": ContentKind.FEATURE,
    "advertisement": ContentKind.ADVERTISEMENT,
}


def parse_cpl_file(path: str | Path) -> CPL:
    """Parse a CPL XML file.

    Raises:
        AssetNotFoundError: If the file does not exist
        AssetReadError: If the file cannot be read
        MalformedDocumentError: If the XML cannot be decoded
    """
    return parse_cpl(read_document_file(path))


def parse_cpl(xml_content: bytes | str) -> CPL:
    """Parse composition playlist XML into a CPL.

    Args:
        xml_content: Raw XML bytes or string

    Returns:
        Parsed CPL with reels in document order

    Raises:
        MalformedDocumentError: If the XML is malformed or holds undecodable values
    """
    root = load_document(xml_content, "CPL")

    data = {
        "format": detect_format(root, CPL_NAMESPACES),
        "id": get_text(root, "Id"),
        "annotation_text": get_text(root, "AnnotationText"),
        "creator": get_text(root, "Creator"),
        "content_title_text": get_text(root, "ContentTitleText"),
        "issue_date": parse_datetime(root, "IssueDate"),
        "content_kind": parse_content_kind(get_text(root, "ContentKind")),
        "reels": [_parse_reel(elem) for elem in find_path(root, "ReelList", "Reel")],
    }
    return validate_document(CPL, data, "CPL")


def parse_content_kind(value: str) -> ContentKind:
    """Map a ContentKind string; unrecognized values are UNKNOWN."""
    return CONTENT_KINDS.get(value, ContentKind.UNKNOWN)


def _parse_reel(elem: etree._Element) -> dict[str, Any]:
    """Parse a ReelList/Reel element.

    Each of MainPicture, MainSound and MainSubtitle may be absent.
    """
    picture = _find_main_asset(elem, "MainPicture")
    sound = _find_main_asset(elem, "MainSound")
    subtitle = _find_main_asset(elem, "MainSubtitle")

    return {
        "id": get_text(elem, "Id"),
        "picture": _parse_picture(picture) if picture is not None else None,
        "sound": _parse_language_asset(sound) if sound is not None else None,
        "subtitle": _parse_language_asset(subtitle) if subtitle is not None else None,
    }


def _find_main_asset(reel: etree._Element, tag: str) -> etree._Element | None:
    """Get the first AssetList/<tag> element of a reel."""
    matches = find_path(reel, "AssetList", tag)
    return matches[0] if matches else None


def _parse_asset_fields(elem: etree._Element) -> dict[str, Any]:
    """Parse the fields every reel asset carries."""
    return {
        "id": get_text(elem, "Id"),
        "annotation_text": get_text(elem, "AnnotationText"),
        "edit_rate": get_text(elem, "EditRate"),
        "intrinsic_duration": parse_int(elem, "IntrinsicDuration"),
        "entry_point": parse_int(elem, "EntryPoint"),
        "duration": parse_int(elem, "Duration"),
    }


def _parse_picture(elem: etree._Element) -> dict[str, Any]:
    """Parse a MainPicture element."""
    return {
        **_parse_asset_fields(elem),
        "frame_rate": get_text(elem, "FrameRate"),
        "screen_aspect_ratio": get_text(elem, "ScreenAspectRatio"),
    }


def _parse_language_asset(elem: etree._Element) -> dict[str, Any]:
    """Parse a MainSound or MainSubtitle element."""
    return {
        **_parse_asset_fields(elem),
        "language": get_text(elem, "Language"),
    }
