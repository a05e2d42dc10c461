"""XML parsing utilities shared by the asset map, CPL and PKL parsers.

This module provides:
- Safe document loading (no entity expansion, no network access)
- Namespace-agnostic element lookup by local name
- Graceful handling of optional fields
- Strict decoding of numeric and date values
- Namespace-based format detection
"""

from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

from lxml import etree
from pydantic import BaseModel, ValidationError

from ..shared.exceptions import AssetNotFoundError, AssetReadError, MalformedDocumentError
from ..shared.models import Format

ModelT = TypeVar("ModelT", bound=BaseModel)

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


def load_document(xml_content: bytes | str, document: str) -> etree._Element:
    """Parse raw XML into its root element.

    Args:
        xml_content: Raw XML bytes or string
        document: Document kind for error messages (e.g. 'AssetMap')

    Returns:
        Root element

    Raises:
        MalformedDocumentError: If the XML is not well-formed
    """
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")

    try:
        return etree.fromstring(xml_content, parser=_PARSER)
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentError(
            f"Invalid {document} XML: {e}",
            {"document": document, "line": e.lineno, "column": e.offset},
        ) from e


def read_document_file(path: str | Path) -> bytes:
    """Read an entire XML file into memory.

    Raises:
        AssetNotFoundError: If the file does not exist
        AssetReadError: If the file cannot be read
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise AssetNotFoundError(
            f"File not found: {path}",
            {"file_path": str(path)},
        ) from e
    except OSError as e:
        raise AssetReadError(
            f"Unable to read {path}",
            original_error=e,
            details={"file_path": str(path)},
        ) from e


def detect_format(root: etree._Element, namespaces: dict[str, Format]) -> Format:
    """Map a document's default namespace to its format.

    Args:
        root: Root element of the document
        namespaces: Known namespace URIs and the format each denotes

    Returns:
        Matching format, or Format.UNKNOWN for any other namespace
    """
    return namespaces.get(root.nsmap.get(None, ""), Format.UNKNOWN)


def local_name(elem: etree._Element) -> str:
    """Get an element's tag without its namespace."""
    return etree.QName(elem).localname


def find_children(parent: etree._Element, tag: str) -> list[etree._Element]:
    """Get all direct child elements with the given local name."""
    return [
        child
        for child in parent
        if isinstance(child.tag, str) and local_name(child) == tag
    ]


def find_child(parent: etree._Element, tag: str) -> etree._Element | None:
    """Get the first direct child element with the given local name."""
    children = find_children(parent, tag)
    return children[0] if children else None


def find_path(parent: etree._Element, *tags: str) -> list[etree._Element]:
    """Get every element reached by following a path of local names.

    Example:
        >>> find_path(root, "AssetList", "Asset")
    """
    elements = [parent]
    for tag in tags:
        elements = [child for elem in elements for child in find_children(elem, tag)]
    return elements


def get_optional_text(
    parent: etree._Element,
    tag: str,
    default: str | None = None,
) -> str | None:
    """Get optional element text content.

    Args:
        parent: Parent XML element
        tag: Local name to find
        default: Default value if not found

    Returns:
        Stripped text content or default
    """
    elem = find_child(parent, tag)
    if elem is None or elem.text is None:
        return default
    return elem.text.strip()


def get_raw_text(parent: etree._Element, tag: str) -> str | None:
    """Get element text exactly as written, for values compared verbatim."""
    elem = find_child(parent, tag)
    if elem is None:
        return None
    return elem.text or ""


def get_text(parent: etree._Element, tag: str) -> str:
    """Get element text content, or an empty string if absent."""
    return get_optional_text(parent, tag, "")


def parse_int(parent: etree._Element, tag: str) -> int:
    """Parse a non-negative integer element.

    Absent or empty elements decode to 0.

    Raises:
        MalformedDocumentError: If the text is not a non-negative integer
    """
    value = get_optional_text(parent, tag)
    if not value:
        return 0
    if not (value.isascii() and value.isdigit()):
        raise MalformedDocumentError(
            f"Element '{tag}' must be a non-negative integer, got '{value}'",
            {"parent": local_name(parent), "element": tag, "value": value},
        )
    return int(value)


def parse_optional_int(parent: etree._Element, tag: str) -> int | None:
    """Parse an optional non-negative integer element."""
    if not get_optional_text(parent, tag):
        return None
    return parse_int(parent, tag)


def parse_datetime(parent: etree._Element, tag: str) -> datetime | None:
    """Parse an ISO 8601 datetime element.

    Raises:
        MalformedDocumentError: If the text is present but not a timestamp
    """
    value = get_optional_text(parent, tag)
    if not value:
        return None
    try:
        # Handle 'Z' suffix
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise MalformedDocumentError(
            f"Element '{tag}' is not a valid timestamp: '{value}'",
            {"parent": local_name(parent), "element": tag, "value": value},
        ) from e


def validate_document(model: type[ModelT], data: dict[str, Any], document: str) -> ModelT:
    """Validate and convert a parsed document dictionary to its Pydantic model.

    Args:
        model: Model class to build
        data: Dictionary from one of the document parsers
        document: Document kind for error messages

    Returns:
        Validated model instance

    Raises:
        MalformedDocumentError: If a value is out of range for the model
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedDocumentError(
            f"{document} validation failed: {e}",
            {"document": document, "validation_error": str(e)},
        ) from e
