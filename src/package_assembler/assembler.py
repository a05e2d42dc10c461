"""DCP assembly from a root directory.

Flow:
1. Locate the asset map in the root directory
2. Parse it
3. For every chunk: check its size, classify it by content, and parse it
   if it is a CPL or PKL
4. Build the DCP

Every step fails fast, and the DCP is only built once all of them have
succeeded, so a failed call never yields a partially filled package.
"""

import os
import re
import sys
from pathlib import Path

from aws_lambda_powertools import Logger

from ..dcp_parser.assetmap import parse_asset_map_file
from ..dcp_parser.cpl import parse_cpl_file
from ..dcp_parser.pkl import parse_pkl_file
from ..shared.config import get_settings
from ..shared.exceptions import (
    AssetMapNotFoundError,
    AssetNotFoundError,
    AssetReadError,
    SizeMismatchError,
)
from ..shared.models import CPL, DCP, PKL, AssetType
from .sniffing import classify_file

logger = Logger(service="dcp-inspector", stream=sys.stderr)

ASSET_MAP_NAME_PATTERN = re.compile(r"^(assetmap|ASSETMAP)(\.xml|\.XML)?$")


def generate_dcp(root_dir: str | Path) -> DCP:
    """Build a DCP from a root directory containing an asset map.

    Args:
        root_dir: DCP root directory

    Returns:
        Fully populated DCP

    Raises:
        AssetMapNotFoundError: If the directory holds no asset map
        AssetNotFoundError: If the directory or a referenced file is missing
        SizeMismatchError: If a file's length differs from the asset map
        MalformedDocumentError: If the asset map, a CPL or a PKL cannot be decoded
        AssetReadError: For any other read failure

    Example:
        >>> dcp = generate_dcp("/media/dcps/Tricks17_TST")
        >>> print(dcp)
        Type: Interop
        AssetMap: urn:uuid:88ef5d99-e2aa-483e-9697-943e18b77cea
        ...
    """
    settings = get_settings()
    root = Path(root_dir)

    asset_map_path = find_asset_map(root)
    asset_map = parse_asset_map_file(asset_map_path)

    logger.debug(
        "Located asset map",
        extra={
            "asset_map_file": asset_map_path.name,
            "asset_map_id": asset_map.id,
            "asset_count": len(asset_map.assets),
        },
    )

    cpls: list[CPL] = []
    pkls: list[PKL] = []

    for asset in asset_map.assets:
        for chunk in asset.chunks:
            chunk_path = resolve_chunk_path(root, chunk.path)
            check_file_size(chunk_path, chunk.size)

            # Content classification overrides the asset map's guess
            asset_type = classify_file(chunk_path, settings.header_sniff_bytes)

            logger.debug(
                "Classified chunk",
                extra={
                    "asset_id": asset.id,
                    "path": chunk.path,
                    "guessed_type": asset.type.name,
                    "asset_type": asset_type.name,
                },
            )

            if asset_type is AssetType.CPL:
                cpls.append(parse_cpl_file(chunk_path))
            elif asset_type is AssetType.PKL:
                pkls.append(parse_pkl_file(chunk_path))

    dcp = DCP(
        root_dir=str(root),
        asset_map=asset_map,
        cpls=cpls,
        pkls=pkls,
        asset_map_file=asset_map_path.name,
    )

    logger.info(
        "DCP assembled",
        extra={
            "root_dir": dcp.root_dir,
            "format": dcp.format.value,
            "file_count": len(dcp.files),
            "cpl_count": len(cpls),
            "pkl_count": len(pkls),
            "total_size_bytes": asset_map.size,
        },
    )

    return dcp


def find_asset_map(root_dir: str | Path) -> Path:
    """Find the asset map file in a DCP root directory.

    Only immediate regular files are considered, in sorted name order;
    the first whose name matches is used.

    Args:
        root_dir: Directory to scan

    Returns:
        Path to the asset map

    Raises:
        AssetMapNotFoundError: If no file matches
        AssetNotFoundError: If the directory does not exist
        AssetReadError: If the directory cannot be listed
    """
    root = Path(root_dir)
    try:
        with os.scandir(root) as it:
            names = sorted(entry.name for entry in it if entry.is_file())
    except FileNotFoundError as e:
        raise AssetNotFoundError(
            f"DCP directory not found: {root}",
            {"root_dir": str(root)},
        ) from e
    except OSError as e:
        raise AssetReadError(
            f"Unable to list DCP directory {root}",
            original_error=e,
            details={"root_dir": str(root)},
        ) from e

    for name in names:
        if ASSET_MAP_NAME_PATTERN.match(name):
            return root / name

    raise AssetMapNotFoundError(str(root))


def resolve_chunk_path(root_dir: str | Path, chunk_path: str) -> Path:
    """Join a chunk path onto the DCP root directory.

    Chunk paths are always relative to the root; a leading separator is
    dropped so an absolute path cannot point outside the package.

    Example:
        >>> resolve_chunk_path("/media/dcp", "/etc/video.mxf")
        PosixPath('/media/dcp/etc/video.mxf')
    """
    return Path(root_dir) / chunk_path.lstrip("/\\")


def check_file_size(path: str | Path, expected_size: int) -> int:
    """Check that a file exists and has the expected length.

    Args:
        path: File to check
        expected_size: Length declared by the asset map

    Returns:
        Actual size in bytes

    Raises:
        AssetNotFoundError: If the file does not exist
        AssetReadError: If the file cannot be stat'ed
        SizeMismatchError: If the length differs
    """
    try:
        actual_size = os.stat(path).st_size
    except FileNotFoundError as e:
        raise AssetNotFoundError(
            f"Asset file not found: {path}",
            {"file_path": str(path)},
        ) from e
    except OSError as e:
        raise AssetReadError(
            f"Unable to stat asset file {path}",
            original_error=e,
            details={"file_path": str(path)},
        ) from e

    if actual_size != expected_size:
        raise SizeMismatchError(
            expected=expected_size,
            actual=actual_size,
            file_path=str(path),
        )

    return actual_size
