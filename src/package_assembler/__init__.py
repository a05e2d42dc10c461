"""Package assembly module for DCP inspection.

This module handles:
- Asset map discovery in a DCP root directory
- File size verification against the asset map
- Content-based asset classification (header sniffing)
- Assembly of the parsed package
- Cross-document consistency checks
"""

from .assembler import check_file_size, find_asset_map, generate_dcp, resolve_chunk_path
from .sniffing import classify_file, sniff_asset_type
from .validators import validate_package_consistency

__all__ = [
    "check_file_size",
    "find_asset_map",
    "generate_dcp",
    "resolve_chunk_path",
    "classify_file",
    "sniff_asset_type",
    "validate_package_consistency",
]
