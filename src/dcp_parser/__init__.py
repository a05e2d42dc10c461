"""DCP document parser module.

This module handles:
- Asset map parsing and filename-based type guessing
- Composition playlist (CPL) parsing
- Packing list (PKL) parsing and MIME type mapping
"""

from .assetmap import guess_asset_type, parse_asset_map, parse_asset_map_file
from .cpl import parse_cpl, parse_cpl_file
from .pkl import parse_pkl, parse_pkl_file

__all__ = [
    "guess_asset_type",
    "parse_asset_map",
    "parse_asset_map_file",
    "parse_cpl",
    "parse_cpl_file",
    "parse_pkl",
    "parse_pkl_file",
]
