"""Package consistency checks.

This module provides cross-document checks on an assembled DCP:
- Format agreement between asset map, CPLs and PKLs
- PKL entries against the asset map (presence, declared size)
- CPL reel assets against the PKLs

None of these checks is fatal, and asset hashes are never verified.
"""

from ..shared.models import DCP, Format


def validate_package_consistency(dcp: DCP) -> list[str]:
    """Check an assembled DCP for inconsistencies between its documents.

    Args:
        dcp: Assembled DCP

    Returns:
        List of warning messages (empty if consistent)
    """
    warnings: list[str] = []

    # === Document Format ===
    _validate_formats(dcp, warnings)

    # === Packing Lists vs Asset Map ===
    _validate_packing_lists(dcp, warnings)

    # === Compositions vs Packing Lists ===
    _validate_compositions(dcp, warnings)

    return warnings


def _validate_formats(dcp: DCP, warnings: list[str]) -> None:
    """Flag documents whose known format differs from the asset map's."""
    if dcp.format is Format.UNKNOWN:
        warnings.append("Asset map format is unknown")
        return

    documents = [("CPL", cpl.id, cpl.format) for cpl in dcp.cpls]
    documents += [("PKL", pkl.id, pkl.format) for pkl in dcp.pkls]
    for kind, doc_id, doc_format in documents:
        if doc_format is not Format.UNKNOWN and doc_format is not dcp.format:
            warnings.append(
                f"{kind} {doc_id} is {doc_format.value} but the asset map is {dcp.format.value}"
            )


def _validate_packing_lists(dcp: DCP, warnings: list[str]) -> None:
    """Check every PKL asset is in the asset map with the same size."""
    for pkl in dcp.pkls:
        for asset in pkl.assets:
            am_asset = dcp.asset_map.find_asset(asset.id)
            if am_asset is None:
                warnings.append(f"PKL {pkl.id} lists asset {asset.id} missing from the asset map")
            elif am_asset.size != asset.size:
                warnings.append(
                    f"Asset {asset.id} size differs: PKL says {asset.size}, "
                    f"asset map says {am_asset.size}"
                )


def _validate_compositions(dcp: DCP, warnings: list[str]) -> None:
    """Check every asset a CPL plays is packed by some PKL."""
    if not dcp.cpls:
        warnings.append("Package contains no composition playlist")
        return

    packed_ids = {asset.id for pkl in dcp.pkls for asset in pkl.assets}
    for cpl in dcp.cpls:
        for reel in cpl.reels:
            for asset in reel.assets:
                if asset.id not in packed_ids:
                    warnings.append(
                        f"CPL {cpl.id} reel {reel.id} references asset {asset.id} "
                        "not listed in any PKL"
                    )
