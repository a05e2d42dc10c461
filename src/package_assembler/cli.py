"""Command line front end for inspecting a DCP directory.

Usage:
    dcp-inspect /media/dcps/Tricks17_TST

    # List every physical file, asset map first
    dcp-inspect /media/dcps/Tricks17_TST --files

    # Dump the whole package as JSON, with consistency warnings
    dcp-inspect /media/dcps/Tricks17_TST --json --check
"""

import argparse
import json
import sys

from aws_lambda_powertools import Logger

from ..shared.config import get_settings
from ..shared.exceptions import DCPPackageError
from .assembler import generate_dcp
from .validators import validate_package_consistency

logger = Logger(service="dcp-inspector", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dcp-inspect",
        description="Read a Digital Cinema Package and report its structure",
    )
    parser.add_argument(
        "root_dir",
        help="DCP root directory containing the ASSETMAP",
    )
    parser.add_argument(
        "--files",
        action="store_true",
        help="List the physical files of the package",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Report inconsistencies between asset map, CPLs and PKLs",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the inspector and return the process exit status."""
    args = build_parser().parse_args(argv)
    logger.setLevel(get_settings().log_level)

    try:
        dcp = generate_dcp(args.root_dir)
    except DCPPackageError as e:
        if args.json:
            print(json.dumps(e.to_dict(), indent=2))
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return 1

    warnings = validate_package_consistency(dcp) if args.check else []

    if args.json:
        output = dcp.model_dump(mode="json")
        output["files"] = dcp.files
        if args.check:
            output["warnings"] = warnings
        print(json.dumps(output, indent=2))
        return 0

    print(dcp, end="")
    if args.files:
        print("\nFiles:")
        for path in dcp.files:
            print(f"  {path}")
    if args.check:
        print("\nWarnings:" if warnings else "\nNo inconsistencies found")
        for warning in warnings:
            print(f"  - {warning}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
