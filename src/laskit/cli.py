"""laskit CLI: inspect and rewrite LAS files."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from laskit._version import __version__


def cmd_info(args: argparse.Namespace) -> int:
    """Show info about a LAS file."""
    from laskit.io.file import LasFile

    path = args.file
    if not Path(path).exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    print(f"File: {path}")
    print(f"Size: {Path(path).stat().st_size / 1024 / 1024:.1f} MB")

    las = LasFile.from_path(path)
    header = las.header
    print(f"LAS version: {header.version}")
    print(f"Point format: {int(header.point_data_format)}")
    print(f"Points: {len(las):,}")
    print(f"VLRs: {len(las.vlrs)}")
    if header.generating_software:
        print(f"Software: {header.generating_software}")
    print(
        f"Scale: {header.x_scale_factor} {header.y_scale_factor} "
        f"{header.z_scale_factor}"
    )
    print(f"Offset: {header.x_offset} {header.y_offset} {header.z_offset}")

    bounds = header.bounds
    print(f"Bounds X: [{bounds.minx:.3f}, {bounds.maxx:.3f}]")
    print(f"Bounds Y: [{bounds.miny:.3f}, {bounds.maxy:.3f}]")
    print(f"Bounds Z: [{bounds.minz:.3f}, {bounds.maxz:.3f}]")
    return 0


def cmd_rewrite(args: argparse.Namespace) -> int:
    """Read a LAS file and write it back out with recomputed header fields."""
    from laskit.io.file import LasFile

    input_path = args.input
    output_path = args.output

    if not Path(input_path).exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    t0 = time.time()
    las = LasFile.from_path(input_path)
    header = las.to_path(output_path, auto_offsets=args.auto_offsets)
    elapsed = time.time() - t0

    print(
        f"Rewrote {header.number_of_point_records:,} points: "
        f"{input_path} -> {output_path} ({elapsed:.1f}s)"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="laskit",
        description="laskit: read, modify and rewrite LAS files",
    )
    parser.add_argument(
        "--version", action="version", version=f"laskit {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info
    info_parser = subparsers.add_parser("info", help="Show LAS file info")
    info_parser.add_argument("file", help="LAS file path")

    # rewrite
    rewrite_parser = subparsers.add_parser(
        "rewrite", help="Rewrite a LAS file with recomputed header fields"
    )
    rewrite_parser.add_argument("input", help="Input file path")
    rewrite_parser.add_argument("output", help="Output file path")
    rewrite_parser.add_argument(
        "--auto-offsets",
        action="store_true",
        help="Center offsets on the bounding box",
    )
    rewrite_parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "rewrite": cmd_rewrite,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
