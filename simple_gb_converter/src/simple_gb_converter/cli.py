"""Command line interface for the simple GB tile converter."""

from __future__ import annotations

import argparse
import sys
import warnings
from pathlib import Path
from typing import BinaryIO

from .converter import ConvertOptions, encode_image_tiles, load_image
from .errors import ConversionError
from .geometry import TILE_UNIT
from .output import format_hex_text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Convert PNG, GIF or JPEG images into 2bpp tiles for Game Boy programming.\n"
            "Tiles are read left to right, then top to bottom; each tile gets its own 4-color palette,\n"
            "ordered by R+G+B (brightest = color 0), ties broken by G+B and then B.\n"
            "Tiles with more than 4 colors map the extra colors to the darkest palette entry and print a warning."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument("input", nargs="?", default="-", help="Image file to read ('-' or omitted: stdin)")
    parser.add_argument("output", nargs="?", default="-", help="File to write ('-' or omitted: stdout)")
    parser.add_argument(
        "-d",
        "--dim",
        type=int,
        default=TILE_UNIT,
        help="Square dimension of each tile. Must be a multiple of 8",
    )
    parser.add_argument("--width", type=int, help="Width of each tile (overrides --dim)")
    parser.add_argument("--height", type=int, help="Height of each tile (overrides --dim)")
    parser.add_argument(
        "-o",
        "--offset",
        type=int,
        default=0,
        help="Offset of the first tile from both the top and left edge",
    )
    parser.add_argument("-x", type=int, dest="offset_x", help="Horizontal offset of first tile from left")
    parser.add_argument("-y", type=int, dest="offset_y", help="Vertical offset of first tile from top")
    parser.add_argument("-s", "--spacing", type=int, default=0, help="Distance between tiles")
    parser.add_argument("--sx", type=int, dest="spacing_x", help="Horizontal distance between tiles")
    parser.add_argument("--sy", type=int, dest="spacing_y", help="Vertical distance between tiles")
    parser.add_argument(
        "-t",
        "--transparent",
        action="store_true",
        help="Treat the first color of each tile as transparency (color 0), skipping color sorting for it",
    )
    parser.add_argument(
        "-c",
        "--delimiter",
        default="",
        help="Characters written after every value in text output (e.g. ',')",
    )
    parser.add_argument(
        "--binary",
        action="store_true",
        help="Write raw tile bytes instead of 0x.. text",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of warning when a tile has more than 4 colors",
    )
    parser.add_argument("-j", "--jobs", type=int, default=1, help="Number of threads used to encode tiles")
    return parser


def options_from_args(args: argparse.Namespace) -> ConvertOptions:
    def pick(value: int | None, fallback: int) -> int:
        return fallback if value is None else value

    return ConvertOptions(
        tile_width=pick(args.width, args.dim),
        tile_height=pick(args.height, args.dim),
        offset_x=pick(args.offset_x, args.offset),
        offset_y=pick(args.offset_y, args.offset),
        spacing_x=pick(args.spacing_x, args.spacing),
        spacing_y=pick(args.spacing_y, args.spacing),
        transparent=args.transparent,
        strict=args.strict,
        jobs=args.jobs,
    )


def _open_input(name: str) -> str | BinaryIO:
    return sys.stdin.buffer if name in ("-", "") else name


def write_output(data: bytes, target: str, binary: bool, delimiter: str) -> None:
    payload = data if binary else format_hex_text(data, delimiter).encode("ascii")
    if target in ("-", ""):
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
        print("wrote stdout", file=sys.stderr)
    else:
        path = Path(target)
        try:
            path.write_bytes(payload)
        except OSError as exc:
            raise ConversionError(f"Failed to write output: {path}") from exc
        print(f"wrote {path}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = options_from_args(args)
        image, fmt = load_image(_open_input(args.input))
        print(f"{args.input} decoded from format {fmt}", file=sys.stderr)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            tiles = encode_image_tiles(image, options)
        for warning in caught:
            print(f"Warning: {warning.message}", file=sys.stderr)

        if not tiles:
            print("No tile fits inside the image with the given size and offset", file=sys.stderr)
        else:
            print(f"encoded {len(tiles)} tiles", file=sys.stderr)
        write_output(b"".join(tile.data for tile in tiles), args.output, args.binary, args.delimiter)
        return 0
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
