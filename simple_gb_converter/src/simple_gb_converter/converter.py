"""Core conversion logic for the simple GB tile converter."""

# Reference: 2bpp tile layout (Game Boy / Game Boy Color VRAM)
# Item                  | Size           | Notes
# ----------------------|----------------|-------------------------------------------------------
# Tile                  | 16 bytes       | 8×8 dots, 2 bytes per row
# Row byte 0            | 1 byte         | bit 0 of each dot's color index, leftmost dot = bit 7
# Row byte 1            | 1 byte         | bit 1 of each dot's color index, leftmost dot = bit 7
# Color index           | 0–3            | per-tile palette, brightest color first
# Wider/taller tiles    | W×H/4 bytes    | every 8-dot run of every row in row-major order

from __future__ import annotations

import io
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Tuple

from PIL import Image, UnidentifiedImageError

from .encoder import Color, EncodedTile, encode_tile, fallback_index
from .errors import ConversionError, PaletteOverflowError, PaletteOverflowWarning
from .geometry import TILE_UNIT, TileGeometry, TileRegion, TileWalker


@dataclass(frozen=True)
class ConvertOptions:
    """Tile layout and encoding options."""

    tile_width: int = TILE_UNIT
    tile_height: int = TILE_UNIT
    offset_x: int = 0
    offset_y: int = 0
    spacing_x: int = 0
    spacing_y: int = 0
    transparent: bool = False  # first color of each tile stays at index 0
    strict: bool = False  # raise instead of warning on palette overflow
    jobs: int = 1

    def __post_init__(self) -> None:
        if self.jobs < 1:
            raise ConversionError("Jobs must be at least 1")
        self.geometry()

    def geometry(self) -> TileGeometry:
        return TileGeometry(
            tile_width=self.tile_width,
            tile_height=self.tile_height,
            offset_x=self.offset_x,
            offset_y=self.offset_y,
            spacing_x=self.spacing_x,
            spacing_y=self.spacing_y,
        )


def format_color(color: Color) -> str:
    r, g, b, a = color
    return f"#{r:02X}{g:02X}{b:02X}{a:02X}"


def load_image(source: str | Path | BinaryIO) -> Tuple[Image.Image, str]:
    """Decode a PNG/GIF/JPEG file or binary stream into an RGBA image.

    Returns the image and the name of the format it was decoded from.
    """
    try:
        if isinstance(source, (str, Path)):
            with Image.open(source) as img:
                fmt = img.format or "unknown"
                return img.convert("RGBA"), fmt
        # stdin is not seekable, which Pillow requires
        with Image.open(io.BytesIO(source.read())) as img:
            fmt = img.format or "unknown"
            return img.convert("RGBA"), fmt
    except FileNotFoundError as exc:
        raise ConversionError(f"Input file not found: {source}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise ConversionError(f"Failed to read image: {getattr(source, 'name', source)}") from exc


def tile_pixels(image: Image.Image, region: TileRegion) -> List[Color]:
    """Read a tile's pixels in row-major order."""
    access = image.load()
    return [
        access[x, y]
        for y in range(region.y, region.y + region.height)
        for x in range(region.x, region.x + region.width)
    ]


def _overflow_message(tile: EncodedTile) -> str:
    colors = ", ".join(format_color(c) for c in tile.overflow_colors)
    slot = fallback_index(tile.palette)
    return (
        f"Tile at ({tile.region.x}, {tile.region.y}) has more than 4 colors; "
        f"{colors} mapped to palette index {slot} ({format_color(tile.palette[slot])})"
    )


def encode_image_tiles(image: Image.Image, options: ConvertOptions | None = None) -> List[EncodedTile]:
    """Encode every tile fully contained in ``image``, in row-major order.

    Tiles with more than four colors are reported with
    :class:`PaletteOverflowWarning`, or raise :class:`PaletteOverflowError`
    when ``options.strict`` is set.
    """
    options = options or ConvertOptions()
    image = image.convert("RGBA") if image.mode != "RGBA" else image
    walker = TileWalker(options.geometry(), image.width, image.height)

    def encode(region: TileRegion) -> EncodedTile:
        return encode_tile(tile_pixels(image, region), region, options.transparent)

    if options.jobs > 1:
        image.load()
        with ThreadPoolExecutor(max_workers=options.jobs) as pool:
            tiles = list(pool.map(encode, walker))
    else:
        tiles = [encode(region) for region in walker]

    for tile in tiles:
        if tile.overflowed:
            if options.strict:
                raise PaletteOverflowError(_overflow_message(tile))
            warnings.warn(_overflow_message(tile), PaletteOverflowWarning, stacklevel=2)
    return tiles


def convert_image_to_tiles(image: Image.Image, options: ConvertOptions | None = None) -> bytes:
    return b"".join(tile.data for tile in encode_image_tiles(image, options))


def convert_file_to_tiles(path: str | Path, options: ConvertOptions | None = None) -> bytes:
    image, _fmt = load_image(path)
    return convert_image_to_tiles(image, options)
