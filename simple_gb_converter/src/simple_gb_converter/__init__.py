"""Simple image to Game Boy 2bpp tile converter.

This module converts PNG/GIF/JPEG images into packed two-bit-plane tile data.
It can be invoked through the CLI (``python -m simple_gb_converter``) or
imported to encode a single image or tile into bytes.
"""

from .converter import (
    ConvertOptions,
    convert_file_to_tiles,
    convert_image_to_tiles,
    encode_image_tiles,
    load_image,
)
from .encoder import (
    BLACK,
    EncodedTile,
    encode_tile,
    extract_palette,
    order_palette,
    pack_planes,
    palette_sort_key,
    quantize_pixels,
    unpack_planes,
)
from .errors import ConversionError, PaletteOverflowError, PaletteOverflowWarning
from .geometry import TileGeometry, TileRegion, TileWalker, iter_tile_regions
from .output import format_hex_text

__all__ = [
    "BLACK",
    "ConversionError",
    "ConvertOptions",
    "EncodedTile",
    "PaletteOverflowError",
    "PaletteOverflowWarning",
    "TileGeometry",
    "TileRegion",
    "TileWalker",
    "convert_file_to_tiles",
    "convert_image_to_tiles",
    "encode_image_tiles",
    "encode_tile",
    "extract_palette",
    "format_hex_text",
    "iter_tile_regions",
    "load_image",
    "order_palette",
    "pack_planes",
    "palette_sort_key",
    "quantize_pixels",
    "unpack_planes",
]
