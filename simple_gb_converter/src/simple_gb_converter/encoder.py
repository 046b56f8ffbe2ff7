"""Per-tile 2bpp encoder.

Each tile is encoded on its own: its palette is discovered from its pixels,
sorted brightest first, and every pixel row of 8 dots becomes two bytes
(low bit-plane, then high bit-plane):

    row pixels   : 0 1 2 3 2 1 0 3
    low  (bit 0) : 0 1 0 1 0 1 0 1  -> 0x55
    high (bit 1) : 0 0 1 1 1 0 0 1  -> 0x39
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .errors import ConversionError
from .geometry import TileRegion

Color = Tuple[int, int, int, int]
Palette = Tuple[Color, Color, Color, Color]

PALETTE_SIZE = 4
PIXELS_PER_BYTE_ROW = 8
BLACK: Color = (0, 0, 0, 255)


@dataclass(frozen=True)
class EncodedTile:
    region: TileRegion
    data: bytes
    palette: Palette
    overflow_colors: Tuple[Color, ...] = field(default_factory=tuple)

    @property
    def overflowed(self) -> bool:
        return bool(self.overflow_colors)


def extract_palette(pixels: Sequence[Color], limit: int = PALETTE_SIZE) -> List[Color]:
    """Collect up to ``limit`` distinct colors in first-seen order.

    Scanning stops at the ``limit``-th distinct color; unused slots are black.
    """
    found: List[Color] = []
    for color in pixels:
        if color not in found:
            found.append(color)
            if len(found) >= limit:
                break
    return found + [BLACK] * (limit - len(found))


def palette_sort_key(color: Color) -> Tuple[int, int, int]:
    """Brightness key ``(R+G+B, G+B, B)``, channels premultiplied by alpha."""
    r, g, b, a = color
    r, g, b = (r * a // 255, g * a // 255, b * a // 255)
    return (r + g + b, g + b, b)


def order_palette(palette: Sequence[Color], pin_first: bool = False) -> Palette:
    """Sort palette slots brightest first.

    With ``pin_first`` the first discovered color stays in slot 0 (the
    transparent color) and only slots 1-3 are sorted.
    """
    slots = list(palette)
    if len(slots) != PALETTE_SIZE:
        raise ConversionError(f"Palette must have exactly {PALETTE_SIZE} entries")
    start = 1 if pin_first else 0
    for i in range(PALETTE_SIZE):
        for j in range(start, PALETTE_SIZE - 1 - i):
            if palette_sort_key(slots[j + 1]) > palette_sort_key(slots[j]):
                slots[j], slots[j + 1] = slots[j + 1], slots[j]
    return tuple(slots)  # type: ignore[return-value]


def fallback_index(palette: Sequence[Color]) -> int:
    """Slot used for colors missing from the palette: the darkest one.

    Black is the darkest possible key, so a black sentinel slot wins when
    present. Ties go to the highest slot index.
    """
    return min(reversed(range(len(palette))), key=lambda i: palette_sort_key(palette[i]))


def quantize_pixels(
    pixels: Sequence[Color], palette: Sequence[Color]
) -> Tuple[List[int], List[Color]]:
    """Map every pixel to the first palette slot holding its color.

    Returns the index list and the colors that matched no slot (first-seen
    order). Those pixels take the :func:`fallback_index` slot.
    """
    slot_of: dict[Color, int] = {}
    for idx, color in enumerate(palette):
        slot_of.setdefault(color, idx)

    fallback = fallback_index(palette)
    unmatched: List[Color] = []
    indices: List[int] = []
    for color in pixels:
        idx = slot_of.get(color)
        if idx is None:
            if color not in unmatched:
                unmatched.append(color)
            idx = fallback
        indices.append(idx)
    return indices, unmatched


def pack_planes(indices: Sequence[int]) -> bytes:
    """Pack 2-bit indices into low/high bit-plane byte pairs, 8 pixels each."""
    if len(indices) % PIXELS_PER_BYTE_ROW:
        raise ConversionError(
            f"Pixel count must be a multiple of {PIXELS_PER_BYTE_ROW} (got {len(indices)})"
        )
    data = bytearray()
    for start in range(0, len(indices), PIXELS_PER_BYTE_ROW):
        low = high = 0
        for value in indices[start : start + PIXELS_PER_BYTE_ROW]:
            if not 0 <= value < PALETTE_SIZE:
                raise ConversionError(f"Palette index out of range: {value}")
            low = (low << 1) | (value & 1)
            high = (high << 1) | ((value >> 1) & 1)
        data.append(low)
        data.append(high)
    return bytes(data)


def unpack_planes(data: bytes) -> List[int]:
    """Inverse of :func:`pack_planes`."""
    if len(data) % 2:
        raise ConversionError("Bit-plane data must contain low/high byte pairs")
    indices: List[int] = []
    for pos in range(0, len(data), 2):
        low, high = data[pos], data[pos + 1]
        for bit in range(PIXELS_PER_BYTE_ROW - 1, -1, -1):
            indices.append(((high >> bit) & 1) << 1 | ((low >> bit) & 1))
    return indices


def encode_tile(pixels: Sequence[Color], region: TileRegion, pin_first: bool = False) -> EncodedTile:
    """Encode one tile given its pixels in row-major order."""
    if len(pixels) != region.width * region.height:
        raise ConversionError(
            f"Tile at ({region.x}, {region.y}) expects {region.width * region.height} pixels, got {len(pixels)}"
        )
    palette = order_palette(extract_palette(pixels), pin_first)
    indices, unmatched = quantize_pixels(pixels, palette)
    return EncodedTile(
        region=region,
        data=pack_planes(indices),
        palette=palette,
        overflow_colors=tuple(unmatched),
    )
