"""Tile rectangles laid out over a source image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import ConversionError

TILE_UNIT = 8


@dataclass(frozen=True)
class TileRegion:
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class TileGeometry:
    """Tile size, position of the first tile and the gap between tiles."""

    tile_width: int = TILE_UNIT
    tile_height: int = TILE_UNIT
    offset_x: int = 0
    offset_y: int = 0
    spacing_x: int = 0
    spacing_y: int = 0

    def __post_init__(self) -> None:
        for name in ("tile_width", "tile_height"):
            value = getattr(self, name)
            if value <= 0 or value % TILE_UNIT:
                raise ConversionError(
                    f"{name.replace('_', ' ').capitalize()} must be a positive multiple of {TILE_UNIT} (got {value})"
                )
        for name in ("offset_x", "offset_y", "spacing_x", "spacing_y"):
            if getattr(self, name) < 0:
                raise ConversionError(f"{name.replace('_', ' ').capitalize()} must be zero or greater")

    @property
    def bytes_per_tile(self) -> int:
        return self.tile_width * self.tile_height // 4


class TileWalker:
    """Row-major sequence of the tiles fully contained in a surface.

    Iterating the walker twice yields the same regions; tiles that would
    cross the right or bottom edge are skipped.
    """

    def __init__(self, geometry: TileGeometry, surface_width: int, surface_height: int):
        self.geometry = geometry
        self.surface_width = surface_width
        self.surface_height = surface_height

    def __iter__(self) -> Iterator[TileRegion]:
        g = self.geometry
        y = g.offset_y
        while y + g.tile_height <= self.surface_height:
            x = g.offset_x
            while x + g.tile_width <= self.surface_width:
                yield TileRegion(x, y, g.tile_width, g.tile_height)
                x += g.tile_width + g.spacing_x
            y += g.tile_height + g.spacing_y

    def __len__(self) -> int:
        g = self.geometry
        return _fit_count(self.surface_width, g.offset_x, g.tile_width, g.spacing_x) * _fit_count(
            self.surface_height, g.offset_y, g.tile_height, g.spacing_y
        )


def _fit_count(extent: int, offset: int, size: int, spacing: int) -> int:
    if offset + size > extent:
        return 0
    return (extent - offset - size) // (size + spacing) + 1


def iter_tile_regions(
    geometry: TileGeometry, surface_width: int, surface_height: int
) -> Iterator[TileRegion]:
    return iter(TileWalker(geometry, surface_width, surface_height))
