from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "simple_gb_converter/src"))

from simple_gb_converter import ConversionError, TileGeometry, TileWalker, iter_tile_regions


def _origins(geometry: TileGeometry, width: int, height: int) -> list[tuple[int, int]]:
    return [(r.x, r.y) for r in iter_tile_regions(geometry, width, height)]


def test_two_tiles_across_16x8() -> None:
    assert _origins(TileGeometry(), 16, 8) == [(0, 0), (8, 0)]


def test_partial_tile_on_right_edge_is_skipped() -> None:
    assert _origins(TileGeometry(), 15, 8) == [(0, 0)]


def test_surface_smaller_than_tile_yields_nothing() -> None:
    walker = TileWalker(TileGeometry(), 7, 7)
    assert list(walker) == []
    assert len(walker) == 0


def test_row_major_order() -> None:
    assert _origins(TileGeometry(), 16, 16) == [(0, 0), (8, 0), (0, 8), (8, 8)]


def test_offset_and_spacing() -> None:
    geometry = TileGeometry(offset_x=1, offset_y=1, spacing_x=2, spacing_y=2)
    walker = TileWalker(geometry, 40, 24)

    origins = [(r.x, r.y) for r in walker]
    assert origins == [
        (1, 1), (11, 1), (21, 1), (31, 1),
        (1, 11), (11, 11), (21, 11), (31, 11),
    ]
    assert len(walker) == len(origins)


def test_walker_can_be_iterated_again() -> None:
    walker = TileWalker(TileGeometry(tile_width=16), 64, 32)
    first = list(walker)
    assert first == list(walker)
    assert all(r.width == 16 and r.height == 8 for r in first)
    assert first[1].box == (16, 0, 32, 8)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"tile_width": 12},
        {"tile_height": 0},
        {"tile_width": -8},
        {"offset_x": -1},
        {"spacing_y": -2},
    ],
)
def test_invalid_geometry_is_rejected(kwargs) -> None:
    with pytest.raises(ConversionError):
        TileGeometry(**kwargs)


def test_bytes_per_tile() -> None:
    assert TileGeometry().bytes_per_tile == 16
    assert TileGeometry(tile_width=16, tile_height=24).bytes_per_tile == 96
