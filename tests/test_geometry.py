"""
Tests for tilepack.geometry

These tests focus on:
- Rect edges, area and Shapely conversion
- Treating touching rectangles as non-overlapping
- Block placement state and tile descriptors
"""

from __future__ import annotations

import pytest
from shapely.geometry import Polygon

from tilepack.geometry import Block, Rect


def test_rect_edges_and_area():
    r = Rect(2, 3, 4, 5)
    assert r.right == 6
    assert r.bottom == 8
    assert r.area == 20


def test_rect_to_polygon_matches_bounds():
    poly = Rect(2, 3, 4, 5).to_polygon()
    assert isinstance(poly, Polygon)
    assert poly.bounds == (2.0, 3.0, 6.0, 8.0)
    assert poly.area == pytest.approx(20.0)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Rect(0, 0, 10, 10), Rect(5, 5, 10, 10), True),
        (Rect(0, 0, 10, 10), Rect(2, 2, 2, 2), True),
        # Shared edge
        (Rect(0, 0, 10, 10), Rect(10, 0, 5, 10), False),
        (Rect(0, 0, 10, 10), Rect(0, 10, 10, 5), False),
        # Shared corner
        (Rect(0, 0, 10, 10), Rect(10, 10, 1, 1), False),
        (Rect(0, 0, 1, 1), Rect(5, 5, 1, 1), False),
    ],
)
def test_rect_overlaps(a, b, expected):
    assert a.overlaps(b) is expected
    assert b.overlaps(a) is expected


def test_rect_contains():
    sheet = Rect(0, 0, 20, 10)
    assert sheet.contains(Rect(0, 0, 20, 10))
    assert sheet.contains(Rect(15, 5, 5, 5))
    assert not sheet.contains(Rect(16, 5, 5, 5))
    assert not sheet.contains(Rect(-1, 0, 1, 1))


def test_unplaced_block_has_no_rect():
    block = Block("tree", 4, 6)
    assert not block.is_placed
    assert block.size == (4, 6)
    assert block.max_side == 6
    with pytest.raises(ValueError):
        block.rect()


def test_placed_block_tile_descriptor():
    block = Block("tree", 4, 6, x=10, y=20)
    assert block.is_placed
    assert block.rect() == Rect(10, 20, 4, 6)
    assert (block.min_x, block.min_y, block.max_x, block.max_y) == (10, 20, 14, 26)
