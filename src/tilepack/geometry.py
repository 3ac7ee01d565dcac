"""
Geometry utilities for the tilepack project.

This module defines:

- `Rect`, an axis-aligned integer rectangle with Shapely conversion.
- `Block`, a named block to be packed, which records its own placement.

Coordinate convention
---------------------

Sheets use image coordinates:

- The origin (0, 0) is the **top-left** corner of the sheet.
- x grows to the right, y grows downward.
- A rectangle covers [x, x + width) x [y, y + height), so two rectangles
  that share an edge do not overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from shapely.geometry import Polygon, box


# ---------------------------------------------------------------------------
# Rect
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle with its top-left corner at (x, y).
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_polygon(self) -> Polygon:
        """
        Return the rectangle as a Shapely polygon (useful for spatial indexes).
        """
        return box(self.x, self.y, self.right, self.bottom)

    def overlaps(self, other: "Rect") -> bool:
        """
        True if the two rectangles share a region of positive area.

        Touching along an edge or at a corner is not an overlap.
        """
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def contains(self, other: "Rect") -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


# ---------------------------------------------------------------------------
# Block: a tile waiting to be (or already) placed
# ---------------------------------------------------------------------------

@dataclass
class Block:
    """
    A single block to pack:

    - id: caller-chosen name (e.g. an image file stem)
    - (width, height): size in pixels, read-only to the packer
    - (x, y): top-left placement, None until placed

    The min/max properties give the tile descriptor used in tile sheets,
    with `max_x`/`max_y` exclusive.
    """

    id: str
    width: int
    height: int
    x: Optional[int] = None
    y: Optional[int] = None

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def max_side(self) -> int:
        return max(self.width, self.height)

    def rect(self) -> Rect:
        """
        Return the placed rectangle. Raises ValueError if not placed yet.
        """
        if not self.is_placed:
            raise ValueError(f"Block {self.id!r} has not been placed.")
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def min_x(self) -> int:
        return self.rect().x

    @property
    def min_y(self) -> int:
        return self.rect().y

    @property
    def max_x(self) -> int:
        return self.rect().right

    @property
    def max_y(self) -> int:
        return self.rect().bottom


__all__ = [
    "Rect",
    "Block",
]
