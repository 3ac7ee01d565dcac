"""
Evaluation utilities for the tilepack project.

This module checks and scores packed layouts. For a list of placed blocks
and the sheet size returned by the packer we:

1. Find every pair of tiles that overlap (shared positive area).
2. Check each tile lies within [0, width) x [0, height) of the sheet.
3. Check the sheet is tight: some tile reaches the right edge and some tile
   reaches the bottom edge.
4. Score the layout by fill ratio (placed area / sheet area) and aspect
   ratio (long side / short side).

`validate_layout` raises on the first failed check; `evaluate_layout`
returns the score without validating.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd
from shapely.strtree import STRtree

from .geometry import Block, Rect


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def layout_rects(blocks: Iterable[Block]) -> List[Rect]:
    """
    Return the placed rectangle of each block. Unplaced blocks raise
    ValueError.
    """
    return [b.rect() for b in blocks]


def find_overlaps(rects: Sequence[Rect]) -> List[Tuple[int, int]]:
    """
    Return every pair (i, j), i < j, of rectangles that truly overlap.

    Rectangles that only touch along edges or at corners are OK. Candidate
    pairs come from a Shapely STRtree, then are confirmed with exact
    integer arithmetic.
    """
    if len(rects) < 2:
        return []

    index = STRtree([r.to_polygon() for r in rects])
    pairs = []
    for i, rect in enumerate(rects):
        for j in index.query(rect.to_polygon()):
            j = int(j)
            if j <= i:
                continue
            if rect.overlaps(rects[j]):
                pairs.append((i, j))
    return sorted(pairs)


def bounding_extent(rects: Sequence[Rect]) -> Tuple[int, int]:
    """
    Return (max right edge, max bottom edge) over all rectangles, i.e. the
    smallest origin-anchored sheet containing them. (0, 0) if empty.
    """
    if not rects:
        return 0, 0
    rights = np.fromiter((r.right for r in rects), dtype=np.int64, count=len(rects))
    bottoms = np.fromiter((r.bottom for r in rects), dtype=np.int64, count=len(rects))
    return int(rights.max()), int(bottoms.max())


def fill_ratio(rects: Sequence[Rect], bounds: Tuple[int, int]) -> float:
    """
    Fraction of the sheet area covered by the rectangles (0.0 for an empty
    sheet).
    """
    width, height = bounds
    sheet_area = width * height
    if sheet_area <= 0:
        return 0.0
    used = int(np.sum([r.area for r in rects], dtype=np.int64))
    return used / float(sheet_area)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_layout(blocks: Sequence[Block], bounds: Tuple[int, int]) -> None:
    """
    Check that a packed layout is consistent with its sheet size.

    Raises ValueError if:
    - some block is unplaced
    - two blocks overlap
    - a block sticks out of the sheet (or has a negative coordinate)
    - the sheet is larger than the furthest right / bottom edges
    """
    unplaced = [b.id for b in blocks if not b.is_placed]
    if unplaced:
        raise ValueError(f"Layout has unplaced blocks. Examples: {unplaced[:5]}")

    rects = layout_rects(blocks)
    width, height = bounds

    sheet = Rect(0, 0, width, height)
    outside = [b.id for b, r in zip(blocks, rects) if not sheet.contains(r)]
    if outside:
        raise ValueError(
            f"Blocks lie outside the {width}x{height} sheet. Examples: {outside[:5]}"
        )

    overlaps = find_overlaps(rects)
    if overlaps:
        examples = [(blocks[i].id, blocks[j].id) for i, j in overlaps[:5]]
        raise ValueError(f"Layout has overlapping blocks. Examples: {examples}")

    extent = bounding_extent(rects)
    if extent != (width, height):
        raise ValueError(
            f"Sheet {width}x{height} is not tight; blocks only reach "
            f"{extent[0]}x{extent[1]}."
        )


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

@dataclass
class LayoutScore:
    """
    Summary of a packed layout.
    """

    width: int
    height: int
    num_blocks: int
    used_area: int
    fill_ratio: float

    @property
    def aspect_ratio(self) -> float:
        short = min(self.width, self.height)
        if short == 0:
            return 0.0
        return max(self.width, self.height) / float(short)


def evaluate_layout(blocks: Sequence[Block], bounds: Tuple[int, int]) -> LayoutScore:
    """
    Score a packed layout. Does not validate it; see `validate_layout`.
    """
    rects = layout_rects(blocks)
    width, height = bounds
    return LayoutScore(
        width=int(width),
        height=int(height),
        num_blocks=len(rects),
        used_area=sum(r.area for r in rects),
        fill_ratio=fill_ratio(rects, bounds),
    )


def score_table(scores: Sequence[LayoutScore]) -> pd.DataFrame:
    """
    Collect several layout scores into a DataFrame, one row per layout.

    Columns: num_blocks, width, height, used_area, fill_ratio, aspect_ratio.
    """
    records = [
        {
            "num_blocks": s.num_blocks,
            "width": s.width,
            "height": s.height,
            "used_area": s.used_area,
            "fill_ratio": s.fill_ratio,
            "aspect_ratio": s.aspect_ratio,
        }
        for s in scores
    ]
    return pd.DataFrame(
        records,
        columns=["num_blocks", "width", "height", "used_area", "fill_ratio", "aspect_ratio"],
    )


__all__ = [
    "layout_rects",
    "find_overlaps",
    "bounding_extent",
    "fill_ratio",
    "validate_layout",
    "LayoutScore",
    "evaluate_layout",
    "score_table",
]
