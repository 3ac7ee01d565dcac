"""
High-level tile sheet builder for the tilepack project.

This module glues together:

- The growing binary-tree packer from `tilepack.packers.binary_tree`.
- The `Block` container from `tilepack.geometry`.
- CSV helpers from `tilepack.utils.io` and checks from `tilepack.evaluation`.

It exposes functions to:

- Wrap a list of blocks as a `Packable` (`BlockList`).
- Sort blocks so the packer can always grow (`sort_by_max_side`).
- Pack blocks into a `Tileset` and export it as a DataFrame / CSV.
- Use a small CLI for convenience:

      python -m tilepack.tileset --sizes data/raw/sizes.csv
      # or
      python -m tilepack.tileset --random 50 --seed 7 --plot sheet.png

Decoding images and compositing the actual sheet are left to the caller;
only sizes go in and only placements come out.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .config import PACK_FAILED, RANDOM_MAX_SIDE, RANDOM_MIN_SIDE, make_rng
from .geometry import Block, Rect
from .packers.binary_tree import InvalidBlockError, Packable, pack
from .utils.io import TILE_COLUMNS

log = logging.getLogger(__name__)


class PackingError(RuntimeError):
    """
    Raised when the packer cannot fit a block into the growing sheet.
    """


# ---------------------------------------------------------------------------
# Packable over a list of blocks
# ---------------------------------------------------------------------------

class BlockList(Packable):
    """
    `Packable` view over a list of `Block` objects.

    Placements are written straight into the blocks; each block may be
    placed only once.
    """

    def __init__(self, blocks: Sequence[Block]) -> None:
        self.blocks = list(blocks)

    def count(self) -> int:
        return len(self.blocks)

    def dimensions(self, index: int) -> Tuple[int, int]:
        return self.blocks[index].size

    def place(self, index: int, x: int, y: int) -> None:
        block = self.blocks[index]
        if block.is_placed:
            raise ValueError(f"Block {block.id!r} is already placed at ({block.x}, {block.y}).")
        block.x = x
        block.y = y


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

def sort_by_max_side(blocks: Iterable[Block]) -> List[Block]:
    """
    Return blocks sorted by decreasing `max(width, height)`.

    The sort is stable, so blocks with the same longest side keep their
    input order. Packing in this order keeps the first block large enough
    that every later block fits the sheet along at least one axis.
    """
    return sorted(blocks, key=lambda b: b.max_side, reverse=True)


def blocks_from_sizes(
    sizes: Iterable[Tuple[int, int]],
    ids: Optional[Sequence[str]] = None,
) -> List[Block]:
    """
    Build unplaced blocks from (width, height) pairs.

    If `ids` is None, blocks are named by their position ("0", "1", ...).
    """
    sizes = list(sizes)
    if ids is None:
        ids = [str(i) for i in range(len(sizes))]
    elif len(ids) != len(sizes):
        raise ValueError(f"Got {len(ids)} ids for {len(sizes)} sizes.")

    return [Block(id=str(i), width=w, height=h) for i, (w, h) in zip(ids, sizes)]


def blocks_from_df(df: pd.DataFrame) -> List[Block]:
    """
    Build unplaced blocks from a DataFrame with columns id, width, height.
    """
    return blocks_from_sizes(
        zip(df["width"].tolist(), df["height"].tolist()),
        ids=df["id"].astype(str).tolist(),
    )


def generate_random_sizes(
    n: int,
    min_side: int = RANDOM_MIN_SIDE,
    max_side: int = RANDOM_MAX_SIDE,
    seed: Optional[int] = None,
) -> List[Tuple[int, int]]:
    """
    Draw `n` random (width, height) pairs with sides in [min_side, max_side].

    The same seed always yields the same sizes. Handy for demos,
    benchmarks and property tests.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    if min_side < 1 or max_side < min_side:
        raise ValueError(
            f"Need 1 <= min_side <= max_side, got min_side={min_side}, max_side={max_side}"
        )

    rng = make_rng(seed)
    sides = rng.integers(min_side, max_side + 1, size=(n, 2))
    return [(int(w), int(h)) for w, h in sides]


# ---------------------------------------------------------------------------
# Tileset
# ---------------------------------------------------------------------------

@dataclass
class Tileset:
    """
    Result of packing: the sheet size and the placed tiles, in packing order.
    """

    width: int
    height: int
    tiles: List[Block] = field(default_factory=list)

    def get(self, tile_id: str) -> Optional[Block]:
        """
        Return the tile with the given id (case-insensitive), or None.
        """
        wanted = tile_id.casefold()
        for tile in self.tiles:
            if tile.id.casefold() == wanted:
                return tile
        return None

    def rects(self) -> List[Rect]:
        return [t.rect() for t in self.tiles]

    def to_df(self) -> pd.DataFrame:
        """
        Tile descriptors as a DataFrame with columns id, min_x, min_y,
        max_x, max_y. The sheet size is kept in `df.attrs`.
        """
        df = pd.DataFrame(
            [(t.id, t.min_x, t.min_y, t.max_x, t.max_y) for t in self.tiles],
            columns=TILE_COLUMNS,
        )
        df.attrs["width"] = self.width
        df.attrs["height"] = self.height
        return df

    @classmethod
    def from_df(
        cls,
        df: pd.DataFrame,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> "Tileset":
        """
        Rebuild a Tileset from tile descriptors (e.g. a loaded tiles CSV).

        If the sheet size is not given, it is taken from `df.attrs` or,
        failing that, from the largest max_x / max_y.
        """
        missing = set(TILE_COLUMNS).difference(df.columns)
        if missing:
            raise ValueError(f"Tiles table is missing required columns: {sorted(missing)}")

        tiles = [
            Block(
                id=str(row.id),
                width=int(row.max_x - row.min_x),
                height=int(row.max_y - row.min_y),
                x=int(row.min_x),
                y=int(row.min_y),
            )
            for row in df.itertuples(index=False)
        ]
        if width is None:
            width = df.attrs.get("width", int(df["max_x"].max()) if len(df) else 0)
        if height is None:
            height = df.attrs.get("height", int(df["max_y"].max()) if len(df) else 0)
        return cls(width=int(width), height=int(height), tiles=tiles)


def build_tileset(blocks: Iterable[Block], sort: bool = True) -> Tileset:
    """
    Pack `blocks` into a new Tileset.

    The input blocks are not modified; the tiles of the result are fresh
    copies carrying the placements.

    Parameters
    ----------
    blocks:
        Blocks to pack. Any existing placement is ignored.
    sort:
        If True (default), pack in `sort_by_max_side` order. If False, the
        input order is used as-is, which may make packing fail.

    Returns
    -------
    Tileset

    Raises
    ------
    PackingError
        If some block cannot be fitted (only possible with `sort=False`).
    InvalidBlockError
        If some block has a non-positive width or height.
    """
    tiles = [dataclasses.replace(b, x=None, y=None) for b in blocks]
    if sort:
        tiles = sort_by_max_side(tiles)

    block_list = BlockList(tiles)
    width, height = pack(block_list)
    if (width, height) == PACK_FAILED:
        raise PackingError(
            "Could not pack blocks: a block is wider and taller than the sheet "
            "grown so far. Sort blocks by decreasing max(width, height)."
        )

    log.info("Packed %d tiles into a %dx%d sheet", len(tiles), width, height)
    return Tileset(width=width, height=height, tiles=block_list.blocks)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pack rectangular blocks into a growing tile sheet.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--sizes",
        type=str,
        help="CSV file with columns width, height and optionally id.",
    )
    source.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Pack N randomly sized blocks instead of reading a CSV.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for --random (optional).",
    )
    parser.add_argument(
        "--no-sort",
        action="store_true",
        help="Pack in input order instead of by decreasing max(width, height).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help=(
            "Optional output path for the tiles CSV. If omitted, a timestamped "
            "name will be created under data/tilesets/."
        ),
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Optional path for a PNG preview of the packed sheet.",
    )
    parser.add_argument(
        "--time",
        action="store_true",
        help="Log how long packing took.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    from .evaluation import evaluate_layout
    from .utils.io import load_sizes_csv, save_tiles_csv
    from .utils.timing import Timer

    args = _parse_args(argv)

    if args.verbose or args.time:
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.sizes is not None:
        blocks = blocks_from_df(load_sizes_csv(args.sizes))
    else:
        blocks = blocks_from_sizes(generate_random_sizes(args.random, seed=args.seed))

    try:
        with Timer("pack", enabled=args.time):
            tileset = build_tileset(blocks, sort=not args.no_sort)
    except (PackingError, InvalidBlockError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    out_path = save_tiles_csv(
        tileset.to_df(),
        path=Path(args.output) if args.output is not None else None,
    )
    score = evaluate_layout(tileset.tiles, (tileset.width, tileset.height))

    print(f"Packed {len(tileset.tiles)} tiles into {tileset.width}x{tileset.height}")
    print(f"Fill ratio: {score.fill_ratio:.4f}")
    print(f"Tiles written to: {out_path}")

    if args.plot is not None:
        import matplotlib

        matplotlib.use("Agg")
        from .utils.plotting import plot_tileset

        ax = plot_tileset(tileset, title=f"{tileset.width}x{tileset.height}")
        ax.figure.savefig(args.plot, dpi=150, bbox_inches="tight")
        print(f"Preview written to: {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
