"""
Growing binary-tree bin packer.

This is the core of the project: Jake Gordon's binary tree packing
algorithm (https://github.com/jakesgordon/bin-packing), in the variant
that does not start from a fixed sheet size. The sheet starts at the size
of the first block and grows, right or down, whenever the next block fits
no free rectangle left in the tree.

Free space is tracked as a binary tree of rectangles:

- A *leaf* is an unused rectangle.
- An *occupied* node holds a placed block in its top-left corner and two
  children: `right`, the strip to the right of the block (as tall as the
  block), and `down`, the strip below it (as wide as the node).

Callers describe their blocks through the `Packable` interface:

    class Sheet(Packable):
        def count(self): ...
        def dimensions(self, index): ...
        def place(self, index, x, y): ...

    width, height = pack(Sheet(...))

Packing quality depends on the caller presenting blocks sorted by decreasing
`max(width, height)`. Blocks are never reordered or rotated here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

import logging
import operator

from ..config import EMPTY_BOUNDS, PACK_FAILED

log = logging.getLogger(__name__)

Size = Tuple[int, int]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class InvalidBlockError(ValueError):
    """
    Raised when a block's dimensions are not a (width, height) pair of
    positive integers.
    """

    def __init__(self, index: int, dimensions) -> None:
        self.index = index
        self.dimensions = dimensions
        super().__init__(
            f"Block {index} has invalid dimensions {dimensions!r}; "
            "expected a (width, height) pair of positive integers."
        )


# ---------------------------------------------------------------------------
# Caller capability
# ---------------------------------------------------------------------------

class Packable(ABC):
    """
    A collection of blocks that `pack` can read sizes from and write
    placements to.
    """

    @abstractmethod
    def count(self) -> int:
        """Return the total number of blocks."""

    @abstractmethod
    def dimensions(self, index: int) -> Size:
        """Return the (width, height) of block `index`."""

    @abstractmethod
    def place(self, index: int, x: int, y: int) -> None:
        """Record the top-left position of block `index`."""


# ---------------------------------------------------------------------------
# Free-space tree
# ---------------------------------------------------------------------------

@dataclass
class _Node:
    x: int
    y: int
    width: int
    height: int
    right: Optional["_Node"] = None
    down: Optional["_Node"] = None

    @property
    def is_leaf(self) -> bool:
        return self.right is None and self.down is None

    def find(self, width: int, height: int) -> Optional["_Node"]:
        """
        Return the first leaf, in right-before-down pre-order, that can hold
        a `width` x `height` block, or None.

        Uses an explicit stack: trees grow one level per grow step, so deep
        trees are normal for long block lists.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                if width <= node.width and height <= node.height:
                    return node
                continue
            # Pushed in reverse so `right` is visited first.
            stack.append(node.down)
            stack.append(node.right)
        return None

    def split(self, width: int, height: int) -> "_Node":
        """
        Occupy the top-left `width` x `height` corner of this leaf and
        return it.
        """
        self.down = _Node(
            x=self.x,
            y=self.y + height,
            width=self.width,
            height=self.height - height,
        )
        self.right = _Node(
            x=self.x + width,
            y=self.y,
            width=self.width - width,
            height=height,
        )
        return self


def _grow(root: _Node, width: int, height: int) -> Optional[Tuple[_Node, _Node]]:
    """
    Wrap `root` in a larger root with room for a `width` x `height` block.

    Returns (new_root, placed_node), or None if the block is both wider and
    taller than `root`.
    """
    can_grow_down = width <= root.width
    can_grow_right = height <= root.height

    # Keep the sheet square-ish: widen a tall sheet, heighten a wide one.
    should_grow_right = can_grow_right and root.height >= root.width + width
    should_grow_down = can_grow_down and root.width >= root.height + height

    if should_grow_right:
        return _grow_right(root, width, height)
    if should_grow_down:
        return _grow_down(root, width, height)
    if can_grow_right:
        return _grow_right(root, width, height)
    if can_grow_down:
        return _grow_down(root, width, height)
    return None


def _grow_right(root: _Node, width: int, height: int) -> Optional[Tuple[_Node, _Node]]:
    log.debug(
        "Growing right: %dx%d -> %dx%d for block %dx%d",
        root.width, root.height, root.width + width, root.height, width, height,
    )
    new_root = _Node(
        x=0,
        y=0,
        width=root.width + width,
        height=root.height,
        right=_Node(x=root.width, y=0, width=width, height=root.height),
        down=root,
    )
    return _place_in(new_root, width, height)


def _grow_down(root: _Node, width: int, height: int) -> Optional[Tuple[_Node, _Node]]:
    log.debug(
        "Growing down: %dx%d -> %dx%d for block %dx%d",
        root.width, root.height, root.width, root.height + height, width, height,
    )
    new_root = _Node(
        x=0,
        y=0,
        width=root.width,
        height=root.height + height,
        right=root,
        down=_Node(x=0, y=root.height, width=root.width, height=height),
    )
    return _place_in(new_root, width, height)


def _place_in(new_root: _Node, width: int, height: int) -> Optional[Tuple[_Node, _Node]]:
    node = new_root.find(width, height)
    if node is None:
        return None
    return new_root, node.split(width, height)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _checked_dimensions(packable: Packable, index: int) -> Size:
    dimensions = packable.dimensions(index)
    try:
        width, height = dimensions
        if isinstance(width, bool) or isinstance(height, bool):
            raise TypeError("bool is not a block dimension")
        w = operator.index(width)
        h = operator.index(height)
    except (TypeError, ValueError):
        raise InvalidBlockError(index, dimensions) from None
    if w <= 0 or h <= 0:
        raise InvalidBlockError(index, dimensions)
    return w, h


def pack(packable: Packable) -> Size:
    """
    Pack every block of `packable` and return the (width, height) of the
    resulting sheet.

    Blocks are placed in index order and `packable.place` is called exactly
    once per block. The sheet starts at the size of block 0 and grows as
    needed, so a good first block is the one with the largest
    `max(width, height)`.

    Returns
    -------
    (width, height)
        The bounding size of the packed sheet.
    (0, 0)
        If there are no blocks.
    (-1, -1)
        `PACK_FAILED`, if some block is wider *and* taller than the sheet
        at the moment it has to be grown. Placements made before the
        failure are not meaningful.

    Raises
    ------
    InvalidBlockError
        If a block's width or height is not a positive integer.
    """
    num_blocks = packable.count()
    if num_blocks == 0:
        return EMPTY_BOUNDS

    width, height = _checked_dimensions(packable, 0)
    root = _Node(x=0, y=0, width=width, height=height)
    root.split(width, height)
    packable.place(0, 0, 0)

    for index in range(1, num_blocks):
        width, height = _checked_dimensions(packable, index)

        node = root.find(width, height)
        if node is not None:
            node = node.split(width, height)
            packable.place(index, node.x, node.y)
            continue

        grown = _grow(root, width, height)
        if grown is None:
            log.warning(
                "Cannot pack block %d (%dx%d): sheet is %dx%d and can grow "
                "neither right nor down",
                index, width, height, root.width, root.height,
            )
            return PACK_FAILED

        root, node = grown
        packable.place(index, node.x, node.y)

    log.debug("Packed %d blocks into %dx%d", num_blocks, root.width, root.height)
    return root.width, root.height


__all__ = [
    "Size",
    "InvalidBlockError",
    "Packable",
    "pack",
    "PACK_FAILED",
]
