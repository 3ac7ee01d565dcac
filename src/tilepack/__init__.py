"""
tilepack – growing binary-tree bin packing

This package packs rectangular blocks into the smallest enclosing sheet it
can grow to, using a free-space binary tree. See `packers.binary_tree` for
the core algorithm and `tileset` for the block-list layer built on top of it.
"""

from .packers.binary_tree import (
    PACK_FAILED,
    InvalidBlockError,
    Packable,
    pack,
)

__all__ = [
    "PACK_FAILED",
    "InvalidBlockError",
    "Packable",
    "pack",
]

__version__ = "0.1.0"
