"""
Packing algorithms for the tilepack project.

Currently this holds the growing binary-tree packer (`binary_tree.py`).
Higher-level code (e.g. `tilepack.tileset`) talks to it only through the
`Packable` interface, so block storage stays independent of the algorithm.
"""

from .binary_tree import InvalidBlockError, Packable, pack

__all__ = [
    "InvalidBlockError",
    "Packable",
    "pack",
]
