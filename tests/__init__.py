"""
Test package for the tilepack project.

This directory collects unit and integration tests for the core modules:

- The growing binary-tree packer (`test_binary_tree.py`)
- Rect / Block geometry (`test_geometry.py`)
- Layout checks and scores (`test_evaluation.py`)
- Tileset building, CSV I/O and the CLI (`test_tileset.py`, `test_io.py`)

You can run tests with:

    pytest
    # or
    python -m pytest

from the project root.
"""

__all__ = []
