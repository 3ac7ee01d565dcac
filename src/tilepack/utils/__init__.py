"""
Utility helpers for the tilepack project.

Small, reusable helpers that don't belong in the packer or the tileset
layer:

- CSV / path utilities (`io.py`)
- matplotlib plotting of packed sheets (`plotting.py`)
- Timing / benchmarking helpers (`timing.py`)
"""

__all__ = []
