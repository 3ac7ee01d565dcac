"""
Global configuration for the tilepack project.

This module centralizes:

- Project-root and data paths
- Random seeds for reproducible demo / benchmark inputs
- The size sentinels returned by the packer
- Defaults for randomly generated block sizes

Everything is a plain module constant so that scripts, tests and notebooks
share the same values without reading any config file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import numpy as np


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

# This file lives in: <repo>/src/tilepack/config.py
# Project root is therefore two levels up from here.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

DATA_DIR: Path = PROJECT_ROOT / "data"
DATA_RAW_DIR: Path = DATA_DIR / "raw"
DATA_TILESETS_DIR: Path = DATA_DIR / "tilesets"


# ---------------------------------------------------------------------------
# Packer sentinels
# ---------------------------------------------------------------------------

# Returned by `pack` when a block can be neither found a slot nor grown into.
PACK_FAILED: Tuple[int, int] = (-1, -1)

# Returned by `pack` for zero blocks. A valid result, distinct from failure.
EMPTY_BOUNDS: Tuple[int, int] = (0, 0)


# ---------------------------------------------------------------------------
# Randomness / reproducibility
# ---------------------------------------------------------------------------

DEFAULT_SEED: int = 1234

# Side range used by `tileset.generate_random_sizes` when none is given.
RANDOM_MIN_SIDE: int = 4
RANDOM_MAX_SIDE: int = 64


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Return a NumPy random Generator seeded with `seed` (or `DEFAULT_SEED`).

    Use a dedicated generator instead of global state so that two calls with
    the same seed always produce the same block sizes.

        from tilepack.config import make_rng
        rng = make_rng(2025)
    """
    if seed is None:
        seed = DEFAULT_SEED
    return np.random.default_rng(seed)


__all__ = [
    # Paths
    "PROJECT_ROOT",
    "DATA_DIR",
    "DATA_RAW_DIR",
    "DATA_TILESETS_DIR",
    # Sentinels
    "PACK_FAILED",
    "EMPTY_BOUNDS",
    # Randomness
    "DEFAULT_SEED",
    "RANDOM_MIN_SIDE",
    "RANDOM_MAX_SIDE",
    "make_rng",
]
