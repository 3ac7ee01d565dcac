"""
I/O utilities for the tilepack project.

This module centralizes common file and path operations so that:
- Scripts and notebooks do *not* hard-code paths.
- Reading block sizes and writing tile tables is consistent across the project.

Typical usage from code or notebooks
------------------------------------

    from tilepack.tileset import blocks_from_df, build_tileset
    from tilepack.utils.io import load_sizes_csv, save_tiles_csv

    sizes_df = load_sizes_csv("data/raw/sizes.csv")
    tileset = build_tileset(blocks_from_df(sizes_df))
    csv_path = save_tiles_csv(tileset.to_df())
    print("Wrote tiles to:", csv_path)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import datetime as dt
import pandas as pd

from ..config import DATA_DIR, DATA_RAW_DIR, DATA_TILESETS_DIR


PathLike = Union[str, Path]

SIZE_COLUMNS = ["id", "width", "height"]
TILE_COLUMNS = ["id", "min_x", "min_y", "max_x", "max_y"]


# ---------------------------------------------------------------------------
# Directory helpers
# ---------------------------------------------------------------------------

def ensure_data_dirs() -> None:
    """
    Ensure that the main data directories exist:

    - data/
    - data/raw/
    - data/tilesets/

    It is safe to call this repeatedly.
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    DATA_RAW_DIR.mkdir(parents=True, exist_ok=True)
    DATA_TILESETS_DIR.mkdir(parents=True, exist_ok=True)


def get_timestamped_tiles_path(
    prefix: str = "tiles",
    suffix: str = ".csv",
) -> Path:
    """
    Build a timestamped path under `data/tilesets/`, creating the directory.

    Example output filename:
        tiles_20251126_153045.csv
    """
    DATA_TILESETS_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
    return DATA_TILESETS_DIR / f"{prefix}_{timestamp}{suffix}"


# ---------------------------------------------------------------------------
# Loading helpers
# ---------------------------------------------------------------------------

def load_sizes_csv(path: PathLike) -> pd.DataFrame:
    """
    Load block sizes from a CSV with columns width, height and optional id.

    Rows without an id column are named by their position ("0", "1", ...).

    Returns
    -------
    pd.DataFrame
        Columns id (str), width (int), height (int), in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If width / height are missing or not integral.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Sizes CSV not found: {csv_path}")

    df = pd.read_csv(csv_path)
    missing = {"width", "height"}.difference(df.columns)
    if missing:
        raise ValueError(f"Sizes CSV is missing required columns: {sorted(missing)}")

    if "id" not in df.columns:
        df["id"] = [str(i) for i in range(len(df))]

    for col in ["width", "height"]:
        if not pd.api.types.is_integer_dtype(df[col]):
            raise ValueError(f"Column '{col}' must contain integers, got dtype {df[col].dtype}.")

    df["id"] = df["id"].astype(str)
    return df[SIZE_COLUMNS].reset_index(drop=True)


def load_tiles_csv(path: PathLike) -> pd.DataFrame:
    """
    Load a tiles CSV written by `save_tiles_csv`.
    """
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Tiles CSV not found: {csv_path}")

    df = pd.read_csv(csv_path, dtype={"id": str})
    missing = set(TILE_COLUMNS).difference(df.columns)
    if missing:
        raise ValueError(f"Tiles CSV is missing required columns: {sorted(missing)}")
    return df[TILE_COLUMNS]


# ---------------------------------------------------------------------------
# Saving helpers
# ---------------------------------------------------------------------------

def save_tiles_csv(
    tiles_df: pd.DataFrame,
    path: Optional[PathLike] = None,
    prefix: str = "tiles",
) -> Path:
    """
    Save a tile table (see `Tileset.to_df`) to CSV.

    Parameters
    ----------
    tiles_df:
        DataFrame with columns id, min_x, min_y, max_x, max_y.
    path:
        Optional explicit output path. If None, a timestamped filename is
        created under `data/tilesets/` via `get_timestamped_tiles_path`.
    prefix:
        Filename prefix when generating a timestamped path.

    Returns
    -------
    Path
        The path to the written CSV.
    """
    missing = set(TILE_COLUMNS).difference(tiles_df.columns)
    if missing:
        raise ValueError(f"Tiles table is missing required columns: {sorted(missing)}")

    if path is None:
        out_path = get_timestamped_tiles_path(prefix=prefix)
    else:
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)

    tiles_df[TILE_COLUMNS].to_csv(out_path, index=False)
    return out_path


__all__ = [
    "ensure_data_dirs",
    "get_timestamped_tiles_path",
    "load_sizes_csv",
    "load_tiles_csv",
    "save_tiles_csv",
]
