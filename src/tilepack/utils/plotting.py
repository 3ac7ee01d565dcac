"""
Visualization helpers for the tilepack project.

These helpers are thin convenience wrappers around matplotlib for:
- Plotting a single packed sheet with its bounding box.
- Plotting multiple sheets side-by-side for comparison.

Sheets are drawn in image coordinates (y axis pointing down), so the plot
matches how the tiles would appear in the composed image.

Typical usage in a notebook
---------------------------

    import matplotlib.pyplot as plt
    from tilepack.tileset import build_tileset
    from tilepack.utils.plotting import plot_tileset

    tileset = build_tileset(blocks)
    fig, ax = plt.subplots(figsize=(6, 6))
    plot_tileset(tileset, ax=ax, title="My sheet")

You remain in control of figure creation and display.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from ..tileset import Tileset


def plot_tileset(
    tileset: Tileset,
    ax=None,
    title: Optional[str] = None,
    show_bounds: bool = True,
    label: bool = True,
):
    """
    Plot the tiles of a packed sheet.

    Parameters
    ----------
    tileset:
        Packed Tileset to plot.
    ax:
        Optional matplotlib Axes. If None, a new figure and axes are created.
    title:
        Optional plot title.
    show_bounds:
        If True, draw the sheet outline.
    label:
        If True, write each tile id at its center.
    """
    if not tileset.tiles:
        raise ValueError("plot_tileset called with an empty tileset.")

    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    for tile in tileset.tiles:
        ax.add_patch(
            Rectangle(
                (tile.x, tile.y),
                tile.width,
                tile.height,
                alpha=0.4,
                linewidth=0.8,
                edgecolor="black",
            )
        )
        if label:
            ax.text(
                tile.x + tile.width / 2.0,
                tile.y + tile.height / 2.0,
                tile.id,
                ha="center",
                va="center",
                fontsize=6,
            )

    if show_bounds:
        ax.add_patch(
            Rectangle(
                (0, 0),
                tileset.width,
                tileset.height,
                fill=False,
                linestyle="--",
                linewidth=2,
            )
        )

    ax.set_xlim(0, tileset.width)
    # Image coordinates: y grows downward.
    ax.set_ylim(tileset.height, 0)
    ax.set_aspect("equal", adjustable="box")
    ax.axis("off")
    if title is not None:
        ax.set_title(title)

    return ax


def plot_tilesets_grid(
    tilesets: Sequence[Tileset],
    titles: Optional[Sequence[str]] = None,
    ncols: int = 2,
    figsize_per_plot: Tuple[float, float] = (5.0, 5.0),
    show_bounds: bool = True,
):
    """
    Plot multiple sheets in a grid of subplots for visual comparison.

    Returns
    -------
    (fig, axes):
        The matplotlib Figure and the flat list of Axes.
    """
    num = len(tilesets)
    if num == 0:
        raise ValueError("plot_tilesets_grid called with an empty list of tilesets.")

    if titles is not None and len(titles) != num:
        raise ValueError("If provided, 'titles' must match the number of tilesets.")

    nrows = (num + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows,
        ncols,
        figsize=(figsize_per_plot[0] * ncols, figsize_per_plot[1] * nrows),
        squeeze=False,
    )
    axes_flat = list(axes.ravel())

    for i, tileset in enumerate(tilesets):
        title_i = titles[i] if titles is not None else None
        plot_tileset(tileset, ax=axes_flat[i], title=title_i, show_bounds=show_bounds)

    # Hide any unused axes
    for ax in axes_flat[num:]:
        ax.axis("off")

    fig.tight_layout()
    return fig, axes_flat


__all__ = [
    "plot_tileset",
    "plot_tilesets_grid",
]
