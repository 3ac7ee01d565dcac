"""
Tests for tilepack.utils (CSV I/O, timing, plotting) and the tileset CLI.

All files are written under pytest's `tmp_path`, never under data/.
"""

from __future__ import annotations

import logging

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from tilepack.tileset import Tileset, blocks_from_df, blocks_from_sizes, build_tileset, main
from tilepack.utils.io import load_sizes_csv, load_tiles_csv, save_tiles_csv
from tilepack.utils.plotting import plot_tileset, plot_tilesets_grid
from tilepack.utils.timing import Timer, benchmark


# ---------------------------------------------------------------------------
# CSV helpers
# ---------------------------------------------------------------------------

def test_load_sizes_csv_with_ids(tmp_path):
    path = tmp_path / "sizes.csv"
    path.write_text("id,width,height\ngrass,16,16\nwall,32,8\n")

    df = load_sizes_csv(path)
    assert df["id"].tolist() == ["grass", "wall"]
    blocks = blocks_from_df(df)
    assert [(b.id, b.width, b.height) for b in blocks] == [("grass", 16, 16), ("wall", 32, 8)]


def test_load_sizes_csv_without_ids_names_rows_by_position(tmp_path):
    path = tmp_path / "sizes.csv"
    path.write_text("width,height\n4,5\n6,7\n")

    df = load_sizes_csv(path)
    assert list(df.columns) == ["id", "width", "height"]
    assert df["id"].tolist() == ["0", "1"]


def test_load_sizes_csv_rejects_bad_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sizes_csv(tmp_path / "missing.csv")

    no_height = tmp_path / "no_height.csv"
    no_height.write_text("id,width\na,4\n")
    with pytest.raises(ValueError, match="height"):
        load_sizes_csv(no_height)

    fractional = tmp_path / "fractional.csv"
    fractional.write_text("width,height\n4.5,2\n")
    with pytest.raises(ValueError, match="integers"):
        load_sizes_csv(fractional)


def test_tiles_csv_round_trip(tmp_path):
    tileset = build_tileset(blocks_from_sizes([(10, 10), (10, 10), (5, 10)], ids=["a", "b", "c"]))
    out = save_tiles_csv(tileset.to_df(), path=tmp_path / "nested" / "tiles.csv")

    assert out.exists()
    loaded = load_tiles_csv(out)
    assert loaded["id"].tolist() == ["a", "b", "c"]
    assert Tileset.from_df(loaded) == tileset


def test_save_tiles_csv_rejects_missing_columns(tmp_path):
    with pytest.raises(ValueError):
        save_tiles_csv(pd.DataFrame({"id": ["a"]}), path=tmp_path / "tiles.csv")


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------

def test_timer_measures_and_logs(caplog):
    with caplog.at_level(logging.INFO, logger="tilepack.utils.timing"):
        with Timer("pack") as t:
            build_tileset(blocks_from_sizes([(3, 3)] * 10))
    assert t.elapsed >= 0.0
    assert "pack" in caplog.text


def test_disabled_timer_stays_quiet(caplog):
    with caplog.at_level(logging.INFO, logger="tilepack.utils.timing"):
        with Timer("quiet", enabled=False):
            pass
    assert caplog.text == ""


def test_benchmark_reports_stats():
    calls = []
    stats = benchmark(calls.append, 1, repeats=3, warmup=2)
    assert len(calls) == 5
    assert set(stats) == {"min", "mean", "max", "repeats"}
    assert stats["min"] <= stats["mean"] <= stats["max"]
    assert stats["repeats"] == 3.0


# ---------------------------------------------------------------------------
# Plotting
# ---------------------------------------------------------------------------

def test_plot_tileset_draws_every_tile():
    tileset = build_tileset(blocks_from_sizes([(10, 10), (10, 10), (5, 10)]))
    ax = plot_tileset(tileset, title="sheet")
    # One patch per tile plus the sheet outline.
    assert len(ax.patches) == 4
    assert ax.get_title() == "sheet"
    assert ax.get_ylim() == (20.0, 0.0)


def test_plot_tileset_rejects_empty_tileset():
    with pytest.raises(ValueError):
        plot_tileset(Tileset(0, 0))


def test_plot_tilesets_grid_hides_unused_axes():
    tilesets = [build_tileset(blocks_from_sizes([(2, 2)] * k)) for k in (1, 2, 3)]
    fig, axes = plot_tilesets_grid(tilesets, ncols=2)
    assert len(axes) == 4
    assert not axes[3].axison


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_cli_packs_sizes_csv(tmp_path, capsys):
    sizes = tmp_path / "sizes.csv"
    sizes.write_text("id,width,height\na,10,10\nb,10,10\nc,5,10\n")
    out = tmp_path / "tiles.csv"
    plot = tmp_path / "sheet.png"

    code = main(["--sizes", str(sizes), "--output", str(out), "--plot", str(plot)])

    assert code == 0
    assert "Packed 3 tiles into 20x20" in capsys.readouterr().out
    assert load_tiles_csv(out)["id"].tolist() == ["a", "b", "c"]
    assert plot.exists()


def test_cli_random_blocks(tmp_path, capsys):
    out = tmp_path / "tiles.csv"
    code = main(["--random", "25", "--seed", "9", "--output", str(out)])

    assert code == 0
    assert len(load_tiles_csv(out)) == 25


def test_cli_reports_packing_failure(tmp_path, capsys):
    sizes = tmp_path / "sizes.csv"
    sizes.write_text("width,height\n10,10\n20,20\n")

    code = main(["--sizes", str(sizes), "--no-sort", "--output", str(tmp_path / "t.csv")])

    assert code == 1
    assert "error:" in capsys.readouterr().err
    assert not (tmp_path / "t.csv").exists()


def test_data_dir_helpers_use_configured_paths(tmp_path, monkeypatch):
    import tilepack.utils.io as io_mod

    monkeypatch.setattr(io_mod, "DATA_DIR", tmp_path / "data")
    monkeypatch.setattr(io_mod, "DATA_RAW_DIR", tmp_path / "data" / "raw")
    monkeypatch.setattr(io_mod, "DATA_TILESETS_DIR", tmp_path / "data" / "tilesets")

    io_mod.ensure_data_dirs()
    assert (tmp_path / "data" / "raw").is_dir()

    tileset = build_tileset(blocks_from_sizes([(2, 2)]))
    out = save_tiles_csv(tileset.to_df(), prefix="sheet")
    assert out.parent == tmp_path / "data" / "tilesets"
    assert out.name.startswith("sheet_") and out.suffix == ".csv"
