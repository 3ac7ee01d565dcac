#!/usr/bin/env python
"""
CLI helper to pack blocks into a tile sheet, or to benchmark the packer.

This script is a thin wrapper around the library entry points:

- tilepack.tileset.main           (pack and write a tiles CSV)
- tilepack.utils.timing.benchmark (optional, with --benchmark)

Typical usage from the project root
-----------------------------------

    python scripts/make_tileset.py --sizes data/raw/sizes.csv
    python scripts/make_tileset.py --random 200 --seed 7 --plot sheet.png
    python scripts/make_tileset.py --benchmark 1000 --repeats 10

The script automatically adds `src/` to PYTHONPATH so that it can import the
`tilepack` package without requiring installation.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys
from typing import Optional, List


def _ensure_src_on_path() -> Path:
    """
    Ensure that <project_root>/src is on sys.path and return project_root.

    Assumes this file lives in <project_root>/scripts/make_tileset.py.
    """
    project_root = Path(__file__).resolve().parents[1]
    src_dir = project_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))
    return project_root


def _parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Benchmark the growing bin packer on random blocks.",
        add_help=False,
    )
    parser.add_argument(
        "--benchmark",
        type=int,
        metavar="N",
        default=None,
        help="Time packing N random blocks instead of writing a tile sheet.",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=5,
        help="Number of timed runs for --benchmark.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for --benchmark or --random (optional).",
    )
    return parser.parse_known_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    project_root = _ensure_src_on_path()

    # Imports done after path configuration
    from tilepack.tileset import blocks_from_sizes, build_tileset, generate_random_sizes
    from tilepack.tileset import main as tileset_main
    from tilepack.utils.timing import benchmark

    args, rest = _parse_args(argv)

    if args.benchmark is None:
        print(f"[make_tileset] Project root: {project_root}")
        if args.seed is not None:
            rest = rest + ["--seed", str(args.seed)]
        return tileset_main(rest)

    blocks = blocks_from_sizes(generate_random_sizes(args.benchmark, seed=args.seed))
    print(f"[make_tileset] Benchmarking {len(blocks)} blocks, {args.repeats} repeats")
    stats = benchmark(build_tileset, blocks, repeats=args.repeats)
    print(
        f"[make_tileset] min={stats['min']:.4f} s "
        f"mean={stats['mean']:.4f} s max={stats['max']:.4f} s"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
