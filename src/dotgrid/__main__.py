# どこで: `src/dotgrid/__main__.py`。
# 何を: `python -m dotgrid ...` の CLI エントリポイントを提供する。
# なぜ: Schotter を端末へ直接出力する短い導線を用意するため。

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from dotgrid.core.runtime_config import runtime_config, set_config_path
from dotgrid.core.schotter import (
    SCHOTTER_CAPTION,
    clamp_schotter_args,
    create_and_render,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="python -m dotgrid")
    p.add_argument("--config", default=None, help="config.yaml のパス（省略時: 探索）")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=_LOG_LEVELS,
        help="stderr へのログ出力レベル（省略時: WARNING）",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("schotter", help="Georg Nees の Schotter を Braille で描く")
    s.add_argument("--cols", type=int, default=None, help="出力の桁数（1..1000）")
    s.add_argument(
        "--squares-per-row", type=int, default=None, help="横に並べる正方形の数（1..200）"
    )
    s.add_argument(
        "--squares-per-col", type=int, default=None, help="縦に並べる正方形の数（1..200）"
    )
    s.add_argument("--seed", type=int, default=None, help="乱数 seed（省略時: config）")
    s.add_argument(
        "--mode",
        default=None,
        choices=("braille", "ascii"),
        help="出力形式（ascii は 1 ピクセル 1 文字のデバッグ表示）",
    )
    s.add_argument("--no-caption", action="store_true", help="末尾のキャプション行を出さない")
    return p.parse_args(argv)


def _run_schotter(args: argparse.Namespace) -> int:
    cfg = runtime_config()
    defaults = cfg.schotter

    cols, per_row, per_col = clamp_schotter_args(
        defaults.console_cols if args.cols is None else args.cols,
        defaults.squares_per_row if args.squares_per_row is None else args.squares_per_row,
        defaults.squares_per_col if args.squares_per_col is None else args.squares_per_col,
    )
    seed = defaults.seed if args.seed is None else args.seed
    mode = cfg.render_mode if args.mode is None else args.mode

    text = create_and_render(
        cols,
        per_row,
        per_col,
        rng=np.random.default_rng(seed),
        mode=mode,
    )
    sys.stdout.write(text)
    if cfg.caption and not args.no_caption:
        sys.stdout.write(SCHOTTER_CAPTION + "\n")
    sys.stdout.flush()
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level)),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.config is not None:
        set_config_path(args.config)

    if args.cmd == "schotter":
        try:
            return _run_schotter(args)
        except (ValueError, RuntimeError, FileNotFoundError) as exc:
            print(f"dotgrid: {exc}", file=sys.stderr)
            return 2

    raise AssertionError(f"unknown cmd: {args.cmd!r}")


if __name__ == "__main__":
    raise SystemExit(main())
