"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys

import chess

from chesstable.core.enums import Color
from chesstable.settings import TableSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesstable",
        description="Play chess by picking up and dropping pieces on a table.",
    )
    parser.add_argument(
        "--color",
        choices=("white", "black"),
        default="white",
        help="side you play (default: white)",
    )
    parser.add_argument(
        "--opponent",
        choices=("engine", "human"),
        default="engine",
        help="who plays the other side (default: engine)",
    )
    parser.add_argument("--depth", type=int, default=2, help="engine search depth")
    parser.add_argument("--fen", default=None, help="start from this position")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> TableSettings:
    if args.depth < 1:
        raise ValueError(f"Engine depth must be at least 1, got {args.depth}")
    if args.fen is not None:
        chess.Board(args.fen)  # raises ValueError on a malformed FEN
    return TableSettings(
        player_color=Color.BLACK if args.color == "black" else Color.WHITE,
        opponent=args.opponent,
        engine_depth=args.depth,
        start_fen=args.fen,
    )


def main(argv: list[str] | None = None) -> None:
    """Launch the Chesstable application."""
    from chesstable.ui.bootstrap import configure_logging, run_application

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(getattr(logging, args.log_level))
    sys.exit(run_application(settings, [sys.argv[0]]))


if __name__ == "__main__":
    main()
