"""Command-line front door for memviz.

Parses CLI options, loads and synchronizes the checkpoint trace, then
dispatches into the interactive pager runtime.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .highlight import DEFAULT_STYLE
from .runtime import run_pager
from .runtime.app import print_profile
from .runtime.config import (
    load_show_addresses,
    load_style_name,
    load_theme_name,
    save_style_name,
    save_theme_name,
)
from .trace import TraceParseError, load_profile
from .ui_theme import available_theme_names


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memviz",
        description="Show which source lines were reached between checkpoints of a traced program run.",
    )
    parser.add_argument("trace", help="Path to a checkpoint trace file.")
    parser.add_argument(
        "--source-root",
        default=None,
        help="Directory that relative source paths are resolved against (default: trace directory).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name; remembered for later runs.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--nopager", action="store_true", help="Print output directly without interactive paging.")
    parser.add_argument(
        "--no-sync",
        action="store_true",
        help="Show trace records as-is without merging in source file lines.",
    )
    parser.add_argument("--render", action="store_true", help="Render the profile as text and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch memviz on a trace file.

    Unusable input (missing trace, malformed trace, unreadable file) ends the
    process with a one-line ``SystemExit`` message. Explicit ``--style`` and
    ``--theme`` values are persisted; otherwise persisted values are used.
    """
    args = build_parser().parse_args(argv)

    trace_path = Path(args.trace)
    if not trace_path.is_file():
        raise SystemExit(f"Path not found: {trace_path}")
    if args.source_root is not None:
        source_root = Path(args.source_root)
        if not source_root.is_dir():
            raise SystemExit(f"Path not found: {source_root}")
    else:
        source_root = trace_path.resolve().parent

    if args.style is not None:
        save_style_name(args.style)
    if args.theme is not None:
        save_theme_name(args.theme)
    style = args.style or load_style_name() or DEFAULT_STYLE
    theme_name = args.theme or load_theme_name()
    show_addresses = load_show_addresses()

    try:
        profile = load_profile(trace_path)
    except TraceParseError as exc:
        raise SystemExit(str(exc)) from exc
    except OSError as exc:
        raise SystemExit(f"Cannot read {trace_path}: {exc.strerror or exc}") from exc

    if not args.no_sync:
        profile = profile.synced(source_root)

    if args.render:
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(
            print_profile(
                profile,
                style=style,
                no_color=args.no_color,
                theme_name=theme_name,
                show_addresses=show_addresses,
                width=max_cols,
            )
        )
        return

    run_pager(profile, trace_path, style, args.no_color, args.nopager, theme_name, show_addresses)


if __name__ == "__main__":
    main()
