"""Pager bootstrap: build display rows, then page them or print them."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

from ..profile_model import Profile
from ..render import build_profile_rows, checkpoint_count, render_profile_text
from ..ui_theme import resolve_theme
from .loop import PagerState, run_main_loop
from .terminal import TerminalController


def print_profile(
    profile: Profile,
    *,
    style: str,
    no_color: bool,
    theme_name: str | None = None,
    show_addresses: bool = True,
    width: int | None = None,
) -> str:
    """Return the whole profile rendered as text (header row plus one line per item)."""
    theme = resolve_theme(theme_name, no_color=no_color)
    rows = build_profile_rows(profile, style=style, no_color=no_color, theme=theme)
    if width is None:
        width = shutil.get_terminal_size((80, 24)).columns
    return render_profile_text(
        rows,
        max(1, width),
        profile.checkpoints,
        checkpoint_count(profile),
        show_addresses=show_addresses,
        theme=theme,
    )


def run_pager(
    profile: Profile,
    trace_path: Path,
    style: str,
    no_color: bool,
    nopager: bool,
    theme_name: str | None = None,
    show_addresses: bool = True,
) -> None:
    """Page a synchronized profile, or print it when not attached to a terminal."""
    if nopager or not os.isatty(sys.stdin.fileno()):
        plain = no_color or not os.isatty(sys.stdout.fileno())
        sys.stdout.write(
            print_profile(
                profile,
                style=style,
                no_color=plain,
                theme_name=theme_name,
                show_addresses=show_addresses,
            )
        )
        return

    theme = resolve_theme(theme_name, no_color=no_color)
    state = PagerState(
        rows=build_profile_rows(profile, style=style, no_color=no_color, theme=theme),
        header_indices=profile.file_header_indices(),
        checkpoint_names=profile.checkpoints,
        checkpoint_count=checkpoint_count(profile),
        title=str(trace_path),
        stale_count=len(profile.stale_records),
        show_addresses=show_addresses,
        theme=theme,
    )
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(state, terminal, stdin_fd)


__all__ = ["print_profile", "run_pager"]
