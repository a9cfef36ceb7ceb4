"""Interactive event loop: draw the visible window, read a key, dispatch."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass, field

from ..input import read_key
from ..render import RenderContext, column_layout, max_text_offset, render_profile_page
from ..render.rows import ProfileRow
from ..ui_theme import DEFAULT_THEME, UITheme
from .config import save_show_addresses
from .viewport import Viewport, next_section_start, previous_section_start

KEY_POLL_TIMEOUT_MS = 200
WHEEL_STEP = 3
# Header row plus status row.
CHROME_ROWS = 2


@dataclass
class PagerState:
    rows: list[ProfileRow]
    header_indices: list[int]
    checkpoint_names: tuple[str, ...]
    checkpoint_count: int
    title: str
    stale_count: int = 0
    show_addresses: bool = True
    theme: UITheme = DEFAULT_THEME
    viewport: Viewport = field(default_factory=Viewport)
    width: int = 80
    dirty: bool = True
    should_quit: bool = False

    def render_context(self) -> RenderContext:
        return RenderContext(
            rows=self.rows,
            start=self.viewport.start,
            max_lines=self.viewport.height,
            width=self.width,
            checkpoint_names=self.checkpoint_names,
            checkpoint_count=self.checkpoint_count,
            title=self.title,
            text_x=self.viewport.text_x,
            show_addresses=self.show_addresses,
            stale_count=self.stale_count,
            theme=self.theme,
        )

    def refresh_text_limit(self) -> bool:
        layout = column_layout(self.width, self.checkpoint_count, self.show_addresses)
        return self.viewport.set_text_limit(max_text_offset(self.rows, layout))


def _jump_to_next_section(state: PagerState) -> bool:
    target = next_section_start(state.header_indices, state.viewport.start)
    return target is not None and state.viewport.jump_to(target)


def _jump_to_previous_section(state: PagerState) -> bool:
    target = previous_section_start(state.header_indices, state.viewport.start)
    return target is not None and state.viewport.jump_to(target)


def _scroll_right(state: PagerState) -> bool:
    state.refresh_text_limit()
    return state.viewport.scroll_right()


def _toggle_addresses(state: PagerState) -> bool:
    state.show_addresses = not state.show_addresses
    state.refresh_text_limit()
    save_show_addresses(state.show_addresses)
    return True


def _quit(state: PagerState) -> bool:
    state.should_quit = True
    return False


def _half_page(state: PagerState) -> int:
    return max(1, state.viewport.height // 2)


_KEY_ACTIONS: dict[str, Callable[[PagerState], bool]] = {
    "q": _quit,
    "Q": _quit,
    "UP": lambda state: state.viewport.scroll_up(1),
    "k": lambda state: state.viewport.scroll_up(1),
    "DOWN": lambda state: state.viewport.scroll_down(1),
    "j": lambda state: state.viewport.scroll_down(1),
    "ENTER": lambda state: state.viewport.scroll_down(1),
    "PAGE_UP": lambda state: state.viewport.page_up(),
    "b": lambda state: state.viewport.page_up(),
    "CTRL_B": lambda state: state.viewport.page_up(),
    "PAGE_DOWN": lambda state: state.viewport.page_down(),
    " ": lambda state: state.viewport.page_down(),
    "CTRL_F": lambda state: state.viewport.page_down(),
    "CTRL_U": lambda state: state.viewport.scroll_up(_half_page(state)),
    "CTRL_D": lambda state: state.viewport.scroll_down(_half_page(state)),
    "HOME": lambda state: state.viewport.home(),
    "g": lambda state: state.viewport.home(),
    "END": lambda state: state.viewport.end(),
    "G": lambda state: state.viewport.end(),
    "LEFT": lambda state: state.viewport.scroll_left(),
    "h": lambda state: state.viewport.scroll_left(),
    "RIGHT": _scroll_right,
    "l": _scroll_right,
    "n": _jump_to_next_section,
    "N": _jump_to_previous_section,
    "p": _jump_to_previous_section,
    "a": _toggle_addresses,
}


def handle_key(state: PagerState, key: str) -> bool:
    """Apply one key token to ``state``; returns whether a redraw is needed."""
    if key.startswith("MOUSE_WHEEL_UP"):
        return state.viewport.scroll_up(WHEEL_STEP)
    if key.startswith("MOUSE_WHEEL_DOWN"):
        return state.viewport.scroll_down(WHEEL_STEP)
    action = _KEY_ACTIONS.get(key)
    if action is None:
        return False
    return action(state)


def run_main_loop(
    state: PagerState,
    terminal,
    stdin_fd: int,
    *,
    read: Callable[..., str] = read_key,
    render: Callable[[RenderContext], None] = render_profile_page,
    terminal_size: Callable[..., object] = shutil.get_terminal_size,
) -> None:
    """Run until the user quits; redraws only after a change or resize."""
    with terminal.raw_mode():
        while not state.should_quit:
            term = terminal_size((80, 24))
            height = max(1, term.lines - CHROME_ROWS)
            if term.columns != state.width or height != state.viewport.height:
                state.width = term.columns
                state.viewport.resize(len(state.rows), height)
                state.refresh_text_limit()
                state.dirty = True
            if state.dirty:
                render(state.render_context())
                state.dirty = False

            key = read(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            if not key:
                continue
            if handle_key(state, key):
                state.dirty = True


__all__ = [
    "KEY_POLL_TIMEOUT_MS",
    "WHEEL_STEP",
    "CHROME_ROWS",
    "PagerState",
    "handle_key",
    "run_main_loop",
]
