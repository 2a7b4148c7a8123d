"""
Screen layout for the reader and the file picker.

Layout functions are pure: they take state plus the terminal size and return a
list of DrawCall records. paint() is the only place that touches curses.
"""

import curses
from dataclasses import dataclass
from typing import Optional, Sequence

from settings import ReaderConfig


@dataclass(frozen=True)
class DrawCall:
    y: int
    x: int
    text: str
    style: str = "text"


CONTROLS = [
    ("[Space]", "Play/Pause", None),
    ("[+/-]", "WPM", None),
    ("[↑/←]", "Prev", None),
    ("[↓/→]", "Next", None),
    ("[r]", "Restart", None),
    ("[z]", "Zen", "enable_clutter_toggle"),
    ("[o]", "Open", "enable_file_picker"),
    ("[q]", "Quit", None),
]

LEGEND_GAP = "   "
PICKER_ARROW = "► "
ELLIPSIS = "..."


def init_colors() -> dict[str, int]:
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(1, curses.COLOR_WHITE, -1)   # word
    curses.init_pair(2, curses.COLOR_RED, -1)     # pivot / selection
    curses.init_pair(3, curses.COLOR_YELLOW, -1)  # status and headers
    curses.init_pair(4, curses.COLOR_CYAN, -1)    # key labels and prompt
    curses.init_pair(5, curses.COLOR_WHITE, -1)   # legend text (dimmed)
    return {
        "text": curses.color_pair(1),
        "word": curses.color_pair(1) | curses.A_BOLD,
        "pivot": curses.color_pair(2) | curses.A_BOLD,
        "status": curses.color_pair(3),
        "title": curses.color_pair(3) | curses.A_BOLD,
        "key": curses.color_pair(4) | curses.A_BOLD,
        "prompt": curses.color_pair(4),
        "legend": curses.color_pair(5) | curses.A_DIM,
        "error": curses.color_pair(2),
    }


def pivot_index(word: str, strategy: str = "simple") -> int:
    length = len(word)
    if strategy == "weighted" and length > 4:
        return length // 3 + 1
    return length // 2


def format_duration(seconds: float) -> str:
    total_ms = max(0, int(round(seconds * 1000)))
    total_seconds, millis = divmod(total_ms, 1000)
    minutes, secs = divmod(total_seconds, 60)
    return f"{minutes:02}:{secs:02}.{millis:03}"


def centered_col(width: int, text_len: int) -> int:
    return max(0, width // 2 - text_len // 2)


def clip(y: int, x: int, text: str, style: str, width: int, height: int) -> Optional[DrawCall]:
    if y < 0 or y >= height or x < 0 or x >= width or not text:
        return None
    return DrawCall(y, x, text[: width - x], style)


def status_text(index: int, total: int, wpm: int, paused: bool, percent: float, remaining: float) -> str:
    return (
        f"{'PAUSED' if paused else 'PLAYING'} | Word {index + 1}/{total} | WPM: {wpm}"
        f" | Percent: {percent:.0f}% | Remaining: {format_duration(remaining)}"
    )


def legend_items(config: ReaderConfig) -> list[tuple[str, str]]:
    items = []
    for key, action, toggle in CONTROLS:
        if toggle and not getattr(config, toggle):
            continue
        items.append((key, action))
    return items


def layout_word(word: str, width: int, height: int, strategy: str = "simple") -> list[DrawCall]:
    calls: list[DrawCall] = []
    if not word:
        return calls
    row = height // 2
    col = centered_col(width, len(word))
    pivot = pivot_index(word, strategy)
    for i, ch in enumerate(word):
        call = clip(row, col + i, ch, "pivot" if i == pivot else "word", width, height)
        if call:
            calls.append(call)
    return calls


def layout_controls(config: ReaderConfig, width: int, height: int) -> list[DrawCall]:
    items = legend_items(config)
    total_width = sum(len(k) + 1 + len(a) for k, a in items) + len(LEGEND_GAP) * (len(items) - 1)
    row = height - 2
    x = centered_col(width, total_width)
    calls: list[DrawCall] = []
    for i, (key, action) in enumerate(items):
        if i > 0:
            x += len(LEGEND_GAP)
        for text, style in ((key, "key"), (" " + action, "legend")):
            call = clip(row, x, text, style, width, height)
            if call:
                calls.append(call)
            x += len(text)
    return calls


def layout_reader(
    word: str,
    index: int,
    total: int,
    wpm: int,
    paused: bool,
    reduced_clutter: bool,
    percent: float,
    remaining: float,
    width: int,
    height: int,
    config: ReaderConfig,
) -> list[DrawCall]:
    calls = layout_word(word, width, height, config.pivot_strategy)
    if reduced_clutter:
        return calls
    calls.extend(layout_controls(config, width, height))
    status = status_text(index, total, wpm, paused, percent, remaining)
    call = clip(height - 3, centered_col(width, len(status)), status, "status", width, height)
    if call:
        calls.append(call)
    return calls


def display_name(path: str, width: int) -> str:
    name = path.split("/")[-1]
    if len(name) <= width - 10:
        return name
    keep = max(0, width - 13)
    return ELLIPSIS + name[len(name) - keep:]


def picker_window(selected: int, count: int, height: int) -> tuple[int, int]:
    visible = max(0, height - 6)
    start = max(0, selected - visible // 2)
    end = min(start + visible, count)
    return start, end


def layout_picker(
    filter_text: str,
    candidates: Sequence[str],
    selected: int,
    width: int,
    height: int,
    message: str = "",
) -> list[DrawCall]:
    calls: list[Optional[DrawCall]] = []
    header = "File Picker - Select a text file to open:" if candidates else "No matching text files found"
    calls.append(clip(1, 2, header, "title", width, height))
    if message:
        calls.append(clip(2, 2, message, "error", width, height))
    prompt = "Type to filter files: "
    calls.append(clip(3, 2, prompt, "prompt", width, height))
    calls.append(clip(3, 2 + len(prompt), filter_text + "_", "text", width, height))

    start, end = picker_window(selected, len(candidates), height)
    for i in range(start, end):
        row = 5 + (i - start)
        marker = PICKER_ARROW if i == selected else "  "
        style = "pivot" if i == selected else "text"
        calls.append(clip(row, 4, marker + display_name(candidates[i], width), style, width, height))
    return [call for call in calls if call]


def paint(stdscr: curses.window, calls: Sequence[DrawCall], attrs: Optional[dict[str, int]] = None) -> None:
    attrs = attrs or {}
    stdscr.erase()
    for call in calls:
        try:
            stdscr.addstr(call.y, call.x, call.text, attrs.get(call.style, 0))
        except curses.error:
            # Writing the bottom-right cell or past a shrinking window raises; the rest still draws.
            pass
    stdscr.refresh()
