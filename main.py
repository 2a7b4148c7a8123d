"""
Fullscreen terminal RSVP reader: one word at a time, centered on a pivot letter.

Usage: python main.py -f book.txt
       cat notes.md | python main.py --wpm 350
"""

import argparse
import curses
import logging
import os
import sys
import time
from functools import partial
from typing import Callable, Optional

from layout import init_colors, layout_picker, layout_reader, paint
from picker import KEY_ESCAPE, FilePicker
from playback import PlaybackEngine
from settings import MAX_WPM, MIN_WPM, PIVOT_STRATEGIES, SETTINGS_PATH, ReaderConfig, build_config, load_settings
from wordsource import InputError, WordSource, load_source

logger = logging.getLogger(__name__)

KEY_SPACE = ord(" ")
QUIT_KEYS = (ord("q"), KEY_ESCAPE)
PREV_KEYS = (curses.KEY_LEFT, curses.KEY_UP, ord("h"))
NEXT_KEYS = (curses.KEY_RIGHT, curses.KEY_DOWN, ord("l"))
FASTER_KEYS = (ord("+"), ord("="))
SLOWER_KEYS = (ord("-"),)


class Dispatcher:
    """
    The single cooperative loop: poll for a key with a short timeout, advance
    the engine when the display interval has elapsed, re-render after changes.
    """

    def __init__(
        self,
        stdscr: curses.window,
        engine: PlaybackEngine,
        config: ReaderConfig,
        attrs: Optional[dict[str, int]] = None,
        clock: Callable[[], float] = time.monotonic,
        picker_factory: Callable[[], FilePicker] = FilePicker,
        source: Optional[WordSource] = None,
    ) -> None:
        self.stdscr = stdscr
        self.engine = engine
        self.config = config
        self.attrs = attrs or {}
        self.clock = clock
        self.picker_factory = picker_factory
        self.source = source
        self.picker: Optional[FilePicker] = None
        self.finished = False
        self.last_advance = clock()
        self.interval = engine.display_interval()

    @property
    def mode(self) -> str:
        if self.finished:
            return "finished"
        if self.picker is not None:
            return "picking"
        return "paused" if self.engine.paused else "playing"

    def render(self) -> None:
        h, w = self.stdscr.getmaxyx()
        if self.picker is not None:
            state = self.picker.state
            calls = layout_picker(state.filter, state.candidates, state.selected, w, h, state.message)
        else:
            engine = self.engine
            calls = layout_reader(
                engine.current_word(),
                engine.index,
                engine.total,
                engine.wpm,
                engine.paused,
                engine.reduced_clutter,
                engine.percent_complete(),
                engine.remaining_seconds(),
                w,
                h,
                self.config,
            )
        paint(self.stdscr, calls, self.attrs)

    def finish(self) -> None:
        self.finished = True
        logger.debug("Finished at word %d of %d", self.engine.index, self.engine.total)

    def tick(self, now: float) -> None:
        if self.mode != "playing":
            return
        if now - self.last_advance < self.interval:
            return
        self.engine.advance()
        if self.engine.is_finished():
            self.finish()
            return
        self.last_advance = now
        self.render()

    def open_picker(self) -> None:
        self.picker = self.picker_factory()
        logger.debug("File picker opened with %d candidates", len(self.picker.state.candidates))
        self.render()

    def close_picker(self, now: float) -> None:
        picker = self.picker
        self.picker = None
        if picker is not None and picker.loaded is not None:
            self.source = picker.loaded
            self.engine.load(picker.loaded.words)
        self.last_advance = now
        self.render()

    def handle_picker_key(self, ch: int, now: float) -> None:
        if ch == curses.KEY_RESIZE:
            self.picker.refresh()
            self.render()
            return
        result = self.picker.handle_key(ch)
        if result == FilePicker.OPEN:
            self.render()
        else:
            self.close_picker(now)

    def handle_key(self, ch: int, now: float) -> None:
        if self.picker is not None:
            self.handle_picker_key(ch, now)
            return
        engine = self.engine
        if ch in QUIT_KEYS:
            self.finish()
        elif ch == curses.KEY_RESIZE:
            self.render()
        elif ch == KEY_SPACE:
            engine.toggle_pause()
            logger.debug("%s at word %d", self.mode, engine.index)
            self.last_advance = now
            self.render()
        elif ch == ord("r"):
            engine.restart()
            self.render()
        elif ch in NEXT_KEYS:
            if engine.advance():
                if engine.is_finished():
                    self.finish()
                    return
                self.render()
                self.last_advance = now
        elif ch in PREV_KEYS:
            if engine.rewind():
                self.render()
                self.last_advance = now
        elif ch in FASTER_KEYS or ch in SLOWER_KEYS:
            step = self.config.wpm_step if ch in FASTER_KEYS else -self.config.wpm_step
            engine.retime(step)
            self.interval = engine.display_interval()
            self.render()
        elif ch == ord("z") and self.config.enable_clutter_toggle:
            engine.toggle_clutter()
            self.render()
        elif ch == ord("o") and self.config.enable_file_picker:
            self.open_picker()

    def run(self) -> None:
        self.stdscr.timeout(self.config.poll_timeout_ms)
        self.render()
        while not self.finished:
            self.tick(self.clock())
            if self.finished:
                break
            ch = self.stdscr.getch()
            if ch == -1:
                continue
            self.handle_key(ch, self.clock())


def run(
    stdscr: curses.window,
    source: WordSource,
    config: ReaderConfig,
    index: int = 0,
    require_alnum: bool = True,
) -> None:
    curses.curs_set(0)
    attrs = init_colors()
    stdscr.keypad(True)
    engine = PlaybackEngine(source.words, wpm=config.wpm, index=index, reduced_clutter=config.reduced_clutter)
    picker_factory = partial(FilePicker, ".", require_alnum=require_alnum)
    dispatcher = Dispatcher(stdscr, engine, config, attrs=attrs, picker_factory=picker_factory, source=source)
    dispatcher.run()
    current = dispatcher.source or source
    logger.info("Stopped at word %d of %d (%s)", min(engine.index + 1, engine.total), engine.total, current.origin)


def wpm_value(text: str) -> int:
    try:
        wpm = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}")
    if not MIN_WPM <= wpm <= MAX_WPM:
        raise argparse.ArgumentTypeError(f"must be between {MIN_WPM} and {MAX_WPM}")
    return wpm


def build_parser():
    parser = argparse.ArgumentParser(description="Terminal RSVP speed reader")
    parser.add_argument("-w", "--wpm", type=wpm_value, default=None, help="Words per minute (default 500).")
    parser.add_argument("-t", "--text", default=None, help="Literal text to read.")
    parser.add_argument("-f", "--file", default=None, metavar="FILE", help="Read words from FILE.")
    parser.add_argument("-i", "--index", type=int, default=0, help="Word index to start at.")
    parser.add_argument("--pivot", choices=PIVOT_STRATEGIES, default=None, help="Pivot letter placement.")
    parser.add_argument("--zen", action="store_true", help="Start with the status and key legend hidden.")
    parser.add_argument("--no-picker", action="store_true", help="Disable the [o] file picker.")
    parser.add_argument(
        "--keep-symbols",
        action="store_true",
        help="Keep tokens that contain no letters or digits.",
    )
    parser.add_argument("--config", default=str(SETTINGS_PATH), metavar="FILE", help="JSON settings file.")
    parser.add_argument("--log-file", default=None, metavar="FILE", help="Write log records to FILE.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def configure_logging(log_file: Optional[str] = None, debug: bool = False) -> None:
    # curses owns the terminal, so records only ever go to a file.
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)


def reattach_terminal() -> None:
    """Point fd 0 back at the terminal when stdin is a pipe, so curses reads keys."""
    if sys.stdin.isatty():
        return
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError as exc:
        raise InputError(f"No terminal available for keyboard input ({exc})") from exc
    os.dup2(fd, 0)
    os.close(fd)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.debug)
    config = build_config(load_settings(args.config), args)

    try:
        source = load_source(args.text, args.file, require_alnum=not args.keep_symbols)
        reattach_terminal()
    except InputError as exc:
        print(exc, file=sys.stderr)
        return 1

    os.environ.setdefault("ESCDELAY", "25")
    try:
        curses.wrapper(run, source, config, args.index, not args.keep_symbols)
    except curses.error as exc:
        logger.exception("Terminal error")
        print(f"Terminal error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
