"""
Interactive file picker: filter-as-you-type over the text files below the
working directory.
"""

import curses
import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from wordsource import InputError, WordSource, parse_words, read_file

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = ("txt", "md", "rst", "log", "text")
EXCLUDED_DIRS = {".git", ".hg", ".svn", "__pycache__", "node_modules", ".venv", "venv", ".tox"}

KEY_ESCAPE = 27
KEY_CTRL_N = 14
KEY_CTRL_P = 16
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)


def find_text_files(root: str = ".") -> list[str]:
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in EXCLUDED_DIRS]
        for name in filenames:
            _, ext = os.path.splitext(name)
            if ext[1:].lower() in TEXT_EXTENSIONS:
                path = os.path.join(dirpath, name)
                if os.path.isfile(path):
                    files.append(path.replace(os.sep, "/"))
    files.sort()
    return files


def filter_text_files(files: list[str], text: str) -> list[str]:
    needle = text.lower()
    return [path for path in files if needle in path.lower()]


@dataclass
class PickerState:
    filter: str = ""
    selected: int = 0
    candidates: list[str] = field(default_factory=list)
    message: str = ""


class FilePicker:
    """
    Picker state plus the key handling for it.

    handle_key() returns one of the OPEN / CLOSED / LOADED results; after LOADED
    the new word source is on `loaded`.
    """

    OPEN = "open"
    CLOSED = "closed"
    LOADED = "loaded"

    def __init__(
        self,
        root: str = ".",
        require_alnum: bool = True,
        scan: Optional[Callable[[str], list[str]]] = None,
    ) -> None:
        self.root = root
        self.require_alnum = require_alnum
        self.scan = scan or find_text_files
        self.state = PickerState()
        self.loaded: Optional[WordSource] = None
        self.refresh()

    def refresh(self) -> None:
        files = self.scan(self.root)
        if self.state.filter:
            files = filter_text_files(files, self.state.filter)
        self.state.candidates = files
        self.clamp()

    def clamp(self) -> None:
        last = max(0, len(self.state.candidates) - 1)
        self.state.selected = max(0, min(last, self.state.selected))

    def type_char(self, ch: str) -> None:
        self.state.filter += ch
        self.state.selected = 0
        self.state.message = ""
        self.refresh()

    def backspace(self) -> None:
        self.state.filter = self.state.filter[:-1]
        self.state.selected = 0
        self.state.message = ""
        self.refresh()

    def move(self, delta: int) -> None:
        self.state.selected += delta
        self.state.message = ""
        self.clamp()

    def selected_path(self) -> Optional[str]:
        if not self.state.candidates:
            return None
        return self.state.candidates[self.state.selected]

    def select(self) -> Optional[WordSource]:
        path = self.selected_path()
        if path is None:
            return None
        try:
            text = read_file(path)
        except InputError as exc:
            logger.warning("%s", exc)
            self.state.message = f"Could not read {path}"
            return None
        words = parse_words(text, require_alnum=self.require_alnum)
        if not words:
            return None
        logger.info("Loaded %d words from %s", len(words), path)
        return WordSource(tuple(words), path)

    def handle_key(self, ch: int) -> str:
        if ch == KEY_ESCAPE:
            return self.CLOSED
        if ch in ENTER_KEYS:
            source = self.select()
            if source is not None:
                self.loaded = source
                return self.LOADED
            return self.OPEN
        if ch in (curses.KEY_UP, KEY_CTRL_P):
            self.move(-1)
        elif ch in (curses.KEY_DOWN, KEY_CTRL_N):
            self.move(1)
        elif ch in BACKSPACE_KEYS:
            self.backspace()
        elif 32 <= ch <= 126:
            self.type_char(chr(ch))
        return self.OPEN
