"""
Word sources: reading input text and splitting it into display tokens.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

TEXT_ORIGIN = "<text>"
STDIN_ORIGIN = "<stdin>"


class InputError(Exception):
    """Input text could not be read."""


class EmptyInputError(InputError):
    """Input text contained no displayable words."""


@dataclass(frozen=True)
class WordSource:
    words: tuple[str, ...]
    origin: str = TEXT_ORIGIN

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, index: int) -> str:
        return self.words[index]


def parse_words(text: str, require_alnum: bool = True) -> list[str]:
    words: list[str] = []
    for token in text.split():
        if require_alnum and not any(ch.isalnum() for ch in token):
            continue
        words.append(token)
    return words


def read_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Failed to read file: {path} ({exc})") from exc


def read_stdin(stream: Optional[TextIO] = None) -> str:
    stream = stream if stream is not None else sys.stdin
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Failed to read standard input ({exc})") from exc


def make_source(text: str, origin: str = TEXT_ORIGIN, require_alnum: bool = True) -> WordSource:
    words = parse_words(text, require_alnum=require_alnum)
    if not words:
        raise EmptyInputError(f"No words found in input ({origin})")
    logger.info("Loaded %d words from %s", len(words), origin)
    return WordSource(tuple(words), origin)


def load_source(
    text: Optional[str] = None,
    file: Optional[str] = None,
    stdin: Optional[TextIO] = None,
    require_alnum: bool = True,
) -> WordSource:
    """Resolve the input precedence: literal text, then file, then stdin."""
    if text is not None:
        return make_source(text, TEXT_ORIGIN, require_alnum)
    if file is not None:
        return make_source(read_file(file), file, require_alnum)
    return make_source(read_stdin(stdin), STDIN_ORIGIN, require_alnum)
