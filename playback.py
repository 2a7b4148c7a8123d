"""
Playback engine: word index, pace and the paused / reduced-clutter flags.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from settings import MAX_WPM, MIN_WPM

logger = logging.getLogger(__name__)


@dataclass
class PlaybackState:
    index: int = 0
    wpm: int = 500
    paused: bool = True
    reduced_clutter: bool = False


class PlaybackEngine:
    def __init__(
        self,
        words: Sequence[str],
        wpm: int = 500,
        index: int = 0,
        reduced_clutter: bool = False,
    ) -> None:
        self.words: tuple[str, ...] = tuple(words)
        wpm = max(MIN_WPM, min(MAX_WPM, wpm))
        self.state = PlaybackState(
            index=self._clamp_index(index),
            wpm=wpm,
            paused=True,
            reduced_clutter=reduced_clutter,
        )

    def _clamp_index(self, index: int) -> int:
        if not self.words:
            return 0
        return max(0, min(len(self.words) - 1, index))

    @property
    def index(self) -> int:
        return self.state.index

    @property
    def wpm(self) -> int:
        return self.state.wpm

    @property
    def paused(self) -> bool:
        return self.state.paused

    @property
    def reduced_clutter(self) -> bool:
        return self.state.reduced_clutter

    @property
    def total(self) -> int:
        return len(self.words)

    def current_word(self) -> str:
        if self.is_finished():
            return ""
        return self.words[self.state.index]

    def is_finished(self) -> bool:
        return self.state.index >= len(self.words)

    def advance(self) -> bool:
        # The step past the last word lands on the finished sentinel (index == total).
        if self.is_finished():
            return False
        self.state.index += 1
        return True

    def rewind(self) -> bool:
        if self.state.index > 0 and not self.is_finished():
            self.state.index -= 1
            return True
        return False

    def restart(self) -> None:
        self.state.index = 0
        self.state.paused = True

    def retime(self, delta: int) -> bool:
        new_wpm = self.state.wpm + delta
        if not MIN_WPM <= new_wpm <= MAX_WPM:
            return False
        self.state.wpm = new_wpm
        logger.debug("WPM set to %d", new_wpm)
        return True

    def toggle_pause(self) -> None:
        self.state.paused = not self.state.paused

    def toggle_clutter(self) -> None:
        self.state.reduced_clutter = not self.state.reduced_clutter

    def load(self, words: Sequence[str]) -> None:
        self.words = tuple(words)
        self.restart()

    def display_interval(self) -> float:
        return 60.0 / self.state.wpm

    def percent_complete(self) -> float:
        if not self.words:
            return 0.0
        return (self.state.index + 1) / len(self.words) * 100.0

    def remaining_seconds(self) -> float:
        remaining = max(0, len(self.words) - self.state.index)
        return remaining / (self.state.wpm / 60.0)
