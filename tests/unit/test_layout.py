import curses

import layout
from settings import ReaderConfig


def _row(calls, y):
    cells = sorted((c.x, c.text) for c in calls if c.y == y)
    return "".join(text for _, text in cells)


def test_simple_pivot_is_middle_character():
    assert layout.pivot_index("cat") == 1
    assert layout.pivot_index("word") == 2
    assert layout.pivot_index("") == 0


def test_weighted_pivot_leans_left_on_long_words():
    assert layout.pivot_index("reading", "weighted") == 3
    assert layout.pivot_index("abcdefghijkl", "weighted") == 5
    assert layout.pivot_index("word", "weighted") == 2


def test_format_duration():
    assert layout.format_duration(0.3) == "00:00.300"
    assert layout.format_duration(125.5) == "02:05.500"
    assert layout.format_duration(0) == "00:00.000"


def test_status_text_summarizes_progress():
    text = layout.status_text(index=0, total=3, wpm=600, paused=True, percent=100 / 3, remaining=0.3)

    assert text == "PAUSED | Word 1/3 | WPM: 600 | Percent: 33% | Remaining: 00:00.300"


def test_status_text_playing_rounds_percent():
    text = layout.status_text(index=1, total=3, wpm=300, paused=False, percent=200 / 3, remaining=0.4)

    assert text.startswith("PLAYING | Word 2/3 | WPM: 300 | Percent: 67%")


def test_word_is_centered_with_pivot_highlighted():
    calls = layout.layout_word("abc", width=80, height=24)

    assert [(c.y, c.x, c.text) for c in calls] == [(12, 39, "a"), (12, 40, "b"), (12, 41, "c")]
    assert [c.style for c in calls] == ["word", "pivot", "word"]


def test_empty_word_draws_nothing():
    assert layout.layout_word("", width=80, height=24) == []


def test_reader_layout_includes_status_and_legend():
    calls = layout.layout_reader("hello", 0, 10, 500, True, False, 10.0, 1.2, 120, 30, ReaderConfig())

    status = _row(calls, 27)
    legend = _row(calls, 28)
    assert status.startswith("PAUSED | Word 1/10")
    assert "[Space] Play/Pause" in legend
    assert "[z] Zen" in legend
    assert "[o] Open" in legend
    assert legend.endswith("[q] Quit")


def test_reduced_clutter_draws_only_the_word():
    calls = layout.layout_reader("hello", 0, 10, 500, True, True, 10.0, 1.2, 100, 30, ReaderConfig())

    assert {c.y for c in calls} == {15}
    assert _row(calls, 15) == "hello"


def test_legend_skips_disabled_features():
    config = ReaderConfig(enable_file_picker=False, enable_clutter_toggle=False)

    legend = _row(layout.layout_controls(config, 120, 30), 28)

    assert "[o]" not in legend
    assert "[z]" not in legend
    assert "[r] Restart" in legend


def test_tiny_terminal_is_clipped_not_raised():
    calls = layout.layout_reader("extraordinary", 4, 10, 500, False, False, 50.0, 0.72, 6, 2, ReaderConfig())

    assert calls
    for call in calls:
        assert 0 <= call.y < 2
        assert 0 <= call.x < 6
        assert call.x + len(call.text) <= 6


def test_display_name_truncates_with_leading_ellipsis():
    path = "./books/" + "a" * 20 + "-tail.txt"

    name = layout.display_name(path, width=20)

    assert name == "...ail.txt"
    assert layout.display_name("./docs/short.md", width=80) == "short.md"


def test_picker_window_centers_on_selection():
    assert layout.picker_window(selected=10, count=30, height=10) == (8, 12)
    assert layout.picker_window(selected=0, count=3, height=24) == (0, 3)
    assert layout.picker_window(selected=0, count=0, height=24) == (0, 0)


def test_picker_layout_marks_selection():
    calls = layout.layout_picker("no", ["./notes.txt", "./nope.md"], 1, 80, 24)

    assert _row(calls, 1) == "File Picker - Select a text file to open:"
    assert _row(calls, 3) == "Type to filter files: no_"
    assert _row(calls, 5) == "  notes.txt"
    assert _row(calls, 6) == "► nope.md"


def test_picker_layout_reports_no_matches():
    calls = layout.layout_picker("zzz", [], 0, 80, 24)

    assert _row(calls, 1) == "No matching text files found"
    assert all(c.y <= 3 for c in calls)


def test_paint_swallows_out_of_window_errors():
    class Window:
        def __init__(self):
            self.drawn = []

        def erase(self):
            pass

        def refresh(self):
            pass

        def addstr(self, y, x, text, attr):
            if y > 0:
                raise curses.error("out of window")
            self.drawn.append(text)

    window = Window()
    calls = [layout.DrawCall(0, 0, "ok"), layout.DrawCall(5, 0, "lost"), layout.DrawCall(0, 3, "also")]

    layout.paint(window, calls, {"text": 7})

    assert window.drawn == ["ok", "also"]
