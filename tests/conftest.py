import pytest


class FakeClock:
    def __init__(self):
        self.ms = 0

    def __call__(self):
        return self.ms / 1000

    def sleep(self, ms):
        self.ms += ms


class FakeScreen:
    """Stands in for a curses window: scripted keys in, recorded frames out.

    A None entry in `keys`, or an exhausted key list, is a poll timeout that
    moves the clock forward by the configured timeout.
    """

    def __init__(self, keys=(), size=(24, 80), clock=None, max_polls=10000):
        self.keys = list(keys)
        self.size = size
        self.clock = clock or FakeClock()
        self.timeout_ms = 50
        self.max_polls = max_polls
        self.polls = 0
        self.current = []
        self.frames = []

    def getmaxyx(self):
        return self.size

    def timeout(self, ms):
        self.timeout_ms = ms

    def erase(self):
        self.current = []

    def addstr(self, y, x, text, attr=0):
        self.current.append((y, x, text))

    def refresh(self):
        self.frames.append(list(self.current))

    def getch(self):
        self.polls += 1
        if self.polls > self.max_polls:
            raise RuntimeError("loop did not finish")
        if self.keys:
            key = self.keys.pop(0)
            if key is not None:
                return key
        self.clock.sleep(self.timeout_ms)
        return -1

    def row(self, frame, y):
        cells = sorted((x, text) for row, x, text in frame if row == y)
        return "".join(text for _, text in cells)

    def words(self):
        h, _ = self.size
        return [self.row(frame, h // 2) for frame in self.frames]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_screen(clock):
    def factory(keys=(), size=(24, 80)):
        return FakeScreen(keys, size=size, clock=clock)

    return factory
