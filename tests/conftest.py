import pytest

from shardflake.ids import Config


class FakeClock:
    """A millisecond clock that only moves when told to."""

    def __init__(self, now: int, tick_after: int | None = None):
        self.now = now
        self.reads = 0
        self.tick_after = tick_after

    def __call__(self) -> int:
        self.reads += 1
        if self.tick_after is not None and self.reads > self.tick_after:
            self.now += 1
            self.tick_after = None
        return self.now

    def advance(self, ms: int = 1):
        self.now += ms


@pytest.fixture
def epoch_ms():
    return 1704067200000


@pytest.fixture
def make_clock(epoch_ms):
    """Builds a FakeClock reading ``offset`` ms past the epoch."""

    def _make_clock(offset: int = 0, tick_after: int | None = None) -> FakeClock:
        return FakeClock(epoch_ms + offset, tick_after=tick_after)

    return _make_clock


@pytest.fixture
def config(epoch_ms):
    return Config(shard_id=3, epoch_ms=epoch_ms, sequence_bits=10, shard_bits=5)


@pytest.fixture
def clock(make_clock):
    return make_clock(123)
