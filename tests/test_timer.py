from xsubkit.timer import Timer


class FakeClock:
    def __init__(self, readings):
        self._readings = iter(readings)

    def __call__(self):
        return next(self._readings)


def test_mark_returns_elapsed_since_construction():
    timer = Timer(clock=FakeClock([10.0, 12.0]))
    assert timer.mark() == 2.0


def test_mark_resets_interval():
    timer = Timer(clock=FakeClock([0.0, 5.0, 6.0]))
    first = timer.mark()
    second = timer.peek()
    assert first == 5.0
    assert second < first


def test_peek_does_not_reset():
    timer = Timer(clock=FakeClock([0.0, 1.0, 3.0]))
    early = timer.peek()
    late = timer.peek()
    assert early == 1.0
    assert late > early


def test_real_clock_is_monotonic():
    timer = Timer()
    first = timer.peek()
    second = timer.peek()
    assert 0.0 <= first <= second


def test_real_clock_mark_not_negative():
    timer = Timer()
    assert timer.mark() >= 0.0
    assert timer.peek() >= 0.0