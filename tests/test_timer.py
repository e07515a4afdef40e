import pytest

from blockstage.timer import SystemTimer


class FakeClock:
    def __init__(self, ticks=0):
        self.ticks = ticks

    def __call__(self):
        return self.ticks


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(clock):
    return SystemTimer(clock=clock, ticks_per_second=1000)


def test_new_timer_is_stopped(timer):
    assert timer.is_stopped() is True


def test_reset_runs_and_measures_from_reset(timer, clock):
    clock.ticks = 500
    timer.reset()
    assert timer.is_stopped() is False
    assert timer.time() == pytest.approx(0.0)
    clock.ticks = 1500
    assert timer.time() == pytest.approx(1.0)


def test_elapsed_time_since_previous_call(timer, clock):
    clock.ticks = 100
    timer.reset()
    clock.ticks = 350
    assert timer.elapsed_time() == pytest.approx(0.25)
    assert timer.elapsed_time() == pytest.approx(0.0)


def test_elapsed_time_clamped_when_counter_goes_back(timer, clock):
    clock.ticks = 1000
    timer.reset()
    clock.ticks = 500
    assert timer.elapsed_time() == 0.0


def test_stop_freezes_time(timer, clock):
    clock.ticks = 100
    timer.reset()
    clock.ticks = 600
    timer.stop()
    clock.ticks = 5000
    assert timer.is_stopped() is True
    assert timer.time() == pytest.approx(0.5)


def test_second_stop_has_no_effect(timer, clock):
    clock.ticks = 100
    timer.reset()
    clock.ticks = 600
    timer.stop()
    clock.ticks = 900
    timer.stop()
    assert timer.time() == pytest.approx(0.5)


def test_start_excludes_stopped_period(timer, clock):
    clock.ticks = 100
    timer.reset()
    clock.ticks = 600
    timer.stop()
    clock.ticks = 1600
    timer.start()
    clock.ticks = 1700
    assert timer.time() == pytest.approx(0.6)


def test_advance_moves_stopped_timer_a_tenth(timer, clock):
    clock.ticks = 100
    timer.reset()
    clock.ticks = 600
    timer.stop()
    before = timer.time()
    timer.advance()
    assert timer.time() == pytest.approx(before + 0.1)


def test_absolute_time_is_counter_in_seconds(timer, clock):
    clock.ticks = 2500
    assert timer.absolute_time() == pytest.approx(2.5)


def test_rejects_non_positive_frequency(clock):
    with pytest.raises(ValueError):
        SystemTimer(clock=clock, ticks_per_second=0)


def test_custom_clock_needs_frequency(clock):
    with pytest.raises(ValueError):
        SystemTimer(clock=clock)


def test_default_clock_elapsed_is_non_negative():
    timer = SystemTimer()
    timer.reset()
    assert timer.elapsed_time() >= 0.0
    assert timer.is_stopped() is False