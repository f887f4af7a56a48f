from conftest import FakeClock
from stopwatch import IDLE, PAUSED, RUNNING, Stopwatch


def make(t: int = 0):
    clock = FakeClock(t)
    sw = Stopwatch(clock)
    sw.select_user("khalid")
    sw.select_topic("coding")
    return sw, clock


def test_pause_resume_stop_scenario():
    sw, clock = make(0)
    assert sw.start()
    clock.t = 10_000
    assert sw.pause()
    clock.t = 15_000
    assert sw.start()
    clock.t = 20_000
    finished = sw.stop()
    assert finished.paused_time == 5_000
    assert finished.active_time == 15_000
    assert finished.ended_at == 20_000
    assert (finished.user, finished.topic) == ("khalid", "coding")
    assert sw.phase == IDLE


def test_active_plus_paused_covers_span_over_many_cycles():
    sw, clock = make(1_000)
    sw.start()
    for run, gap in [(300, 700), (1_250, 50), (10, 9_990), (4_000, 1)]:
        clock.advance(run)
        sw.pause()
        clock.advance(gap)
        sw.start()
    clock.advance(123)
    finished = sw.stop()
    assert finished.active_time + finished.paused_time == clock.t - 1_000
    assert finished.paused_time == 700 + 50 + 9_990 + 1


def test_paused_accumulated_never_decreases():
    sw, clock = make()
    sw.start()
    seen = [sw.paused_accumulated]
    for _ in range(5):
        clock.advance(100)
        sw.pause()
        seen.append(sw.paused_accumulated)
        clock.advance(250)
        sw.start()
        seen.append(sw.paused_accumulated)
    assert seen == sorted(seen)
    assert seen[-1] == 1_250


def test_stop_while_paused_closes_the_open_pause():
    sw, clock = make(0)
    sw.start()
    clock.t = 10_000
    sw.pause()
    clock.t = 25_000
    finished = sw.stop()
    assert finished.active_time == 10_000
    assert finished.paused_time == 15_000


def test_pause_twice_is_a_noop():
    sw, clock = make()
    sw.start()
    clock.advance(1_000)
    assert sw.pause()
    started_pause = sw.pause_started_at
    acc = sw.paused_accumulated
    clock.advance(500)
    assert not sw.pause()
    assert sw.pause_started_at == started_pause
    assert sw.paused_accumulated == acc
    assert sw.phase == PAUSED


def test_start_requires_user_and_topic():
    sw = Stopwatch(FakeClock())
    assert not sw.start()
    assert sw.phase == IDLE
    sw.user = "rio"
    assert not sw.start()


def test_selecting_user_picks_first_topic():
    sw = Stopwatch(FakeClock())
    assert sw.select_user("rio")
    assert sw.topic == "studying"
    assert sw.select_topic("coding")
    assert sw.select_user("khalid")
    assert sw.topic == "coding"


def test_selection_locked_while_open():
    sw, clock = make()
    sw.start()
    assert not sw.select_user("rio")
    assert not sw.select_topic("studying")
    sw.pause()
    assert not sw.select_user("rio")
    assert (sw.user, sw.topic) == ("khalid", "coding")
    sw.stop()
    assert sw.select_user("rio")


def test_start_while_running_is_noop():
    sw, clock = make(0)
    sw.start()
    clock.t = 5_000
    assert not sw.start()
    assert sw.started_at == 0
    assert sw.phase == RUNNING


def test_invalid_transitions_from_idle():
    sw, _ = make()
    assert not sw.pause()
    assert sw.stop() is None
    assert sw.phase == IDLE


def test_toggle_alternates_start_and_pause():
    sw, clock = make()
    assert sw.toggle()
    assert sw.phase == RUNNING
    clock.advance(10)
    assert sw.toggle()
    assert sw.phase == PAUSED
    assert sw.toggle()
    assert sw.phase == RUNNING


def test_reset_discards_without_emitting():
    sw, clock = make()
    sw.start()
    clock.advance(1_000)
    sw.pause()
    sw.reset()
    assert sw.phase == IDLE
    assert sw.started_at is None
    assert sw.paused_accumulated == 0
    assert sw.pause_started_at is None
    assert sw.stop() is None
    # selection survives a reset
    assert sw.user == "khalid"


def test_elapsed_is_live_while_running_and_frozen_while_paused():
    sw, clock = make(0)
    assert sw.elapsed() == 0
    sw.start()
    clock.t = 1_500
    assert sw.elapsed() == 1_500
    clock.t = 2_000
    sw.pause()
    clock.t = 9_000
    assert sw.elapsed() == 2_000
    assert sw.paused_elapsed() == 7_000
    sw.start()
    clock.t = 10_000
    assert sw.elapsed() == 3_000
    assert sw.paused_elapsed() == 7_000


def test_clock_going_backwards_clamps_to_zero():
    sw, clock = make(10_000)
    sw.start()
    clock.t = 4_000
    assert sw.elapsed() == 0
    finished = sw.stop()
    assert finished.active_time == 0
    assert finished.paused_time == 0


def test_backwards_resume_adds_no_negative_pause():
    sw, clock = make(10_000)
    sw.start()
    clock.t = 12_000
    sw.pause()
    clock.t = 11_000
    sw.start()
    assert sw.paused_accumulated == 0


def test_snapshot():
    sw, clock = make(100)
    sw.start()
    clock.t = 400
    snap = sw.snapshot()
    assert snap.phase == RUNNING
    assert snap.started_at == 100
    assert snap.elapsed == 300
    assert snap.pause_started_at is None
