from datetime import timedelta

from pomyu.models import Period
from pomyu.period_store import PeriodStore
from pomyu.timer_service import TimerService


def make_service(db, clock, periods=None, **kwargs) -> TimerService:
    if periods is None:
        periods = [Period("Focus", 60), Period("Small break", 30), Period("Full break", 90)]
    store = PeriodStore(db, periods=periods)
    return TimerService(store, time_provider=clock, **kwargs)


def run_ticks(service: TimerService, clock, count: int, seconds: float = 1) -> list:
    events = []
    for _ in range(count):
        clock.advance(seconds)
        event = service.handle_tick(1000)
        if event is not None:
            events.append(event)
    return events


def test_start_creates_fresh_session(db, clock, qtbot):
    service = make_service(db, clock)
    states = []
    service.state_changed.connect(states.append)

    assert service.start() is True
    assert service.state == "running"
    assert service.elapsed == timedelta(0)
    assert service.session.tick_count == 0
    assert service.is_ticking
    assert states == ["running"]
    # Already running: ignored
    assert service.start() is False
    service.reset()


def test_ticks_notify_once_when_period_is_over(db, clock, qtbot):
    service = make_service(db, clock)
    emitted = []
    service.notification.connect(emitted.append)
    service.start()

    events = run_ticks(service, clock, 59)
    assert events == []
    events = run_ticks(service, clock, 1)
    assert [e.body for e in events] == ["Focus is over"]
    assert emitted == events

    events = run_ticks(service, clock, 299)
    assert events == []
    events = run_ticks(service, clock, 1)
    assert [e.body for e in events] == ["Focus has been over for 5 minutes"]
    service.reset()


def test_delayed_tick_credits_wall_clock(db, clock, qtbot):
    service = make_service(db, clock)
    service.start()
    clock.advance(45)
    service.handle_tick(1000)
    assert service.elapsed >= timedelta(seconds=45)
    service.reset()


def test_pause_resume_does_not_credit_paused_gap(db, clock, qtbot):
    service = make_service(db, clock)
    service.start()
    run_ticks(service, clock, 10)
    before_pause = service.elapsed

    assert service.pause() is True
    assert service.state == "paused"
    assert not service.is_ticking
    assert service.handle_tick(1000) is None
    assert service.elapsed == before_pause

    clock.advance(600)
    assert service.resume() is True
    assert service.session.tick_count == 0
    run_ticks(service, clock, 1)
    assert service.elapsed >= before_pause + timedelta(seconds=1)
    assert service.elapsed < before_pause + timedelta(seconds=600)
    service.reset()


def test_pause_and_resume_only_from_matching_state(db, clock, qtbot):
    service = make_service(db, clock)
    assert service.pause() is False
    assert service.resume() is False
    service.start()
    assert service.resume() is False
    service.pause()
    assert service.pause() is False
    service.reset()


def test_finish_wraps_around_cycle(db, clock, qtbot):
    service = make_service(db, clock)
    changed = []
    service.period_changed.connect(changed.append)
    service.start()
    run_ticks(service, clock, 5)

    for _ in range(3):
        service.finish()
        assert service.state == "idle"
        assert service.session is None
    assert service.current_period == 0
    assert changed == [1, 2, 0]


def test_finish_with_no_periods_stays_at_zero(db, clock, qtbot):
    service = make_service(db, clock, periods=[])
    service.finish()
    service.finish()
    assert service.current_period == 0
    assert service.current_period_length() == timedelta(minutes=25)
    assert service.current_period_name() is None


def test_no_periods_uses_default_name(db, clock, qtbot):
    service = make_service(db, clock, periods=[])
    service.start()
    events = run_ticks(service, clock, 1, seconds=25 * 60)
    assert [e.body for e in events] == ["Work is over"]
    service.reset()


def test_reset_keeps_period_index(db, clock, qtbot):
    service = make_service(db, clock)
    cleared = []
    service.session_cleared.connect(lambda: cleared.append(True))
    service.finish()
    service.start()
    run_ticks(service, clock, 3)
    service.reset()
    assert service.current_period == 1
    assert service.session is None
    assert service.state == "idle"
    assert not service.is_ticking
    assert cleared == [True]


def test_primary_action_follows_state(db, clock, qtbot):
    service = make_service(db, clock)
    assert service.primary_action() == "Start"
    service.start()
    assert service.primary_action() == "Pause"
    run_ticks(service, clock, 60)
    assert service.primary_action() == "Finish"
    service.pause()
    assert service.primary_action() == "Resume"
    service.reset()
    assert service.primary_action() == "Start"


def test_callback_from_cancelled_run_is_dropped(db, clock, qtbot):
    service = make_service(db, clock)
    service.start()
    stale_generation = service._generation  # noqa: SLF001
    service.pause()
    service.resume()
    clock.advance(5)

    service._on_timeout(stale_generation)  # noqa: SLF001
    assert service.session.tick_count == 0

    service._on_timeout(service._generation)  # noqa: SLF001
    assert service.session.tick_count == 1
    service.reset()


def test_qtimer_ticks_while_running_and_stops_on_pause(db, qtbot):
    store = PeriodStore(db, periods=[Period("Focus", 60)])
    service = TimerService(store, tick_interval_ms=10)
    ticks = []
    service.tick.connect(ticks.append)

    service.start()
    qtbot.waitUntil(lambda: service.session.tick_count >= 3, timeout=2000)
    service.pause()
    count = service.session.tick_count
    qtbot.wait(60)
    assert service.session.tick_count == count
    assert ticks == sorted(ticks)
    service.reset()


def test_tick_carries_elapsed_past_int32_range(db, clock, qtbot):
    service = make_service(db, clock)
    ticks = []
    service.tick.connect(ticks.append)
    service.start()

    clock.advance(30 * 24 * 3600)
    service.handle_tick(1000)
    assert ticks[-1] == 30 * 24 * 3600 * 1000
    assert ticks[-1] > 2**31
    service.reset()
