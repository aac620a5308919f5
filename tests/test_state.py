from app.state import TabTimerState, TabTiming, TimingSummary


def test_idle_state():
    st = TabTimerState(accumulated_seconds=4)
    assert not st.is_active
    assert st.elapsed(500.0) == 0
    assert st.duration(500.0) == 4


def test_open_and_close():
    st = TabTimerState()
    st.open(100.0)
    assert st.is_active
    assert st.duration(107.5) == 7
    assert st.close(107.5) == 7
    assert st.accumulated_seconds == 7
    assert st.started_at is None


def test_close_with_earlier_clock_adds_nothing():
    st = TabTimerState(accumulated_seconds=2)
    st.open(100.0)
    assert st.close(90.0) == 0
    assert st.accumulated_seconds == 2


def test_summary_totals():
    summary = TimingSummary([
        TabTiming("info", "Info", 5, False),
        TabTiming("tires", "Tires & Brakes", 3, True),
    ])
    assert summary.total == 8
    assert summary.active_tabs == ["tires"]
    assert summary.as_timings() == {"info_duration": 5, "tires_duration": 3}
