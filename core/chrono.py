# core/chrono.py
from __future__ import annotations
import logging
import time
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal

from app.state import TabTiming, TabTimerState, TimingSummary
from app.tabs import display_name
from app.validation import duration_key, normalize_timings

log = logging.getLogger(__name__)


class TabTimingEngine(QObject):
    """
    One stopwatch per tab, at most one running at a time.

    Time is folded into a tab's total only when its interval is closed
    (change_tab / stop_all_timers). Reads add the open interval on the fly,
    and the tick only re-publishes the live snapshot.
    """

    timingsChanged = Signal(dict)  # {"<tab>_duration": seconds}, only when it differs
    tabChanged = Signal(int)       # engine-driven navigation (select_index)
    ticked = Signal()

    def __init__(
        self,
        tab_ids: Iterable[str],
        initial_timings: Optional[Mapping] = None,
        tick_ms: int = 1000,
        clock: Callable[[], float] = time.time,
        parent=None,
    ):
        super().__init__(parent)
        self._tab_ids: Tuple[str, ...] = tuple(tab_ids)
        if len(set(self._tab_ids)) != len(self._tab_ids):
            raise ValueError(f"Duplicate tab ids: {', '.join(self._tab_ids)}")
        self._clock = clock

        seeded = normalize_timings(initial_timings, self._tab_ids)
        self._states: Dict[str, TabTimerState] = {
            tab: TabTimerState(accumulated_seconds=seeded[duration_key(tab)])
            for tab in self._tab_ids
        }
        self._started = False
        self._last_published: Optional[Dict[str, int]] = None

        self._tick = QTimer(self)
        self._tick.setInterval(tick_ms)
        self._tick.timeout.connect(self._on_tick)

    # ---------------- Properties ----------------
    @property
    def tab_ids(self) -> Tuple[str, ...]:
        return self._tab_ids

    @property
    def is_refreshing(self) -> bool:
        return self._tick.isActive()

    @property
    def is_started(self) -> bool:
        return self._started

    def state(self, tab_id: str) -> TabTimerState:
        return replace(self._states[tab_id])

    # ---------------- Transitions ----------------
    def change_tab(self, tab_id: str) -> bool:
        if tab_id not in self._states:
            log.warning("Ignoring switch to unknown tab %r", tab_id)
            return False

        now = self._clock()
        for name, st in self._states.items():
            if st.is_active:
                added = st.close(now)
                log.debug("Closed %s interval: +%ss (total %ss)", name, added, st.accumulated_seconds)
        self._states[tab_id].open(now)
        self._started = True
        log.debug("Timing tab %s", tab_id)

        if not self._tick.isActive():
            self._tick.start()
        self._publish()
        return True

    def select_index(self, index: int) -> bool:
        if not 0 <= index < len(self._tab_ids):
            log.warning("Ignoring tab index %s (have %s tabs)", index, len(self._tab_ids))
            return False
        if not self.change_tab(self._tab_ids[index]):
            return False
        self.tabChanged.emit(index)
        return True

    def sync_to_index(self, index: int) -> bool:
        """Start timing the tab at index unless it is already the running one."""
        if not 0 <= index < len(self._tab_ids):
            return False
        target = self._tab_ids[index]
        if self.get_active_tab() == target:
            return False
        return self.change_tab(target)

    def stop_all_timers(self):
        now = self._clock()
        for name, st in self._states.items():
            if st.is_active:
                added = st.close(now)
                log.debug("Stopped %s: +%ss (total %ss)", name, added, st.accumulated_seconds)
        self._tick.stop()
        self._publish()

    def teardown(self):
        self.stop_all_timers()

    # ---------------- Queries ----------------
    def get_tab_duration(self, tab_id: str) -> int:
        st = self._states.get(tab_id)
        if st is None:
            return 0
        return st.duration(self._clock())

    def get_current_timing_data(self) -> Dict[str, int]:
        now = self._clock()
        return {duration_key(tab): self._states[tab].duration(now) for tab in self._tab_ids}

    def get_active_tab(self) -> Optional[str]:
        for name, st in self._states.items():
            if st.is_active:
                return name
        return None

    def is_tab_active(self, tab_id: str) -> bool:
        st = self._states.get(tab_id)
        return bool(st and st.is_active)

    def get_total_duration(self) -> int:
        now = self._clock()
        return sum(st.duration(now) for st in self._states.values())

    def summary(self) -> TimingSummary:
        now = self._clock()
        tabs = []
        for tab in self._tab_ids:
            st = self._states[tab]
            tabs.append(TabTiming(
                tab_id=tab,
                display_name=display_name(tab),
                duration=st.duration(now),
                is_active=st.is_active,
                started_at=datetime.fromtimestamp(st.started_at) if st.is_active else None,
                saved_duration=st.accumulated_seconds,
            ))
        return TimingSummary(tabs)

    # ---------------- Refresh ----------------
    def _on_tick(self):
        self.ticked.emit()
        self._publish()

    def _publish(self):
        snapshot = self.get_current_timing_data()
        if snapshot == self._last_published:
            return
        self._last_published = dict(snapshot)
        self.timingsChanged.emit(snapshot)
