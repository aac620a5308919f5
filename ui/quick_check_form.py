from __future__ import annotations
import logging
import time
from typing import Callable, Dict, Iterable, Mapping, Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QLabel, QVBoxLayout, QHBoxLayout, QTabWidget,
    QPlainTextEdit, QPushButton,
)

from app.calculation import format_duration
from app.tabs import QUICK_CHECK_TABS, display_name
from core.chrono import TabTimingEngine
from ui.widgets.timing_debug_panel import TimingDebugPanel

log = logging.getLogger(__name__)


class QuickCheckForm(QWidget):
    """
    The tabbed Quick Check form. The tab widget's current index is the
    source of truth for which tab is being timed.
    """

    timingsUpdated = Signal(dict)
    submitted = Signal(dict)

    def __init__(
        self,
        initial_timings: Optional[Mapping[str, int]] = None,
        tab_ids: Iterable[str] = QUICK_CHECK_TABS,
        tick_ms: int = 1000,
        show_debug_panel: bool = False,
        clock: Callable[[], float] = time.time,
        parent=None,
    ):
        super().__init__(parent)
        self.engine = TabTimingEngine(tab_ids, initial_timings, tick_ms=tick_ms, clock=clock, parent=self)
        self.tab_timings: Dict[str, int] = self.engine.get_current_timing_data()

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 12, 0, 12)
        root.setSpacing(14)

        self.lblElapsed = QLabel("", self)
        self.lblElapsed.setObjectName("lblElapsed")
        self.lblElapsed.setAlignment(Qt.AlignRight)
        root.addWidget(self.lblElapsed)

        self.tabs = QTabWidget(self)
        self.notes: Dict[str, QPlainTextEdit] = {}
        for tab in self.engine.tab_ids:
            page = QWidget(self.tabs)
            v = QVBoxLayout(page)
            v.addWidget(QLabel(f"{display_name(tab)} notes:", page))
            box = QPlainTextEdit(page)
            v.addWidget(box, 1)
            self.notes[tab] = box
            self.tabs.addTab(page, display_name(tab))
        root.addWidget(self.tabs, 1)

        nav = QHBoxLayout()
        self.btnPrev = QPushButton("Previous", self)
        self.btnNext = QPushButton("Next", self)
        self.btnPrev.clicked.connect(self.go_previous)
        self.btnNext.clicked.connect(self.go_next)
        nav.addWidget(self.btnPrev)
        nav.addStretch(1)
        nav.addWidget(self.btnNext)
        root.addLayout(nav)

        self.debugPanel = TimingDebugPanel(self)
        self.debugPanel.setVisible(show_debug_panel)
        root.addWidget(self.debugPanel)

        # tab bar clicks reconcile the engine; engine-driven moves update the tab bar
        self.tabs.currentChanged.connect(self._on_current_changed)
        self.engine.tabChanged.connect(self._on_engine_tab_changed)
        self.engine.timingsChanged.connect(self._on_timings_changed)
        self.engine.ticked.connect(self.refresh_display)

        self._update_nav()
        self.refresh_display()

    # ---------------- Timing ----------------
    def start(self):
        self.engine.sync_to_index(self.tabs.currentIndex())
        self.refresh_display()

    def shutdown(self):
        self.engine.teardown()
        self.refresh_display()

    def submit(self) -> Dict[str, int]:
        # snapshot first so the running tab's open interval is included
        timings = self.engine.get_current_timing_data()
        self.engine.stop_all_timers()
        self.tab_timings = dict(timings)
        log.info("Quick Check submitted with timings %s", timings)
        self.submitted.emit(timings)
        self.refresh_display()
        return timings

    def current_tab(self) -> str:
        return self.engine.tab_ids[self.tabs.currentIndex()]

    # ---------------- Navigation ----------------
    def go_previous(self):
        idx = self.tabs.currentIndex()
        if idx > 0:
            self.engine.select_index(idx - 1)

    def go_next(self):
        idx = self.tabs.currentIndex()
        if idx < self.tabs.count() - 1:
            self.engine.select_index(idx + 1)

    def _update_nav(self):
        idx = self.tabs.currentIndex()
        self.btnPrev.setEnabled(idx > 0)
        self.btnNext.setEnabled(idx < self.tabs.count() - 1)

    @Slot(int)
    def _on_current_changed(self, index: int):
        self.engine.sync_to_index(index)
        self._update_nav()
        self.refresh_display()

    @Slot(int)
    def _on_engine_tab_changed(self, index: int):
        if self.tabs.currentIndex() != index:
            self.tabs.setCurrentIndex(index)

    @Slot(dict)
    def _on_timings_changed(self, timings: dict):
        self.tab_timings = dict(timings)
        self.timingsUpdated.emit(dict(timings))

    # ---------------- Display ----------------
    def refresh_display(self):
        tab = self.current_tab()
        self.lblElapsed.setText(
            f"{display_name(tab)}: {format_duration(self.engine.get_tab_duration(tab))}"
            f"   |   Total: {format_duration(self.engine.get_total_duration())}"
        )
        if not self.debugPanel.isHidden():
            self.debugPanel.refresh(self.engine, self.window().isVisible())
