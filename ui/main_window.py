# ui/main_window.py
import logging
from datetime import datetime, timezone

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QMessageBox, QPushButton, QLabel
)
from PySide6.QtCore import Qt

from app.calculation import workflow_durations
from app.errors import DatabaseError
from app.tabs import QUICK_CHECK_TABS
from core.threads import DraftLoadWorker, Workers
from services.draft_service import DraftService
from ui.quick_check_form import QuickCheckForm
from ui.timing_summary import TimingSummaryDialog

log = logging.getLogger(__name__)


def _parse_timestamp(value):
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return None


class MainWindow(QMainWindow):
    def __init__(self, settings: dict):
        super().__init__()
        self.setWindowTitle("Quick Check")
        self.resize(1000, 680)
        self.settings = settings
        self.service = DraftService(QUICK_CHECK_TABS)
        self.draft = None
        self.form = None

        root = QWidget(self)
        self._root_v = QVBoxLayout(root)
        self._root_v.setContentsMargins(16, 16, 16, 16)
        self._root_v.setSpacing(16)
        self._build_top_bar(self._root_v)

        self.lblStatus = QLabel("Loading draft…", root)
        self.lblStatus.setAlignment(Qt.AlignCenter)
        self._root_v.addWidget(self.lblStatus, 1)
        self.setCentralWidget(root)
        self._set_actions_enabled(False)

        self._loader = DraftLoadWorker(self.service)
        self._loader.setAutoDelete(False)
        self._loader.signals.loaded.connect(self._on_draft_loaded)
        self._loader.signals.failed.connect(self._on_draft_failed)
        Workers.pool.start(self._loader)

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 10, 14, 10)
        h.setSpacing(10)

        self.btnPrev = QPushButton("Previous", bar)
        self.btnNext = QPushButton("Next", bar)
        self.btnTiming = QPushButton("Timing…", bar)
        self.btnSave = QPushButton("Save draft", bar)
        self.btnSubmit = QPushButton("Submit", bar)
        for button, handler in [
            (self.btnPrev, self._on_previous),
            (self.btnNext, self._on_next),
            (self.btnTiming, self._open_timing_summary),
            (self.btnSave, self._save_draft),
            (self.btnSubmit, self._on_submit),
        ]:
            button.clicked.connect(handler)
            button.setObjectName("TopBtn")
            h.addWidget(button)
            if button is self.btnNext:
                h.addStretch(1)

        parent_layout.addWidget(bar)
        bar.setStyleSheet("""
        QWidget#TopBar {
            border: 1px solid rgba(0,0,0,0.10);
            border-radius: 12px;
        }
        QPushButton#TopBtn {
            border: 1px solid rgba(0,0,0,0.15);
            border-radius: 8px;
            padding: 6px 12px;
        }
        """)

    def _set_actions_enabled(self, enabled: bool):
        for button in (self.btnPrev, self.btnNext, self.btnTiming, self.btnSave, self.btnSubmit):
            button.setEnabled(enabled)

    # ---------------- Draft Loading ----------------
    def _on_draft_loaded(self, draft):
        self.draft = draft
        self._install_form(draft.tab_timings)
        self.setWindowTitle(f"Quick Check — Draft #{draft.id}")

    def _on_draft_failed(self, msg):
        log.error("Could not load draft: %s", msg)
        self.lblStatus.setText("Draft storage unavailable; timings will not be saved.")
        QMessageBox.warning(self, "Quick Check", msg)
        self._install_form({})

    def _install_form(self, timings):
        if self.form is not None:
            self.form.shutdown()
            self._root_v.removeWidget(self.form)
            self.form.deleteLater()
        self.lblStatus.setVisible(False)
        self.form = QuickCheckForm(
            timings,
            tick_ms=self.settings.get("tick_ms", 1000),
            show_debug_panel=self.settings.get("show_debug_panel", False),
            parent=self,
        )
        self.form.tabs.currentChanged.connect(lambda _: self._save_draft())
        self._root_v.addWidget(self.form, 1)
        self._set_actions_enabled(True)
        self.form.start()

    # ---------------- Controls ----------------
    def _on_previous(self):
        self.form.go_previous()

    def _on_next(self):
        self.form.go_next()

    def _save_draft(self):
        if self.draft is None or self.form is None:
            return
        try:
            self.service.save_timings(self.draft, self.form.engine.get_current_timing_data())
        except DatabaseError as e:
            log.exception("Saving draft %s failed", self.draft.id)
            QMessageBox.warning(self, "Save draft", str(e))

    def _on_submit(self):
        timings = self.form.submit()
        if self.draft is None:
            return
        try:
            self.service.submit(self.draft, timings)
        except DatabaseError as e:
            log.exception("Submitting draft %s failed", self.draft.id)
            QMessageBox.warning(self, "Submit", str(e))
            return
        self.setWindowTitle("Quick Check — Submitted")
        # sqlite CURRENT_TIMESTAMP is naive UTC
        submitted = datetime.now(timezone.utc).replace(tzinfo=None)
        workflow = workflow_durations(_parse_timestamp(self.draft.created_at), submitted)
        TimingSummaryDialog(self.form.engine.summary(), workflow, self).exec()
        try:
            self.draft = self.service.start_draft()
        except DatabaseError as e:
            log.exception("Starting a new draft failed")
            self.draft = None
            QMessageBox.warning(self, "Quick Check", str(e))
            self._install_form({})
            return
        self._install_form(self.draft.tab_timings)
        self.setWindowTitle(f"Quick Check — Draft #{self.draft.id}")

    def _open_timing_summary(self):
        TimingSummaryDialog(self.form.engine.summary(), parent=self).exec()

    def closeEvent(self, e):
        if self.form is not None:
            self._save_draft()
            self.form.shutdown()
        super().closeEvent(e)
