import json
import sqlite3
import time

import pytest
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QApplication, QMessageBox

from app.errors import DatabaseError
from app.tabs import QUICK_CHECK_TABS
from core.threads import Workers
from services.draft_service import DraftService
from ui.main_window import MainWindow
from ui.timing_summary import TimingSummaryDialog
from utils import db_helper

SETTINGS = {"tick_ms": 1000, "show_debug_panel": False}


def wait_for_form(win, timeout=5.0):
    Workers.pool.waitForDone(int(timeout * 1000))
    deadline = time.monotonic() + timeout
    while win.form is None and time.monotonic() < deadline:
        QApplication.processEvents()
        time.sleep(0.01)
    return win.form


def run_ahead(form, seconds):
    """Make the form's engine read a clock that is `seconds` ahead."""
    base = time.time()
    form.engine._clock = lambda: base + seconds


def saved_timings():
    return DraftService(QUICK_CHECK_TABS).resume_latest().tab_timings


@pytest.fixture
def dialogs(monkeypatch):
    seen = {"warnings": [], "summaries": 0}

    def warning(parent, title, text, *args):
        seen["warnings"].append((title, text))
        return QMessageBox.Ok

    def exec_(self):
        seen["summaries"] += 1
        return 0

    monkeypatch.setattr(QMessageBox, "warning", warning)
    monkeypatch.setattr(TimingSummaryDialog, "exec", exec_)
    return seen


def test_loads_draft_and_starts_timing(db, dialogs):
    win = MainWindow(SETTINGS)
    form = wait_for_form(win)
    assert form is not None
    assert win.draft is not None
    assert form.engine.get_active_tab() == "info"
    assert win.btnSubmit.isEnabled()

    win._on_next()
    assert form.engine.get_active_tab() == "pulling"
    assert db_helper.latest_draft_id() == win.draft.id
    form.shutdown()


def test_submit_stores_snapshot_and_installs_new_draft(db, dialogs):
    win = MainWindow(SETTINGS)
    old_form = wait_for_form(win)
    old_id = win.draft.id
    sent = []
    old_form.submitted.connect(sent.append)

    run_ahead(old_form, 40)
    win.btnSubmit.click()

    assert sent[0]["info_duration"] >= 40
    conn = sqlite3.connect(str(db))
    rows = conn.execute(
        "SELECT tab_timings_json, total_seconds FROM submissions WHERE draft_id=?", (old_id,)
    ).fetchall()
    conn.close()
    assert len(rows) == 1
    assert json.loads(rows[0][0]) == sent[0]
    assert rows[0][1] == sum(sent[0].values())

    assert db_helper.load_draft(old_id) is None
    assert dialogs["summaries"] == 1
    assert dialogs["warnings"] == []
    assert win.draft.id != old_id
    assert win.form is not old_form
    assert win.form.engine.get_active_tab() == "info"
    assert win.form.engine.get_total_duration() == 0
    win.form.shutdown()


def test_save_button_writes_draft(db, dialogs):
    win = MainWindow(SETTINGS)
    form = wait_for_form(win)
    run_ahead(form, 25)
    win.btnSave.click()
    assert saved_timings()["info_duration"] >= 25
    form.shutdown()


def test_close_saves_draft_and_stops_timing(db, dialogs):
    win = MainWindow(SETTINGS)
    form = wait_for_form(win)
    run_ahead(form, 55)
    win.closeEvent(QCloseEvent())
    assert saved_timings()["info_duration"] >= 55
    assert form.engine.get_active_tab() is None
    assert not form.engine.is_refreshing


def test_save_failure_warns_and_keeps_working(db, dialogs, monkeypatch):
    win = MainWindow(SETTINGS)
    form = wait_for_form(win)

    def broken(*args):
        raise DatabaseError("disk full")

    monkeypatch.setattr(db_helper, "update_draft_timings", broken)
    run_ahead(form, 10)
    win.btnSave.click()
    assert ("Save draft", "disk full") in dialogs["warnings"]

    win._on_next()
    assert form.engine.get_active_tab() == "pulling"
    form.shutdown()


def test_submit_failure_warns_and_keeps_draft(db, dialogs, monkeypatch):
    win = MainWindow(SETTINGS)
    form = wait_for_form(win)
    draft_id = win.draft.id

    def broken(*args):
        raise DatabaseError("database is locked")

    monkeypatch.setattr(db_helper, "submit_draft", broken)
    run_ahead(form, 5)
    win.btnSubmit.click()

    assert ("Submit", "database is locked") in dialogs["warnings"]
    assert dialogs["summaries"] == 0
    assert win.draft.id == draft_id
    assert win.form is form
    assert db_helper.load_draft(draft_id) is not None

    win._on_next()
    assert form.engine.get_active_tab() == "pulling"
    form.shutdown()


def test_load_failure_falls_back_to_empty_form(db, dialogs, monkeypatch):
    def broken(self):
        raise DatabaseError("no such table: drafts")

    monkeypatch.setattr(DraftService, "resume_latest", broken)
    win = MainWindow(SETTINGS)
    form = wait_for_form(win)

    assert form is not None
    assert win.draft is None
    assert ("Quick Check", "no such table: drafts") in dialogs["warnings"]
    assert form.engine.get_active_tab() == "info"
    assert form.engine.get_total_duration() == 0
    assert win.btnSubmit.isEnabled()

    win.btnSave.click()
    win.btnSubmit.click()
    assert dialogs["summaries"] == 0
    form.shutdown()
