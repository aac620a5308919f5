# ui/timing_summary.py
from __future__ import annotations
from typing import Dict, Optional

from PySide6.QtWidgets import QDialog, QVBoxLayout, QGridLayout, QLabel, QPushButton
import pyqtgraph as pg

from app.calculation import format_duration
from app.state import TimingSummary
from utils.graph_helper import setup_duration_plot, update_bars


_WORKFLOW_LABELS = {
    "created_to_submitted": "Created → Submitted",
    "submitted_to_archived": "Submitted → Archived",
    "created_to_archived": "Created → Archived",
}


class TimingSummaryDialog(QDialog):
    """
    Per-tab durations for the current check, with a bar chart.
    The running tab is marked ACTIVE and includes its open interval.
    """

    def __init__(self, summary: TimingSummary, workflow: Optional[Dict[str, int]] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Quick Check Timing Summary")
        self.resize(720, 460)

        root = QVBoxLayout(self)
        root.addWidget(QLabel("<b>Tab Timings</b>"))

        grid = QGridLayout()
        self.tab_labels = {}
        for row, t in enumerate(summary.tabs):
            name = QLabel(t.display_name + ("  [ACTIVE]" if t.is_active else ""))
            if t.is_active:
                name.setStyleSheet("color: #16a34a; font-weight: 600;")
            dur = QLabel(f"Duration: {format_duration(t.duration)}")
            grid.addWidget(name, row, 0)
            grid.addWidget(dur, row, 1)
            if t.started_at is not None:
                grid.addWidget(QLabel(f"Start: {t.started_at:%Y-%m-%d %H:%M:%S}"), row, 2)
            self.tab_labels[t.tab_id] = dur
        root.addLayout(grid)

        self.lblTotal = QLabel(f"Total: {format_duration(summary.total)}")
        root.addWidget(self.lblTotal)

        if workflow:
            root.addWidget(QLabel("<b>Workflow</b>"))
            for key, secs in workflow.items():
                # archive spans only matter once the check is archived
                if key != "created_to_submitted" and not secs:
                    continue
                root.addWidget(QLabel(f"{_WORKFLOW_LABELS.get(key, key)}: {format_duration(secs)}"))

        plot = pg.PlotWidget()
        bars = setup_duration_plot(plot, [t.display_name for t in summary.tabs])
        update_bars(bars, [t.duration for t in summary.tabs])
        root.addWidget(plot, stretch=1)

        btn = QPushButton("Close", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)
