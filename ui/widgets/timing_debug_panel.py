# ui/widgets/timing_debug_panel.py
from PySide6.QtWidgets import QFrame, QVBoxLayout, QLabel


class TimingDebugPanel(QFrame):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("TimingDebug")
        self.setStyleSheet(
            "QFrame#TimingDebug { background: rgba(0,0,0,0.04); border-radius: 8px; }"
            "QLabel { font-size: 11px; }"
        )
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(10, 8, 10, 8)
        self._layout.setSpacing(2)
        self._layout.addWidget(QLabel("<b>Debug - Tab Timer</b>", self))
        self.lblVisible = QLabel(self)
        self.lblStarted = QLabel(self)
        self.lblRefresh = QLabel(self)
        self.lblTabs = QLabel(self)
        self.lblActive = QLabel(self)
        self.lblTotal = QLabel(self)
        for lab in (self.lblVisible, self.lblStarted, self.lblRefresh,
                    self.lblTabs, self.lblActive, self.lblTotal):
            self._layout.addWidget(lab)

    @staticmethod
    def _flag(label: QLabel, title: str, on: bool):
        label.setText(f"{title}: {'YES' if on else 'NO'}")
        label.setStyleSheet(f"color: {'#16a34a' if on else '#dc2626'};")

    def refresh(self, engine, window_visible: bool = True):
        self._flag(self.lblVisible, "Window Visible", window_visible)
        self._flag(self.lblStarted, "Timer Initialized", engine.is_started)
        self._flag(self.lblRefresh, "Timing Interval Running", engine.is_refreshing)

        summary = engine.summary()
        lines = []
        for t in summary.tabs:
            line = f"{t.display_name}: {t.duration}s total"
            if t.is_active:
                line += " (ACTIVE)"
            if t.started_at is not None:
                line += f" - Started: {t.started_at:%H:%M:%S}"
            lines.append(line)
        self.lblTabs.setText("\n".join(lines))
        self.lblActive.setText(f"Active Tabs: {', '.join(summary.active_tabs) or 'none'}")
        self.lblTotal.setText(f"<b>Total Duration: {summary.total}s</b>")
