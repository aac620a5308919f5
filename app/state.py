from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from app.validation import duration_key


@dataclass
class TabTimerState:
    accumulated_seconds: int = 0
    started_at: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.started_at is not None

    def open(self, now: float):
        self.started_at = now

    def elapsed(self, now: float) -> int:
        if self.started_at is None:
            return 0
        # clock moving backwards counts as no time
        return int(max(0.0, now - self.started_at))

    def close(self, now: float) -> int:
        added = self.elapsed(now)
        self.accumulated_seconds += added
        self.started_at = None
        return added

    def duration(self, now: float) -> int:
        return self.accumulated_seconds + self.elapsed(now)


@dataclass
class TabTiming:
    tab_id: str
    display_name: str
    duration: int
    is_active: bool
    started_at: Optional[datetime] = None
    saved_duration: int = 0


@dataclass
class TimingSummary:
    tabs: List[TabTiming] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(t.duration for t in self.tabs)

    @property
    def active_tabs(self) -> List[str]:
        return [t.tab_id for t in self.tabs if t.is_active]

    def as_timings(self) -> Dict[str, int]:
        return {duration_key(t.tab_id): t.duration for t in self.tabs}
