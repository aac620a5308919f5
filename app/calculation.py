# app/calculation.py
from datetime import datetime
from typing import Dict, Mapping, Optional


def format_duration(seconds: int) -> str:
    """
    Human readable duration, e.g. 45s, 2m 5s, 1h 0m 5s.
    """
    seconds = max(0, int(seconds))
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m {seconds % 60}s"
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours}h {minutes}m {seconds % 60}s"


def total_seconds(timings: Mapping[str, int]) -> int:
    return sum(int(v) for v in timings.values())


def _span(start: Optional[datetime], end: Optional[datetime]) -> int:
    if start is None or end is None:
        return 0
    return max(0, int((end - start).total_seconds()))


def workflow_durations(
    created: Optional[datetime],
    submitted: Optional[datetime] = None,
    archived: Optional[datetime] = None,
) -> Dict[str, int]:
    """
    Whole seconds between the workflow timestamps of a check.
    Any span with a missing endpoint is 0.
    """
    return {
        "created_to_submitted": _span(created, submitted),
        "submitted_to_archived": _span(submitted, archived),
        "created_to_archived": _span(created, archived),
    }
