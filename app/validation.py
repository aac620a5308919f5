# app/validation.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, Mapping, Optional

log = logging.getLogger(__name__)

DURATION_SUFFIX = "_duration"


def duration_key(tab_id: str) -> str:
    return f"{tab_id}{DURATION_SUFFIX}"


def tab_from_key(key: str) -> Optional[str]:
    if not key.endswith(DURATION_SUFFIX) or key == DURATION_SUFFIX:
        return None
    return key[: -len(DURATION_SUFFIX)]


def _seconds(value) -> int:
    if isinstance(value, bool):
        raise TypeError("bool is not a duration")
    return max(0, int(value))


def normalize_timings(timings: Optional[Mapping], tab_ids: Iterable[str]) -> Dict[str, int]:
    """
    One non-negative int per tab, keyed "<tab>_duration".
    Missing keys become 0; junk values (strings, None, bools, infinities) are logged and zeroed.
    Keys for tabs outside tab_ids are dropped.
    """
    timings = timings or {}
    out: Dict[str, int] = {}
    for tab in tab_ids:
        key = duration_key(tab)
        raw = timings.get(key, 0)
        try:
            out[key] = _seconds(raw if raw is not None else 0)
        except (TypeError, ValueError, OverflowError):
            log.warning("Ignoring invalid duration %r for %s", raw, key)
            out[key] = 0
    return out


def sanitize_label(text: str) -> str:
    return " ".join((text or "").split())[:64]
