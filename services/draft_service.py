# services/draft_service.py
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from app.calculation import total_seconds
from app.validation import normalize_timings, sanitize_label, tab_from_key
from utils import db_helper

log = logging.getLogger(__name__)


@dataclass
class Draft:
    id: int
    label: str = ""
    tab_timings: Dict[str, int] = field(default_factory=dict)
    created_at: Optional[str] = None


class DraftService:
    """Keeps the per-tab timings of a Quick Check draft in the sqlite store."""

    def __init__(self, tab_ids: Iterable[str]):
        self.tab_ids = tuple(tab_ids)

    def _decode(self, raw: str) -> Dict[str, int]:
        try:
            data = json.loads(raw or "{}")
        except ValueError:
            log.warning("Discarding unreadable draft timings: %r", raw)
            data = {}
        if not isinstance(data, dict):
            data = {}
        stray = [k for k in data if tab_from_key(k) not in self.tab_ids]
        if stray:
            log.warning("Dropping draft timings for unknown tabs: %s", ", ".join(sorted(stray)))
        return normalize_timings(data, self.tab_ids)

    def start_draft(self, label: str = "") -> Draft:
        label = sanitize_label(label)
        draft_id = db_helper.create_draft(label)
        timings = normalize_timings({}, self.tab_ids)
        db_helper.update_draft_timings(draft_id, json.dumps(timings))
        row = db_helper.load_draft(draft_id)
        log.info("Started draft %s", draft_id)
        return Draft(draft_id, label, timings, row[3] if row else None)

    def resume_latest(self) -> Optional[Draft]:
        draft_id = db_helper.latest_draft_id()
        if draft_id is None:
            return None
        row = db_helper.load_draft(draft_id)
        if row is None:
            return None
        _, label, raw, created_at = row
        log.info("Resuming draft %s", draft_id)
        return Draft(draft_id, label, self._decode(raw), created_at)

    def save_timings(self, draft: Draft, timings: Mapping[str, int]) -> bool:
        timings = normalize_timings(timings, self.tab_ids)
        if timings == draft.tab_timings:
            return False
        db_helper.update_draft_timings(draft.id, json.dumps(timings))
        draft.tab_timings = timings
        return True

    def submit(self, draft: Draft, timings: Mapping[str, int]) -> int:
        timings = normalize_timings(timings, self.tab_ids)
        total = total_seconds(timings)
        submission_id = db_helper.submit_draft(
            draft.id, draft.label, json.dumps(timings), total, draft.created_at
        )
        draft.tab_timings = timings
        log.info("Submitted draft %s as %s (%ss)", draft.id, submission_id, total)
        return submission_id
