## Derived progress figures for the dashboard
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Sequence

from pydantic import BaseModel

from app.db.models.feedback import Feedback
from app.db.models.milestone import MILESTONE_STATUSES, Milestone
from app.planning.estimator import round_half_up


class WeeklyActivity(BaseModel):
    week_start: date
    actions: Dict[str, int]


class ProgressSummary(BaseModel):
    total: int
    by_status: Dict[str, int]
    completion_percent: int
    hours_planned: int
    hours_done: int
    hours_remaining: int
    weekly: List[WeeklyActivity]


def week_start(ts: datetime) -> date:
    """Monday of the ISO week containing ts (naive timestamps are taken as UTC)."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    d = ts.astimezone(timezone.utc).date()
    return d - timedelta(days=d.weekday())


def weekly_activity(feedback: Sequence[Feedback]) -> List[WeeklyActivity]:
    buckets: Dict[date, Counter] = defaultdict(Counter)
    for fb in feedback:
        buckets[week_start(fb.created_at)][fb.action] += 1
    return [WeeklyActivity(week_start=k, actions=dict(buckets[k])) for k in sorted(buckets)]


def summarize_progress(milestones: Sequence[Milestone], feedback: Sequence[Feedback]) -> ProgressSummary:
    by_status = {s: 0 for s in MILESTONE_STATUSES}
    for m in milestones:
        by_status[m.status] = by_status.get(m.status, 0) + 1

    total = len(milestones)
    done = by_status["done"]
    hours_planned = sum(m.est_hours for m in milestones)
    hours_done = sum(m.est_hours for m in milestones if m.status == "done")
    # skipped milestones no longer count as outstanding work
    hours_remaining = sum(m.est_hours for m in milestones if m.status not in ("done", "skipped"))

    return ProgressSummary(
        total=total,
        by_status=by_status,
        completion_percent=round_half_up(done / total * 100) if total else 0,
        hours_planned=hours_planned,
        hours_done=hours_done,
        hours_remaining=hours_remaining,
        weekly=weekly_activity(feedback),
    )
