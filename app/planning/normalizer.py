## Rescale milestone hour estimates to the computed budget
from dataclasses import dataclass
from typing import Sequence

from app.agents.schemas import MilestoneDraft, MilestoneQueries
from app.planning.estimator import round_half_up

MIN_MILESTONE_HOURS = 1
MAX_MILESTONE_HOURS = 40


@dataclass(frozen=True)
class MilestoneRecord:
    order_index: int
    title: str
    description: str
    est_hours: int
    queries: MilestoneQueries


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def normalize(drafts: Sequence[MilestoneDraft], hour_budget: int) -> list[MilestoneRecord]:
    """
    Scale every draft so the hours sum to roughly hour_budget.

    Each result is clamped to [1, 40]; when values hit the bounds the sum drifts
    from the budget and that drift is kept as is.
    """
    total = sum(d.est_hours for d in drafts) or 1
    scale = hour_budget / total

    return [
        MilestoneRecord(
            order_index=i,
            title=d.title,
            description=d.description or "",
            est_hours=clamp(round_half_up(d.est_hours * scale), MIN_MILESTONE_HOURS, MAX_MILESTONE_HOURS),
            queries=d.queries,
        )
        for i, d in enumerate(drafts)
    ]
