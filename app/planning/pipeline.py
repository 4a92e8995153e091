## Plan generation: budget -> LLM plan -> normalise -> persist -> resources
import logging
import uuid
from typing import Any, Dict, List, Mapping

import httpx
from starlette.concurrency import run_in_threadpool

from app.agents.llm.base import LLMClient
from app.agents.planner import request_plan
from app.db.gateway import SqlGateway
from app.generation.schemas import PlanRequest
from app.planning.errors import PersistenceError
from app.planning.estimator import compute_budget
from app.planning.normalizer import MilestoneRecord, normalize
from app.resources.base import ResourceAdapter, SourceType
from app.resources.fetcher import fetch_resources
from app.settings import settings

logger = logging.getLogger(__name__)


def _milestone_rows(roadmap_id: uuid.UUID, records: List[MilestoneRecord]) -> List[Dict[str, Any]]:
    return [
        {
            "roadmap_id": roadmap_id,
            "title": r.title,
            "description": r.description,
            "order_index": r.order_index,
            "est_hours": r.est_hours,
        }
        for r in records
    ]


async def _collect_resources(
    records: List[MilestoneRecord],
    id_by_index: Dict[int, uuid.UUID],
    http: httpx.AsyncClient,
    adapters: Mapping[SourceType, ResourceAdapter] | None,
) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    # one milestone at a time; lookups inside a milestone run concurrently
    for rec in records:
        milestone_id = id_by_index.get(rec.order_index)
        if milestone_id is None:
            raise PersistenceError(f"No milestone id returned for order_index={rec.order_index}")

        found = await fetch_resources(rec.queries, http=http, adapters=adapters)
        logger.info("Milestone %d %r: %d resources", rec.order_index, rec.title, len(found))
        rows.extend(
            {
                "milestone_id": milestone_id,
                "source": res.source.value,
                "title": res.title,
                "url": res.url,
                "meta": res.meta,
                "rank_score": res.rank_score,
            }
            for res in found
        )
    return rows


async def generate_plan(
    req: PlanRequest,
    gateway: SqlGateway,
    llm: LLMClient | None = None,
    http: httpx.AsyncClient | None = None,
    adapters: Mapping[SourceType, ResourceAdapter] | None = None,
) -> uuid.UUID:
    """
    Run the whole generation for one request and return the new roadmap id.

    Planner and schema failures raise before anything is written. Later
    failures leave the rows written so far in place.
    """
    budget = compute_budget(req.time_value, req.time_unit, req.difficulty)
    logger.info(
        "Generating plan topic=%r %d %s %s -> budget=%dh",
        req.topic, req.time_value, req.time_unit, req.difficulty, budget,
    )

    # LLM clients are blocking
    plan = await run_in_threadpool(request_plan, req.topic, req.exam, budget, req.difficulty, llm)
    records = normalize(plan.milestones, budget)

    roadmap_id = gateway.insert_roadmap(
        {
            "topic": req.topic,
            "exam": req.exam,
            "time_value": req.time_value,
            "time_unit": req.time_unit,
            "difficulty": req.difficulty,
            "hour_budget": budget,
            "deadline_date": None,
        }
    )

    inserted = gateway.insert_milestones(_milestone_rows(roadmap_id, records))
    id_by_index = {row["order_index"]: row["id"] for row in inserted}

    if http is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            resource_rows = await _collect_resources(records, id_by_index, client, adapters)
    else:
        resource_rows = await _collect_resources(records, id_by_index, http, adapters)

    gateway.insert_resources(resource_rows)

    logger.info(
        "Roadmap %s created: %d milestones, %d resources, %dh planned",
        roadmap_id, len(records), len(resource_rows), sum(r.est_hours for r in records),
    )
    return roadmap_id
