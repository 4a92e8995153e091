# Roadmap reads, milestone status updates and the progress dashboard
import uuid
from collections import defaultdict
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.deps import get_db
from app.db.gateway import SqlGateway
from app.db.models.milestone import Milestone
from app.db.models.resource import Resource
from app.generation.schemas import StatusUpdate
from app.planning.progress import summarize_progress

router = APIRouter(prefix="/api")

# Display order of resource groups on a milestone card
SOURCE_ORDER = ["youtube", "github", "books", "stackexchange", "wikipedia"]


def _not_found() -> JSONResponse:
    return JSONResponse({"error": "not_found"}, status_code=404)


def group_resources(resources: List[Resource]) -> List[Dict[str, Any]]:
    groups: Dict[str, List[Resource]] = defaultdict(list)
    for r in resources:
        groups[r.source.lower()].append(r)

    ordered = SOURCE_ORDER + sorted(k for k in groups if k not in SOURCE_ORDER)
    return [
        {
            "source": key,
            "items": [
                {"title": r.title, "url": r.url, "meta": r.meta, "rank_score": r.rank_score}
                for r in sorted(groups[key], key=lambda r: r.rank_score, reverse=True)
            ],
        }
        for key in ordered
        if groups.get(key)
    ]


def _milestone_view(m: Milestone, resources: List[Resource]) -> Dict[str, Any]:
    return {
        "id": str(m.id),
        "title": m.title,
        "description": m.description,
        "order_index": m.order_index,
        "est_hours": m.est_hours,
        "status": m.status,
        "resources": group_resources(resources),
    }


@router.get("/roadmaps/{roadmap_id}")
def roadmap_detail(
    roadmap_id: uuid.UUID,
    client_id: str = Query(..., alias="clientId", min_length=2),
    db: Session = Depends(get_db),
):
    gateway = SqlGateway(db, client_id)
    rm = gateway.get_roadmap(roadmap_id)
    if not rm:
        return _not_found()

    milestones = gateway.list_milestones(rm.id)
    by_milestone: Dict[uuid.UUID, List[Resource]] = defaultdict(list)
    for r in gateway.list_resources([m.id for m in milestones]):
        by_milestone[r.milestone_id].append(r)

    return {
        "id": str(rm.id),
        "topic": rm.topic,
        "exam": rm.exam,
        "time_value": rm.time_value,
        "time_unit": rm.time_unit,
        "difficulty": rm.difficulty,
        "hour_budget": rm.hour_budget,
        "milestones": [_milestone_view(m, by_milestone[m.id]) for m in milestones],
    }


@router.get("/roadmaps/{roadmap_id}/dashboard")
def roadmap_dashboard(
    roadmap_id: uuid.UUID,
    client_id: str = Query(..., alias="clientId", min_length=2),
    db: Session = Depends(get_db),
):
    gateway = SqlGateway(db, client_id)
    rm = gateway.get_roadmap(roadmap_id)
    if not rm:
        return _not_found()

    milestones = gateway.list_milestones(rm.id)
    feedback = gateway.list_feedback([m.id for m in milestones])
    summary = summarize_progress(milestones, feedback)
    return {"roadmap_id": str(rm.id), **summary.model_dump(mode="json")}


@router.patch("/milestones/{milestone_id}/status")
def update_milestone_status(
    milestone_id: uuid.UUID,
    body: StatusUpdate,
    db: Session = Depends(get_db),
):
    gateway = SqlGateway(db, body.client_id)
    m = gateway.set_milestone_status(milestone_id, body.status)
    if not m:
        return _not_found()
    return {"id": str(m.id), "status": m.status}
