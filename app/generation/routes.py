# app/generation/routes.py
from typing import AsyncIterator, Dict

import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.deps import get_db
from app.agents.llm.base import LLMClient
from app.agents.llm.client import get_llm_client
from app.db.gateway import SqlGateway
from app.generation.schemas import PlanCreated, PlanRequest
from app.planning.pipeline import generate_plan
from app.resources.base import ResourceAdapter, SourceType
from app.resources.fetcher import build_adapters
from app.settings import settings

router = APIRouter(prefix="/api/plan")


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client


def get_resource_adapters() -> Dict[SourceType, ResourceAdapter]:
    return build_adapters(settings)


@router.post("/generate", response_model=PlanCreated, response_model_by_alias=True)
async def generate(
    body: PlanRequest,
    db: Session = Depends(get_db),
    llm: LLMClient = Depends(get_llm_client),
    http: httpx.AsyncClient = Depends(get_http_client),
    adapters: Dict[SourceType, ResourceAdapter] = Depends(get_resource_adapters),
):
    # PlanningError subclasses are turned into 500 {"error": ...} in app.main
    gateway = SqlGateway(db, body.client_id)
    roadmap_id = await generate_plan(body, gateway, llm=llm, http=http, adapters=adapters)
    return PlanCreated(roadmap_id=str(roadmap_id))
