## Per-milestone fan-out to content-search providers
import asyncio
import logging
from typing import Dict, List, Mapping

import httpx

from app.agents.schemas import MilestoneQueries
from app.resources.base import ResourceAdapter, ResourceRecord, SearchOutcome, SourceType
from app.resources.books import GoogleBooksAdapter
from app.resources.github import GitHubAdapter
from app.resources.stackexchange import StackExchangeAdapter
from app.resources.wikipedia import WikipediaAdapter
from app.resources.youtube import YouTubeAdapter
from app.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Concatenation order of a milestone's batch
FETCH_ORDER = [
    SourceType.YOUTUBE,
    SourceType.BOOKS,
    SourceType.GITHUB,
    SourceType.WIKIPEDIA,
]

RANK_STEP = 0.01


def build_adapters(cfg: Settings | None = None) -> Dict[SourceType, ResourceAdapter]:
    cfg = cfg or default_settings
    adapters: Dict[SourceType, ResourceAdapter] = {
        SourceType.YOUTUBE: YouTubeAdapter(cfg.YOUTUBE_API_KEY),
        SourceType.BOOKS: GoogleBooksAdapter(cfg.GOOGLE_BOOKS_KEY),
        SourceType.GITHUB: GitHubAdapter(cfg.GITHUB_TOKEN),
        SourceType.WIKIPEDIA: WikipediaAdapter(),
    }
    if cfg.fetch_stackexchange:
        adapters[SourceType.STACKEXCHANGE] = StackExchangeAdapter()
    return adapters


def rank_batch(outcomes: List[SearchOutcome]) -> List[ResourceRecord]:
    """
    Flatten outcomes in order and rank by position: rank_score = 1 - 0.01 * i.

    A failed outcome contributes no records.
    """
    records: List[ResourceRecord] = []
    for outcome in outcomes:
        if not outcome.ok:
            logger.warning("Lookup %r dropped: %s", outcome.query, outcome.error)
            continue
        for hit in outcome.hits:
            records.append(ResourceRecord(**hit.model_dump(), rank_score=1 - RANK_STEP * len(records)))
    return records


async def fetch_resources(
    queries: MilestoneQueries,
    http: httpx.AsyncClient | None = None,
    adapters: Mapping[SourceType, ResourceAdapter] | None = None,
    limit: int | None = None,
) -> List[ResourceRecord]:
    """
    Run one lookup per query string for every category with an adapter, all
    concurrently, and return the ranked batch for the milestone.
    """
    adapters = adapters if adapters is not None else build_adapters()
    limit = limit or default_settings.resources_per_query

    order = FETCH_ORDER + [s for s in adapters if s not in FETCH_ORDER]
    lookups = [
        (adapters[source], q)
        for source in order
        if source in adapters
        for q in getattr(queries, source.value)
        if q and q.strip()
    ]
    if not lookups:
        return []

    if http is None:
        async with httpx.AsyncClient(timeout=default_settings.http_timeout_seconds) as client:
            outcomes = await asyncio.gather(*(a.search(client, q, limit) for a, q in lookups))
    else:
        outcomes = await asyncio.gather(*(a.search(http, q, limit) for a, q in lookups))

    records = rank_batch(list(outcomes))
    logger.debug("Fetched %d resources from %d lookups", len(records), len(lookups))
    return records
