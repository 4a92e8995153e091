"""
Tests for planning/pipeline.py - end-to-end plan generation against
an in-memory database and mocked providers
"""
import httpx
import pytest

from app.db.gateway import SqlGateway
from app.db.models.milestone import Milestone
from app.db.models.resource import Resource
from app.db.models.roadmap import Roadmap
from app.generation.schemas import PlanRequest
from app.planning.errors import PersistenceError, SchemaError, UpstreamError
from app.planning.pipeline import generate_plan
from conftest import FakeLLM, make_plan, provider_handler


def calculus_request(**overrides) -> PlanRequest:
    body = {
        "topic": "Calculus",
        "timeValue": 2,
        "timeUnit": "weeks",
        "difficulty": "beginner",
        "clientId": "client-a",
        **overrides,
    }
    return PlanRequest.model_validate(body)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGeneratePlan:
    @pytest.mark.asyncio
    async def test_calculus_two_weeks_beginner(self, db_session, adapters):
        llm = FakeLLM(make_plan([10, 10, 10, 10]))
        gw = SqlGateway(db_session, "client-a")

        async with mock_client(provider_handler()) as http:
            roadmap_id = await generate_plan(calculus_request(), gw, llm=llm, http=http, adapters=adapters)

        rm = db_session.get(Roadmap, roadmap_id)
        assert rm.hour_budget == 36
        assert rm.topic == "Calculus"
        assert rm.time_unit == "weeks"
        assert rm.deadline_date is None
        assert "36 hours" in llm.calls[0]["user"]

        milestones = gw.list_milestones(roadmap_id)
        assert [m.est_hours for m in milestones] == [9, 9, 9, 9]
        assert [m.order_index for m in milestones] == [0, 1, 2, 3]

        # youtube ["intro"] + books ["textbook"], two hits each per milestone
        for m in milestones:
            res = sorted(gw.list_resources([m.id]), key=lambda r: -r.rank_score)
            assert [r.source for r in res] == ["youtube", "youtube", "books", "books"]
            assert [r.rank_score for r in res] == pytest.approx([1.0, 0.99, 0.98, 0.97])

    @pytest.mark.asyncio
    async def test_resources_attached_to_the_right_milestone(self, db_session, adapters):
        plan = make_plan([5, 5, 5])
        for i, m in enumerate(plan["milestones"]):
            m["queries"] = {"github": [f"topic{i}"]}
        gw = SqlGateway(db_session, "client-a")

        async with mock_client(provider_handler()) as http:
            roadmap_id = await generate_plan(calculus_request(), gw, llm=FakeLLM(plan), http=http, adapters=adapters)

        for m in gw.list_milestones(roadmap_id):
            titles = {r.title for r in gw.list_resources([m.id])}
            assert titles == {f"org/topic{m.order_index}-0", f"org/topic{m.order_index}-1"}

    @pytest.mark.asyncio
    async def test_schema_error_writes_nothing(self, db_session, adapters):
        bad = make_plan([10, 10])  # too few milestones
        gw = SqlGateway(db_session, "client-a")

        with pytest.raises(SchemaError):
            async with mock_client(provider_handler()) as http:
                await generate_plan(calculus_request(), gw, llm=FakeLLM(bad), http=http, adapters=adapters)

        assert db_session.query(Roadmap).count() == 0
        assert db_session.query(Milestone).count() == 0

    @pytest.mark.asyncio
    async def test_upstream_error_writes_nothing(self, db_session, adapters, fake_upstream_error):
        gw = SqlGateway(db_session, "client-a")

        with pytest.raises(UpstreamError):
            async with mock_client(provider_handler()) as http:
                await generate_plan(calculus_request(), gw, llm=FakeLLM(error=fake_upstream_error),
                http=http, adapters=adapters)

        assert db_session.query(Roadmap).count() == 0

    @pytest.mark.asyncio
    async def test_partial_adapter_failure(self, db_session, adapters):
        plan = make_plan([5, 5, 5], queries={"youtube": ["derivatives"], "books": ["calculus"]})
        fail = lambda r: r.url.path.startswith("/youtube/")
        gw = SqlGateway(db_session, "client-a")

        async with mock_client(provider_handler(fail=fail)) as http:
            roadmap_id = await generate_plan(calculus_request(), gw, llm=FakeLLM(plan), http=http, adapters=adapters)

        for m in gw.list_milestones(roadmap_id):
            assert {r.source for r in gw.list_resources([m.id])} == {"books"}

    @pytest.mark.asyncio
    async def test_all_lookups_failing_still_creates_roadmap(self, db_session, adapters):
        gw = SqlGateway(db_session, "client-a")

        async with mock_client(provider_handler(fail=lambda r: True)) as http:
            roadmap_id = await generate_plan(calculus_request(), gw, llm=FakeLLM(make_plan()),
            http=http, adapters=adapters)

        assert len(gw.list_milestones(roadmap_id)) == 4
        assert db_session.query(Resource).count() == 0

    @pytest.mark.asyncio
    async def test_missing_milestone_id_is_persistence_error(self, db_session, adapters, monkeypatch):
        gw = SqlGateway(db_session, "client-a")
        monkeypatch.setattr(gw, "insert_milestones", lambda rows: [])

        with pytest.raises(PersistenceError):
            async with mock_client(provider_handler()) as http:
                await generate_plan(calculus_request(), gw, llm=FakeLLM(make_plan()), http=http, adapters=adapters)

        # the roadmap row is left behind; there is no compensating delete
        assert db_session.query(Roadmap).count() == 1
