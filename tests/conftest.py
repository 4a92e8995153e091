"""
Pytest configuration and fixtures
"""
import json
from typing import Callable, Dict, List, Optional
from urllib.parse import unquote

import httpx
import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.agents.llm.base import LLMClient
from app.db.session import init_db, make_engine
from app.planning.errors import UpstreamError
from app.resources.books import GoogleBooksAdapter
from app.resources.github import GitHubAdapter
from app.resources.base import SourceType
from app.resources.stackexchange import StackExchangeAdapter
from app.resources.wikipedia import WikipediaAdapter
from app.resources.youtube import YouTubeAdapter


class FakeLLM(LLMClient):
    """Returns a canned completion (or raises) and records every prompt."""

    def __init__(self, response: str | dict = "", error: Exception | None = None):
        self.response = json.dumps(response) if isinstance(response, dict) else response
        self.error = error
        self.calls: List[Dict] = []

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2,
    json_mode: bool = False) -> str:
        self.calls.append({"system": system, "user": user, "temperature": temperature, "json_mode": json_mode})
        if self.error:
            raise self.error
        return self.response


def make_plan(hours: List[float] = (10, 10, 10, 10), queries: Optional[Dict] = None) -> Dict:
    """A valid planner response with one milestone per hour estimate."""
    q = queries if queries is not None else {"youtube": ["intro"], "books": ["textbook"]}
    return {
        "milestones": [
            {
                "title": f"Milestone {i + 1}",
                "description": f"Step {i + 1}",
                "est_hours": h,
                "queries": q,
            }
            for i, h in enumerate(hours)
        ]
    }


def provider_handler(fail: Callable[[httpx.Request], bool] = lambda r: False, per_query: int = 2):
    """
    httpx MockTransport handler that imitates every content provider.
    Requests for which `fail(request)` is true get a 503.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if fail(request):
            return httpx.Response(503, text="unavailable")

        host, path = request.url.host, request.url.path
        q = request.url.params.get("q", "")

        if host == "www.googleapis.com" and path.startswith("/youtube/"):
            items = [
                {"id": {"videoId": f"vid{i}"}, "snippet": {"title": f"{q} video {i}", "channelTitle": "chan"}}
                for i in range(per_query)
            ]
            return httpx.Response(200, json={"items": items})

        if host == "www.googleapis.com" and path.startswith("/books/"):
            items = [
                {"volumeInfo": {"title": f"{q} book {i}", "infoLink": f"https://books.example/{i}",
                                "authors": ["A. Author"], "previewLink": "https://books.example/p"}}
                for i in range(per_query)
            ]
            return httpx.Response(200, json={"items": items})

        if host == "api.github.com":
            items = [
                {"full_name": f"org/{q}-{i}", "html_url": f"https://github.com/org/{i}", "stargazers_count": 10 * i}
                for i in range(per_query)
            ]
            return httpx.Response(200, json={"items": items})

        if host == "en.wikipedia.org":
            term = unquote(path.rsplit("/", 1)[-1])
            return httpx.Response(200, json={
                "title": term,
                "extract": "x" * 500,
                "content_urls": {"desktop": {"page": f"https://en.wikipedia.org/wiki/{term}"}},
            })

        if host == "api.stackexchange.com":
            items = [
                {"title": f"How do I &quot;{q}&quot; {i}?", "link": f"https://stackoverflow.com/q/{i}",
                 "score": i, "is_answered": True}
                for i in range(per_query)
            ]
            return httpx.Response(200, json={"items": items})

        return httpx.Response(404, json={"error": "unknown route"})

    return handler


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def adapters():
    return {
        SourceType.YOUTUBE: YouTubeAdapter("yt-key"),
        SourceType.BOOKS: GoogleBooksAdapter("books-key"),
        SourceType.GITHUB: GitHubAdapter("gh-token"),
        SourceType.WIKIPEDIA: WikipediaAdapter(),
    }


@pytest.fixture
def all_adapters(adapters):
    return {**adapters, SourceType.STACKEXCHANGE: StackExchangeAdapter()}


@pytest.fixture
def fake_upstream_error():
    return UpstreamError("AI error: 502 bad gateway", status_code=502, body="bad gateway")
