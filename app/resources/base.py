## Common shapes for content-search adapters
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SourceType(str, Enum):
    """Content providers a milestone's queries are dispatched to."""
    YOUTUBE = "youtube"
    BOOKS = "books"
    GITHUB = "github"
    WIKIPEDIA = "wikipedia"
    STACKEXCHANGE = "stackexchange"


class ResourceHit(BaseModel):
    """Uniform resource record produced by every adapter."""
    source: SourceType
    title: str
    url: str
    meta: Dict[str, Any] = Field(default_factory=dict)


class ResourceRecord(ResourceHit):
    """A hit placed in its milestone batch; higher rank_score sorts first."""
    rank_score: float


class SearchOutcome(BaseModel):
    """Either the hits of one lookup or the reason it produced none."""
    query: str
    hits: List[ResourceHit] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AdapterError(Exception):
    """Provider response is missing a field the adapter needs."""


def require(data: Any, *path: str | int) -> Any:
    """Walk a nested JSON value, raising AdapterError on the first missing step."""
    cur = data
    for key in path:
        try:
            cur = cur[key]
        except (KeyError, IndexError, TypeError):
            raise AdapterError(f"missing field {'.'.join(str(p) for p in path)}") from None
        if cur is None:
            raise AdapterError(f"missing field {'.'.join(str(p) for p in path)}")
    return cur


def require_list(data: Any, *path: str | int) -> list:
    """Like require(), but the value must also be a JSON array."""
    value = require(data, *path)
    if not isinstance(value, list):
        raise AdapterError(f"field {'.'.join(str(p) for p in path)} is not a list")
    return value


class ResourceAdapter(ABC):
    """
    One provider behind the common "query -> hits or error" signature.

    Subclasses describe the HTTP request and map the decoded JSON body.
    search() never raises for provider problems: transport errors, non-2xx
    statuses, non-JSON bodies and missing fields all come back as an outcome
    with `error` set, and the caller decides what that means.
    """

    source_type: SourceType

    def is_available(self) -> bool:
        return True

    @abstractmethod
    def build_request(self, query: str, limit: int) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        """Return (url, params, headers) for one lookup."""

    @abstractmethod
    def parse(self, payload: Any, limit: int) -> List[ResourceHit]:
        """Map a decoded response body into hits. Raise AdapterError on missing fields."""

    def _hit(self, **kwargs) -> ResourceHit:
        return ResourceHit(source=self.source_type, **kwargs)

    async def search(self, http: httpx.AsyncClient, query: str, limit: int = 3) -> SearchOutcome:
        if not self.is_available():
            return SearchOutcome(query=query, error=f"{self.source_type.value} adapter not configured")

        url, params, headers = self.build_request(query, limit)
        try:
            resp = await http.get(url, params=params, headers=headers)
            resp.raise_for_status()
            payload = resp.json()
            hits = self.parse(payload, limit)
        except httpx.HTTPStatusError as e:
            return SearchOutcome(
                query=query,
                error=f"{self.source_type.value} HTTP {e.response.status_code}: {e.response.text[:200]}",
            )
        except httpx.HTTPError as e:
            return SearchOutcome(query=query, error=f"{self.source_type.value} request failed: {e!r}")
        except AdapterError as e:
            return SearchOutcome(query=query, error=f"{self.source_type.value} response {e}")
        except ValueError as e:
            # JSONDecodeError and pydantic's ValidationError both land here
            return SearchOutcome(query=query, error=f"{self.source_type.value} returned an unusable body: {e}")
        except (TypeError, KeyError, AttributeError) as e:
            # a field present with the wrong JSON type
            return SearchOutcome(query=query, error=f"{self.source_type.value} response has an unexpected shape: {e!r}")

        return SearchOutcome(query=query, hits=hits)
