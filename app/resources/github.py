from typing import Any, Dict, List

from app.resources.base import ResourceAdapter, ResourceHit, SourceType, require, require_list

SEARCH_URL = "https://api.github.com/search/repositories"


class GitHubAdapter(ResourceAdapter):
    """Repository search. Rate limited without a token but still usable."""

    source_type = SourceType.GITHUB

    def __init__(self, token: str | None = None):
        self.headers = {"Accept": "application/vnd.github+json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def build_request(self, query: str, limit: int) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        return SEARCH_URL, {"q": query, "per_page": limit}, self.headers

    def parse(self, payload: Any, limit: int) -> List[ResourceHit]:
        hits = []
        for repo in require_list(payload, "items")[:limit]:
            hits.append(self._hit(
                title=require(repo, "full_name"),
                url=require(repo, "html_url"),
                meta={"stars": repo.get("stargazers_count", 0)},
            ))
        return hits
