import html
from typing import Any, Dict, List

from app.resources.base import ResourceAdapter, ResourceHit, SourceType, require, require_list

SEARCH_URL = "https://api.stackexchange.com/2.3/search/advanced"


class StackExchangeAdapter(ResourceAdapter):
    source_type = SourceType.STACKEXCHANGE

    def __init__(self, site: str = "stackoverflow"):
        self.site = site

    def build_request(self, query: str, limit: int) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        params = {
            "order": "desc",
            "sort": "relevance",
            "q": query,
            "site": self.site,
            "pagesize": limit,
        }
        return SEARCH_URL, params, {}

    def parse(self, payload: Any, limit: int) -> List[ResourceHit]:
        hits = []
        for question in require_list(payload, "items")[:limit]:
            hits.append(self._hit(
                # titles come back HTML-escaped
                title=html.unescape(require(question, "title")),
                url=require(question, "link"),
                meta={
                    "score": question.get("score", 0),
                    "is_answered": question.get("is_answered", False),
                },
            ))
        return hits
