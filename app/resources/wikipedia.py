from typing import Any, Dict, List
from urllib.parse import quote

from app.resources.base import ResourceAdapter, ResourceHit, SourceType, require

SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/summary/"
EXTRACT_CHARS = 240


class WikipediaAdapter(ResourceAdapter):
    """Page summary lookup; a term resolves to at most one page."""

    source_type = SourceType.WIKIPEDIA

    def build_request(self, query: str, limit: int) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        return SUMMARY_URL + quote(query, safe=""), {}, {}

    def parse(self, payload: Any, limit: int) -> List[ResourceHit]:
        title = require(payload, "title")
        url = require(payload, "content_urls", "desktop", "page")
        extract = payload.get("extract") or ""
        return [self._hit(title=title, url=url, meta={"extract": extract[:EXTRACT_CHARS]})]
