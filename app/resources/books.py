from typing import Any, Dict, List

from app.resources.base import ResourceAdapter, ResourceHit, SourceType, require, require_list

VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksAdapter(ResourceAdapter):
    source_type = SourceType.BOOKS

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key

    def build_request(self, query: str, limit: int) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        params: Dict[str, Any] = {"q": query, "maxResults": limit}
        # Books works unauthenticated, at a lower quota
        if self.api_key:
            params["key"] = self.api_key
        return VOLUMES_URL, params, {}

    def parse(self, payload: Any, limit: int) -> List[ResourceHit]:
        if not isinstance(payload, dict):
            raise ValueError(f"expected JSON object, got {type(payload).__name__}")

        # "items" is omitted entirely when nothing matched
        items = require_list(payload, "items") if "items" in payload else []
        hits = []
        for volume in items[:limit]:
            info = require(volume, "volumeInfo")
            hits.append(self._hit(
                title=require(info, "title"),
                url=require(info, "infoLink"),
                meta={"authors": info.get("authors"), "preview": info.get("previewLink")},
            ))
        return hits
