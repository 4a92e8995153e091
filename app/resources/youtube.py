from typing import Any, Dict, List

from app.resources.base import ResourceAdapter, ResourceHit, SourceType, require, require_list

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


class YouTubeAdapter(ResourceAdapter):
    """YouTube Data API v3 video search. Needs an API key."""

    source_type = SourceType.YOUTUBE

    def __init__(self, api_key: str | None):
        self.api_key = api_key

    def is_available(self) -> bool:
        return bool(self.api_key)

    def build_request(self, query: str, limit: int) -> tuple[str, Dict[str, Any], Dict[str, str]]:
        params = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": limit,
            "key": self.api_key,
        }
        return SEARCH_URL, params, {}

    def parse(self, payload: Any, limit: int) -> List[ResourceHit]:
        hits = []
        for item in require_list(payload, "items")[:limit]:
            video_id = require(item, "id", "videoId")
            hits.append(self._hit(
                title=require(item, "snippet", "title"),
                url=f"https://www.youtube.com/watch?v={video_id}",
                meta={"channel": item["snippet"].get("channelTitle")},
            ))
        return hits
