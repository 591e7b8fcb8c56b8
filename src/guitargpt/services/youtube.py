"""Client for the YouTube Data API v3.

Only two endpoints are used:

    GET /youtube/v3/search   → candidate videos for a free-text query
    GET /youtube/v3/videos   → the title of one video

The API returns titles HTML-escaped ("Don&#39;t Stop Believin&#39;"), so they
are decoded before they leave this module.
"""

import logging

import httpx
from bs4 import BeautifulSoup

from ..exceptions import FetchError, UpstreamError
from ..models import VideoResult

logger = logging.getLogger(__name__)

API_ROOT = "https://www.googleapis.com/youtube/v3"
WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def decode_title(title: str) -> str:
    """Decode HTML entities in a title returned by the API."""
    if not title:
        return ""
    return BeautifulSoup(title, "html.parser").get_text()


def _to_result(item: dict) -> VideoResult | None:
    """Map one search item to a :class:`VideoResult`; None if malformed."""
    try:
        snippet = item["snippet"]
        return VideoResult(
            id=item["id"]["videoId"],
            title=decode_title(snippet.get("title", "")),
            thumbnail=((snippet.get("thumbnails") or {}).get("medium") or {}).get("url", ""),
            channel_title=snippet.get("channelTitle", ""),
        )
    except (KeyError, TypeError):
        return None


class YouTubeClient:
    """Thin wrapper over the two Data API calls the app needs."""

    def __init__(self, api_key: str, http: httpx.Client | None = None, timeout: float = 10):
        self.api_key = api_key
        self.http = http
        self.timeout = timeout

    def _get(self, path: str, params: dict) -> dict:
        url = f"{API_ROOT}/{path}"
        try:
            resp = (self.http or httpx).get(
                url, params={**params, "key": self.api_key}, timeout=self.timeout
            )
        except httpx.RequestError as exc:
            raise FetchError(url, 0) from exc
        if resp.status_code != 200:
            raise FetchError(url, resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(url, "response is not JSON") from exc

    def search(self, query: str, max_results: int = 10) -> list[VideoResult]:
        """Return up to *max_results* videos matching *query*.

        Items without a video id (channels, playlists) are skipped.
        """
        if not query.strip():
            return []
        data = self._get(
            "search",
            {"part": "snippet", "maxResults": max_results, "q": query, "type": "video"},
        )
        results = [r for r in (_to_result(item) for item in data.get("items", [])) if r]
        logger.debug("YouTube search %r returned %d results", query, len(results))
        return results

    def video_title(self, video_id: str) -> str:
        """Return the decoded title of *video_id*, or ``""`` if it is unknown."""
        data = self._get("videos", {"part": "snippet", "id": video_id})
        items = data.get("items") or []
        if not items:
            return ""
        return decode_title((items[0].get("snippet") or {}).get("title", ""))
