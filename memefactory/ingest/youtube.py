"""YouTube Data API client for the most-popular chart."""

from typing import Any

import httpx

from memefactory.config import TrendsConfig, get_config, get_settings
from memefactory.core.errors import MissingConfigurationError, UpstreamHTTPError
from memefactory.core.logging import get_logger
from memefactory.schemas.trends import TrendItem

logger = get_logger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"


def clamp_max_results(raw: str | int | None, config: TrendsConfig | None = None) -> int:
    """
    Parse a requested result count and clamp it into the allowed range.

    Missing or unparsable values fall back to the configured default.
    """
    config = config or get_config().trends
    try:
        value = int(str(raw).strip(), 10) if raw is not None else config.default_max_results
    except ValueError:
        value = config.default_max_results
    return min(max(value, config.min_results), config.max_results)


def normalize_region(raw: str | None, config: TrendsConfig | None = None) -> str:
    """Upper-case a region code, defaulting when empty."""
    config = config or get_config().trends
    return (raw or config.default_region).strip().upper() or config.default_region


def simplify_item(raw: dict[str, Any], tags_per_item: int = 6) -> TrendItem:
    """Reshape a YouTube video resource into a TrendItem."""
    snippet = raw.get("snippet") or {}
    statistics = raw.get("statistics") or {}
    content_details = raw.get("contentDetails") or {}
    thumbnails = snippet.get("thumbnails") or {}

    try:
        views = int(statistics.get("viewCount") or 0)
    except (TypeError, ValueError):
        views = 0

    return TrendItem(
        id=str(raw.get("id", "")),
        title=snippet.get("title") or "",
        channel=snippet.get("channelTitle") or "",
        published_at=snippet.get("publishedAt") or "",
        views=views,
        duration=content_details.get("duration") or "",
        tags=list(snippet.get("tags") or [])[:tags_per_item],
        thumb=(thumbnails.get("high") or {}).get("url") or "",
        category_id=snippet.get("categoryId") or "",
    )


class TrendingFetcher:
    """Fetcher for YouTube's most popular videos in a region."""

    def __init__(
        self,
        api_key: str | None = None,
        config: TrendsConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the trending fetcher.

        Args:
            api_key: YouTube Data API key, defaults to settings
            config: Trend digest configuration
            http_client: Optional shared client (tests inject a mock transport)
        """
        self.api_key = api_key if api_key is not None else get_settings().youtube_api_key
        self.config = config or get_config().trends
        self._http_client = http_client

    async def fetch(
        self,
        region: str,
        max_results: int,
        category_id: str = "",
    ) -> list[TrendItem]:
        """
        Fetch the most popular videos for a region.

        Args:
            region: ISO 3166-1 alpha-2 region code
            max_results: Number of videos to request (already clamped)
            category_id: Optional video category filter

        Returns:
            Simplified trend items in chart order

        Raises:
            MissingConfigurationError: If no API key is configured
            UpstreamHTTPError: If the API answers with a non-2xx status
        """
        if not self.api_key:
            raise MissingConfigurationError("YOUTUBE_API_KEY")

        params: dict[str, str | int] = {
            "part": "snippet,statistics,contentDetails",
            "chart": "mostPopular",
            "regionCode": region,
            "maxResults": max_results,
        }
        if category_id:
            params["videoCategoryId"] = category_id
        params["key"] = self.api_key

        if self._http_client is not None:
            response = await self._get(self._http_client, params)
        else:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                response = await self._get(client, params)

        if response.is_error:
            logger.bind(region=region, status=response.status_code).error("youtube_http_error")
            raise UpstreamHTTPError(
                f"YouTube API error: {response.text}", upstream_status=response.status_code
            )

        data = response.json()
        items = [simplify_item(v, self.config.tags_per_item) for v in data.get("items", [])]

        logger.bind(region=region, category_id=category_id or None, count=len(items)).info(
            "youtube_trending_fetched"
        )
        return items

    async def _get(self, client: httpx.AsyncClient, params: dict[str, str | int]) -> httpx.Response:
        return await client.get(f"{YOUTUBE_API_BASE}/videos", params=params)
