"""Trend digest endpoint."""

from datetime import UTC, datetime

from fastapi import APIRouter, Query

from memefactory.core.errors import MissingConfigurationError
from memefactory.dependencies import AppSettings, Config, Fetcher, LLMClient
from memefactory.ingest.digest import build_digest
from memefactory.ingest.youtube import clamp_max_results, normalize_region
from memefactory.pipeline.analyzer import analyze_trends
from memefactory.schemas.trends import TrendDigestResponse, TrendParams

router = APIRouter()


@router.get("/trends", response_model=TrendDigestResponse)
async def get_trends(
    settings: AppSettings,
    config: Config,
    fetcher: Fetcher,
    llm: LLMClient,
    region: str | None = Query(default=None, description="ISO region code, e.g. GB, US"),
    max_results: str | None = Query(default=None, alias="max", description="1-30"),
    category_id: str = Query(default="", alias="categoryId", description="e.g. 10 for Music"),
) -> TrendDigestResponse:
    """
    Fetch the most popular videos for a region and analyze them for memeable themes.

    Unparsable model output is returned as ``{"raw": text}`` under ``analysis``.
    """
    effective_region = normalize_region(region, config.trends)
    effective_max = clamp_max_results(max_results, config.trends)

    if not settings.youtube_api_key:
        raise MissingConfigurationError("YOUTUBE_API_KEY")
    if not settings.openai_api_key:
        raise MissingConfigurationError("OPENAI_API_KEY")

    items = await fetcher.fetch(effective_region, effective_max, category_id)
    digest = build_digest(items, effective_max)
    analysis = await analyze_trends(digest, client=llm, config=config.trends)

    return TrendDigestResponse(
        fetched_at=datetime.now(UTC),
        params=TrendParams(
            region=effective_region,
            max_results=effective_max,
            video_category_id=category_id,
        ),
        items=items,
        analysis=analysis,
    )
