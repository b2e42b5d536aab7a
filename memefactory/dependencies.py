from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from openai import AsyncOpenAI

from memefactory.config import AppConfig, Settings, get_config, get_settings
from memefactory.ingest.youtube import TrendingFetcher
from memefactory.media.runway import RunwayClient

# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Config = Annotated[AppConfig, Depends(get_config)]


async def get_llm_client(settings: AppSettings) -> AsyncGenerator[AsyncOpenAI | None, None]:
    """OpenAI client closed after the request, or None when no key is configured."""
    if not settings.openai_api_key:
        yield None
        return

    async with AsyncOpenAI(api_key=settings.openai_api_key) as client:
        yield client


def get_trending_fetcher(settings: AppSettings, config: Config) -> TrendingFetcher:
    return TrendingFetcher(api_key=settings.youtube_api_key, config=config.trends)


def get_runway_client(settings: AppSettings, config: Config) -> RunwayClient:
    return RunwayClient(api_secret=settings.runwayml_api_secret, config=config.generation)


LLMClient = Annotated[AsyncOpenAI | None, Depends(get_llm_client)]
Fetcher = Annotated[TrendingFetcher, Depends(get_trending_fetcher)]
Runway = Annotated[RunwayClient, Depends(get_runway_client)]
