"""
Pytest configuration and fixtures for Meme Factory tests.

Provides:
- Test client for API testing with provider dependencies overridden
- Fake YouTube and Runway HTTP APIs served through httpx.MockTransport
- Factory for mock OpenAI clients
"""

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from memefactory.config import GenerationConfig, Settings, TrendsConfig, get_settings
from memefactory.dependencies import get_llm_client, get_runway_client, get_trending_fetcher
from memefactory.ingest.youtube import TrendingFetcher
from memefactory.main import app
from memefactory.media.runway import RunwayClient

IMAGE_URL = "https://cdn.runway.test/keyframe.png"
VIDEO_URL = "https://cdn.runway.test/clip.mp4"


# Override settings for testing
class TestSettings(Settings):
    youtube_api_key: str = "test-youtube-key"
    openai_api_key: str = "test-openai-key"
    runwayml_api_secret: str = "test-runway-secret"
    runway_base_url: str = "https://api.runway.test"
    debug: bool = True


# ============================================================================
# Fake upstream APIs
# ============================================================================


def youtube_video(
    video_id: str,
    title: str,
    channel: str = "Some Channel",
    views: str | None = "1000",
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Build a YouTube Data API video resource."""
    resource: dict[str, Any] = {
        "id": video_id,
        "snippet": {
            "title": title,
            "channelTitle": channel,
            "publishedAt": "2026-10-18T12:00:00Z",
            "categoryId": "20",
            "thumbnails": {"high": {"url": f"https://i.ytimg.test/{video_id}/hq.jpg"}},
        },
        "statistics": {},
        "contentDetails": {"duration": "PT3M2S"},
    }
    if views is not None:
        resource["statistics"]["viewCount"] = views
    if tags is not None:
        resource["snippet"]["tags"] = tags
    return resource


class FakeYouTube:
    """In-memory stand-in for GET /youtube/v3/videos."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.error_body = '{"error": {"message": "quota exceeded"}}'
        self.items = [
            youtube_video("a1", "Minecraft but every block is a cat", tags=["minecraft", "cats"]),
            youtube_video("b2", "MrBeast Gaming 24h challenge", channel="MrBeast Gaming"),
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text=self.error_body)
        return httpx.Response(200, json={"items": self.items})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class FakeRunway:
    """
    In-memory stand-in for the Runway task API.

    ``tasks`` maps task id to the sequence of states returned by successive
    polls; the last state repeats.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.create_status = 200
        self.tasks: dict[str, list[dict[str, Any]]] = {
            "img-task": [
                {"id": "img-task", "status": "RUNNING", "progress": 0.4},
                {"id": "img-task", "status": "SUCCEEDED", "output": [IMAGE_URL]},
            ],
            "vid-task": [
                {"id": "vid-task", "status": "SUCCEEDED", "output": [VIDEO_URL]},
            ],
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "POST" and path == "/v1/text_to_image":
            return self._create("img-task")
        if request.method == "POST" and path == "/v1/image_to_video":
            return self._create("vid-task")
        if request.method == "GET" and path.startswith("/v1/tasks/"):
            states = self.tasks[path.rsplit("/", 1)[1]]
            state = states.pop(0) if len(states) > 1 else states[0]
            return httpx.Response(200, json=state)
        return httpx.Response(404, text="not found")

    def _create(self, task_id: str) -> httpx.Response:
        if self.create_status != 200:
            return httpx.Response(self.create_status, text='{"error": "bad request"}')
        return httpx.Response(200, json={"id": task_id})

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def body(self, request: httpx.Request) -> dict[str, Any]:
        return json.loads(request.content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_youtube() -> FakeYouTube:
    return FakeYouTube()


@pytest.fixture
def fake_runway() -> FakeRunway:
    return FakeRunway()


@pytest.fixture
def trending_fetcher(fake_youtube: FakeYouTube) -> TrendingFetcher:
    return TrendingFetcher(
        api_key="test-youtube-key",
        config=TrendsConfig({}),
        http_client=fake_youtube.client(),
    )


@pytest.fixture
def generation_config() -> GenerationConfig:
    return GenerationConfig({"poll_interval_seconds": 0})


@pytest.fixture
def runway_client(fake_runway: FakeRunway, generation_config: GenerationConfig) -> RunwayClient:
    client = RunwayClient(
        api_secret="test-runway-secret",
        config=generation_config,
        http_client=fake_runway.client(),
    )
    client.base_url = "https://api.runway.test"
    return client


# ============================================================================
# Mock OpenAI
# ============================================================================


@pytest.fixture
def llm_factory() -> Callable[[str | None], AsyncMock]:
    """Factory for mock AsyncOpenAI clients replying with fixed content."""

    def _create(content: str | None) -> AsyncMock:
        mock_response = MagicMock()
        mock_response.choices = [MagicMock()]
        mock_response.choices[0].message.content = content
        mock_response.usage = MagicMock()
        mock_response.usage.total_tokens = 321

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=mock_response)
        return mock_client

    return _create


@pytest.fixture
def mock_analysis() -> dict[str, Any]:
    return {
        "entities": [
            {
                "name": "Minecraft",
                "type": "game",
                "evidence_lines": [1],
                "aliases": [],
                "strength": "high",
            },
            {
                "name": "MrBeast",
                "type": "creator_or_channel",
                "evidence_lines": [2],
                "aliases": ["MrBeast Gaming"],
                "strength": "high",
            },
        ],
        "meme_hooks": ["POV: the creeper just wanted a hug"],
        "style_cues": ["VHS grain", "speed ramp into punch-in"],
    }


@pytest.fixture
def llm_client(llm_factory, mock_analysis) -> AsyncMock:
    return llm_factory(json.dumps(mock_analysis))


# ============================================================================
# API client
# ============================================================================


@pytest.fixture
def test_settings() -> TestSettings:
    return TestSettings()


@pytest_asyncio.fixture
async def client(
    test_settings: TestSettings,
    trending_fetcher: TrendingFetcher,
    runway_client: RunwayClient,
    llm_client: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with provider overrides."""
    from memefactory.core.rate_limit import limiter

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_trending_fetcher] = lambda: trending_fetcher
    app.dependency_overrides[get_runway_client] = lambda: runway_client
    app.dependency_overrides[get_llm_client] = lambda: llm_client

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
