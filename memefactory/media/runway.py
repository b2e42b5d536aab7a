"""Runway API client for text-to-image and image-to-video tasks."""

import asyncio
import base64
import time
from typing import Any

import httpx

from memefactory.config import GenerationConfig, get_config, get_settings
from memefactory.core.errors import (
    MissingConfigurationError,
    TaskFailedError,
    TaskTimeoutError,
    UpstreamHTTPError,
)
from memefactory.core.logging import get_logger
from memefactory.schemas.generation import MediaTask, ReferenceImage

logger = get_logger(__name__)


def encode_reference_image(content: bytes, content_type: str | None, index: int) -> ReferenceImage:
    """Inline an uploaded image as a base64 data URI tagged ``ref<N>``."""
    mime = content_type or "image/png"
    payload = base64.b64encode(content).decode("ascii")
    return ReferenceImage(uri=f"data:{mime};base64,{payload}", tag=f"ref{index + 1}")


class RunwayClient:
    """
    Client for Runway's task API.

    Tasks are created with a POST and then polled at ``/v1/tasks/{id}`` until
    they reach a terminal status.
    """

    def __init__(
        self,
        api_secret: str | None = None,
        config: GenerationConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Runway client.

        Args:
            api_secret: Runway API secret, defaults to settings
            config: Media generation configuration
            http_client: Optional shared client (tests inject a mock transport)
        """
        settings = get_settings()
        self.api_secret = api_secret if api_secret is not None else settings.runwayml_api_secret
        self.base_url = settings.runway_base_url.rstrip("/")
        self.api_version = settings.runway_api_version
        self.config = config or get_config().generation
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "RunwayClient":
        if not self.api_secret:
            raise MissingConfigurationError("RUNWAYML_API_SECRET")
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=60.0)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_secret}",
            "X-Runway-Version": self.api_version,
        }

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        assert self._http_client is not None, "RunwayClient must be used as a context manager"
        response = await self._http_client.request(
            method, f"{self.base_url}{path}", json=json, headers=self._headers
        )
        if response.is_error:
            logger.bind(path=path, status=response.status_code).error("runway_http_error")
            raise UpstreamHTTPError(
                f"Runway API error: {response.text}", upstream_status=response.status_code
            )
        data: dict[str, Any] = response.json()
        return data

    async def create_text_to_image(
        self, prompt: str, references: list[ReferenceImage] | None = None
    ) -> str:
        """
        Submit a text-to-image task and return its id.

        Reference images switch to the turbo model, which is the only one
        they are sent to.
        """
        use_turbo = bool(references)
        payload: dict[str, Any] = {
            "model": self.config.image_turbo_model if use_turbo else self.config.image_model,
            "promptText": prompt,
            "ratio": self.config.ratio,
        }
        if use_turbo:
            payload["referenceImages"] = [r.model_dump() for r in references or []]

        data = await self._request("POST", "/v1/text_to_image", json=payload)
        logger.bind(task_id=data.get("id"), model=payload["model"]).info("runway_image_task_created")
        return str(data["id"])

    async def create_image_to_video(self, image_url: str, prompt: str) -> str:
        """Submit an image-to-video task using ``image_url`` as the keyframe."""
        payload = {
            "model": self.config.video_model,
            "promptImage": image_url,
            "promptText": prompt,
            "ratio": self.config.ratio,
            "duration": self.config.duration,
        }
        data = await self._request("POST", "/v1/image_to_video", json=payload)
        logger.bind(task_id=data.get("id"), model=payload["model"]).info("runway_video_task_created")
        return str(data["id"])

    async def get_task(self, task_id: str) -> MediaTask:
        data = await self._request("GET", f"/v1/tasks/{task_id}")
        return MediaTask(id=task_id, status=str(data.get("status", "")).upper(), raw=data)

    async def wait_for_task_output(self, task_id: str) -> dict[str, Any]:
        """
        Poll a task until it reaches a terminal status.

        Returns:
            The raw task payload of a succeeded task

        Raises:
            TaskFailedError: If the task failed or was cancelled
            TaskTimeoutError: If ``max_wait_seconds`` elapsed first
        """
        started = time.monotonic()
        while True:
            task = await self.get_task(task_id)
            if task.is_terminal:
                break

            waited = time.monotonic() - started
            if waited >= self.config.max_wait_seconds:
                logger.bind(task_id=task_id, status=task.status).error("runway_task_timeout")
                raise TaskTimeoutError(task_id, waited)

            logger.bind(task_id=task_id, status=task.status).debug("runway_task_pending")
            await asyncio.sleep(self.config.poll_interval_seconds)

        if not task.succeeded:
            logger.bind(
                task_id=task_id,
                status=task.status,
                failure=task.raw.get("failure"),
                failure_code=task.raw.get("failureCode"),
            ).error("runway_task_failed")
            raise TaskFailedError(task_id, task.raw)

        logger.bind(task_id=task_id, seconds=round(time.monotonic() - started, 1)).info(
            "runway_task_succeeded"
        )
        return task.raw

    async def text_to_image(
        self, prompt: str, references: list[ReferenceImage] | None = None
    ) -> dict[str, Any]:
        """Create a text-to-image task and wait for its output."""
        task_id = await self.create_text_to_image(prompt, references)
        return await self.wait_for_task_output(task_id)

    async def image_to_video(self, image_url: str, prompt: str) -> dict[str, Any]:
        """Create an image-to-video task and wait for its output."""
        task_id = await self.create_image_to_video(image_url, prompt)
        return await self.wait_for_task_output(task_id)
