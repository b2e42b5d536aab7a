"""Media generation orchestrator - keyframe image, then video."""

import json

from memefactory.config import get_config
from memefactory.core.errors import MissingInputError, MissingOutputError
from memefactory.core.logging import get_logger
from memefactory.media.extract import extract_asset_url
from memefactory.media.runway import RunwayClient, encode_reference_image
from memefactory.schemas.generation import GenerationResult, ReferenceImage

logger = get_logger(__name__)


def encode_reference_images(
    uploads: list[tuple[bytes, str | None]],
    limit: int | None = None,
) -> list[ReferenceImage]:
    """
    Encode at most ``limit`` uploaded images as tagged data URIs.

    Args:
        uploads: (content, content_type) pairs in upload order
        limit: Maximum number of references, defaults to config
    """
    limit = limit if limit is not None else get_config().generation.max_reference_images
    return [
        encode_reference_image(content, content_type, i)
        for i, (content, content_type) in enumerate(uploads[:limit])
    ]


async def generate_media(
    prompt: str,
    references: list[ReferenceImage] | None = None,
    client: RunwayClient | None = None,
) -> GenerationResult:
    """
    Render a prompt into a keyframe image, then into a short video.

    Args:
        prompt: Video prompt text
        references: Optional reference images for the keyframe
        client: Optional Runway client, defaults to one built from settings

    Returns:
        GenerationResult with both URLs

    Raises:
        MissingInputError: If the prompt is empty (before any provider call)
        MissingOutputError: If a finished task carries no asset URL
        TaskFailedError: If the provider reports a failed task
    """
    prompt = (prompt or "").strip()
    if not prompt:
        raise MissingInputError("Missing prompt")

    async with client or RunwayClient() as runway:
        return await _run(runway, prompt, references or [])


async def _run(
    client: RunwayClient, prompt: str, references: list[ReferenceImage]
) -> GenerationResult:
    log = logger.bind(prompt=prompt[:60], references=len(references))
    log.info("media_generation_started")

    # 1) Text -> Image
    image_task = await client.text_to_image(prompt, references)
    image_url = extract_asset_url(image_task)
    if not image_url:
        log.bind(task_shape=json.dumps(image_task, indent=2)).error("image_task_missing_output")
        raise MissingOutputError("Failed to create image")

    # 2) Image -> Video, keyframe and prompt carried over
    video_task = await client.image_to_video(image_url, prompt)
    video_url = extract_asset_url(video_task)
    if not video_url:
        log.bind(task_shape=json.dumps(video_task, indent=2)).error("video_task_missing_output")
        raise MissingOutputError("Failed to create video")

    log.info("media_generation_complete")
    return GenerationResult(image_url=image_url, video_url=video_url)
