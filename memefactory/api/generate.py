"""Media generation endpoint."""

from fastapi import APIRouter, Form, Request
from starlette.datastructures import UploadFile

from memefactory.core.errors import MissingInputError
from memefactory.core.rate_limit import generation_rate_limit, limiter
from memefactory.dependencies import Config, Runway
from memefactory.media.orchestrator import encode_reference_images, generate_media
from memefactory.schemas.generation import GenerationResult

router = APIRouter()


async def _reference_uploads(request: Request, limit: int) -> list[tuple[bytes, str | None]]:
    """Read the first ``limit`` real files posted as ``images``.

    Text fields and empty file inputs under the same name are skipped.
    """
    form = await request.form()
    files = [
        part
        for part in form.getlist("images")
        if isinstance(part, UploadFile) and part.filename
    ]
    return [(await upload.read(), upload.content_type) for upload in files[:limit]]


@router.post("/generate", response_model=GenerationResult)
@limiter.limit(generation_rate_limit)
async def generate(
    request: Request,
    config: Config,
    runway: Runway,
    prompt: str = Form(default=""),
) -> GenerationResult:
    """
    Render a prompt into a vertical keyframe image and a 5s video.

    Up to three optional reference images, posted as ``images`` files,
    steer the keyframe.
    """
    prompt = prompt.strip()
    if not prompt:
        raise MissingInputError("Missing prompt")

    limit = config.generation.max_reference_images
    uploads = await _reference_uploads(request, limit)
    references = encode_reference_images(uploads, limit)

    return await generate_media(prompt, references, client=runway)
