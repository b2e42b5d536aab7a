"""Video prompt synthesis endpoint."""

from fastapi import APIRouter

from memefactory.dependencies import Config, LLMClient
from memefactory.pipeline.prompt_writer import build_trend_title, write_video_prompt
from memefactory.schemas.story import StoryRequest, StoryResponse

router = APIRouter()


@router.post("/story", response_model=StoryResponse)
async def create_story(body: StoryRequest, config: Config, llm: LLMClient) -> StoryResponse:
    """
    Generate one video prompt for a trend.

    ``item.title`` wins over ``selection``; with neither the title is "Trending meme".
    """
    trend_title = (body.item.title or "").strip() if body.item else ""
    if not trend_title and body.selection:
        trend_title = build_trend_title(
            body.selection.entities,
            body.selection.hooks,
            body.selection.styles,
            config=config.story,
        )
    trend_title = trend_title or config.story.default_title

    video_prompt = await write_video_prompt(
        trend_title, body.subjects, client=llm, config=config.story
    )
    return StoryResponse(video_prompt=video_prompt)
