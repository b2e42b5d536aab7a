"""LLM-based video prompt synthesis from a picked trend."""

from openai import AsyncOpenAI

from memefactory.config import StoryConfig, get_config, get_settings
from memefactory.core.errors import EmptyGenerationError, MissingConfigurationError
from memefactory.core.logging import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = """You write concise, high-impact video generation prompts.
Reply with the prompt ONLY (no preface, no quotes). Optimize for Runway gen4_turbo."""

_WRAPPING_QUOTES = "\"'`“”‘’"


def build_trend_title(
    entities: list[str] | None = None,
    hooks: list[str] | None = None,
    styles: list[str] | None = None,
    config: StoryConfig | None = None,
) -> str:
    """
    Compose a short trend summary from picks out of a trend analysis.

    Example: ``Entities: Minecraft, MrBeast | Hook: POV ... | Style: VHS grain``
    """
    config = config or get_config().story
    entities = [e for e in (entities or []) if e][: config.max_entities]
    hooks = [h for h in (hooks or []) if h][: config.max_hooks]
    styles = [s for s in (styles or []) if s][: config.max_styles]

    parts = []
    if entities:
        parts.append(f"Entities: {', '.join(entities)}")
    if hooks:
        parts.append(f"Hook: {' / '.join(hooks)}")
    if styles:
        parts.append(f"Style: {', '.join(styles)}")
    return " | ".join(parts) or config.default_title


def build_story_prompt(trend_title: str, subjects: str | None) -> str:
    return f"""Create ONE prompt for a 5s meme video.
Include: visual style, key actions, camera moves, and energetic tone.
Keep playful, absurd, funny and very meme-able. Trend: "{trend_title}". Subjects: {subjects or "none"}.
"""


def clean_prompt(text: str | None) -> str:
    """Strip whitespace and any quotes wrapping the whole reply."""
    cleaned = (text or "").strip()
    while len(cleaned) >= 2 and cleaned[0] in _WRAPPING_QUOTES and cleaned[-1] in _WRAPPING_QUOTES:
        cleaned = cleaned[1:-1].strip()
    return cleaned


async def write_video_prompt(
    trend_title: str,
    subjects: str | None = None,
    client: AsyncOpenAI | None = None,
    config: StoryConfig | None = None,
) -> str:
    """
    Generate exactly one video-generation prompt for a trend.

    Args:
        trend_title: Short trend summary
        subjects: Optional free-text subject hints
        client: Optional OpenAI client
        config: Prompt synthesis configuration

    Returns:
        The cleaned prompt text

    Raises:
        EmptyGenerationError: If the model returns no text
    """
    settings = get_settings()
    config = config or get_config().story
    if not client:
        if not settings.openai_api_key:
            raise MissingConfigurationError("OPENAI_API_KEY")
        client = AsyncOpenAI(api_key=settings.openai_api_key)

    user_prompt = build_story_prompt(trend_title, subjects)
    logger.bind(trend_title=trend_title[:80], subjects=subjects).debug("video_prompt_request")

    response = await client.chat.completions.create(
        model=settings.llm_model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ],
        temperature=config.temperature,
    )

    content = response.choices[0].message.content if response.choices else None
    video_prompt = clean_prompt(content)
    if not video_prompt:
        raise EmptyGenerationError("No prompt generated")

    logger.info(f"video_prompt_generated: {video_prompt[:60]}")
    return video_prompt
