"""LLM-based trend analysis from a catalog digest."""

import json
from typing import Any

from openai import AsyncOpenAI

from memefactory.config import TrendsConfig, get_config, get_settings
from memefactory.core.errors import MissingConfigurationError
from memefactory.core.logging import get_logger
from memefactory.schemas.trends import ENTITY_TYPES

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a short-form video trend analyst. Identify viral themes & hype categories "
    "for memeable content. Be concise and useful for creators."
)

BANNED_GENERIC = [
    "music videos",
    "cinematic trailers",
    "trailers",
    "gaming videos",
    "vlogs",
    "reaction",
    "compilation",
    "podcast",
    "livestream",
]

OUTPUT_EXAMPLE = {
    "entities": [
        {
            "name": "Among Us",
            "type": "game",
            "evidence_lines": [3],
            "aliases": ["AMONG US"],
            "strength": "high",
        },
        {
            "name": "Skibidi Toilet",
            "type": "meme_series",
            "evidence_lines": [8],
            "aliases": ["skibidi"],
            "strength": "high",
        },
        {
            "name": "MrBeast",
            "type": "creator_or_channel",
            "evidence_lines": [9],
            "aliases": ["MrBeast Gaming"],
            "strength": "high",
        },
        {
            "name": "The Boys",
            "type": "franchise_or_show",
            "evidence_lines": [5],
            "aliases": [],
            "strength": "med",
        },
    ],
    "meme_hooks": [
        "POV: Your squad queues Warzone and the gulag is actually a talent show",
        "When the Skibidi multiverse leaks into your kitchen",
        "Among Us emergency meeting... but it's a wedding",
    ],
    "style_cues": [
        "hard whip-pans + VHS grain",
        "caption bars with bold emoji beats",
        "speed ramp into punch-in on reveal",
    ],
}


def build_analysis_prompt(digest: str) -> str:
    """Build the user prompt asking for entities, hooks and style cues."""
    return f"""INPUT DIGEST (numbered lines):
{digest}

TASK:
1) Extract named entities that people are talking about or making content with.
2) Group them by a strict type enum.
3) Propose meme hooks + style cues grounded in those entities.

BANNED_GENERIC = {json.dumps(BANNED_GENERIC)}

TYPES = {json.dumps(list(ENTITY_TYPES))}

OUTPUT JSON ONLY (no prose). Example:
{json.dumps(OUTPUT_EXAMPLE, indent=2)}

RULES:
- Minimum 8 entities. Prefer proper nouns from titles/tags.
- Each entity must list evidence_lines referencing the numbered digest lines.
- If an item is generic, exclude it (respect BANNED_GENERIC).
- Do not include 'cut' instructions in style_cues.
- JSON only.
"""


def parse_analysis(text: str) -> dict[str, Any]:
    """
    Parse model output as a JSON object, best effort.

    Anything that is not a JSON object comes back as ``{"raw": text}``.
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        parsed = None

    if not isinstance(parsed, dict):
        logger.bind(preview=text[:120]).warning("trend_analysis_unparsed")
        return {"raw": text}
    return parsed


async def analyze_trends(
    digest: str,
    client: AsyncOpenAI | None = None,
    config: TrendsConfig | None = None,
) -> dict[str, Any]:
    """
    Ask the language model for entities, meme hooks and style cues.

    Args:
        digest: Numbered digest lines
        client: Optional OpenAI client
        config: Trend digest configuration

    Returns:
        Parsed analysis object, or ``{"raw": text}`` when the reply is not JSON
    """
    settings = get_settings()
    config = config or get_config().trends
    if not client:
        if not settings.openai_api_key:
            raise MissingConfigurationError("OPENAI_API_KEY")
        client = AsyncOpenAI(api_key=settings.openai_api_key)

    response = await client.chat.completions.create(
        model=settings.llm_model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_analysis_prompt(digest)},
        ],
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )

    text = (response.choices[0].message.content or "").strip() if response.choices else ""
    analysis = parse_analysis(text or "{}")

    entities = analysis.get("entities")
    usage = response.usage
    logger.info(
        f"trend_analysis_complete: entities={len(entities) if isinstance(entities, list) else 0} | "
        f"tokens={usage.total_tokens if usage else 'n/a'}"
    )
    return analysis
