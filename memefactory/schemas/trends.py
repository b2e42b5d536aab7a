"""Pydantic schemas for the trend digest."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from memefactory.schemas.common import CamelModel

ENTITY_TYPES = (
    "game",
    "franchise_or_show",
    "meme_series",
    "creator_or_channel",
    "challenge_or_format",
    "sound_or_song",
    "topic_or_event",
)


class TrendItem(CamelModel):
    """A popular catalog item, reshaped for brevity."""

    id: str
    title: str = ""
    channel: str = ""
    published_at: str = ""
    views: int = 0
    duration: str = ""
    tags: list[str] = Field(default_factory=list)
    thumb: str = ""
    category_id: str = ""


class TrendParams(CamelModel):
    """Effective query parameters echoed back to the caller."""

    region: str
    max_results: int
    video_category_id: str = ""


class TrendEntity(BaseModel):
    """A named subject extracted from the digest by the language model."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str = "topic_or_event"
    evidence_lines: list[int] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    strength: str = "med"


class TrendAnalysis(BaseModel):
    """Lenient view of the model's analysis; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    entities: list[TrendEntity] = Field(default_factory=list)
    meme_hooks: list[str] = Field(default_factory=list)
    style_cues: list[str] = Field(default_factory=list)


class TrendDigestResponse(CamelModel):
    """Response body for GET /api/trends."""

    fetched_at: datetime
    params: TrendParams
    items: list[TrendItem]
    # Either the parsed model JSON or {"raw": text}
    analysis: dict[str, Any]
