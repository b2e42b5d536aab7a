"""Pydantic schemas for prompt synthesis."""

from pydantic import BaseModel, ConfigDict, Field


class StoryItem(BaseModel):
    # Numeric titles ("2024") arrive as JSON numbers
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str | None = None


class StorySelection(BaseModel):
    """Picks from a trend analysis used to compose the trend title."""

    entities: list[str] = Field(default_factory=list)
    hooks: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)


class StoryRequest(BaseModel):
    """Request body for POST /api/story."""

    item: StoryItem | None = None
    subjects: str | None = None
    selection: StorySelection | None = None


class StoryResponse(BaseModel):
    video_prompt: str
