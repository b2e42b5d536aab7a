"""Pydantic schemas for media generation."""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from memefactory.schemas.common import CamelModel


class TaskStatus(str, Enum):
    """Lifecycle of a Runway task."""

    PENDING = "PENDING"
    THROTTLED = "THROTTLED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = (TaskStatus.SUCCEEDED, TaskStatus.FAILED, TaskStatus.CANCELLED)


class ReferenceImage(BaseModel):
    """An uploaded image inlined as a data URI."""

    uri: str
    tag: str


class MediaTask(BaseModel):
    """Snapshot of a provider task as returned by GET /v1/tasks/{id}."""

    id: str
    # Plain str: unknown statuses are non-terminal
    status: str
    raw: dict[str, Any]

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def succeeded(self) -> bool:
        return self.status == TaskStatus.SUCCEEDED


class GenerationResult(CamelModel):
    """Keyframe and video URLs for one generation request."""

    image_url: str
    video_url: str
