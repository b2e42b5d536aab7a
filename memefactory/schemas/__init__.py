from memefactory.schemas.generation import (
    GenerationResult,
    MediaTask,
    ReferenceImage,
    TaskStatus,
)
from memefactory.schemas.story import StoryItem, StoryRequest, StoryResponse, StorySelection
from memefactory.schemas.trends import (
    TrendAnalysis,
    TrendDigestResponse,
    TrendEntity,
    TrendItem,
    TrendParams,
)

__all__ = [
    "GenerationResult",
    "MediaTask",
    "ReferenceImage",
    "StoryItem",
    "StoryRequest",
    "StoryResponse",
    "StorySelection",
    "TaskStatus",
    "TrendAnalysis",
    "TrendDigestResponse",
    "TrendEntity",
    "TrendItem",
    "TrendParams",
]
