from memefactory.pipeline.analyzer import analyze_trends, parse_analysis
from memefactory.pipeline.prompt_writer import build_trend_title, write_video_prompt

__all__ = [
    "analyze_trends",
    "build_trend_title",
    "parse_analysis",
    "write_video_prompt",
]
