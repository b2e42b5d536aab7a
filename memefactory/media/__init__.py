"""Keyframe image and video synthesis through Runway."""

from memefactory.media.extract import ASSET_URL_RULES, ExtractionRule, extract_asset_url
from memefactory.media.orchestrator import encode_reference_images, generate_media
from memefactory.media.runway import RunwayClient

__all__ = [
    "ASSET_URL_RULES",
    "ExtractionRule",
    "RunwayClient",
    "encode_reference_images",
    "extract_asset_url",
    "generate_media",
]
