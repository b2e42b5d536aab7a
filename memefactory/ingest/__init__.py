from memefactory.ingest.digest import build_digest, format_digest_line
from memefactory.ingest.youtube import (
    TrendingFetcher,
    clamp_max_results,
    normalize_region,
    simplify_item,
)

__all__ = [
    "TrendingFetcher",
    "build_digest",
    "clamp_max_results",
    "format_digest_line",
    "normalize_region",
    "simplify_item",
]
