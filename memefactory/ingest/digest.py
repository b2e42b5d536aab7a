"""Compact text digest of trend items for the language model."""

from memefactory.schemas.trends import TrendItem


def format_digest_line(index: int, item: TrendItem) -> str:
    """Format one numbered digest line, dropping empty segments."""
    parts = [
        f"{index}. {item.title}",
        f"ch:{item.channel}",
        f"views:{item.views}",
        f"dur:{item.duration}",
        f"tags:{', '.join(item.tags)}" if item.tags else "",
    ]
    return " | ".join(p for p in parts if p)


def build_digest(items: list[TrendItem], limit: int | None = None) -> str:
    """Build a numbered digest (1-based) of at most ``limit`` items."""
    selected = items if limit is None else items[:limit]
    return "\n".join(format_digest_line(i, item) for i, item in enumerate(selected, 1))
