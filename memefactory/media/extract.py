"""Asset URL extraction from media task payloads.

Task payloads have changed shape across API versions. Each known shape is an
``ExtractionRule``: a path of dict keys and list indexes that must resolve to
a non-empty string. Rules are tried in order and the first match wins, so
supporting a new shape means appending a rule.
"""

from dataclasses import dataclass
from typing import Any

PathStep = str | int


@dataclass(frozen=True)
class ExtractionRule:
    """A named path into a task payload."""

    name: str
    path: tuple[PathStep, ...]

    def resolve(self, payload: Any) -> str | None:
        node = payload
        for step in self.path:
            if isinstance(step, int):
                if not isinstance(node, list) or len(node) <= step:
                    return None
            elif not isinstance(node, dict) or step not in node:
                return None
            node = node[step]
        if isinstance(node, str) and node:
            return node
        return None


ASSET_URL_RULES: tuple[ExtractionRule, ...] = (
    ExtractionRule("output_string", ("output",)),
    ExtractionRule("output_list_string", ("output", 0)),
    ExtractionRule("output_list_url", ("output", 0, "url")),
    ExtractionRule("outputs_asset_url", ("outputs", 0, "asset_url")),
    ExtractionRule("outputs_url", ("outputs", 0, "url")),
    ExtractionRule("assets_image", ("assets", "image")),
    ExtractionRule("assets_video", ("assets", "video")),
    ExtractionRule("result_image", ("result", "image")),
    ExtractionRule("result_video", ("result", "video")),
)


def match_asset_url(
    task: Any,
    rules: tuple[ExtractionRule, ...] = ASSET_URL_RULES,
) -> tuple[ExtractionRule, str] | None:
    """Return the first matching rule and its URL, or None."""
    for rule in rules:
        url = rule.resolve(task)
        if url:
            return rule, url
    return None


def extract_asset_url(
    task: Any,
    rules: tuple[ExtractionRule, ...] = ASSET_URL_RULES,
) -> str | None:
    """Extract an output URL from a task payload of any known shape."""
    match = match_asset_url(task, rules)
    return match[1] if match else None
