"""Tests for digest formatting."""

from memefactory.ingest.digest import build_digest, format_digest_line
from memefactory.schemas.trends import TrendItem


def _item(title: str, tags: list[str] | None = None) -> TrendItem:
    return TrendItem(
        id=title,
        title=title,
        channel="Chan",
        views=42,
        duration="PT1M",
        tags=tags or [],
    )


class TestDigest:
    def test_line_with_tags(self):
        line = format_digest_line(3, _item("Among Us", ["sus", "impostor"]))
        assert line == "3. Among Us | ch:Chan | views:42 | dur:PT1M | tags:sus, impostor"

    def test_line_without_tags(self):
        """The tags segment is dropped when empty."""
        line = format_digest_line(1, _item("Warzone"))
        assert line == "1. Warzone | ch:Chan | views:42 | dur:PT1M"

    def test_numbering_and_limit(self):
        digest = build_digest([_item("A"), _item("B"), _item("C")], limit=2)

        lines = digest.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("1. A")
        assert lines[1].startswith("2. B")

    def test_empty(self):
        assert build_digest([]) == ""
