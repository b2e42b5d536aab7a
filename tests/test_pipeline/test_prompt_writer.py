"""Tests for video prompt synthesis."""

import pytest

from memefactory.config import StoryConfig
from memefactory.core.errors import EmptyGenerationError
from memefactory.pipeline.prompt_writer import (
    build_story_prompt,
    build_trend_title,
    clean_prompt,
    write_video_prompt,
)

pytestmark = pytest.mark.asyncio

CONFIG = StoryConfig({})


class TestBuildTrendTitle:
    async def test_all_parts(self):
        title = build_trend_title(["Minecraft", "MrBeast"], ["POV: hug"], ["VHS grain"], CONFIG)
        assert title == "Entities: Minecraft, MrBeast | Hook: POV: hug | Style: VHS grain"

    async def test_limits(self):
        """At most 3 entities, 1 hook and 2 styles are kept."""
        title = build_trend_title(
            ["a", "b", "c", "d"], ["h1", "h2"], ["s1", "s2", "s3"], CONFIG
        )
        assert title == "Entities: a, b, c | Hook: h1 | Style: s1, s2"

    async def test_empty_selection(self):
        assert build_trend_title([], [], [], CONFIG) == "Trending meme"


class TestCleanPrompt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("  A cat skateboards.  ", "A cat skateboards."),
            ('"A cat skateboards."', "A cat skateboards."),
            ("“A cat skateboards.”", "A cat skateboards."),
            ("'\"nested\"'", "nested"),
            (None, ""),
            ('""', ""),
        ],
    )
    async def test_clean(self, raw, expected):
        assert clean_prompt(raw) == expected


class TestWriteVideoPrompt:
    async def test_returns_prompt(self, llm_factory):
        client = llm_factory('  "Handheld whip-pan onto a cat kickflipping."  ')

        prompt = await write_video_prompt("Minecraft", "cats", client=client, config=CONFIG)

        assert prompt == "Handheld whip-pan onto a cat kickflipping."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.9
        user = kwargs["messages"][1]["content"]
        assert 'Trend: "Minecraft"' in user
        assert "Subjects: cats" in user

    async def test_no_subjects(self):
        assert "Subjects: none." in build_story_prompt("Trending meme", None)

    @pytest.mark.parametrize("content", [None, "", "   "])
    async def test_empty_generation(self, llm_factory, content):
        with pytest.raises(EmptyGenerationError) as exc_info:
            await write_video_prompt("Minecraft", client=llm_factory(content))

        assert exc_info.value.message == "No prompt generated"
        assert exc_info.value.status_code == 500
