"""
Meme Factory CLI - run the trend-to-video chain from a terminal.

Usage:
    memefactory --help                       Show all commands
    memefactory trends --region US           Fetch and analyze trending videos
    memefactory story "Minecraft" -s cats    Write one video prompt
    memefactory generate "a cat skateboard"  Render a keyframe and video
    memefactory run --region GB              Whole chain, first hook wins
    memefactory serve --reload               Start the API server
"""

import asyncio
import json
from pathlib import Path

import typer

from memefactory.core.errors import MemeFactoryError

app = typer.Typer(
    name="memefactory",
    help="Meme Factory CLI - trending topics to short meme videos",
    no_args_is_help=True,
)


# --- Step printer helpers ---


def _print_step(step_num: int, total: int, message: str) -> None:
    """Print a step progress message."""
    typer.echo(f"\n[{step_num}/{total}] {message}...")


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_warning(message: str) -> None:
    """Print a warning message."""
    typer.echo(f"  ⚠️ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


def _run_or_exit(coro) -> None:
    """Run a coroutine, turning request errors into a non-zero exit."""
    try:
        asyncio.run(coro)
    except MemeFactoryError as e:
        _print_error(f"{type(e).__name__}: {e.message}")
        raise typer.Exit(1) from e


async def _fetch_analysis(region: str | None, max_results: str | None, category_id: str):
    from memefactory.config import get_config
    from memefactory.ingest.digest import build_digest
    from memefactory.ingest.youtube import TrendingFetcher, clamp_max_results, normalize_region
    from memefactory.pipeline.analyzer import analyze_trends

    config = get_config().trends
    effective_region = normalize_region(region, config)
    effective_max = clamp_max_results(max_results, config)

    items = await TrendingFetcher().fetch(effective_region, effective_max, category_id)
    analysis = await analyze_trends(build_digest(items, effective_max))
    return items, analysis


def _parse_picks(analysis: dict):
    """Lenient TrendAnalysis view, or None for raw or off-schema output."""
    from pydantic import ValidationError

    from memefactory.schemas.trends import TrendAnalysis

    if "raw" in analysis:
        return None
    try:
        return TrendAnalysis.model_validate(analysis)
    except ValidationError:
        return None


@app.command()
def trends(
    region: str | None = typer.Option(None, "--region", "-r", help="ISO region code"),
    max_results: str | None = typer.Option(None, "--max", "-m", help="Number of videos (1-30)"),
    category_id: str = typer.Option("", "--category", "-c", help="YouTube category id"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw analysis JSON"),
):
    """Fetch trending videos and print the model's analysis."""
    from memefactory.core.logging import setup_logging

    setup_logging()

    async def run():
        items, analysis = await _fetch_analysis(region, max_results, category_id)
        if as_json:
            typer.echo(json.dumps(analysis, indent=2))
            return

        typer.echo(f"\n📈 {len(items)} trending videos")
        parsed = _parse_picks(analysis)
        if parsed is None:
            _print_warning("Model output did not match the analysis schema:")
            typer.echo(analysis.get("raw") or json.dumps(analysis, indent=2))
            return

        typer.echo("\nEntities:")
        for entity in parsed.entities:
            typer.echo(f"  - {entity.name} ({entity.type}, {entity.strength})")
        typer.echo("\nMeme hooks:")
        for hook in parsed.meme_hooks:
            typer.echo(f"  - {hook}")
        typer.echo("\nStyle cues:")
        for cue in parsed.style_cues:
            typer.echo(f"  - {cue}")

    _run_or_exit(run())


@app.command()
def story(
    title: str = typer.Argument("", help="Trend title; built from --entity/--hook/--style if empty"),
    subjects: str | None = typer.Option(None, "--subjects", "-s", help="Free-text subject hints"),
    entity: list[str] = typer.Option([], "--entity", "-e", help="Picked entity (max 3)"),
    hook: list[str] = typer.Option([], "--hook", help="Picked meme hook (max 1)"),
    style: list[str] = typer.Option([], "--style", help="Picked style cue (max 2)"),
):
    """Write one video prompt for a trend."""
    from memefactory.core.logging import setup_logging
    from memefactory.pipeline.prompt_writer import build_trend_title, write_video_prompt

    setup_logging()
    trend_title = title.strip() or build_trend_title(entity, hook, style)

    async def run():
        video_prompt = await write_video_prompt(trend_title, subjects)
        typer.echo(video_prompt)

    _run_or_exit(run())


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Video prompt"),
    image: list[Path] = typer.Option(
        [], "--image", "-i", exists=True, dir_okay=False, help="Reference image (max 3)"
    ),
):
    """Render a prompt into a keyframe image and a short video."""
    import mimetypes

    from memefactory.core.logging import setup_logging
    from memefactory.media.orchestrator import encode_reference_images, generate_media

    setup_logging()
    uploads = [(path.read_bytes(), mimetypes.guess_type(path.name)[0]) for path in image]
    references = encode_reference_images(uploads)
    if len(image) > len(references):
        _print_warning(f"Using only the first {len(references)} reference images")

    async def run():
        result = await generate_media(prompt, references)
        _print_success(f"Image: {result.image_url}")
        _print_success(f"Video: {result.video_url}")

    _run_or_exit(run())


@app.command(name="run")
def run_chain(
    region: str | None = typer.Option(None, "--region", "-r", help="ISO region code"),
    max_results: str | None = typer.Option(None, "--max", "-m", help="Number of videos (1-30)"),
    subjects: str | None = typer.Option(None, "--subjects", "-s", help="Free-text subject hints"),
):
    """Run the whole chain: trends, prompt, keyframe, video."""
    from memefactory.core.logging import setup_logging
    from memefactory.media.orchestrator import generate_media
    from memefactory.pipeline.prompt_writer import build_trend_title, write_video_prompt

    setup_logging()

    async def run():
        _print_step(1, 3, "Analyzing trends")
        items, analysis = await _fetch_analysis(region, max_results, "")
        parsed = _parse_picks(analysis)
        if parsed is None:
            _print_warning("Analysis unusable, using the top video title")
            trend_title = (items[0].title if items else "") or build_trend_title()
        else:
            trend_title = build_trend_title(
                [e.name for e in parsed.entities],
                parsed.meme_hooks,
                parsed.style_cues,
            )
        _print_success(trend_title)

        _print_step(2, 3, "Writing video prompt")
        video_prompt = await write_video_prompt(trend_title, subjects)
        _print_success(video_prompt)

        _print_step(3, 3, "Rendering keyframe and video")
        result = await generate_media(video_prompt)
        _print_success(f"Image: {result.image_url}")
        _print_success(f"Video: {result.video_url}")

    _run_or_exit(run())


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable hot reload"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
):
    """Start the API server."""
    import subprocess

    cmd = ["uvicorn", "memefactory.main:app", "--host", "0.0.0.0", "--port", str(port)]
    if reload:
        cmd.append("--reload")

    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    app()
