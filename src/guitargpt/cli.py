import json
import logging
import re
import sys
from pathlib import Path

import click

from .config import Settings
from .exceptions import ConfigError, DownloadError, FetchError, GuitarGPTError
from .formatter import format_chart
from .keys import guess_key
from .pipeline import ChartPipeline
from .render import render_html, render_text
from .services.youtube import YouTubeClient


def _slugify(text: str) -> str:
    """Convert a string to a lowercase hyphenated slug suitable for filenames."""
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)   # drop punctuation
    text = re.sub(r"[\s_]+", "-", text)     # spaces/underscores → hyphens
    text = re.sub(r"-{2,}", "-", text)      # collapse multiple hyphens
    return text.strip("-")


def _default_filename(title: str, video_id: str) -> str:
    return f"{_slugify(title) or video_id}.txt"


def _fail(exc: GuitarGPTError) -> None:
    msg = f"Error: {exc}"
    if isinstance(exc, FetchError) and exc.status_code in (401, 403):
        msg += " (check your API key)"
    if isinstance(exc, DownloadError) and "not found" in exc.reason:
        msg += " (install yt-dlp or pass --ytdlp)"
    click.echo(msg, err=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Generate guitar chord charts from YouTube songs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Settings.from_env()


@main.command()
@click.argument("title")
def key(title: str) -> None:
    """Guess the key of a song from its video TITLE."""
    detected = guess_key(title)
    if detected is None:
        click.echo("No key found", err=True)
        sys.exit(1)
    click.echo(detected)


@main.command("format")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--html", "as_html", is_flag=True, default=False, help="Emit an HTML fragment.")
def format_cmd(source, as_html: bool) -> None:
    """Lay out chord chart text from SOURCE (default: stdin)."""
    blocks = format_chart(source.read())
    if as_html:
        click.echo(render_html(blocks))
    else:
        click.echo(render_text(blocks), nl=False)


@main.command()
@click.argument("query")
@click.option("--max-results", type=int, default=None,
              help="Number of videos to list (default: the configured limit, 10).")
@click.option("--youtube-key", envvar="YOUTUBE_API_KEY", default=None, metavar="KEY",
              help="YouTube Data API key (default: $YOUTUBE_API_KEY).")
@click.pass_obj
def search(settings: Settings, query: str, max_results: int | None, youtube_key: str | None) -> None:
    """Search YouTube for QUERY and list matching videos."""
    if not youtube_key:
        _fail(ConfigError("YouTube API key"))
    try:
        results = YouTubeClient(youtube_key).search(
            query, max_results=max_results or settings.search_max_results
        )
    except GuitarGPTError as exc:
        _fail(exc)

    if not results:
        click.echo("No results.")
        return
    for video in results:
        click.echo(f"{video.id}  {video.title} ({video.channel_title})")


@main.command()
@click.argument("video_id")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: <title>.txt)")
@click.option("--stdout", is_flag=True, default=False,
              help="Print to stdout instead of writing a file.")
@click.option("--raw", is_flag=True, default=False,
              help="Write the model's chart text without re-laying it out.")
@click.option("--dev", is_flag=True, default=False,
              help="Print timings, token usage and cost to stderr.")
@click.option("--ytdlp", default=None, metavar="PATH", help="yt-dlp executable to use.")
@click.pass_obj
def chart(settings: Settings, video_id: str, output_path: str | None, stdout: bool,
          raw: bool, dev: bool, ytdlp: str | None) -> None:
    """Download, transcribe and chart the YouTube video VIDEO_ID."""
    if ytdlp:
        settings.ytdlp_path = ytdlp

    try:
        result = ChartPipeline(settings).process(video_id)
    except GuitarGPTError as exc:
        _fail(exc)

    text = result.chord_chart if raw else render_text(format_chart(result.chord_chart))
    if dev:
        click.echo(json.dumps(result.to_dict()["dev"], indent=2), err=True)

    if stdout:
        click.echo(text, nl=False)
        return

    dest = Path(output_path) if output_path else Path(_default_filename(result.video_title, video_id))
    dest.write_text(text, encoding="utf-8")
    click.echo(f"Written to {dest}")


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True)
@click.pass_obj
def serve(settings: Settings, host: str, port: int) -> None:
    """Run the web app."""
    import uvicorn

    from .web import create_app

    uvicorn.run(create_app(settings), host=host, port=port)
