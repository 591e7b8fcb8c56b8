"""Video id → chord chart.

:class:`ChartPipeline` runs the four blocking steps in order:

  1. download the audio track with yt-dlp
  2. transcribe it with Whisper
  3. look up the video title and guess the key from it
  4. ask the chat model for a chord chart

Nothing is retried; the first failing step raises.  Only the title lookup is
optional, since the key hint is a nice-to-have.
"""

import logging
import tempfile
import time
from pathlib import Path
from typing import Callable

from .config import Settings
from .exceptions import ConfigError, GuitarGPTError
from .keys import guess_key
from .models import ChartResult
from .services.audio import download_audio
from .services.openai_api import OpenAIClient
from .services.youtube import YouTubeClient

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a music expert. Given the lyrics of a song, generate a chord chart with lyrics. \n"
    "Include chord symbols above the lyrics where they change. Use standard pop/rock guitar voicings.\n"
    "Format the output in a clear, readable way with line breaks between sections."
)


def build_prompt(transcript: str, key: str | None = None) -> str:
    if key:
        return f"Generate a chord chart for the song in the key of {key} with these lyrics:\n\n{transcript}"
    return f"Generate a chord chart for the song with these lyrics:\n\n{transcript}"


def estimate_cost(prompt_tokens: int, completion_tokens: int, settings: Settings) -> float:
    """Return the estimated USD cost of one completion."""
    return (prompt_tokens / 1000) * settings.input_cost_per_1k + (
        completion_tokens / 1000
    ) * settings.output_cost_per_1k


def _ms_since(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class ChartPipeline:
    """Generate a chord chart for one YouTube video.

    The clients are built from *settings* unless passed in.
    """

    def __init__(
        self,
        settings: Settings,
        youtube: YouTubeClient | None = None,
        openai: OpenAIClient | None = None,
        downloader: Callable[..., Path] = download_audio,
    ):
        self.settings = settings
        self.youtube = youtube
        if self.youtube is None and settings.youtube_api_key:
            self.youtube = YouTubeClient(settings.youtube_api_key)
        self.openai = openai
        if self.openai is None and settings.openai_api_key:
            self.openai = OpenAIClient(
                settings.openai_api_key,
                base_url=settings.openai_base_url,
                chat_model=settings.chat_model,
                transcription_model=settings.transcription_model,
            )
        self.downloader = downloader

    def process(self, video_id: str) -> ChartResult:
        if self.openai is None:
            raise ConfigError("OpenAI API key")

        timings: dict[str, int] = {}
        start_all = time.monotonic()

        with tempfile.TemporaryDirectory(prefix="guitargpt-") as tmp:
            audio_path = Path(tmp) / "audio.mp3"

            start = time.monotonic()
            self.downloader(video_id, audio_path, ytdlp=self.settings.ytdlp_path)
            timings["audio_download_ms"] = _ms_since(start)
            logger.info("Downloaded audio for %s in %d ms", video_id, timings["audio_download_ms"])

            start = time.monotonic()
            transcription = self.openai.transcribe(audio_path)
            timings["transcription_ms"] = _ms_since(start)
            logger.info("Transcribed %s in %d ms", video_id, timings["transcription_ms"])

        title = self._video_title(video_id)
        key = guess_key(title)
        if key:
            logger.info("Detected key %s from title %r", key, title)

        start = time.monotonic()
        completion = self.openai.complete(SYSTEM_PROMPT, build_prompt(transcription.text, key))
        timings["gpt_ms"] = _ms_since(start)
        timings["total_ms"] = _ms_since(start_all)

        return ChartResult(
            chord_chart=completion.content,
            transcription=transcription,
            completion=completion,
            video_title=title,
            detected_key=key,
            timings=timings,
            estimated_cost=estimate_cost(
                completion.prompt_tokens, completion.completion_tokens, self.settings
            ),
            credits=self.openai.credits(),
        )

    def _video_title(self, video_id: str) -> str:
        if self.youtube is None:
            logger.warning("No YouTube API key; skipping title lookup for %s", video_id)
            return ""
        try:
            return self.youtube.video_title(video_id)
        except GuitarGPTError as exc:
            logger.warning("Title lookup failed for %s: %s", video_id, exc)
            return ""
