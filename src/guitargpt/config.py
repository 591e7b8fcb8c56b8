"""Runtime settings.

Build a :class:`Settings` once at the edge (CLI entry point or app factory)
and hand it to whatever needs it.  Nothing else in the package reads the
environment.
"""

import os
from dataclasses import dataclass

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


@dataclass
class Settings:
    youtube_api_key: str | None = None
    openai_api_key: str | None = None
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    chat_model: str = "gpt-4"
    transcription_model: str = "whisper-1"
    ytdlp_path: str = "yt-dlp"
    search_max_results: int = 10

    # GPT-4 (8k context) list prices, USD per 1K tokens
    input_cost_per_1k: float = 0.03
    output_cost_per_1k: float = 0.06

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Read settings from *environ* (default: ``os.environ``).

        Empty variables count as unset.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return env.get(name) or None

        return cls(
            youtube_api_key=get("YOUTUBE_API_KEY"),
            openai_api_key=get("OPENAI_API_KEY"),
            openai_base_url=get("OPENAI_BASE_URL") or DEFAULT_OPENAI_BASE_URL,
            chat_model=get("GUITARGPT_CHAT_MODEL") or cls.chat_model,
            transcription_model=get("GUITARGPT_TRANSCRIPTION_MODEL") or cls.transcription_model,
            ytdlp_path=get("GUITARGPT_YTDLP") or cls.ytdlp_path,
        )
