"""Audio extraction with the ``yt-dlp`` command-line tool."""

import logging
import subprocess
from pathlib import Path

from ..exceptions import DownloadError
from .youtube import WATCH_URL

logger = logging.getLogger(__name__)


def ytdlp_command(video_id: str, dest: Path, ytdlp: str = "yt-dlp") -> list[str]:
    return [
        ytdlp,
        "-f", "bestaudio",
        "--extract-audio",
        "--audio-format", "mp3",
        "-o", str(dest),
        WATCH_URL.format(video_id=video_id),
    ]


def download_audio(video_id: str, dest: Path, ytdlp: str = "yt-dlp") -> Path:
    """Download the audio track of *video_id* as MP3 to *dest*.

    Raises DownloadError if yt-dlp is missing or exits nonzero.
    """
    cmd = ytdlp_command(video_id, dest, ytdlp)
    logger.debug("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, errors="ignore")
    except FileNotFoundError as exc:
        raise DownloadError(video_id, f"{ytdlp} not found on PATH") from exc
    if proc.returncode != 0:
        raise DownloadError(video_id, (proc.stderr or proc.stdout or "").strip() or f"exit {proc.returncode}")
    return Path(dest)
