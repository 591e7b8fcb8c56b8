"""Client for the OpenAI HTTP API.

Talks to three endpoints directly over httpx:

    POST /audio/transcriptions          → lyrics transcript (Whisper)
    POST /chat/completions              → the chord chart
    GET  /dashboard/billing/credit_grants → remaining credit, informational
"""

import logging
from pathlib import Path

import httpx

from ..config import DEFAULT_OPENAI_BASE_URL
from ..exceptions import FetchError, UpstreamError
from ..models import Completion, Transcription

logger = logging.getLogger(__name__)

CREDITS_UNAVAILABLE = {"error": "Could not fetch OpenAI credits"}


class OpenAIClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        chat_model: str = "gpt-4",
        transcription_model: str = "whisper-1",
        http: httpx.Client | None = None,
        timeout: float = 300,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.chat_model = chat_model
        self.transcription_model = transcription_model
        self.http = http
        self.timeout = timeout

    @property
    def _auth(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _send(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}{path}"
        try:
            resp = (self.http or httpx).request(
                method, url, headers=self._auth, timeout=self.timeout, **kwargs
            )
        except httpx.RequestError as exc:
            raise FetchError(url, 0) from exc
        if resp.status_code != 200:
            logger.debug("OpenAI %s %s -> %s: %s", method, path, resp.status_code, resp.text[:500])
            raise FetchError(url, resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(url, "response is not JSON") from exc

    def transcribe(self, audio_path: Path) -> Transcription:
        """Transcribe an MP3 file.

        Asks for ``verbose_json`` so the detected language and duration come
        back alongside the text.
        """
        with open(audio_path, "rb") as fh:
            data = self._send(
                "POST",
                "/audio/transcriptions",
                files={"file": ("audio.mp3", fh, "audio/mpeg")},
                data={"model": self.transcription_model, "response_format": "verbose_json"},
            )
        if "text" not in data:
            raise UpstreamError(f"{self.base_url}/audio/transcriptions", "no text in transcription")
        return Transcription(
            text=data["text"],
            language=data.get("language"),
            duration=data.get("duration"),
        )

    def complete(self, system_prompt: str, user_prompt: str) -> Completion:
        payload = {
            "model": self.chat_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        data = self._send("POST", "/chat/completions", json=payload)
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamError(f"{self.base_url}/chat/completions", "no choices in completion") from exc

        usage = data.get("usage") or {}
        return Completion(
            content=content or "",
            model=data.get("model", self.chat_model),
            prompt_tokens=usage.get("prompt_tokens") or 0,
            completion_tokens=usage.get("completion_tokens") or 0,
            total_tokens=usage.get("total_tokens") or 0,
        )

    def credits(self) -> dict:
        """Return the account's credit grants, or an error marker.

        The billing endpoint is undocumented and often refuses API keys, so a
        failure here is expected and never propagates.
        """
        try:
            return self._send("GET", "/dashboard/billing/credit_grants")
        except (FetchError, UpstreamError) as exc:
            logger.info("Credit lookup failed: %s", exc)
            return dict(CREDITS_UNAVAILABLE)
