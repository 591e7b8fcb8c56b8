class GuitarGPTError(Exception):
    """Base exception for guitargpt."""


class ConfigError(GuitarGPTError):
    """Raised when a required setting (usually an API key) is missing."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} not configured")


class FetchError(GuitarGPTError):
    """Raised when an HTTP request fails.

    ``status_code`` is 0 when the request never got a response.
    """

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class UpstreamError(GuitarGPTError):
    """Raised when an upstream API answers but the payload is unusable."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Unexpected response from {url}: {reason}")


class DownloadError(GuitarGPTError):
    """Raised when audio extraction for a video fails."""

    def __init__(self, video_id: str, reason: str):
        self.video_id = video_id
        self.reason = reason
        super().__init__(f"Could not download audio for {video_id}: {reason}")
