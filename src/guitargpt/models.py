from dataclasses import dataclass, field
from typing import Any, Union

# Shown in place of a blank line so the row keeps its height when rendered.
EMPTY_LINE = "\u00a0"


@dataclass
class ChordLyricPair:
    """A chord line paired with the lyric line directly below it.

    Pairing is positional: ``chords[k]`` sits above ``words[k]``.  The two
    lists may differ in length.
    """

    chords: list[str] = field(default_factory=list)
    words: list[str] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return 2


@dataclass
class SectionHeader:
    """A section label such as "Verse 1" or "Chorus"."""

    text: str

    @property
    def line_count(self) -> int:
        return 1


@dataclass
class PlainLine:
    """Any line that is neither a header nor part of a chord/lyric pair."""

    text: str

    @property
    def line_count(self) -> int:
        return 1


RenderBlock = Union[ChordLyricPair, SectionHeader, PlainLine]


@dataclass
class VideoResult:
    """One hit from a YouTube search."""

    id: str
    title: str
    thumbnail: str = ""
    channel_title: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "thumbnail": self.thumbnail,
            "channelTitle": self.channel_title,
        }


@dataclass
class Transcription:
    text: str
    language: str | None = None
    duration: float | None = None


@dataclass
class Completion:
    content: str
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class ChartResult:
    """Everything one run of the chart pipeline produced."""

    chord_chart: str
    transcription: Transcription
    completion: Completion
    video_title: str = ""
    detected_key: str | None = None
    timings: dict[str, int] = field(default_factory=dict)
    estimated_cost: float = 0.0
    credits: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON payload served by the process endpoint."""
        return {
            "chordChart": self.chord_chart,
            "dev": {
                "timings": dict(self.timings),
                "openai": {
                    "promptTokens": self.completion.prompt_tokens,
                    "completionTokens": self.completion.completion_tokens,
                    "totalTokens": self.completion.total_tokens,
                    "estimatedCost": self.estimated_cost,
                    "credits": self.credits,
                },
                "whisper": {
                    "language": self.transcription.language,
                    "duration": self.transcription.duration,
                },
                "model": self.completion.model,
                "videoTitle": self.video_title,
                "detectedKey": self.detected_key,
            },
        }
