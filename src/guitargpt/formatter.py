"""Turn a generated chord chart into render blocks.

The language model writes charts in the familiar chords-above-lyrics style::

    Verse 1
    Em          G
    Hello darling, how have you been

:func:`format_chart` walks the text once, looking one line ahead, and emits:

  - :class:`~guitargpt.models.ChordLyricPair` for a chord line followed by a
    lyric line (both lines consumed)
  - :class:`~guitargpt.models.SectionHeader` for a section label
  - :class:`~guitargpt.models.PlainLine` for everything else

Chords are paired with words by position (first chord over first word), not
by column.  Column offsets do not survive the trip through the model reliably.
"""

import re
from enum import Enum, auto

from .models import EMPTY_LINE, ChordLyricPair, PlainLine, RenderBlock, SectionHeader

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# One chord symbol: root, optional accidental, optional minor "m", optional
# extension.  "aj7" lets "Cmaj7" parse as C + m + aj7.
_CHORD_TOKEN = r"[A-G][#b]?m?(?:aj7|maj7|sus2|sus4|dim|aug|add9|7|6|9|11|13)?"

# Whole line of chord symbols separated by whitespace.  Always fullmatch()
# so a lyric that merely contains "Am" is not mistaken for a chord line.
CHORD_LINE_RE = re.compile(rf"{_CHORD_TOKEN}(?:\s+{_CHORD_TOKEN})*\s*", re.IGNORECASE)

SECTION_HEADER_RE = re.compile(
    r"^(?:verse|chorus|bridge|intro|outro|pre-chorus|interlude|solo|hook|"
    r"refrain|coda|ending|tag|break)",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# LineType
# ---------------------------------------------------------------------------


class LineType(Enum):
    BLANK = auto()  # empty or whitespace only
    CHORD = auto()  # chord symbols only: Em  G  D/F#
    SECTION = auto()  # Verse 1, Chorus:, Pre-Chorus
    TEXT = auto()  # everything else


def is_chord_line(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and CHORD_LINE_RE.fullmatch(stripped) is not None


def is_section_header(line: str) -> bool:
    return SECTION_HEADER_RE.match(line.strip()) is not None


def classify_line(line: str) -> LineType:
    """Classify a single line of chart text.

    A line that is both a chord line and a section header cannot occur (no
    header keyword parses as a chord), so the order of checks is free.
    """
    stripped = line.strip()
    if not stripped:
        return LineType.BLANK
    if is_chord_line(stripped):
        return LineType.CHORD
    if is_section_header(stripped):
        return LineType.SECTION
    return LineType.TEXT


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------


def split_lines(text: str) -> list[str]:
    """Split chart text into lines.

    Only ``\\n`` ends a line (``\\r\\n`` is accepted).  A trailing newline does
    not add a line, but empty text still counts as one (empty) line so the
    chart always renders at least one row.
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def format_chart(text: str) -> list[RenderBlock]:
    """Return the render blocks for *text*, in source order.

    Never raises: anything unexpected falls through to :class:`PlainLine`.
    Summing ``line_count`` over the result gives ``len(split_lines(text))``.
    """
    lines = split_lines(text)
    blocks: list[RenderBlock] = []

    i = 0
    while i < len(lines):
        current = lines[i].strip()
        following = lines[i + 1].strip() if i + 1 < len(lines) else None

        if classify_line(current) == LineType.CHORD and following and _is_lyric(following):
            blocks.append(ChordLyricPair(chords=current.split(), words=following.split()))
            i += 2
            continue

        if classify_line(current) == LineType.SECTION:
            blocks.append(SectionHeader(text=current))
        else:
            # Includes chord lines with nothing to pair with.
            blocks.append(PlainLine(text=current or EMPTY_LINE))
        i += 1

    return blocks


def _is_lyric(line: str) -> bool:
    return classify_line(line) == LineType.TEXT
