"""Render blocks from :func:`~guitargpt.formatter.format_chart` for display.

Two targets:

  - :func:`render_text` — monospace text for the terminal or a ``.txt`` file
  - :func:`render_html` — an HTML fragment for the web page

Usage::

    from guitargpt.formatter import format_chart
    from guitargpt.render import render_text
    print(render_text(format_chart(chart)), end="")
"""

import html
from itertools import zip_longest
from typing import Iterable

from .models import EMPTY_LINE, ChordLyricPair, PlainLine, RenderBlock, SectionHeader


def render_text(blocks: Iterable[RenderBlock]) -> str:
    """Return plain text, one row per line (two for a chord/lyric pair).

    Each chord and the word under it share a cell as wide as the longer of
    the two, so chords stay over their words.  The result ends with a newline.
    """
    rows: list[str] = []
    for block in blocks:
        if isinstance(block, ChordLyricPair):
            rows.extend(_pair_rows(block))
        elif isinstance(block, SectionHeader):
            rows.append(block.text)
        else:
            rows.append(_plain_text(block))
    return "\n".join(rows) + "\n"


def render_html(blocks: Iterable[RenderBlock]) -> str:
    """Return an HTML fragment; every piece of chart text is escaped."""
    parts: list[str] = []
    for block in blocks:
        if isinstance(block, ChordLyricPair):
            chords = "".join(f'<span class="chord">{html.escape(c)}</span>' for c in block.chords)
            words = "".join(f'<span class="word">{html.escape(w)}</span>' for w in block.words)
            parts.append(
                '<div class="pair">'
                f'<div class="chords">{chords}</div>'
                f'<div class="words">{words}</div>'
                "</div>"
            )
        elif isinstance(block, SectionHeader):
            parts.append(f'<div class="section"><strong>{html.escape(block.text)}</strong></div>')
        else:
            text = _plain_text(block)
            parts.append(f'<div class="line">{html.escape(text) if text else "&nbsp;"}</div>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _plain_text(block: PlainLine) -> str:
    return "" if block.text == EMPTY_LINE else block.text


def _pair_rows(pair: ChordLyricPair) -> list[str]:
    chord_cells: list[str] = []
    word_cells: list[str] = []
    for chord, word in zip_longest(pair.chords, pair.words, fillvalue=""):
        width = max(len(chord), len(word))
        chord_cells.append(chord.ljust(width))
        word_cells.append(word.ljust(width))
    return [" ".join(chord_cells).rstrip(), " ".join(word_cells).rstrip()]
