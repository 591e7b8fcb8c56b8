"""Guess a song's key from its video title.

Titles of cover and lesson videos often carry the key: "Jolene (Ab)",
"Hallelujah in C major", "Wonderwall - original key: F#m".  Only the first
match counts.
"""

import re

_KEY_RE = re.compile(
    r"(?:in|key of|original key:?|\()\s*([A-G][#b]?)(?:\s*(major|minor|maj|min|m)?)",
    re.IGNORECASE,
)


def guess_key(title: str) -> str | None:
    """Return the key hinted at in *title*, e.g. ``"E minor"`` or ``"Bb"``.

    Returns ``None`` when the title is empty or carries no key phrase.
    """
    if not title:
        return None
    m = _KEY_RE.search(title)
    if not m:
        return None

    # Only the letter is upper-cased; a flat keeps its lowercase "b".
    note = m.group(1)
    key = note[0].upper() + note[1:].lower()
    mode = (m.group(2) or "").lower()
    if mode.startswith("maj"):
        key += " major"
    elif mode.startswith("min") or mode == "m":
        key += " minor"
    return key
