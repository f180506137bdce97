"""Terminal text utilities: ANSI handling, width measurement, hard wrapping.

Provides functions for measuring the displayed width of cell text, cutting
text into fixed-width fragments with ANSI codes preserved, and padding
fragments to an exact width.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"        # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC
)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------

def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (multi-codepoint, contains VS16 U+FE0F, ZWJ sequences, etc.) -> 2
    3. Otherwise delegate to wcwidth for the first meaningful codepoint.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    codepoints = list(g)
    for ch in codepoints:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first_cp = ord(codepoints[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(codepoints[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(codepoints[0]), 0)


def _cluster_width(g: str, char_length: Mapping[str, int] | None) -> int:
    if char_length and g in char_length:
        return char_length[g]
    return _grapheme_width(g)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _STRIP_RE.sub("", text)


def visible_width(text: str, char_length: Mapping[str, int] | None = None) -> int:
    """Calculate the number of terminal cells *text* occupies.

    * Strips ANSI escape sequences.
    * Uses a fast ASCII path when possible.
    * *char_length* overrides the width of specific characters (for emoji
      or symbols the terminal renders wider than Unicode says).
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    if stripped.isascii() and stripped.isprintable():
        if not char_length:
            return len(stripped)
        return sum(char_length.get(ch, 1) for ch in stripped)

    if char_length:
        return sum(_cluster_width(g, char_length) for g in grapheme.graphemes(stripped))

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += _grapheme_width(g)

    return _cache_width(stripped, total)


def split_lines(text: str) -> list[str]:
    """Split *text* into physical lines on any line break."""
    return _LINE_BREAK_RE.split(text)


def max_line_width(text: str, char_length: Mapping[str, int] | None = None) -> int:
    """Return the widest physical line of *text*."""
    return max(visible_width(line, char_length) for line in split_lines(text))


# ---------------------------------------------------------------------------
# extract_ansi_code
# ---------------------------------------------------------------------------

def extract_ansi_code(text: str, pos: int) -> tuple[str, int] | None:
    """Extract an ANSI escape sequence starting at *pos* in *text*.

    Returns ``(code, length)`` where *code* is the full escape sequence string
    and *length* is the number of characters consumed, or ``None`` if there is
    no escape sequence at *pos*.
    """
    if pos + 1 >= len(text) or text[pos] != "\x1b":
        return None

    next_ch = text[pos + 1]

    # CSI: ESC[ <params> <final>
    if next_ch == "[":
        i = pos + 2
        while i < len(text):
            ch = text[i]
            if ch in "mGKHJ":
                code = text[pos : i + 1]
                return (code, len(code))
            if ch.isdigit() or ch == ";":
                i += 1
                continue
            break
        return None

    # OSC / APC: ESC] or ESC_ ... (BEL | ESC\)
    if next_ch in "]_":
        i = pos + 2
        while i < len(text):
            ch = text[i]
            if ch == "\x07":
                code = text[pos : i + 1]
                return (code, len(code))
            if ch == "\x1b" and i + 1 < len(text) and text[i + 1] == "\\":
                code = text[pos : i + 2]
                return (code, len(code))
            i += 1
        return None

    return None


def _tokenize(text: str) -> list[tuple[str, bool]]:
    """Split *text* into ``(token, is_ansi)`` pairs of codes and graphemes."""
    tokens: list[tuple[str, bool]] = []
    plain: list[str] = []
    i = 0

    def flush() -> None:
        if plain:
            tokens.extend((g, False) for g in grapheme.graphemes("".join(plain)))
            plain.clear()

    while i < len(text):
        extracted = extract_ansi_code(text, i)
        if extracted is not None:
            flush()
            code, length = extracted
            tokens.append((code, True))
            i += length
            continue
        plain.append(text[i])
        i += 1

    flush()
    return tokens


# ---------------------------------------------------------------------------
# split_to_width
# ---------------------------------------------------------------------------

def split_to_width(
    text: str,
    width: int,
    char_length: Mapping[str, int] | None = None,
) -> list[str]:
    """Hard-wrap a single physical line into fragments of *width* cells.

    Breaks fall exactly at the width boundary, mid-word if need be, so that
    joining the fragments reproduces *text*. A wide character that does not
    fit in the remaining cells moves to the next fragment; one that is wider
    than *width* on its own occupies a fragment by itself. ANSI codes are
    kept in place and count as zero width.
    """
    if width <= 0 or visible_width(text, char_length) <= width:
        return [text]

    fragments: list[str] = []
    current: list[str] = []
    current_width = 0

    for token, is_ansi in _tokenize(text):
        if is_ansi:
            current.append(token)
            continue

        w = _cluster_width(token, char_length)
        if current_width + w > width and current_width > 0:
            fragments.append("".join(current))
            current = []
            current_width = 0

        current.append(token)
        current_width += w

    if current or not fragments:
        fragments.append("".join(current))

    return fragments


# ---------------------------------------------------------------------------
# pad_to_width
# ---------------------------------------------------------------------------

def pad_to_width(
    text: str,
    width: int,
    alignment: str = "right",
    char_length: Mapping[str, int] | None = None,
) -> str:
    """Pad *text* with spaces to exactly *width* displayed cells.

    ``left`` pads on the right, ``right`` pads on the left and ``center``
    splits the padding with any odd remainder on the right.
    """
    missing = max(0, width - visible_width(text, char_length))
    if alignment == "left":
        return text + " " * missing
    if alignment == "center":
        left = missing // 2
        return " " * left + text + " " * (missing - left)
    return " " * missing + text
