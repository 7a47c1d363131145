"""
Text normalization shared by every analyzer.

Turns markup into plain text, splits it into words and sentences, and
counts syllables with the classic vowel-group heuristic. None of these
functions raise on empty or malformed input; they return empty results.
"""

import html
import re
from typing import Iterable

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_ANCHOR_OPEN_RE = re.compile(r"<a[\s>]", re.IGNORECASE)
_ANCHOR_CLOSE_RE = re.compile(r"</a\s*>", re.IGNORECASE)
_NON_WORD_RE = re.compile(r"[^\w\s]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y_RE = re.compile(r"^y")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")

MIN_TOKEN_LENGTH = 3


def strip_markup(markup: str) -> str:
    """
    Remove tags, scripts and styles from markup and collapse whitespace.

    Args:
        markup: HTML (or plain text) content.

    Returns:
        Plain text with single spaces between words.
    """
    text, _ = _flatten_markup(markup)
    return text


def strip_markup_with_link_spans(markup: str) -> tuple[str, list[tuple[int, int]]]:
    """
    Strip markup and report which parts of the text were already linked.

    Args:
        markup: HTML content.

    Returns:
        Tuple of (plain text, list of (start, end) offsets into the plain text
        that were inside <a> elements). The plain text is identical to
        strip_markup(markup).
    """
    text, flags = _flatten_markup(markup)

    spans: list[tuple[int, int]] = []
    start = None
    for index, inside in enumerate(flags):
        if inside and start is None:
            start = index
        elif not inside and start is not None:
            spans.append((start, index))
            start = None
    if start is not None:
        spans.append((start, len(flags)))

    return text, spans


def _flatten_markup(markup: str) -> tuple[str, list[bool]]:
    """Plain text plus a per-character flag marking anchor text."""
    if not markup:
        return "", []

    source = _SCRIPT_STYLE_RE.sub(" ", markup)

    # (text, inside_anchor) chunks in document order
    pieces: list[tuple[str, bool]] = []
    depth = 0
    cursor = 0
    for match in _TAG_RE.finditer(source):
        if match.start() > cursor:
            pieces.append((html.unescape(source[cursor:match.start()]), depth > 0))
        tag = match.group(0)
        if _ANCHOR_OPEN_RE.match(tag) and not tag.endswith("/>"):
            depth += 1
        elif _ANCHOR_CLOSE_RE.match(tag):
            depth = max(0, depth - 1)
        pieces.append((" ", False))
        cursor = match.end()
    if cursor < len(source):
        pieces.append((html.unescape(source[cursor:]), depth > 0))

    chars: list[str] = []
    flags: list[bool] = []
    pending_space = False
    for chunk, inside in pieces:
        for ch in chunk:
            if ch.isspace():
                pending_space = bool(chars)
                continue
            if pending_space:
                chars.append(" ")
                flags.append(inside and flags[-1])
                pending_space = False
            chars.append(ch)
            flags.append(inside)

    return "".join(chars), flags


def tokenize(text: str) -> list[str]:
    """
    Split plain text into lowercase word tokens.

    Punctuation becomes whitespace and tokens shorter than three
    characters are dropped.
    """
    if not text:
        return []
    cleaned = _NON_WORD_RE.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def split_sentences(text: str) -> list[str]:
    """Split plain text on runs of sentence punctuation, dropping empty fragments."""
    if not text:
        return []
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def count_syllables(word: str) -> int:
    """
    Estimate the number of syllables in a word.

    Words of three letters or fewer count as one syllable. Otherwise a
    silent trailing e/ed/es and a leading y are removed before counting
    vowel groups. Always returns at least 1.
    """
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = _SILENT_SUFFIX_RE.sub("", word)
    word = _LEADING_Y_RE.sub("", word)

    return len(_VOWEL_GROUP_RE.findall(word)) or 1


def count_total_syllables(words: Iterable[str]) -> int:
    """Sum of count_syllables over a word sequence."""
    return sum(count_syllables(word) for word in words)
