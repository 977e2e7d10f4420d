"""Text signal extraction for quality scoring.

Content arrives as plain text or light markdown. Counting is regex based so
that the same text always yields the same signals.
"""

import re
from collections.abc import Iterable

from arena_engine.quality.models import TextSignals


_WORD_PATTERN = re.compile(r"[^\W_]+(?:['’-][^\W_]+)*")
_SENTENCE_BOUNDARY = re.compile(r"[.!?]+(?:\s+|$)|\n\s*\n")
_HEADING_PATTERN = re.compile(r"^[ \t]{0,3}#{1,6}[ \t]+\S", re.MULTILINE)
_MARKDOWN_LINK_PATTERN = re.compile(r"\[[^\]]+\]\((?:https?://|/)[^)\s]+\)")
_BARE_URL_PATTERN = re.compile(r"(?<!\()https?://[^\s)\]]+")
_NUMERIC_CITATION_PATTERN = re.compile(r"\[\d+(?:\s*[,–-]\s*\d+)*\]")


def _compile_marker_pattern(marker: str) -> re.Pattern[str]:
    """Compile an opinion marker into a whole-word, case-insensitive pattern.

    Multi-word phrases tolerate any run of whitespace between words.

    Args:
        marker: Word or phrase from the lexicon.

    Returns:
        Compiled regex pattern.
    """
    phrase = r"\s+".join(re.escape(word) for word in marker.split())
    return re.compile(rf"\b{phrase}\b", re.IGNORECASE)


class OpinionLexicon:
    """Counts opinion markers using pre-compiled patterns."""

    def __init__(self, markers: Iterable[str]) -> None:
        """Initialize the lexicon.

        Args:
            markers: Words and phrases signalling opinion.
        """
        self._markers = tuple(dict.fromkeys(m.strip().lower() for m in markers))
        self._patterns = [_compile_marker_pattern(m) for m in self._markers]

    @property
    def markers(self) -> tuple[str, ...]:
        """Get the normalized, de-duplicated markers."""
        return self._markers

    def count(self, text: str) -> int:
        """Count every occurrence of every marker in the text."""
        return sum(len(pattern.findall(text)) for pattern in self._patterns)

    def count_by_marker(self, text: str) -> dict[str, int]:
        """Count occurrences per marker, omitting markers that never occur."""
        counts = {
            marker: len(pattern.findall(text))
            for marker, pattern in zip(self._markers, self._patterns, strict=True)
        }
        return {marker: n for marker, n in counts.items() if n}


def count_words(text: str) -> int:
    """Count word tokens (letters/digits, allowing inner apostrophes/hyphens)."""
    return len(_WORD_PATTERN.findall(text))


def count_sentences(text: str) -> int:
    """Count sentences as non-empty segments between terminators.

    A trailing fragment without a terminator still counts as a sentence.
    """
    segments = _SENTENCE_BOUNDARY.split(text)
    return sum(1 for segment in segments if _WORD_PATTERN.search(segment))


def count_headings(text: str) -> int:
    """Count markdown ATX headings."""
    return len(_HEADING_PATTERN.findall(text))


def count_references(text: str) -> int:
    """Count markdown links, bare URLs and bracketed numeric citations."""
    return (
        len(_MARKDOWN_LINK_PATTERN.findall(text))
        + len(_BARE_URL_PATTERN.findall(text))
        + len(_NUMERIC_CITATION_PATTERN.findall(text))
    )


def extract_signals(text: str, lexicon: OpinionLexicon) -> TextSignals:
    """Extract all structural counts from content text.

    Args:
        text: Content text.
        lexicon: Opinion lexicon.

    Returns:
        TextSignals for the text.
    """
    return TextSignals(
        word_count=count_words(text),
        sentence_count=count_sentences(text),
        heading_count=count_headings(text),
        reference_count=count_references(text),
        opinion_marker_count=lexicon.count(text),
    )
