import math
import re

from .schemas import TextStats

_WHITESPACE = re.compile(r"\s+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def calculate_text_stats(text: str) -> TextStats:
    """Character, word and paragraph counts; all zero for blank text."""
    if not (text or "").strip():
        return TextStats()
    words = [w for w in text.strip().split() if w]
    paragraphs = [p for p in _PARAGRAPH_BREAK.split(text.strip()) if p.strip()]
    return TextStats(
        character_count=len(text),
        word_count=len(words),
        paragraph_count=len(paragraphs),
    )


def get_reading_time(text: str, words_per_minute: int = 200) -> int:
    """Reading time estimate in whole minutes."""
    return math.ceil(calculate_text_stats(text).word_count / words_per_minute)


def truncate_text(text: str, max_length: int, ellipsis: str = "...") -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ellipsis)] + ellipsis


def _plural(n: int, noun: str) -> str:
    return f"{n:,} {noun}{'' if n == 1 else 's'}"


def format_text_stats(stats: TextStats) -> str:
    parts = []
    if stats.word_count > 0:
        parts.append(_plural(stats.word_count, "word"))
    if stats.character_count > 0:
        parts.append(_plural(stats.character_count, "character"))
    if stats.paragraph_count > 0:
        parts.append(_plural(stats.paragraph_count, "paragraph"))
    return ", ".join(parts)


def clean_text(text: str) -> str:
    """Trim and collapse every whitespace run to a single space."""
    return _WHITESPACE.sub(" ", (text or "").strip())


def is_text_summarizable(text: str, min_words: int = 10) -> bool:
    return calculate_text_stats(text).word_count >= min_words


def get_estimated_processing_time(text: str) -> float:
    # 0.5s floor, 3ms per word
    return max(0.5, calculate_text_stats(text).word_count * 0.003)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def format_processing_time(seconds: float) -> str:
    if seconds < 1:
        return "Less than 1 second"
    if seconds < 60:
        s = _round_half_up(seconds)
        return f"{s} second{'' if s == 1 else 's'}"
    minutes = int(seconds // 60)
    remaining = _round_half_up(seconds % 60)
    if remaining == 0:
        return f"{minutes} minute{'' if minutes == 1 else 's'}"
    return f"{minutes}:{remaining:02d}"


def get_text_preview(text: str, max_length: int = 100) -> str:
    return truncate_text(clean_text(text), max_length)
