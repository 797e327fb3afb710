import math
import re
import time
from typing import List, Union

from ..config import config
from ..errors import InvalidInput, UnprocessableInput
from ..schemas import LENGTH_RATIOS, SummaryLength, SummaryResult

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def split_sentences(text: str) -> List[str]:
    """Split on runs of . ! ? and drop blank fragments. Order is preserved."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


def target_sentence_count(total: int, length: SummaryLength) -> int:
    return max(1, math.ceil(total * LENGTH_RATIOS[length]))


def select_sentences(sentences: List[str], target: int) -> List[str]:
    """Pick first, a strided sample of the middle third, then last.

    The middle loop stops early when the stride runs past the middle third,
    so fewer than ``target - 2`` middle sentences may be picked.
    """
    n = len(sentences)
    if n <= target:
        return list(sentences)

    selected = [sentences[0]]

    if target > 2:
        middle_start = n // 3
        middle_end = (n * 2) // 3
        middle_count = target - 2
        step = max(1, (middle_end - middle_start) // middle_count)
        i = 0
        while i < middle_count and middle_start + i * step < middle_end:
            selected.append(sentences[middle_start + i * step])
            i += 1

    if target > 1:
        selected.append(sentences[-1])

    return selected


def count_words(text: str) -> int:
    return len(text.split())


def _resolve_length(length: Union[str, SummaryLength, None]) -> SummaryLength:
    if not length:
        return SummaryLength(config.DEFAULT_LENGTH)
    try:
        return SummaryLength(length)
    except ValueError:
        raise UnprocessableInput("Invalid length option - must be short, medium, or long")


def summarize(text: str, length: Union[str, SummaryLength, None] = None) -> SummaryResult:
    """Rule-based extractive summary of ``text`` for the given length tier.

    Raises InvalidInput for missing/non-string/sentence-less text and
    UnprocessableInput for over-long text or an unknown tier.
    """
    t0 = time.perf_counter()

    if not text or not isinstance(text, str):
        raise InvalidInput("Invalid input - text is required")

    if len(text) > config.MAX_TEXT_LENGTH:
        raise UnprocessableInput(f"Text too long - maximum {config.MAX_TEXT_LENGTH:,} characters")

    tier = _resolve_length(length)

    sentences = split_sentences(text)
    if not sentences:
        raise InvalidInput("Invalid input - text contains no meaningful content")

    target = target_sentence_count(len(sentences), tier)
    selected = select_sentences(sentences, target)

    summary = ". ".join(s.strip() for s in selected) + "."
    elapsed = time.perf_counter() - t0

    return SummaryResult(
        summary=summary,
        word_count=count_words(summary),
        processing_time=round(elapsed, 2),
    )
