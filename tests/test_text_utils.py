import pytest

from summary_service.schemas import TextStats
from summary_service.text_utils import (
    calculate_text_stats,
    clean_text,
    format_processing_time,
    format_text_stats,
    get_estimated_processing_time,
    get_reading_time,
    get_text_preview,
    is_text_summarizable,
    truncate_text,
)


def test_blank_text_has_zero_stats() -> None:
    assert calculate_text_stats("   \n ") == TextStats()


def test_stats_count_words_and_paragraphs() -> None:
    text = "Hello world.\n\nSecond para here."
    stats = calculate_text_stats(text)
    assert stats.character_count == len(text)
    assert stats.word_count == 5
    assert stats.paragraph_count == 2


def test_reading_time_rounds_up() -> None:
    assert get_reading_time("") == 0
    assert get_reading_time("word " * 200) == 1
    assert get_reading_time("word " * 201) == 2


def test_truncate_text() -> None:
    assert truncate_text("abcdefghij", 8) == "abcde..."
    assert truncate_text("short", 8) == "short"


def test_format_text_stats_pluralizes() -> None:
    assert format_text_stats(TextStats(character_count=1, word_count=1, paragraph_count=1)) == (
        "1 word, 1 character, 1 paragraph"
    )
    assert format_text_stats(TextStats(character_count=5000, word_count=1234, paragraph_count=3)) == (
        "1,234 words, 5,000 characters, 3 paragraphs"
    )
    assert format_text_stats(TextStats()) == ""


def test_clean_text_collapses_whitespace() -> None:
    assert clean_text("  a   b\n\n\n c ") == "a b c"


def test_is_text_summarizable() -> None:
    assert not is_text_summarizable("too few words here")
    assert is_text_summarizable("one two three four five six seven eight nine ten")


def test_estimated_processing_time() -> None:
    assert get_estimated_processing_time("") == 0.5
    assert get_estimated_processing_time("w " * 1000) == pytest.approx(3.0)


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0.4, "Less than 1 second"),
        (1, "1 second"),
        (30.4, "30 seconds"),
        (60, "1 minute"),
        (120.2, "2 minutes"),
        (125, "2:05"),
    ],
)
def test_format_processing_time(seconds: float, expected: str) -> None:
    assert format_processing_time(seconds) == expected


def test_text_preview() -> None:
    assert get_text_preview("  lots   of\n\nspace  ", max_length=100) == "lots of space"
    assert get_text_preview("x" * 200, max_length=10) == "xxxxxxx..."
