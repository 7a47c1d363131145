"""
Readability scoring.

Implements Flesch Reading Ease and Flesch-Kincaid Grade Level on top of
the shared tokenizer, plus two heuristics: passive voice (be-verb followed
by an -ed/-en word, or a trailing "by <agent>" clause) and complex words
(three or more syllables).
"""

import re
from typing import Optional

from .config import ReadabilityConfig
from .models import ReadabilityClassification, ReadabilityReport
from .text_normalizer import (
    count_syllables,
    count_total_syllables,
    split_sentences,
    strip_markup,
    tokenize,
)

_PASSIVE_PATTERNS = [
    re.compile(r"\b(?:am|is|are|was|were|be|being|been)\s+\w*(?:ed|en)\b", re.IGNORECASE),
    re.compile(r"\bby\s+(?:the\s+)?\w+(?:\s+\w+)?\s*$", re.IGNORECASE),
]

# (minimum reading ease, classification, interpretation), checked top-down
_BANDS = [
    (90, ReadabilityClassification.VERY_EASY,
     "Very easy to read. Easily understood by an average 11-year-old student."),
    (80, ReadabilityClassification.EASY,
     "Easy to read. Conversational English for consumers."),
    (70, ReadabilityClassification.FAIRLY_EASY,
     "Fairly easy to read. Appropriate for most adult readers."),
    (60, ReadabilityClassification.STANDARD,
     "Standard readability. Easily understood by 13- to 15-year-old students."),
    (50, ReadabilityClassification.FAIRLY_DIFFICULT,
     "Fairly difficult to read. Appropriate for college-level readers."),
    (30, ReadabilityClassification.DIFFICULT,
     "Difficult to read. Best understood by university graduates."),
]
_VERY_DIFFICULT_INTERPRETATION = (
    "Very difficult to read. Best understood by university graduates with advanced degrees."
)


def flesch_reading_ease(words_per_sentence: float, syllables_per_word: float) -> float:
    """Flesch Reading Ease (higher is easier)."""
    return 206.835 - (1.015 * words_per_sentence) - (84.6 * syllables_per_word)


def flesch_kincaid_grade(words_per_sentence: float, syllables_per_word: float) -> float:
    """Flesch-Kincaid Grade Level (US school grade)."""
    return (0.39 * words_per_sentence) + (11.8 * syllables_per_word) - 15.59


def classify_reading_ease(reading_ease: float) -> tuple[ReadabilityClassification, str]:
    """
    Map a reading ease score to its band.

    Returns:
        Tuple of (classification, interpretation text).
    """
    for minimum, classification, interpretation in _BANDS:
        if reading_ease >= minimum:
            return classification, interpretation
    return ReadabilityClassification.VERY_DIFFICULT, _VERY_DIFFICULT_INTERPRETATION


def passive_voice_percentage(sentences: list[str]) -> float:
    """Percentage of sentences matching a passive voice pattern."""
    if not sentences:
        return 0.0
    passive = sum(
        1 for sentence in sentences
        if any(pattern.search(sentence) for pattern in _PASSIVE_PATTERNS)
    )
    return passive / len(sentences) * 100


def complex_words_percentage(words: list[str], min_syllables: int = 3) -> float:
    """Percentage of words with at least min_syllables syllables."""
    if not words:
        return 0.0
    complex_words = sum(1 for word in words if count_syllables(word) >= min_syllables)
    return complex_words / len(words) * 100


def calculate_readability(
    content: str,
    config: Optional[ReadabilityConfig] = None,
) -> ReadabilityReport:
    """
    Calculate readability metrics for markup or plain text.

    Args:
        content: Content to score.
        config: Recommendation thresholds; defaults to ReadabilityConfig().

    Returns:
        ReadabilityReport. Content without words or sentences yields a zero
        report with an explanatory issue rather than an error.
    """
    config = config or ReadabilityConfig()
    text = strip_markup(content)
    sentences = split_sentences(text)
    words = tokenize(text)

    if not sentences or not words:
        return ReadabilityReport(
            interpretation=_VERY_DIFFICULT_INTERPRETATION,
            grade="Grade 0",
            issues=["Not enough text to measure readability"],
            recommendations=["Add body text to the content"],
        )

    total_syllables = count_total_syllables(words)
    words_per_sentence = len(words) / len(sentences)
    syllables_per_word = total_syllables / len(words)

    reading_ease = flesch_reading_ease(words_per_sentence, syllables_per_word)
    grade_level = flesch_kincaid_grade(words_per_sentence, syllables_per_word)
    passive = passive_voice_percentage(sentences)
    complex_pct = complex_words_percentage(words, config.complex_word_syllables)

    classification, interpretation = classify_reading_ease(reading_ease)
    score = max(0.0, min(100.0, reading_ease))

    issues: list[str] = []
    if score < 30:
        issues.append("Content is very difficult to read")
    elif score < 50:
        issues.append("Content readability could be improved")
    if words_per_sentence > config.max_words_per_sentence:
        issues.append("Sentences are too long - consider breaking them up")
    if passive > config.max_passive_voice_percentage:
        issues.append("High passive voice usage detected")

    recommendations: list[str] = []
    if reading_ease < config.min_reading_ease:
        recommendations.append("Consider simplifying sentence structure and using shorter words")
    if words_per_sentence > config.max_words_per_sentence:
        recommendations.append("Break up long sentences to improve readability")
    if grade_level > config.max_grade_level:
        recommendations.append(
            "Content may be too complex for general audience - consider simplifying"
        )
    if passive > config.max_passive_voice_percentage:
        recommendations.append("Reduce passive voice usage for clearer, more direct writing")

    return ReadabilityReport(
        flesch_reading_ease=reading_ease,
        flesch_kincaid_grade_level=grade_level,
        average_words_per_sentence=words_per_sentence,
        average_syllables_per_word=syllables_per_word,
        total_sentences=len(sentences),
        total_words=len(words),
        total_syllables=total_syllables,
        passive_voice_percentage=passive,
        complex_words_percentage=complex_pct,
        classification=classification,
        score=score,
        grade=f"Grade {round(grade_level)}",
        interpretation=interpretation,
        issues=issues,
        recommendations=recommendations,
    )
