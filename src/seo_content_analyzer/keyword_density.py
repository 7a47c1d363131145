"""
Keyword density analysis.

This module measures how often single words and two/three word phrases
occur in a document and classifies each against the density bands in
KeywordDensityConfig:

- low: below optimal_min
- optimal: optimal_min up to and including optimal_max
- high: above optimal_max up to and including warning_threshold
- excessive: above warning_threshold
"""

from collections import Counter
from typing import Optional

from .config import KeywordDensityConfig
from .models import KeywordAnalysis, KeywordClassification, KeywordDensityResult
from .text_normalizer import split_sentences, strip_markup, tokenize

_RECOMMENDATIONS = {
    KeywordClassification.LOW: "Consider using this keyword more frequently for better SEO",
    KeywordClassification.OPTIMAL: "Keyword density is in the optimal range",
    KeywordClassification.HIGH: "Consider reducing keyword frequency to avoid over-optimization",
    KeywordClassification.EXCESSIVE: "Keyword density is too high - reduce frequency to avoid penalties",
}


def analyze_keyword_density(
    content: str,
    target_keywords: Optional[list[str]] = None,
    config: Optional[KeywordDensityConfig] = None,
) -> KeywordAnalysis:
    """
    Analyze keyword density for single words and phrases.

    Args:
        content: Markup or plain text to analyze.
        target_keywords: Optional keywords whose density is always reported.
        config: Density thresholds; defaults to KeywordDensityConfig().

    Returns:
        KeywordAnalysis with per-tier results and the top keywords overall.
    """
    config = config or KeywordDensityConfig()
    text = strip_markup(content)
    words = tokenize(text)
    total_words = len(words)

    single_words = analyze_word_density(Counter(words), total_words, config)
    two_word_phrases = (
        analyze_phrases(words, 2, config) if config.include_two_word_phrases else []
    )
    three_word_phrases = (
        analyze_phrases(words, 3, config) if config.include_three_word_phrases else []
    )

    sentences = split_sentences(text)
    average_words_per_sentence = total_words / len(sentences) if sentences else 0.0

    # Stable sort keeps the single > two > three order for equal densities
    all_keywords = single_words + two_word_phrases + three_word_phrases
    top_keywords = sorted(all_keywords, key=lambda k: -k.density)[:config.top_keywords_limit]

    return KeywordAnalysis(
        single_words=single_words,
        two_word_phrases=two_word_phrases,
        three_word_phrases=three_word_phrases,
        total_words=total_words,
        unique_words=len(set(words)),
        average_words_per_sentence=average_words_per_sentence,
        top_keywords=top_keywords,
        target_keyword_results=analyze_target_keywords(words, target_keywords or [], config),
    )


def classify_density(
    density: float, config: Optional[KeywordDensityConfig] = None
) -> KeywordClassification:
    """
    Classify a density percentage.

    Args:
        density: Density as a percentage (0-100).
        config: Thresholds; defaults to KeywordDensityConfig().

    Returns:
        KeywordClassification band.
    """
    config = config or KeywordDensityConfig()
    if density < config.optimal_min:
        return KeywordClassification.LOW
    if density <= config.optimal_max:
        return KeywordClassification.OPTIMAL
    if density <= config.warning_threshold:
        return KeywordClassification.HIGH
    return KeywordClassification.EXCESSIVE


def calculate_density(frequency: int, denominator: int) -> float:
    """Density percentage of frequency over denominator (0 for empty text)."""
    if denominator <= 0:
        return 0.0
    # Multiply first so exact boundaries such as 3/100 stay exact
    return frequency * 100.0 / denominator


def analyze_word_density(
    frequencies: Counter,
    denominator: int,
    config: KeywordDensityConfig,
) -> list[KeywordDensityResult]:
    """
    Build density results for every term seen at least min_frequency times.

    Args:
        frequencies: Term -> occurrence count.
        denominator: Number of words (or phrase windows) in the document.
        config: Density thresholds.

    Returns:
        Results sorted by density, highest first.
    """
    results = [
        _density_result(term, frequency, denominator, config)
        for term, frequency in frequencies.items()
        if frequency >= config.min_frequency
    ]
    return sorted(results, key=lambda r: -r.density)


def analyze_phrases(
    words: list[str],
    phrase_length: int,
    config: KeywordDensityConfig,
) -> list[KeywordDensityResult]:
    """
    Density of n-word phrases using a sliding window.

    Phrase density is measured against the number of windows
    (len(words) - phrase_length + 1), not the word count.
    """
    phrases = Counter(
        " ".join(words[i:i + phrase_length])
        for i in range(len(words) - phrase_length + 1)
    )
    total_phrases = len(words) - phrase_length + 1
    return analyze_word_density(phrases, total_phrases, config)


def analyze_target_keywords(
    words: list[str],
    target_keywords: list[str],
    config: KeywordDensityConfig,
) -> list[KeywordDensityResult]:
    """
    Measure each target keyword regardless of how often it appears.

    Multi-word targets are matched against token windows of the same
    length, so "content marketing" is measured like a bigram.
    """
    results: list[KeywordDensityResult] = []
    seen: set[str] = set()

    for keyword in target_keywords:
        target_tokens = tokenize(keyword)
        if not target_tokens:
            continue
        phrase = " ".join(target_tokens)
        if phrase in seen:
            continue
        seen.add(phrase)

        n = len(target_tokens)
        frequency = sum(
            1 for i in range(len(words) - n + 1)
            if words[i:i + n] == target_tokens
        )
        result = _density_result(phrase, frequency, len(words) - n + 1, config)
        if frequency == 0:
            result.recommendations = [
                f"Target keyword '{keyword}' was not found - include it in the content"
            ]
        results.append(result)

    return results


def _density_result(
    term: str, frequency: int, denominator: int, config: KeywordDensityConfig
) -> KeywordDensityResult:
    density = calculate_density(frequency, denominator)
    classification = classify_density(density, config)
    return KeywordDensityResult(
        keyword=term,
        frequency=frequency,
        density=density,
        classification=classification,
        recommendations=[_RECOMMENDATIONS[classification]],
    )
