# -*- coding: utf-8 -*-
"""
Centralized configuration for the SEO Content Analyzer.

Each analyzer has its own immutable configuration dataclass. They are
composed into AnalyzerConfig, which the ContentOptimizer passes down to
every component. The defaults reproduce the published scoring contract:
changing them changes scores.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class KeywordDensityConfig:
    """
    Thresholds for keyword density classification (percentages).

    Attributes:
        optimal_min: Below this density a keyword is classified "low".
        optimal_max: Up to and including this density a keyword is "optimal".
        warning_threshold: Up to and including this density a keyword is
            "high"; anything above is "excessive".
        min_frequency: Minimum occurrences for a term to be reported.
        top_keywords_limit: Number of entries kept in top_keywords.
        include_two_word_phrases: Whether to analyze bigrams.
        include_three_word_phrases: Whether to analyze trigrams.
    """

    optimal_min: float = 1.0
    optimal_max: float = 3.0
    warning_threshold: float = 5.0
    min_frequency: int = 2
    top_keywords_limit: int = 10
    include_two_word_phrases: bool = True
    include_three_word_phrases: bool = True

    def __post_init__(self):
        if not 0 <= self.optimal_min <= self.optimal_max <= self.warning_threshold:
            raise ValueError(
                "density thresholds must satisfy 0 <= optimal_min <= optimal_max "
                f"<= warning_threshold, got {self.optimal_min}/{self.optimal_max}/"
                f"{self.warning_threshold}"
            )
        if self.min_frequency < 1:
            raise ValueError(f"min_frequency must be >= 1, got {self.min_frequency}")
        if self.top_keywords_limit < 1:
            raise ValueError(
                f"top_keywords_limit must be >= 1, got {self.top_keywords_limit}"
            )


@dataclass(frozen=True)
class HeadingStructureConfig:
    """Rules for heading hierarchy validation."""

    require_h1: bool = True
    max_skipped_levels: int = 0

    def __post_init__(self):
        if not 0 <= self.max_skipped_levels <= 4:
            raise ValueError(
                f"max_skipped_levels must be between 0 and 4, got {self.max_skipped_levels}"
            )


@dataclass(frozen=True)
class ReadabilityConfig:
    """Readability targets used when writing recommendations."""

    min_reading_ease: float = 60.0
    max_grade_level: float = 12.0
    max_words_per_sentence: float = 20.0
    max_passive_voice_percentage: float = 25.0
    complex_word_syllables: int = 3


@dataclass(frozen=True)
class ImageValidationConfig:
    """Alt text length limits (characters)."""

    min_alt_length: int = 10
    max_alt_length: int = 125
    generic_alt_max_length: int = 20

    def __post_init__(self):
        if self.min_alt_length < 0 or self.max_alt_length < self.min_alt_length:
            raise ValueError(
                f"alt text limits must satisfy 0 <= min <= max, got "
                f"{self.min_alt_length}/{self.max_alt_length}"
            )


def _default_length_targets() -> dict[str, tuple[int, int]]:
    return {
        "tutorial": (1500, 3000),
        "guide": (2000, 4000),
        "news": (300, 800),
        "opinion": (600, 1200),
        "review": (800, 1500),
        "default": (800, 2000),
    }


@dataclass(frozen=True)
class ContentLengthConfig:
    """Word count targets per content type as (min, max) tuples."""

    targets: dict[str, tuple[int, int]] = field(default_factory=_default_length_targets)

    def __post_init__(self):
        if "default" not in self.targets:
            raise ValueError("content length targets must include a 'default' entry")
        for content_type, (low, high) in self.targets.items():
            if low < 0 or high < low:
                raise ValueError(
                    f"invalid target range for '{content_type}': {low}-{high}"
                )

    def range_for(self, content_type: str) -> tuple[int, int]:
        """Target range for a content type, falling back to the default range."""
        return self.targets.get(content_type, self.targets["default"])


@dataclass(frozen=True)
class LinkSuggestionConfig:
    """
    Tuning for the internal link suggestion engine.

    Attributes:
        max_suggestions: Maximum suggestions returned.
        min_relevance_score: Minimum relevance (0-100) for a corpus match.
        context_window: Characters kept on each side of a candidate span.
        max_keywords: Keyword candidates extracted from the source document.
        max_entities: Entity candidates extracted from the source document.
        max_topics: Topic candidates extracted from the source document.
        popular_view_count: View count above which a document gets a boost.
        popularity_boost: Multiplier applied to popular documents.
        url_prefix: Prefix used to build suggestion URLs from slugs.
    """

    max_suggestions: int = 7
    min_relevance_score: float = 30.0
    context_window: int = 50
    max_keywords: int = 10
    max_entities: int = 10
    max_topics: int = 8
    popular_view_count: int = 100
    popularity_boost: float = 1.1
    url_prefix: str = "/blog/"

    def __post_init__(self):
        if self.max_suggestions < 1:
            raise ValueError(f"max_suggestions must be >= 1, got {self.max_suggestions}")
        if not 0 <= self.min_relevance_score <= 100:
            raise ValueError(
                f"min_relevance_score must be between 0 and 100, got {self.min_relevance_score}"
            )
        if self.context_window < 0:
            raise ValueError(f"context_window must be >= 0, got {self.context_window}")


@dataclass(frozen=True)
class ScoringWeights:
    """Component weights for the overall score (percent, must sum to 100)."""

    readability: float = 25.0
    heading_structure: float = 20.0
    content_length: float = 15.0
    keyword_density: float = 15.0
    image_validation: float = 15.0
    internal_linking: float = 10.0

    def __post_init__(self):
        total = (
            self.readability + self.heading_structure + self.content_length
            + self.keyword_density + self.image_validation + self.internal_linking
        )
        if abs(total - 100.0) > 1e-6:
            raise ValueError(f"scoring weights must sum to 100, got {total}")


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for a full content analysis run."""

    keyword_density: KeywordDensityConfig = field(default_factory=KeywordDensityConfig)
    heading_structure: HeadingStructureConfig = field(default_factory=HeadingStructureConfig)
    readability: ReadabilityConfig = field(default_factory=ReadabilityConfig)
    image_validation: ImageValidationConfig = field(default_factory=ImageValidationConfig)
    content_length: ContentLengthConfig = field(default_factory=ContentLengthConfig)
    link_suggestions: LinkSuggestionConfig = field(default_factory=LinkSuggestionConfig)
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    # Below this word count the result carries an input warning
    min_word_count_warning: int = 50

    @classmethod
    def default(cls, **overrides) -> "AnalyzerConfig":
        """Create the default configuration, optionally overriding sections.

        Args:
            **overrides: Replacement section configs, e.g.
                link_suggestions=LinkSuggestionConfig(max_suggestions=5).

        Returns:
            AnalyzerConfig instance.
        """
        return cls(**overrides)
