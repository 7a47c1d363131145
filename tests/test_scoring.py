"""Tests for component scoring, the overall score and configuration."""

import pytest

from seo_content_analyzer.config import (
    AnalyzerConfig,
    KeywordDensityConfig,
    LinkSuggestionConfig,
    ScoringWeights,
)
from seo_content_analyzer.models import (
    AnalysisOptions,
    ContentLengthAnalysis,
    ContentType,
    HeadingIssue,
    HeadingStructureResult,
    ImageValidationResult,
    InternalLinkingAnalysis,
    KeywordAnalysis,
    LengthStatus,
    LinkingStatus,
    ReadabilityReport,
    Severity,
    TargetRange,
)
from seo_content_analyzer.scoring import (
    CONTENT_LENGTH,
    HEADING_STRUCTURE,
    IMAGE_VALIDATION,
    INTERNAL_LINKING,
    KEYWORD_DENSITY,
    READABILITY,
    calculate_component_scores,
    calculate_overall_score,
    generate_summary,
    heading_score,
    round_half_up,
)


def _length(status: LengthStatus) -> ContentLengthAnalysis:
    return ContentLengthAnalysis(
        current_word_count=100,
        current_character_count=600,
        recommended_range=TargetRange(800, 2000),
        content_type="default",
        status=status,
    )


def _heading_error() -> HeadingIssue:
    return HeadingIssue(
        severity=Severity.ERROR,
        heading="Deep",
        level=4,
        position=0,
        message="Skipped heading level",
        suggestion="Use H2",
    )


def _results(**overrides):
    results = {
        "keyword_analysis": KeywordAnalysis(),
        "heading_structure": HeadingStructureResult(),
        "readability": ReadabilityReport(score=80.0),
        "image_validation": ImageValidationResult(),
        "content_length": _length(LengthStatus.OPTIMAL),
        "internal_linking": InternalLinkingAnalysis(status=LinkingStatus.OPTIMAL),
    }
    results.update(overrides)
    return results


class TestOverallScore:
    """Tests for calculate_overall_score."""

    def test_weighted_sum(self):
        """Test the weighted sum of mixed component scores."""
        scores = {
            READABILITY: 80.0,
            HEADING_STRUCTURE: 100.0,
            CONTENT_LENGTH: 50.0,
            KEYWORD_DENSITY: 0.0,
            IMAGE_VALIDATION: 25.0,
            INTERNAL_LINKING: 75.0,
        }
        assert calculate_overall_score(scores) == 59

    def test_perfect_score(self):
        """Test that all components at 100 give 100."""
        scores = dict.fromkeys(
            [READABILITY, HEADING_STRUCTURE, CONTENT_LENGTH,
             KEYWORD_DENSITY, IMAGE_VALIDATION, INTERNAL_LINKING],
            100.0,
        )
        assert calculate_overall_score(scores) == 100

    def test_halves_round_up(self):
        """Test that 12.5 rounds to 13."""
        scores = dict.fromkeys(
            [HEADING_STRUCTURE, CONTENT_LENGTH, KEYWORD_DENSITY,
             IMAGE_VALIDATION, INTERNAL_LINKING],
            0.0,
        )
        scores[READABILITY] = 50.0

        assert calculate_overall_score(scores) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2

    def test_custom_weights(self):
        """Test scoring with custom weights."""
        weights = ScoringWeights(
            readability=100.0, heading_structure=0.0, content_length=0.0,
            keyword_density=0.0, image_validation=0.0, internal_linking=0.0,
        )
        scores = dict.fromkeys(
            [HEADING_STRUCTURE, CONTENT_LENGTH, KEYWORD_DENSITY,
             IMAGE_VALIDATION, INTERNAL_LINKING],
            0.0,
        )
        scores[READABILITY] = 64.0

        assert calculate_overall_score(scores, weights) == 64


class TestComponentScores:
    """Tests for calculate_component_scores."""

    def test_heading_penalty(self):
        """Test 25 points per heading error."""
        result = HeadingStructureResult(is_valid=False, issues=[_heading_error()] * 2)
        assert heading_score(result) == 50.0

    def test_heading_penalty_floor(self):
        """Test that many errors floor at zero."""
        result = HeadingStructureResult(is_valid=False, issues=[_heading_error()] * 6)
        assert heading_score(result) == 0.0

    def test_status_mappings(self):
        """Test length, keyword and linking sub-scores."""
        scores = calculate_component_scores(**_results(
            content_length=_length(LengthStatus.WITHIN_RANGE),
            internal_linking=InternalLinkingAnalysis(status=LinkingStatus.UNDER_LINKED),
        ))

        assert scores[CONTENT_LENGTH] == 85.0
        assert scores[INTERNAL_LINKING] == 75.0
        assert scores[KEYWORD_DENSITY] == 0.0
        assert scores[READABILITY] == 80.0
        assert scores[IMAGE_VALIDATION] == 100.0

    def test_degraded_component_is_neutral(self):
        """Test that a failed analyzer scores 50."""
        scores = calculate_component_scores(**_results(), degraded=[READABILITY])
        assert scores[READABILITY] == 50.0


class TestGenerateSummary:
    """Tests for generate_summary."""

    def test_all_good(self):
        """Test strengths for a strong document."""
        summary = generate_summary(**_results())

        assert "Good readability for target audience" in summary.strengths
        assert "Proper heading structure and hierarchy" in summary.strengths
        assert "Content length is optimal for content type" in summary.strengths
        assert "Appropriate internal linking frequency" in summary.strengths
        assert summary.priority_fixes == []

    def test_problems(self):
        """Test issues, priority fixes and quick wins."""
        summary = generate_summary(**_results(
            readability=ReadabilityReport(score=40.0),
            heading_structure=HeadingStructureResult(is_valid=False, issues=[_heading_error()]),
            content_length=_length(LengthStatus.TOO_SHORT),
            image_validation=ImageValidationResult(total_images=2, compliance_score=50),
            internal_linking=InternalLinkingAnalysis(status=LinkingStatus.UNDER_LINKED),
        ))

        assert "Content readability could be improved" in summary.issues
        assert "Content is too short" in summary.issues
        assert "Content is under linked" in summary.issues
        assert "Image alt text needs improvement" in summary.issues
        assert summary.priority_fixes == [
            "Simplify sentence structure and vocabulary",
            "Fix heading hierarchy issues",
        ]
        assert "Expand content with more details and examples" in summary.quick_wins

    def test_degraded_component(self):
        """Test that a failed component is reported instead of judged."""
        summary = generate_summary(
            **_results(readability=ReadabilityReport()), degraded=[READABILITY]
        )

        assert "Readability analysis could not be completed" in summary.issues
        assert "Content readability could be improved" not in summary.issues
        assert summary.priority_fixes == []


class TestConfiguration:
    """Tests for configuration validation and input normalization."""

    def test_weights_must_sum_to_100(self):
        """Test that weights not summing to 100 are rejected."""
        with pytest.raises(ValueError, match="sum to 100"):
            ScoringWeights(readability=50.0)

    def test_density_thresholds_ordered(self):
        """Test that density thresholds must be ordered."""
        with pytest.raises(ValueError):
            KeywordDensityConfig(optimal_min=4.0, optimal_max=3.0)

    def test_default_with_overrides(self):
        """Test overriding a single config section."""
        config = AnalyzerConfig.default(link_suggestions=LinkSuggestionConfig(max_suggestions=3))

        assert config.link_suggestions.max_suggestions == 3
        assert config.weights.readability == 25.0

    def test_content_type_parsing(self):
        """Test parsing content types with a default fallback."""
        assert ContentType.from_value("Guide") == ContentType.GUIDE
        assert ContentType.from_value("podcast") == ContentType.DEFAULT
        assert ContentType.from_value(None) == ContentType.DEFAULT

    def test_blank_target_keywords_dropped(self):
        """Test that blank target keywords are ignored."""
        options = AnalysisOptions(target_keywords=["", "  ", " keyword   research "])
        assert options.target_keywords == ["keyword research"]
