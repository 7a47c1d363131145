"""
Component sub-scores, the weighted overall score and the report summary.
"""

import math
from typing import Iterable, Optional

from .config import ScoringWeights
from .models import (
    ContentLengthAnalysis,
    HeadingStructureResult,
    ImageValidationResult,
    InternalLinkingAnalysis,
    KeywordAnalysis,
    LengthStatus,
    LinkingStatus,
    OptimizationSummary,
    ReadabilityReport,
)

# Component names used as keys of component_scores and in degraded warnings
READABILITY = "readability"
HEADING_STRUCTURE = "heading_structure"
CONTENT_LENGTH = "content_length"
KEYWORD_DENSITY = "keyword_density"
IMAGE_VALIDATION = "image_validation"
INTERNAL_LINKING = "internal_linking"

COMPONENT_LABELS = {
    READABILITY: "Readability",
    HEADING_STRUCTURE: "Heading structure",
    CONTENT_LENGTH: "Content length",
    KEYWORD_DENSITY: "Keyword density",
    IMAGE_VALIDATION: "Image validation",
    INTERNAL_LINKING: "Internal linking",
}

HEADING_ERROR_PENALTY = 25

# Sub-score of a component whose analyzer failed
NEUTRAL_COMPONENT_SCORE = 50.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def heading_score(result: HeadingStructureResult) -> float:
    if result.is_valid:
        return 100.0
    return float(max(0, 100 - HEADING_ERROR_PENALTY * result.error_count))


def length_score(result: ContentLengthAnalysis) -> float:
    if result.status == LengthStatus.OPTIMAL:
        return 100.0
    if result.status == LengthStatus.WITHIN_RANGE:
        return 85.0
    return 50.0


def keyword_score(result: KeywordAnalysis) -> float:
    optimal = len(result.optimal_top_keywords)
    return min(100.0, optimal / max(1, len(result.top_keywords)) * 100)


def linking_score(result: InternalLinkingAnalysis) -> float:
    return 100.0 if result.status == LinkingStatus.OPTIMAL else 75.0


def calculate_component_scores(
    keyword_analysis: KeywordAnalysis,
    heading_structure: HeadingStructureResult,
    readability: ReadabilityReport,
    image_validation: ImageValidationResult,
    content_length: ContentLengthAnalysis,
    internal_linking: InternalLinkingAnalysis,
    degraded: Iterable[str] = (),
) -> dict[str, float]:
    """
    Score each component on a 0-100 scale.

    Args:
        degraded: Names of components whose analyzer failed. They score
            NEUTRAL_COMPONENT_SCORE instead of being judged on defaults.

    Returns:
        Dict keyed by component name.
    """
    scores = {
        READABILITY: readability.score,
        HEADING_STRUCTURE: heading_score(heading_structure),
        CONTENT_LENGTH: length_score(content_length),
        KEYWORD_DENSITY: keyword_score(keyword_analysis),
        IMAGE_VALIDATION: float(image_validation.compliance_score),
        INTERNAL_LINKING: linking_score(internal_linking),
    }
    for name in degraded:
        scores[name] = NEUTRAL_COMPONENT_SCORE
    return scores


def calculate_overall_score(
    component_scores: dict[str, float],
    weights: Optional[ScoringWeights] = None,
) -> int:
    """
    Weighted sum of the component scores, rounded to an integer.

    Args:
        component_scores: Output of calculate_component_scores().
        weights: Percent weights per component; defaults to ScoringWeights().

    Returns:
        Overall score between 0 and 100.
    """
    weights = weights or ScoringWeights()
    total = sum(
        component_scores[name] / 100 * getattr(weights, name)
        for name in COMPONENT_LABELS
    )
    return max(0, min(100, round_half_up(total)))


def generate_summary(
    keyword_analysis: KeywordAnalysis,
    heading_structure: HeadingStructureResult,
    readability: ReadabilityReport,
    image_validation: ImageValidationResult,
    content_length: ContentLengthAnalysis,
    internal_linking: InternalLinkingAnalysis,
    degraded: Iterable[str] = (),
) -> OptimizationSummary:
    """
    Build strengths, issues, priority fixes and quick wins from the results.

    Args:
        degraded: Names of components that failed and carry default results.
            Each adds an issue instead of being judged on its default.
    """
    degraded = set(degraded)
    summary = OptimizationSummary()

    if READABILITY not in degraded:
        if readability.score >= 70:
            summary.strengths.append("Good readability for target audience")
        else:
            summary.issues.append("Content readability could be improved")
            if readability.score < 50:
                summary.priority_fixes.append("Simplify sentence structure and vocabulary")

    if HEADING_STRUCTURE not in degraded:
        if heading_structure.is_valid:
            summary.strengths.append("Proper heading structure and hierarchy")
        else:
            summary.issues.append("Heading structure needs improvement")
            if heading_structure.error_count > 0:
                summary.priority_fixes.append("Fix heading hierarchy issues")

    if CONTENT_LENGTH not in degraded:
        if content_length.status == LengthStatus.OPTIMAL:
            summary.strengths.append("Content length is optimal for content type")
        else:
            summary.issues.append(f"Content is {content_length.status.value.replace('-', ' ')}")
            if content_length.status == LengthStatus.TOO_SHORT:
                summary.quick_wins.append("Expand content with more details and examples")

    if IMAGE_VALIDATION not in degraded:
        if image_validation.compliance_score >= 80:
            summary.strengths.append("Good image accessibility compliance")
        else:
            summary.issues.append("Image alt text needs improvement")
            summary.quick_wins.append("Add or improve alt text for images")

    if KEYWORD_DENSITY not in degraded:
        if len(keyword_analysis.optimal_top_keywords) >= 3:
            summary.strengths.append("Good keyword density distribution")
        else:
            summary.issues.append("Keyword optimization could be improved")
            summary.quick_wins.append("Optimize keyword density for target terms")

    if INTERNAL_LINKING not in degraded:
        if internal_linking.status == LinkingStatus.OPTIMAL:
            summary.strengths.append("Appropriate internal linking frequency")
        else:
            summary.issues.append(f"Content is {internal_linking.status.value.replace('-', ' ')}")
            summary.quick_wins.append("Adjust internal linking frequency")

    for name in COMPONENT_LABELS:
        if name in degraded:
            summary.issues.append(f"{COMPONENT_LABELS[name]} analysis could not be completed")

    return summary
