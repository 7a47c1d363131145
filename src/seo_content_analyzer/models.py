"""
Data models for the SEO Content Analyzer.

This module defines all the value objects produced and consumed by the
analyzers. Everything here is created per analysis call and discarded
once the result has been returned.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ContentType(Enum):
    """Content types with their own word count targets."""
    TUTORIAL = "tutorial"
    GUIDE = "guide"
    NEWS = "news"
    OPINION = "opinion"
    REVIEW = "review"
    DEFAULT = "default"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "ContentType":
        """Parse a content type, falling back to DEFAULT for unknown values."""
        if isinstance(value, ContentType):
            return value
        if not value:
            return cls.DEFAULT
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.DEFAULT


class KeywordClassification(Enum):
    """Density band of a keyword."""
    LOW = "low"
    OPTIMAL = "optimal"
    HIGH = "high"
    EXCESSIVE = "excessive"


class Severity(Enum):
    """Severity of a reported issue."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ImageIssueType(Enum):
    """Alt text defects, in the order they are checked."""
    MISSING_ALT = "missing-alt"
    EMPTY_ALT = "empty-alt"
    GENERIC_ALT = "generic-alt"
    TOO_SHORT = "too-short"
    TOO_LONG = "too-long"
    FILENAME_ALT = "filename-alt"


class ReadabilityClassification(Enum):
    """Flesch Reading Ease bands."""
    VERY_EASY = "very-easy"
    EASY = "easy"
    FAIRLY_EASY = "fairly-easy"
    STANDARD = "standard"
    FAIRLY_DIFFICULT = "fairly-difficult"
    DIFFICULT = "difficult"
    VERY_DIFFICULT = "very-difficult"


class LengthStatus(Enum):
    """Word count relative to the target range."""
    TOO_SHORT = "too-short"
    OPTIMAL = "optimal"
    TOO_LONG = "too-long"
    WITHIN_RANGE = "within-range"


class LinkingStatus(Enum):
    """Internal link frequency relative to the recommended count."""
    UNDER_LINKED = "under-linked"
    OPTIMAL = "optimal"
    OVER_LINKED = "over-linked"


class CandidateType(Enum):
    """Where a link candidate span came from."""
    KEYWORD = "keyword"
    ENTITY = "entity"
    TOPIC = "topic"


class Sentiment(Enum):
    """Coarse sentiment of a document."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


# =============================================================================
# Input
# =============================================================================

@dataclass
class AnalysisOptions:
    """Optional parameters for a content analysis call."""
    title: Optional[str] = None
    content_type: Optional[str] = None
    target_keywords: list[str] = field(default_factory=list)
    exclude_document_id: Optional[str] = None
    exclude_urls: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Drop blank target keywords and normalize whitespace."""
        self.target_keywords = [
            " ".join(kw.split()) for kw in (self.target_keywords or []) if kw and kw.strip()
        ]


@dataclass
class CorpusEntry:
    """A published document that other content may link to."""
    id: str
    title: str
    slug: str = ""
    content: str = ""
    excerpt: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    keywords: Optional[str] = None  # comma-joined SEO keywords
    category_name: Optional[str] = None
    view_count: int = 0
    published_at: Optional[datetime] = None


# =============================================================================
# Keyword density
# =============================================================================

@dataclass
class KeywordDensityResult:
    """Frequency and density of a single word or phrase."""
    keyword: str
    frequency: int
    density: float  # percentage
    classification: KeywordClassification
    recommendations: list[str] = field(default_factory=list)


@dataclass
class KeywordAnalysis:
    """Keyword density results for unigrams, bigrams and trigrams."""
    single_words: list[KeywordDensityResult] = field(default_factory=list)
    two_word_phrases: list[KeywordDensityResult] = field(default_factory=list)
    three_word_phrases: list[KeywordDensityResult] = field(default_factory=list)
    total_words: int = 0
    unique_words: int = 0
    average_words_per_sentence: float = 0.0
    top_keywords: list[KeywordDensityResult] = field(default_factory=list)
    target_keyword_results: list[KeywordDensityResult] = field(default_factory=list)

    @property
    def optimal_top_keywords(self) -> list[KeywordDensityResult]:
        """Top keywords classified as optimal."""
        return [
            k for k in self.top_keywords
            if k.classification == KeywordClassification.OPTIMAL
        ]


# =============================================================================
# Heading structure
# =============================================================================

@dataclass
class HeadingNode:
    """A heading found in the document."""
    text: str
    level: int  # 1-6
    position: int  # character offset in the markup


@dataclass
class HeadingIssue:
    """A problem with the heading hierarchy."""
    severity: Severity
    heading: str
    level: int
    position: int
    message: str
    suggestion: str
    suggested_level: Optional[int] = None


@dataclass
class OutlineItem:
    """Flat outline entry."""
    text: str
    level: int


@dataclass
class HeadingStructureResult:
    """Heading hierarchy validation result."""
    is_valid: bool = True
    headings: list[HeadingNode] = field(default_factory=list)
    issues: list[HeadingIssue] = field(default_factory=list)
    outline: list[OutlineItem] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        """Number of issues with error severity."""
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)


# =============================================================================
# Readability
# =============================================================================

@dataclass
class ReadabilityReport:
    """Readability metrics and their interpretation."""
    flesch_reading_ease: float = 0.0
    flesch_kincaid_grade_level: float = 0.0
    average_words_per_sentence: float = 0.0
    average_syllables_per_word: float = 0.0
    total_sentences: int = 0
    total_words: int = 0
    total_syllables: int = 0
    passive_voice_percentage: float = 0.0
    complex_words_percentage: float = 0.0
    classification: ReadabilityClassification = ReadabilityClassification.VERY_DIFFICULT
    score: float = 0.0  # reading ease clamped to [0, 100]
    grade: str = ""
    interpretation: str = ""
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


# =============================================================================
# Images
# =============================================================================

@dataclass
class ImageIssue:
    """The first alt text defect found on an image."""
    src: str
    issue: ImageIssueType
    severity: Severity
    suggestion: str
    current_alt: Optional[str] = None


@dataclass
class ImageValidationResult:
    """Alt text compliance across all images in the document."""
    total_images: int = 0
    valid_images: int = 0
    issues: list[ImageIssue] = field(default_factory=list)
    compliance_score: int = 100
    recommendations: list[str] = field(default_factory=list)

    @property
    def invalid_images(self) -> int:
        return self.total_images - self.valid_images


# =============================================================================
# Content length
# =============================================================================

@dataclass
class TargetRange:
    """Inclusive word count range."""
    min: int
    max: int


@dataclass
class ContentLengthAnalysis:
    """Word count compared with the target range for the content type."""
    current_word_count: int
    current_character_count: int
    recommended_range: TargetRange
    content_type: str
    status: LengthStatus
    recommendations: list[str] = field(default_factory=list)


# =============================================================================
# Internal linking
# =============================================================================

@dataclass
class LinkCandidate:
    """A span of the source text that could become a link."""
    text: str
    position: int
    context: str
    type: CandidateType
    confidence: int

    @property
    def end(self) -> int:
        return self.position + len(self.text)


@dataclass
class ContentSignals:
    """Keywords, entities and topics extracted from a document."""
    keywords: list[str] = field(default_factory=list)
    entities: list[str] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL
    reading_level: float = 0.0


@dataclass
class LinkSuggestion:
    """A suggested internal link from a source span to a corpus document."""
    target_id: str
    anchor_text: str
    context_snippet: str
    relevance_score: int
    position: int
    reason: str
    title: str = ""
    slug: str = ""
    url: str = ""
    category: Optional[str] = None
    tags: list[str] = field(default_factory=list)


@dataclass
class LinkSuggestionResult:
    """Output of the link suggestion engine."""
    suggestions: list[LinkSuggestion] = field(default_factory=list)
    total_analyzed: int = 0
    processing_time_ms: float = 0.0
    content_signals: ContentSignals = field(default_factory=ContentSignals)
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class InternalLinkingAnalysis:
    """Existing link frequency plus suggested new links."""
    current_internal_links: int = 0
    recommended_count: int = 0
    link_density: float = 0.0  # links per 1000 words
    status: LinkingStatus = LinkingStatus.UNDER_LINKED
    suggestions: list[LinkSuggestion] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


# =============================================================================
# Aggregate result
# =============================================================================

@dataclass
class OptimizationSummary:
    """Human-readable synthesis of all component results."""
    strengths: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    priority_fixes: list[str] = field(default_factory=list)
    quick_wins: list[str] = field(default_factory=list)


@dataclass
class ContentOptimizationResult:
    """Complete content optimization report."""
    overall_score: int
    keyword_analysis: KeywordAnalysis
    heading_structure: HeadingStructureResult
    readability: ReadabilityReport
    image_validation: ImageValidationResult
    content_length: ContentLengthAnalysis
    internal_linking: InternalLinkingAnalysis
    summary: OptimizationSummary
    component_scores: dict[str, float] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    processing_time_ms: float = 0.0
    title: Optional[str] = None  # reported as given, not scored

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = _serializable(asdict(self))
        data["image_validation"]["invalid_images"] = self.image_validation.invalid_images
        return data


def _serializable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serializable(v) for v in value]
    return value
