"""
SEO Content Analyzer

Scores HTML content for search engine optimization:
- Keyword and phrase density
- Heading hierarchy
- Readability (Flesch Reading Ease, Flesch-Kincaid grade)
- Image alt text compliance
- Content length per content type
- Internal link frequency and suggestions from a corpus of published posts
"""

__version__ = "1.0.0"

from .config import (
    AnalyzerConfig,
    ContentLengthConfig,
    HeadingStructureConfig,
    ImageValidationConfig,
    KeywordDensityConfig,
    LinkSuggestionConfig,
    ReadabilityConfig,
    ScoringWeights,
)

from .models import (
    AnalysisOptions,
    ContentOptimizationResult,
    ContentType,
    CorpusEntry,
    KeywordClassification,
    LengthStatus,
    LinkingStatus,
    LinkSuggestion,
    LinkSuggestionResult,
    ReadabilityClassification,
    Severity,
)

from .corpus import CorpusLoadError, CorpusRepository, InMemoryCorpus, load_corpus
from .content_sources import ContentExtractionError, LoadedContent, load_content
from .keyword_density import analyze_keyword_density
from .heading_structure import validate_heading_structure
from .readability import calculate_readability
from .image_validation import validate_images
from .content_length import analyze_content_length
from .internal_linking import analyze_link_frequency
from .link_suggestions import LinkSuggestionEngine
from .optimizer import ContentOptimizationError, ContentOptimizer, analyze_content

__all__ = [
    "__version__",
    # Configuration
    "AnalyzerConfig",
    "ContentLengthConfig",
    "HeadingStructureConfig",
    "ImageValidationConfig",
    "KeywordDensityConfig",
    "LinkSuggestionConfig",
    "ReadabilityConfig",
    "ScoringWeights",
    # Models
    "AnalysisOptions",
    "ContentOptimizationResult",
    "ContentType",
    "CorpusEntry",
    "KeywordClassification",
    "LengthStatus",
    "LinkingStatus",
    "LinkSuggestion",
    "LinkSuggestionResult",
    "ReadabilityClassification",
    "Severity",
    # Corpus
    "CorpusLoadError",
    "CorpusRepository",
    "InMemoryCorpus",
    "load_corpus",
    # Content sources
    "ContentExtractionError",
    "LoadedContent",
    "load_content",
    # Analyzers
    "analyze_keyword_density",
    "validate_heading_structure",
    "calculate_readability",
    "validate_images",
    "analyze_content_length",
    "analyze_link_frequency",
    "LinkSuggestionEngine",
    # Orchestration
    "ContentOptimizationError",
    "ContentOptimizer",
    "analyze_content",
]
