"""
Content optimization orchestrator.

Runs the document analyzers and the link suggestion engine concurrently,
then combines their results into a ContentOptimizationResult with a
weighted overall score and a summary.

Each analyzer is isolated: if one fails, its section carries a default
result, its sub-score is neutral and a warning is added. Only failures
outside the analyzers raise ContentOptimizationError.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional

from .config import AnalyzerConfig
from .content_length import analyze_content_length
from .corpus import CorpusRepository
from .heading_structure import validate_heading_structure
from .image_validation import validate_images
from .internal_linking import analyze_link_frequency
from .keyword_density import analyze_keyword_density
from .link_suggestions import LinkSuggestionEngine
from .models import (
    AnalysisOptions,
    ContentLengthAnalysis,
    ContentOptimizationResult,
    ContentType,
    HeadingStructureResult,
    ImageValidationResult,
    InternalLinkingAnalysis,
    KeywordAnalysis,
    LengthStatus,
    ReadabilityReport,
    TargetRange,
)
from .readability import calculate_readability
from .scoring import (
    COMPONENT_LABELS,
    CONTENT_LENGTH,
    HEADING_STRUCTURE,
    IMAGE_VALIDATION,
    INTERNAL_LINKING,
    KEYWORD_DENSITY,
    READABILITY,
    calculate_component_scores,
    calculate_overall_score,
    generate_summary,
)
from .text_normalizer import strip_markup, tokenize

logger = logging.getLogger(__name__)


class ContentOptimizationError(Exception):
    """Raised when a content analysis fails as a whole."""
    pass


class ContentOptimizer:
    """
    Analyzes a document for SEO and content quality.

    Example:
        >>> optimizer = ContentOptimizer(corpus=load_corpus("posts.csv"))
        >>> result = optimizer.analyze(html, AnalysisOptions(content_type="guide"))
        >>> result.overall_score
        72
    """

    def __init__(
        self,
        corpus: Optional[CorpusRepository] = None,
        config: Optional[AnalyzerConfig] = None,
        max_workers: int = 6,
    ):
        """
        Initialize the optimizer.

        Args:
            corpus: Published documents to suggest internal links to. When
                None, link suggestions are skipped.
            config: Analyzer configuration. Defaults to AnalyzerConfig.default().
            max_workers: Thread pool size for the analyzer fan-out.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.config = config or AnalyzerConfig.default()
        self.corpus = corpus
        self.max_workers = max_workers
        self.link_engine = (
            LinkSuggestionEngine(corpus, self.config.link_suggestions)
            if corpus is not None
            else None
        )

    def analyze(
        self,
        content: str,
        options: Optional[AnalysisOptions] = None,
    ) -> ContentOptimizationResult:
        """
        Run every analyzer on the content and aggregate the results.

        Args:
            content: HTML markup (plain text also works).
            options: Title, content type, target keywords and link exclusions.

        Returns:
            ContentOptimizationResult. Empty or very short content is reported
            in warnings rather than raised.

        Raises:
            ContentOptimizationError: If aggregation itself fails.
        """
        start_time = time.perf_counter()
        options = options or AnalysisOptions()
        content = content or ""

        try:
            warnings = self._input_warnings(content)
            results, degraded = self._run_analyzers(content, options, warnings)

            internal_linking, link_warnings = results[INTERNAL_LINKING]
            warnings.extend(link_warnings)

            sections = dict(
                keyword_analysis=results[KEYWORD_DENSITY],
                heading_structure=results[HEADING_STRUCTURE],
                readability=results[READABILITY],
                image_validation=results[IMAGE_VALIDATION],
                content_length=results[CONTENT_LENGTH],
                internal_linking=internal_linking,
            )
            component_scores = calculate_component_scores(**sections, degraded=degraded)
            overall_score = calculate_overall_score(component_scores, self.config.weights)
            summary = generate_summary(**sections, degraded=degraded)

        except Exception as e:
            logger.error(f"Content optimization analysis failed: {e}")
            raise ContentOptimizationError(f"Content optimization analysis failed: {e}") from e

        processing_time_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Analyzed content: score {overall_score}, {len(warnings)} warnings, "
            f"{processing_time_ms:.0f} ms"
        )

        return ContentOptimizationResult(
            overall_score=overall_score,
            summary=summary,
            component_scores=component_scores,
            warnings=warnings,
            processing_time_ms=processing_time_ms,
            title=options.title,
            **sections,
        )

    def _input_warnings(self, content: str) -> list[str]:
        """Warnings for missing or very short content."""
        if not content.strip():
            return ["Content is empty; analysis results are not meaningful"]

        word_count = len(tokenize(strip_markup(content)))
        if word_count == 0:
            return ["Content contains no readable text"]
        if word_count < self.config.min_word_count_warning:
            return [
                f"Content is very short ({word_count} words); "
                f"results are more reliable above {self.config.min_word_count_warning} words"
            ]
        return []

    def _tasks(
        self,
        content: str,
        options: AnalysisOptions,
    ) -> dict[str, tuple[Callable[..., Any], tuple]]:
        config = self.config
        return {
            KEYWORD_DENSITY: (
                analyze_keyword_density,
                (content, options.target_keywords, config.keyword_density),
            ),
            HEADING_STRUCTURE: (
                validate_heading_structure,
                (content, config.heading_structure),
            ),
            READABILITY: (
                calculate_readability,
                (content, config.readability),
            ),
            IMAGE_VALIDATION: (
                validate_images,
                (content, config.image_validation),
            ),
            CONTENT_LENGTH: (
                analyze_content_length,
                (content, options.content_type, config.content_length),
            ),
            INTERNAL_LINKING: (
                self._analyze_internal_linking,
                (content, options),
            ),
        }

    def _run_analyzers(
        self,
        content: str,
        options: AnalysisOptions,
        warnings: list[str],
    ) -> tuple[dict[str, Any], list[str]]:
        """
        Run all analyzers in a thread pool.

        Returns:
            Tuple of (results by component name, names of failed components).
            Failed components get their default result.
        """
        results: dict[str, Any] = {}
        degraded: list[str] = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                name: executor.submit(func, *args)
                for name, (func, args) in self._tasks(content, options).items()
            }

            # Collected in submission order so warnings are deterministic
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except Exception as e:
                    label = COMPONENT_LABELS[name]
                    logger.warning(f"{label} analysis failed: {e}")
                    warnings.append(f"{label} analysis failed: {e}")
                    degraded.append(name)
                    results[name] = self._default_result(name, options)

        return results, degraded

    def _analyze_internal_linking(
        self,
        content: str,
        options: AnalysisOptions,
    ) -> tuple[InternalLinkingAnalysis, list[str]]:
        """Existing link frequency plus suggestions from the corpus."""
        analysis = analyze_link_frequency(content)

        if self.link_engine is None:
            logger.debug("No corpus configured, skipping link suggestions")
            return analysis, []

        suggestion_result = self.link_engine.suggest(
            content,
            exclude_document_id=options.exclude_document_id,
            exclude_urls=options.exclude_urls,
        )
        analysis.suggestions = suggestion_result.suggestions
        analysis.recommendations.extend(suggestion_result.recommendations)
        return analysis, list(suggestion_result.warnings)

    def _default_result(self, name: str, options: AnalysisOptions) -> Any:
        """Empty result for a component whose analyzer failed."""
        if name == KEYWORD_DENSITY:
            return KeywordAnalysis()
        if name == HEADING_STRUCTURE:
            return HeadingStructureResult()
        if name == READABILITY:
            return ReadabilityReport()
        if name == IMAGE_VALIDATION:
            return ImageValidationResult()
        if name == CONTENT_LENGTH:
            content_type = ContentType.from_value(options.content_type).value
            low, high = self.config.content_length.range_for(content_type)
            return ContentLengthAnalysis(
                current_word_count=0,
                current_character_count=0,
                recommended_range=TargetRange(min=low, max=high),
                content_type=content_type,
                status=LengthStatus.WITHIN_RANGE,
            )
        return InternalLinkingAnalysis(), []


def analyze_content(
    content: str,
    title: Optional[str] = None,
    content_type: Optional[str] = None,
    target_keywords: Optional[Iterable[str]] = None,
    exclude_document_id: Optional[str] = None,
    corpus: Optional[CorpusRepository] = None,
    config: Optional[AnalyzerConfig] = None,
) -> ContentOptimizationResult:
    """
    Convenience function to analyze a single document.

    Args:
        content: HTML markup.
        title: Optional document title.
        content_type: tutorial, guide, news, opinion, review or default.
        target_keywords: Keywords whose density is always reported.
        exclude_document_id: Corpus id of the document itself.
        corpus: Published documents for link suggestions.
        config: Analyzer configuration.

    Returns:
        ContentOptimizationResult.
    """
    options = AnalysisOptions(
        title=title,
        content_type=content_type,
        target_keywords=list(target_keywords or []),
        exclude_document_id=exclude_document_id,
    )
    return ContentOptimizer(corpus=corpus, config=config).analyze(content, options)
