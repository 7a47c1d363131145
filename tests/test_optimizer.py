"""Tests for the content optimization orchestrator."""

import json
from typing import Optional
from unittest.mock import patch

import pytest

from seo_content_analyzer.corpus import CorpusRepository
from seo_content_analyzer.models import (
    AnalysisOptions,
    CorpusEntry,
    LengthStatus,
    ReadabilityReport,
)
from seo_content_analyzer.optimizer import (
    ContentOptimizationError,
    ContentOptimizer,
    analyze_content,
)


class FailingCorpus(CorpusRepository):
    """Corpus whose storage is unavailable."""

    def list_published(self, exclude_id: Optional[str] = None) -> list[CorpusEntry]:
        raise RuntimeError("database offline")

    def get(self, document_id: str) -> Optional[CorpusEntry]:
        raise RuntimeError("database offline")


def _without_timing(result) -> dict:
    data = result.to_dict()
    data.pop("processing_time_ms")
    return data


class TestContentOptimizer:
    """Tests for ContentOptimizer.analyze."""

    def test_short_guide(self):
        """Test a short guide end to end."""
        result = ContentOptimizer().analyze(
            "<h1>Title</h1><p>Short content.</p>",
            AnalysisOptions(content_type="guide"),
        )

        assert result.content_length.status == LengthStatus.TOO_SHORT
        assert result.content_length.recommended_range.min == 2000
        assert result.content_length.recommended_range.max == 4000
        assert result.warnings == [
            "Content is very short (3 words); results are more reliable above 50 words"
        ]
        assert "Content is too short" in result.summary.issues
        assert 0 <= result.overall_score <= 100

    def test_full_article(self, sample_article, corpus):
        """Test an article with a corpus for link suggestions."""
        result = ContentOptimizer(corpus=corpus).analyze(
            sample_article,
            AnalysisOptions(title="Content Marketing", target_keywords=["keyword research"]),
        )

        assert result.heading_structure.is_valid
        assert result.image_validation.compliance_score == 100
        assert result.internal_linking.current_internal_links == 1
        assert result.internal_linking.suggestions
        assert result.keyword_analysis.target_keyword_results[0].keyword == "keyword research"
        assert result.title == "Content Marketing"
        assert result.to_dict()["title"] == "Content Marketing"
        assert set(result.component_scores) == {
            "readability", "heading_structure", "content_length",
            "keyword_density", "image_validation", "internal_linking",
        }

    def test_idempotent(self, sample_article, corpus):
        """Test that the same input gives the same result."""
        optimizer = ContentOptimizer(corpus=corpus)
        options = AnalysisOptions(content_type="tutorial")

        first = optimizer.analyze(sample_article, options)
        second = optimizer.analyze(sample_article, options)

        assert _without_timing(first) == _without_timing(second)

    def test_without_corpus(self, sample_article):
        """Test that link suggestions are skipped without a corpus."""
        result = ContentOptimizer().analyze(sample_article)

        assert result.internal_linking.suggestions == []
        assert result.warnings == []

    def test_empty_content(self):
        """Test that empty content is reported, not raised."""
        result = ContentOptimizer().analyze("")

        assert result.warnings[0] == "Content is empty; analysis results are not meaningful"
        assert result.keyword_analysis.total_words == 0

    def test_markup_without_text(self):
        """Test markup with no readable words."""
        result = ContentOptimizer().analyze('<img src="a.png" alt="Sunset over the harbor">')
        assert result.warnings == ["Content contains no readable text"]

    def test_corpus_failure_degrades_suggestions(self, sample_article):
        """Test that a corpus failure is a warning, not an error."""
        result = ContentOptimizer(corpus=FailingCorpus()).analyze(sample_article)

        assert result.internal_linking.suggestions == []
        assert "Error generating link suggestions: database offline" in result.warnings

    def test_analyzer_failure_is_isolated(self, sample_article):
        """Test that one failing analyzer does not fail the analysis."""
        with patch(
            "seo_content_analyzer.optimizer.calculate_readability",
            side_effect=RuntimeError("boom"),
        ):
            result = ContentOptimizer().analyze(sample_article)

        assert "Readability analysis failed: boom" in result.warnings
        assert result.component_scores["readability"] == 50.0
        assert result.readability == ReadabilityReport()
        assert "Readability analysis could not be completed" in result.summary.issues
        assert result.heading_structure.is_valid

    def test_aggregation_failure_raises(self, sample_article):
        """Test that failures outside the analyzers raise."""
        with patch(
            "seo_content_analyzer.optimizer.calculate_overall_score",
            side_effect=ValueError("bad weights"),
        ):
            with pytest.raises(ContentOptimizationError, match="bad weights"):
                ContentOptimizer().analyze(sample_article)

    def test_to_dict_is_json_serializable(self, sample_article, corpus):
        """Test that the report serializes to JSON."""
        result = ContentOptimizer(corpus=corpus).analyze(sample_article)
        data = json.loads(json.dumps(result.to_dict()))

        assert data["overall_score"] == result.overall_score
        assert data["content_length"]["status"] == result.content_length.status.value
        assert data["image_validation"]["invalid_images"] == 0

    def test_invalid_worker_count(self):
        """Test that the thread pool needs at least one worker."""
        with pytest.raises(ValueError):
            ContentOptimizer(max_workers=0)


class TestAnalyzeContent:
    """Tests for the analyze_content convenience function."""

    def test_excludes_own_document(self, corpus, corpus_entries):
        """Test that the analyzed document is not suggested to itself."""
        result = analyze_content(
            corpus_entries[0].content,
            content_type="news",
            exclude_document_id="post-1",
            corpus=corpus,
        )

        assert "post-1" not in [s.target_id for s in result.internal_linking.suggestions]
        assert result.content_length.content_type == "news"
