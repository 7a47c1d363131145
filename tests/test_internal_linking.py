"""Tests for internal link frequency analysis."""

import pytest

from seo_content_analyzer.internal_linking import analyze_link_frequency, count_internal_links
from seo_content_analyzer.models import LinkingStatus


def _article(word_count: int, links: int) -> str:
    anchors = "".join(f'<a href="/blog/post-{i}">x</a> ' for i in range(links))
    return "<p>" + " ".join(["word"] * word_count) + "</p><p>" + anchors + "</p>"


class TestCountInternalLinks:
    """Tests for count_internal_links."""

    def test_only_site_links_counted(self):
        """Test that external, fragment and mailto links are ignored."""
        markup = (
            '<a href="/blog/one">a</a>'
            '<a href="related-post">b</a>'
            '<a href="https://example.org">c</a>'
            '<a href="#top">d</a>'
            "<a href='mailto:me@example.com'>e</a>"
        )
        assert count_internal_links(markup) == 2

    def test_empty(self):
        """Test empty content."""
        assert count_internal_links("") == 0


class TestAnalyzeLinkFrequency:
    """Tests for analyze_link_frequency."""

    def test_under_linked(self):
        """Test that 600 words without links is under-linked."""
        result = analyze_link_frequency(_article(600, 0))

        assert result.recommended_count == 2
        assert result.status == LinkingStatus.UNDER_LINKED
        assert "Add more internal links" in result.recommendations[0]

    def test_optimal(self):
        """Test that the recommended number of links is optimal."""
        result = analyze_link_frequency(_article(600, 2))

        assert result.current_internal_links == 2
        assert result.status == LinkingStatus.OPTIMAL
        assert result.link_density == pytest.approx(2 / 600 * 1000)

    def test_over_linked(self):
        """Test that far more links than recommended is over-linked."""
        result = analyze_link_frequency(_article(600, 5))
        assert result.status == LinkingStatus.OVER_LINKED

    def test_empty_content(self):
        """Test that empty content does not divide by zero."""
        result = analyze_link_frequency("")

        assert result.recommended_count == 0
        assert result.link_density == 0.0
