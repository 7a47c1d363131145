"""Tests for content source loading functionality."""

import pytest
from pathlib import Path
from unittest.mock import Mock, patch

import requests

from seo_content_analyzer.content_sources import (
    ContentExtractionError,
    LoadedContent,
    fetch_url_content,
    load_content,
    load_docx_content,
    load_file_content,
)


class TestLoadDocxContent:
    """Tests for Word document loading."""

    def test_load_valid_docx(self, sample_docx: Path):
        """Test loading a valid Word document."""
        content = load_docx_content(sample_docx)

        assert isinstance(content, LoadedContent)
        assert content.source == str(sample_docx)
        assert content.title == "Content Marketing Strategy Guide"

    def test_docx_headings(self, sample_docx: Path):
        """Test that heading styles become heading tags."""
        markup = load_docx_content(sample_docx).markup

        assert "<h1>Content Marketing Strategy Guide</h1>" in markup
        assert "<h2>Why Content Marketing Works</h2>" in markup
        assert "<h2>Measuring Results</h2>" in markup

    def test_docx_lists_and_escaping(self, sample_docx: Path):
        """Test list wrapping and HTML escaping of paragraph text."""
        markup = load_docx_content(sample_docx).markup

        assert "<ul>" in markup
        assert "<li>Research your audience</li>" in markup
        assert "<li>Publish on a schedule</li>" in markup
        assert "search engines &amp; social media" in markup

    def test_load_nonexistent_docx(self, tmp_path: Path):
        """Test loading non-existent file."""
        with pytest.raises(ContentExtractionError, match="File not found"):
            load_docx_content(tmp_path / "nonexistent.docx")

    def test_load_non_docx_file(self, tmp_path: Path):
        """Test loading non-docx file."""
        txt_path = tmp_path / "file.txt"
        txt_path.write_text("Not a docx")

        with pytest.raises(ContentExtractionError, match="must be a .docx file"):
            load_docx_content(txt_path)


class TestFetchUrlContent:
    """Tests for URL content fetching."""

    def test_invalid_url(self):
        """Test that invalid URLs raise errors."""
        with pytest.raises(ContentExtractionError, match="Invalid URL"):
            fetch_url_content("not-a-url")

    @patch("seo_content_analyzer.content_sources.requests.get")
    def test_fetch_url_extracts_main_content(self, mock_get, sample_html_content: str):
        """Test that the main element is kept and page chrome dropped."""
        mock_response = Mock()
        mock_response.text = sample_html_content
        mock_get.return_value = mock_response

        content = fetch_url_content("https://example.com/blog/content-marketing")

        assert content.title == "Content Marketing Guide | Example Blog"
        assert "<h1>Content Marketing Guide</h1>" in content.markup
        assert 'alt="Editorial calendar with weekly publishing slots"' in content.markup
        assert "Footer content" not in content.markup
        assert "tracking" not in content.markup
        assert content.source == "https://example.com/blog/content-marketing"

    @patch("seo_content_analyzer.content_sources.requests.get")
    def test_fetch_url_falls_back_to_body(self, mock_get):
        """Test body fallback when the page has no main content element."""
        mock_response = Mock()
        mock_response.text = "<html><body><nav>Menu</nav><p>Hello there</p></body></html>"
        mock_get.return_value = mock_response

        content = fetch_url_content("https://example.com/")

        assert "<p>Hello there</p>" in content.markup
        assert "Menu" not in content.markup
        assert content.title is None

    @patch("seo_content_analyzer.content_sources.requests.get")
    def test_fetch_url_request_error(self, mock_get):
        """Test that request errors are wrapped."""
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ContentExtractionError, match="Failed to fetch URL"):
            fetch_url_content("https://example.com/")


class TestLoadFileContent:
    """Tests for HTML, text and markdown files."""

    def test_markdown(self, tmp_path: Path):
        """Test markdown headings and paragraphs."""
        md_path = tmp_path / "notes.md"
        md_path.write_text(
            "# Launch Notes\n\nFirst paragraph line one\nline two.\n\n## Details\nMore text.\n"
        )

        content = load_file_content(md_path)

        assert content.title == "Launch Notes"
        assert content.markup == (
            "<h1>Launch Notes</h1>\n"
            "<p>First paragraph line one line two.</p>\n"
            "<h2>Details</h2>\n"
            "<p>More text.</p>"
        )

    def test_html_file(self, tmp_path: Path, sample_html_content: str):
        """Test that HTML files are read as they are."""
        html_path = tmp_path / "page.html"
        html_path.write_text(sample_html_content)

        content = load_file_content(html_path)

        assert content.markup == sample_html_content
        assert content.title == "Content Marketing Guide | Example Blog"

    def test_unsupported_file(self, tmp_path: Path):
        """Test unsupported file types."""
        pdf_path = tmp_path / "doc.pdf"
        pdf_path.write_text("%PDF")

        with pytest.raises(ContentExtractionError, match="Unsupported file type"):
            load_file_content(pdf_path)


class TestLoadContent:
    """Tests for the unified content loader."""

    def test_load_docx_path(self, sample_docx: Path):
        """Test loading content from docx path."""
        content = load_content(str(sample_docx))
        assert "<h1>" in content.markup

    def test_load_text_path(self, tmp_path: Path):
        """Test loading content from a text file."""
        txt_path = tmp_path / "draft.txt"
        txt_path.write_text("Plain words & more.")

        assert load_content(str(txt_path)).markup == "<p>Plain words &amp; more.</p>"

    def test_invalid_source(self):
        """Test that invalid sources raise errors."""
        with pytest.raises(ContentExtractionError, match="Invalid source"):
            load_content("not-a-valid-source.pdf")
