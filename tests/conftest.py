"""
Pytest fixtures and configuration for SEO Content Analyzer tests.
"""

from datetime import datetime
from pathlib import Path

import pytest
from docx import Document

from seo_content_analyzer.corpus import InMemoryCorpus
from seo_content_analyzer.models import CorpusEntry


@pytest.fixture
def sample_docx(tmp_path: Path) -> Path:
    """Create a sample Word document."""
    docx_path = tmp_path / "sample.docx"
    doc = Document()

    doc.add_heading("Content Marketing Strategy Guide", level=1)
    doc.add_paragraph(
        "This guide covers everything you need to know about content marketing. "
        "We explain the key concepts and help you plan your editorial calendar."
    )
    doc.add_heading("Why Content Marketing Works", level=2)
    doc.add_paragraph(
        "Useful articles attract visitors from search engines & social media. "
        "Readers who trust your content are more likely to become customers."
    )
    doc.add_paragraph("Research your audience", style="List Bullet")
    doc.add_paragraph("Publish on a schedule", style="List Bullet")
    doc.add_heading("Measuring Results", level=2)
    doc.add_paragraph("Track traffic, engagement and conversions for every post.")

    doc.save(str(docx_path))
    return docx_path


@pytest.fixture
def sample_html_content() -> str:
    """Sample HTML page for testing URL extraction."""
    return """
<!DOCTYPE html>
<html>
<head>
    <title>Content Marketing Guide | Example Blog</title>
    <meta name="description" content="Learn how to plan a content marketing strategy.">
    <script>var tracking = "content marketing everywhere";</script>
</head>
<body>
    <header>
        <nav><a href="/">Home</a> <a href="/blog">Blog</a></nav>
    </header>
    <main>
        <h1>Content Marketing Guide</h1>
        <p>Content marketing is the practice of publishing useful articles for your audience.</p>
        <h2>Getting Started</h2>
        <p>Start with keyword research and a simple editorial calendar.</p>
        <img src="/images/calendar.png" alt="Editorial calendar with weekly publishing slots">
    </main>
    <footer>Footer content</footer>
</body>
</html>
"""


@pytest.fixture
def sample_article() -> str:
    """A well-structured article with links and images."""
    return """
<h1>Content Marketing Strategy for Small Teams</h1>
<p>Content marketing helps small teams reach new readers. A clear content marketing
strategy keeps everyone focused. This guide to keyword research explains the basics.</p>
<h2>Keyword Research</h2>
<p>Keyword research shows what your readers search for. Good keyword research saves time.
Read our <a href="/blog/seo-basics">SEO basics</a> post before you start.</p>
<img src="/images/keywords.png" alt="Spreadsheet of keyword research results by volume">
<h2>Editorial Calendar</h2>
<p>An editorial calendar turns ideas into a publishing schedule. Google Search Console
shows which posts perform well. Plan each post around one topic.</p>
<h3>Weekly Planning</h3>
<p>Review the calendar every week. Move slow topics to later dates.</p>
"""


@pytest.fixture
def corpus_entries() -> list[CorpusEntry]:
    """Published posts on related topics."""
    return [
        CorpusEntry(
            id="post-1",
            title="The Complete Keyword Research Guide",
            slug="keyword-research-guide",
            content="<p>Keyword research is the foundation of content marketing.</p>",
            excerpt="How to do keyword research for blog posts.",
            tags=["keyword research", "seo"],
            keywords="keyword research, search volume",
            category_name="SEO",
            view_count=250,
            published_at=datetime(2024, 3, 1),
        ),
        CorpusEntry(
            id="post-2",
            title="Building an Editorial Calendar",
            slug="editorial-calendar",
            content="<p>An editorial calendar keeps your publishing schedule on track.</p>",
            excerpt="Plan posts weeks ahead.",
            tags=["planning"],
            keywords="editorial calendar",
            category_name="Content Strategy",
            view_count=40,
            published_at=datetime(2024, 2, 1),
        ),
        CorpusEntry(
            id="post-3",
            title="Content Marketing Metrics That Matter",
            slug="content-marketing-metrics",
            content="<p>Measure content marketing with traffic and conversions.</p>",
            excerpt="Which numbers to track.",
            tags=["content marketing", "analytics"],
            keywords="content marketing, metrics",
            category_name="Analytics",
            view_count=120,
            published_at=datetime(2024, 1, 15),
        ),
        CorpusEntry(
            id="post-4",
            title="Baking Sourdough at Home",
            slug="sourdough",
            content="<p>Flour, water and patience.</p>",
            excerpt="A bread recipe.",
            tags=["baking"],
            keywords="sourdough",
            category_name="Recipes",
            view_count=900,
            published_at=datetime(2023, 12, 1),
        ),
    ]


@pytest.fixture
def corpus(corpus_entries: list[CorpusEntry]) -> InMemoryCorpus:
    """In-memory corpus of the sample posts."""
    return InMemoryCorpus(corpus_entries)


@pytest.fixture
def corpus_csv(tmp_path: Path) -> Path:
    """Corpus export as CSV with non-canonical column names."""
    csv_path = tmp_path / "posts.csv"
    csv_path.write_text(
        "Post ID,Title,Slug,Body,Excerpt,Tags,SEO Keywords,Category,Views,Published At\n"
        'a1,Keyword Research Guide,keyword-research,<p>Research basics</p>,Basics,'
        '"seo, keyword research",keyword research,SEO,150,2024-03-01\n'
        "a2,Editorial Calendar,editorial-calendar,<p>Plan posts</p>,,planning,,Strategy,,\n"
    )
    return csv_path
