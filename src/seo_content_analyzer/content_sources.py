"""
Content loading from various sources (URLs, Word documents and local files).

Every source is turned into HTML markup, the input format of the analyzers:
- Web URLs are fetched with requests and reduced to their main content
- Word documents (.docx) are converted paragraph by paragraph
- .html/.htm files are read as they are
- .txt/.md files become paragraphs, with markdown "#" lines as headings
"""

import html
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup
from docx import Document

logger = logging.getLogger(__name__)

# Default headers for web requests
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

HTML_SUFFIXES = (".html", ".htm")
TEXT_SUFFIXES = (".txt", ".md", ".markdown")

_MARKDOWN_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*$")
_CONTENT_CLASS_RE = re.compile(r"content|post|entry|article", re.I)


class ContentExtractionError(Exception):
    """Raised when content extraction fails."""
    pass


@dataclass
class LoadedContent:
    """Markup ready for analysis, with the title found in the source."""
    markup: str
    source: str
    title: Optional[str] = None


def fetch_url_content(url: str, timeout: int = 30) -> LoadedContent:
    """
    Fetch a web page and extract its main content markup.

    Args:
        url: The URL to fetch content from.
        timeout: Request timeout in seconds.

    Returns:
        LoadedContent with the main content element's markup.

    Raises:
        ContentExtractionError: If fetching or parsing fails.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ContentExtractionError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ContentExtractionError(f"Failed to fetch URL: {e}")

    soup = BeautifulSoup(response.text, "lxml")

    title = None
    title_tag = soup.find("title")
    if title_tag:
        title = " ".join(title_tag.get_text(separator=" ", strip=True).split()) or None

    for tag in soup.find_all(["script", "style", "noscript", "iframe", "nav"]):
        tag.decompose()

    main_content = (
        soup.find("main")
        or soup.find("article")
        or soup.find("div", class_=_CONTENT_CLASS_RE)
        or soup.body
    )
    if main_content is None:
        raise ContentExtractionError(f"No content found at {url}")

    markup = main_content.decode_contents() if main_content.name == "body" else str(main_content)
    logger.info(f"Fetched {url}: {len(markup)} characters of content markup")
    return LoadedContent(markup=markup, source=url, title=title)


def _docx_style_to_tag(style_name: Optional[str]) -> str:
    """
    Map a Word paragraph style to an HTML tag.

    Args:
        style_name: Word style name.

    Returns:
        h1-h6, li or p.
    """
    if not style_name:
        return "p"

    style_lower = style_name.lower()

    if style_lower.startswith("heading"):
        try:
            level = int(style_lower.replace("heading", "").strip())
            if 1 <= level <= 6:
                return f"h{level}"
        except ValueError:
            pass
        return "h2"

    if style_lower == "title":
        return "h1"

    if "list" in style_lower or "bullet" in style_lower:
        return "li"

    return "p"


def _wrap_list_items(elements: list[tuple[str, str]]) -> str:
    """Join (tag, escaped text) pairs, wrapping runs of list items in <ul>."""
    parts: list[str] = []
    in_list = False
    for tag, text in elements:
        if tag == "li" and not in_list:
            parts.append("<ul>")
            in_list = True
        elif tag != "li" and in_list:
            parts.append("</ul>")
            in_list = False
        parts.append(f"<{tag}>{text}</{tag}>")
    if in_list:
        parts.append("</ul>")
    return "\n".join(parts)


def load_docx_content(file_path: Union[str, Path]) -> LoadedContent:
    """
    Load a Word document as HTML markup.

    Args:
        file_path: Path to the .docx file.

    Returns:
        LoadedContent. The title is the first level-1 heading, if any.

    Raises:
        ContentExtractionError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise ContentExtractionError(f"File not found: {file_path}")

    if not path.suffix.lower() == ".docx":
        raise ContentExtractionError(f"File must be a .docx file: {file_path}")

    try:
        doc = Document(str(path))
    except Exception as e:
        raise ContentExtractionError(f"Failed to open Word document: {e}")

    elements: list[tuple[str, str]] = []
    title = None

    for para in doc.paragraphs:
        text = para.text.strip()
        if not text:
            continue

        tag = _docx_style_to_tag(para.style.name if para.style else None)
        if tag == "h1" and title is None:
            title = text
        elements.append((tag, html.escape(text, quote=False)))

    return LoadedContent(markup=_wrap_list_items(elements), source=str(path), title=title)


def _text_to_markup(text: str) -> tuple[str, Optional[str]]:
    """Convert plain text or markdown into paragraph and heading markup."""
    parts: list[str] = []
    title = None

    for block in re.split(r"\n\s*\n", text):
        lines = [line.strip() for line in block.strip().splitlines() if line.strip()]
        paragraph: list[str] = []
        for line in lines:
            heading = _MARKDOWN_HEADING_RE.match(line)
            if not heading:
                paragraph.append(line)
                continue
            if paragraph:
                parts.append(f"<p>{html.escape(' '.join(paragraph), quote=False)}</p>")
                paragraph = []
            level = len(heading.group(1))
            heading_text = heading.group(2)
            if level == 1 and title is None:
                title = heading_text
            parts.append(f"<h{level}>{html.escape(heading_text, quote=False)}</h{level}>")
        if paragraph:
            parts.append(f"<p>{html.escape(' '.join(paragraph), quote=False)}</p>")

    return "\n".join(parts), title


def load_file_content(file_path: Union[str, Path]) -> LoadedContent:
    """
    Load an HTML, text or markdown file.

    Raises:
        ContentExtractionError: If the file is missing, unreadable or of an
            unsupported type.
    """
    path = Path(file_path)
    if not path.exists():
        raise ContentExtractionError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix not in HTML_SUFFIXES + TEXT_SUFFIXES:
        raise ContentExtractionError(f"Unsupported file type: {suffix}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContentExtractionError(f"Failed to read file: {e}")

    if suffix in HTML_SUFFIXES:
        soup = BeautifulSoup(text, "lxml")
        title_tag = soup.find("title") or soup.find("h1")
        title = title_tag.get_text(" ", strip=True) if title_tag else None
        return LoadedContent(markup=text, source=str(path), title=title or None)

    markup, title = _text_to_markup(text)
    return LoadedContent(markup=markup, source=str(path), title=title)


def load_content(source: str) -> LoadedContent:
    """
    Load content from a URL or a file path.

    Args:
        source: http(s) URL, .docx path, or .html/.htm/.txt/.md path.

    Returns:
        LoadedContent with markup ready for analysis.

    Raises:
        ContentExtractionError: If the source is invalid or cannot be loaded.
    """
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        return fetch_url_content(source)

    path = Path(source)
    suffix = path.suffix.lower()
    if suffix == ".docx":
        return load_docx_content(path)
    if suffix in HTML_SUFFIXES + TEXT_SUFFIXES:
        return load_file_content(path)

    raise ContentExtractionError(
        f"Invalid source: {source}. Must be a URL (http/https), a .docx file, "
        f"or an .html, .htm, .txt or .md file."
    )
