"""
Read-only access to the corpus of published documents.

The link suggestion engine only depends on the CorpusRepository interface.
This module provides an in-memory implementation and a loader that builds
one from CSV, Excel or JSON exports of a content store.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import pandas as pd

from .models import CorpusEntry

logger = logging.getLogger(__name__)


class CorpusLoadError(Exception):
    """Raised when a corpus file cannot be read or parsed."""
    pass


class CorpusRepository(ABC):
    """Read-only source of published, non-deleted documents."""

    @abstractmethod
    def list_published(self, exclude_id: Optional[str] = None) -> list[CorpusEntry]:
        """Return all published documents, optionally excluding one id."""
        ...

    @abstractmethod
    def get(self, document_id: str) -> Optional[CorpusEntry]:
        """Return a single document by id, or None."""
        ...


class InMemoryCorpus(CorpusRepository):
    """Corpus held in memory, newest and most viewed documents first."""

    def __init__(self, entries: Iterable[CorpusEntry] = ()):
        self._entries: dict[str, CorpusEntry] = {}
        for entry in entries:
            self._entries[entry.id] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: CorpusEntry) -> None:
        self._entries[entry.id] = entry

    def get(self, document_id: str) -> Optional[CorpusEntry]:
        return self._entries.get(document_id)

    def list_published(self, exclude_id: Optional[str] = None) -> list[CorpusEntry]:
        entries = [e for e in self._entries.values() if e.id != exclude_id]
        # publishedAt desc, then viewCount desc; undated entries last
        entries.sort(key=lambda e: -e.view_count)
        entries.sort(
            key=lambda e: e.published_at.timestamp() if e.published_at else float("-inf"),
            reverse=True,
        )
        return entries


# Common column name variations in content exports
ID_COLUMN_VARIANTS = ["id", "post_id", "document_id", "uuid"]
TITLE_COLUMN_VARIANTS = ["title", "post_title", "name"]
SLUG_COLUMN_VARIANTS = ["slug", "permalink", "path"]
CONTENT_COLUMN_VARIANTS = ["content", "body", "html", "post_content"]
EXCERPT_COLUMN_VARIANTS = ["excerpt", "summary", "description"]
TAGS_COLUMN_VARIANTS = ["tags", "tag", "labels"]
KEYWORDS_COLUMN_VARIANTS = ["seo_keywords", "keywords", "focus_keywords"]
CATEGORY_COLUMN_VARIANTS = ["category_name", "category"]
VIEWS_COLUMN_VARIANTS = ["view_count", "views", "viewcount", "pageviews"]
PUBLISHED_COLUMN_VARIANTS = ["published_at", "publishedat", "published", "date"]


def _normalize_column_name(name: str) -> str:
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """
    Find a column in the DataFrame matching one of the variant names.

    Args:
        df: The DataFrame to search.
        variants: List of possible column name variants.

    Returns:
        The actual column name if found, None otherwise.
    """
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}
    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]
    return None


def _cell(row: pd.Series, column: Optional[str]) -> Any:
    """Value of a cell, with missing columns and NaN mapped to None."""
    if column is None:
        return None
    value = row[column]
    if isinstance(value, (list, tuple)):
        return value
    if pd.isna(value):
        return None
    return value


def _parse_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(t).strip() for t in value if str(t).strip()]
    return [t.strip() for t in str(value).split(",") if t.strip()]


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    try:
        timestamp = pd.to_datetime(value)
    except (ValueError, TypeError):
        logger.debug(f"Ignoring unparseable publish date: {value!r}")
        return None
    if pd.isna(timestamp):
        return None
    return timestamp.to_pydatetime()


def _parse_corpus_dataframe(df: pd.DataFrame) -> list[CorpusEntry]:
    """
    Parse a DataFrame into CorpusEntry objects.

    Raises:
        CorpusLoadError: If the id or title column is missing.
    """
    if df.empty:
        return []

    id_col = _find_column(df, ID_COLUMN_VARIANTS)
    title_col = _find_column(df, TITLE_COLUMN_VARIANTS)
    if id_col is None or title_col is None:
        raise CorpusLoadError(
            f"Corpus must have id and title columns. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )

    slug_col = _find_column(df, SLUG_COLUMN_VARIANTS)
    content_col = _find_column(df, CONTENT_COLUMN_VARIANTS)
    excerpt_col = _find_column(df, EXCERPT_COLUMN_VARIANTS)
    tags_col = _find_column(df, TAGS_COLUMN_VARIANTS)
    keywords_col = _find_column(df, KEYWORDS_COLUMN_VARIANTS)
    category_col = _find_column(df, CATEGORY_COLUMN_VARIANTS)
    views_col = _find_column(df, VIEWS_COLUMN_VARIANTS)
    published_col = _find_column(df, PUBLISHED_COLUMN_VARIANTS)

    entries: list[CorpusEntry] = []
    for _, row in df.iterrows():
        doc_id = _cell(row, id_col)
        title = _cell(row, title_col)
        if doc_id is None or title is None:
            continue

        views = _cell(row, views_col)
        try:
            view_count = int(views) if views is not None else 0
        except (ValueError, TypeError):
            view_count = 0

        entries.append(CorpusEntry(
            id=str(doc_id),
            title=str(title).strip(),
            slug=str(_cell(row, slug_col) or "").strip(),
            content=str(_cell(row, content_col) or ""),
            excerpt=_cell(row, excerpt_col),
            tags=_parse_tags(_cell(row, tags_col)),
            keywords=_cell(row, keywords_col),
            category_name=_cell(row, category_col),
            view_count=view_count,
            published_at=_parse_datetime(_cell(row, published_col)),
        ))

    return entries


def load_corpus(file_path: Union[str, Path]) -> InMemoryCorpus:
    """
    Load a corpus from a CSV, Excel or JSON file.

    Args:
        file_path: Path to the export file.

    Returns:
        InMemoryCorpus with one entry per row.

    Raises:
        CorpusLoadError: If the file is missing, unsupported or malformed.
    """
    path = Path(file_path)
    if not path.exists():
        raise CorpusLoadError(f"File not found: {file_path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            df = pd.read_csv(path, encoding="utf-8")
        elif suffix in (".xlsx", ".xls"):
            df = pd.read_excel(path)
        elif suffix == ".json":
            df = pd.read_json(path)
        else:
            raise CorpusLoadError(
                f"Unsupported corpus file type: {suffix}. Use .csv, .xlsx, .xls or .json"
            )
    except CorpusLoadError:
        raise
    except Exception as e:
        raise CorpusLoadError(f"Failed to read corpus file: {e}")

    entries = _parse_corpus_dataframe(df)
    logger.info(f"Loaded {len(entries)} corpus documents from {path}")
    return InMemoryCorpus(entries)
