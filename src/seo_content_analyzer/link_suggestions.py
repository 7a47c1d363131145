"""
Internal link suggestion engine.

Pipeline:
1. Extract signals from the source document: frequent keywords, capitalized
   entity sequences and pattern-based topics.
2. Locate every occurrence of those signals in the plain text, skipping
   text that is already inside a link.
3. Drop overlapping candidate spans, keeping the most confident one.
4. Score each candidate against every corpus document and keep the best
   match above the relevance threshold.
5. Rank, drop duplicate targets and excluded URLs, and truncate.

The corpus is read through the CorpusRepository interface. Corpus failures
never propagate: they are reported in LinkSuggestionResult.warnings.
"""

import logging
import re
import time
from collections import Counter
from typing import Iterable, Optional

from .config import LinkSuggestionConfig
from .corpus import CorpusRepository
from .models import (
    CandidateType,
    ContentSignals,
    CorpusEntry,
    LinkCandidate,
    LinkSuggestion,
    LinkSuggestionResult,
    Sentiment,
)
from .scoring import round_half_up
from .text_normalizer import split_sentences, strip_markup_with_link_spans

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "up", "about", "into", "through", "during", "before",
    "after", "above", "below", "between", "among", "this", "that", "these",
    "those", "is", "are", "was", "were", "be", "been", "being", "have", "has",
    "had", "do", "does", "did", "will", "would", "should", "could", "can", "may",
})

CANDIDATE_CONFIDENCE = {
    CandidateType.KEYWORD: 80,
    CandidateType.ENTITY: 70,
    CandidateType.TOPIC: 60,
}

# Relevance weights per matching field
TITLE_MATCH_SCORE = 40
SEO_KEYWORD_MATCH_SCORE = 30
TAG_MATCH_SCORE = 25
EXCERPT_MATCH_SCORE = 20
CATEGORY_MATCH_SCORE = 15
CONTENT_OVERLAP_MAX_SCORE = 15

_TOPIC_PATTERNS = [
    re.compile(
        r"\b(?:guide|tutorial|introduction|overview)\s+(?:to|of|on|for)\s+(\w+(?:\s+\w+)?)",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:how\s+to|tips\s+for|best\s+practices\s+for|understanding)\s+(\w+(?:\s+\w+)?)",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(\w+\s+(?:marketing|strategy|development|design|optimization))\b",
        re.IGNORECASE,
    ),
]

_CAPITALIZED_RE = re.compile(r"^[A-Z][a-z]+$")
_NON_LETTER_RE = re.compile(r"[^a-zA-Z]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_NON_ALNUM_SPACE_RE = re.compile(r"[^a-z0-9\s]")

POSITIVE_WORDS = frozenset({
    "good", "great", "excellent", "amazing", "wonderful", "best", "effective", "successful",
})
NEGATIVE_WORDS = frozenset({
    "bad", "terrible", "awful", "worst", "failed", "problem", "issue", "difficult",
})


# =============================================================================
# Content signals
# =============================================================================

def extract_keywords(text: str, max_keywords: int = 10) -> list[str]:
    """
    Frequency-ranked keywords: single words longer than three characters
    and two-word phrases, both without stop words.

    Args:
        text: Plain text.
        max_keywords: Number of keywords to return.

    Returns:
        Keywords sorted by frequency, most frequent first.
    """
    words = text.lower().split()
    counts: Counter = Counter()

    for word in words:
        cleaned = _NON_ALNUM_RE.sub("", word)
        if len(cleaned) > 3 and cleaned not in STOP_WORDS:
            counts[cleaned] += 1

    for first, second in zip(words, words[1:]):
        cleaned = _NON_ALNUM_SPACE_RE.sub("", f"{first} {second}").strip()
        parts = cleaned.split(" ")
        if len(parts) == 2 and all(len(p) > 2 and p not in STOP_WORDS for p in parts):
            counts[cleaned] += 1

    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [term for term, _ in ranked[:max_keywords]]


def extract_entities(text: str, max_entities: int = 10) -> list[str]:
    """
    Capitalized word sequences that look like proper nouns.

    "Google Search Console" yields the full sequence plus its tails
    ("Search Console", "Console") as each word starts its own scan.
    """
    words = text.split()
    entities: list[str] = []

    for i, raw in enumerate(words):
        word = _NON_LETTER_RE.sub("", raw)
        if len(word) <= 2 or not _CAPITALIZED_RE.match(word):
            continue

        parts = [word]
        for following in words[i + 1:]:
            cleaned = _NON_LETTER_RE.sub("", following)
            if not _CAPITALIZED_RE.match(cleaned):
                break
            parts.append(cleaned)

        entity = " ".join(parts)
        if len(entity) > 3:
            entities.append(entity)

    return list(dict.fromkeys(entities))[:max_entities]


def extract_topics(text: str, keywords: Optional[list[str]] = None, max_topics: int = 8) -> list[str]:
    """
    Topics from phrase templates ("guide to X", "X marketing") plus the
    five most frequent keywords.
    """
    topics: list[str] = []

    for pattern in _TOPIC_PATTERNS:
        for match in pattern.finditer(text):
            tokens = match.group(1).lower().split()
            while tokens and tokens[0] in STOP_WORDS:
                tokens.pop(0)
            topic = " ".join(tokens)
            if len(topic) > 3:
                topics.append(topic)

    if keywords is None:
        keywords = extract_keywords(text, 20)
    topics.extend(keywords[:5])

    return list(dict.fromkeys(topics))[:max_topics]


def analyze_sentiment(text: str) -> Sentiment:
    """Word-list sentiment: more positive than negative words is positive."""
    words = text.lower().split()
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def estimate_reading_level(text: str) -> float:
    """Rough reading level: words per sentence plus vowels per word, clamped to 1-20."""
    sentences = split_sentences(text)
    words = text.split()
    if not sentences or not words:
        return 0.0
    vowels = sum(1 for ch in text if ch in "aeiouAEIOU")
    return max(1.0, min(20.0, len(words) / len(sentences) + vowels / len(words)))


def extract_content_signals(text: str, config: Optional[LinkSuggestionConfig] = None) -> ContentSignals:
    """Extract keywords, entities, topics, sentiment and reading level from plain text."""
    config = config or LinkSuggestionConfig()
    keywords = extract_keywords(text, config.max_keywords)
    return ContentSignals(
        keywords=keywords,
        entities=extract_entities(text, config.max_entities),
        topics=extract_topics(text, extract_keywords(text, 20), config.max_topics),
        sentiment=analyze_sentiment(text),
        reading_level=estimate_reading_level(text),
    )


# =============================================================================
# Candidate spans
# =============================================================================

def find_link_candidates(
    text: str,
    signals: ContentSignals,
    linked_spans: Iterable[tuple[int, int]] = (),
    context_window: int = 50,
) -> list[LinkCandidate]:
    """
    Locate every occurrence of the signals in the text.

    Args:
        text: Plain text of the document.
        signals: Extracted keywords, entities and topics.
        linked_spans: (start, end) ranges already inside links.
        context_window: Characters of context on each side.

    Returns:
        Non-overlapping candidates ordered by position.
    """
    linked_spans = list(linked_spans)
    candidates: list[LinkCandidate] = []

    sources = [
        (CandidateType.KEYWORD, signals.keywords),
        (CandidateType.ENTITY, signals.entities),
        (CandidateType.TOPIC, signals.topics),
    ]
    for candidate_type, terms in sources:
        for term in terms:
            pattern = re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
            for match in pattern.finditer(text):
                if _is_linked(match.start(), match.end(), linked_spans):
                    continue
                start = max(0, match.start() - context_window)
                end = min(len(text), match.start() + context_window)
                candidates.append(LinkCandidate(
                    text=match.group(0),
                    position=match.start(),
                    context=text[start:end].strip(),
                    type=candidate_type,
                    confidence=CANDIDATE_CONFIDENCE[candidate_type],
                ))

    return deduplicate_candidates(candidates)


def _is_linked(start: int, end: int, linked_spans: list[tuple[int, int]]) -> bool:
    """True when [start, end) overlaps any linked span."""
    return any(start < span_end and span_start < end for span_start, span_end in linked_spans)


def deduplicate_candidates(candidates: list[LinkCandidate]) -> list[LinkCandidate]:
    """
    Remove overlapping spans, keeping the highest-confidence candidate.

    Returns:
        Surviving candidates sorted by position.
    """
    kept: list[LinkCandidate] = []
    for candidate in sorted(candidates, key=lambda c: -c.confidence):
        overlaps = any(
            candidate.position < other.end and other.position < candidate.end
            for other in kept
        )
        if not overlaps:
            kept.append(candidate)
    return sorted(kept, key=lambda c: c.position)


# =============================================================================
# Relevance scoring
# =============================================================================

def _content_words(entry: CorpusEntry) -> frozenset[str]:
    text, _ = strip_markup_with_link_spans(entry.content or "")
    return frozenset(w for w in text.lower().split() if w)


def calculate_relevance(
    candidate: LinkCandidate,
    entry: CorpusEntry,
    config: Optional[LinkSuggestionConfig] = None,
    content_words: Optional[frozenset[str]] = None,
) -> int:
    """
    Score how well a corpus document matches a candidate span (0-100).

    Field matches add fixed points (title 40, SEO keywords 30, tags 25,
    excerpt 20, category 15) plus up to 15 for content word overlap. The sum
    is scaled by the candidate confidence and boosted 10% for popular
    documents.
    """
    config = config or LinkSuggestionConfig()
    needle = candidate.text.lower()
    score = 0.0

    if needle in (entry.title or "").lower():
        score += TITLE_MATCH_SCORE

    if entry.keywords and needle in entry.keywords.lower():
        score += SEO_KEYWORD_MATCH_SCORE

    tags = [t.lower() for t in entry.tags if t]
    if any(needle in tag or tag in needle for tag in tags):
        score += TAG_MATCH_SCORE

    if content_words is None:
        content_words = _content_words(entry)
    candidate_words = needle.split()
    if candidate_words:
        matching = [
            word for word in candidate_words
            if word in content_words
            or any(word in cw or cw in word for cw in content_words)
        ]
        score += len(matching) / len(candidate_words) * CONTENT_OVERLAP_MAX_SCORE

    if entry.excerpt and needle in entry.excerpt.lower():
        score += EXCERPT_MATCH_SCORE

    if entry.category_name and needle in entry.category_name.lower():
        score += CATEGORY_MATCH_SCORE

    score *= candidate.confidence / 100

    if entry.view_count > config.popular_view_count:
        score *= config.popularity_boost

    return min(100, round_half_up(score))


def link_reason(candidate: LinkCandidate, entry: CorpusEntry, relevance: int) -> str:
    """Short explanation of why a document was suggested."""
    needle = candidate.text.lower()
    if needle in (entry.title or "").lower():
        return "Direct topic match in article title"
    if entry.keywords and needle in entry.keywords.lower():
        return "Keyword match in SEO optimization"
    if any(needle in tag.lower() for tag in entry.tags if tag):
        return "Related tag match"
    if relevance > 70:
        return f"High relevance match ({relevance}% confidence)"
    return "Related content match"


# =============================================================================
# Engine
# =============================================================================

class LinkSuggestionEngine:
    """
    Suggests internal links from a document to other published documents.

    Args:
        corpus: Read-only repository of published documents.
        config: Engine tuning; defaults to LinkSuggestionConfig().
    """

    def __init__(
        self,
        corpus: CorpusRepository,
        config: Optional[LinkSuggestionConfig] = None,
    ):
        self.corpus = corpus
        self.config = config or LinkSuggestionConfig()

    def suggest(
        self,
        content: str,
        exclude_document_id: Optional[str] = None,
        exclude_urls: Iterable[str] = (),
    ) -> LinkSuggestionResult:
        """
        Generate internal link suggestions for a document.

        Args:
            content: HTML markup of the source document.
            exclude_document_id: Corpus id of the source document itself.
            exclude_urls: Target URLs that must not be suggested.

        Returns:
            LinkSuggestionResult. Never raises on corpus failures; the
            problem is reported in warnings instead.
        """
        start_time = time.perf_counter()
        text, linked_spans = strip_markup_with_link_spans(content or "")
        result = LinkSuggestionResult(content_signals=extract_content_signals(text, self.config))

        try:
            entries = self.corpus.list_published(exclude_id=exclude_document_id)
            result.total_analyzed = len(entries)

            if not entries:
                result.warnings.append("No published posts found for link suggestions")
                return result

            candidates = find_link_candidates(
                text, result.content_signals, linked_spans, self.config.context_window
            )
            logger.debug(
                f"Matching {len(candidates)} link candidates against {len(entries)} documents"
            )
            suggestions = self._match_candidates(candidates, entries)
            result.suggestions = self._rank_and_filter(suggestions, exclude_urls)
            result.recommendations = self._quality_recommendations(result.suggestions, len(text))

        except Exception as e:
            logger.warning(f"Link suggestion generation failed: {e}")
            result.suggestions = []
            result.warnings.append(f"Error generating link suggestions: {e}")

        finally:
            result.processing_time_ms = (time.perf_counter() - start_time) * 1000

        return result

    def suggest_bulk(
        self,
        document_ids: Iterable[str],
        exclude_urls: Iterable[str] = (),
    ) -> dict[str, LinkSuggestionResult]:
        """
        Generate suggestions for several corpus documents.

        Each document is excluded from its own candidates. Failures for one
        document produce a result carrying a warning.
        """
        results: dict[str, LinkSuggestionResult] = {}
        exclude_urls = list(exclude_urls)

        for document_id in document_ids:
            try:
                entry = self.corpus.get(document_id)
                if entry is None:
                    results[document_id] = LinkSuggestionResult(
                        warnings=[f"Post {document_id} not found"]
                    )
                    continue
                results[document_id] = self.suggest(
                    entry.content, exclude_document_id=document_id, exclude_urls=exclude_urls
                )
            except Exception as e:
                logger.warning(f"Bulk link suggestions failed for {document_id}: {e}")
                results[document_id] = LinkSuggestionResult(
                    warnings=[f"Error processing post {document_id}: {e}"]
                )

        return results

    def _url_for(self, entry: CorpusEntry) -> str:
        return f"{self.config.url_prefix}{entry.slug}"

    def _match_candidates(
        self,
        candidates: list[LinkCandidate],
        entries: list[CorpusEntry],
    ) -> list[LinkSuggestion]:
        """Best corpus document per candidate, if any clears the threshold."""
        content_words = {entry.id: _content_words(entry) for entry in entries}
        score_cache: dict[tuple[str, int, str], int] = {}
        suggestions: list[LinkSuggestion] = []

        for candidate in candidates:
            best_entry: Optional[CorpusEntry] = None
            best_score = -1

            for entry in entries:
                key = (candidate.text.lower(), candidate.confidence, entry.id)
                if key not in score_cache:
                    score_cache[key] = calculate_relevance(
                        candidate, entry, self.config, content_words[entry.id]
                    )
                score = score_cache[key]
                # Strict comparison keeps the earliest (newest) document on ties
                if score >= self.config.min_relevance_score and score > best_score:
                    best_entry, best_score = entry, score

            if best_entry is None:
                continue

            suggestions.append(LinkSuggestion(
                target_id=best_entry.id,
                anchor_text=candidate.text,
                context_snippet=candidate.context,
                relevance_score=best_score,
                position=candidate.position,
                reason=link_reason(candidate, best_entry, best_score),
                title=best_entry.title,
                slug=best_entry.slug,
                url=self._url_for(best_entry),
                category=best_entry.category_name,
                tags=list(best_entry.tags),
            ))

        return suggestions

    def _rank_and_filter(
        self,
        suggestions: list[LinkSuggestion],
        exclude_urls: Iterable[str],
    ) -> list[LinkSuggestion]:
        """Sort by relevance, keep one suggestion per target and truncate."""
        excluded = set(exclude_urls)
        ranked = sorted(suggestions, key=lambda s: (-s.relevance_score, s.position))

        seen: set[str] = set()
        filtered: list[LinkSuggestion] = []
        for suggestion in ranked:
            if suggestion.relevance_score < self.config.min_relevance_score:
                continue
            if suggestion.target_id in seen:
                continue
            seen.add(suggestion.target_id)
            if suggestion.url in excluded:
                continue
            filtered.append(suggestion)

        return filtered[:self.config.max_suggestions]

    @staticmethod
    def _quality_recommendations(suggestions: list[LinkSuggestion], text_length: int) -> list[str]:
        recommendations: list[str] = []

        if not suggestions:
            recommendations.append(
                "No relevant internal links found. Consider creating more content on related topics."
            )
            return recommendations

        if len(suggestions) < 3:
            recommendations.append(
                "Limited internal linking opportunities. Consider expanding content breadth."
            )
        if len(suggestions) > 5:
            recommendations.append(
                "Many link opportunities found. Consider using only the most relevant ones "
                "to avoid over-linking."
            )

        average = sum(s.relevance_score for s in suggestions) / len(suggestions)
        if average < 50:
            recommendations.append(
                "Link relevance scores are low. Consider creating more topically related content."
            )

        if len(suggestions) > 1 and all(s.position < text_length / 2 for s in suggestions):
            recommendations.append(
                "All suggested links are in the first half of content. "
                "Consider spreading links throughout the article."
            )

        return recommendations
