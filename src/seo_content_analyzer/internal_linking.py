"""
Internal link frequency analysis.

Counts the internal links already present in the content and compares
them with a recommended count of one link per 300 words.
"""

import math
import re

from .models import InternalLinkingAnalysis, LinkingStatus
from .text_normalizer import strip_markup, tokenize

# href values that are site-relative (start with "/" or have no scheme)
_INTERNAL_LINK_RE = re.compile(
    r"""<a\b[^>]*\bhref\s*=\s*["'](?!https?://|mailto:|tel:|#|javascript:)[^"']*["']""",
    re.IGNORECASE,
)

WORDS_PER_LINK = 300


def count_internal_links(content: str) -> int:
    """Number of anchors whose href points inside the site."""
    if not content:
        return 0
    return len(_INTERNAL_LINK_RE.findall(content))


def analyze_link_frequency(content: str) -> InternalLinkingAnalysis:
    """
    Analyze how many internal links the content has versus how many it should.

    Args:
        content: HTML markup.

    Returns:
        InternalLinkingAnalysis without suggestions; the optimizer adds
        suggestions from the link suggestion engine.
    """
    current = count_internal_links(content)
    word_count = len(tokenize(strip_markup(content)))

    recommended = math.ceil(word_count / WORDS_PER_LINK)
    link_density = current / word_count * 1000 if word_count else 0.0

    if current < max(1, recommended - 1):
        status = LinkingStatus.UNDER_LINKED
        recommendations = [
            f"Add more internal links. Current: {current}, recommended: {recommended}",
            "Link to related posts, categories, or relevant pages",
        ]
    elif current > recommended + 2:
        status = LinkingStatus.OVER_LINKED
        recommendations = [
            f"Consider reducing internal links. Current: {current}, recommended: {recommended}",
            "Focus on the most relevant and valuable links",
        ]
    else:
        status = LinkingStatus.OPTIMAL
        recommendations = ["Internal linking frequency is optimal"]

    return InternalLinkingAnalysis(
        current_internal_links=current,
        recommended_count=recommended,
        link_density=link_density,
        status=status,
        recommendations=recommendations,
    )
