"""
Heading structure validation.

Headings are scanned in document order with a tag regex, which keeps the
character offset of every heading. Rules:

1. No H1 -> error.
2. More than one H1 -> warning.
3. A heading more than one level deeper than its predecessor -> error
   suggesting the predecessor's level + 1.
"""

import re
from typing import Optional

from .config import HeadingStructureConfig
from .models import (
    HeadingIssue,
    HeadingNode,
    HeadingStructureResult,
    OutlineItem,
    Severity,
)
from .text_normalizer import strip_markup

_HEADING_RE = re.compile(r"<h([1-6])[^>]*>(.*?)</h[1-6]\s*>", re.IGNORECASE)


def extract_headings(content: str) -> list[HeadingNode]:
    """
    Find all h1-h6 elements in document order.

    Args:
        content: HTML markup.

    Returns:
        HeadingNode list with plain heading text and character positions.
    """
    if not content:
        return []
    return [
        HeadingNode(
            text=strip_markup(match.group(2)),
            level=int(match.group(1)),
            position=match.start(),
        )
        for match in _HEADING_RE.finditer(content)
    ]


def validate_heading_structure(
    content: str,
    config: Optional[HeadingStructureConfig] = None,
) -> HeadingStructureResult:
    """
    Validate heading structure and hierarchy.

    Args:
        content: HTML markup.
        config: Validation rules; defaults to HeadingStructureConfig().

    Returns:
        HeadingStructureResult. is_valid is False when any error was found.
    """
    config = config or HeadingStructureConfig()
    headings = extract_headings(content)
    issues: list[HeadingIssue] = []

    h1_count = sum(1 for h in headings if h.level == 1)
    if h1_count == 0:
        if config.require_h1:
            issues.append(HeadingIssue(
                severity=Severity.ERROR,
                heading="",
                level=1,
                position=0,
                message="Missing H1 heading",
                suggestion="Add an H1 heading as the main title of your content",
            ))
    elif h1_count > 1:
        issues.append(HeadingIssue(
            severity=Severity.WARNING,
            heading="",
            level=1,
            position=0,
            message=f"Multiple H1 headings found ({h1_count})",
            suggestion="Use only one H1 heading per page. Convert additional H1s to H2 or H3",
        ))

    issues.extend(_check_hierarchy(headings, config.max_skipped_levels))

    return HeadingStructureResult(
        is_valid=not any(i.severity == Severity.ERROR for i in issues),
        headings=headings,
        issues=issues,
        outline=[OutlineItem(text=h.text, level=h.level) for h in headings],
        recommendations=_recommendations(headings),
    )


def _check_hierarchy(headings: list[HeadingNode], max_skipped_levels: int) -> list[HeadingIssue]:
    """Detect level jumps between adjacent headings (e.g. H2 -> H4)."""
    issues: list[HeadingIssue] = []

    for previous, current in zip(headings, headings[1:]):
        if current.level > previous.level + 1 + max_skipped_levels:
            suggested = previous.level + 1
            issues.append(HeadingIssue(
                severity=Severity.ERROR,
                heading=current.text,
                level=current.level,
                position=current.position,
                message=f"Heading level skipped from H{previous.level} to H{current.level}",
                suggestion=f"Change to H{suggested} or add intermediate heading levels",
                suggested_level=suggested,
            ))

    return issues


def _recommendations(headings: list[HeadingNode]) -> list[str]:
    if not headings:
        return ["Add headings to improve content structure and readability"]
    if len(headings) < 3:
        return ["Consider adding more headings to break up long sections of text"]
    return []
