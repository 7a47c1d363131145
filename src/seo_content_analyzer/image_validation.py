"""
Image alt text validation.

Images are found with a tag scan; the attributes of each matched tag are
read with BeautifulSoup. Each image reports only its first defect, checked
in this order: missing-alt, empty-alt, generic-alt (alt is exactly a
generic term), too-short, too-long, generic-alt (short alt containing a
generic term), filename-alt.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from .config import ImageValidationConfig
from .models import (
    ImageIssue,
    ImageIssueType,
    ImageValidationResult,
    Severity,
)

_IMG_TAG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)

GENERIC_ALT_TERMS = ("image", "photo", "picture", "graphic", "illustration", "img")

_FILENAME_RE = re.compile(r"^[a-zA-Z0-9_-]+\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)
_CAMERA_NAME_RE = re.compile(r"^IMG_\d+|DSC_\d+|PHOTO_\d+", re.IGNORECASE)


def extract_images(content: str) -> list[tuple[str, Optional[str]]]:
    """
    Find all img tags in document order.

    Args:
        content: HTML markup.

    Returns:
        List of (src, alt) tuples. alt is None when the attribute is absent
        and "" when it is present without a value.
    """
    if not content:
        return []

    images: list[tuple[str, Optional[str]]] = []
    for match in _IMG_TAG_RE.finditer(content):
        img = BeautifulSoup(match.group(0), "lxml").find("img")
        if img is None:
            continue
        # A bare alt attribute is parsed as ""
        alt = img.get("alt")
        images.append((img.get("src") or "unknown", alt))
    return images


def is_generic_term(alt: str) -> bool:
    """Check whether alt text is nothing but a generic word like "image"."""
    return alt.lower().strip() in GENERIC_ALT_TERMS


def is_generic_alt_text(alt: str, max_length: int = 20) -> bool:
    """Check whether alt text is a generic word like "image" or "photo"."""
    normalized = alt.lower().strip()
    return is_generic_term(normalized) or any(
        term in normalized and len(normalized) < max_length
        for term in GENERIC_ALT_TERMS
    )


def appears_to_be_filename(alt: str) -> bool:
    """Check whether alt text looks like a file name (photo.jpg, IMG_1234)."""
    return bool(_FILENAME_RE.match(alt) or _CAMERA_NAME_RE.search(alt))


def _generic_issue(src: str, alt: str) -> ImageIssue:
    return ImageIssue(
        src=src,
        issue=ImageIssueType.GENERIC_ALT,
        severity=Severity.INFO,
        suggestion="Make alt text more specific and descriptive",
        current_alt=alt,
    )


def classify_alt_text(
    src: str,
    alt: Optional[str],
    config: Optional[ImageValidationConfig] = None,
) -> Optional[ImageIssue]:
    """
    Return the first alt text defect for an image, or None if it is valid.

    Args:
        src: Image source, used to identify the image in the issue.
        alt: Alt attribute value (None when missing).
        config: Length limits; defaults to ImageValidationConfig().
    """
    config = config or ImageValidationConfig()

    if alt is None:
        return ImageIssue(
            src=src,
            issue=ImageIssueType.MISSING_ALT,
            severity=Severity.ERROR,
            suggestion="Add descriptive alt text for accessibility and SEO",
        )
    if alt.strip() == "":
        return ImageIssue(
            src=src,
            issue=ImageIssueType.EMPTY_ALT,
            severity=Severity.ERROR,
            suggestion='Add meaningful alt text or use alt="" only for decorative images',
            current_alt=alt,
        )
    if is_generic_term(alt):
        return _generic_issue(src, alt)
    if len(alt) < config.min_alt_length:
        return ImageIssue(
            src=src,
            issue=ImageIssueType.TOO_SHORT,
            severity=Severity.WARNING,
            suggestion=(
                f"Alt text should be more descriptive "
                f"(at least {config.min_alt_length} characters)"
            ),
            current_alt=alt,
        )
    if len(alt) > config.max_alt_length:
        return ImageIssue(
            src=src,
            issue=ImageIssueType.TOO_LONG,
            severity=Severity.WARNING,
            suggestion=f"Alt text should be concise (under {config.max_alt_length} characters)",
            current_alt=alt,
        )
    if is_generic_alt_text(alt, config.generic_alt_max_length):
        return _generic_issue(src, alt)
    if appears_to_be_filename(alt):
        return ImageIssue(
            src=src,
            issue=ImageIssueType.FILENAME_ALT,
            severity=Severity.WARNING,
            suggestion="Replace filename with descriptive alt text",
            current_alt=alt,
        )
    return None


def validate_images(
    content: str,
    config: Optional[ImageValidationConfig] = None,
) -> ImageValidationResult:
    """
    Validate alt text on every image in the content.

    Args:
        content: HTML markup.
        config: Length limits; defaults to ImageValidationConfig().

    Returns:
        ImageValidationResult. compliance_score is 100 when there are no images.
    """
    config = config or ImageValidationConfig()
    images = extract_images(content)

    issues: list[ImageIssue] = []
    valid_images = 0
    for src, alt in images:
        issue = classify_alt_text(src, alt, config)
        if issue is None:
            valid_images += 1
        else:
            issues.append(issue)

    total_images = len(images)
    compliance_score = round(valid_images / total_images * 100) if total_images else 100

    recommendations: list[str] = []
    if total_images == 0:
        recommendations.append("Consider adding relevant images to enhance content engagement")
    elif compliance_score < 70:
        recommendations.append("Improve alt text quality for better accessibility and SEO")

    return ImageValidationResult(
        total_images=total_images,
        valid_images=valid_images,
        issues=issues,
        compliance_score=compliance_score,
        recommendations=recommendations,
    )
