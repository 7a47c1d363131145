"""Content length analysis against per-content-type word count targets."""

from typing import Optional, Union

from .config import ContentLengthConfig
from .models import ContentLengthAnalysis, ContentType, LengthStatus, TargetRange
from .text_normalizer import strip_markup, tokenize


def analyze_content_length(
    content: str,
    content_type: Union[str, ContentType, None] = None,
    config: Optional[ContentLengthConfig] = None,
    custom_range: Optional[tuple[int, int]] = None,
) -> ContentLengthAnalysis:
    """
    Compare the word count with the recommended range for the content type.

    Args:
        content: Markup or plain text.
        content_type: tutorial, guide, news, opinion, review or default.
            Unknown values use the default range.
        config: Target table; defaults to ContentLengthConfig().
        custom_range: Optional (min, max) overriding the table. A word count
            inside a custom range is reported as "within-range".

    Returns:
        ContentLengthAnalysis with status and recommendations.
    """
    config = config or ContentLengthConfig()
    resolved_type = ContentType.from_value(content_type).value

    text = strip_markup(content)
    word_count = len(tokenize(text))

    if custom_range is not None:
        low, high = custom_range
        in_range_status = LengthStatus.WITHIN_RANGE
    else:
        low, high = config.range_for(resolved_type)
        in_range_status = LengthStatus.OPTIMAL

    if word_count < low:
        status = LengthStatus.TOO_SHORT
    elif word_count > high:
        status = LengthStatus.TOO_LONG
    else:
        status = in_range_status

    if status == LengthStatus.TOO_SHORT:
        recommendations = [
            f"Consider expanding your content. Current: {word_count} words, "
            f"recommended: {low}-{high} words",
            "Add more details, examples, or explanations to provide more value",
        ]
    elif status == LengthStatus.TOO_LONG:
        recommendations = [
            f"Content may be too lengthy. Current: {word_count} words, "
            f"recommended: {low}-{high} words",
            "Consider breaking into multiple posts or sections",
        ]
    else:
        recommendations = ["Content length is within optimal range for this content type"]

    return ContentLengthAnalysis(
        current_word_count=word_count,
        current_character_count=len(text),
        recommended_range=TargetRange(min=low, max=high),
        content_type=resolved_type,
        status=status,
        recommendations=recommendations,
    )
