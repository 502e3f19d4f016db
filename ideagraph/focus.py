"""
Topic focus detection: which platforms and formats a topic asks for.
"""

from typing import List, Tuple

from loguru import logger

from ideagraph.models import TopicFocus


# (keyword, label) pairs, matched as case-insensitive substrings in table order
PLATFORM_KEYWORDS: List[Tuple[str, str]] = [
    ("instagram", "Instagram"),
    ("tiktok", "TikTok"),
    ("youtube", "YouTube"),
    ("linkedin", "LinkedIn"),
    ("twitter", "Twitter/X"),
    # Space padded so the letter x inside ordinary words never matches
    (" x ", "Twitter/X"),
    ("facebook", "Facebook"),
]

FORMAT_KEYWORDS: List[Tuple[str, str]] = [
    ("reel", "Video"),
    ("reels", "Video"),
    ("carousel", "Carousel"),
    ("video", "Video"),
    ("short", "Short"),
    ("story", "Story"),
    ("stories", "Story"),
    ("photo", "Photo"),
    ("graphic", "Graphics"),
]


def _match_labels(text: str, table: List[Tuple[str, str]]) -> List[str]:
    labels: List[str] = []
    for keyword, label in table:
        if keyword in text and label not in labels:
            labels.append(label)
    return labels


def detect_topic_focus(topic: str) -> TopicFocus:
    """
    Scan a topic for platform and format keywords.

    Args:
        topic: Free-text topic supplied by the user

    Returns:
        TopicFocus with deduplicated labels in table order; an empty list on
        either axis means the topic does not narrow that axis
    """
    text = (topic or "").lower()
    focus = TopicFocus(
        platforms=_match_labels(text, PLATFORM_KEYWORDS),
        formats=_match_labels(text, FORMAT_KEYWORDS),
    )
    logger.debug(f"Topic focus: platforms={focus.platforms} formats={focus.formats}")
    return focus
