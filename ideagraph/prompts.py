"""
Prompt composition for idea generation.

The reply parser is driven by the structural markers this prompt asks for:
numbered "<Title> - <Description>" lines, a VIDEO SCRIPTS: line, and script
blocks made of "N: HOOK:", "SCENE k:" and "CTA:" lines. Changing the wording
here is safe; changing the markers breaks parsing.
"""

from pathlib import Path
from typing import Optional

import jinja2
from loguru import logger

from ideagraph.focus import detect_topic_focus
from ideagraph.models import ALL_PLATFORMS, TopicFocus

SCRIPTS_MARKER = "VIDEO SCRIPTS:"
MAX_LABEL_LENGTH = 80

PROMPT_TEMPLATE_PATH = Path(__file__).parent / "prompt_templates" / "content_ideas.md"

_template: Optional[jinja2.Template] = None


def _load_template() -> jinja2.Template:
    global _template
    if _template is None:
        with open(PROMPT_TEMPLATE_PATH, 'r', encoding='utf-8') as f:
            _template = jinja2.Template(f.read())
        logger.debug(f"Loaded idea prompt template from {PROMPT_TEMPLATE_PATH}")
    return _template


def compose_prompt(topic: str, focus: Optional[TopicFocus] = None) -> str:
    """
    Build the instruction text sent to the model.

    Args:
        topic: The user's topic, embedded verbatim as the last line
        focus: Detected topic focus; detected from the topic when omitted

    Returns:
        Prompt text
    """
    if focus is None:
        focus = detect_topic_focus(topic)
    return _load_template().render(
        topic=topic,
        has_focus=focus.has_platform_focus or focus.has_format_focus,
        platforms=focus.platforms,
        formats=focus.formats,
        all_platforms=ALL_PLATFORMS,
        scripts_marker=SCRIPTS_MARKER,
        max_label_length=MAX_LABEL_LENGTH,
    )
