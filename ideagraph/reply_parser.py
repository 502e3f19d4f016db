"""
Parsing of model replies into idea records and script blocks.

A reply has two sections separated by a VIDEO SCRIPTS: line:

    1. Title - Description
    2. Title - Description

    VIDEO SCRIPTS:
    1: HOOK: ...
    SCENE 1: ...
    CTA: ...

Every piece of this structure is optional. Lines that drift from the format
are recovered with fallbacks instead of raising, so any non-empty reply
yields at least one idea per usable line.
"""

import re
from typing import Dict, List, Optional

from loguru import logger

from ideagraph.models import (
    ContentFormat,
    IdeaRecord,
    NodeType,
    ParsedReply,
    Platform,
    TopicFocus,
)
from ideagraph.prompts import MAX_LABEL_LENGTH

ELLIPSIS = "..."

_SCRIPTS_MARKER_RE = re.compile(r"^[ \t]*VIDEO SCRIPTS[ \t]*:[ \t]*$", re.IGNORECASE | re.MULTILINE)
_NUMBERED_LINE_RE = re.compile(r"^\d+[).\s]", re.ASCII)
_NUMBERING_PREFIX_RE = re.compile(r"^\d+[).\s]*", re.ASCII)
_SCRIPT_BLOCK_START_RE = re.compile(r"^(\d+):\s*HOOK:\s*", re.IGNORECASE | re.ASCII)
_VIDEO_PLATFORM_RE = re.compile(r"instagram|tiktok", re.IGNORECASE)
_VIDEO_FORMAT_RE = re.compile(r"video|short|story", re.IGNORECASE)

TITLE_SEPARATOR = " - "


def split_reply(text: str) -> ParsedReply:
    """
    Split a reply at the first VIDEO SCRIPTS: line.

    Returns:
        ParsedReply whose idea_section holds everything before the marker
        (or the whole text) and whose script_section holds everything after
        it (empty when there is no marker), both trimmed
    """
    normalized = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    parts = _SCRIPTS_MARKER_RE.split(normalized, maxsplit=1)
    idea_section = parts[0].strip()
    script_section = parts[1].strip() if len(parts) > 1 else ""
    return ParsedReply(idea_section=idea_section, script_section=script_section)


def select_idea_lines(section: str) -> List[str]:
    """Numbered lines when any exist, otherwise every non-empty line."""
    lines = [line.strip() for line in section.split("\n")]
    lines = [line for line in lines if line]
    numbered = [line for line in lines if _NUMBERED_LINE_RE.match(line)]
    return numbered if numbered else lines


def make_label(title: str, index: int) -> str:
    title = title.strip()
    if not title:
        return f"Idea {index + 1}"
    if len(title) > MAX_LABEL_LENGTH:
        return title[:MAX_LABEL_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return title


def node_type_for(index: int) -> NodeType:
    """First idea is the hub, the next two are its subtopics, the rest are related."""
    if index == 0:
        return NodeType.MAIN
    if index <= 2:
        return NodeType.SUB
    return NodeType.RELATED


def is_video_like(platform: str, content_format: str) -> bool:
    """Whether a platform/format pair can carry a video script."""
    return bool(_VIDEO_PLATFORM_RE.search(platform) and _VIDEO_FORMAT_RE.search(content_format))


def parse_idea_line(
    line: str,
    index: int,
    topic: str,
    platforms: List[str],
    formats: List[str],
) -> IdeaRecord:
    """
    Turn one idea line into an IdeaRecord.

    Args:
        line: Trimmed idea line, with or without leading numbering
        index: 0-based position among the selected idea lines
        topic: Topic used in the synthesized description fallback
        platforms: Applicable platforms, assigned cyclically
        formats: Applicable formats, assigned cyclically
    """
    cleaned = _NUMBERING_PREFIX_RE.sub("", line, count=1).strip()
    title, _, desc = cleaned.partition(TITLE_SEPARATOR)
    desc = desc.strip()

    platform = platforms[index % len(platforms)]
    content_format = formats[index % len(formats)]

    return IdeaRecord(
        index=index,
        label=make_label(title, index),
        description=desc or cleaned or f"Generated idea {index + 1} for {topic}.",
        node_type=node_type_for(index),
        platform=Platform(platform),
        format=ContentFormat(content_format),
        is_video_like=is_video_like(platform, content_format),
    )


def parse_idea_lines(section: str, topic: str, focus: Optional[TopicFocus] = None) -> List[IdeaRecord]:
    """
    Parse the idea-list section into records, one per selected line.

    Args:
        section: Idea-list section of a reply
        topic: The topic the ideas were generated for
        focus: Detected topic focus; no narrowing when omitted

    Returns:
        Records in order of appearance
    """
    focus = focus or TopicFocus()
    platforms = focus.applicable_platforms()
    formats = focus.applicable_formats()
    return [
        parse_idea_line(line, index, topic, platforms, formats)
        for index, line in enumerate(select_idea_lines(section))
    ]


def parse_script_blocks(section: str) -> Dict[int, str]:
    """
    Collect script blocks keyed by the idea number on their HOOK line.

    A block starts at a line that begins with "3: HOOK: ..." and runs until the
    next such line or the end of the section. An indented HOOK line does not
    start a block. Lines inside a block keep their indentation, empty lines are
    dropped, and only the joined block is trimmed. Lines before the first HOOK
    line are ignored. A repeated number keeps the later block.
    """
    scripts: Dict[int, str] = {}
    current_number: Optional[int] = None
    current_block: List[str] = []

    def flush() -> None:
        if current_number is not None and current_block:
            scripts[current_number] = "\n".join(current_block).strip()

    for line in (section or "").split("\n"):
        match = _SCRIPT_BLOCK_START_RE.match(line)
        if match:
            flush()
            current_number = int(match.group(1))
            current_block = [line]
        elif current_number is not None and line:
            current_block.append(line)
    flush()

    if scripts:
        logger.debug(f"Parsed script blocks for ideas: {sorted(scripts)}")
    return scripts
