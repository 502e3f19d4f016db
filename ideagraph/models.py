"""
Data models for the Idea Graph backend.
"""

from typing import Dict, List, Optional, Tuple, Any
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


DEFAULT_MAX_TOPIC_LENGTH = 200


class NodeType(str, Enum):
    """Positional role of an idea in the graph."""
    MAIN = "main"
    SUB = "sub"
    RELATED = "related"


class EdgeType(str, Enum):
    """Kind of link from the hub idea to another idea."""
    HIERARCHICAL = "hierarchical"
    RELATED = "related"


class Platform(str, Enum):
    """Social platforms an idea can target."""
    INSTAGRAM = "Instagram"
    TIKTOK = "TikTok"
    YOUTUBE = "YouTube"
    LINKEDIN = "LinkedIn"
    TWITTER = "Twitter/X"
    FACEBOOK = "Facebook"


class ContentFormat(str, Enum):
    """Content formats an idea can take."""
    CAROUSEL = "Carousel"
    VIDEO = "Video"
    PHOTO = "Photo"
    SHORT = "Short"
    STORY = "Story"
    GRAPHICS = "Graphics"


ALL_PLATFORMS: List[str] = [p.value for p in Platform]
ALL_FORMATS: List[str] = [f.value for f in ContentFormat]


class TokenUsage(BaseModel):
    """Token usage reported by the model endpoint."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class TopicFocus(BaseModel):
    """Platforms and formats named in a topic. Empty lists mean no narrowing."""
    model_config = ConfigDict(frozen=True)

    platforms: List[str] = Field(default_factory=list)
    formats: List[str] = Field(default_factory=list)

    @property
    def has_platform_focus(self) -> bool:
        return bool(self.platforms)

    @property
    def has_format_focus(self) -> bool:
        return bool(self.formats)

    def applicable_platforms(self) -> List[str]:
        return list(self.platforms) if self.platforms else list(ALL_PLATFORMS)

    def applicable_formats(self) -> List[str]:
        return list(self.formats) if self.formats else list(ALL_FORMATS)


class ParsedReply(BaseModel):
    """A model reply split at the VIDEO SCRIPTS marker."""
    model_config = ConfigDict(frozen=True)

    idea_section: str = ""
    script_section: str = ""


class IdeaRecord(BaseModel):
    """One parsed idea line, before it becomes a graph node."""
    model_config = ConfigDict(frozen=True)

    index: int
    label: str
    description: str
    node_type: NodeType
    platform: Platform
    format: ContentFormat
    is_video_like: bool = False

    @property
    def number(self) -> int:
        """1-based position, the key used by script blocks."""
        return self.index + 1


class IdeaNode(BaseModel):
    """A content idea in the graph."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str
    platform: Platform
    format: ContentFormat
    script: Optional[str] = None
    type: NodeType

    @field_validator('label', 'description')
    @classmethod
    def text_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Node text cannot be empty')
        return v


class IdeaEdge(BaseModel):
    """A link from the hub idea to another idea."""
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    type: EdgeType


class GraphMetadata(BaseModel):
    """Provenance of a generated graph."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str
    generated_at: datetime = Field(alias="generatedAt")
    version: str


class IdeaGraph(BaseModel):
    """Hub-shaped graph of content ideas produced from one model reply."""
    model_config = ConfigDict(frozen=True)

    nodes: Tuple[IdeaNode, ...] = Field(default_factory=tuple)
    edges: Tuple[IdeaEdge, ...] = Field(default_factory=tuple)
    metadata: GraphMetadata

    @property
    def hub(self) -> Optional[IdeaNode]:
        return self.nodes[0] if self.nodes else None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase metadata and absent scripts omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GenerateIdeasRequest(BaseModel):
    """Body of POST /api/generate-ideas."""
    model_config = ConfigDict(extra="forbid")

    topic: str

    @field_validator('topic')
    @classmethod
    def validate_topic(cls, v, info: ValidationInfo):
        v = v.strip()
        if not v:
            raise ValueError('Topic cannot be empty')
        limit = (info.context or {}).get("max_topic_length", DEFAULT_MAX_TOPIC_LENGTH)
        if len(v) > limit:
            raise ValueError(f'Topic is too long. Maximum length is {limit} characters.')
        return v


class ParseReplyRequest(GenerateIdeasRequest):
    """Body of POST /api/parse-reply: a topic plus a model reply to parse offline."""

    text: str

    @field_validator('text')
    @classmethod
    def text_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Reply text cannot be empty')
        return v
