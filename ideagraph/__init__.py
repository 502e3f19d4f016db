"""
Idea Graph backend - turns model-generated content ideas into a node/edge graph.
"""

from ideagraph.models import *
from ideagraph.errors import (
    IdeaGenerationError,
    ConfigurationError,
    UpstreamError,
    EmptyContentError,
)
from ideagraph.config import get_config, set_config, reset_config
from ideagraph.llm_client import get_llm_client, reset_llm_client
from ideagraph.idea_generator import (
    IdeaGenerator,
    generate_ideas,
    get_idea_generator,
    reset_idea_generator,
)

__version__ = "1.0.0"
__all__ = [
    "IdeaGenerationError",
    "ConfigurationError",
    "UpstreamError",
    "EmptyContentError",
    "IdeaGenerator",
    "generate_ideas",
    "get_config",
    "set_config",
    "reset_config",
    "get_llm_client",
    "reset_llm_client",
    "get_idea_generator",
    "reset_idea_generator",
]
