"""
Idea generation pipeline: topic in, IdeaGraph out.
"""

from typing import Optional

from loguru import logger

from ideagraph.config import get_config
from ideagraph.errors import EmptyContentError
from ideagraph.focus import detect_topic_focus
from ideagraph.graph_builder import assemble_graph
from ideagraph.llm_client import GenerativeClient, get_llm_client
from ideagraph.models import IdeaGraph, TopicFocus
from ideagraph.prompts import compose_prompt
from ideagraph.reply_parser import parse_idea_lines, parse_script_blocks, split_reply


class IdeaGenerator:
    """Ask the model for content ideas on a topic and parse its reply into a graph."""

    def __init__(self, client: GenerativeClient, version: Optional[str] = None):
        """
        Initialize the generator.

        Args:
            client: Model client; the only component that does I/O
            version: Engine version tag stamped on graphs; from config when omitted
        """
        self.client = client
        self.version = version or get_config().generation.engine_version

    def build_graph(self, topic: str, text: str, focus: Optional[TopicFocus] = None) -> IdeaGraph:
        """
        Parse a raw model reply into a graph without calling the model.

        Raises:
            EmptyContentError: If the reply is blank or yields no idea lines
        """
        if not text or not text.strip():
            raise EmptyContentError("Model returned an empty response")

        focus = focus or detect_topic_focus(topic)
        reply = split_reply(text)
        records = parse_idea_lines(reply.idea_section, topic, focus)
        if not records:
            raise EmptyContentError("Model response contains no idea lines")

        scripts = parse_script_blocks(reply.script_section)
        graph = assemble_graph(records, scripts, topic, self.version)

        attached = sum(1 for node in graph.nodes if node.script)
        logger.info(
            f"Parsed {len(graph.nodes)} ideas, {len(scripts)} script blocks, "
            f"{attached} scripts attached for topic: {topic!r}"
        )
        return graph

    def generate_ideas(self, topic: str) -> IdeaGraph:
        """
        Generate an idea graph for a topic.

        Raises:
            ConfigurationError: If the model API key is missing
            UpstreamError: If the model call fails
            EmptyContentError: If the reply holds no ideas
        """
        focus = detect_topic_focus(topic)
        prompt = compose_prompt(topic, focus)
        logger.info(f"Generating ideas for topic: {topic!r}")
        text = self.client.send_prompt(prompt)
        return self.build_graph(topic, text, focus)

    async def generate_ideas_async(self, topic: str) -> IdeaGraph:
        """Async variant of generate_ideas; the model call is the only await."""
        focus = detect_topic_focus(topic)
        prompt = compose_prompt(topic, focus)
        logger.info(f"Generating ideas for topic: {topic!r}")
        text = await self.client.send_prompt_async(prompt)
        return self.build_graph(topic, text, focus)


# Global generator instance
_idea_generator: Optional[IdeaGenerator] = None


def get_idea_generator() -> IdeaGenerator:
    """Get the global idea generator, bound to the global LLM client."""
    global _idea_generator
    if _idea_generator is None:
        _idea_generator = IdeaGenerator(get_llm_client())
    return _idea_generator


def reset_idea_generator():
    """Reset the global idea generator instance."""
    global _idea_generator
    _idea_generator = None


def generate_ideas(topic: str) -> IdeaGraph:
    """Generate an idea graph for a topic with the globally configured client."""
    return get_idea_generator().generate_ideas(topic)
