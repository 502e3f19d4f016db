"""
Assembly of parsed idea records into a hub-shaped IdeaGraph.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from ideagraph.models import (
    EdgeType,
    GraphMetadata,
    IdeaEdge,
    IdeaGraph,
    IdeaNode,
    IdeaRecord,
)

# Edges to the first N non-hub nodes are hierarchical, the rest related
HIERARCHICAL_EDGE_COUNT = 2


def node_id(position: int) -> str:
    return f"idea-{position}"


def edge_id(position: int) -> str:
    return f"edge-{position}"


def build_nodes(records: List[IdeaRecord], scripts: Dict[int, str]) -> List[IdeaNode]:
    """Nodes in record order; a script attaches only to video-like ideas with a matching block."""
    nodes: List[IdeaNode] = []
    for record in records:
        script = scripts.get(record.number) if record.is_video_like else None
        nodes.append(
            IdeaNode(
                id=node_id(record.number),
                label=record.label,
                description=record.description,
                platform=record.platform,
                format=record.format,
                script=script or None,
                type=record.node_type,
            )
        )
    return nodes


def build_edges(nodes: List[IdeaNode]) -> List[IdeaEdge]:
    """Connect the first node to every other node."""
    if len(nodes) < 2:
        return []
    hub = nodes[0]
    return [
        IdeaEdge(
            id=edge_id(idx + 1),
            source=hub.id,
            target=node.id,
            type=EdgeType.HIERARCHICAL if idx < HIERARCHICAL_EDGE_COUNT else EdgeType.RELATED,
        )
        for idx, node in enumerate(nodes[1:])
    ]


def assemble_graph(
    records: List[IdeaRecord],
    scripts: Dict[int, str],
    topic: str,
    version: str,
    generated_at: Optional[datetime] = None,
) -> IdeaGraph:
    """
    Combine parsed records and script blocks into the final graph.

    Args:
        records: Parsed idea records in order of appearance
        scripts: Script blocks keyed by 1-based idea number
        topic: Topic recorded in the metadata
        version: Engine version tag recorded in the metadata
        generated_at: Generation timestamp; now (UTC) when omitted

    Returns:
        IdeaGraph with one node per record and a hub edge to every other node
    """
    nodes = build_nodes(records, scripts)
    return IdeaGraph(
        nodes=nodes,
        edges=build_edges(nodes),
        metadata=GraphMetadata(
            topic=topic,
            generated_at=generated_at or datetime.now(timezone.utc),
            version=version,
        ),
    )
