# notegraph/graph.py
import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import chain
from typing import TYPE_CHECKING

from notegraph.scanner import extract_references
from notegraph.schemas import Edge, Node

if TYPE_CHECKING:
    from notegraph.model import Model

logger = logging.getLogger(__name__)


def node_edges(node: Node) -> list[Edge]:
    """Outgoing edges of one node, in reference order."""
    return [Edge(node.id, target) for target in extract_references(node.short, node.long)]


def build_edges(model: "Model", max_workers: int | None = None) -> list[Edge]:
    """Extract edges for every node on a thread pool, keeping Model order."""
    nodes = model.nodes
    if not nodes:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # map() yields results in submission order regardless of completion order
        per_node = list(executor.map(node_edges, nodes))

    edges = list(chain.from_iterable(per_node))
    logger.debug(f"Built {len(edges)} edges from {len(nodes)} notes")
    return edges


def links_for(edges: list[Edge], node_id: str) -> tuple[list[str], list[str]]:
    """Forward and back link ids of a node."""
    forward = [e.target for e in edges if e.source == node_id]
    back = [e.source for e in edges if e.target == node_id]
    return forward, back
