# notegraph/model.py
import logging
import os
from typing import Iterator

from notegraph.exceptions import DirectoryUnavailable, NodeParseFailure
from notegraph.graph import build_edges
from notegraph.scanner import Renderer, parse_note
from notegraph.schemas import Edge, Node

logger = logging.getLogger(__name__)


class Model:
    """Immutable, ordered collection of the nodes loaded from one directory."""

    def __init__(self, nodes):
        self._nodes = tuple(nodes)

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def get_nodes(self) -> list[Node]:
        return list(self._nodes)

    def get_node(self, node_id: str) -> Node | None:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def get_edges(self, max_workers: int | None = None) -> list[Edge]:
        """Determine all references between notes (expensive, recomputed per call)."""
        return build_edges(self, max_workers=max_workers)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)


def read_entry(entry: os.DirEntry) -> str:
    # newline="" keeps raw line endings so only "\n" splits short from long
    with open(entry.path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def parse_entry(entry: os.DirEntry, renderer: Renderer | None = None) -> Node:
    try:
        content = read_entry(entry)
    except (OSError, UnicodeDecodeError) as e:
        raise NodeParseFailure(entry.name, str(e)) from e
    return parse_note(entry.name, content, renderer)


def load_model(directory: str, renderer: Renderer | None = None) -> Model:
    """Read every entry of directory into a Node; any failing entry fails the load."""
    try:
        entries = os.scandir(directory)
    except OSError as e:
        raise DirectoryUnavailable(directory, e.strerror or str(e)) from e

    nodes = []
    try:
        with entries:
            for entry in entries:
                nodes.append(parse_entry(entry, renderer))
    except OSError as e:
        raise NodeParseFailure(directory, f"listing failed: {e}") from e

    logger.info(f"Loaded {len(nodes)} notes from {directory}")
    return Model(nodes)
