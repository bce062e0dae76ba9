# notegraph/schemas.py
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


class Node(BaseModel):
    """One note file: raw file name as id, first line as short, rest as long."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    short: str
    long: str
    rendered_body: str | None = None


class Edge(NamedTuple):
    source: str
    target: str


class NodeLinks(BaseModel):
    forward: list[str]
    back: list[str]


class ReloadResponse(BaseModel):
    status: str
    nodes: int
    edges: int
