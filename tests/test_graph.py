# tests/test_graph.py
import pytest

from notegraph.graph import build_edges, links_for, node_edges
from notegraph.model import Model
from notegraph.scanner import parse_note
from notegraph.schemas import Edge


def make_model(*notes):
    return Model(parse_note(name, content) for name, content in notes)


def test_node_edges():
    node = parse_note("alpha", "[beta] summary\nSee [Gamma](gamma)")
    assert node_edges(node) == [Edge("alpha", "beta"), Edge("alpha", "gamma")]


def test_build_edges_grouped_in_model_order():
    model = make_model(
        ("c", "[a] [b] [c]"),
        ("a", "nothing here"),
        ("b", "Title\n[Back](c) and [a]"),
    )

    edges = build_edges(model)

    assert edges == [
        ("c", "a"), ("c", "b"), ("c", "c"),
        ("b", "a"), ("b", "c"),
    ]


@pytest.mark.parametrize("workers", [1, 2, 8])
def test_build_edges_independent_of_pool_size(workers):
    notes = [(f"n{i}", " ".join(f"[t{i}_{j}]" for j in range(i % 5))) for i in range(50)]
    model = make_model(*notes)

    edges = build_edges(model, max_workers=workers)

    assert len(edges) == sum(i % 5 for i in range(50))
    assert edges == [e for node in model for e in node_edges(node)]


def test_build_edges_does_not_validate_targets():
    model = make_model(("a", "[nowhere] [a]"))
    assert build_edges(model) == [("a", "nowhere"), ("a", "a")]


def test_build_edges_empty_model():
    assert build_edges(Model([])) == []


def test_model_get_edges_delegates():
    model = make_model(("a", "[b]"), ("b", "[a]"))
    assert model.get_edges(max_workers=2) == [("a", "b"), ("b", "a")]


def test_links_for():
    edges = [Edge("a", "b"), Edge("b", "a"), Edge("c", "a"), Edge("a", "a")]
    forward, back = links_for(edges, "a")
    assert forward == ["b", "a"]
    assert back == ["b", "c", "a"]
