# tests/test_api.py
import os
from unittest.mock import patch

import pytest
from httpx import AsyncClient, ASGITransport

from notegraph import state
from notegraph.main import app

from conftest import write_note


@pytest.fixture
def env(notes_dir, no_render, monkeypatch):
    monkeypatch.setenv("NOTES_PATH", notes_dir)
    return notes_dir


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health():
    async with client() as c:
        response = await c.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_get_nodes(env):
    async with client() as c:
        response = await c.get("/api/nodes")
        assert response.status_code == 200
        nodes = {n["id"]: n for n in response.json()}
        assert set(nodes) == {"alpha", "beta", "gamma"}
        assert nodes["alpha"] == {
            "id": "alpha",
            "title": "Alpha",
            "short": "Alpha summary [beta]",
            "long": "See [Gamma note](gamma) for more.",
            "rendered_body": None,
        }
        assert nodes["gamma"]["long"] == ""


@pytest.mark.asyncio
async def test_get_edges(env):
    async with client() as c:
        nodes = (await c.get("/api/nodes")).json()
        response = await c.get("/api/edges")
        assert response.status_code == 200
        edges = response.json()

    expected = {
        "alpha": [["alpha", "beta"], ["alpha", "gamma"]],
        "beta": [["beta", "alpha"], ["beta", "alpha"]],
        "gamma": [],
    }
    assert edges == [e for n in nodes for e in expected[n["id"]]]


@pytest.mark.asyncio
async def test_get_node(env):
    async with client() as c:
        response = await c.get("/api/nodes/beta")
        assert response.status_code == 200
        assert response.json()["short"] == "Beta summary"


@pytest.mark.asyncio
async def test_get_node_not_found(env):
    async with client() as c:
        response = await c.get("/api/nodes/missing")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_node_links(env):
    async with client() as c:
        response = await c.get("/api/nodes/alpha/links")
        assert response.status_code == 200
        links = response.json()
        assert links["forward"] == ["beta", "gamma"]
        assert links["back"] == ["beta", "beta"]


@pytest.mark.asyncio
async def test_reload_picks_up_new_files(env):
    async with client() as c:
        assert len((await c.get("/api/nodes")).json()) == 3

        write_note(env, "delta", "Delta\n[alpha]")
        response = await c.post("/api/reload")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "nodes": 4, "edges": 5}

        assert len((await c.get("/api/nodes")).json()) == 4


@pytest.mark.asyncio
async def test_failed_reload_keeps_previous_model(env):
    async with client() as c:
        assert len((await c.get("/api/nodes")).json()) == 3

        with open(os.path.join(env, "binary"), "wb") as f:
            f.write(b"\xff\xfe")
        response = await c.post("/api/reload")
        assert response.status_code == 500
        assert "binary" in response.json()["detail"]

        assert len((await c.get("/api/nodes")).json()) == 3


@pytest.mark.asyncio
async def test_unavailable_directory(no_render, monkeypatch):
    missing = os.path.join(os.path.dirname(__file__), "no-such-notes-dir")
    monkeypatch.setenv("NOTES_PATH", missing)
    async with client() as c:
        response = await c.get("/api/nodes")
        assert response.status_code == 503
        assert "no-such-notes-dir" in response.json()["detail"]


@pytest.mark.asyncio
async def test_rendered_body_is_served(notes_dir, monkeypatch):
    monkeypatch.setenv("NOTES_PATH", notes_dir)
    monkeypatch.setenv("RENDER_MARKUP", "true")
    write_note(notes_dir, "math", "Math\n$x^2$")

    with patch("notegraph.renderer.MarkupRenderer.render", return_value="<svg>x</svg>"):
        async with client() as c:
            nodes = {n["id"]: n for n in (await c.get("/api/nodes")).json()}

    assert nodes["math"]["rendered_body"] == "<svg>x</svg>"
    assert nodes["alpha"]["rendered_body"] is None


@pytest.mark.asyncio
async def test_index_page(env):
    async with client() as c:
        response = await c.get("/")
        assert response.status_code == 200
        assert "Alpha summary" in response.text
        assert "Gamma" in response.text


@pytest.mark.asyncio
async def test_index_page_empty(no_render, monkeypatch, tmp_path):
    monkeypatch.setenv("NOTES_PATH", str(tmp_path))
    async with client() as c:
        response = await c.get("/")
        assert "No notes found" in response.text


@pytest.mark.asyncio
async def test_reload_reuses_loaded_directory(notes_dir, monkeypatch):
    monkeypatch.delenv("NOTES_PATH", raising=False)
    state.init_model(notes_dir, render=False)

    write_note(notes_dir, "delta", "Delta")
    async with client() as c:
        response = await c.post("/api/reload")
        assert response.status_code == 200
        assert response.json()["nodes"] == 4
