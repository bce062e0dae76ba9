# tests/conftest.py
import os
import tempfile

import pytest

from notegraph import state


def write_note(directory: str, name: str, content: str) -> str:
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


@pytest.fixture(autouse=True)
def reset_state():
    """Every test starts without a loaded model or cached renderer."""
    state.reset()
    yield
    state.reset()


@pytest.fixture
def notes_dir():
    """Temp dir with three linked notes."""
    tmpdir = tempfile.mkdtemp()
    write_note(tmpdir, "alpha", "Alpha summary [beta]\nSee [Gamma note](gamma) for more.")
    write_note(tmpdir, "beta", "Beta summary\nLinks back to [alpha] and [alpha].")
    write_note(tmpdir, "gamma", "Gamma has no body")
    return tmpdir


@pytest.fixture
def no_render(monkeypatch):
    monkeypatch.setenv("RENDER_MARKUP", "false")
