# notegraph/state.py
import logging

from notegraph import config
from notegraph.model import Model, load_model
from notegraph.renderer import MarkupRenderer

logger = logging.getLogger(__name__)

model: Model | None = None
renderer: MarkupRenderer | None = None

# Directory and render switch of the last init_model call, reused by reloads
notes_path: str | None = None
render_markup: bool | None = None


def build_renderer() -> MarkupRenderer:
    return MarkupRenderer(
        font_dirs=config.get_font_dirs(),
        allow_embedded_fonts=config.get_allow_embedded_fonts(),
    )


def init_model(path: str = None, render: bool = None) -> Model:
    """Load the notes directory and make it the served Model.

    Arguments left as None fall back to the previous call, then to the
    environment. The renderer is created once and kept across reloads so
    fonts are only discovered the first time a styled body is rendered. If
    loading fails the previously served Model stays in place.
    """
    global model, renderer, notes_path, render_markup

    if path is None:
        path = notes_path if notes_path is not None else config.get_notes_path()
    if render is None:
        render = render_markup if render_markup is not None else config.get_render_markup()

    if render and renderer is None:
        renderer = build_renderer()
    if not render:
        logger.info("Markup rendering disabled")

    loaded = load_model(path, renderer if render else None)
    model, notes_path, render_markup = loaded, path, render
    return model


def reset() -> None:
    global model, renderer, notes_path, render_markup
    model = None
    renderer = None
    notes_path = None
    render_markup = None


def get_model() -> Model:
    if model is None:
        return init_model()
    return model
