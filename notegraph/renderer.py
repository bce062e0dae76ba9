# notegraph/renderer.py
"""Typst rendering of styled note bodies to a single SVG page.

Font discovery is the expensive part, so it runs once per RenderContext and
the context is reused by MarkupRenderer for every body it renders.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

import typst
from fontTools.ttLib import TTFont

from notegraph.exceptions import CompileError, EmptyDocument, NoFontsAvailable

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = {".ttf", ".otf", ".ttc", ".otc"}

PAGE_WIDTH = "16cm"
PAGE_MARGIN = "0.5cm"
TEXT_SIZE = "12pt"
TEXT_COLOR = "#e8e8e8"

PAGE_TEMPLATE = (
    f"#set page(width: {PAGE_WIDTH}, height: auto, margin: {PAGE_MARGIN}, fill: none)\n"
    f'#set text(size: {TEXT_SIZE}, fill: rgb("{TEXT_COLOR}"))\n'
)

# First element drawn directly under the root <svg>, i.e. a page background
FIRST_SHAPE = re.compile(r'\A(\s*(?:<\?xml[^>]*>\s*)?<svg\b[^>]*>\s*)(<(?:path|rect)\b[^>]*>)')
WHITE_FILL = re.compile(r'\bfill="#(?:fff|ffffff)"', re.IGNORECASE)
# Background shapes start at the page origin: d="M 0 0 ..." or <rect> without x/y offset
ORIGIN_PATH = re.compile(r'\bd="\s*M\s*0(?:\.0+)?[\s,]+0(?:\.0+)?(?![\d.])')
OFFSET_RECT = re.compile(r'\b[xy]="\s*(?!0(?:\.0+)?")[^"]*"')
TRANSPARENT_FILL = 'fill="transparent"'


def wrap_in_template(source: str) -> str:
    """Prefix a body with the page/text setup used for every render."""
    return PAGE_TEMPLATE + source


def make_background_transparent(svg: str) -> str:
    """Force the page background fill of a rendered page to transparent.

    Only a white shape drawn first under the root element and anchored at the
    page origin counts as background; content fills are left alone.
    """
    match = FIRST_SHAPE.match(svg)
    if match is None:
        return svg
    shape = match.group(2)
    if not WHITE_FILL.search(shape):
        return svg
    if shape.startswith("<path"):
        if not ORIGIN_PATH.search(shape):
            return svg
    elif OFFSET_RECT.search(shape):
        return svg
    transparent = WHITE_FILL.sub(TRANSPARENT_FILL, shape, count=1)
    return svg[:match.start(2)] + transparent + svg[match.end(2):]


def _iter_font_files(search_dirs: list[str]):
    for directory in search_dirs:
        if not os.path.isdir(directory):
            continue
        for root, dirnames, filenames in os.walk(directory):
            dirnames.sort()
            for filename in sorted(filenames):
                if Path(filename).suffix.lower() in FONT_EXTENSIONS:
                    yield os.path.join(root, filename)


def read_family_name(path: str) -> str | None:
    """Open a font file and return its family name, None if unusable."""
    try:
        font = TTFont(path, fontNumber=0, lazy=True)
        try:
            return font["name"].getBestFamilyName()
        finally:
            font.close()
    except Exception as e:
        logger.debug(f"Skipping unreadable font {path}: {e}")
        return None


@dataclass
class FontBook:
    """First loadable face per distinct font family."""

    families: dict[str, str] = field(default_factory=dict)

    @classmethod
    def discover(cls, search_dirs: list[str]) -> "FontBook":
        book = cls()
        for path in _iter_font_files(search_dirs):
            family = read_family_name(path)
            if family and family not in book.families:
                book.families[family] = path
        logger.info(f"Discovered {len(book.families)} font families")
        return book

    @property
    def paths(self) -> list[str]:
        return list(self.families.values())

    def __len__(self) -> int:
        return len(self.families)


@dataclass(frozen=True)
class RenderContext:
    """Reusable rendering environment: registered fonts and the page template."""

    font_paths: tuple[str, ...]
    embedded_fonts: bool = False

    @classmethod
    def build(cls, font_dirs: list[str], allow_embedded_fonts: bool = True) -> "RenderContext":
        book = FontBook.discover(font_dirs)
        if len(book):
            return cls(font_paths=tuple(book.paths))
        if allow_embedded_fonts:
            logger.warning("No system fonts found, falling back to embedded fonts")
            return cls(font_paths=(), embedded_fonts=True)
        raise NoFontsAvailable(
            f"No usable fonts in {', '.join(font_dirs) or '(no directories)'}"
        )

    def compile_pages(self, source: str) -> list[bytes]:
        try:
            result = typst.compile(
                wrap_in_template(source).encode("utf-8"),
                format="svg",
                font_paths=list(self.font_paths),
                ignore_system_fonts=True,
            )
        except RuntimeError as e:
            hints = getattr(e, "hints", None) or []
            raise CompileError(f"Typst compilation failed: {e}", [str(e), *hints]) from e

        if result is None:
            return []
        if isinstance(result, (bytes, bytearray)):
            return [bytes(result)]
        return list(result)

    def render(self, source: str) -> str:
        """Compile source and return the first page as transparent SVG markup."""
        pages = self.compile_pages(source)
        if not pages:
            raise EmptyDocument("Compiled document has no pages")
        if len(pages) > 1:
            logger.debug(f"Dropping {len(pages) - 1} extra page(s)")
        svg = pages[0].decode("utf-8")
        return make_background_transparent(svg)


class MarkupRenderer:
    """Builds the RenderContext on first use and reuses it afterwards."""

    def __init__(self, font_dirs: list[str], allow_embedded_fonts: bool = True):
        self.font_dirs = font_dirs
        self.allow_embedded_fonts = allow_embedded_fonts
        self._context: RenderContext | None = None

    @property
    def context(self) -> RenderContext:
        if self._context is None:
            self._context = RenderContext.build(self.font_dirs, self.allow_embedded_fonts)
        return self._context

    def render(self, source: str) -> str:
        return self.context.render(source)
