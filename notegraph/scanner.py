# notegraph/scanner.py
import logging
import re
from typing import Iterator, Protocol

from notegraph.exceptions import RenderError
from notegraph.schemas import Node

logger = logging.getLogger(__name__)

# [id] not followed by "(": [note_id]
BARE_REFERENCE_PATTERN = re.compile(r'\[([\w\s]*)\](?!\()')
# [title](id): [Some Title](note_id)
TITLED_REFERENCE_PATTERN = re.compile(r'\[[^\]]*\]\(([\w\s-]*)\)')

WORD_SEPARATOR_PATTERN = re.compile(r'[\s_\-]+')
WORD_BOUNDARY_PATTERN = re.compile(
    r'(?<=[a-z])(?=[A-Z])'          # camelCase
    r'|(?<=[A-Z])(?=[A-Z][a-z])'    # HTTPServer
    r'|(?<=[A-Za-z])(?=\d)'         # note2
    r'|(?<=\d)(?=[A-Za-z])'         # 2note
)


class Renderer(Protocol):
    def render(self, source: str) -> str: ...


def title_case(name: str) -> str:
    """Turn a file name like "my_first-noteHTTP" into "My First Note Http"."""
    words = []
    for chunk in WORD_SEPARATOR_PATTERN.split(name):
        words.extend(w for w in WORD_BOUNDARY_PATTERN.split(chunk) if w)
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def extract_bare_ids(text: str) -> Iterator[str]:
    """Yield ids written as [id]."""
    return (m.group(1) for m in BARE_REFERENCE_PATTERN.finditer(text))


def extract_titled_ids(text: str) -> Iterator[str]:
    """Yield ids written as [Title](id)."""
    return (m.group(1) for m in TITLED_REFERENCE_PATTERN.finditer(text))


def extract_references(short: str, long: str) -> list[str]:
    """All referenced ids of a node, bare references first, short before long."""
    return [
        *extract_bare_ids(short),
        *extract_bare_ids(long),
        *extract_titled_ids(short),
        *extract_titled_ids(long),
    ]


def split_content(content: str) -> tuple[str, str]:
    """Split at the first newline into trimmed (short, long)."""
    short, _, long = content.partition("\n")
    return short.strip(), long.strip()


def is_styled_markup(text: str) -> bool:
    return text.strip().startswith("#") or "$" in text


def parse_note(filename: str, content: str, renderer: Renderer | None = None) -> Node:
    """Parse one note file into a Node, rendering styled bodies when possible."""
    short, long = split_content(content)

    rendered_body = None
    if renderer is not None and is_styled_markup(long):
        try:
            rendered_body = renderer.render(long)
        except RenderError as e:
            logger.warning(f"Could not render {filename}: {e}")
            for line in getattr(e, "diagnostics", []):
                logger.debug(f"{filename}: {line}")

    return Node(
        id=filename,
        title=title_case(filename),
        short=short,
        long=long,
        rendered_body=rendered_body,
    )
