# notegraph/config.py
import os
import sys
from pathlib import Path

TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def get_notes_path() -> str:
    return os.getenv("NOTES_PATH", "./notes")


def get_render_markup() -> bool:
    """Whether styled bodies are rendered to SVG at load time."""
    return _env_flag("RENDER_MARKUP", True)


def get_allow_embedded_fonts() -> bool:
    return _env_flag("ALLOW_EMBEDDED_FONTS", True)


def default_font_dirs() -> list[str]:
    """Platform font directories searched when FONT_DIRS is unset."""
    home = Path.home()
    if sys.platform == "darwin":
        dirs = [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            home / "Library" / "Fonts",
        ]
    elif sys.platform.startswith("win"):
        windir = os.getenv("WINDIR", "C:\\Windows")
        dirs = [Path(windir) / "Fonts"]
        local = os.getenv("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
    else:
        dirs = [
            Path("/usr/share/fonts"),
            Path("/usr/local/share/fonts"),
            home / ".fonts",
            home / ".local" / "share" / "fonts",
        ]
    return [str(d) for d in dirs]


def get_font_dirs() -> list[str]:
    value = os.getenv("FONT_DIRS")
    if not value:
        return default_font_dirs()
    return [d for d in value.split(os.pathsep) if d]


def get_graph_workers() -> int | None:
    """Pool size for edge extraction; None lets the executor decide."""
    value = os.getenv("GRAPH_WORKERS")
    if not value:
        return None
    workers = int(value)
    if workers < 1:
        raise ValueError("GRAPH_WORKERS must be a positive integer")
    return workers


def get_host() -> str:
    return os.getenv("HOST", "127.0.0.1")


def get_port() -> int:
    return int(os.getenv("PORT", "8080"))


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
