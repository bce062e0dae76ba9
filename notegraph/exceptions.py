# notegraph/exceptions.py


class NotegraphError(Exception):
    """Base class for errors raised by notegraph."""
    pass


class ModelLoadError(NotegraphError):
    """Raised when a notes directory cannot be turned into a Model."""
    pass


class DirectoryUnavailable(ModelLoadError):
    """Raised when the notes path cannot be opened as a directory."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Notes directory unavailable: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NodeParseFailure(ModelLoadError):
    """Raised when a single directory entry cannot be parsed into a Node."""

    def __init__(self, entry: str, reason: str = ""):
        self.entry = entry
        message = f"Cannot parse node from entry: {entry}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class RenderError(NotegraphError):
    """Raised when a markup body cannot be rendered to SVG."""
    pass


class NoFontsAvailable(RenderError):
    """Raised when neither system nor embedded fonts can be used."""
    pass


class CompileError(RenderError):
    """Raised when the markup source fails to compile."""

    def __init__(self, message: str, diagnostics: list[str] | None = None):
        self.diagnostics = diagnostics or []
        super().__init__(message)


class EmptyDocument(RenderError):
    """Raised when a compiled document has no pages."""
    pass
