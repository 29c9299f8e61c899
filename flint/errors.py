"""Exception hierarchy for Flint.

Every error raised deliberately by the compile pipeline derives from
FlintError, so callers (the build loop, the CLI) can isolate per-document
failures without catching unrelated exceptions.
"""

from __future__ import annotations

from pathlib import Path


class FlintError(Exception):
    """Base class for all Flint errors."""


class FrontmatterError(FlintError):
    """Raised when a document's metadata block cannot be parsed.

    Attributes:
        path: Path (or label) of the offending document, if known.
        message: Human-readable description of the problem.
    """

    def __init__(self, path: Path | str | None, message: str):
        self.path = path
        self.message = message
        where = str(path) if path else "<string>"
        super().__init__(f"{where}: invalid frontmatter: {message}")


class DirectiveError(FlintError):
    """Raised for unclosed or nested ``:::`` directives."""


class CompileError(FlintError):
    """Raised when prose-to-markup conversion fails."""


class TemplateError(FlintError):
    """Raised for malformed skeletons (e.g. nested conditional spans)."""


class TemplateNotFoundError(FlintError):
    """Raised when rendering a skeleton name that is not registered.

    Attributes:
        name: The requested skeleton id.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Template "{name}" is not registered')


class BuildError(FlintError):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")
