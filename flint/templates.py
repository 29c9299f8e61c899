"""Named page skeletons.

A TemplateStore holds skeleton text by name (``default``, ``blank``,
``blog-post``, ...). A project's base skeletons are loaded from a directory,
then a theme's directory is overlaid on top: skeletons the theme defines
replace the base ones of the same name, all others are kept.

Key class:
- TemplateStore: Registers, looks up and renders skeletons.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .context import TemplateContext
from .engine import PlaceholderEngine
from .errors import TemplateError, TemplateNotFoundError
from .tags import TagRegistry

__all__ = [
    "TemplateStore",
    "load_templates_from_dir",
    "overlay_templates_from_dir",
]

logger = logging.getLogger(__name__)

SKELETON_SUFFIX = ".html"


class TemplateStore:
    """Registry of named page skeletons.

    Attributes:
        engine: PlaceholderEngine used by render().
    """

    def __init__(self, tags: TagRegistry | None = None):
        """Initialize an empty store.

        Args:
            tags: Registry for plugin tags; an empty one when omitted.
        """
        self._skeletons: dict[str, str] = {}
        self.engine = PlaceholderEngine(tags)

    @property
    def tags(self) -> TagRegistry:
        return self.engine.tags

    def register(self, name: str, skeleton: str) -> None:
        """Add or replace a skeleton."""
        self._skeletons[name] = skeleton

    def get(self, name: str) -> str | None:
        """Return a skeleton's text, or None if it is not registered."""
        return self._skeletons.get(name)

    def has(self, name: str) -> bool:
        return name in self._skeletons

    def names(self) -> list[str]:
        """Return registered names in registration order."""
        return list(self._skeletons)

    def render(self, name: str, ctx: TemplateContext) -> str:
        """Render a skeleton through the placeholder engine.

        Raises:
            TemplateNotFoundError: If name is not registered.
            TemplateError: If the skeleton is malformed.
        """
        skeleton = self._skeletons.get(name)
        if skeleton is None:
            raise TemplateNotFoundError(name)
        try:
            return self.engine.process(skeleton, ctx)
        except TemplateError as exc:
            raise TemplateError(f'Template "{name}": {exc}') from exc


def _iter_skeletons(directory: Path):
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix == SKELETON_SUFFIX:
            yield path.stem, path.read_text(encoding="utf-8")


def load_templates_from_dir(
    directory: Path, tags: TagRegistry | None = None
) -> TemplateStore:
    """Build a store from every ``.html`` file in directory (non-recursive).

    A missing directory yields an empty store.
    """
    store = TemplateStore(tags)
    directory = Path(directory)
    if not directory.is_dir():
        logger.debug("Template directory %s does not exist", directory)
        return store
    for name, skeleton in _iter_skeletons(directory):
        store.register(name, skeleton)
    return store


def overlay_templates_from_dir(directory: Path, store: TemplateStore) -> None:
    """Replace or add skeletons in store from a theme directory.

    A missing directory is a no-op.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return
    for name, skeleton in _iter_skeletons(directory):
        if store.has(name):
            logger.debug("Theme overrides template %s", name)
        store.register(name, skeleton)
