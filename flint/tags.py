"""Pluggable tag definitions for the placeholder engine.

A TagDefinition maps a symbolic tag name (``{{hero}}``) or a family of names
matched by a predicate (``{{media:2}}``) to a render function. Definitions are
registered explicitly or discovered from a directory of component modules,
each exporting a ``TAG_DEFS`` list::

    from flint.tags import TagDefinition

    TAG_DEFS = [
        TagDefinition(
            tag="gadget",
            label="Gadget",
            icon="🎲",
            description="Interactive demo widget.",
            resolve=lambda ctx, name: "<div>...</div>",
        )
    ]

Plain dicts with the same keys are accepted too.
"""

from __future__ import annotations

import importlib.util
import logging
import re
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .context import TemplateContext

logger = logging.getLogger(__name__)

DEFINITIONS_EXPORT = "TAG_DEFS"
TEST_FILE_RE = re.compile(r"^(test_.*|.*_test|.*\.test)\.py$")

Resolver = Callable[["TemplateContext", str], str]


@dataclass(frozen=True)
class TagDefinition:
    """A render function bound to an exact tag name or a name predicate.

    Attributes:
        resolve: Called with (context, tag name); returns HTML.
        tag: Exact tag name. Takes precedence over ``match``.
        match: Predicate for wildcard tag families.
        label: Human-readable name for component listings.
        icon: Emoji or icon string for component listings.
        description: One-line description for component listings.
        frontmatter_key: Frontmatter key the tag reads, if any.
    """

    resolve: Resolver
    tag: str | None = None
    match: Callable[[str], bool] | None = None
    label: str = ""
    icon: str = ""
    description: str = ""
    frontmatter_key: str | None = None

    def __post_init__(self):
        if not callable(self.resolve):
            raise TypeError("resolve must be callable")
        if not self.tag and self.match is None:
            raise TypeError("a tag definition needs either 'tag' or 'match'")
        if self.match is not None and not callable(self.match):
            raise TypeError("match must be callable")

    @classmethod
    def from_value(cls, value: Any) -> TagDefinition:
        """Coerce a TagDefinition or a dict of its fields into a TagDefinition.

        Raises:
            TypeError: If the value does not have the expected shape.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(**value)
        raise TypeError(f"expected TagDefinition or dict, got {type(value).__name__}")


class TagRegistry:
    """Lookup table from tag name (or predicate) to TagDefinition.

    Exact names are indexed, so re-registering a name replaces the earlier
    definition. Wildcards are tried in registration order, after exact names.
    """

    def __init__(self) -> None:
        self._exact: dict[str, TagDefinition] = {}
        self._wildcards: list[TagDefinition] = []

    def register(self, definitions: Iterable[TagDefinition]) -> None:
        """Register definitions; the last registration of an exact name wins."""
        for definition in definitions:
            if definition.tag:
                self._exact[definition.tag] = definition
            else:
                self._wildcards.append(definition)

    def resolve(self, name: str, context: TemplateContext) -> str | None:
        """Render a tag, or return None when nothing matches."""
        definition = self.lookup(name)
        if definition is None:
            return None
        return str(definition.resolve(context, name))

    def lookup(self, name: str) -> TagDefinition | None:
        """Return the definition that would handle name, if any."""
        exact = self._exact.get(name)
        if exact is not None:
            return exact
        for definition in self._wildcards:
            if definition.match(name):
                return definition
        return None

    def clear(self) -> None:
        """Remove all registered definitions."""
        self._exact.clear()
        self._wildcards.clear()

    def all(self) -> list[TagDefinition]:
        """Return all definitions, exact names first, then wildcards."""
        return [*self._exact.values(), *self._wildcards]

    def discover(self, directory: Path) -> None:
        """Replace all registrations with those found in directory.

        See scan_definitions for the discovery rules.
        """
        self.clear()
        self.register(scan_definitions(directory))

    def __len__(self) -> int:
        return len(self._exact) + len(self._wildcards)


def scan_definitions(directory: Path) -> list[TagDefinition]:
    """Import component modules in directory and collect their TAG_DEFS.

    The scan is non-recursive. Files starting with ``_`` and test modules
    (``test_*.py``, ``*_test.py``, ``*.test.py``) are skipped. A module that
    fails to import, or whose export is malformed, is logged and skipped.

    Args:
        directory: Directory holding component modules.

    Returns:
        Definitions in file-name order; empty if directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    definitions: list[TagDefinition] = []
    for path in sorted(directory.glob("*.py")):
        if path.name.startswith("_") or TEST_FILE_RE.match(path.name):
            continue
        module = _import_component(path)
        if module is None:
            continue
        exported = getattr(module, DEFINITIONS_EXPORT, None)
        if exported is None:
            continue
        if not isinstance(exported, (list, tuple)):
            logger.warning(
                "Skipping %s: %s must be a list, got %s",
                path.name,
                DEFINITIONS_EXPORT,
                type(exported).__name__,
            )
            continue
        for value in exported:
            try:
                definition = TagDefinition.from_value(value)
            except TypeError as exc:
                logger.warning("Skipping malformed tag definition in %s: %s", path.name, exc)
                continue
            logger.debug("Discovered tag %s from %s", definition.tag or definition.label, path.name)
            definitions.append(definition)
    return definitions


def _import_component(path: Path):
    """Import a component module from a file path, or return None on failure."""
    module_name = f"flint_component_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Skipping %s: not importable", path.name)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        logger.warning("Skipping %s: import failed (%s)", path.name, exc)
        return None
    return module
