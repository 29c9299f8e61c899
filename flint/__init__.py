"""Flint static site compiler.

Flint compiles a directory of Markdown documents with YAML frontmatter into
static HTML pages. Page bodies can embed raw HTML blocks, generated child
listings and htmx-style attribute links; page skeletons use ``{{tag}}``
placeholders that resolve to built-in fragments or component plugins.

The main entry point is the CLI module, which provides commands for building
a site, compiling a single document and listing the available tags.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
