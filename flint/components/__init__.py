"""Built-in component plugins.

Each module exports ``TAG_DEFS`` and is picked up by
``flint.tags.scan_definitions`` at build time, exactly like a project's own
components directory.
"""

from pathlib import Path

BUILTIN_COMPONENTS_DIR = Path(__file__).parent
