"""HTML utility functions for Flint.

Functions:
    escape_html: Escape special HTML characters in a string.
    join_root_url: Join a base URL with a path.
    rewrite_absolute_paths: Prefix site-local absolute paths with a base path.
"""

from __future__ import annotations

import re

from markupsafe import escape

# href/src plus the request attributes emitted by the attribute-link rewriter;
# only quoted values starting with a single slash are candidates.
_PATH_ATTR_RE = re.compile(
    r"""(?P<attr>\b(?:hx-get|hx-post|hx-put|hx-delete|hx-patch|href|src))="""
    r"""(?P<quote>['"])(?P<path>/(?!/)[^'"]*?)(?P=quote)"""
)


def escape_html(text: object) -> str:
    """Escape special HTML characters in a string.

    Args:
        text: The value to escape; non-strings are converted first.

    Returns:
        The escaped string, safe for inclusion in HTML text or attributes.

    Examples:
        >>> escape_html('Tom & "Jerry"')
        'Tom &amp; &#34;Jerry&#34;'
    """
    return str(escape("" if text is None else str(text)))


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Args:
        root_url: Base URL (e.g., https://example.com/blog).
        path: Path beginning with or without a leading slash.

    Returns:
        Combined URL with proper slash handling.

    Examples:
        >>> join_root_url('https://example.com/', 'about')
        'https://example.com/about'
    """
    if not root_url:
        return path
    base = root_url.rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"


def rewrite_absolute_paths(html: str, base_path: str) -> str:
    """Prefix root-relative paths in HTML attributes with base_path.

    Protocol-relative URLs, external URLs and fragment links are left alone,
    as are paths that already carry the prefix.

    Args:
        html: Rendered HTML.
        base_path: Prefix such as ``/docs``; empty means no rewriting.

    Returns:
        HTML with rewritten attribute values.

    Examples:
        >>> rewrite_absolute_paths('<a href="/about">A</a>', '/site')
        '<a href="/site/about">A</a>'
    """
    if not base_path:
        return html

    def repl(match: re.Match) -> str:
        path = match.group("path")
        quote = match.group("quote")
        if path == base_path or path.startswith(f"{base_path}/"):
            return match.group(0)
        return f"{match.group('attr')}={quote}{base_path}{path}{quote}"

    return _PATH_ATTR_RE.sub(repl, html)
