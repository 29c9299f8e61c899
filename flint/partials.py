"""Built-in HTML partials rendered with Jinja2.

Structural tags ({{head}}, {{navigation}}, {{blog-header}}, ...) and the
generated label-listing pages are small Jinja2 templates kept in memory.
Autoescaping is on, so titles and labels coming from frontmatter are
escaped; values that are already HTML must be passed as Markup.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jinja2 import DictLoader, Environment, Template

LABEL_COLORS = [
    ("bg-blue-100", "text-blue-700"),
    ("bg-green-100", "text-green-700"),
    ("bg-purple-100", "text-purple-700"),
    ("bg-amber-100", "text-amber-700"),
    ("bg-rose-100", "text-rose-700"),
    ("bg-teal-100", "text-teal-700"),
    ("bg-indigo-100", "text-indigo-700"),
    ("bg-orange-100", "text-orange-700"),
]

PARTIALS = {
    "head.html": """<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
{% if description %}
  <meta name="description" content="{{ description }}">
{% endif %}
{% if keywords %}
  <meta name="keywords" content="{{ keywords }}">
{% endif %}
{% for href in css_files %}
  <link rel="stylesheet" href="{{ href }}">
{% endfor %}
</head>""",
    "foot_scripts.html": """<script>window.__FLINT_BASE_PATH__ = {{ base_path | tojson }};</script>
{% for src in js_files %}
<script src="{{ src }}" defer></script>
{% endfor %}""",
    "navigation.html": """<nav class="bg-white shadow-sm border-b border-gray-200">
  <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
    <div class="flex h-16 items-center justify-between">
      <div class="hidden md:flex items-center gap-2">
{% for item in items %}
        <a href="{{ item.href }}" class="px-4 py-2 text-sm font-medium rounded-md {{ 'text-blue-600 bg-blue-50' if item.active else 'text-gray-700 hover:text-blue-600 hover:bg-gray-50' }}"{% if item.active %} aria-current="page"{% endif %}>{{ item.label }}</a>
{% endfor %}
      </div>
      <button id="flint-nav-toggle" class="md:hidden p-2 rounded-md text-gray-600" aria-label="Toggle navigation" aria-expanded="false" aria-controls="flint-nav-menu">&#9776;</button>
    </div>
  </div>
  <div id="flint-nav-menu" class="hidden md:hidden border-t border-gray-200 bg-white">
    <div class="px-4 py-3 space-y-1">
{% for item in items %}
      <a href="{{ item.href }}" class="block px-3 py-2 rounded-md text-base font-medium {{ 'text-blue-600 bg-blue-50' if item.active else 'text-gray-700 hover:text-blue-600 hover:bg-gray-50' }}"{% if item.active %} aria-current="page"{% endif %}>{{ item.label }}</a>
{% endfor %}
    </div>
  </div>
</nav>""",
    "label_footer.html": """<footer class="border-t border-gray-200 mt-12 pt-8 pb-8">
  <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
    <h3 class="text-sm font-semibold text-gray-500 uppercase tracking-wider mb-3">Labels</h3>
    <div class="flex flex-wrap gap-2">
{% for label, bg, fg in badges %}
      <a href="#" class="label-link text-sm {{ bg }} {{ fg }} px-3 py-1 rounded-full" data-label="{{ label }}">{{ label }}</a>
{% endfor %}
    </div>
  </div>
</footer>""",
    "category_pill.html": """<span class="inline-block bg-blue-100 text-blue-800 text-xs font-medium px-2.5 py-0.5 rounded">{{ category }}</span>""",
    "label_badges.html": """{% for label in labels %}<span class="text-xs bg-gray-100 text-gray-600 px-2 py-1 rounded-full">{{ label }}</span>{% endfor %}""",
    "blog_header.html": """<header class="mb-8 border-b border-gray-200 pb-6">
{% if category %}
  {% include "category_pill.html" %}
{% endif %}
  <h1 class="text-3xl font-bold text-gray-900 mt-2">{{ title }}</h1>
  <div class="flex flex-wrap items-center gap-3 text-sm text-gray-500 mt-2">
{%- if author %}<span class="byline">{{ author }}</span> · {% endif -%}
{%- if iso_date %}<time datetime="{{ iso_date }}">{{ long_date }}</time> · {% endif -%}
<span class="reading-time">{{ reading_time }} min read</span></div>
{% if labels %}
  <div class="flex flex-wrap gap-2 mt-3">{% include "label_badges.html" %}</div>
{% endif %}
</header>""",
    "label_index.html": """<div class="label-index">
  <h1 class="text-2xl font-bold mb-2">Label: {{ label }}</h1>
{% if pages %}
  <p class="text-gray-500 mb-6">{{ pages | length }} page{{ '' if pages | length == 1 else 's' }} tagged with "{{ label }}"</p>
  <div class="space-y-4">
{% for page in pages %}
    <div class="border border-gray-200 rounded p-4">
      <a href="{{ page.url }}" class="text-lg font-semibold text-blue-600 hover:underline">{{ page.title }}</a>
      <p class="text-sm text-gray-500 mt-1">{{ [page.date, page.category] | select | join(" · ") }}</p>
      <p class="text-gray-600 mt-2">{{ page.description }}</p>
    </div>
{% endfor %}
  </div>
{% else %}
  <p class="text-gray-500">No pages found with this label.</p>
{% endif %}
</div>""",
}

env = Environment(
    loader=DictLoader(PARTIALS),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_partial(name: str, **context: Any) -> str:
    """Render one of the built-in partials by file name."""
    return env.get_template(name).render(**context)


@lru_cache(maxsize=None)
def _compile(source: str) -> Template:
    return env.from_string(source)


def render_source(source: str, **context: Any) -> str:
    """Render a component's own template source in the shared environment."""
    return _compile(source).render(**context)


def asset_url(base_path: str, path: str) -> str:
    """Prefix a site-local asset path with base_path; absolute URLs pass through."""
    if path.startswith(("http://", "https://", "//")):
        return path
    return f"{base_path}/{path.lstrip('/')}"


def label_badges(labels: list[str]) -> list[tuple[str, str, str]]:
    """Deduplicate and sort labels, pairing each with rotating colour classes."""
    unique = sorted(set(labels), key=str.casefold)
    return [
        (label, *LABEL_COLORS[i % len(LABEL_COLORS)]) for i, label in enumerate(unique)
    ]
