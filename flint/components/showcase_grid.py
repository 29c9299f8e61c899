"""Linked card grid from the ``Showcase`` frontmatter object."""

from flint.partials import render_source
from flint.tags import TagDefinition
from flint.utils import lookup

TEMPLATE = """<section class="max-w-5xl mx-auto px-4 sm:px-6 lg:px-8 py-16 sm:py-20">
  <div class="text-center mb-12">
    <h2 class="text-3xl sm:text-4xl font-bold text-gray-900 mb-4">{{ heading }}</h2>
{% if subtitle %}
    <p class="text-lg text-gray-500 max-w-xl mx-auto">{{ subtitle }}</p>
{% endif %}
  </div>
  <div class="grid grid-cols-1 sm:grid-cols-2 lg:grid-cols-3 gap-6">
{% for item in items %}
    <a href="{{ item.href }}" class="group block bg-white rounded-xl border border-gray-200 p-6 shadow-sm hover:shadow-lg hover:border-blue-300 transition-all">
      <div class="text-3xl mb-3">{{ item.icon }}</div>
      <h3 class="text-lg font-semibold text-gray-900 mb-1 group-hover:text-blue-600 transition-colors">{{ item.title }}</h3>
      <p class="text-gray-500 text-sm">{{ item.description }}</p>
    </a>
{% endfor %}
  </div>
</section>"""


def render_showcase_grid(ctx, name):
    block = lookup(ctx.frontmatter, "Showcase")
    if not isinstance(block, dict):
        return ""
    items = [
        {
            "icon": lookup(item, "icon", default=""),
            "title": lookup(item, "title", default=""),
            "description": lookup(item, "description", default=""),
            "href": lookup(item, "href", default="#"),
        }
        for item in lookup(block, "items", default=[]) or []
        if isinstance(item, dict)
    ]
    if not items:
        return ""
    return render_source(
        TEMPLATE,
        heading=lookup(block, "heading", default=""),
        subtitle=lookup(block, "subtitle", default=""),
        items=items,
    )


TAG_DEFS = [
    TagDefinition(
        tag="showcase-grid",
        label="Showcase Grid",
        icon="🗂️",
        description="Responsive linked card grid from frontmatter Showcase object.",
        frontmatter_key="Showcase",
        resolve=render_showcase_grid,
    )
]
