"""Hero section from the ``Hero`` frontmatter object.

Example frontmatter::

    Hero:
      tagline: New release
      heading: Build faster
      subtitle: Markdown in, static HTML out.
      primaryCta: {label: Get started, href: /docs/}
      secondaryCta: {label: GitHub, href: https://github.com/}
"""

from flint.partials import render_source
from flint.tags import TagDefinition
from flint.utils import lookup

TEMPLATE = """<section class="relative bg-gradient-to-br from-blue-600 via-blue-700 to-indigo-800 text-white overflow-hidden">
  <div class="relative max-w-5xl mx-auto px-4 sm:px-6 lg:px-8 py-20 sm:py-28 text-center">
{% if tagline %}
    <p class="text-blue-200 text-sm font-semibold tracking-widest uppercase mb-4">{{ tagline }}</p>
{% endif %}
    <h1 class="text-4xl sm:text-5xl lg:text-6xl font-extrabold tracking-tight mb-6">{{ heading }}</h1>
{% if subtitle %}
    <p class="text-lg sm:text-xl text-blue-100 max-w-2xl mx-auto mb-10">{{ subtitle }}</p>
{% endif %}
    <div class="flex flex-col sm:flex-row gap-4 justify-center">
{% if primary %}
      <a href="{{ primary.href }}" class="inline-flex items-center justify-center px-8 py-3.5 bg-white text-blue-700 font-semibold rounded-lg shadow-lg">{{ primary.label }}</a>
{% endif %}
{% if secondary %}
      <a href="{{ secondary.href }}" class="inline-flex items-center justify-center px-8 py-3.5 border-2 border-white/30 text-white font-semibold rounded-lg">{{ secondary.label }}</a>
{% endif %}
    </div>
  </div>
</section>"""


def cta_button(value):
    """Normalise a ``{label, href}`` mapping; None when either part is missing."""
    if not isinstance(value, dict):
        return None
    href = lookup(value, "href", default="")
    label = lookup(value, "label", default="")
    if not href or not label:
        return None
    return {"href": str(href), "label": str(label)}


def render_hero(ctx, name):
    hero = lookup(ctx.frontmatter, "Hero")
    if not isinstance(hero, dict) or not lookup(hero, "heading"):
        return ""
    return render_source(
        TEMPLATE,
        tagline=lookup(hero, "tagline", default=""),
        heading=lookup(hero, "heading"),
        subtitle=lookup(hero, "subtitle", default=""),
        primary=cta_button(lookup(hero, "primaryCta", "primary")),
        secondary=cta_button(lookup(hero, "secondaryCta", "secondary")),
    )


TAG_DEFS = [
    TagDefinition(
        tag="hero",
        label="Hero",
        icon="🦸",
        description="Full-width gradient hero section from frontmatter Hero object.",
        frontmatter_key="Hero",
        resolve=render_hero,
    )
]
