"""Gradient call-to-action section from the ``CTA`` frontmatter object.

Example frontmatter::

    CTA:
      heading: Ready to ship?
      subtitle: Build your first site in minutes.
      primaryCta: {label: Get started, href: /docs/}
      secondaryCta: {label: Examples, href: /examples/}
"""

from flint.components.hero import cta_button
from flint.partials import render_source
from flint.tags import TagDefinition
from flint.utils import lookup

TEMPLATE = """<section class="bg-gradient-to-r from-blue-600 to-indigo-700 text-white">
  <div class="max-w-4xl mx-auto px-4 sm:px-6 lg:px-8 py-16 sm:py-20 text-center">
    <h2 class="text-3xl sm:text-4xl font-bold mb-4">{{ heading }}</h2>
{% if subtitle %}
    <p class="text-blue-100 text-lg mb-8 max-w-xl mx-auto">{{ subtitle }}</p>
{% endif %}
    <div class="flex flex-col sm:flex-row gap-4 justify-center">
      <a href="{{ primary.href }}" class="inline-flex items-center justify-center px-8 py-3.5 bg-white text-blue-700 font-semibold rounded-lg shadow-lg hover:bg-blue-50 transition-colors text-base">{{ primary.label }}</a>
{% if secondary %}
      <a href="{{ secondary.href }}" class="inline-flex items-center justify-center px-8 py-3.5 border-2 border-white/30 text-white font-semibold rounded-lg hover:bg-white/10 transition-colors text-base">{{ secondary.label }}</a>
{% endif %}
    </div>
  </div>
</section>"""


def render_call_to_action(ctx, name):
    block = lookup(ctx.frontmatter, "CTA")
    if not isinstance(block, dict) or not lookup(block, "heading"):
        return ""
    primary = cta_button(lookup(block, "primaryCta", "primary"))
    if primary is None:
        return ""
    return render_source(
        TEMPLATE,
        heading=lookup(block, "heading"),
        subtitle=lookup(block, "subtitle", default=""),
        primary=primary,
        secondary=cta_button(lookup(block, "secondaryCta", "secondary")),
    )


TAG_DEFS = [
    TagDefinition(
        tag="call-to-action",
        label="Call to Action",
        icon="📣",
        description="Gradient call-to-action section from frontmatter CTA object.",
        frontmatter_key="CTA",
        resolve=render_call_to_action,
    )
]
