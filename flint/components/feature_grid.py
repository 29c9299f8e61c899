"""Feature card grid from the ``Features`` frontmatter object."""

from flint.partials import render_source
from flint.tags import TagDefinition
from flint.utils import lookup

ICON_BG = {
    "blue": "bg-blue-100",
    "green": "bg-green-100",
    "purple": "bg-purple-100",
    "orange": "bg-orange-100",
    "cyan": "bg-cyan-100",
    "pink": "bg-pink-100",
    "amber": "bg-amber-100",
    "red": "bg-red-100",
    "teal": "bg-teal-100",
    "gray": "bg-gray-100",
}

TEMPLATE = """<section class="max-w-6xl mx-auto px-4 sm:px-6 lg:px-8 py-16 sm:py-20">
  <div class="text-center mb-14">
{% if heading %}
    <h2 class="text-3xl sm:text-4xl font-bold text-gray-900 mb-4">{{ heading }}</h2>
{% endif %}
{% if subtitle %}
    <p class="text-lg text-gray-500 max-w-2xl mx-auto">{{ subtitle }}</p>
{% endif %}
  </div>
  <div class="grid grid-cols-1 sm:grid-cols-2 lg:grid-cols-3 gap-8">
{% for card in cards %}
    <div class="feature-card bg-white rounded-xl border border-gray-200 p-6 shadow-sm">
      <div class="w-12 h-12 {{ card.bg }} rounded-lg flex items-center justify-center text-2xl mb-4">{{ card.icon }}</div>
      <h3 class="text-lg font-semibold text-gray-900 mb-2">{{ card.title }}</h3>
      <p class="text-gray-600 text-sm leading-relaxed">{{ card.description }}</p>
    </div>
{% endfor %}
  </div>
</section>"""


def render_feature_grid(ctx, name):
    features = lookup(ctx.frontmatter, "Features")
    if not isinstance(features, dict):
        return ""
    cards = [
        {
            "icon": lookup(item, "icon", default=""),
            "title": lookup(item, "title", default=""),
            "description": lookup(item, "description", default=""),
            "bg": ICON_BG.get(str(lookup(item, "color", default="gray")), ICON_BG["gray"]),
        }
        for item in lookup(features, "features", default=[])
        if isinstance(item, dict)
    ]
    if not cards:
        return ""
    return render_source(
        TEMPLATE,
        heading=lookup(features, "heading", default=""),
        subtitle=lookup(features, "subtitle", default=""),
        cards=cards,
    )


TAG_DEFS = [
    TagDefinition(
        tag="feature-grid",
        label="Feature Grid",
        icon="🧩",
        description="Responsive grid of feature cards from frontmatter Features object.",
        frontmatter_key="Features",
        resolve=render_feature_grid,
    )
]
