"""Statistics bar from the ``Stats`` frontmatter object."""

from flint.partials import render_source
from flint.tags import TagDefinition
from flint.utils import lookup

VALUE_COLOR = {
    "blue": "text-blue-400",
    "green": "text-green-400",
    "purple": "text-purple-400",
    "orange": "text-orange-400",
    "cyan": "text-cyan-400",
    "pink": "text-pink-400",
    "amber": "text-amber-400",
    "red": "text-red-400",
    "teal": "text-teal-400",
    "gray": "text-gray-400",
}

TEMPLATE = """<section class="bg-gray-900 text-white">
  <div class="max-w-5xl mx-auto px-4 sm:px-6 lg:px-8 py-16 sm:py-20">
    <div class="grid {{ cols }} gap-8 text-center">
{% for stat in stats %}
      <div>
        <p class="text-3xl sm:text-4xl font-extrabold {{ stat.color }}">{{ stat.value }}</p>
        <p class="text-gray-400 text-sm mt-1">{{ stat.label }}</p>
      </div>
{% endfor %}
    </div>
  </div>
</section>"""


def render_stats_bar(ctx, name):
    block = lookup(ctx.frontmatter, "Stats")
    if not isinstance(block, dict):
        return ""
    stats = [
        {
            "value": lookup(item, "value", default=""),
            "label": lookup(item, "label", default=""),
            "color": VALUE_COLOR.get(str(lookup(item, "color", default="gray")), VALUE_COLOR["gray"]),
        }
        for item in lookup(block, "stats", default=[])
        if isinstance(item, dict)
    ]
    if not stats:
        return ""
    cols = f"grid-cols-{len(stats)}" if len(stats) <= 2 else "grid-cols-2 sm:grid-cols-4"
    return render_source(TEMPLATE, stats=stats, cols=cols)


TAG_DEFS = [
    TagDefinition(
        tag="stats-bar",
        label="Stats Bar",
        icon="📊",
        description="Dark-background statistics bar from frontmatter Stats object.",
        frontmatter_key="Stats",
        resolve=render_stats_bar,
    )
]
