"""Static images from the ``Image`` frontmatter value.

``Image`` may be a path, a list of paths, an ``{src, alt, caption}`` mapping,
or a list of such mappings. Tags:

    {{media-gallery}}  responsive grid of every image
    {{media-strip}}    compact row of thumbnails
    {{media:N}}        the single image at zero-based index N
"""

import re
from pathlib import PurePosixPath

from flint.partials import render_source
from flint.tags import TagDefinition
from flint.utils import lookup

INDEX_TAG_RE = re.compile(r"^media:(\d+)$")

GRID_CLASSES = {
    1: "grid-cols-1",
    2: "grid-cols-1 sm:grid-cols-2",
    3: "grid-cols-1 sm:grid-cols-2 md:grid-cols-3",
}

GALLERY = """<div class="static-media-gallery grid gap-4 my-6 {{ grid }}">
{% for item in items %}
  <figure class="static-media-item" data-index="{{ loop.index0 }}">
    <img src="{{ item.src }}" alt="{{ item.alt }}" loading="lazy" decoding="async" class="w-full h-48 object-cover rounded-lg shadow-sm">
{% if item.caption %}
    <figcaption class="text-xs text-gray-500 text-center mt-1">{{ item.caption }}</figcaption>
{% endif %}
  </figure>
{% endfor %}
</div>"""

STRIP = """<div class="static-media-strip my-4 flex flex-wrap gap-2">
{% for item in items %}
  <img src="{{ item.src }}" alt="{{ item.alt }}" data-index="{{ loop.index0 }}" loading="lazy" decoding="async" class="h-20 w-auto object-cover rounded-md shadow-sm">
{% endfor %}
</div>"""

SINGLE = """<figure class="static-media-single">
  <img src="{{ item.src }}" alt="{{ item.alt }}" loading="lazy" decoding="async" class="max-w-full rounded-lg shadow-sm">
{% if item.caption %}
  <figcaption class="text-xs text-gray-500 text-center mt-1">{{ item.caption }}</figcaption>
{% endif %}
</figure>"""


def filename_alt(src):
    """Alt text from a file name: ``/img/red_fox-1.jpg`` -> ``red fox 1``."""
    return re.sub(r"[-_]", " ", PurePosixPath(src).stem)


def normalise(raw):
    """Normalise an ``Image`` frontmatter value into a list of asset dicts."""
    if not raw:
        return []
    values = raw if isinstance(raw, list) else [raw]
    assets = []
    for value in values:
        if isinstance(value, str) and value:
            value = {"src": value}
        if not isinstance(value, dict) or not isinstance(lookup(value, "src"), str):
            continue
        src = lookup(value, "src")
        if not src:
            continue
        assets.append(
            {
                "src": src,
                "alt": lookup(value, "alt") or filename_alt(src),
                "caption": lookup(value, "caption", default=""),
            }
        )
    return assets


def _assets(ctx):
    return normalise(lookup(ctx.frontmatter, "Image"))


def render_gallery(ctx, name):
    items = _assets(ctx)
    if not items:
        return ""
    return render_source(GALLERY, items=items, grid=GRID_CLASSES[min(len(items), 3)])


def render_strip(ctx, name):
    items = _assets(ctx)
    if not items:
        return ""
    return render_source(STRIP, items=items)


def render_single(ctx, name):
    index = int(INDEX_TAG_RE.match(name).group(1))
    items = _assets(ctx)
    if index >= len(items):
        return ""
    return render_source(SINGLE, item=items[index])


TAG_DEFS = [
    TagDefinition(
        tag="media-gallery",
        label="Media Gallery",
        icon="🖼️",
        description="Responsive image grid from frontmatter Image array.",
        frontmatter_key="Image",
        resolve=render_gallery,
    ),
    TagDefinition(
        tag="media-strip",
        label="Media Strip",
        icon="📽️",
        description="Compact thumbnail row from frontmatter Image array.",
        frontmatter_key="Image",
        resolve=render_strip,
    ),
    TagDefinition(
        match=lambda name: INDEX_TAG_RE.match(name) is not None,
        label="Media Index",
        icon="🔢",
        description="Single image at index N from frontmatter Image array (media:N syntax).",
        frontmatter_key="Image",
        resolve=render_single,
    ),
]
