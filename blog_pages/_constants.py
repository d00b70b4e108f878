"""Common literal values used across blog_pages.

These constants keep filenames, source extensions, and markup delimiters
centralized so the content store, renderer, builder, and tests can import the
same values without drifting. Intended for internal use within the blog_pages
package.

Examples
--------
>>> from blog_pages import _constants
>>> _constants.POST_FILENAME_TEMPLATE.format(slug="game-of-life")
'posts/game-of-life.html'
>>> ".mdx" in _constants.SOURCE_SUFFIXES
True
"""

SOURCE_SUFFIXES = (".md", ".mdx")
INDEX_STEM = "index"
FRONT_MATTER_DELIMITER = "---"
FENCE_LABEL_SEPARATOR = ":"
ANCHOR_GLYPH = "#"

POST_FILENAME_TEMPLATE = "posts/{slug}.html"
INDEX_FILENAME = "index.html"
LISTING_FILENAME = "posts.json"
STYLESHEET_FILENAME = "assets/site.css"
