"""Static build pipeline for a personal blog.

This package loads Markdown/MDX articles with YAML metadata, lists them newest
first, renders their bodies with heading anchors and labelled code blocks, and
writes the themed pages through the ``pages`` console script.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from blog_pages import main
>>> main()  # doctest: +SKIP
>>> from blog_pages import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
