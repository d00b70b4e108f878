"""Utilities for turning article markup into styled HTML output trees."""

from .anchors import ProseExtension, slugify, unique_anchor
from .fences import LabeledFenceExtension, parse_fence_info
from .link_rewriter import RelativeLinkExtension
from .models import CodeBlock, Heading, RenderedDocument, RenderError
from .renderer import HtmlContentRenderer

__all__ = [
    "CodeBlock",
    "Heading",
    "HtmlContentRenderer",
    "LabeledFenceExtension",
    "ProseExtension",
    "RelativeLinkExtension",
    "RenderError",
    "RenderedDocument",
    "parse_fence_info",
    "slugify",
    "unique_anchor",
]
