"""Utilities for rendering article markup and syntax-highlighted code blocks."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .anchors import ProseExtension
from .fences import LabeledFenceExtension
from .link_rewriter import RelativeLinkExtension
from .models import CodeBlock, RenderCollector, RenderedDocument, RenderError

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from blog_pages.content import Document
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
BASE_EXTENSIONS: tuple[str, ...] = ("tables", "sane_lists", "attr_list")


class HtmlContentRenderer:
    """Render article bodies and code snippets with consistent styling."""

    def __init__(
        self, pygments_style: str = "monokai", *, assets_base_url: str = "/assets"
    ) -> None:
        """Initialize a renderer with a pygments style and asset location.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        assets_base_url : str, optional
            URL prefix that relative image sources are resolved against.
        """
        self.pygments_style = pygments_style
        self.assets_base_url = assets_base_url
        self._formatter = HtmlFormatter(
            style=pygments_style, cssclass="codehilite", wrapcode=True
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, document: Document) -> RenderedDocument:
        """Render ``document`` into its styled output tree.

        Parameters
        ----------
        document : Document
            Loaded article; only read, never modified.

        Returns
        -------
        RenderedDocument
            Body HTML together with the headings and code blocks it contains.

        Raises
        ------
        RenderError
            If the body contains an unterminated fenced block or a heading that
            skips a nesting level. The error names the document's slug.
        """
        try:
            html, collector = self.markdown(document.body)
        except RenderError as exc:
            raise RenderError(exc.detail, slug=document.slug, line=exc.line) from exc
        return RenderedDocument(
            summary=document.summary,
            html=html,
            headings=tuple(collector.headings),
            code_blocks=tuple(collector.code_blocks),
        )

    def markdown(self, text: str) -> tuple[str, RenderCollector]:
        """Render markup into HTML, returning the nodes gathered on the way."""
        collector = RenderCollector()
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        if not normalized.strip():
            return "", collector
        extensions: list[Extension | str] = [
            *BASE_EXTENSIONS,
            LabeledFenceExtension(collector, self.code_block),
            ProseExtension(collector),
            RelativeLinkExtension(self.assets_base_url),
        ]
        md = Markdown(extensions=extensions, output_format="html")
        return md.convert(normalized), collector

    def code_block(self, block: CodeBlock) -> str:
        """Render ``block`` into highlighted HTML, labelled when annotated.

        Parameters
        ----------
        block : CodeBlock
            Fenced code region. The Pygments lexer is looked up from
            ``block.language`` and falls back to ``"text"`` when unknown.

        Returns
        -------
        str
            HTML for the highlighted block. Blocks carrying a language or a
            filename are wrapped in a ``figure.code-block`` whose caption shows
            both labels.
        """
        lang = block.language or "text"
        try:
            lexer = get_lexer_by_name(lang, stripnl=False)
        except ClassNotFound:
            lexer = get_lexer_by_name("text", stripnl=False)
        html = self._attach_language_attribute(
            highlight(block.content, lexer, self._formatter), lang
        )
        if not block.is_labelled:
            return html.rstrip("\n")

        attributes = [f'class="code-block" data-language="{escape(lang, quote=True)}"']
        labels: list[str] = []
        if block.filename:
            safe_name = escape(block.filename, quote=True)
            attributes.append(f'data-filename="{safe_name}"')
            labels.append(f'<span class="code-block__filename">{safe_name}</span>')
        if block.language:
            labels.append(
                f'<span class="code-block__language">{escape(block.language)}</span>'
            )
        return (
            f"<figure {' '.join(attributes)}>"
            f'<figcaption class="code-block__label">{"".join(labels)}</figcaption>'
            f"{html.rstrip()}"
            "</figure>"
        )

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language or "text", quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="codehilite" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)


__all__ = ["HtmlContentRenderer"]
