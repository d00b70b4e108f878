"""Markdown extension for labelled fenced code blocks.

Fences use the ``language:filename`` info string (``go:gol.go``); trailing
comma flags such as ``rust,no_run`` are dropped. Blocks are pulled out of the
source before python-markdown normalizes whitespace so tabs and leading
indentation reach the highlighter untouched, then swapped back in as
highlighted HTML once the document has been serialized.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.postprocessors import Postprocessor
from markdown.preprocessors import Preprocessor

from blog_pages._constants import FENCE_LABEL_SEPARATOR

from .models import CodeBlock, RenderError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown import Markdown

    from .models import RenderCollector
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

FENCE_OPEN_PATTERN = re.compile(
    r"^(?P<quote>(?:[ ]{0,3}>[ ]?)*)(?P<indent>[ ]*)"
    r"(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^`]*?)[ \t]*$"
)
FENCE_CLOSE_PATTERN = re.compile(
    r"^(?P<quote>(?:[ ]{0,3}>[ ]?)*)[ ]*(?P<fence>`{3,}|~{3,})[ \t]*$"
)
QUOTE_MARKER_PATTERN = re.compile(r"^[ ]{0,3}>[ ]?")
LIST_ITEM_PATTERN = re.compile(r"^[ ]{0,3}(?:[*+-]|\d+\.)[ \t]+\S")
INDENTED_CODE_WIDTH = 4
PLACEHOLDER_TEMPLATE = "<!--blog-pages:code-block:{index}-->"
PLACEHOLDER_PATTERN = re.compile(r"<!--blog-pages:code-block:(\d+)-->")


def parse_fence_info(info: str) -> tuple[str | None, str | None]:
    """Split a fence info string into ``(language, filename)``.

    >>> parse_fence_info("go:gol.go")
    ('go', 'gol.go')
    >>> parse_fence_info("rust,no_run")
    ('rust', None)
    >>> parse_fence_info(":server.ts")
    (None, 'server.ts')
    """
    token = info.strip().split(maxsplit=1)[0] if info.strip() else ""
    token = token.split(",", 1)[0]
    language, _sep, filename = token.partition(FENCE_LABEL_SEPARATOR)
    return language.strip() or None, filename.strip() or None


class LabeledFenceExtension(Extension):
    """Register the fence extraction and restoration processors.

    ``render_block`` turns a :class:`CodeBlock` into HTML; every block found is
    also appended to ``collector.code_blocks``.
    """

    def __init__(
        self,
        collector: RenderCollector,
        render_block: cabc.Callable[[CodeBlock], str],
    ) -> None:
        super().__init__()
        self.collector = collector
        self.render_block = render_block

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register processors ahead of whitespace normalization."""
        rendered: list[str] = []
        md.preprocessors.register(
            FenceExtractor(md, self.collector, self.render_block, rendered),
            "blog_labeled_fences",
            35,
        )
        md.postprocessors.register(
            FenceRestorer(md, rendered), "blog_labeled_fences_restore", 25
        )


class FenceExtractor(Preprocessor):
    """Replace fenced blocks with comment placeholders."""

    def __init__(
        self,
        md: Markdown,
        collector: RenderCollector,
        render_block: cabc.Callable[[CodeBlock], str],
        rendered: list[str],
    ) -> None:
        super().__init__(md)
        self.collector = collector
        self.render_block = render_block
        self.rendered = rendered

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with every fenced block replaced by a placeholder.

        Raises
        ------
        RenderError
            If a fence is opened but never closed.

        Notes
        -----
        Indented code blocks outside lists are passed through untouched, so a
        fence shown as sample text inside one is not treated as a fence.
        Placeholders keep the fence's blockquote prefix and indentation, which
        leaves them inside the enclosing quote or list item.
        """
        output: list[str] = []
        idx = 0
        in_list = False
        after_blank = True
        while idx < len(lines):
            line = lines[idx]
            if not line.strip():
                output.append(line)
                after_blank = True
                idx += 1
                continue

            indented = _indent_width(line) >= INDENTED_CODE_WIDTH
            if after_blank and indented and not in_list:
                end = _indented_code_end(lines, idx)
                output.extend(lines[idx:end])
                after_blank = False
                idx = end
                continue

            if after_blank and not indented and not LIST_ITEM_PATTERN.match(line):
                in_list = False
            elif LIST_ITEM_PATTERN.match(line):
                in_list = True

            match = FENCE_OPEN_PATTERN.match(line)
            if match is None:
                output.append(line)
                after_blank = False
                idx += 1
                continue

            quote = match.group("quote")
            depth = quote.count(">")
            fence = match.group("fence")
            end = _find_closing_fence(lines, idx + 1, fence, depth)
            if end is None:
                msg = f"fenced code block opened with '{fence}' is never closed"
                raise RenderError(msg, line=idx + 1)

            indent = len(match.group("indent"))
            content = "\n".join(
                _dedent(_strip_quote(body_line, depth), indent)
                for body_line in lines[idx + 1 : end]
            )
            language, filename = parse_fence_info(match.group("info"))
            block = CodeBlock(content=content, language=language, filename=filename)
            self.collector.code_blocks.append(block)
            placeholder = PLACEHOLDER_TEMPLATE.format(index=len(self.rendered))
            self.rendered.append(self.render_block(block))
            margin = quote.rstrip()
            output.extend([margin, f"{quote}{' ' * indent}{placeholder}", margin])
            after_blank = True
            idx = end + 1
        return output


class FenceRestorer(Postprocessor):
    """Swap placeholders for the highlighted code block HTML."""

    def __init__(self, md: Markdown, rendered: list[str]) -> None:
        super().__init__(md)
        self.rendered = rendered

    def run(self, text: str) -> str:
        """Return ``text`` with every placeholder replaced."""

        def _repl(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index >= len(self.rendered):  # pragma: no cover - foreign comment
                return match.group(0)
            return self.rendered[index]

        return PLACEHOLDER_PATTERN.sub(_repl, text)


def _find_closing_fence(
    lines: list[str], start: int, fence: str, depth: int
) -> int | None:
    """Return the index of the line closing ``fence`` or ``None``.

    The closing fence must sit at the same blockquote ``depth`` as the opener.
    """
    for idx in range(start, len(lines)):
        match = FENCE_CLOSE_PATTERN.match(lines[idx])
        if match is None or match.group("quote").count(">") != depth:
            continue
        candidate = match.group("fence")
        if candidate[0] == fence[0] and len(candidate) >= len(fence):
            return idx
    return None


def _indent_width(line: str) -> int:
    """Return the leading whitespace width of ``line`` with tabs expanded."""
    leading = line[: len(line) - len(line.lstrip(" \t"))]
    return len(leading.expandtabs(INDENTED_CODE_WIDTH))


def _indented_code_end(lines: list[str], start: int) -> int:
    """Return the index just past the indented code block starting at ``start``."""
    end = start
    for idx in range(start, len(lines)):
        if not lines[idx].strip():
            continue
        if _indent_width(lines[idx]) < INDENTED_CODE_WIDTH:
            break
        end = idx + 1
    return end


def _strip_quote(line: str, depth: int) -> str:
    """Remove ``depth`` blockquote markers from the start of ``line``."""
    for _ in range(depth):
        line = QUOTE_MARKER_PATTERN.sub("", line, count=1)
    return line


def _dedent(line: str, width: int) -> str:
    """Remove up to ``width`` leading spaces that belong to the fence indent."""
    stripped = len(line) - len(line.lstrip(" "))
    return line[min(stripped, width) :]


__all__ = [
    "FenceExtractor",
    "FenceRestorer",
    "LabeledFenceExtension",
    "parse_fence_info",
]
