"""Fixed presentation rules applied to every rendered page.

The style layer is a table, not logic: font faces, a dark colour scheme, and
prose overrides for headings, links, inline code, code blocks, and pixelated
images. :func:`stylesheet` serializes the table (plus the Pygments highlight
rules) into the single CSS file the pages link to.

Example
-------
>>> from blog_pages.styles import stylesheet
>>> "color-scheme: dark" in stylesheet()
True
"""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class FontFace:
    """``@font-face`` definition for a self-hosted font file."""

    family: str
    filename: str
    weight: str = "400"
    style: str = "normal"


@dc.dataclass(frozen=True, slots=True)
class StyleRule:
    """A selector and its ordered declarations."""

    selector: str
    declarations: tuple[tuple[str, str], ...]


BODY_FONT_STACK = (
    '"Inter", ui-sans-serif, system-ui, -apple-system, "Segoe UI", '
    "Roboto, Helvetica, Arial, sans-serif"
)
MONO_FONT_STACK = (
    '"IBM Plex Mono", ui-monospace, SFMono-Regular, Menlo, Consolas, '
    '"Liberation Mono", monospace'
)

FONT_FACES: tuple[FontFace, ...] = (
    FontFace("Inter", "inter-regular.woff2"),
    FontFace("Inter", "inter-bold.woff2", weight="700"),
    FontFace("IBM Plex Mono", "ibm-plex-mono-regular.woff2"),
)

STYLE_RULES: tuple[StyleRule, ...] = (
    StyleRule(
        ":root",
        (
            ("color-scheme", "dark"),
            ("--bg", "#111318"),
            ("--fg", "#e6e6e6"),
            ("--muted", "#9aa0a6"),
            ("--border", "#2a2e36"),
            ("--accent", "#8ab4f8"),
            ("--code-bg", "#1c1f26"),
            ("--font-body", BODY_FONT_STACK),
            ("--font-mono", MONO_FONT_STACK),
        ),
    ),
    StyleRule(
        "body",
        (
            ("margin", "0 auto"),
            ("max-width", "72ch"),
            ("padding", "2.5rem 1.25rem 4rem"),
            ("background", "var(--bg)"),
            ("color", "var(--fg)"),
            ("font-family", "var(--font-body)"),
            ("line-height", "1.7"),
        ),
    ),
    StyleRule(
        "a",
        (("color", "inherit"), ("text-decoration", "none")),
    ),
    StyleRule(
        ".prose a",
        (
            ("color", "inherit"),
            ("text-decoration", "none"),
            ("border-bottom", "1px solid var(--border)"),
        ),
    ),
    StyleRule(".prose a:hover", (("border-bottom-color", "var(--accent)"),)),
    StyleRule(
        ".prose :is(h1, h2, h3, h4, h5, h6)",
        (("position", "relative"), ("scroll-margin-top", "1.5rem")),
    ),
    StyleRule(
        ".heading-anchor",
        (
            ("position", "absolute"),
            ("left", "-1.25em"),
            ("padding-right", "0.25em"),
            ("color", "var(--muted)"),
            ("border-bottom", "none"),
            ("opacity", "0"),
            ("transition", "opacity 0.15s ease-in-out"),
        ),
    ),
    StyleRule(
        ".prose :is(h1, h2, h3, h4, h5, h6):hover .heading-anchor, .heading-anchor:focus",
        (("opacity", "1"),),
    ),
    StyleRule(
        ".prose code.inline-code",
        (
            ("font-family", "var(--font-mono)"),
            ("font-size", "0.875em"),
            ("padding", "0.125rem 0.375rem"),
            ("border-radius", "0.25rem"),
            ("background", "var(--code-bg)"),
        ),
    ),
    StyleRule(
        ".prose code.inline-code::before, .prose code.inline-code::after",
        (("content", "none"),),
    ),
    StyleRule(
        ".code-block",
        (
            ("margin", "1.5rem 0"),
            ("border", "1px solid var(--border)"),
            ("border-radius", "0.375rem"),
            ("background", "var(--code-bg)"),
        ),
    ),
    StyleRule(
        ".code-block__label",
        (
            ("display", "flex"),
            ("justify-content", "space-between"),
            ("gap", "1rem"),
            ("padding", "0.375rem 0.75rem"),
            ("border-bottom", "1px solid var(--border)"),
            ("color", "var(--muted)"),
            ("font-family", "var(--font-mono)"),
            ("font-size", "0.8125rem"),
        ),
    ),
    StyleRule(
        ".codehilite pre",
        (
            ("margin", "0"),
            ("padding", "0.875rem 1rem"),
            ("font-family", "var(--font-mono)"),
            ("font-size", "0.875rem"),
            ("white-space", "pre"),
            ("overflow-wrap", "normal"),
            ("overflow-x", "auto"),
        ),
    ),
    StyleRule(
        "img",
        (("max-width", "100%"), ("height", "auto")),
    ),
    StyleRule(
        "img.pixelated",
        (("image-rendering", "pixelated"),),
    ),
    StyleRule(
        ".post-list",
        (("list-style", "none"), ("padding", "0")),
    ),
    StyleRule(
        ".post-list__date, .post-meta",
        (("color", "var(--muted)"), ("font-size", "0.875rem")),
    ),
    StyleRule(
        ".toc",
        (
            ("border-left", "2px solid var(--border)"),
            ("padding-left", "1rem"),
            ("font-size", "0.875rem"),
        ),
    ),
)


def _format_font_face(face: FontFace, assets_base_url: str) -> str:
    return (
        "@font-face {\n"
        f'  font-family: "{face.family}";\n'
        f'  src: url("{assets_base_url}/fonts/{face.filename}") format("woff2");\n'
        f"  font-weight: {face.weight};\n"
        f"  font-style: {face.style};\n"
        "  font-display: swap;\n"
        "}"
    )


def _format_rule(rule: StyleRule) -> str:
    body = "\n".join(f"  {name}: {value};" for name, value in rule.declarations)
    return f"{rule.selector} {{\n{body}\n}}"


def stylesheet(assets_base_url: str = "/assets", highlight_css: str = "") -> str:
    """Serialize the style table into CSS text.

    Parameters
    ----------
    assets_base_url : str, optional
        URL prefix under which the ``fonts/`` directory is served.
    highlight_css : str, optional
        Pygments rules appended after the table so code colours apply.

    Returns
    -------
    str
        Complete stylesheet ending in a newline.
    """
    base = assets_base_url.rstrip("/")
    blocks = [_format_font_face(face, base) for face in FONT_FACES]
    blocks.extend(_format_rule(rule) for rule in STYLE_RULES)
    if highlight_css.strip():
        blocks.append(highlight_css.strip())
    return "\n\n".join(blocks) + "\n"


__all__ = [
    "BODY_FONT_STACK",
    "FONT_FACES",
    "MONO_FONT_STACK",
    "STYLE_RULES",
    "FontFace",
    "StyleRule",
    "stylesheet",
]
