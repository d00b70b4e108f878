"""Unit tests for the fixed style layer."""

from __future__ import annotations

from blog_pages.styles import MONO_FONT_STACK, STYLE_RULES, stylesheet


def _declarations(selector: str) -> dict[str, str]:
    rule = next(rule for rule in STYLE_RULES if rule.selector == selector)
    return dict(rule.declarations)


def test_dark_scheme_is_fixed() -> None:
    """The root rule pins the dark colour scheme."""
    assert _declarations(":root")["color-scheme"] == "dark"


def test_code_blocks_scroll_instead_of_wrapping() -> None:
    """Code blocks keep whitespace and scroll horizontally."""
    pre = _declarations(".codehilite pre")
    assert pre["white-space"] == "pre"
    assert pre["overflow-x"] == "auto"


def test_inline_code_has_no_quote_decoration() -> None:
    """Inline code drops generated quote marks and uses the mono stack."""
    assert _declarations(".prose code.inline-code")["font-family"] == "var(--font-mono)"
    pseudo = _declarations(
        ".prose code.inline-code::before, .prose code.inline-code::after"
    )
    assert pseudo["content"] == "none"
    assert "IBM Plex Mono" in MONO_FONT_STACK


def test_links_inherit_colour_without_underline() -> None:
    """Links take the surrounding text colour and no underline."""
    link = _declarations(".prose a")
    assert link["color"] == "inherit"
    assert link["text-decoration"] == "none"


def test_anchor_hidden_until_hover() -> None:
    """Heading anchors are transparent until their heading is hovered."""
    assert _declarations(".heading-anchor")["opacity"] == "0"
    hover = next(rule for rule in STYLE_RULES if ":hover .heading-anchor" in rule.selector)
    assert dict(hover.declarations)["opacity"] == "1"


def test_pixelated_images() -> None:
    """Images flagged ``pixelated`` scale without smoothing."""
    assert _declarations("img.pixelated")["image-rendering"] == "pixelated"


def test_stylesheet_serializes_fonts_and_highlight_rules() -> None:
    """Font URLs use the asset prefix and highlight CSS is appended last."""
    css = stylesheet("/static/", ".codehilite .k { color: red }")
    assert 'url("/static/fonts/inter-regular.woff2")' in css
    assert css.rstrip().endswith(".codehilite .k { color: red }")
    assert stylesheet() == stylesheet()
