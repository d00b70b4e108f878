"""End-to-end tests for building the static blog.

The tests write a small content directory and ``site.yaml`` into a temporary
folder, run :class:`~blog_pages.site_builder.SiteBuilder`, and inspect the
written pages with BeautifulSoup and the JSON listing with msgspec.

Usage
-----
Run ``pytest tests/test_site_builder.py -v``.
"""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json
import pytest
from bs4 import BeautifulSoup

from blog_pages.config import load_site_config
from blog_pages.content import ParseError
from blog_pages.site_builder import SiteBuilder

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

GOL_BODY = """
Intro paragraph.

## Walk-through

```go:gol.go
package main
```
"""


@pytest.fixture
def populated(write_source: cabc.Callable[..., Path]) -> None:
    """Write a published article, an older article, and a draft."""
    write_source("go-game-of-life.mdx", title="Game of Life", body=GOL_BODY)
    write_source(
        "trpc/index.md",
        title="tRPC",
        date="2022-06-02",
        body="## Overview\n\nSee [Life](../go-game-of-life.mdx).\n",
    )
    write_source("unfinished.md", title="Unfinished", date="2023-01-01", draft="true")


def _soup(path: Path) -> BeautifulSoup:
    return BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")


@pytest.mark.usefixtures("populated")
def test_build_writes_pages_index_listing_and_styles(site_config_path: Path) -> None:
    """A build writes one page per published article plus shared artefacts."""
    config = load_site_config(site_config_path)
    result = SiteBuilder(config).run()
    out_dir = config.build.output_dir

    assert result.ok
    names = sorted(path.relative_to(out_dir).as_posix() for path in result.written)
    assert names == [
        "assets/site.css",
        "index.html",
        "posts.json",
        "posts/go-game-of-life.html",
        "posts/trpc.html",
    ]
    assert not (out_dir / "posts" / "unfinished.html").exists()


@pytest.mark.usefixtures("populated")
def test_index_lists_newest_first(site_config_path: Path) -> None:
    """The index page orders published entries by date descending."""
    config = load_site_config(site_config_path)
    SiteBuilder(config).run()
    soup = _soup(config.build.output_dir / "index.html")
    slugs = [item["data-slug"] for item in soup.select(".post-list__item")]
    assert slugs == ["trpc", "go-game-of-life"]
    first_link = soup.select_one(".post-list__title")
    assert first_link["href"] == "posts/trpc.html"
    assert soup.select_one("link[rel=stylesheet]")["href"] == "assets/site.css"


@pytest.mark.usefixtures("populated")
def test_listing_json_matches_index(site_config_path: Path) -> None:
    """``posts.json`` carries summaries with ISO dates and page links."""
    config = load_site_config(site_config_path)
    SiteBuilder(config).run()
    payload = msgspec_json.decode((config.build.output_dir / "posts.json").read_bytes())
    assert payload["site"] == "Fixture Site"
    assert [post["slug"] for post in payload["posts"]] == ["trpc", "go-game-of-life"]
    assert payload["posts"][1]["date"] == "2022-03-17"
    assert payload["posts"][1]["href"] == "posts/go-game-of-life.html"
    assert "body" not in payload["posts"][0]


@pytest.mark.usefixtures("populated")
def test_post_page_renders_body_and_toc(site_config_path: Path) -> None:
    """Article pages embed the rendered body, its TOC, and shared styles."""
    config = load_site_config(site_config_path)
    SiteBuilder(config).run()
    soup = _soup(config.build.output_dir / "posts" / "go-game-of-life.html")

    assert soup.select_one(".post-title").get_text(strip=True) == "Game of Life"
    assert soup.select_one(".post-meta time")["datetime"] == "2022-03-17"
    assert soup.select_one(".toc a")["href"] == "#walk-through"
    assert soup.select_one(".prose h2#walk-through") is not None
    figure = soup.select_one(".prose figure.code-block")
    assert figure["data-filename"] == "gol.go"
    assert soup.select_one("link[rel=stylesheet]")["href"] == "../assets/site.css"

    trpc = _soup(config.build.output_dir / "posts" / "trpc.html")
    assert trpc.select_one(".prose p a")["href"] == "go-game-of-life.html"


@pytest.mark.usefixtures("populated")
def test_drafts_published_when_enabled(site_config_path: Path) -> None:
    """Enabling drafts publishes them and marks the page."""
    config = load_site_config(site_config_path).with_overrides(include_drafts=True)
    SiteBuilder(config).run()
    page = config.build.output_dir / "posts" / "unfinished.html"
    assert page.exists()
    assert _soup(page).select_one(".post-meta__draft") is not None


def test_stylesheet_written(
    site_config_path: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """The stylesheet carries the style table and the highlight rules."""
    write_source("post.md")
    config = load_site_config(site_config_path)
    SiteBuilder(config).run()
    css = (config.build.output_dir / "assets" / "site.css").read_text(encoding="utf-8")
    assert "color-scheme: dark" in css
    assert 'url("/static/fonts/' in css
    assert ".codehilite" in css


def test_render_failure_is_isolated(
    site_config_path: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """A broken article is reported while its siblings are still written."""
    write_source("good.md", body="## Fine\n")
    write_source("broken.md", date="2022-04-01", body="```go\nunterminated\n")
    config = load_site_config(site_config_path)
    result = SiteBuilder(config).run()

    assert not result.ok
    assert [failure.slug for failure in result.failures] == ["broken"]
    assert "never closed" in str(result.failures[0].error)
    out_dir = config.build.output_dir
    assert (out_dir / "posts" / "good.html").exists()
    assert not (out_dir / "posts" / "broken.html").exists()
    slugs = [
        item["data-slug"] for item in _soup(out_dir / "index.html").select(".post-list__item")
    ]
    assert slugs == ["good"]


def test_parse_failure_aborts_before_writing(
    site_config_path: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Malformed metadata stops the build before any output is written."""
    write_source("good.md")
    write_source("bad.md", date='"not-a-date"')
    config = load_site_config(site_config_path)
    with pytest.raises(ParseError):
        SiteBuilder(config).run()
    assert not config.build.output_dir.exists()


def test_rebuild_removes_stale_pages(
    site_config_path: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Pages of deleted or newly broken articles do not survive a rebuild."""
    removed = write_source("removed.md")
    write_source("kept.md")
    write_source("regressed.md", body="## Fine\n")
    config = load_site_config(site_config_path)
    SiteBuilder(config).run()
    posts_dir = config.build.output_dir / "posts"
    assert (posts_dir / "removed.html").exists()
    assert (posts_dir / "regressed.html").exists()

    removed.unlink()
    write_source("regressed.md", body="```go\nunterminated\n")
    result = SiteBuilder(config).run()

    assert [failure.slug for failure in result.failures] == ["regressed"]
    assert sorted(page.name for page in posts_dir.glob("*.html")) == ["kept.html"]
