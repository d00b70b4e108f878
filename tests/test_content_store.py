"""Unit tests for loading article sources into the content store.

These tests cover metadata validation, slug derivation, and the guarantee that
a failed load never publishes a partial document set.

Usage
-----
Run ``pytest tests/test_content_store.py -v``. Sources are written into a
per-test temporary directory by the ``write_source`` fixture.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

import pytest

from blog_pages.content import ContentStore, ParseError, slug_for_source

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def test_load_parses_metadata_and_body(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Metadata fields and the body should be carried onto the document."""
    write_source("game-of-life.mdx", title="Test", body="## Walk-through\n")
    documents = ContentStore(content_dir).load()

    assert len(documents) == 1
    document = next(iter(documents))
    assert document.slug == "game-of-life"
    assert document.title == "Test"
    assert document.date == dt.date(2022, 3, 17)
    assert document.draft is False
    assert document.body == "## Walk-through\n"


def test_unquoted_yaml_date_is_accepted(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Native YAML dates should load the same as quoted strings."""
    write_source("post.md", date="2021-12-01")
    document = next(iter(ContentStore(content_dir).load()))
    assert document.date == dt.date(2021, 12, 1)


@pytest.mark.parametrize(("raw", "expected"), [("true", True), ('"false"', False)])
def test_draft_flag_parsing(
    content_dir: Path,
    write_source: cabc.Callable[..., Path],
    raw: str,
    expected: bool,
) -> None:
    """Draft accepts YAML booleans and quoted true/false strings."""
    write_source("post.md", draft=raw)
    document = next(iter(ContentStore(content_dir).load()))
    assert document.draft is expected


def test_index_files_take_directory_slug(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """``trpc-tutorial/index.md`` should resolve to the ``trpc-tutorial`` slug."""
    write_source("trpc-tutorial/index.md")
    store = ContentStore(content_dir)
    store.load()
    assert store.get("trpc-tutorial") is not None
    assert store.get("index") is None


def test_non_source_files_are_ignored(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Only Markdown and MDX sources should be loaded."""
    write_source("post.md")
    (content_dir / "notes.txt").write_text("not an article", encoding="utf-8")
    assert {doc.slug for doc in ContentStore(content_dir).load()} == {"post"}


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (Path("posts/Go Game_Of-Life.mdx"), "go-game-of-life"),
        (Path("posts/trpc/index.md"), "trpc"),
        (Path("posts/---.md"), "post"),
    ],
)
def test_slug_for_source(path: Path, expected: str) -> None:
    """Slugs are lower-case with separators collapsed to hyphens."""
    assert slug_for_source(path) == expected


def test_missing_required_field_names_the_field(content_dir: Path) -> None:
    """A metadata block without a description should fail on that field."""
    source = content_dir / "post.md"
    source.write_text('---\ntitle: Test\ndate: "2022-03-17"\n---\nBody\n', encoding="utf-8")

    with pytest.raises(ParseError) as excinfo:
        ContentStore(content_dir).load()

    assert excinfo.value.field == "description"
    assert excinfo.value.source == source
    assert "description" in str(excinfo.value)


@pytest.mark.parametrize("date", ['"2022-02-30"', '"17/03/2022"', "yesterday"])
def test_invalid_date_is_rejected(
    content_dir: Path, write_source: cabc.Callable[..., Path], date: str
) -> None:
    """Dates must be real calendar dates in ``YYYY-MM-DD`` form."""
    write_source("post.md", date=date)
    with pytest.raises(ParseError) as excinfo:
        ContentStore(content_dir).load()
    assert excinfo.value.field == "date"


def test_non_boolean_draft_is_rejected(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Draft flags must be booleans."""
    write_source("post.md", draft="maybe")
    with pytest.raises(ParseError) as excinfo:
        ContentStore(content_dir).load()
    assert excinfo.value.field == "draft"


@pytest.mark.parametrize(
    "text",
    [
        "title: Test\n\nBody\n",
        "---\ntitle: Test\ndescription: d\ndate: 2022-03-17\nBody\n",
        "---\n- just\n- a list\n---\nBody\n",
        "---\ntitle: [unclosed\n---\nBody\n",
    ],
    ids=["no-block", "unterminated", "not-mapping", "bad-yaml"],
)
def test_malformed_metadata_block(content_dir: Path, text: str) -> None:
    """Malformed metadata blocks should raise ParseError."""
    (content_dir / "post.md").write_text(text, encoding="utf-8")
    with pytest.raises(ParseError):
        ContentStore(content_dir).load()


def test_duplicate_slug_fails_without_partial_store(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """Two sources sharing a slug fail the load and keep the previous contents."""
    write_source("first.md", title="First")
    store = ContentStore(content_dir)
    previous = store.load()

    write_source("game-of-life.md")
    write_source("Game_Of_Life.mdx")
    with pytest.raises(ParseError) as excinfo:
        store.load()

    assert "game-of-life" in str(excinfo.value)
    assert store.documents == previous
    assert {doc.slug for doc in store.documents} == {"first"}


def test_fresh_store_duplicate_slug_publishes_nothing(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """A failed first load leaves the store empty."""
    write_source("post.md")
    write_source("post.mdx")
    store = ContentStore(content_dir)
    with pytest.raises(ParseError):
        store.load()
    assert store.documents == frozenset()


def test_reload_replaces_documents(
    content_dir: Path, write_source: cabc.Callable[..., Path]
) -> None:
    """A reload should rebuild the document set from disk."""
    first = write_source("first.md")
    store = ContentStore(content_dir)
    store.load()
    first.unlink()
    write_source("second.md")
    assert {doc.slug for doc in store.load()} == {"second"}


def test_missing_content_directory(tmp_path: Path) -> None:
    """Loading from a directory that does not exist is a ParseError."""
    with pytest.raises(ParseError):
        ContentStore(tmp_path / "missing").load()


def test_invalid_utf8_source_is_a_parse_error(content_dir: Path) -> None:
    """Undecodable bytes fail the load with a ParseError naming the source."""
    source = content_dir / "post.md"
    source.write_bytes(
        b'---\ntitle: T\ndescription: d\ndate: "2022-03-17"\n---\n\xff\xfe bad\n'
    )
    with pytest.raises(ParseError) as excinfo:
        ContentStore(content_dir).load()
    assert excinfo.value.source == source
    assert "UTF-8" in str(excinfo.value)
