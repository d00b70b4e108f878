"""Shared fixtures for blog_pages tests."""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Return an empty content directory for source documents."""
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def write_source(content_dir: Path) -> cabc.Callable[..., Path]:
    """Return a helper that writes a source document into ``content_dir``."""

    def _write(
        name: str,
        *,
        title: str = "Test",
        description: str = "A test article",
        date: str = '"2022-03-17"',
        draft: str | None = None,
        body: str = "Body text.\n",
    ) -> Path:
        lines = ["---", f"title: {title}", f"description: {description}", f"date: {date}"]
        if draft is not None:
            lines.append(f"draft: {draft}")
        lines.append("---")
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_config_path(tmp_path: Path, content_dir: Path) -> Path:
    """Write a site config pointing at ``content_dir`` and a temp output dir."""
    path = tmp_path / "site.yaml"
    path.write_text(
        f"""
site:
  title: Fixture Site
  description: Fixture description
  author: Fixture Author
build:
  content_dir: {content_dir}
  output_dir: {tmp_path / "public"}
  assets_base_url: /static/
""".strip()
        + "\n",
        encoding="utf-8",
    )
    return path
