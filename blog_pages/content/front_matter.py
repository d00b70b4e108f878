r"""Split article sources into a metadata block and a markup body.

Each source begins with a ``---`` delimited YAML mapping carrying ``title``,
``description``, ``date`` and an optional ``draft`` flag. The mapping is read
with ``ruamel.yaml`` and validated into a :class:`FrontMatter`.

Example
-------
>>> from pathlib import Path
>>> from blog_pages.content.front_matter import parse_source
>>> text = '---\ntitle: Test\ndescription: d\ndate: "2022-03-17"\n---\nBody\n'
>>> meta, body = parse_source(text, Path("test.md"))
>>> meta.date.isoformat(), body
('2022-03-17', 'Body\n')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from blog_pages._constants import FRONT_MATTER_DELIMITER

from .models import ParseError

if typ.TYPE_CHECKING:
    from pathlib import Path

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
REQUIRED_FIELDS = ("title", "description", "date")


@dc.dataclass(frozen=True, slots=True)
class FrontMatter:
    """Validated metadata block of a source document."""

    title: str
    description: str
    date: dt.date
    draft: bool = False


def parse_source(text: str, source: Path) -> tuple[FrontMatter, str]:
    """Return the validated metadata and the body of ``text``.

    Parameters
    ----------
    text : str
        Full contents of the source file.
    source : Path
        Path used in error messages.

    Returns
    -------
    tuple[FrontMatter, str]
        Parsed metadata and the markup following the closing delimiter.

    Raises
    ------
    ParseError
        If the block is missing or unterminated, is not a YAML mapping, or any
        field is missing or invalid.
    """
    raw, body = _split_block(text.removeprefix("\ufeff"), source)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(raw)
    except YAMLError as exc:
        msg = f"metadata block is not valid YAML: {exc}"
        raise ParseError(source, msg) from exc
    if not isinstance(loaded, dict):
        msg = "metadata block must be a mapping of keys to values"
        raise ParseError(source, msg)
    return _validate(loaded, source), body


def _split_block(text: str, source: Path) -> tuple[str, str]:
    """Separate the raw metadata block from the body."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        msg = f"source must start with a '{FRONT_MATTER_DELIMITER}' metadata block"
        raise ParseError(source, msg)
    for idx in range(1, len(lines)):
        if lines[idx].strip() == FRONT_MATTER_DELIMITER:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])
    msg = f"metadata block is not closed with '{FRONT_MATTER_DELIMITER}'"
    raise ParseError(source, msg)


def _validate(payload: dict[str, typ.Any], source: Path) -> FrontMatter:
    for key in REQUIRED_FIELDS:
        if payload.get(key) is None:
            raise ParseError(source, "required field is missing", field=key)

    title = str(payload["title"]).strip()
    if not title:
        raise ParseError(source, "title must not be empty", field="title")
    return FrontMatter(
        title=title,
        description=str(payload["description"]).strip(),
        date=_parse_date(payload["date"], source),
        draft=_parse_draft(payload.get("draft", False), source),
    )


def _parse_date(value: object, source: Path) -> dt.date:
    """Return a calendar date from a YAML date or a ``YYYY-MM-DD`` string."""
    match value:
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text if ISO_DATE_PATTERN.match(text.strip()):
            try:
                return dt.date.fromisoformat(text.strip())
            except ValueError as exc:
                msg = f"'{text}' is not a valid calendar date"
                raise ParseError(source, msg, field="date") from exc
        case _:
            msg = f"expected a YYYY-MM-DD date, got {value!r}"
            raise ParseError(source, msg, field="date")


def _parse_draft(value: object, source: Path) -> bool:
    match value:
        case bool():
            return value
        case str() as text if text.strip().lower() in {"true", "false"}:
            return text.strip().lower() == "true"
        case _:
            msg = f"expected true or false, got {value!r}"
            raise ParseError(source, msg, field="draft")


__all__ = ["FrontMatter", "parse_source"]
