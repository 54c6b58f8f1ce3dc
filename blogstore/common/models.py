"""Shared Pydantic data models for blogstore.

A Post is the only entity in the content repository: front-matter
metadata plus a Markdown body. Content and lint modules import from here.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Front-matter keys mapped onto Post fields; everything else lands in `extra`
KNOWN_KEYS = ("title", "date", "slug", "tags", "draft", "description")

# Fallback formats after datetime.fromisoformat (Jekyll writes "+0000" offsets)
_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
)


def parse_post_date(value: Any) -> datetime:
    """Coerce a front-matter date value into a datetime.

    Accepts datetime, date (midnight), ISO 8601 strings and the Jekyll
    style "YYYY-MM-DD HH:MM:SS +0000".

    Raises:
        ValueError: value is missing or not a recognisable date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        raise ValueError(f"date must be a string or timestamp, got {type(value).__name__}")

    text = value.strip()
    if not text:
        raise ValueError("date is empty")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise ValueError(f"unrecognised date: {value!r}")


def format_post_date(value: datetime) -> str:
    """Render a date as a YAML timestamp, keeping any UTC offset.

    "2023-06-02 23:30:00" for naive values, "2023-06-02 23:30:00 -05:00"
    for aware ones. PyYAML reads both back as datetimes.
    """
    text = value.strftime("%Y-%m-%d %H:%M:%S")
    offset = value.utcoffset()
    if offset is None:
        return text
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text} {sign}{hours:02d}:{minutes:02d}"


def normalize_for_compare(value: datetime) -> datetime:
    """Naive UTC view of a datetime so aware and naive dates sort together."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Post(BaseModel):
    """A single blog post: title, publish date and Markdown body."""
    title: str = Field(min_length=1)
    date: datetime
    body: str = ""
    slug: str = ""
    tags: list[str] = Field(default_factory=list)
    draft: bool = False
    description: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)
    source_path: Path | None = Field(default=None, exclude=True)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> datetime:
        return parse_post_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        if isinstance(value, (list, tuple)):
            return [str(t) for t in value]
        return value

    @classmethod
    def from_front_matter(
        cls,
        meta: dict[str, Any],
        body: str,
        source_path: Path | None = None,
    ) -> Post:
        """Build a Post from parsed front matter, keeping unknown keys."""
        fields = {k: meta[k] for k in KNOWN_KEYS if k in meta and meta[k] is not None}
        extra = {k: v for k, v in meta.items() if k not in KNOWN_KEYS}
        return cls(**fields, body=body, extra=extra, source_path=source_path)

    def to_front_matter(self) -> dict[str, Any]:
        """Metadata dict in the order authors expect to read it."""
        meta: dict[str, Any] = {"title": self.title, "date": self.date}
        if self.slug:
            meta["slug"] = self.slug
        if self.description:
            meta["description"] = self.description
        if self.tags:
            meta["tags"] = list(self.tags)
        if self.draft:
            meta["draft"] = True
        meta.update(self.extra)
        return meta

    @property
    def sort_key(self) -> datetime:
        return normalize_for_compare(self.date)
