"""Front-matter splitting, parsing and serialisation.

A post file starts with a metadata block and continues with Markdown:

    ---                      +++
    title: Hello             title = "Hello"
    date: 2023-01-05         date = 2023-01-05
    ---                      +++
    Body text...             Body text...

YAML blocks are delimited by ``---`` (``...`` also closes them), TOML
blocks by ``+++``.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, NamedTuple

import yaml

YAML_DELIMITER = "---"
YAML_END_ALT = "..."
TOML_DELIMITER = "+++"


class FrontMatterError(ValueError):
    """Front-matter block is missing, unterminated or malformed."""

    def __init__(self, message: str, path: Path | str | None = None, line: int | None = None):
        self.message = message
        self.path = Path(path) if path else None
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        location = ""
        if self.path:
            location = str(self.path)
            if self.line:
                location += f":{self.line}"
            location += ": "
        elif self.line:
            location = f"line {self.line}: "
        return f"{location}{self.message}"


class FrontMatterBlock(NamedTuple):
    """Raw pieces of a post file."""
    raw: str
    fmt: str  # "yaml" | "toml"
    body: str
    meta_line: int  # 1-based line of the first metadata line
    body_line: int  # 1-based line where the body starts


def split_front_matter(text: str, path: Path | str | None = None) -> FrontMatterBlock:
    """Split a post file into its raw metadata block and Markdown body.

    Raises:
        FrontMatterError: No opening delimiter, or no closing delimiter.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1

    if start >= len(lines):
        raise FrontMatterError("file is empty", path=path)

    opener = lines[start].strip()
    if opener == YAML_DELIMITER:
        fmt, closers = "yaml", (YAML_DELIMITER, YAML_END_ALT)
    elif opener == TOML_DELIMITER:
        fmt, closers = "toml", (TOML_DELIMITER,)
    else:
        raise FrontMatterError(
            "missing front matter: expected '---' or '+++' on the first line",
            path=path,
            line=start + 1,
        )

    for end in range(start + 1, len(lines)):
        if lines[end].rstrip() in closers:
            return FrontMatterBlock(
                raw="".join(lines[start + 1:end]),
                fmt=fmt,
                body="".join(lines[end + 1:]),
                meta_line=start + 2,
                body_line=end + 2,
            )

    raise FrontMatterError(
        f"unterminated front matter block (opened with '{opener}')",
        path=path,
        line=start + 1,
    )


def load_metadata(block: FrontMatterBlock, path: Path | str | None = None) -> dict[str, Any]:
    """Decode the raw metadata of a block into a dict with string keys.

    Raises:
        FrontMatterError: Invalid YAML/TOML, or the block is not a mapping.
    """
    if block.fmt == "toml":
        try:
            data: Any = tomllib.loads(block.raw)
        except tomllib.TOMLDecodeError as exc:
            raise FrontMatterError(f"invalid TOML front matter: {exc}", path=path) from exc
    else:
        try:
            data = yaml.safe_load(block.raw)
        except yaml.YAMLError as exc:
            line = None
            mark = getattr(exc, "problem_mark", None)
            if mark is not None:
                line = block.meta_line + mark.line
            problem = getattr(exc, "problem", None) or str(exc)
            raise FrontMatterError(
                f"invalid YAML front matter: {problem}", path=path, line=line
            ) from exc
        except ValueError as exc:
            # Timestamps like 2023-02-30 pass the scanner but fail in the constructor
            raise FrontMatterError(
                f"invalid YAML front matter: {exc}", path=path, line=block.meta_line
            ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}",
            path=path,
            line=block.meta_line,
        )
    return {str(k): v for k, v in data.items()}


def parse_front_matter(
    text: str,
    path: Path | str | None = None,
) -> tuple[dict[str, Any], str]:
    """Parse a post file into (metadata, body)."""
    block = split_front_matter(text, path=path)
    return load_metadata(block, path=path), block.body


def dump_front_matter(meta: dict[str, Any], body: str) -> str:
    """Serialise metadata as a YAML block followed by the body."""
    rendered = yaml.safe_dump(
        meta,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    body = body.lstrip("\n")
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{YAML_DELIMITER}\n{rendered}{YAML_DELIMITER}\n\n{body}"
