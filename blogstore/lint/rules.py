"""Editorial checks that need nothing but the post itself.

Each check takes a PostDocument and returns a (possibly empty) list of
LintIssue. Link checks live in links.py because they need the store and
the network.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from pydantic import ValidationError

from blogstore.common.models import Post, normalize_for_compare, parse_post_date

from .models import LintIssue, PostDocument, Rule

# Opening/closing code fence: up to 3 spaces, then ``` or ~~~ (3 or more)
_FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")


def check_title(doc: PostDocument) -> list[LintIssue]:
    """Title must be present, textual and non-empty."""
    line = doc.key_line("title")
    title = doc.meta.get("title")

    if title is None:
        return [LintIssue.for_rule(doc.path, Rule.TITLE, "missing title", line)]
    if not isinstance(title, str):
        return [LintIssue.for_rule(
            doc.path, Rule.TITLE,
            f"title must be text, got {type(title).__name__}", line,
        )]
    if not title.strip():
        return [LintIssue.for_rule(doc.path, Rule.TITLE, "title is empty", line)]
    return []


def check_date(
    doc: PostDocument,
    now: datetime | None = None,
    warn_future: bool = True,
) -> list[LintIssue]:
    """Date must be present and parseable; future dates warn unless drafted."""
    line = doc.key_line("date")
    value = doc.meta.get("date")

    if value is None:
        return [LintIssue.for_rule(doc.path, Rule.DATE, "missing date", line)]

    try:
        published = parse_post_date(value)
    except ValueError as exc:
        return [LintIssue.for_rule(doc.path, Rule.DATE, f"invalid date: {exc}", line)]

    if not warn_future or doc.meta.get("draft") is True:
        return []

    if now is None:
        now = datetime.now(timezone.utc) if published.tzinfo else datetime.now()
    if normalize_for_compare(published) > normalize_for_compare(now):
        return [LintIssue.for_rule(
            doc.path, Rule.FUTURE_DATE,
            f"date {published.isoformat()} is in the future", line,
        )]
    return []


def check_metadata(doc: PostDocument) -> list[LintIssue]:
    """Optional keys (slug, tags, draft, description) must have usable types.

    Title and date problems are left to check_title and check_date.
    """
    try:
        Post.from_front_matter(doc.meta, doc.body)
    except ValidationError as exc:
        issues = []
        for err in exc.errors():
            key = str(err["loc"][0]) if err["loc"] else ""
            if key in ("title", "date"):
                continue
            issues.append(LintIssue.for_rule(
                doc.path, Rule.FRONT_MATTER,
                f"{key}: {err['msg']}", doc.key_line(key) or doc.meta_line,
            ))
        return issues
    return []


def check_body(doc: PostDocument) -> list[LintIssue]:
    if doc.body.strip():
        return []
    return [LintIssue.for_rule(doc.path, Rule.EMPTY_BODY, "post has no content", doc.body_line)]


def check_code_blocks(doc: PostDocument) -> list[LintIssue]:
    """Fenced code blocks must be closed and contain something."""
    issues: list[LintIssue] = []
    fence_char = ""
    fence_len = 0
    fence_start = 0
    content: list[str] = []

    for offset, text in enumerate(doc.body.splitlines()):
        match = _FENCE_RE.match(text)

        if not fence_char:
            if not match:
                continue
            fence, info = match.group(2), match.group(3)
            # ```foo`bar is inline code, not a fence
            if fence[0] == "`" and "`" in info:
                continue
            fence_char, fence_len, fence_start, content = fence[0], len(fence), offset, []
            continue

        closes = (
            match is not None
            and match.group(2)[0] == fence_char
            and len(match.group(2)) >= fence_len
            and not match.group(3).strip()
        )
        if not closes:
            content.append(text)
            continue

        if not "".join(content).strip():
            issues.append(LintIssue.for_rule(
                doc.path, Rule.EMPTY_CODE_BLOCK, "code block is empty",
                doc.body_line + fence_start,
            ))
        fence_char = ""

    if fence_char:
        issues.append(LintIssue.for_rule(
            doc.path, Rule.UNCLOSED_CODE_FENCE,
            f"code fence '{fence_char * fence_len}' is never closed",
            doc.body_line + fence_start,
        ))
    return issues
