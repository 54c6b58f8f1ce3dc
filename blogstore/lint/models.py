"""Data models for the content linter."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Any

import markdown as md
from bs4 import BeautifulSoup

# Black-box conversion used only to locate links, anchors and code in a body
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


class Severity(str, Enum):
    """How serious a lint issue is. Only errors fail a run."""
    ERROR = "error"
    WARNING = "warning"


class Rule(str, Enum):
    """Stable identifiers for each editorial check."""
    FRONT_MATTER = "front-matter"
    TITLE = "title"
    DATE = "date"
    FUTURE_DATE = "future-date"
    EMPTY_BODY = "empty-body"
    EMPTY_CODE_BLOCK = "empty-code-block"
    UNCLOSED_CODE_FENCE = "unclosed-code-fence"
    BROKEN_LINK = "broken-link"
    CROSS_POST_LINK = "cross-post-link"


RULE_SEVERITY: dict[Rule, Severity] = {
    Rule.FRONT_MATTER: Severity.ERROR,
    Rule.TITLE: Severity.ERROR,
    Rule.DATE: Severity.ERROR,
    Rule.FUTURE_DATE: Severity.WARNING,
    Rule.EMPTY_BODY: Severity.WARNING,
    Rule.EMPTY_CODE_BLOCK: Severity.ERROR,
    Rule.UNCLOSED_CODE_FENCE: Severity.ERROR,
    Rule.BROKEN_LINK: Severity.ERROR,
    Rule.CROSS_POST_LINK: Severity.WARNING,
}


@dataclass
class LintIssue:
    """A single problem found in a post file."""
    path: Path
    rule: Rule
    message: str
    line: int | None = None
    severity: Severity = Severity.ERROR

    @classmethod
    def for_rule(cls, path: Path, rule: Rule, message: str, line: int | None = None) -> LintIssue:
        """Create an issue with the rule's default severity."""
        return cls(path=path, rule=rule, message=message, line=line, severity=RULE_SEVERITY[rule])

    def format(self) -> str:
        """Compiler-style one-liner: path:line: severity [rule] message"""
        location = f"{self.path}:{self.line}" if self.line else str(self.path)
        return f"{location}: {self.severity.value} [{self.rule.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "line": self.line,
            "rule": self.rule.value,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass
class LinkResult:
    """Outcome of resolving one external URL."""
    url: str
    ok: bool
    status: int | None = None
    error: str = ""

    @property
    def reason(self) -> str:
        if self.error:
            return self.error
        if self.status is not None:
            return f"HTTP {self.status}"
        return "unreachable"


@dataclass
class LintReport:
    """Aggregated result of a lint run."""
    files_checked: int = 0
    issues: list[LintIssue] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    @property
    def ok(self) -> bool:
        """True when no errors were found (warnings never fail)."""
        return self.error_count == 0

    def issues_for(self, path: Path) -> list[LintIssue]:
        return [i for i in self.issues if i.path == path]

    def summary(self) -> str:
        return (
            f"{self.files_checked} file(s) checked: "
            f"{self.error_count} error(s), {self.warning_count} warning(s)"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "files_checked": self.files_checked,
            "errors": self.error_count,
            "warnings": self.warning_count,
            "issues": [i.to_dict() for i in self.issues],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


@dataclass
class PostDocument:
    """A post file split into metadata and body, as the rules see it."""
    path: Path
    meta: dict[str, Any]
    body: str
    body_line: int = 1
    raw_meta: str = ""
    meta_line: int = 2

    @cached_property
    def html(self) -> str:
        return md.markdown(self.body, extensions=MARKDOWN_EXTENSIONS)

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "lxml")

    def line_of(self, needle: str) -> int | None:
        """File line number of the first body line containing `needle`."""
        for offset, text in enumerate(self.body.splitlines()):
            if needle in text:
                return self.body_line + offset
        return None

    def key_line(self, key: str) -> int | None:
        """File line number of a top-level front-matter key."""
        pattern = re.compile(rf"^{re.escape(key)}\s*[:=]")
        for offset, text in enumerate(self.raw_meta.splitlines()):
            if pattern.match(text):
                return self.meta_line + offset
        return None
