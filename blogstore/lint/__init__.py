# Lint: editorial checks for post files
"""
Content linter for the post store.

Checks front matter, titles and dates, code blocks, and that every
hyperlink resolves.
"""

from .linter import ContentLinter
from .links import LinkChecker, LinkValidator, extract_anchors, extract_links
from .models import (
    LinkResult,
    LintIssue,
    LintReport,
    PostDocument,
    Rule,
    Severity,
)
from .rules import check_body, check_code_blocks, check_date, check_metadata, check_title

__all__ = [
    "ContentLinter",
    "LinkChecker",
    "LinkResult",
    "LinkValidator",
    "LintIssue",
    "LintReport",
    "PostDocument",
    "Rule",
    "Severity",
    "check_body",
    "check_code_blocks",
    "check_date",
    "check_metadata",
    "check_title",
    "extract_anchors",
    "extract_links",
]
