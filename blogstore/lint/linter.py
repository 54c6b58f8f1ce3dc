"""Content linter: runs every editorial check over the store.

Pipeline per file:
1. Read and split front matter (front-matter errors stop here)
2. Title, date and optional metadata checks
3. Body and code-block checks
4. Link resolution (local always, external when enabled)

One broken file never aborts the run; every failure becomes a LintIssue.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable

from blogstore.common.config import Settings
from blogstore.common.logging import setup_logging
from blogstore.content.frontmatter import FrontMatterError, load_metadata, split_front_matter
from blogstore.content.store import ContentStore

from .links import LinkChecker, LinkValidator
from .models import LintIssue, LintReport, PostDocument, Rule
from .rules import check_body, check_code_blocks, check_date, check_metadata, check_title

logger = setup_logging(module_name="lint.linter")


class ContentLinter:
    """Checks post files for the problems an author should fix before publishing."""

    def __init__(
        self,
        store: ContentStore,
        settings: Settings | None = None,
        link_checker: LinkChecker | None = None,
        now: datetime | None = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.now = now
        self.links = LinkValidator(
            store,
            self.settings.links,
            checker=link_checker,
            warn_cross_post=self.settings.lint.warn_cross_post_links,
        )

    def read_document(self, path: Path) -> PostDocument:
        """Split a file into a PostDocument.

        Raises:
            FrontMatterError: Missing, unterminated or malformed front matter
        """
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise FrontMatterError(f"file is not valid UTF-8: {exc.reason}", path=path) from exc
        except OSError as exc:
            raise FrontMatterError(f"cannot read file: {exc.strerror or exc}", path=path) from exc

        block = split_front_matter(text, path=path)
        meta = load_metadata(block, path=path)
        return PostDocument(
            path=path,
            meta=meta,
            body=block.body,
            body_line=block.body_line,
            raw_meta=block.raw,
            meta_line=block.meta_line,
        )

    def lint_file(self, path: Path) -> list[LintIssue]:
        """Run every check against one file."""
        try:
            doc = self.read_document(path)
        except FrontMatterError as exc:
            return [LintIssue.for_rule(path, Rule.FRONT_MATTER, exc.message, exc.line)]

        issues: list[LintIssue] = []
        issues.extend(check_title(doc))
        issues.extend(check_date(doc, now=self.now, warn_future=self.settings.lint.warn_future_dates))
        issues.extend(check_metadata(doc))
        issues.extend(check_body(doc))
        issues.extend(check_code_blocks(doc))
        issues.extend(self.links.validate(doc))

        issues.sort(key=lambda i: (i.line or 0, i.rule.value))
        return issues

    def run(self, paths: Iterable[Path] | None = None) -> LintReport:
        """Lint the given files, or every post in the store.

        Args:
            paths: Files to check. Defaults to all store paths.

        Returns:
            LintReport with all issues found
        """
        targets = list(paths) if paths is not None else self.store.paths()
        report = LintReport()

        for path in targets:
            issues = self.lint_file(path)
            report.files_checked += 1
            report.issues.extend(issues)
            if issues:
                logger.debug("%s: %d issue(s)", path, len(issues))

        logger.info("Lint complete: %s", report.summary())
        return report
