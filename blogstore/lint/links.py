"""Hyperlink resolution for posts.

Local links must point at files that exist next to the post or under
the content root, fragment links at a heading of the same post, and
external links (when enabled) must answer with a non-error status.

Usage:
    with HTTPClient(settings.links) as client:
        validator = LinkValidator(store, settings.links, LinkChecker(client))
        issues = validator.validate(doc)
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote, urlsplit

import requests
from bs4 import BeautifulSoup

from blogstore.common.config import LinkCheckSettings
from blogstore.common.http_client import HTTPClient
from blogstore.common.logging import setup_logging
from blogstore.content.store import ContentStore

from .models import LinkResult, LintIssue, PostDocument, Rule

logger = setup_logging(module_name="lint.links")

EXTERNAL_SCHEMES = ("http", "https")
HEAD_FALLBACK_STATUSES = frozenset({405, 501})


def extract_links(soup: BeautifulSoup) -> list[str]:
    """Link targets in document order, de-duplicated.

    Covers <a href> and <img src>; links inside code are plain text and
    never show up here.
    """
    seen: dict[str, None] = {}
    for tag in soup.find_all(["a", "img"]):
        target = tag.get("href") if tag.name == "a" else tag.get("src")
        if target is None:
            continue
        seen.setdefault(target.strip(), None)
    return list(seen)


def extract_anchors(soup: BeautifulSoup) -> set[str]:
    """Every id (headings get one from the toc extension) and <a name>."""
    anchors = {tag["id"] for tag in soup.find_all(id=True)}
    anchors.update(tag["name"] for tag in soup.find_all("a", attrs={"name": True}))
    return anchors


class LinkChecker:
    """Resolves external URLs over HTTP, caching results for one run."""

    def __init__(self, client: HTTPClient):
        self.client = client
        self._cache: dict[str, LinkResult] = {}

    @property
    def checked_count(self) -> int:
        return len(self._cache)

    def check(self, url: str) -> LinkResult:
        """HEAD the URL (GET when HEAD is refused); never raises."""
        if url in self._cache:
            return self._cache[url]

        try:
            status = self._status(url)
        except requests.RequestException as exc:
            result = LinkResult(url=url, ok=False, error=f"{type(exc).__name__}: {exc}")
        else:
            result = LinkResult(url=url, ok=status < 400, status=status)

        if not result.ok:
            logger.debug("Link %s failed: %s", url, result.reason)
        self._cache[url] = result
        return result

    def _status(self, url: str) -> int:
        resp = self.client.head(url)
        status = resp.status_code
        resp.close()
        if status in HEAD_FALLBACK_STATUSES:
            resp = self.client.get(url)
            status = resp.status_code
            resp.close()
        return status


class LinkValidator:
    """Turns unresolvable links of a post into lint issues."""

    def __init__(
        self,
        store: ContentStore,
        settings: LinkCheckSettings | None = None,
        checker: LinkChecker | None = None,
        warn_cross_post: bool = True,
    ):
        self.store = store
        self.settings = settings or LinkCheckSettings()
        self.checker = checker
        self.warn_cross_post = warn_cross_post
        self._post_paths: set[Path] | None = None

    @property
    def post_paths(self) -> set[Path]:
        if self._post_paths is None:
            self._post_paths = {p.resolve() for p in self.store.paths()}
        return self._post_paths

    @property
    def external_enabled(self) -> bool:
        return self.checker is not None and self.settings.check_external

    def validate(self, doc: PostDocument) -> list[LintIssue]:
        issues: list[LintIssue] = []
        anchors: set[str] | None = None

        for href in extract_links(doc.soup):
            line = doc.line_of(href) if href else None

            if not href:
                issues.append(LintIssue.for_rule(doc.path, Rule.BROKEN_LINK, "empty link target", line))
                continue

            parts = urlsplit(href)
            if href.startswith("//"):
                parts = urlsplit("https:" + href)

            if parts.scheme in EXTERNAL_SCHEMES:
                issue = self._check_external(doc, href, parts.hostname or "", line)
                if issue:
                    issues.append(issue)
                continue
            if parts.scheme:
                # mailto:, tel:, data: ... nothing to resolve
                continue

            if not parts.path:
                if anchors is None:
                    anchors = extract_anchors(doc.soup)
                fragment = unquote(parts.fragment)
                if fragment and fragment not in anchors:
                    issues.append(LintIssue.for_rule(
                        doc.path, Rule.BROKEN_LINK,
                        f"anchor '#{fragment}' does not match any heading", line,
                    ))
                continue

            issues.extend(self._check_local(doc, href, unquote(parts.path), line))

        return issues

    def _check_external(
        self, doc: PostDocument, href: str, host: str, line: int | None
    ) -> LintIssue | None:
        if host.lower() in {h.lower() for h in self.settings.ignore_hosts}:
            return None
        if not self.external_enabled:
            return None
        result = self.checker.check(href)
        if result.ok:
            return None
        return LintIssue.for_rule(
            doc.path, Rule.BROKEN_LINK, f"{href} ({result.reason})", line
        )

    def _check_local(
        self, doc: PostDocument, href: str, path: str, line: int | None
    ) -> list[LintIssue]:
        target = self.resolve_local(doc.path, path)
        if target is None:
            return [LintIssue.for_rule(
                doc.path, Rule.BROKEN_LINK, f"{href} does not exist", line
            )]

        if (
            self.warn_cross_post
            and target.resolve() in self.post_paths
            and target.resolve() != doc.path.resolve()
        ):
            return [LintIssue.for_rule(
                doc.path, Rule.CROSS_POST_LINK,
                f"{href} links to another post; posts should be self-contained", line,
            )]
        return []

    def resolve_local(self, post_path: Path, path: str) -> Path | None:
        """Existing file or directory a relative/rooted link points at."""
        if path.startswith("/"):
            relative = path.lstrip("/")
            bases = [self.store.root] + [
                (self.store.root / d) for d in self.settings.static_dirs
            ]
        else:
            relative = path
            bases = [post_path.parent]

        for base in bases:
            candidate = base / relative
            if candidate.exists():
                return candidate
        return None
