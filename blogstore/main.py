"""CLI entry point for blogstore.

Usage:
    blogstore list [--no-drafts]
    blogstore lint [PATH ...] [--external] [--format json]
    blogstore new "Testing contracts with Foundry" --tag foundry --tag ethereum
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from blogstore import __version__
from blogstore.common.config import Settings, settings as default_settings
from blogstore.common.http_client import HTTPClient
from blogstore.common.logging import set_verbosity, setup_logging
from blogstore.common.models import Post, parse_post_date
from blogstore.content import ContentStore, render_new_post, slugify
from blogstore.lint import ContentLinter, LinkChecker

logger = setup_logging(module_name="main")


def _date_arg(value: str) -> datetime:
    try:
        return parse_post_date(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogstore",
        description="Manage and lint the Markdown posts of the blog",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="Path to settings YAML")
    parser.add_argument(
        "--content-dir",
        type=Path,
        help="Directory holding the posts (default from settings)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Log errors only")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List posts, newest first")
    list_parser.add_argument("--no-drafts", action="store_true", help="Hide draft posts")

    lint_parser = subparsers.add_parser("lint", help="Run editorial checks")
    lint_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files or directories to lint (default: whole content dir)",
    )
    lint_parser.add_argument(
        "--external",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also resolve http(s) links over the network",
    )
    lint_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )

    new_parser = subparsers.add_parser("new", help="Scaffold a new post")
    new_parser.add_argument("title", help="Post title")
    new_parser.add_argument("--date", type=_date_arg, help="Publish date (default: now)")
    new_parser.add_argument("--tag", action="append", default=[], help="Tag (repeatable)")
    new_parser.add_argument("--description", default="", help="Short summary")
    new_parser.add_argument("--draft", action="store_true", help="Mark the post as a draft")
    new_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Settings for this invocation with CLI overrides applied."""
    base = Settings.load(args.config) if args.config else default_settings
    resolved = base.model_copy(deep=True)
    if args.content_dir:
        resolved.content.content_dir = str(args.content_dir.resolve())
    if getattr(args, "external", None) is not None:
        resolved.links.check_external = args.external
    return resolved


def handle_list(args: argparse.Namespace, settings: Settings) -> int:
    store = ContentStore(settings.content.content_path, settings.content.extensions)
    for post in store.posts(include_drafts=not args.no_drafts):
        marker = "  (draft)" if post.draft else ""
        print(f"{post.date:%Y-%m-%d}  {post.slug:<40}  {post.title}{marker}")
    return 0


def _expand_paths(paths: list[Path], settings: Settings) -> list[Path]:
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(ContentStore(path, settings.content.extensions).paths())
        else:
            expanded.append(path)
    return expanded


def handle_lint(args: argparse.Namespace, settings: Settings) -> int:
    store = ContentStore(settings.content.content_path, settings.content.extensions)
    targets = _expand_paths(args.paths, settings) if args.paths else None

    missing = [p for p in targets or [] if not p.exists()]
    if missing:
        for path in missing:
            logger.error("No such file: %s", path)
        return 2

    if settings.links.check_external:
        with HTTPClient(settings.links) as client:
            linter = ContentLinter(store, settings, link_checker=LinkChecker(client))
            report = linter.run(targets)
    else:
        report = ContentLinter(store, settings).run(targets)

    if args.format == "json":
        print(report.to_json())
    else:
        for issue in report.issues:
            print(issue.format())
        print(report.summary())

    return 0 if report.ok else 1


def handle_new(args: argparse.Namespace, settings: Settings) -> int:
    title = args.title.strip()
    if not title:
        logger.error("Title must not be empty")
        return 2

    date = args.date or datetime.now().replace(microsecond=0)
    store = ContentStore(settings.content.content_path, settings.content.extensions)
    post = Post(title=title, date=date, slug=slugify(title), tags=args.tag, draft=args.draft)
    text = render_new_post(
        title,
        date,
        tags=args.tag,
        description=args.description,
        draft=args.draft,
    )

    try:
        path = store.write_text(store.path_for(post), text, overwrite=args.force)
    except FileExistsError as exc:
        logger.error("%s (use --force to overwrite)", exc)
        return 1

    print(path)
    return 0


HANDLERS = {
    "list": handle_list,
    "lint": handle_lint,
    "new": handle_new,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 2

    set_verbosity(args.verbose, args.quiet)
    settings = resolve_settings(args)
    return HANDLERS[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
