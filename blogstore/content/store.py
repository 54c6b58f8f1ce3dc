"""Content Store: the directory of Markdown posts.

Discovers post files, parses them into Post models, lists them newest
first and writes new posts back to disk.

Usage:
    store = ContentStore(Path("content"))
    for post in store.posts(include_drafts=False):
        print(post.date, post.slug, post.title)
"""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from blogstore.common.logging import setup_logging
from blogstore.common.models import Post

from .frontmatter import FrontMatterError, dump_front_matter, parse_front_matter

logger = setup_logging(module_name="content.store")

DEFAULT_EXTENSIONS = (".md", ".markdown")

# Jekyll-style filename prefix: 2023-01-05-my-post.md
_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-")


class PostNotFoundError(KeyError):
    """No post with the requested slug exists in the store."""


def slugify(title: str) -> str:
    """Turn a title into a lowercase ASCII, hyphen-separated slug.

    Args:
        title: Human-readable title

    Returns:
        Slug string ("post" when nothing usable remains)
    """
    ascii_title = (
        unicodedata.normalize("NFKD", title)
        .encode("ascii", "ignore")
        .decode("ascii")
    )
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_title.lower()).strip("-")
    return slug or "post"


def slug_from_path(path: Path) -> str:
    """Filename stem without a leading YYYY-MM-DD- date prefix."""
    return _DATE_PREFIX_RE.sub("", path.stem)


class ContentStore:
    """Collection of Markdown posts under a root directory.

    Hidden entries and ``_``-prefixed directories (``_templates``,
    ``_site``) are not part of the store.
    """

    def __init__(self, root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        self.root = Path(root)
        self.extensions = tuple(e.lower() for e in extensions)

    def __repr__(self) -> str:
        return f"ContentStore(root={str(self.root)!r})"

    # --- Discovery ---

    def paths(self) -> list[Path]:
        """Return every post file under the root, sorted by path."""
        if not self.root.is_dir():
            logger.warning("Content directory does not exist: %s", self.root)
            return []

        found = []
        for path in self.root.rglob("*"):
            if not path.is_file() or path.suffix.lower() not in self.extensions:
                continue
            relative = path.relative_to(self.root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if any(part.startswith("_") for part in relative.parts[:-1]):
                continue
            found.append(path)
        return sorted(found)

    # --- Loading ---

    def load(self, path: Path) -> Post:
        """Parse a single post file.

        Raises:
            FrontMatterError: Front matter missing or malformed
            ValidationError: Title/date missing or invalid
        """
        text = Path(path).read_text(encoding="utf-8")
        meta, body = parse_front_matter(text, path=path)
        post = Post.from_front_matter(meta, body, source_path=Path(path))
        if not post.slug:
            post.slug = slug_from_path(Path(path))
        return post

    def posts(self, include_drafts: bool = True) -> list[Post]:
        """Load all valid posts, newest first.

        Files that fail to parse are logged and skipped; use the linter to
        see why.
        """
        loaded = []
        for path in self.paths():
            try:
                post = self.load(path)
            except (FrontMatterError, ValidationError, UnicodeDecodeError) as exc:
                logger.warning("Skipping %s: %s", path, _first_line(exc))
                continue
            if post.draft and not include_drafts:
                continue
            loaded.append(post)

        loaded.sort(key=lambda p: p.sort_key, reverse=True)
        logger.debug("Loaded %d posts from %s", len(loaded), self.root)
        return loaded

    def get(self, slug: str) -> Post:
        """Find a post by slug.

        Raises:
            PostNotFoundError: No post has this slug
        """
        for post in self.posts():
            if post.slug == slug:
                return post
        raise PostNotFoundError(slug)

    # --- Writing ---

    def path_for(self, post: Post) -> Path:
        """Target file path for a post: <root>/<YYYY-MM-DD>-<slug>.md"""
        slug = post.slug or slugify(post.title)
        return self.root / f"{post.date:%Y-%m-%d}-{slug}.md"

    def write(self, post: Post, overwrite: bool = False) -> Path:
        """Write a post to disk.

        Args:
            post: Post to serialise
            overwrite: Replace an existing file instead of failing

        Returns:
            Path of the written file

        Raises:
            FileExistsError: Target exists and overwrite is False
        """
        path = self.path_for(post)
        if path.exists() and not overwrite:
            raise FileExistsError(f"Post already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(dump_front_matter(post.to_front_matter(), post.body))

        logger.info("Wrote post %s", path)
        return path

    def write_text(self, path: Path, text: str, overwrite: bool = False) -> Path:
        """Write pre-rendered post text to a path inside the store."""
        if path.exists() and not overwrite:
            raise FileExistsError(f"Post already exists: {path}")
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("Wrote post %s", path)
        return path


def _first_line(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        err = exc.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "post"
        return f"{field}: {err['msg']}"
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__
