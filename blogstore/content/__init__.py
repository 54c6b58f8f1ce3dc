# Content Store Module
# Markdown posts with front matter, one file per post

from .frontmatter import (
    FrontMatterBlock,
    FrontMatterError,
    dump_front_matter,
    load_metadata,
    parse_front_matter,
    split_front_matter,
)
from .scaffold import PostScaffolder, render_new_post
from .store import ContentStore, PostNotFoundError, slug_from_path, slugify

__all__ = [
    "ContentStore",
    "FrontMatterBlock",
    "FrontMatterError",
    "PostNotFoundError",
    "PostScaffolder",
    "dump_front_matter",
    "load_metadata",
    "parse_front_matter",
    "render_new_post",
    "slug_from_path",
    "slugify",
    "split_front_matter",
]
