"""
Post scaffolding for `blogstore new`.
Renders a starter post from the Jinja2 template shipped with the package.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from blogstore.common.models import format_post_date

DEFAULT_INTRO = "One or two sentences on what this post shows and who it is for."
DEFAULT_COMMAND = "echo replace me"


class PostScaffolder:
    """
    Renders new post files.

    Usage:
        scaffolder = PostScaffolder()
        text = scaffolder.render("Testing with Foundry", datetime.now())
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Args:
            templates_dir: Path to templates directory.
                          Defaults to ./templates relative to this file.
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(
        self,
        title: str,
        date: datetime,
        tags: Optional[list[str]] = None,
        description: str = "",
        draft: bool = False,
        intro: str = DEFAULT_INTRO,
        example_command: str = DEFAULT_COMMAND,
    ) -> str:
        """
        Render a starter post.

        Returns:
            Complete post text (front matter + Markdown body)
        """
        template = self.env.get_template("post.md.jinja2")
        return template.render(
            title=title.strip(),
            date_text=format_post_date(date),
            tags=tags or [],
            description=description,
            draft=draft,
            intro=intro,
            example_command=example_command,
        )


def render_new_post(
    title: str,
    date: Optional[datetime] = None,
    tags: Optional[list[str]] = None,
    description: str = "",
    draft: bool = False,
) -> str:
    """Convenience function to render a starter post with default template."""
    return PostScaffolder().render(
        title,
        date or datetime.now().replace(microsecond=0),
        tags=tags,
        description=description,
        draft=draft,
    )
