"""The posts shipped in content/ must pass the editorial checks."""

from blogstore.common.config import ContentSettings, LinkCheckSettings, Settings
from blogstore.content.store import ContentStore
from blogstore.lint.linter import ContentLinter


def test_shipped_posts_load(project_root):
    store = ContentStore(project_root / "content")
    posts = store.posts()
    assert len(posts) >= 2
    assert all(post.title and post.body.strip() for post in posts)
    assert posts[0].sort_key >= posts[-1].sort_key


def test_shipped_posts_lint_clean(project_root):
    content_dir = project_root / "content"
    settings = Settings(
        content=ContentSettings(content_dir=str(content_dir)),
        links=LinkCheckSettings(check_external=False, static_dirs=["static"]),
    )
    report = ContentLinter(ContentStore(content_dir), settings).run()
    assert report.files_checked >= 2
    assert report.issues == [], [i.format() for i in report.issues]
