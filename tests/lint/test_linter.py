"""Tests for the ContentLinter pipeline."""

from unittest.mock import MagicMock

from blogstore.lint.linter import ContentLinter
from blogstore.lint.models import Rule


BROKEN_POST = """---
title: ""
date: someday
---

Intro with a [dead link](nowhere.md).

```bash
```

```yaml
key: value
"""


class TestContentLinter:
    def test_clean_post(self, store, write_post, valid_post_text, test_settings, fixed_now):
        path = write_post("good.md", valid_post_text)
        linter = ContentLinter(store, test_settings, now=fixed_now)
        assert linter.lint_file(path) == []

    def test_every_problem_reported(self, store, write_post, test_settings, fixed_now):
        path = write_post("broken.md", BROKEN_POST)
        issues = ContentLinter(store, test_settings, now=fixed_now).lint_file(path)

        rules = {i.rule for i in issues}
        assert rules == {
            Rule.TITLE,
            Rule.DATE,
            Rule.BROKEN_LINK,
            Rule.EMPTY_CODE_BLOCK,
            Rule.UNCLOSED_CODE_FENCE,
        }
        title = next(i for i in issues if i.rule == Rule.TITLE)
        assert title.line == 2
        lines = [i.line or 0 for i in issues]
        assert lines == sorted(lines)

    def test_front_matter_error_stops_other_checks(self, store, write_post, test_settings):
        path = write_post("nofm.md", "# Title only\n\n```\n```\n")
        issues = ContentLinter(store, test_settings).lint_file(path)
        assert [i.rule for i in issues] == [Rule.FRONT_MATTER]
        assert issues[0].line == 1

    def test_invalid_utf8(self, store, content_dir, test_settings):
        path = content_dir / "latin1.md"
        path.write_bytes("---\ntitle: café\n---\n".encode("latin-1"))
        issues = ContentLinter(store, test_settings).lint_file(path)
        assert issues[0].rule == Rule.FRONT_MATTER
        assert "UTF-8" in issues[0].message

    def test_run_whole_store(self, store, write_post, valid_post_text, test_settings, fixed_now):
        write_post("good.md", valid_post_text)
        write_post("bad.md", "---\ntitle: Bad\n---\nBody\n")
        report = ContentLinter(store, test_settings, now=fixed_now).run()

        assert report.files_checked == 2
        assert not report.ok
        assert [i.rule for i in report.issues] == [Rule.DATE]
        assert report.issues[0].path.name == "bad.md"

    def test_impossible_date_does_not_abort_run(self, store, write_post, valid_post_text, test_settings, fixed_now):
        write_post("bad.md", "---\ntitle: Bad\ndate: 2023-13-45\n---\nBody\n")
        write_post("good.md", valid_post_text)
        report = ContentLinter(store, test_settings, now=fixed_now).run()

        assert report.files_checked == 2
        assert [(i.path.name, i.rule) for i in report.issues] == [("bad.md", Rule.FRONT_MATTER)]
        assert "month must be in 1..12" in report.issues[0].message

    def test_optional_key_type_is_error(self, store, write_post, test_settings, fixed_now):
        path = write_post("p.md", "---\ntitle: P\ndate: 2023-01-01\ndescription: 5\n---\nBody\n")
        issues = ContentLinter(store, test_settings, now=fixed_now).lint_file(path)

        assert [i.rule for i in issues] == [Rule.FRONT_MATTER]
        assert issues[0].line == 4

    def test_run_selected_paths(self, store, write_post, valid_post_text, test_settings, fixed_now):
        good = write_post("good.md", valid_post_text)
        write_post("bad.md", "no front matter\n")
        report = ContentLinter(store, test_settings, now=fixed_now).run([good])
        assert report.files_checked == 1
        assert report.ok

    def test_future_warning_respects_settings(self, store, write_post, test_settings, fixed_now):
        path = write_post("future.md", "---\ntitle: Soon\ndate: 2030-01-01\n---\nBody\n")
        linter = ContentLinter(store, test_settings, now=fixed_now)
        assert [i.rule for i in linter.lint_file(path)] == [Rule.FUTURE_DATE]

        test_settings.lint.warn_future_dates = False
        linter = ContentLinter(store, test_settings, now=fixed_now)
        assert linter.lint_file(path) == []

    def test_external_links_checked_when_enabled(self, store, write_post, test_settings, fixed_now):
        path = write_post(
            "ext.md",
            "---\ntitle: Ext\ndate: 2023-01-01\n---\n[Foundry](https://book.getfoundry.sh/)\n",
        )
        checker = MagicMock()
        checker.check.return_value = MagicMock(ok=True)
        test_settings.links.check_external = True

        issues = ContentLinter(store, test_settings, link_checker=checker, now=fixed_now).lint_file(path)

        assert issues == []
        checker.check.assert_called_once_with("https://book.getfoundry.sh/")
