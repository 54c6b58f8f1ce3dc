"""Tests for the blogstore CLI."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from blogstore.content.store import ContentStore
from blogstore.main import build_parser, main


def _post(title: str, when: str, extra: str = "") -> str:
    return f"---\ntitle: {title}\ndate: {when}\n{extra}---\n\nBody of {title}.\n"


class TestParser:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().out

    def test_bad_date_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["new", "Title", "--date", "whenever"])
        assert exc_info.value.code == 2


class TestList:
    def test_lists_newest_first(self, content_dir, write_post, capsys):
        write_post("2022-01-01-old.md", _post("Old post", "2022-01-01"))
        write_post("2023-01-01-new.md", _post("New post", "2023-01-01", "draft: true\n"))

        assert main(["--content-dir", str(content_dir), "list"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("2023-01-01  new")
        assert lines[0].endswith("(draft)")
        assert lines[1].startswith("2022-01-01  old")

    def test_no_drafts(self, content_dir, write_post, capsys):
        write_post("a.md", _post("Published", "2022-01-01"))
        write_post("b.md", _post("Draft", "2023-01-01", "draft: true\n"))

        main(["--content-dir", str(content_dir), "list", "--no-drafts"])

        out = capsys.readouterr().out
        assert "Published" in out
        assert "Draft" not in out


    def test_impossible_date_is_skipped(self, content_dir, write_post, capsys):
        write_post("good.md", _post("Good post", "2023-01-01"))
        write_post("bad.md", _post("Bad post", "2023-02-30"))

        assert main(["--content-dir", str(content_dir), "list"]) == 0

        out = capsys.readouterr().out
        assert "Good post" in out
        assert "Bad post" not in out


class TestLint:
    def test_clean_store_exits_zero(self, content_dir, write_post, valid_post_text, capsys):
        write_post("good.md", valid_post_text)
        assert main(["--content-dir", str(content_dir), "lint", "--no-external"]) == 0
        assert "1 file(s) checked: 0 error(s)" in capsys.readouterr().out

    def test_errors_exit_one(self, content_dir, write_post, capsys):
        write_post("bad.md", "---\ntitle: Bad\n---\nBody\n")
        assert main(["--content-dir", str(content_dir), "lint", "--no-external"]) == 1
        assert "bad.md: error [date] missing date" in capsys.readouterr().out

    def test_warnings_do_not_fail(self, content_dir, write_post):
        write_post("empty.md", "---\ntitle: Empty\ndate: 2023-01-01\n---\n")
        assert main(["--content-dir", str(content_dir), "lint", "--no-external"]) == 0

    def test_json_output(self, content_dir, write_post, capsys):
        write_post("bad.md", "no front matter\n")
        assert main(["--content-dir", str(content_dir), "lint", "--format", "json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["files_checked"] == 1
        assert data["issues"][0]["rule"] == "front-matter"

    def test_explicit_paths_and_dirs(self, content_dir, write_post, valid_post_text, capsys):
        good = write_post("posts/good.md", valid_post_text)
        write_post("bad.md", "no front matter\n")
        assert main(["--content-dir", str(content_dir), "lint", str(good.parent)]) == 0
        assert "1 file(s) checked" in capsys.readouterr().out

    def test_missing_path_is_usage_error(self, content_dir):
        assert main(["--content-dir", str(content_dir), "lint", str(content_dir / "nope.md")]) == 2

    def test_external_flag_opens_http_client(self, content_dir, write_post, valid_post_text):
        write_post("good.md", valid_post_text)
        client = MagicMock()
        client.__enter__.return_value = client
        with patch("blogstore.main.HTTPClient", return_value=client) as client_cls:
            assert main(["--content-dir", str(content_dir), "lint", "--external"]) == 0
        client_cls.assert_called_once()
        client.__exit__.assert_called_once()


class TestNew:
    def test_creates_post(self, content_dir, capsys):
        rc = main([
            "--content-dir", str(content_dir),
            "new", "Fuzzing with Foundry",
            "--date", "2023-06-02 18:00:00",
            "--tag", "foundry",
            "--tag", "ethereum",
        ])
        assert rc == 0

        path = content_dir / "2023-06-02-fuzzing-with-foundry.md"
        assert Path(capsys.readouterr().out.strip()).resolve() == path.resolve()
        text = path.read_text(encoding="utf-8")
        assert 'title: "Fuzzing with Foundry"' in text
        assert "- \"ethereum\"" in text

    def test_new_post_passes_lint(self, content_dir, capsys):
        main(["--content-dir", str(content_dir), "new", "Lint me", "--date", "2023-01-01"])
        capsys.readouterr()
        assert main(["--content-dir", str(content_dir), "lint"]) == 0

    def test_keeps_utc_offset(self, content_dir, capsys):
        rc = main([
            "--content-dir", str(content_dir),
            "new", "Tz", "--date", "2023-06-02T23:30:00-05:00",
        ])
        assert rc == 0
        path = Path(capsys.readouterr().out.strip())
        assert "date: 2023-06-02 23:30:00 -05:00" in path.read_text(encoding="utf-8")

        post = ContentStore(content_dir).load(path)
        assert post.date == datetime(2023, 6, 2, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert post.date.utcoffset() == timedelta(hours=-5)

    def test_refuses_to_overwrite(self, content_dir):
        args = ["--content-dir", str(content_dir), "new", "Twice", "--date", "2023-01-01"]
        assert main(args) == 0
        assert main(args) == 1
        assert main(args + ["--force"]) == 0

    def test_blank_title(self, content_dir):
        assert main(["--content-dir", str(content_dir), "new", "   "]) == 2
