"""Shared test fixtures for blogstore."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure the package is importable without installation
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from blogstore.common.config import ContentSettings, LinkCheckSettings, Settings
from blogstore.content.store import ContentStore


VALID_POST = """---
title: "Provisioning hosts with Ansible"
date: 2023-03-14 09:30:00
tags: [ansible]
---

Ansible talks to hosts over SSH.

## Running the playbook

```console
$ ansible-playbook -i inventory.ini site.yml
```

Jump back to [running it](#running-the-playbook).
"""


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed 'current time' so date checks are deterministic."""
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """Empty content directory inside tmp_path."""
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def write_post(content_dir):
    """Factory writing a post file into the content dir and returning its path."""
    def _write(name: str, text: str) -> Path:
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store(content_dir) -> ContentStore:
    return ContentStore(content_dir)


@pytest.fixture
def test_settings(content_dir) -> Settings:
    """Settings pointed at the temporary content dir, network checks off."""
    return Settings(
        content=ContentSettings(content_dir=str(content_dir)),
        links=LinkCheckSettings(check_external=False, rate_limit_rpm=0, static_dirs=["static"]),
    )


@pytest.fixture
def valid_post_text() -> str:
    return VALID_POST
