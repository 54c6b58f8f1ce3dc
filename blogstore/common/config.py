"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_DIR = PROJECT_ROOT / "config"
CONTENT_DIR = PROJECT_ROOT / "content"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ContentSettings(BaseModel):
    """Where posts live and which files count as posts."""
    content_dir: str = str(CONTENT_DIR)
    extensions: list[str] = Field(default_factory=lambda: [".md", ".markdown"])

    @property
    def content_path(self) -> Path:
        """Resolve content dir relative to project root."""
        p = Path(self.content_dir)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


class LinkCheckSettings(BaseModel):
    """Settings for resolving hyperlinks found in posts."""
    check_external: bool = False
    request_timeout: float = 10.0
    max_retries: int = 3
    rate_limit_rpm: int = 60
    user_agent: str = "blogstore-linkcheck/0.1 (+https://github.com)"
    ignore_hosts: list[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1", "example.com"]
    )
    # Extra roots for "/images/x.png" style links, relative to the content dir
    static_dirs: list[str] = Field(default_factory=lambda: ["static", "../static"])


class LintSettings(BaseModel):
    """Toggles for the editorial checks."""
    warn_future_dates: bool = True
    warn_cross_post_links: bool = True


class Settings(BaseModel):
    """Top-level application settings."""
    content: ContentSettings = Field(default_factory=ContentSettings)
    links: LinkCheckSettings = Field(default_factory=LinkCheckSettings)
    lint: LintSettings = Field(default_factory=LintSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables override whatever the YAML file says.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)
        settings.apply_env()
        return settings

    def apply_env(self) -> None:
        """Apply BLOGSTORE_* environment overrides in place."""
        if content_dir := os.getenv("BLOGSTORE_CONTENT_DIR"):
            self.content.content_dir = content_dir
        if external := os.getenv("BLOGSTORE_CHECK_EXTERNAL"):
            self.links.check_external = external.strip().lower() in ("1", "true", "yes", "on")
        if timeout := os.getenv("BLOGSTORE_REQUEST_TIMEOUT"):
            self.links.request_timeout = float(timeout)
        if rpm := os.getenv("BLOGSTORE_RATE_LIMIT_RPM"):
            self.links.rate_limit_rpm = int(rpm)


# Singleton settings instance
settings = Settings.load()
