"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str   = "mdblog"
    content_dir:      str   = Field(default="content/blog", description="Directory holding .md/.mdx posts")
    cache_ttl:        float = Field(default=300.0, ge=0, description="Seconds before cached posts are re-read")
    site_url:         str   = Field(default="https://example.com", description="Absolute base URL for feeds and sitemap")
    site_title:       str   = Field(default="Blog", description="RSS channel title")
    site_description: str   = Field(default="", description="RSS channel description")
    language:         str   = "en"
    default_author:   str   = Field(default="Anonymous", description="Author used when front matter has none")
    words_per_minute: int   = Field(default=200, ge=1, description="Reading speed for derived reading time")
    excerpt_length:   int   = Field(default=150, ge=10, description="Max characters in a derived excerpt")
    related_limit:    int   = Field(default=3,   ge=0, description="Default number of related posts")
    db_url:           str   = "sqlite:///mdblog.db"
    log_level:        str   = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


def config_path() -> Path:
    """config.yaml in the working directory, or the file named by MDBLOG_CONFIG."""
    return Path(os.getenv("MDBLOG_CONFIG") or CONFIG_FILE)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides.

    A top-level `blog:` section in config.yaml is used when present, so the
    settings can share a file with other tools.
    """
    path = config_path()
    data: dict[str, Any] = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")
        if isinstance(data.get("blog"), dict):
            data = data["blog"]

    for name in Settings.model_fields:
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            data[name] = val.strip()

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
