"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (JUMPSCARED__FETCHER__TIMEOUT_SECONDS=5)
  2. jumpscared.yaml        (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults. Every
component receives the section it needs at construction time, so tests can
point the whole pipeline at a fake host without touching globals.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlparse

import platformdirs
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


def _find_config_file() -> str | None:
    """Return the path of the first jumpscared.yaml found, or None."""
    candidates = [
        Path("jumpscared.yaml"),
        Path(platformdirs.user_config_dir("jumpscared")) / "jumpscared.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


def _default_port() -> int:
    # Hosting platforms hand out the listening port through a bare PORT variable.
    return int(os.environ.get("PORT", "3000"))


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default_factory=_default_port)
    cors_allow_origins: list[str] = ["*"]


class SiteSettings(BaseModel):
    base_url: str = "https://wheresthejump.com"
    search_path: str = "/"
    content_api_path: str = "/wp-json/wp/v2/posts"
    content_marker: str = "/jump-scares-in-"
    title_prefix: str = "jump-scares-in-"
    excluded_markers: list[str] = ["/tag/", "/category/", "?s=", "&s=", "tv-series"]
    max_search_results: int = 10

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def host(self) -> str:
        return urlparse(self.base_url).hostname or ""


class FetcherSettings(BaseModel):
    timeout_seconds: float = 12.0
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US,en;q=0.9"
    max_redirects: int = 3


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: JUMPSCARED__SERVER__PORT=9090
        env_prefix="JUMPSCARED__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    # Built per Settings instance so a PORT set after import is still honoured.
    server: ServerSettings = Field(default_factory=ServerSettings)
    site: SiteSettings = SiteSettings()
    fetcher: FetcherSettings = FetcherSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
