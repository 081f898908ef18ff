"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (FLOWDOCS__BROWSER__HEADLESS=false)
  2. flowdocs.yaml          (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("flowdocs")


def _find_config_file() -> str | None:
    """Return the path of the first flowdocs.yaml found, or None."""
    candidates = [
        Path("flowdocs.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "flowdocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080


class SourceSettings(BaseModel):
    """Where component documentation lives."""

    model_config = ConfigDict(extra="forbid")

    repo: str = "mittwald/flow"
    branch: str = "main"
    content_base: str = "apps/docs/src/content/04-components"
    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    site_url: str = "https://mittwald.github.io/flow"
    user_agent: str = "flowdocs-mcp"
    request_timeout_seconds: float = 30.0


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    registry_ttl_minutes: int = 60
    mdx_ttl_minutes: int = 30
    # Scraped tables cost a full browser render, so they live longest.
    develop_ttl_minutes: int = 120
    example_ttl_minutes: int = 30

    @property
    def registry_ttl(self) -> timedelta:
        return timedelta(minutes=self.registry_ttl_minutes)

    @property
    def mdx_ttl(self) -> timedelta:
        return timedelta(minutes=self.mdx_ttl_minutes)

    @property
    def develop_ttl(self) -> timedelta:
        return timedelta(minutes=self.develop_ttl_minutes)

    @property
    def example_ttl(self) -> timedelta:
        return timedelta(minutes=self.example_ttl_minutes)


class BrowserSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    headless: bool = True
    navigation_timeout_ms: int = 30_000
    render_timeout_ms: int = 15_000
    expand_timeout_ms: int = 5_000
    blocked_resource_pattern: str = r"\.(png|jpg|jpeg|gif|svg|webp|woff2?|ttf|eot)$"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: FLOWDOCS__CACHE__MDX_TTL_MINUTES=5
        env_prefix="FLOWDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    source: SourceSettings = SourceSettings()
    cache: CacheSettings = CacheSettings()
    browser: BrowserSettings = BrowserSettings()
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
