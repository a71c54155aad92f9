from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from miniwiki_core.home import WikiPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class PathOverrides(BaseModel):
    pages_dir: str | None = None
    logs_dir: str | None = None
    templates_dir: str | None = Field(
        default=None,
        description=(
            "Optional directory holding view.html and edit.html; if omitted, the templates "
            "shipped with the package are used."
        ),
    )


class StorageConfig(BaseModel):
    file_mode: int = Field(
        default=0o600,
        ge=0,
        le=0o777,
        description="Permission bits applied when a page file is created.",
    )
    suffix: str = Field(default=".txt", min_length=1)

    @field_validator("suffix")
    @classmethod
    def _suffix_has_no_separator(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("suffix must not contain path separators")
        return value


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level


class WikiConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    paths: PathOverrides = Field(default_factory=PathOverrides)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_wiki_config(paths: WikiPaths) -> WikiConfig:
    """Load config from ${MINIWIKI_HOME}/config/wiki.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.wiki_config_path
    if not config_path.is_file():
        return WikiConfig()
    return WikiConfig.model_validate_json(config_path.read_bytes())


def write_wiki_config(paths: WikiPaths, config: WikiConfig) -> Path:
    """Persist config to ${MINIWIKI_HOME}/config/wiki.json and return its path."""

    paths.config_dir.mkdir(parents=True, exist_ok=True)
    text = config.model_dump_json(indent=2, exclude_none=True)
    paths.wiki_config_path.write_text(text + "\n", encoding="utf-8")
    return paths.wiki_config_path


def _under_home(home: Path, raw: str | None) -> Path | None:
    """Resolve a configured directory; relative values are taken from the wiki home."""

    if raw is None or not raw.strip():
        return None
    candidate = Path(raw).expanduser()
    return (candidate if candidate.is_absolute() else home / candidate).resolve()


def resolve_templates_dir(paths: WikiPaths, config: WikiConfig, default: Path) -> Path:
    return _under_home(paths.home, config.paths.templates_dir) or default


def resolve_configured_paths(paths: WikiPaths, config: WikiConfig) -> WikiPaths:
    """Apply the pages/logs overrides from config and create those directories.

    config/ is not configurable; it is where the overrides are read from.
    """

    pages_dir = _under_home(paths.home, config.paths.pages_dir) or paths.pages_dir
    logs_dir = _under_home(paths.home, config.paths.logs_dir) or paths.logs_dir

    for p in (pages_dir, logs_dir):
        p.mkdir(parents=True, exist_ok=True)

    return replace(paths, pages_dir=pages_dir, logs_dir=logs_dir)
