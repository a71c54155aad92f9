from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WikiPaths:
    home: Path
    pages_dir: Path
    logs_dir: Path
    config_dir: Path

    @property
    def wiki_config_path(self) -> Path:
        return self.config_dir / "wiki.json"

    @property
    def log_file_path(self) -> Path:
        return self.logs_dir / "wiki.log"


def resolve_miniwiki_home(environ: dict[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ

    raw = (env.get("MINIWIKI_HOME") or "").strip()
    if raw:
        return Path(raw).expanduser().resolve()

    # Pages live next to the process by default, like <title>.txt in the working directory.
    return Path.cwd().resolve()


def ensure_wiki_layout(home: Path) -> WikiPaths:
    home.mkdir(parents=True, exist_ok=True)

    logs_dir = home / "logs"
    config_dir = home / "config"

    for path in (logs_dir, config_dir):
        path.mkdir(parents=True, exist_ok=True)

    return WikiPaths(
        home=home,
        pages_dir=home,
        logs_dir=logs_dir,
        config_dir=config_dir,
    )
