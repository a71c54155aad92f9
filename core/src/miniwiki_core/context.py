from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import HTTPException, Request
from fastapi.templating import Jinja2Templates

from miniwiki_core.config import WikiConfig, resolve_templates_dir
from miniwiki_core.home import WikiPaths
from miniwiki_core.storage.filesystem import FilesystemPageStore

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "ui" / "templates"


@dataclass(frozen=True)
class WikiContext:
    """Process-scoped state shared by every request.

    Built once in the application lifespan; handlers only read from it.
    """

    config: WikiConfig
    paths: WikiPaths
    store: FilesystemPageStore
    templates: Jinja2Templates


def build_wiki_context(paths: WikiPaths, config: WikiConfig) -> WikiContext:
    store = FilesystemPageStore(
        paths.pages_dir,
        file_mode=config.storage.file_mode,
        suffix=config.storage.suffix,
    )
    store.ensure_layout()

    templates_dir = resolve_templates_dir(paths, config, DEFAULT_TEMPLATES_DIR)
    templates = Jinja2Templates(directory=str(templates_dir))

    return WikiContext(config=config, paths=paths, store=store, templates=templates)


def get_wiki_context(request: Request) -> WikiContext:
    ctx = getattr(request.app.state, "wiki", None)
    if ctx is None:
        raise HTTPException(status_code=500, detail="Wiki not initialized")
    return ctx
