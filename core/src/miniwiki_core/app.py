from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from miniwiki_core import __version__
from miniwiki_core.config import load_wiki_config, resolve_configured_paths
from miniwiki_core.context import build_wiki_context
from miniwiki_core.home import ensure_wiki_layout, resolve_miniwiki_home
from miniwiki_core.ui.router import NOT_FOUND_BODY
from miniwiki_core.ui.router import router as wiki_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_miniwiki_home()
        paths = ensure_wiki_layout(home)
        config = load_wiki_config(paths)
        paths = resolve_configured_paths(paths, config)

        file_handler = RotatingFileHandler(
            paths.log_file_path,
            maxBytes=config.logging.max_size_mb * 1024 * 1024,
            backupCount=config.logging.backup_count,
            encoding="utf-8",
        )
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)

        # Owned by this app instance; detached again on shutdown.
        root = logging.getLogger()
        root.setLevel(config.logging.level)
        root.addHandler(file_handler)

        logger.info("MiniWiki starting up")
        logger.info(f"Pages directory: {paths.pages_dir}")

        app.state.wiki = build_wiki_context(paths, config)

        try:
            yield
        finally:
            logger.info("MiniWiki shutting down")
            root.removeHandler(file_handler)
            file_handler.close()

    app = FastAPI(
        title="MiniWiki",
        version=__version__,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        if exc.status_code == 404:
            return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return PlainTextResponse(message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse("Internal Server Error", status_code=500)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    # Catch-all page router goes last so explicit routes above win.
    app.include_router(wiki_router)

    return app
