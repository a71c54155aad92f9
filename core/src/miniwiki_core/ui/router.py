from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from starlette.responses import Response

from miniwiki_core.context import get_wiki_context
from miniwiki_core.ui.handlers import HANDLERS
from miniwiki_core.ui.paths import InvalidPagePath, parse_path

NOT_FOUND_BODY = "404 page not found\n"

# Pages answer every verb; only the path decides between dispatch and 404.
METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")

router = APIRouter(tags=["wiki"])


def not_found() -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_BODY, status_code=404)


@router.api_route("/{full_path:path}", methods=list(METHODS), response_model=None)
async def dispatch(request: Request, full_path: str) -> Response:
    """Route /<action>/<title> to its handler; everything else is a 404."""

    try:
        action, title = parse_path(request.url.path)
    except InvalidPagePath:
        return not_found()

    handler = HANDLERS.get(action)
    if handler is None:
        return not_found()

    return await handler(get_wiki_context(request), request, title)
