from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType

from fastapi import Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.responses import Response

from miniwiki_core.context import WikiContext
from miniwiki_core.storage.filesystem import Page
from miniwiki_core.ui.render import EDIT_TEMPLATE, VIEW_TEMPLATE, render_page

logger = logging.getLogger(__name__)

_FORM_METHODS = frozenset({"POST", "PUT", "PATCH"})

Handler = Callable[[WikiContext, Request, str], Awaitable[Response]]


def _redirect(action: str, title: str) -> RedirectResponse:
    return RedirectResponse(url=f"/{action}/{title}", status_code=302)


async def handle_view(ctx: WikiContext, request: Request, title: str) -> Response:
    try:
        page = ctx.store.load(title)
    except OSError:
        return _redirect("edit", title)
    return render_page(ctx, request, VIEW_TEMPLATE, page)


async def handle_edit(ctx: WikiContext, request: Request, title: str) -> Response:
    try:
        page = ctx.store.load(title)
    except OSError:
        page = Page(title=title)
    return render_page(ctx, request, EDIT_TEMPLATE, page)


async def _read_body_field(request: Request) -> str:
    # Submitted form data wins over the query string, as with a classic form lookup.
    if request.method in _FORM_METHODS:
        form = await request.form()
        value = form.get("body")
        if isinstance(value, str):
            return value
    return request.query_params.get("body") or ""


async def handle_save(ctx: WikiContext, request: Request, title: str) -> Response:
    body = await _read_body_field(request)
    page = Page(title=title, body=body.encode("utf-8"))
    try:
        ctx.store.save(page)
    except OSError as exc:
        logger.error("error saving page %r: %s", page.title, exc)
        return _redirect("edit", title)
    return _redirect("view", title)


async def handle_view500(ctx: WikiContext, request: Request, title: str) -> Response:
    logger.info("Returning error 500")
    return PlainTextResponse("500", status_code=500)


HANDLERS: Mapping[str, Handler] = MappingProxyType(
    {
        "view": handle_view,
        "edit": handle_edit,
        "save": handle_save,
        "view500": handle_view500,
    }
)
