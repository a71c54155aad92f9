from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse
from jinja2 import TemplateError
from starlette.responses import Response

from miniwiki_core.context import WikiContext
from miniwiki_core.storage.filesystem import Page

logger = logging.getLogger(__name__)

VIEW_TEMPLATE = "view.html"
EDIT_TEMPLATE = "edit.html"


def render_page(ctx: WikiContext, request: Request, template_name: str, page: Page) -> Response:
    """Fill template_name with page; a failing template becomes a 500 carrying the error text."""

    try:
        return ctx.templates.TemplateResponse(
            request,
            template_name,
            {"page": page, "title": page.title, "body": page.text},
        )
    except TemplateError as exc:
        logger.error("error executing template %s: %s", template_name, exc)
        return PlainTextResponse(str(exc), status_code=500)
