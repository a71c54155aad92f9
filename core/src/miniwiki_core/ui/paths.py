from __future__ import annotations

import re
from typing import Final

ACTIONS: Final[tuple[str, ...]] = ("edit", "save", "view", "view500")

VALID_PATH: Final[re.Pattern[str]] = re.compile(
    r"^/(" + "|".join(ACTIONS) + r")/([a-zA-Z0-9]+)$"
)
VALID_TITLE: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9]+$")


class InvalidPagePath(ValueError):
    """Raised when a URL path or title does not match the page pattern."""


def parse_path(url_path: str) -> tuple[str, str]:
    """Split a request path into (action, title).

    Raises InvalidPagePath if the path is not /<action>/<title>.
    """

    m = VALID_PATH.fullmatch(url_path)
    if m is None:
        raise InvalidPagePath("invalid page title")
    return m.group(1), m.group(2)


def get_title(url_path: str) -> str:
    _, title = parse_path(url_path)
    return title


def is_valid_title(title: str) -> bool:
    # fullmatch: "$" would also accept a trailing newline.
    return VALID_TITLE.fullmatch(title) is not None
