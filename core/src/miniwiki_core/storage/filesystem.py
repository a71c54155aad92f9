from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from miniwiki_core.ui.paths import InvalidPagePath, is_valid_title


@dataclass(frozen=True)
class Page:
    title: str
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class PageNotFound(FileNotFoundError):
    pass


class FilesystemPageStore:
    """Flat-file page storage.

    One file per page, named <title><suffix> directly under pages_dir.
    No locking: concurrent saves to the same title race at the filesystem level.
    """

    def __init__(self, pages_dir: Path, *, file_mode: int = 0o600, suffix: str = ".txt") -> None:
        self._pages_dir = pages_dir
        self._file_mode = file_mode
        self._suffix = suffix

    @property
    def pages_dir(self) -> Path:
        return self._pages_dir

    def ensure_layout(self) -> None:
        self._pages_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, title: str) -> Path:
        if not is_valid_title(title):
            raise InvalidPagePath(f"invalid page title: {title!r}")
        return self._pages_dir / f"{title}{self._suffix}"

    def exists(self, title: str) -> bool:
        return self.path_for(title).is_file()

    def load(self, title: str) -> Page:
        path = self.path_for(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError as exc:
            raise PageNotFound(exc.errno, f"page not found: {title}", str(path)) from exc
        return Page(title=title, body=body)

    def save(self, page: Page) -> Path:
        """Write the page body, truncating any previous content.

        The mode is only applied when the file is created; an existing file keeps its bits.
        """

        path = self.path_for(page.title)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self._file_mode)
        with os.fdopen(fd, "wb") as f:
            f.write(page.body)
        return path
