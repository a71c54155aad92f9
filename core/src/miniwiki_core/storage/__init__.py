from __future__ import annotations

from miniwiki_core.storage.filesystem import FilesystemPageStore, Page, PageNotFound

__all__ = [
    "FilesystemPageStore",
    "Page",
    "PageNotFound",
]
