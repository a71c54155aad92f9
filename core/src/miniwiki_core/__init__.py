from miniwiki_core.config import WikiConfig, load_wiki_config
from miniwiki_core.home import WikiPaths, ensure_wiki_layout, resolve_miniwiki_home
from miniwiki_core.storage import FilesystemPageStore, Page, PageNotFound

__version__ = "0.1.0"

__all__ = [
    "FilesystemPageStore",
    "Page",
    "PageNotFound",
    "WikiConfig",
    "WikiPaths",
    "__version__",
    "ensure_wiki_layout",
    "load_wiki_config",
    "resolve_miniwiki_home",
]
