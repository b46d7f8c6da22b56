"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(routes_dir="site/routes", debug=True)
    """

    # Route tree: pages (.html) and server routes (.py) live side by side
    routes_dir: str | Path = "routes"

    # Last-segment suffixes that mark a GET request as API-style
    # (server routes only, no page fallback), e.g. ``/blog/hello.json``
    api_suffixes: tuple[str, ...] = (".json",)

    debug: bool = False

    # Templates (the page files themselves, rendered by kida)
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Preload fetch
    fetch_timeout: float = 10.0
