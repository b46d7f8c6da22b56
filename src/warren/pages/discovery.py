"""Filesystem route discovery for the routes/ directory.

Walks the routes directory tree and builds a finalized ``RouteTable``:

- ``.html`` files are pages (kida templates)
- a ``.py`` file next to a same-stem ``.html`` is that page's script;
  its ``preload`` runs before the page renders
- any other ``.py`` file is a server route; its ``get``/``post``/
  ``put``/``patch``/``head``/``del`` functions handle those methods
- ``_error.html`` is the error page
- ``_``-prefixed files and directories produce no routes but can be
  imported by route modules (``from ._db import posts``)

Route modules are loaded with ``importlib`` into a synthetic package
per routes directory, so relative imports between them work without
touching ``sys.path``.
"""

import hashlib
import importlib.util
import logging
import re
import sys
import types
from pathlib import Path

from warren.errors import RouteDiscoveryError
from warren.pages.types import PageSource, ServerHandlerSet
from warren.routing.pattern import compile_pattern
from warren.routing.route import MountKind, SegmentKind
from warren.routing.segments import PAGE_EXTENSION, SCRIPT_EXTENSION, is_routable, route_kind, tokenize
from warren.routing.table import RouteTable

logger = logging.getLogger("warren.routing")

_NON_IDENTIFIER_RE = re.compile(r"\W")


def discover_routes(routes_dir: str | Path) -> RouteTable:
    """Walk a routes directory and return its finalized route table.

    Args:
        routes_dir: Path to the ``routes/`` directory.

    Raises:
        RouteDiscoveryError: If the directory is missing or a route
            module fails to import.
        ConfigurationError: Any naming, constraint, collision or
            duplicate-error-page problem in the tree.
    """
    root = Path(routes_dir).resolve()
    if not root.is_dir():
        raise RouteDiscoveryError(f"Routes directory not found: {root}")

    table = RouteTable()
    _walk_directory(root, root, loader=_ModuleLoader(root), table=table)
    table.finalize()

    logger.info(
        "discovered %d pages and %d server routes in %s%s",
        len(table.pages),
        len(table.server_routes),
        root,
        " (with error page)" if table.error_page is not None else "",
    )
    return table


def _walk_directory(
    directory: Path,
    root: Path,
    *,
    loader: "_ModuleLoader",
    table: RouteTable,
) -> None:
    """Register the route files in *directory*, then recurse."""
    entries = sorted(directory.iterdir())

    for item in entries:
        if item.is_file() and not item.name.startswith("."):
            _process_file(item, root, loader=loader, table=table)

    for item in entries:
        if not item.is_dir():
            continue
        # ``_`` directories are ignored subtrees: helpers, not routes
        if item.name.startswith((".", "_")):
            continue
        _walk_directory(item, root, loader=loader, table=table)


def _process_file(
    file: Path,
    root: Path,
    *,
    loader: "_ModuleLoader",
    table: RouteTable,
) -> None:
    relative = file.relative_to(root).as_posix()
    kind = route_kind(relative)
    if kind is None:
        return

    segments = tokenize(relative)
    if not is_routable(segments):
        logger.debug("skipping helper %s", relative)
        return

    if kind is MountKind.PAGE:
        script = file.with_suffix(SCRIPT_EXTENSION)
        preload = None
        module_path = None
        # The error page renders from {error, status} alone
        if script.is_file() and segments[-1].kind is not SegmentKind.ERROR:
            module = loader.load(script)
            preload = getattr(module, "preload", None)
            if preload is not None and not callable(preload):
                raise RouteDiscoveryError(f"'preload' in {script} must be callable")
            module_path = str(script)
        source = PageSource(template=relative, preload=preload, module=module_path)
        table.register(compile_pattern(segments, kind, source, file=relative))
        return

    if segments[-1].kind is SegmentKind.ERROR:
        logger.warning("ignoring %s: the error page does not run a script", relative)
        return

    module = loader.load(file)
    handler_set = ServerHandlerSet.from_module(module, path=str(file))
    if not handler_set.handlers:
        if file.with_suffix(PAGE_EXTENSION).is_file():
            return
        logger.warning("server route %s exports no method handlers", relative)
    table.register(compile_pattern(segments, kind, handler_set, file=relative))


class _ModuleLoader:
    """Imports route modules as members of a synthetic package.

    ``routes/blog/[slug].py`` becomes ``_warren_routes_<hash>.blog._slug_``
    with ``_warren_routes_<hash>.blog`` registered as a package whose
    ``__path__`` is ``routes/blog``.  Every build starts from a clean
    package so a rebuild re-executes every module.
    """

    __slots__ = ("_modules", "package", "root")

    def __init__(self, root: Path) -> None:
        self.root = root
        digest = hashlib.sha1(str(root).encode("utf-8")).hexdigest()[:10]
        self.package = f"_warren_routes_{digest}"
        self._modules: dict[Path, types.ModuleType] = {}

        prefix = self.package + "."
        stale = [name for name in sys.modules if name == self.package or name.startswith(prefix)]
        for name in stale:
            del sys.modules[name]
        _register_package(self.package, root)

    def load(self, file: Path) -> types.ModuleType:
        """Import *file* (once per build) and return the module."""
        cached = self._modules.get(file)
        if cached is not None:
            return cached

        relative = file.relative_to(self.root).with_suffix("")
        parent = self.package
        directory = self.root
        for part in relative.parts[:-1]:
            directory = directory / part
            parent = f"{parent}.{_identifier(part)}"
            if parent not in sys.modules:
                _register_package(parent, directory)
        module_name = f"{parent}.{_identifier(relative.parts[-1])}"

        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            raise RouteDiscoveryError(f"Cannot load route module {file}")

        module = importlib.util.module_from_spec(spec)
        # Registered before exec so relative imports inside the module resolve
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise RouteDiscoveryError(f"Failed to load route module {file}: {exc}") from exc

        self._modules[file] = module
        return module


def _register_package(name: str, directory: Path) -> None:
    package = types.ModuleType(name)
    package.__path__ = [str(directory)]
    package.__package__ = name
    sys.modules[name] = package


def _identifier(part: str) -> str:
    """``[slug].json`` -> ``_slug__json``: a valid module name component."""
    ident = _NON_IDENTIFIER_RE.sub("_", part)
    if ident[:1].isdigit():
        ident = "_" + ident
    return ident
