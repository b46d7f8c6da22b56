"""Render collaborator — template name + props to markup.

The dispatcher only needs ``render(template_name, props) -> str``.
``KidaRenderer`` provides it with a kida ``Environment`` whose loader
is rooted at the routes directory, so a page's template name is simply
its file path (``blog/[slug].html``).
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from kida import Environment, FileSystemLoader

from warren.config import AppConfig


@runtime_checkable
class Renderer(Protocol):
    """Anything that turns a template name and props into markup.

    ``render`` may be sync or async; the dispatcher awaits awaitables.
    """

    def render(self, template_name: str, props: Mapping[str, Any]) -> Any: ...


class KidaRenderer:
    """Renderer backed by a kida ``Environment``."""

    __slots__ = ("env",)

    def __init__(self, env: Environment) -> None:
        self.env = env

    @classmethod
    def from_config(cls, config: AppConfig) -> "KidaRenderer":
        """Create an environment over ``config.routes_dir``.

        Called once while the app freezes.  The environment is
        immutable for the lifetime of the app.
        """
        env = Environment(
            loader=FileSystemLoader(str(config.routes_dir)),
            autoescape=config.autoescape,
            auto_reload=config.debug,
            trim_blocks=config.trim_blocks,
            lstrip_blocks=config.lstrip_blocks,
        )
        return cls(env)

    def render(self, template_name: str, props: Mapping[str, Any]) -> str:
        template = self.env.get_template(template_name)
        return template.render(dict(props))
