"""Shared fixtures: route trees on disk and a recording renderer."""

import textwrap
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest


class RecordingRenderer:
    """Renderer double: records every call and returns a marker string."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, template_name: str, props: Mapping[str, Any]) -> str:
        self.calls.append((template_name, dict(props)))
        return f"<rendered {template_name}>"

    @property
    def last_props(self) -> dict[str, Any]:
        return self.calls[-1][1]


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def make_routes(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative path: source}`` under ``tmp_path/routes``."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "routes"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content))
        return root

    return _make
