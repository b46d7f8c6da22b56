"""Shared type aliases used across warren modules."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

# Server route handler: ``get``/``post``/... function with a variable signature
Handler: TypeAlias = Callable[..., Any]

# Page preload: returns props (or a Redirect), sync or async
Preload: TypeAlias = Callable[..., Mapping[str, Any] | Awaitable[Mapping[str, Any]]]
