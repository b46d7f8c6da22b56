"""Invoke helpers — call sync or async route functions uniformly.

Preload functions and server handlers can be ``def`` or ``async def``
and declare only the arguments they need.  This module keeps both the
sync/async check and the by-name argument resolution in one place.

Usage::

    from warren._internal.invoke import invoke, resolve_kwargs

    kwargs = resolve_kwargs(handler, {"request": request}, match.params)
    result = await invoke(handler, **kwargs)
"""

import inspect
from collections.abc import Collection, Mapping
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        def preload(params):
            return {"slug": params["slug"]}

        async def preload(params, fetch):
            res = await fetch(f"/blog/{params['slug']}.json")
            return {"post": res.json()}
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def resolve_kwargs(
    func: Any,
    available: Mapping[str, Any],
    path_params: Mapping[str, str],
    declared_params: Collection[str] = (),
) -> dict[str, Any]:
    """Build keyword arguments for *func* from its signature.

    Resolution order for each parameter name:

    1. *available* (``request``, ``params``, ``query``, ``fetch``, ...); these
       shadow a path parameter of the same name
    2. Path parameters, converted to the annotated type when the
       annotation is a class and conversion succeeds
    3. Declared route parameters that the request did not supply
       (ambiguous subroute): the parameter default, or ``None``

    Anything else is left to the parameter's own default.  ``**kwargs``
    catch-alls receive the path parameters.
    """
    sig = inspect.signature(func)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            continue
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            for key, value in path_params.items():
                kwargs.setdefault(key, value)
            continue

        if name in available:
            kwargs[name] = available[name]
        elif name in path_params:
            value = path_params[name]
            annotation = param.annotation
            if (
                isinstance(annotation, type)
                and annotation is not str
                and annotation is not inspect.Parameter.empty
            ):
                try:
                    kwargs[name] = annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value
        elif name in declared_params:
            kwargs[name] = None if param.default is inspect.Parameter.empty else param.default

    return kwargs


def leading_positional(
    func: Any,
    values: Collection[Any],
    known: Collection[str],
) -> tuple[Any, ...]:
    """Fill leading positional parameters that no name resolves.

    Server handlers may take ``(request, response, next)`` under any
    names, e.g. ``def get(req, res, next)``.  Each leading required
    positional parameter not in *known* receives the next item of
    *values*; the first parameter that is known, has a default, or is
    keyword-only ends the run.
    """
    args: list[Any] = []
    remaining = list(values)
    for name, param in inspect.signature(func).parameters.items():
        if not remaining or name in known:
            break
        if param.kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            break
        if param.default is not inspect.Parameter.empty:
            break
        args.append(remaining.pop(0))
    return tuple(args)
