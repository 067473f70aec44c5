"""Build Jinja2 template contexts from a resolved Api.

Routing is first described as data: one EndpointDispatch per endpoint
with its GET Accept matchers, optional default and PUT/DELETE branches.
All consistency checks happen here, so templates only render.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any

from .errors import ModelConsistencyError
from .models import Api, Endpoint, Request
from .naming import anchor, handler_name

logger = logging.getLogger(__name__)

# Module level and local names used by the generated routes file.
_RESERVED_NAMES = {
    "weft", "Path", "ROUTES", "DOCS_FILE",
    "request", "headers", "body", "accept", "result",
}


@dataclass(frozen=True)
class Branch:
    """Presence check and delegation for one request."""

    function: str
    accept: str
    required: tuple[str, ...]
    optional: tuple[str, ...]


@dataclass(frozen=True)
class GetDispatch:
    """Exact Accept matchers plus the fallback for unmatched headers."""

    matchers: tuple[Branch, ...]
    default: Branch | None


@dataclass(frozen=True)
class EndpointDispatch:
    """Method switch for a single endpoint."""

    uri: str
    handler: str
    get: GetDispatch | None
    put: Branch | None
    delete: Branch | None


def _branch(request: Request) -> Branch:
    return Branch(
        function=request.function,
        accept=request.accept,
        required=tuple(request.required_ids()),
        optional=tuple(request.optional_ids()),
    )


def _single(endpoint: Endpoint, method: str) -> Branch | None:
    """Return the only request for method, or None."""
    requests = [r for r in endpoint.request if r.method == method]
    if len(requests) > 1:
        raise ModelConsistencyError(
            f"found multiple requests for method {method} at {endpoint.uri}"
        )
    if requests:
        return _branch(requests[0])
    return None


def _get_dispatch(endpoint: Endpoint) -> GetDispatch | None:
    requests = [r for r in endpoint.request if r.method == "GET"]
    if not requests:
        return None

    defaults = [r for r in requests if r.default]
    if len(defaults) > 1:
        raise ModelConsistencyError(f"found multiple defaults for {endpoint.uri} GET")

    counts = Counter(r.accept for r in requests)
    duplicated = sorted(accept for accept, n in counts.items() if n > 1)
    if duplicated:
        raise ModelConsistencyError(
            f"found multiple GET requests for Accept {duplicated[0]!r} at {endpoint.uri}"
        )

    return GetDispatch(
        matchers=tuple(_branch(r) for r in requests),
        default=_branch(defaults[0]) if defaults else None,
    )


def build_dispatch(endpoint: Endpoint) -> EndpointDispatch:
    """Validate one endpoint's requests and describe its method switch."""
    return EndpointDispatch(
        uri=endpoint.uri,
        handler=handler_name(endpoint.uri),
        get=_get_dispatch(endpoint),
        put=_single(endpoint, "PUT"),
        delete=_single(endpoint, "DELETE"),
    )


def _check_names(routes: list[EndpointDispatch], functions: list[str]) -> None:
    """Ensure every generated name is usable and distinct."""
    uris: dict[str, str] = {}
    for route in routes:
        if route.uri in uris:
            raise ModelConsistencyError(f"found multiple endpoints for {route.uri}")
        if not route.handler.isidentifier():
            raise ModelConsistencyError(
                f"{route.uri} gives handler name {route.handler!r}"
                " which is not a valid identifier"
            )
        for uri, handler in uris.items():
            if handler == route.handler:
                raise ModelConsistencyError(
                    f"{uri} and {route.uri} both give handler name {handler!r}"
                )
        uris[route.uri] = route.handler

    handlers = set(uris.values())
    for function in functions:
        if function in handlers or function in _RESERVED_NAMES:
            raise ModelConsistencyError(
                f"function {function!r} clashes with a generated name"
            )


def build_routes_context(api: Api) -> dict[str, Any]:
    """Build the context for routes.py.j2 from a resolved Api."""
    options = api.generator
    routes = [build_dispatch(endpoint) for endpoint in api.endpoint]

    docs = None
    if options.docs_uri:
        docs = EndpointDispatch(
            uri=options.docs_uri,
            handler=handler_name(options.docs_uri),
            get=None,
            put=None,
            delete=None,
        )

    functions = sorted({r.function for e in api.endpoint for r in e.request})
    _check_names(routes + ([docs] if docs else []), functions)

    logger.debug("built dispatch for %d endpoints", len(routes))

    return {
        "title": api.title,
        "runtime": options.runtime,
        "handlers_module": options.handlers,
        "functions": functions,
        "routes": routes,
        "docs": docs,
        "docs_file": options.docs_file,
        "route_count": len(routes),
    }


def _check_anchors(endpoints: list[Endpoint]) -> None:
    """Ensure every endpoint title gives its own anchor."""
    titles: dict[str, str] = {}
    for endpoint in endpoints:
        name = anchor(endpoint.title)
        if name in titles:
            raise ModelConsistencyError(
                f"titles {titles[name]!r} and {endpoint.title!r} both give anchor {name!r}"
            )
        titles[name] = endpoint.title


def build_docs_context(api: Api) -> dict[str, Any]:
    """Build the context for docs.html.j2 from a resolved Api."""
    _check_anchors(api.endpoint)
    return {
        "title": api.title,
        "production": api.production,
        "host": api.host,
        "repo": api.repo,
        "discussion": api.discussion,
        "endpoints": api.endpoint,
        "endpoint_count": len(api.endpoint),
    }
