"""Resolve parameter references and put the model in a stable order.

Resolution never mutates its input.  It returns a new Api where:

- registry entries have their ids filled in,
- endpoints are sorted by title, requests by method,
- each request holds copies of the parameters it names, sorted by id,
- each request knows the URI of its endpoint.

Any reference without a registry entry is collected and reported
together, so an author can fix a configuration in one pass.
"""

from __future__ import annotations

import logging

from .errors import DanglingReference, ResolutionError
from .models import Api, Endpoint, Parameter, Request
from .registry import Registry, check_identifiers, default_identifiers, lookup

logger = logging.getLogger(__name__)


def _endpoint_key(endpoint: Endpoint) -> tuple[str, str]:
    return (endpoint.title, endpoint.uri)


def _request_key(request: Request) -> tuple[str, str]:
    # Accept breaks ties between GET variants.
    return (request.method, request.accept)


def _param_key(param: Parameter) -> str:
    return param.id


def _resolve_names(
    names: list[str],
    registry: Registry,
    label: str,
    endpoint: Endpoint,
    request: Request,
    missing: list[DanglingReference],
) -> list[Parameter]:
    resolved = []
    for name in names:
        param = lookup(registry, name)
        if param is None:
            missing.append(DanglingReference(endpoint.title, request.method, label, name))
            continue
        resolved.append(param)
    return sorted(resolved, key=_param_key)


def _resolve_request(
    request: Request,
    endpoint: Endpoint,
    query: Registry,
    response: Registry,
    missing: list[DanglingReference],
) -> Request:
    uri_parameter = None
    if request.parameter:
        uri_parameter = lookup(query, request.parameter)
        if uri_parameter is None:
            missing.append(
                DanglingReference(endpoint.title, request.method, "query", request.parameter)
            )

    return request.model_copy(update={
        "uri": endpoint.uri,
        "uri_parameter": uri_parameter,
        "required_parameters": _resolve_names(
            request.required, query, "query", endpoint, request, missing,
        ),
        "optional_parameters": _resolve_names(
            request.optional, query, "query", endpoint, request, missing,
        ),
        "response_fields": _resolve_names(
            request.response, response, "response", endpoint, request, missing,
        ),
    })


def resolve_model(api: Api) -> tuple[Api, list[DanglingReference]]:
    """Resolve api, returning the new model and any dangling references."""
    query = default_identifiers(api.query)
    response = default_identifiers(api.response)
    check_identifiers("query", query)
    check_identifiers("response", response)

    missing: list[DanglingReference] = []
    endpoints = []
    for endpoint in sorted(api.endpoint, key=_endpoint_key):
        requests = [
            _resolve_request(request, endpoint, query, response, missing)
            for request in sorted(endpoint.request, key=_request_key)
        ]
        endpoints.append(endpoint.model_copy(update={"request": requests}))
        logger.debug("resolved %s (%d requests)", endpoint.uri, len(requests))

    resolved = api.model_copy(update={
        "endpoint": endpoints,
        "query": query,
        "response": response,
    })
    return resolved, missing


def resolve(api: Api) -> Api:
    """Resolve api or raise ResolutionError naming every missing reference."""
    resolved, missing = resolve_model(api)
    if missing:
        raise ResolutionError(missing)
    return resolved
