"""Named catalogs of query parameters and response properties."""

from __future__ import annotations

from .errors import ModelConsistencyError
from .models import Parameter

Registry = dict[str, Parameter]


def default_identifiers(registry: Registry) -> Registry:
    """Return a copy of registry with blank ids set to their key."""
    filled: Registry = {}
    for name, param in registry.items():
        if param.id:
            filled[name] = param.model_copy()
        else:
            filled[name] = param.model_copy(update={"id": name})
    return filled


def check_identifiers(label: str, registry: Registry) -> None:
    """Raise if two entries in registry share an id."""
    seen: dict[str, str] = {}
    for name, param in registry.items():
        if param.id in seen:
            raise ModelConsistencyError(
                f"{label} parameters {seen[param.id]!r} and {name!r}"
                f" both have id {param.id!r}"
            )
        seen[param.id] = name


def lookup(registry: Registry, name: str) -> Parameter | None:
    """Return an independent copy of the named entry, or None."""
    param = registry.get(name)
    if param is None:
        return None
    return param.model_copy()
