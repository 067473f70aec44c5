"""Shared fixtures for weftgen tests.

tests/data/weft_api.toml is a small but complete description with endpoints,
requests and parameters declared out of order, so resolution has real
sorting to do.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from weftgen.loader import load_config
from weftgen.models import Api
from weftgen.resolver import resolve

DATA_DIR = Path(__file__).parent / "data"
API_CONFIG = DATA_DIR / "weft_api.toml"


@pytest.fixture
def api_path() -> Path:
    return API_CONFIG


@pytest.fixture
def raw_api(api_path) -> Api:
    """The sample configuration, loaded but not resolved."""
    return load_config(api_path)


@pytest.fixture
def api(raw_api) -> Api:
    """The sample configuration, resolved."""
    return resolve(raw_api)


@pytest.fixture
def make_api() -> Callable[..., Api]:
    """Return a builder for small Api models.

    Usage in tests::

        api = make_api([{"uri": "/x", "request": [...]}], query={...})
    """
    def _make(
        endpoints: list[dict[str, Any]],
        query: dict[str, Any] | None = None,
        response: dict[str, Any] | None = None,
        **fields: Any,
    ) -> Api:
        return Api.model_validate({
            "title": "Test API",
            "endpoint": endpoints,
            "query": query or {},
            "response": response or {},
            **fields,
        })
    return _make


@pytest.fixture
def health_api(make_api) -> Api:
    """One endpoint with a single default JSON GET."""
    return resolve(make_api([{
        "uri": "/api/health",
        "title": "Health",
        "description": "Service health.",
        "request": [{
            "method": "GET",
            "function": "health",
            "accept": "application/json",
            "default": True,
        }],
    }]))
