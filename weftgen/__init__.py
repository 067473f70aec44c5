"""Generate HTTP routing code and HTML docs from an API description."""

from __future__ import annotations

from .codegen import emit_docs, emit_routes, generate
from .loader import load_config, parse_config
from .resolver import resolve

__all__ = [
    "emit_docs",
    "emit_routes",
    "generate",
    "load_config",
    "parse_config",
    "resolve",
]
