"""Derive generated function names and HTML anchors.

Handler names come from the endpoint URI:
  - a trailing slash pluralizes the name
  - path separators, dots and hyphens are dropped
  - "Handler" is appended

Examples:
  /quake/            -> quakesHandler
  /quake/history/    -> quakehistorysHandler
  /api/health        -> apihealthHandler
  /v1.0/news-feed    -> v10newsfeedHandler

Anchors come from endpoint titles:
  Quake Search       -> quakesearch
"""

from __future__ import annotations

import re

_UNSAFE_CHARS = re.compile(r"[/.\-]")

HANDLER_SUFFIX = "Handler"


def handler_name(uri: str) -> str:
    """Return the dispatch function name for an endpoint URI."""
    if uri.endswith("/"):
        uri = uri + "s"
    return _UNSAFE_CHARS.sub("", uri) + HANDLER_SUFFIX


def anchor(title: str) -> str:
    """Lowercase title and remove its spaces."""
    return title.strip().lower().replace(" ", "")
