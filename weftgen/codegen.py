"""Render templates and write generated output.

Takes a resolved Api and produces the routes module and the HTML docs.
Both are rendered and staged before anything is replaced, so a failure
leaves existing output untouched.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import jinja2

from .context_builder import build_docs_context, build_routes_context
from .errors import OutputError, RenderError
from .models import Api
from .naming import anchor

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _pystr(value: str) -> str:
    """Quote value as a Python string literal."""
    return json.dumps(value, ensure_ascii=False)


def _pylist(values: Any) -> str:
    """Quote values as a Python list of string literals."""
    return "[" + ", ".join(_pystr(v) for v in values) + "]"


def _environment(autoescape: bool) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=autoescape,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["pystr"] = _pystr
    env.filters["pylist"] = _pylist
    env.filters["anchor"] = anchor
    return env


def _render(env: jinja2.Environment, name: str, context: dict[str, Any]) -> str:
    try:
        return env.get_template(name).render(**context)
    except jinja2.TemplateError as e:
        raise RenderError(f"rendering {name}: {e}") from e


def emit_routes(api: Api) -> str:
    """Render the routes module for a resolved Api."""
    context = build_routes_context(api)
    output = _render(_environment(autoescape=False), "routes.py.j2", context)
    logger.debug("rendered routes for %d endpoints", context["route_count"])
    return output


def emit_docs(api: Api) -> str:
    """Render the HTML docs for a resolved Api."""
    context = build_docs_context(api)
    output = _render(_environment(autoescape=True), "docs.html.j2", context)
    logger.debug("rendered docs for %d endpoints", context["endpoint_count"])
    return output


def write_outputs(outputs: list[tuple[Path, str]]) -> None:
    """Replace every path with its text, or none of them.

    Each text goes to a temporary file beside its target first.  The
    targets are only replaced once every temporary file is written.
    """
    staged: list[tuple[Path, Path]] = []
    path = None
    try:
        for path, text in outputs:
            path.parent.mkdir(parents=True, exist_ok=True)
            if path.is_dir():
                raise OutputError(f"cannot write {path}: is a directory")
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="\n",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                staged.append((Path(f.name), path))
                f.write(text)
            os.chmod(f.name, 0o644)

        for temp, path in staged:
            os.replace(temp, path)
            logger.info("wrote %s", path)
    except OSError as e:
        raise OutputError(f"cannot write {path}: {e}") from e
    finally:
        for temp, _ in staged:
            temp.unlink(missing_ok=True)


def generate(api: Api, output_dir: Path) -> list[Path]:
    """Render routes and docs for a resolved Api and write both.

    Returns the written paths.
    """
    options = api.generator
    outputs = [
        (output_dir / options.routes_file, emit_routes(api)),
        (output_dir / options.docs_file, emit_docs(api)),
    ]
    write_outputs(outputs)
    return [path for path, _ in outputs]
