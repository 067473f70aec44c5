"""Load and validate the API configuration.

Reads weft.toml and builds the :class:`~weftgen.models.Api` model.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from .errors import ConfigError
from .models import Api

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("weft.toml")


def parse_config(text: str | bytes, source: str = "<config>") -> Api:
    """Parse TOML text into an unresolved Api model."""
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigError(f"{source}: not valid UTF-8: {e}") from e

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{source}: invalid TOML: {e}") from e

    try:
        api = Api.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source}: invalid API description:\n{e}") from e

    logger.debug(
        "loaded %s: %d endpoints, %d query parameters, %d response properties",
        source, len(api.endpoint), len(api.query), len(api.response),
    )
    return api


def load_config(path: Path | None = None) -> Api:
    """Load the API configuration from disk."""
    config_file = path or CONFIG_PATH
    try:
        raw = config_file.read_bytes()
    except OSError as e:
        raise ConfigError(f"cannot read {config_file}: {e}") from e
    return parse_config(raw, source=str(config_file))
