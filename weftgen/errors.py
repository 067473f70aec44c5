"""Exceptions raised while generating routes and docs.

Every error is fatal for a run: the command line reports it and
exits without writing any output.
"""

from __future__ import annotations

from dataclasses import dataclass


class WeftgenError(Exception):
    """Base class for all generation failures."""


class ConfigError(WeftgenError):
    """The configuration could not be read, parsed or validated."""


@dataclass(frozen=True)
class DanglingReference:
    """A parameter name that has no entry in its registry."""

    endpoint: str
    method: str
    registry: str
    name: str

    def __str__(self) -> str:
        return (
            f"{self.endpoint} {self.method}: no {self.registry} parameter"
            f" named {self.name!r}"
        )


class ResolutionError(WeftgenError):
    """One or more parameter references could not be resolved."""

    def __init__(self, missing: list[DanglingReference]):
        self.missing = list(missing)
        lines = "\n".join(f"  {ref}" for ref in self.missing)
        super().__init__(f"unresolved parameter references:\n{lines}")


class ModelConsistencyError(WeftgenError):
    """The API model cannot be turned into unambiguous routing code."""


class RenderError(WeftgenError):
    """A template failed to render."""


class OutputError(WeftgenError):
    """Generated text could not be written."""
