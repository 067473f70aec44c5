"""Entry point: python -m weftgen

Reads weft.toml, generates routes_auto.py and index.html.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .codegen import generate
from .errors import WeftgenError
from .loader import CONFIG_PATH, load_config
from .resolver import resolve


@click.command()
@click.argument(
    "config",
    default=str(CONFIG_PATH),
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output-dir",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the generated routes and docs.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log resolution and rendering details.")
def main(config: Path, output_dir: Path, verbose: bool) -> None:
    """Generate HTTP routes and HTML docs from an API description."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        api = resolve(load_config(config))
        paths = generate(api, output_dir)
    except WeftgenError as e:
        raise click.ClickException(str(e)) from e

    for path in paths:
        click.echo(f"Generated {path}")
    click.echo(f"({len(api.endpoint)} endpoints)")


if __name__ == "__main__":
    main()
