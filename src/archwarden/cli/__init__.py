"""CLI entry point. Registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="archwarden",
    help="archwarden - dependency cycles, architecture rules and metrics for source trees",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]archwarden[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Check dependency direction, cycles and coupling in a project."""


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .cycles import cycles as _cycles  # noqa: F401, E402
from .metrics import metrics as _metrics  # noqa: F401, E402
from .cache import cache_info as _cache_info, cache_clear as _cache_clear  # noqa: F401, E402
