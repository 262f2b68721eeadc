"""Shared CLI helpers."""

import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console

from ..config import AnalysisConfig, load_config
from ..exceptions import ArchwardenError

console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "-c",
    "--config",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Only log errors")


class OutputFormat(str, Enum):
    rich = "rich"
    json = "json"


FORMAT_OPTION = typer.Option(OutputFormat.rich, "--format", "-f", help="Output format")


def path_argument(help_text: str):
    return typer.Argument(
        Path("."),
        help=help_text,
        exists=True,
        file_okay=True,
        dir_okay=True,
        readable=True,
    )


def resolve_config(
    config: Optional[Path] = None, verbose: bool = False, quiet: bool = False
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def project_root(path: Path) -> Path:
    """Directory that relative paths in reports are computed against."""
    resolved = path.resolve()
    return resolved if resolved.is_dir() else resolved.parent


@contextmanager
def cli_errors(logger: logging.Logger, verbose: bool = False) -> Iterator[None]:
    """Turn archwarden errors and interrupts into exit codes."""
    try:
        yield
    except typer.Exit:
        raise

    except ArchwardenError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)
