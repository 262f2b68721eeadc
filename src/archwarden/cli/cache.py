"""Cache management commands."""

from pathlib import Path
from typing import Optional

import typer

from ..cache import AnalysisCache
from . import app
from ._common import CONFIG_OPTION, console, resolve_config


def _open_cache(config: Optional[Path]):
    settings = resolve_config(config)
    cache = AnalysisCache(
        cache_dir=settings.cache_dir,
        ttl_hours=settings.cache_ttl_hours,
        enabled=settings.cache_enabled,
    )
    return settings, cache


@app.command()
def cache_info(config: Optional[Path] = CONFIG_OPTION):
    """Show cache information and statistics."""
    _, cache = _open_cache(config)
    try:
        stats = cache.stats()
    finally:
        cache.close()

    console.print("[bold cyan]archwarden Cache Info[/bold cyan]")
    console.print()

    if stats.get("enabled"):
        console.print("Status: [green]Enabled[/green]")
        console.print(f"Directory: [blue]{stats.get('directory', 'N/A')}[/blue]")
        console.print(f"Entries: [yellow]{stats.get('size', 0)}[/yellow]")
        console.print(f"Size: [yellow]{stats.get('volume', 0)} bytes[/yellow]")
    else:
        console.print("Status: [red]Disabled[/red]")


@app.command()
def cache_clear(config: Optional[Path] = CONFIG_OPTION):
    """Clear the analysis cache."""
    settings, cache = _open_cache(config)
    if not settings.cache_enabled:
        console.print("[yellow]Cache is disabled[/yellow]")
        raise typer.Exit(0)

    try:
        cache.clear()
    finally:
        cache.close()
    console.print("[green]Cache cleared successfully[/green]")
