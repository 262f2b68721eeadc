"""Cycles command: list multi-hop circular dependencies."""

import json
import os
from pathlib import Path
from typing import Optional

from ..logging_config import setup_logging, verbosity_from_flags
from ..scanning import discover_files
from ..session import AnalysisSession
from . import app
from ._common import (
    CONFIG_OPTION,
    FORMAT_OPTION,
    QUIET_OPTION,
    VERBOSE_OPTION,
    OutputFormat,
    cli_errors,
    console,
    path_argument,
    project_root,
    resolve_config,
)


@app.command()
def cycles(
    path: Path = path_argument("Project directory to scan"),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
    output_format: OutputFormat = FORMAT_OPTION,
):
    """
    Build the dependency graph and report every circular dependency.

    [bold cyan]Examples:[/bold cyan]

      archwarden cycles src

      archwarden cycles . --format json
    """
    logger = setup_logging(verbosity_from_flags(verbose, quiet))

    with cli_errors(logger, verbose):
        settings = resolve_config(config, verbose=verbose, quiet=quiet)
        setup_logging(settings.verbosity)
        root = project_root(path)
        files = discover_files(path, settings.exclude_patterns)

        session = AnalysisSession(settings)
        try:
            outcome = session.store.build(files)
            found = session.cycles.get_all_cycles()
            stats = session.store.stats()
        finally:
            session.close()

        def rel(p: str) -> str:
            return os.path.relpath(p, root).replace("\\", "/")

        if output_format == OutputFormat.json:
            print(
                json.dumps(
                    {
                        "stats": {
                            "total_files": stats.total_files,
                            "total_dependencies": stats.total_dependencies,
                            "average_dependencies": stats.average_dependencies,
                            "files_supplied": outcome.graph.files_supplied,
                            "skipped": dict(outcome.graph.skipped),
                        },
                        "cycles": [
                            {"files": [rel(f) for f in c.files], "depth": c.depth} for c in found
                        ],
                    },
                    indent=2,
                )
            )
            return

        console.print(
            f"[bold cyan]Dependency graph[/bold cyan]: {stats.total_files} files, "
            f"{stats.total_dependencies} dependencies "
            f"(avg {stats.average_dependencies:.2f} per file)"
        )
        if outcome.truncated:
            console.print(
                f"[yellow]Only {outcome.graph.files_processed} of {outcome.graph.files_supplied} "
                f"files were analyzed[/yellow]"
            )
        if not found:
            console.print("[green]No circular dependencies[/green]")
            return
        for c in found:
            chain = " [dim]→[/dim] ".join(rel(f) for f in c.files)
            console.print(f"[red]●[/red] ({c.depth} levels) {chain}")
