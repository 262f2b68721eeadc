"""Metrics command: instability, coupling and maintainability per file."""

import json
from pathlib import Path
from typing import Optional

from rich.table import Table

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
def metrics(
    path: Path = path_argument("Project directory to measure"),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
    output_format: OutputFormat = FORMAT_OPTION,
):
    """
    Show per-file coupling metrics and a project health summary.

    [bold cyan]Examples:[/bold cyan]

      archwarden metrics src

      archwarden metrics . --format json
    """
    logger = setup_logging(verbosity_from_flags(verbose, quiet))

    with cli_errors(logger, verbose):
        settings = resolve_config(config, verbose=verbose, quiet=quiet)
        setup_logging(settings.verbosity)
        root = project_root(path)
        files = discover_files(path, settings.exclude_patterns)

        session = AnalysisSession(settings)
        try:
            per_file, summary = session.metrics(files)
        finally:
            session.close()

        rel_paths = [Path(f).relative_to(root).as_posix() for f in files]

        if output_format == OutputFormat.json:
            print(
                json.dumps(
                    {
                        "files": [
                            {**m.to_dict(), "path": rel} for rel, m in zip(rel_paths, per_file)
                        ],
                        "summary": summary.to_dict(),
                    },
                    indent=2,
                )
            )
            return

        table = Table(show_header=True, show_lines=False, pad_edge=True)
        table.add_column("File", style="blue")
        table.add_column("Ca", justify="right")
        table.add_column("Ce", justify="right")
        table.add_column("Instability", justify="right")
        table.add_column("Coupling")
        table.add_column("MI", justify="right")
        table.add_column("Grade")

        for rel, m in zip(rel_paths, per_file):
            table.add_row(
                rel,
                str(m.coupling.afferent),
                str(m.coupling.efferent),
                f"{m.instability.instability:.3f}",
                m.coupling.quality,
                f"{m.maintainability.index:.1f}",
                m.maintainability.grade,
            )

        console.print(table)
        console.print()
        console.print(
            f"[bold cyan]Health score[/bold cyan]: {summary.health_score:.1f}  "
            f"(avg instability {summary.average_instability:.3f}, "
            f"avg maintainability {summary.average_maintainability:.1f}, "
            f"{summary.files_analyzed} files)"
        )
