"""Check command: validate every file against rules, layers and cycles."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..logging_config import setup_logging, verbosity_from_flags
from ..models import Severity, Violation
from ..scanning import Skipped, discover_files, read_source, require_language
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

_SEVERITY_STYLE = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.HINT: "dim",
}


@app.command()
def check(
    path: Path = path_argument("Project directory or single file to check"),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Only check files of this language (e.g. typescript, python)",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    quiet: bool = QUIET_OPTION,
    output_format: OutputFormat = FORMAT_OPTION,
):
    """
    Validate imports against architecture rules, layers and cycle checks.

    Exits with status 1 when any error-severity violation is found.

    [bold cyan]Examples:[/bold cyan]

      archwarden check src

      archwarden check . --language typescript --format json
    """
    logger = setup_logging(verbosity_from_flags(verbose, quiet))

    with cli_errors(logger, verbose):
        settings = resolve_config(config, verbose=verbose, quiet=quiet)
        setup_logging(settings.verbosity)
        root = project_root(path)
        extensions = require_language(language).extensions if language else None
        files = discover_files(path, settings.exclude_patterns, extensions)

        session = AnalysisSession(settings)
        try:
            outcome = session.build(files)
            graph = outcome.graph.graph
            if outcome.graph.truncated:
                logger.warning(
                    f"Dependency graph limited to {graph.files_processed} of "
                    f"{graph.files_supplied} files (max_graph_files={settings.max_graph_files})"
                )

            report: dict[str, list[tuple[int, Violation]]] = {}
            for file_path in files:
                text = read_source(file_path, session.fs)
                if isinstance(text, Skipped):
                    logger.debug(f"Skipping {file_path}: {text.reason}")
                    continue
                violations = session.validate_file(file_path, text.value, version=0, relative_to=str(root))
                if violations:
                    rel = Path(file_path).relative_to(root).as_posix()
                    report[rel] = [(text.value.count("\n", 0, v.index) + 1, v) for v in violations]
            config_errors = list(session.rules.config_errors)
        finally:
            session.close()

        if output_format == OutputFormat.json:
            _output_json(report, len(files), config_errors)
        else:
            _output_rich(report, len(files), config_errors)

        if any(v.severity == Severity.ERROR for found in report.values() for _, v in found):
            raise typer.Exit(1)


def _output_json(report, files_checked, config_errors):
    print(
        json.dumps(
            {
                "files_checked": files_checked,
                "violations": [
                    {"file": file, "line": line, **v.to_dict()}
                    for file, found in report.items()
                    for line, v in found
                ],
                "config_errors": [str(e) for e in config_errors],
            },
            indent=2,
        )
    )


def _output_rich(report, files_checked, config_errors):
    for error in config_errors:
        console.print(f"[yellow]Config:[/yellow] {error}")

    total = sum(len(found) for found in report.values())
    if total == 0:
        console.print(f"[green]No violations[/green] in {files_checked} files")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("File", style="blue")
    table.add_column("Line", justify="right")
    table.add_column("Severity")
    table.add_column("Kind")
    table.add_column("Message")

    for file, found in report.items():
        for line, v in found:
            style = _SEVERITY_STYLE[v.severity]
            table.add_row(file, str(line), f"[{style}]{v.severity.value}[/{style}]", v.kind.value, v.message)

    console.print(table)
    errors = sum(1 for found in report.values() for _, v in found if v.severity == Severity.ERROR)
    console.print(f"[bold]{total}[/bold] findings ({errors} errors) in {files_checked} files")
