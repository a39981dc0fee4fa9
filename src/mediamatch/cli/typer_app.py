"""
mediamatch Typer CLI Application

Inspect how the matching engine sees a set of files without touching
them: ``detect`` shows the batch mode and grouping, ``select`` runs the
candidate selector over literal names.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from mediamatch import __version__
from mediamatch.cli.context import CliContext, LogLevel
from mediamatch.cli.error_handler import (
    EXIT_MATCH_FAILURE,
    format_json_output,
    handle_cli_error,
)
from mediamatch.config.loader import load_settings
from mediamatch.core.file_grouper.grouper import BatchGrouper
from mediamatch.core.matching.selector import CandidateSelector
from mediamatch.core.models import MediaKind, MediaMode, SearchResult
from mediamatch.core.pipeline import movie_query_for
from mediamatch.core.series_name_matcher import SeriesNameMatcher
from mediamatch.shared.errors import MediaMatchError
from mediamatch.shared.logging import setup_logging
from mediamatch.utils.files import discover_files

console = Console()

app = typer.Typer(
    name="mediamatch",
    help="Match media file names against metadata candidates.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"mediamatch {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="TOML configuration file."),
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", case_sensitive=False, help="Override the configured log level."),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print machine-readable JSON."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version."),
    ] = False,
) -> None:
    """Load configuration and set up logging for all commands."""
    try:
        settings = load_settings(config)
    except MediaMatchError as e:
        raise typer.Exit(handle_cli_error(e, "load-config", json_output=json_output)) from e

    setup_logging(
        level=log_level.value if log_level else settings.logging.level,
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )
    ctx.obj = CliContext(settings=settings, config_path=config, json_output=json_output)


@app.command("detect")
def detect_command(
    ctx: typer.Context,
    paths: Annotated[list[Path], typer.Argument(help="Files or directories to inspect.")],
    recursive: Annotated[bool, typer.Option("--recursive/--no-recursive", help="Descend into subdirectories.")] = True,
) -> None:
    """Show the detected batch mode and how files would be grouped."""
    cli: CliContext = ctx.obj
    try:
        files = discover_files(paths, recursive=recursive)
        matcher = SeriesNameMatcher(cli.settings.detection)
        mode = matcher.classify(files) if files else MediaMode.MOVIE

        groups: list[dict[str, object]]
        if mode is MediaMode.EPISODE:
            media = [f for f in files if f.kind in (MediaKind.VIDEO, MediaKind.SUBTITLE)]
            grouper = BatchGrouper(matcher, cli.settings.detection)
            groups = [group.to_dict() for group in grouper.group(media).values()]
        elif mode is MediaMode.MOVIE:
            by_query: dict[str, list[str]] = {}
            for file in files:
                if file.kind is MediaKind.VIDEO:
                    by_query.setdefault(movie_query_for(file), []).append(str(file.path))
            groups = [
                {"title": query, "file_count": len(paths_), "files": paths_, "queries": [query]}
                for query, paths_ in by_query.items()
            ]
        else:
            audio = [str(f.path) for f in files if f.kind is MediaKind.AUDIO]
            groups = [{"title": "music", "file_count": len(audio), "files": audio, "queries": []}]
    except MediaMatchError as e:
        raise typer.Exit(handle_cli_error(e, "detect", json_output=cli.json_output)) from e

    if cli.json_output:
        print(format_json_output("detect", success=True, data={"mode": mode.value, "groups": groups}))
        return

    console.print(f"Detected mode: [bold]{mode.value}[/bold] ({len(files)} files)")
    table = Table(title="Groups")
    table.add_column("Group", style="cyan")
    table.add_column("Queries")
    table.add_column("Files", justify="right")
    for group in groups:
        table.add_row(str(group["title"]), " | ".join(group["queries"]), str(group["file_count"]))
    console.print(table)


@app.command("select")
def select_command(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Free-text query.")],
    names: Annotated[list[str], typer.Argument(help="Candidate names, in search result order.")],
    strict: Annotated[bool, typer.Option("--strict", help="Require one unambiguous result.")] = False,
) -> None:
    """Run the candidate selector over literal names."""
    cli: CliContext = ctx.obj
    selector = CandidateSelector(
        cli.settings.selection,
        edit_weight=cli.settings.episode_matching.edit_weight,
    )
    results = [SearchResult(id=index, name=name) for index, name in enumerate(names)]
    scores = {r: selector.score(query, r).similarity for r in results}

    try:
        selected = selector.select(query, results, strict=strict)
    except MediaMatchError as e:
        code = handle_cli_error(e, "select", json_output=cli.json_output)
        raise typer.Exit(code or EXIT_MATCH_FAILURE) from e

    if cli.json_output:
        data = {
            "query": query,
            "strict": strict,
            "selected": [{"name": r.name, "similarity": scores[r]} for r in selected],
        }
        print(format_json_output("select", success=True, data=data))
        return

    table = Table(title=f"Selection for '{query}'")
    table.add_column("Name", style="cyan")
    table.add_column("Similarity", justify="right")
    for result in selected:
        table.add_row(result.name, f"{scores[result]:.2f}")
    console.print(table)
