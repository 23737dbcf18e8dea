#!/usr/bin/env python3
"""
Terminal front-end for the commglass search engine.

Usage:
    commglass search "query"                 - Search the inbox
    commglass search -p high -P slack        - Filter by facets only
    commglass search --preset "Design & UX"  - Apply a filter preset
    commglass presets                        - List filter presets
    commglass suggest -d today               - Show smart suggestions
"""

from pathlib import Path
from typing import Optional, Sequence, Tuple, Type

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from ..engine.config import Config
from ..engine.dataset import load_dataset
from ..engine.errors import CommGlassError, UnknownFacetValueError
from ..engine.logging_setup import configure_logging
from ..engine.models import ContentRecord, ContentType, DateRange, FacetEnum, Platform, Priority
from ..engine.presets import QUICK_FILTER_PRESETS, find_preset, load_presets
from ..engine.search import SearchFilterEngine
from ..engine.suggestions import icon_for_suggestion

console = Console()

PRIORITY_STYLES = {Priority.HIGH: "red", Priority.MEDIUM: "yellow", Priority.LOW: "green"}


def _facet(enum_cls: Type[FacetEnum]):
    """Click callback converting repeated option values into enum members."""
    def convert(ctx, param, values):
        if values is None:
            return values
        try:
            if isinstance(values, tuple):
                return tuple(enum_cls.parse(v) for v in values)
            return enum_cls.parse(values)
        except UnknownFacetValueError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param)
    return convert


def _choices(enum_cls: Type[FacetEnum]) -> str:
    return ", ".join(m.value for m in enum_cls)


def facet_options(func):
    """Shared facet options for commands that drive the engine."""
    options = [
        click.option("--priority", "-p", "priorities", multiple=True,
                     callback=_facet(Priority), help=f"Priority filter ({_choices(Priority)})"),
        click.option("--platform", "-P", "platforms", multiple=True,
                     callback=_facet(Platform), help=f"Platform filter ({_choices(Platform)})"),
        click.option("--type", "-t", "content_types", multiple=True,
                     callback=_facet(ContentType), help=f"Content type filter ({_choices(ContentType)})"),
        click.option("--date", "-d", "date_range", default=None,
                     callback=_facet(DateRange), help=f"Date range ({_choices(DateRange)})"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, path_type=Path),
              help="Config file path")
@click.option("--dataset", type=click.Path(exists=True, path_type=Path),
              help="YAML dataset to search instead of the built-in inbox")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path: Optional[Path], dataset: Optional[Path], verbose: bool):
    """commglass - unified inbox search."""
    try:
        config = Config.load(config_path)
    except CommGlassError as e:
        raise click.ClickException(str(e))

    configure_logging("DEBUG" if verbose else config.logging.level, config.logging.file)
    if dataset is not None:
        config.data.dataset_path = dataset
    ctx.obj = config


def build_engine(config: Config) -> SearchFilterEngine:
    """Create an engine from configuration."""
    content = None
    presets = QUICK_FILTER_PRESETS
    try:
        if config.data.dataset_path is not None:
            content = load_dataset(config.data.dataset_path)
        if config.data.presets_path is not None:
            presets = load_presets(config.data.presets_path)
    except CommGlassError as e:
        raise click.ClickException(str(e))

    return SearchFilterEngine(
        content=content,
        presets=presets,
        suggestion_limit=config.search.suggestion_limit,
        group_min_results=config.search.group_min_results,
    )


def apply_facets(
    engine: SearchFilterEngine,
    priorities: Sequence[Priority],
    platforms: Sequence[Platform],
    content_types: Sequence[ContentType],
    date_range: Optional[DateRange]
) -> None:
    """Add facet selections on top of whatever is already selected."""
    for priority in set(priorities) - engine.selected_priorities:
        engine.toggle_priority(priority)
    for platform in set(platforms) - engine.selected_platforms:
        engine.toggle_platform(platform)
    for content_type in set(content_types) - engine.selected_content_types:
        engine.toggle_content_type(content_type)
    if date_range is not None:
        engine.set_date_range(date_range)


@cli.command()
@click.argument("query", required=False, default="")
@facet_options
@click.option("--preset", help="Apply a named filter preset first")
@click.option("--pill", help="Lock a suggestion pill as the query")
@click.pass_obj
def search(
    config: Config,
    query: str,
    priorities: Tuple[Priority, ...],
    platforms: Tuple[Platform, ...],
    content_types: Tuple[ContentType, ...],
    date_range: Optional[DateRange],
    preset: Optional[str],
    pill: Optional[str]
):
    """Search the inbox by text and facets."""
    engine = build_engine(config)

    if preset:
        try:
            engine.apply_filter_preset(find_preset(preset, engine.quick_filter_presets))
        except CommGlassError as e:
            raise click.ClickException(str(e))
    apply_facets(engine, priorities, platforms, content_types, date_range)
    if pill:
        engine.set_selected_pill(pill)
    if query:
        engine.set_query_text(query)

    logger.debug(f"Engine state: {engine.snapshot()}")
    display_search_results(engine)


def _results_table(title: str, records: Sequence[ContentRecord]) -> Table:
    table = Table(title=title)
    table.add_column("Priority")
    table.add_column("Platform", style="magenta")
    table.add_column("Type", style="blue")
    table.add_column("Title", style="cyan", no_wrap=False)
    table.add_column("When", justify="right")
    table.add_column("Open", justify="right")

    for r in records:
        style = PRIORITY_STYLES[r.priority]
        table.add_row(
            f"[{style}]{r.priority.label}[/{style}]",
            r.platform.label,
            r.type.label,
            r.title,
            r.timestamp_label,
            str(r.pending_action_count),
        )
    return table


def display_search_results(engine: SearchFilterEngine) -> None:
    """Display results as one table, or one table per group."""
    if not engine.is_searching:
        console.print(f"[dim]{engine.smart_placeholder}[/dim]")
        console.print("[yellow]Nothing to search: give a query or a filter[/yellow]")
        return

    if not engine.results:
        console.print("[yellow]No results found[/yellow]")
        console.print("Try adjusting your search terms or filters")
        return

    summary = engine.summary()
    header = f"[bold]Search Results[/bold]  {summary.result_count}"
    if summary.organized_by:
        header += f"  [dim]{summary.organized_by}, {summary.group_count}[/dim]"
    console.print(header)

    groups = engine.grouped_results
    if groups:
        for label, records in groups:
            console.print(_results_table(f"{label} ({len(records)})", records))
    else:
        console.print(_results_table("", engine.results))


@cli.command()
@click.pass_obj
def presets(config: Config):
    """List the quick filter presets."""
    engine = build_engine(config)

    table = Table(title="Filter Presets")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Priorities")
    table.add_column("Platforms")
    table.add_column("Types")
    table.add_column("Date")
    table.add_column("Terms")

    for preset in engine.quick_filter_presets:
        table.add_row(
            preset.name,
            ", ".join(p.label for p in preset.priorities) or "-",
            ", ".join(p.label for p in preset.platforms) or "-",
            ", ".join(t.label for t in preset.content_types) or "-",
            preset.date_range.label,
            preset.query_text or "-",
        )
    console.print(table)


@cli.command()
@facet_options
@click.pass_obj
def suggest(
    config: Config,
    priorities: Tuple[Priority, ...],
    platforms: Tuple[Platform, ...],
    content_types: Tuple[ContentType, ...],
    date_range: Optional[DateRange]
):
    """Show search suggestions for a facet selection."""
    engine = build_engine(config)
    apply_facets(engine, priorities, platforms, content_types, date_range)

    console.print(f"[dim]{engine.smart_placeholder}[/dim]\n")

    sections = [
        ("Smart Suggestions", engine.smart_suggestions),
        ("Recent", engine.recent_searches),
        ("Popular", engine.popular_searches),
    ]
    for title, items in sections:
        if not items:
            continue
        console.print(f"[bold]{title}:[/bold]")
        for item in items:
            console.print(f"  • {item} [dim]({icon_for_suggestion(item)})[/dim]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
