"""Command-line interface for Status Timeline."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from status_timeline import __version__

console = Console()

ORDERINGS = click.Choice(["byDuration", "byStartDate"])


def _configure_logging(verbose: bool) -> None:
    from status_timeline.config import get_settings

    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _load(snapshot: str):
    from status_timeline.ingest import load_grouping

    try:
        return load_grouping(Path(snapshot))
    except ValueError as e:
        console.print(f"[red]Cannot load {snapshot}:[/red] {e}")
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Status Timeline - lay out historical status intervals as lanes."""
    _configure_logging(verbose)


@main.command()
@click.argument("snapshot", type=click.Path(exists=True))
@click.option("--ordering", "-r", type=ORDERINGS, help="Lane ordering (default from settings)")
def lanes(snapshot: str, ordering: str | None) -> None:
    """Show lane order for a snapshot."""
    from status_timeline.config import LayoutConfig
    from status_timeline.layout import assign_lanes, coverage_duration, default_horizon, earliest_start
    from status_timeline.models import format_year

    grouping = _load(snapshot)
    config = LayoutConfig.from_settings(ordering=ordering)
    horizon = default_horizon(grouping)

    table = Table(title=f"Lanes ({config.ordering.value})")
    table.add_column("#", justify="right")
    table.add_column("Entity", style="cyan")
    table.add_column("Links", justify="right")
    table.add_column("Coverage (years)", style="green", justify="right")
    table.add_column("Earliest start", justify="right")

    for lane in assign_lanes(grouping, config.ordering, config.lane_height):
        table.add_row(
            str(lane.index),
            lane.entity.name,
            str(len(lane.links)),
            f"{coverage_duration(lane.links, horizon):,.1f}",
            format_year(earliest_start(lane.links)),
        )

    console.print(table)
    if not len(grouping):
        console.print("[yellow]Snapshot is empty[/yellow]")


@main.command()
@click.argument("snapshot", type=click.Path(exists=True))
@click.option("--mode", "-m", type=click.Choice(["count", "duration"]), default="count")
def legend(snapshot: str, mode: str) -> None:
    """Show statuses with their colors and counts (or durations)."""
    from status_timeline.layout import Palette, aggregate_statuses
    from status_timeline.render.figure import format_metric

    grouping = _load(snapshot)
    entries = aggregate_statuses(grouping, Palette.for_grouping(grouping), mode)

    table = Table(title="Statuses")
    table.add_column("Status", style="cyan")
    table.add_column("Label")
    table.add_column("Color")
    table.add_column("Intervals" if mode == "count" else "Years", style="green", justify="right")

    for entry in entries.values():
        table.add_row(entry.slug, entry.label, f"[on {entry.color}]   [/] {entry.color}", format_metric(entry.metric))

    console.print(table)


@main.command()
@click.argument("snapshot", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), required=True, help="Image file (png, svg, pdf)")
@click.option("--ordering", "-r", type=ORDERINGS, help="Lane ordering")
@click.option("--width", "-w", type=float, help="Chart width in pixels")
@click.option("--lane-height", type=float, help="Lane height in pixels")
@click.option("--min-width", type=float, help="Minimum bar width in pixels")
@click.option("--hide-labels", is_flag=True, help="Do not reserve a column for entity names")
@click.option("--filter", "-f", "status_filter", help="Highlight one status slug")
def render(
    snapshot: str,
    output: str,
    ordering: str | None,
    width: float | None,
    lane_height: float | None,
    min_width: float | None,
    hide_labels: bool,
    status_filter: str | None,
) -> None:
    """Render a snapshot to an image."""
    from status_timeline.chart import TimelineChart
    from status_timeline.config import LayoutConfig, get_settings
    from status_timeline.render import render_chart

    grouping = _load(snapshot)

    try:
        config = LayoutConfig.from_settings(
            ordering=ordering,
            chart_width=width,
            lane_height=lane_height,
            minimum_interval_width=min_width,
            show_entity_labels=False if hide_labels else None,
        )
    except ValueError as e:
        console.print(f"[red]Invalid layout options:[/red] {e}")
        raise SystemExit(1)

    chart = TimelineChart(grouping, config)
    if status_filter:
        chart.click_legend_item(status_filter)

    with console.status("Rendering chart..."):
        render_chart(chart.view(), output, dpi=get_settings().dpi)

    layout = chart.layout()
    console.print(f"[green]OK[/green] {len(layout.lanes)} lanes, {len(layout.bars)} bars")
    console.print(f"[green]OK[/green] Chart saved to {output}")


@main.command()
@click.argument("snapshot", type=click.Path(exists=True))
@click.argument("entity_id")
@click.option("--output", "-o", type=click.Path(), help="Render the entity's subjects as a chart")
@click.option("--masters-output", "-m", type=click.Path(), help="Render the entity's masters as a one-lane strip")
def entity(snapshot: str, entity_id: str, output: str | None, masters_output: str | None) -> None:
    """Show the powers an entity answered to and the territories it held."""
    from status_timeline.models import format_year
    from status_timeline.relations import CounterpartIndex, entity_charts

    grouping = _load(snapshot)
    index = CounterpartIndex.from_grouping(grouping)

    found = index.entity(entity_id)
    if found is None:
        console.print(f"[red]Unknown entity:[/red] {entity_id}")
        raise SystemExit(1)

    console.print(f"[bold]{found.name}[/bold]\n")

    console.print("[bold]Territory masters:[/bold]")
    for link in index.masters_of(entity_id):
        console.print(
            f"  {link.relation or link.status_label} {link.counterpart.name} "
            f"[dim]({format_year(link.start)} - {format_year(link.end)})[/dim]"
        )

    subjects = index.subjects_of(entity_id)
    console.print("\n[bold]Held territories:[/bold]")
    for link in subjects:
        console.print(
            f"  {link.relation or link.status_label} {link.entity.name} "
            f"[dim]({format_year(link.start)} - {format_year(link.end)})[/dim]"
        )

    if output or masters_output:
        from status_timeline.config import get_settings
        from status_timeline.render import render_chart

        masters_chart, subjects_chart = entity_charts(grouping, entity_id)
        console.print()
        for chart, path in ((subjects_chart, output), (masters_chart, masters_output)):
            if path:
                render_chart(chart.view(), path, dpi=get_settings().dpi)
                console.print(f"[green]OK[/green] Chart saved to {path}")


if __name__ == "__main__":
    main()
