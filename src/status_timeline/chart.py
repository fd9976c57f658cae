"""Timeline chart session.

A TimelineChart ties the layout functions and the interaction machine
together for one rendering session. It owns its scale, palette and
interaction state; nothing is shared between charts unless passed in
explicitly: a Palette keeps colors identical across charts of different
subsets of the same data, and a fixed ``domain`` in the LayoutConfig lines
their time axes up.

Derived layout is memoized on the identity of the Grouping snapshot:
hover and filter changes reuse it, only ``set_data`` and ``resize``
invalidate it.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from status_timeline.config import LayoutConfig
from status_timeline.interaction import InteractionMachine, InteractionState, LinkActivated, Stroke
from status_timeline.layout import (
    IntervalGeometry,
    Lane,
    LegendEntry,
    Palette,
    TimeScale,
    aggregate_statuses,
    assign_lanes,
    bar_box,
    resolve_interval,
    total_height,
)
from status_timeline.models import Grouping, Link, format_year

logger = logging.getLogger(__name__)

HATCH_FILL = "hatch"


@dataclass(frozen=True)
class BarLayout:
    """Position and base color of one link's bar."""

    link: Link
    lane: int
    geometry: IntervalGeometry
    y: float
    height: float
    span: float  # drawable width, filled to the chart edge when indeterminate
    color: str

    @property
    def x(self) -> float:
        return self.geometry.x

    @property
    def indeterminate(self) -> bool:
        return self.geometry.is_indeterminate

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.span and self.y <= y <= self.y + self.height


@dataclass(frozen=True)
class ChartLayout:
    lanes: tuple[Lane, ...]
    bars: tuple[BarLayout, ...]
    legend: tuple[LegendEntry, ...]
    ticks: tuple[tuple[float, str], ...]
    width: float
    height: float
    plot_left: float
    lane_height: float
    show_entity_labels: bool


@dataclass(frozen=True)
class Tooltip:
    text: str
    x: float
    y: float
    min_width: float


@dataclass(frozen=True)
class BarView:
    bar: BarLayout
    fill: str  # a color, or HATCH_FILL
    stroke: Stroke
    dimmed: bool
    hovered: bool


@dataclass(frozen=True)
class LegendItemView:
    entry: LegendEntry
    hidden: bool


@dataclass(frozen=True)
class ChartView:
    """Everything a renderer needs for one frame."""

    layout: ChartLayout
    bars: tuple[BarView, ...]
    legend: tuple[LegendItemView, ...]
    tooltip: Tooltip | None
    filter: str | None


@dataclass(frozen=True)
class _Derived:
    """Per-snapshot results that do not depend on the chart width."""

    lanes: tuple[Lane, ...]
    legend: tuple[LegendEntry, ...]
    palette: Palette
    scale: TimeScale


class TimelineChart:
    """Layout and interaction for one chart of a Grouping."""

    def __init__(
        self,
        grouping: Grouping,
        config: LayoutConfig | None = None,
        palette: Palette | None = None,
    ):
        self.config = config or LayoutConfig.from_settings()
        self.machine = InteractionMachine()
        self._palette = palette
        self._grouping: Grouping | None = None
        self._derived: _Derived | None = None
        self._layout: ChartLayout | None = None
        self.set_data(grouping)

    @property
    def grouping(self) -> Grouping:
        return self._grouping

    @property
    def state(self) -> InteractionState:
        return self.machine.state

    @property
    def scale(self) -> TimeScale:
        return self._get_derived().scale

    @property
    def palette(self) -> Palette:
        return self._get_derived().palette

    def set_data(self, grouping: Grouping) -> None:
        """Swap in a new snapshot; interaction state is reset with it."""
        if grouping is self._grouping:
            return

        self._grouping = grouping
        self._derived = None
        self._layout = None
        self.machine.bind(grouping)
        logger.debug("Chart data set to %r", grouping)

    def resize(self, chart_width: float) -> None:
        """Change the chart width; lanes and legend are kept, bars are re-placed."""
        self.config = LayoutConfig.model_validate({**self.config.model_dump(), "chart_width": chart_width})
        self._layout = None
        if self._derived is not None:
            self._derived.scale.set_range(self.config.plot_left, chart_width)

    # Layout

    def _get_derived(self) -> _Derived:
        if self._derived is None:
            config = self.config
            grouping = self._grouping
            logger.debug("Computing lanes and legend for %r", grouping)

            palette = self._palette or Palette.for_grouping(grouping)
            lanes = assign_lanes(grouping, config.ordering, config.lane_height)
            legend = tuple(aggregate_statuses(grouping, palette, config.legend_mode).values())
            range_ = (config.plot_left, config.chart_width)
            if config.domain is not None:
                scale = TimeScale(config.domain, range_)
            else:
                scale = TimeScale.for_grouping(
                    grouping, range_, padding=config.axis_padding, now=config.open_end_horizon
                )
            self._derived = _Derived(lanes=lanes, legend=legend, palette=palette, scale=scale)
        return self._derived

    def layout(self) -> ChartLayout:
        """Geometry of the current snapshot (memoized)."""
        if self._layout is None:
            self._layout = self._compute_layout()
        return self._layout

    def _compute_layout(self) -> ChartLayout:
        config = self.config
        derived = self._get_derived()
        scale = derived.scale

        bars = []
        for lane in derived.lanes:
            y, height = bar_box(lane.index, config.lane_height, config.bar_fraction)
            for link in lane.links:
                geometry = resolve_interval(link, scale, config.minimum_interval_width)
                bars.append(
                    BarLayout(
                        link=link,
                        lane=lane.index,
                        geometry=geometry,
                        y=y,
                        height=height,
                        span=geometry.span(config.chart_width),
                        color=derived.palette.color(link.status_slug),
                    )
                )

        ticks = ()
        if derived.lanes:
            ticks = tuple((scale(t), format_year(t)) for t in scale.ticks(config.tick_count))

        return ChartLayout(
            lanes=derived.lanes,
            bars=tuple(bars),
            legend=derived.legend,
            ticks=ticks,
            width=config.chart_width,
            height=total_height(derived.lanes, config.lane_height),
            plot_left=config.plot_left,
            lane_height=config.lane_height,
            show_entity_labels=config.show_entity_labels,
        )

    def bar_for(self, link: Link) -> BarLayout | None:
        for bar in self.layout().bars:
            if bar.link is link:
                return bar
        return None

    def hit_test(self, x: float, y: float) -> Link | None:
        """Topmost link whose bar contains the pixel, if any."""
        for bar in reversed(self.layout().bars):
            if bar.contains(x, y):
                return bar.link
        return None

    # Interaction

    def pointer_enter(self, link: Link) -> InteractionState:
        return self.machine.pointer_enter(link)

    def pointer_leave(self) -> InteractionState:
        return self.machine.pointer_leave()

    def pointer_move(self, x: float | None, y: float | None) -> InteractionState:
        """Hover whatever bar is under the pointer; None coordinates mean it left the chart."""
        link = None if x is None or y is None else self.hit_test(x, y)
        if link is None:
            if self.state.hover is None:
                return self.state
            return self.machine.pointer_leave()
        if link is self.state.hover:
            return self.state
        return self.machine.pointer_enter(link)

    def click_legend_item(self, slug: str) -> InteractionState:
        return self.machine.click_legend_item(slug)

    def activate(self, link: Link) -> LinkActivated:
        return self.machine.activate(link)

    def on_link_activated(self, listener: Callable[[LinkActivated], None]) -> Callable[[], None]:
        return self.machine.on_link_activated(listener)

    def subscribe(self, listener: Callable[[InteractionState], None]) -> Callable[[], None]:
        return self.machine.subscribe(listener)

    # View

    def tooltip(self) -> Tooltip | None:
        link = self.state.hover
        if link is None:
            return None

        bar = self.bar_for(link)
        if bar is None:
            return None

        name = link.entity.name
        text = f"{name} was a {link.status_label} from {format_year(link.start)} to {format_year(link.end)}"
        lane_top = bar.lane * self.config.lane_height
        return Tooltip(text=text, x=bar.x, y=lane_top + self.config.lane_height, min_width=bar.span)

    def view(self) -> ChartView:
        """Layout combined with the current hover/filter state."""
        layout = self.layout()
        machine = self.machine

        bars = tuple(
            BarView(
                bar=bar,
                fill=HATCH_FILL if bar.indeterminate else bar.color,
                stroke=machine.stroke_for(bar.link),
                dimmed=machine.is_dimmed(bar.link.status_slug),
                hovered=machine.is_hovered(bar.link),
            )
            for bar in layout.bars
        )
        legend = tuple(
            LegendItemView(entry=entry, hidden=machine.is_dimmed(entry.slug))
            for entry in layout.legend
        )
        return ChartView(
            layout=layout,
            bars=bars,
            legend=legend,
            tooltip=self.tooltip(),
            filter=self.state.filter,
        )
