"""Draw a ChartView with matplotlib.

The renderer owns presentation only: margins, fonts, the hatch used for
indeterminate bars. Every position comes from the ChartView.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from matplotlib.colors import to_rgb, to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from status_timeline.chart import HATCH_FILL, ChartView, TimelineChart
from status_timeline.layout import LegendEntry

logger = logging.getLogger(__name__)

LEGEND_HEIGHT = 40
AXIS_HEIGHT = 30
DIM_ALPHA = 0.2
HATCH = "////"


@dataclass(frozen=True)
class LegendBox:
    slug: str
    text: str
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


def format_metric(metric: float) -> str:
    if float(metric).is_integer():
        return f"{int(metric):,}"
    return f"{metric:,.1f}"


def legend_boxes(entries: Sequence[LegendEntry]) -> list[LegendBox]:
    """Left-to-right legend buttons above the lanes (negative y)."""
    boxes = []
    x = 4.0
    for entry in entries:
        text = f"{entry.label} : {format_metric(entry.metric)}"
        width = 7.0 * len(text) + 12
        boxes.append(LegendBox(entry.slug, text, x, -LEGEND_HEIGHT + 8, width, 22))
        x += width + 6
    return boxes


def _text_color(background: str) -> str:
    r, g, b = to_rgb(background)
    return "black" if 0.299 * r + 0.587 * g + 0.114 * b > 0.5 else "white"


def draw_view(figure: Figure, view: ChartView, dpi: int = 100) -> Figure:
    """Draw the view into an existing figure, replacing its content."""
    layout = view.layout
    figure.clear()
    figure.set_dpi(dpi)
    figure.set_size_inches(
        layout.width / dpi,
        (LEGEND_HEIGHT + layout.height + AXIS_HEIGHT) / dpi,
    )

    ax = figure.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height + AXIS_HEIGHT, -LEGEND_HEIGHT)
    ax.set_axis_off()

    # Legend
    for box, item in zip(legend_boxes([item.entry for item in view.legend]), view.legend):
        alpha = DIM_ALPHA if item.hidden else 1.0
        ax.add_patch(
            Rectangle(
                (box.x, box.y), box.width, box.height,
                facecolor=to_rgba(item.entry.color, alpha),
                edgecolor=to_rgba("black", 0.3 * alpha),
            )
        )
        ax.text(
            box.x + 6, box.y + box.height / 2, box.text,
            va="center", fontsize=8, color=_text_color(item.entry.color), alpha=alpha,
        )

    # Lanes
    font_size = layout.lane_height * 0.6 * 72 / dpi
    for lane in layout.lanes:
        ax.hlines(lane.y, 0, layout.width, colors="black", alpha=0.1, linewidth=1)
        if layout.show_entity_labels:
            max_chars = max(1, int(layout.plot_left / (layout.lane_height * 0.35)))
            ax.text(4, lane.y + lane.height / 2, lane.entity.name[:max_chars], va="center", fontsize=font_size)

    # Bars
    for bar_view in view.bars:
        bar = bar_view.bar
        alpha = DIM_ALPHA if bar_view.dimmed else 1.0
        stroke = bar_view.stroke
        edge = to_rgba(stroke.color, stroke.opacity * alpha)

        if bar_view.fill == HATCH_FILL:
            ax.add_patch(
                Rectangle(
                    (bar.x, bar.y), bar.span, bar.height,
                    facecolor="none", edgecolor=to_rgba("black", alpha), hatch=HATCH, linewidth=0,
                )
            )
            face = "none"
        else:
            face = to_rgba(bar_view.fill, alpha)

        ax.add_patch(
            Rectangle((bar.x, bar.y), bar.span, bar.height, facecolor=face, edgecolor=edge, linewidth=stroke.width)
        )

    # Axis
    ax.hlines(layout.height, layout.plot_left, layout.width, colors="black", linewidth=1)
    for x, label in layout.ticks:
        ax.vlines(x, layout.height, layout.height + 6, colors="black", linewidth=1)
        ax.text(x, layout.height + 8, label, ha="center", va="top", fontsize=8)

    # Tooltip
    if view.tooltip is not None:
        ax.text(
            view.tooltip.x, view.tooltip.y + 4, view.tooltip.text,
            ha="left", va="top", fontsize=8,
            bbox={"boxstyle": "round", "facecolor": "white", "alpha": 0.9},
        )

    return figure


def render_chart(view: ChartView, path: Path | str | None = None, dpi: int = 100) -> Figure:
    """Render a view to a new figure, saving it when a path is given."""
    figure = draw_view(Figure(), view, dpi=dpi)
    if path is not None:
        figure.savefig(path, dpi=dpi)
        logger.info("Chart written to %s", path)
    return figure


class ChartInteraction:
    """Routes matplotlib mouse events to a TimelineChart and redraws on change."""

    def __init__(self, chart: TimelineChart, figure: Figure, dpi: int = 100):
        self.chart = chart
        self.figure = figure
        self.dpi = dpi
        self._unsubscribe: Callable[[], None] = chart.subscribe(lambda state: self.redraw())
        self._cids: list[int] = []

    def connect(self) -> list[int]:
        canvas = self.figure.canvas
        self._cids = [
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("figure_leave_event", self.on_leave),
        ]
        return self._cids

    def disconnect(self) -> None:
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []
        self._unsubscribe()

    def redraw(self) -> None:
        draw_view(self.figure, self.chart.view(), dpi=self.dpi)
        self.figure.canvas.draw_idle()

    def on_motion(self, event) -> None:
        if event.inaxes is None or event.xdata is None or event.ydata is None:
            self.chart.pointer_move(None, None)
        else:
            self.chart.pointer_move(event.xdata, event.ydata)

    def on_leave(self, event) -> None:
        self.chart.pointer_leave()

    def on_press(self, event) -> None:
        if event.xdata is None or event.ydata is None:
            return

        if event.ydata < 0:
            for box in legend_boxes(self.chart.layout().legend):
                if box.contains(event.xdata, event.ydata):
                    self.chart.click_legend_item(box.slug)
                    return
            return

        link = self.chart.hit_test(event.xdata, event.ydata)
        if link is not None:
            self.chart.activate(link)
