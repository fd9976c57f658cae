"""Matplotlib rendering of timeline charts."""

from status_timeline.render.figure import ChartInteraction, draw_view, legend_boxes, render_chart

__all__ = ["ChartInteraction", "draw_view", "legend_boxes", "render_chart"]
