"""
Layout Module

Pure, synchronous functions that turn a Grouping into chart geometry:
- TimeScale: instant <-> pixel mapping shared by all lanes
- resolve_interval: bar x and width, with a minimum width and an
  "indeterminate" width for unknown ends
- assign_lanes: one lane per entity, ordered by coverage or start date
- aggregate_statuses / Palette: legend metrics and stable status colors
"""

from .geometry import INDETERMINATE, IntervalGeometry, bar_box, resolve_interval
from .lanes import (
    Lane,
    Ordering,
    assign_lanes,
    coverage_duration,
    default_horizon,
    earliest_start,
    link_duration,
    order_grouping,
    total_height,
)
from .legend import DEFAULT_PALETTE, UNKNOWN_COLOR, LegendEntry, LegendMode, Palette, aggregate_statuses
from .scale import TimeScale, nice_step

__all__ = [
    "TimeScale",
    "nice_step",
    "INDETERMINATE",
    "IntervalGeometry",
    "resolve_interval",
    "bar_box",
    "Lane",
    "Ordering",
    "assign_lanes",
    "order_grouping",
    "coverage_duration",
    "earliest_start",
    "link_duration",
    "default_horizon",
    "total_height",
    "DEFAULT_PALETTE",
    "UNKNOWN_COLOR",
    "LegendEntry",
    "LegendMode",
    "Palette",
    "aggregate_statuses",
]
