"""Pixel geometry of a single interval."""

import logging
import math
from dataclasses import dataclass
from typing import Literal, Union

from status_timeline.layout.scale import TimeScale
from status_timeline.models import Link

logger = logging.getLogger(__name__)

INDETERMINATE = "indeterminate"

Width = Union[float, Literal["indeterminate"]]


@dataclass(frozen=True)
class IntervalGeometry:
    """Horizontal placement of one bar.

    ``width`` is either a pixel width or ``INDETERMINATE`` when the end of
    the interval is unknown or unusable. Indeterminate bars are drawn with a
    hatch pattern and stretch to the right edge of the chart.
    """

    x: float
    width: Width

    @property
    def is_indeterminate(self) -> bool:
        return self.width == INDETERMINATE

    def span(self, right_edge: float) -> float:
        """Drawable width, never past right_edge.

        Indeterminate bars take all the room left up to the edge.
        """
        room = max(0.0, right_edge - self.x)
        if self.is_indeterminate:
            return room
        return min(self.width, room)


def resolve_interval(link: Link, scale: TimeScale, min_width: float) -> IntervalGeometry:
    """Compute x and width of a link's bar.

    Determinate widths are floored at ``min_width`` so that very short
    intervals stay visible and clickable; this overstates their length on
    screen and is intended.
    """
    x = scale(link.start)
    if not math.isfinite(x):
        logger.debug("Link %s has no usable start, placing at range start", link.id)
        return IntervalGeometry(x=min(scale.range), width=INDETERMINATE)

    if link.end is None:
        return IntervalGeometry(x=x, width=INDETERMINATE)

    raw_width = scale(link.end) - x
    if not math.isfinite(raw_width) or link.end < link.start:
        logger.debug("Link %s has an unusable end (%r), width is indeterminate", link.id, link.end)
        return IntervalGeometry(x=x, width=INDETERMINATE)

    return IntervalGeometry(x=x, width=max(min_width, raw_width))


def bar_box(lane_index: int, lane_height: float, bar_fraction: float) -> tuple[float, float]:
    """Top y and height of a bar, vertically centered in its lane."""
    bar_height = bar_fraction * lane_height
    margin = (lane_height - bar_height) / 2
    return lane_index * lane_height + margin, bar_height
