"""Lane assignment: one horizontal lane per entity, in a chosen order."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from status_timeline.models import Entity, Grouping, Link, is_known


class Ordering(str, Enum):
    """How lanes are ordered top to bottom."""

    BY_DURATION = "byDuration"
    BY_START_DATE = "byStartDate"


@dataclass(frozen=True)
class Lane:
    """One row of the chart."""

    index: int
    entity: Entity
    links: tuple[Link, ...]
    y: float
    height: float


def default_horizon(grouping: Grouping) -> float | None:
    """Latest known instant of the grouping, used to close open-ended links."""
    bounds = grouping.time_bounds()
    return bounds[1] if bounds else None


def link_duration(link: Link, horizon: float | None = None) -> float:
    """Length of a link in years.

    An absent end is closed at ``horizon`` (zero when there is no horizon).
    Inverted or unreadable intervals count as zero.
    """
    end = link.end if link.end is not None else horizon
    if end is None:
        return 0.0

    duration = end - link.start
    if not math.isfinite(duration) or duration < 0:
        return 0.0
    return duration


def coverage_duration(links: Iterable[Link], horizon: float | None = None) -> float:
    """Total years covered by an entity's links (overlaps are counted twice)."""
    return sum(link_duration(link, horizon) for link in links)


def earliest_start(links: Iterable[Link]) -> float:
    """Minimum known start, or +inf when the entity has none."""
    starts = [link.start for link in links if is_known(link.start)]
    return min(starts) if starts else math.inf


def order_grouping(
    grouping: Grouping,
    ordering: Ordering | str,
    horizon: float | None = None,
) -> Grouping:
    """Return a new Grouping in display order.

    byDuration sorts by coverage, longest first; byStartDate sorts by the
    earliest start, oldest first. Python's sort is stable, so ties keep the
    input order.
    """
    ordering = Ordering(ordering)

    if ordering is Ordering.BY_DURATION:
        if horizon is None:
            horizon = default_horizon(grouping)
        pairs = sorted(grouping, key=lambda pair: -coverage_duration(pair[1], horizon))
    else:
        pairs = sorted(grouping, key=lambda pair: earliest_start(pair[1]))

    return Grouping(pairs)


def assign_lanes(
    grouping: Grouping,
    ordering: Ordering | str,
    lane_height: float,
    horizon: float | None = None,
) -> tuple[Lane, ...]:
    """Order the grouping and give each entity a lane at ``index * lane_height``."""
    ordered = order_grouping(grouping, ordering, horizon)
    return tuple(
        Lane(index=index, entity=entity, links=links, y=index * lane_height, height=lane_height)
        for index, (entity, links) in enumerate(ordered)
    )


def total_height(lanes: tuple[Lane, ...], lane_height: float) -> float:
    return len(lanes) * lane_height
