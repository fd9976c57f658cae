"""Data models for entities, statuses, links and groupings."""

from status_timeline.models.entities import (
    SOVEREIGN_RELATION,
    UNKNOWN_SLUG,
    Entity,
    Link,
    Status,
)
from status_timeline.models.grouping import Grouping
from status_timeline.models.instants import format_year, is_known, to_decimal_year

__all__ = [
    "Entity",
    "Link",
    "Status",
    "Grouping",
    "UNKNOWN_SLUG",
    "SOVEREIGN_RELATION",
    "format_year",
    "is_known",
    "to_decimal_year",
]
