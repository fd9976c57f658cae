"""Shared fixtures for timeline tests."""

import itertools

import pytest

from status_timeline.config import LayoutConfig
from status_timeline.models import Entity, Grouping, Link, Status

STATUSES = {
    "sovereign": Status(slug="sovereign", label="Sovereign"),
    "occupied": Status(slug="occupied", label="Occupied"),
    "colony": Status(slug="colony", label="Colony"),
    "independent": Status(slug="independent", label="Independent"),
}


@pytest.fixture
def make_link():
    """Factory for links: make_link(entity, start, end=None, status="sovereign", ...)."""
    counter = itertools.count(1)

    def factory(
        entity: Entity,
        start,
        end=None,
        status: str | None = "sovereign",
        counterpart: Entity | None = None,
        relation: str | None = None,
    ) -> Link:
        return Link(
            id=f"link-{next(counter)}",
            entity=entity,
            status=STATUSES.get(status, Status(slug=status, label=status.title())) if status else None,
            start=start,
            end=end,
            counterpart=counterpart,
            relation=relation,
        )

    return factory


@pytest.fixture
def entities() -> dict[str, Entity]:
    return {
        key: Entity(id=key, name=name)
        for key, name in [
            ("A", "Aland"),
            ("B", "Borduria"),
            ("C", "Carpania"),
            ("X", "Xland"),
        ]
    }


@pytest.fixture
def config() -> LayoutConfig:
    """Explicit layout config, independent of environment settings."""
    return LayoutConfig(
        lane_height=20,
        minimum_interval_width=2,
        chart_width=1000,
        show_entity_labels=False,
        ordering="byDuration",
        now=2000,
    )


@pytest.fixture
def scenario(entities, make_link) -> Grouping:
    """Xland: sovereign 1900-1950, then occupied from 1950 with no known end."""
    x = entities["X"]
    return Grouping(
        [
            (
                x,
                [
                    make_link(x, 1900, 1950, "sovereign"),
                    make_link(x, 1950, None, "occupied"),
                ],
            )
        ]
    )
