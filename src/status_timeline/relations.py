"""Counterpart navigation between entities.

Every link may name a counterpart entity (the sovereign of a dependency,
the occupier of a territory). This module indexes those relations as a
directed multigraph, entity -> counterpart, one edge per link, so that an
entity page can list the powers it answered to and the territories it
held, and chart both on the same colors and time axis as the main chart.
"""

from typing import Iterable

import networkx as nx

from status_timeline.chart import TimelineChart
from status_timeline.config import LayoutConfig
from status_timeline.layout import Palette, TimeScale
from status_timeline.models import SOVEREIGN_RELATION, Entity, Grouping, Link, Status, is_known


class CounterpartIndex:
    """Directed index of links between entities and their counterparts."""

    def __init__(self, links: Iterable[Link]):
        self.graph = nx.MultiDiGraph()

        for link in links:
            self.graph.add_node(link.entity.id, entity=link.entity)
            if link.counterpart is None:
                continue
            if not self.graph.has_node(link.counterpart.id):
                self.graph.add_node(link.counterpart.id, entity=link.counterpart)
            self.graph.add_edge(link.entity.id, link.counterpart.id, key=link.id, link=link)

    @classmethod
    def from_grouping(cls, grouping: Grouping) -> "CounterpartIndex":
        return cls(grouping.links)

    def entity(self, entity_id: str) -> Entity | None:
        if not self.graph.has_node(entity_id):
            return None
        return self.graph.nodes[entity_id].get("entity")

    def masters_of(self, entity_id: str) -> list[Link]:
        """Links in which the entity was subject to another (its own sovereignty excluded)."""
        if not self.graph.has_node(entity_id):
            return []

        links = [
            data["link"]
            for _, target, data in self.graph.out_edges(entity_id, data=True)
            if target != entity_id and (data["link"].relation or "").lower() != SOVEREIGN_RELATION.lower()
        ]
        return sorted(links, key=_start_key)

    def subjects_of(self, entity_id: str) -> list[Link]:
        """Links in which the entity was the counterpart (territories it held)."""
        if not self.graph.has_node(entity_id):
            return []

        links = [
            data["link"]
            for source, _, data in self.graph.in_edges(entity_id, data=True)
            if source != entity_id
        ]
        return sorted(links, key=_start_key)

    def subjects_grouping(self, entity_id: str) -> Grouping:
        """Grouping of the entity's subjects, one lane per subject."""
        return Grouping.from_links(self.subjects_of(entity_id))


def _start_key(link: Link) -> float:
    return link.start if is_known(link.start) else float("inf")


def with_leading_gap(links: Iterable[Link], origin: float) -> list[Link]:
    """Prepend an "unknown" link covering origin up to the earliest start.

    Used for entity pages where the record begins after the chart origin;
    the gap is drawn in the reserved unknown color instead of left blank.
    """
    ordered = sorted(links, key=_start_key)
    if not ordered or not is_known(ordered[0].start) or ordered[0].start <= origin:
        return ordered

    first = ordered[0]
    gap = first.model_copy(
        update={
            "id": f"{first.id}:gap",
            "status": Status.unknown(),
            "start": float(origin),
            "end": first.start,
            "counterpart": None,
            "relation": None,
        }
    )
    return [gap, *ordered]


def entity_charts(
    grouping: Grouping,
    entity_id: str,
    config: LayoutConfig | None = None,
) -> tuple[TimelineChart, TimelineChart]:
    """Masters strip and subjects chart for one entity's page.

    Both charts take their colors and time axis from the whole snapshot, so
    a status looks the same here as on the main chart. The masters strip
    starts at the snapshot's first instant, with an unknown gap before the
    entity's first recorded master.
    """
    index = CounterpartIndex.from_grouping(grouping)
    entity = index.entity(entity_id)
    if entity is None:
        raise ValueError(f"Unknown entity: {entity_id}")

    config = config or LayoutConfig.from_settings()
    if config.domain is None:
        scale = TimeScale.for_grouping(
            grouping,
            (config.plot_left, config.chart_width),
            padding=config.axis_padding,
            now=config.open_end_horizon,
        )
        config = config.model_copy(update={"domain": scale.domain})
    palette = Palette.for_grouping(grouping)

    masters = with_leading_gap(index.masters_of(entity_id), config.domain[0])
    masters_chart = TimelineChart(Grouping([(entity, masters)] if masters else []), config, palette)
    subjects_chart = TimelineChart(index.subjects_grouping(entity_id), config, palette)
    return masters_chart, subjects_chart
