"""Grouping: the ordered (entity, links) snapshot a chart lays out."""

from typing import Iterable, Iterator

from status_timeline.models.entities import Entity, Link
from status_timeline.models.instants import is_known


class Grouping:
    """Ordered, read-only sequence of ``(Entity, tuple[Link, ...])`` pairs.

    A Grouping is a snapshot. Charts key their memoized layout and reset
    their interaction state on the identity of the Grouping object, so two
    groupings with the same content are still two different snapshots.
    """

    def __init__(self, pairs: Iterable[tuple[Entity, Iterable[Link]]] = ()):
        self._pairs: tuple[tuple[Entity, tuple[Link, ...]], ...] = tuple(
            (entity, tuple(links)) for entity, links in pairs
        )

    @classmethod
    def from_links(cls, links: Iterable[Link]) -> "Grouping":
        """Group links by entity id, in first-seen order."""
        entities: dict[str, Entity] = {}
        by_entity: dict[str, list[Link]] = {}

        for link in links:
            entities.setdefault(link.entity.id, link.entity)
            by_entity.setdefault(link.entity.id, []).append(link)

        return cls((entities[key], group) for key, group in by_entity.items())

    def __iter__(self) -> Iterator[tuple[Entity, tuple[Link, ...]]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __getitem__(self, index: int) -> tuple[Entity, tuple[Link, ...]]:
        return self._pairs[index]

    def __repr__(self) -> str:
        return f"Grouping({len(self._pairs)} entities, {len(self.links)} links)"

    @property
    def entities(self) -> list[Entity]:
        return [entity for entity, _ in self._pairs]

    @property
    def links(self) -> list[Link]:
        return [link for _, links in self._pairs for link in links]

    def status_universe(self) -> list[str]:
        """Every distinct status slug in the snapshot, sorted."""
        return sorted({link.status_slug for link in self.links})

    def has_open_end(self) -> bool:
        """True when some link is still ongoing (no end recorded)."""
        return any(link.end is None for link in self.links)

    def time_bounds(self) -> tuple[float, float] | None:
        """Earliest and latest known instant, or None when nothing is known.

        Entity lifespans count as well as link starts and ends.
        """
        instants = [link.start for link in self.links] + [link.end for link in self.links]
        instants += [entity.start for entity in self.entities] + [entity.end for entity in self.entities]
        instants = [value for value in instants if is_known(value)]

        if not instants:
            return None
        return min(instants), max(instants)
