"""Status aggregation for the legend, and the status color palette."""

import hashlib
from collections import Counter, defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from status_timeline.layout.lanes import default_horizon, link_duration
from status_timeline.models import UNKNOWN_SLUG, Grouping

DEFAULT_PALETTE = (
    "#e6194b", "#3cb44b", "#ffe119", "#4363d8", "#f58231", "#911eb4",
    "#46f0f0", "#f032e6", "#bcf60c", "#fabebe", "#008080", "#e6beff",
    "#9a6324", "#fffac8", "#800000", "#aaffc3", "#808000", "#ffd8b1",
    "#000075", "#808080", "#ffffff", "#000000",
)

# Reserved for links without a status; not part of any palette.
UNKNOWN_COLOR = "#c8c8c8"


class LegendMode(str, Enum):
    """What the legend counts per status."""

    COUNT = "count"
    DURATION = "duration"


class Palette:
    """Deterministic status slug -> color mapping.

    Colors are assigned by position in the sorted universe of slugs, so the
    same slug gets the same color whichever subset of the data is drawn, as
    long as the palette is built from the full universe. Slugs outside the
    universe fall back to a digest of the slug.
    """

    def __init__(self, universe: Iterable[str], colors: Sequence[str] = DEFAULT_PALETTE):
        if not colors:
            raise ValueError("Palette needs at least one color")

        self.colors = tuple(colors)
        slugs = sorted({slug for slug in universe if slug != UNKNOWN_SLUG})
        self._index = {slug: i for i, slug in enumerate(slugs)}

    @classmethod
    def for_grouping(cls, grouping: Grouping, colors: Sequence[str] = DEFAULT_PALETTE) -> "Palette":
        return cls(grouping.status_universe(), colors)

    @property
    def universe(self) -> tuple[str, ...]:
        return tuple(self._index)

    def color(self, slug: str | None) -> str:
        if slug is None or slug == UNKNOWN_SLUG:
            return UNKNOWN_COLOR

        index = self._index.get(slug)
        if index is None:
            index = int(hashlib.sha1(slug.encode("utf-8")).hexdigest()[:8], 16)
        return self.colors[index % len(self.colors)]

    __call__ = color


@dataclass(frozen=True)
class LegendEntry:
    """One legend item."""

    slug: str
    label: str
    color: str
    metric: float


def aggregate_statuses(
    grouping: Grouping,
    palette: Palette,
    mode: LegendMode | str = LegendMode.COUNT,
    horizon: float | None = None,
) -> dict[str, LegendEntry]:
    """Legend entries keyed by status slug, sorted by slug.

    In count mode the metric is the number of intervals, in duration mode
    the summed years (open-ended links close at ``horizon``). Links without
    a status are gathered under the "unknown" slug.
    """
    mode = LegendMode(mode)
    labels: dict[str, str] = {}

    if mode is LegendMode.COUNT:
        metrics: dict[str, float] = Counter()
    else:
        metrics = defaultdict(float)
        if horizon is None:
            horizon = default_horizon(grouping)

    for link in grouping.links:
        slug = link.status_slug
        labels.setdefault(slug, link.status_label)
        if mode is LegendMode.COUNT:
            metrics[slug] += 1
        else:
            metrics[slug] += link_duration(link, horizon)

    return {
        slug: LegendEntry(slug=slug, label=labels[slug], color=palette.color(slug), metric=metrics[slug])
        for slug in sorted(metrics)
    }
