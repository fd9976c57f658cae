"""Interaction state, the events that change it, and the transition function.

The state holds two things only: the hovered link (for the tooltip) and the
legend filter (for dimming). Everything visual is derived from it.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Union

from status_timeline.models import Grouping, Link


@dataclass(frozen=True)
class InteractionState:
    hover: Optional[Link] = None
    filter: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.hover is None and self.filter is None


@dataclass(frozen=True)
class PointerEnter:
    """Pointer moved onto a bar."""
    link: Link


@dataclass(frozen=True)
class PointerLeave:
    """Pointer left a bar or the chart area."""


@dataclass(frozen=True)
class LegendClick:
    """A legend item was clicked."""
    slug: str


@dataclass(frozen=True)
class DatasetChanged:
    """A new Grouping snapshot replaced the previous one."""
    grouping: Optional[Grouping] = field(default=None, compare=False)


@dataclass(frozen=True)
class LinkActivated:
    """A bar was selected; consumed by navigation, never changes state."""
    link: Link


InteractionEvent = Union[PointerEnter, PointerLeave, LegendClick, DatasetChanged]


def transition(state: InteractionState, event: InteractionEvent) -> InteractionState:
    """Pure reducer: state after applying one event."""
    if isinstance(event, PointerEnter):
        return replace(state, hover=event.link)
    if isinstance(event, PointerLeave):
        return replace(state, hover=None)
    if isinstance(event, LegendClick):
        return replace(state, filter=None if state.filter == event.slug else event.slug)
    if isinstance(event, DatasetChanged):
        return InteractionState()
    raise TypeError(f"Unknown interaction event: {event!r}")
