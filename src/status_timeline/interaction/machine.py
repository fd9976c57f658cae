"""Stateful wrapper around the interaction reducer."""

import logging
from dataclasses import dataclass
from typing import Callable

from status_timeline.interaction.state import (
    DatasetChanged,
    InteractionEvent,
    InteractionState,
    LegendClick,
    LinkActivated,
    PointerEnter,
    PointerLeave,
    transition,
)
from status_timeline.models import Grouping, Link

logger = logging.getLogger(__name__)

StateListener = Callable[[InteractionState], None]
ActivationListener = Callable[[LinkActivated], None]


@dataclass(frozen=True)
class Stroke:
    """Outline of a bar."""

    color: str
    opacity: float
    width: float


HOVER_STROKE = Stroke(color="white", opacity=1.0, width=2.0)
DEFAULT_STROKE = Stroke(color="black", opacity=0.2, width=1.0)


class InteractionMachine:
    """Holds the hover/filter state of one chart.

    All transitions are synchronous. Listeners are called after every
    change, in subscription order, with the new state.
    """

    def __init__(self, grouping: Grouping | None = None):
        self._state = InteractionState()
        self._grouping = grouping
        self._listeners: list[StateListener] = []
        self._activation_listeners: list[ActivationListener] = []

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def grouping(self) -> Grouping | None:
        return self._grouping

    def dispatch(self, event: InteractionEvent) -> InteractionState:
        previous = self._state
        self._state = transition(previous, event)

        changed = self._state.hover is not previous.hover or self._state.filter != previous.filter
        if changed:
            for listener in list(self._listeners):
                listener(self._state)
        return self._state

    def pointer_enter(self, link: Link) -> InteractionState:
        return self.dispatch(PointerEnter(link))

    def pointer_leave(self) -> InteractionState:
        return self.dispatch(PointerLeave())

    def click_legend_item(self, slug: str) -> InteractionState:
        return self.dispatch(LegendClick(slug))

    def bind(self, grouping: Grouping) -> bool:
        """Attach a dataset snapshot; resets the state if it is a new one."""
        if grouping is self._grouping:
            return False

        self._grouping = grouping
        self.dispatch(DatasetChanged(grouping))
        logger.debug("Interaction state reset for new dataset %r", grouping)
        return True

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_link_activated(self, listener: ActivationListener) -> Callable[[], None]:
        self._activation_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._activation_listeners:
                self._activation_listeners.remove(listener)

        return unsubscribe

    def activate(self, link: Link) -> LinkActivated:
        """Emit linkActivated for a selected bar."""
        event = LinkActivated(link)
        logger.debug("Link activated: %s", link.id)
        for listener in list(self._activation_listeners):
            listener(event)
        return event

    # Derived, view-only effects

    def is_hovered(self, link: Link) -> bool:
        return self._state.hover is link

    def is_dimmed(self, slug: str) -> bool:
        return self._state.filter is not None and slug != self._state.filter

    def stroke_for(self, link: Link) -> Stroke:
        return HOVER_STROKE if self.is_hovered(link) else DEFAULT_STROKE
