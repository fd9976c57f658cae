"""Hover/filter interaction model for timeline charts."""

from .machine import DEFAULT_STROKE, HOVER_STROKE, InteractionMachine, Stroke
from .state import (
    DatasetChanged,
    InteractionEvent,
    InteractionState,
    LegendClick,
    LinkActivated,
    PointerEnter,
    PointerLeave,
    transition,
)

__all__ = [
    "InteractionState",
    "InteractionEvent",
    "PointerEnter",
    "PointerLeave",
    "LegendClick",
    "DatasetChanged",
    "LinkActivated",
    "transition",
    "InteractionMachine",
    "Stroke",
    "HOVER_STROKE",
    "DEFAULT_STROKE",
]
