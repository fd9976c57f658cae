"""Entity, status and link models for the timeline."""

from pydantic import BaseModel, ConfigDict, field_validator

from status_timeline.models.instants import is_known, to_decimal_year

UNKNOWN_SLUG = "unknown"
SOVEREIGN_RELATION = "Sovereign"


class Entity(BaseModel):
    """A historical actor (country, territory, polity)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    start: float | None = None  # overall recorded lifespan, widens the chart domain
    end: float | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _coerce_instant(cls, value):
        return None if value is None else to_decimal_year(value)


class Status(BaseModel):
    """A categorical label held over an interval (e.g. sovereign, occupied)."""

    model_config = ConfigDict(frozen=True)

    slug: str
    label: str

    @classmethod
    def unknown(cls) -> "Status":
        """The reserved bucket for links that carry no status."""
        return cls(slug=UNKNOWN_SLUG, label="Unknown")


class Link(BaseModel):
    """One status-holding period for one entity.

    ``end=None`` means the period is ongoing or its end is unknown, which is
    not the same thing as a zero-length period (``end == start``).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    entity: Entity
    status: Status | None = None
    start: float
    end: float | None = None
    counterpart: Entity | None = None  # e.g. the sovereign of a dependency
    relation: str | None = None

    @field_validator("start", mode="before")
    @classmethod
    def _coerce_start(cls, value):
        return to_decimal_year(value)

    @field_validator("end", mode="before")
    @classmethod
    def _coerce_end(cls, value):
        return None if value is None else to_decimal_year(value)

    @property
    def status_slug(self) -> str:
        return self.status.slug if self.status else UNKNOWN_SLUG

    @property
    def status_label(self) -> str:
        return self.status.label if self.status else Status.unknown().label

    @property
    def has_known_end(self) -> bool:
        return is_known(self.end)
