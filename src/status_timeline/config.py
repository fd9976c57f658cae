"""Configuration management for Status Timeline."""

import math
from datetime import date
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from status_timeline.layout import LegendMode, Ordering
from status_timeline.models import to_decimal_year


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STL_",
    )

    # Chart layout defaults
    lane_height: float = Field(default=20.0, description="Height of one entity lane in pixels")
    minimum_interval_width: float = Field(default=2.0, description="Narrowest bar ever drawn")
    chart_width: float = Field(default=1000.0)
    show_entity_labels: bool = Field(default=True)
    label_width: float = Field(default=200.0, description="Width of the entity label column")
    bar_fraction: float = Field(default=0.8, description="Bar height as a fraction of lane height")
    ordering: Ordering = Field(default=Ordering.BY_DURATION)
    legend_mode: LegendMode = Field(default=LegendMode.COUNT)
    axis_padding: float = Field(default=0.0, description="Years added on both sides of the domain")
    tick_count: int = Field(default=10)
    domain: tuple[float, float] | None = Field(default=None, description="Fixed time domain, JSON pair of years")
    now: float | None = Field(default=None, description="Where ongoing intervals end; today when unset")

    # Rendering
    dpi: int = Field(default=100)

    log_level: str = Field(default="WARNING")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class LayoutConfig(BaseModel):
    """Layout options of one chart session.

    Invalid values raise pydantic's ValidationError, which is a ValueError.
    """

    model_config = ConfigDict(frozen=True)

    lane_height: float = Field(default=20.0, gt=0)
    minimum_interval_width: float = Field(default=2.0, ge=0)
    chart_width: float = Field(default=1000.0, gt=0)
    show_entity_labels: bool = True
    ordering: Ordering = Ordering.BY_DURATION
    label_width: float = Field(default=200.0, ge=0)
    bar_fraction: float = Field(default=0.8, gt=0, le=1)
    legend_mode: LegendMode = LegendMode.COUNT
    axis_padding: float = Field(default=0.0, ge=0)
    tick_count: int = Field(default=10, ge=1)
    domain: tuple[float, float] | None = None
    now: float | None = None

    @field_validator("domain")
    @classmethod
    def _finite_domain(cls, value):
        if value is not None and not all(math.isfinite(v) for v in value):
            raise ValueError(f"domain must be finite, got {value!r}")
        return value

    @model_validator(mode="after")
    def _label_column_fits(self) -> "LayoutConfig":
        if self.show_entity_labels and self.label_width >= self.chart_width:
            raise ValueError(
                f"label_width ({self.label_width}) must be smaller than chart_width ({self.chart_width})"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> "LayoutConfig":
        """Layout config from settings, with keyword overrides."""
        settings = settings or get_settings()
        values = {name: getattr(settings, name) for name in cls.model_fields}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def plot_left(self) -> float:
        """Left edge of the bar area (right of the label column, if shown)."""
        return self.label_width if self.show_entity_labels else 0.0

    @property
    def open_end_horizon(self) -> float:
        """Instant ongoing intervals run up to: ``now``, or today."""
        return self.now if self.now is not None else to_decimal_year(date.today())
