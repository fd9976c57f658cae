"""Linear time scale shared by every lane of a chart."""

import math
from typing import Any

from status_timeline.models import Grouping, to_decimal_year


def nice_step(span: float, count: int) -> float:
    """Tick step of the form 1, 2 or 5 x 10^k close to span / count."""
    raw = span / max(count, 1)
    power = 10 ** math.floor(math.log10(raw))
    error = raw / power

    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1

    return factor * power


class TimeScale:
    """Maps instants (decimal years) to pixels over a fixed domain and range.

    The scale is mutable only through ``set_range``; the domain is fixed for
    the scale's lifetime. A degenerate domain (both ends equal) maps every
    instant to the middle of the range.
    """

    def __init__(self, domain: tuple[float, float], range_: tuple[float, float]):
        d0, d1 = (float(v) for v in domain)
        if not (math.isfinite(d0) and math.isfinite(d1)):
            raise ValueError(f"Scale domain must be finite, got {domain!r}")

        self.domain = (d0, d1)
        self.range = (0.0, 0.0)
        self.set_range(*range_)

    @classmethod
    def for_grouping(
        cls,
        grouping: Grouping,
        range_: tuple[float, float],
        padding: float = 0.0,
        now: float | None = None,
    ) -> "TimeScale":
        """Scale whose domain covers every known instant in the grouping.

        When some link is still ongoing and ``now`` is given, the domain
        runs up to ``now`` so the open interval has room to the right.
        """
        bounds = grouping.time_bounds()
        if bounds is None:
            return cls((0.0, 0.0), range_)

        low, high = bounds
        if now is not None and grouping.has_open_end():
            high = max(high, now)
        return cls((low - padding, high + padding), range_)

    def __repr__(self) -> str:
        return f"TimeScale(domain={self.domain}, range={self.range})"

    @property
    def is_degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def set_range(self, r0: float, r1: float) -> None:
        """Change the pixel range in place, keeping the domain."""
        if not (math.isfinite(r0) and math.isfinite(r1)):
            raise ValueError(f"Scale range must be finite, got {(r0, r1)!r}")
        self.range = (float(r0), float(r1))

    def __call__(self, instant: Any) -> float:
        if instant is None:
            return math.nan

        value = to_decimal_year(instant)
        if math.isnan(value):
            return math.nan

        (d0, d1), (r0, r1) = self.domain, self.range
        if self.is_degenerate:
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        """Instant at the given pixel."""
        (d0, d1), (r0, r1) = self.domain, self.range
        if self.is_degenerate or r0 == r1:
            return d0
        return d0 + (pixel - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        """Evenly spaced round instants inside the domain."""
        low, high = sorted(self.domain)
        if self.is_degenerate:
            return [low]

        step = nice_step(high - low, count)
        first = math.ceil(low / step)
        last = math.floor(high / step)
        return [round(i * step, 10) for i in range(first, last + 1)]
