"""Tests for interval geometry."""

import random

import pytest

from status_timeline.layout import INDETERMINATE, IntervalGeometry, TimeScale, bar_box, resolve_interval


@pytest.fixture
def scale():
    return TimeScale((1800, 2020), (0, 1000))


class TestResolveInterval:
    """Test bar x/width resolution."""

    def test_scenario(self, scenario, scale):
        """Known interval gets a real width; open one is indeterminate."""
        (_, (first, second)), = scenario

        g1 = resolve_interval(first, scale, 2)
        g2 = resolve_interval(second, scale, 2)

        assert g1.x == pytest.approx(scale(1900))
        assert not g1.is_indeterminate
        assert g1.width > 0
        assert g1.width == pytest.approx(scale(1950) - scale(1900))

        assert g2.x == pytest.approx(scale(1950))
        assert g2.is_indeterminate
        assert g2.width == INDETERMINATE

    def test_short_interval_floored(self, entities, make_link, scale):
        link = make_link(entities["X"], 1900, 1900.1)
        geometry = resolve_interval(link, scale, 5)
        assert geometry.width == 5

    def test_zero_length_is_determinate(self, entities, make_link, scale):
        link = make_link(entities["X"], 1900, 1900)
        geometry = resolve_interval(link, scale, 3)
        assert not geometry.is_indeterminate
        assert geometry.width == 3

    def test_malformed_end(self, entities, make_link, scale):
        link = make_link(entities["X"], 1900, "sometime")
        assert resolve_interval(link, scale, 2).is_indeterminate

    def test_inverted_interval_is_indeterminate(self, entities, make_link, scale):
        link = make_link(entities["X"], 1950, 1900)
        geometry = resolve_interval(link, scale, 2)
        assert geometry.is_indeterminate
        assert geometry.x == pytest.approx(scale(1950))

    def test_unknown_start(self, entities, make_link, scale):
        link = make_link(entities["X"], "unknown", 1900)
        geometry = resolve_interval(link, scale, 2)
        assert geometry.x == 0
        assert geometry.is_indeterminate

    def test_width_floor_and_never_zero(self, entities, make_link, scale):
        """Every determinate width is at least the minimum; open ends never get a number."""
        rng = random.Random(7)
        entity = entities["X"]
        for _ in range(500):
            start = rng.uniform(1700, 2100)
            end = rng.choice([None, start, start + rng.uniform(0, 0.5), start + rng.uniform(0, 300)])
            geometry = resolve_interval(make_link(entity, start, end), scale, 2)
            if end is None:
                assert geometry.width == INDETERMINATE
            else:
                assert geometry.width >= 2


class TestSpan:
    """Test drawable width."""

    def test_determinate_span(self):
        assert IntervalGeometry(x=10, width=30).span(1000) == 30

    def test_indeterminate_fills_to_edge(self):
        assert IntervalGeometry(x=600, width=INDETERMINATE).span(1000) == 400

    def test_indeterminate_past_edge(self):
        assert IntervalGeometry(x=1200, width=INDETERMINATE).span(1000) == 0

    def test_floored_bar_clipped_at_edge(self):
        assert IntervalGeometry(x=999, width=2).span(1000) == 1


class TestBarBox:
    """Test vertical placement inside a lane."""

    def test_centered_fraction(self):
        y, height = bar_box(2, 20, 0.8)
        assert height == pytest.approx(16)
        assert y == pytest.approx(42)

    def test_full_lane(self):
        assert bar_box(0, 10, 1.0) == (0, 10)
