"""Tests for the chart session: layout memoization, view and tooltip."""

import pytest

from status_timeline import chart as chart_module
from status_timeline.chart import HATCH_FILL, TimelineChart
from status_timeline.config import LayoutConfig
from status_timeline.interaction import HOVER_STROKE
from status_timeline.layout import Palette
from status_timeline.models import Grouping


@pytest.fixture
def two_lanes(entities, make_link):
    a, b = entities["A"], entities["B"]
    return Grouping(
        [
            (a, [make_link(a, 1900, 1940, "sovereign")]),
            (b, [make_link(b, 1950, 1990, "occupied"), make_link(b, 1990, 2000, "sovereign")]),
        ]
    )


@pytest.fixture
def count_lane_calls(monkeypatch):
    """Count calls to lane assignment made by charts."""
    calls = []
    original = chart_module.assign_lanes

    def counting(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(chart_module, "assign_lanes", counting)
    return calls


class TestLayout:
    """Test chart geometry."""

    def test_scenario_bars(self, scenario, config):
        chart = TimelineChart(scenario, config)
        layout = chart.layout()

        # ongoing occupation runs the domain up to now (2000)
        first, second = layout.bars
        assert chart.scale.domain == (1900, 2000)
        assert first.x == 0
        assert first.geometry.width == pytest.approx(500)
        assert not first.indeterminate
        assert second.indeterminate
        assert second.x == pytest.approx(500)
        assert second.span == pytest.approx(500)

    def test_fixed_domain(self, scenario, config):
        config = config.model_copy(update={"domain": (1800, 2020)})
        chart = TimelineChart(scenario, config)

        first, second = chart.layout().bars

        assert first.x == pytest.approx(chart.scale(1900))
        assert first.x == pytest.approx(1000 * 100 / 220)
        assert first.geometry.width > 0
        assert second.indeterminate
        assert second.x == pytest.approx(chart.scale(1950))
        assert second.x + second.span == pytest.approx(1000)

    def test_ongoing_bar_stays_inside_chart(self, entities, make_link, config):
        x = entities["X"]
        grouping = Grouping([(x, [make_link(x, 1900, 1950), make_link(x, 1950, None, "occupied")])])
        config = config.model_copy(update={"now": None})

        layout = TimelineChart(grouping, config).layout()

        ongoing = layout.bars[1]
        assert ongoing.x < 1000
        assert ongoing.x + ongoing.span == pytest.approx(1000)

    def test_ongoing_bar_at_latest_instant_is_clipped(self, scenario, config):
        config = config.model_copy(update={"domain": (1900, 1950)})
        layout = TimelineChart(scenario, config).layout()
        assert max(bar.x + bar.span for bar in layout.bars) == pytest.approx(1000)
        assert layout.bars[1].span == 0

    def test_lanes_and_height(self, two_lanes, config):
        layout = TimelineChart(two_lanes, config).layout()

        assert [lane.entity.id for lane in layout.lanes] == ["B", "A"]
        assert layout.height == 40
        assert [bar.lane for bar in layout.bars] == [0, 0, 1]
        assert all(bar.height == pytest.approx(16) for bar in layout.bars)
        assert layout.bars[0].y == pytest.approx(2)
        assert layout.bars[2].y == pytest.approx(22)

    def test_label_column_reserved(self, two_lanes, config):
        config = config.model_copy(update={"show_entity_labels": True})
        layout = TimelineChart(two_lanes, config).layout()

        assert layout.plot_left == 200
        assert min(bar.x for bar in layout.bars) == pytest.approx(200)
        assert max(bar.x + bar.span for bar in layout.bars) == pytest.approx(1000)

    def test_ticks_within_plot(self, two_lanes, config):
        layout = TimelineChart(two_lanes, config).layout()
        labels = [label for _, label in layout.ticks]
        assert labels[0] == "1900"
        assert labels[-1] == "2000"
        assert all(0 <= x <= 1000 for x, _ in layout.ticks)

    def test_empty_grouping(self, config):
        layout = TimelineChart(Grouping(), config).layout()
        assert layout.lanes == ()
        assert layout.bars == ()
        assert layout.height == 0
        assert layout.ticks == ()
        assert layout.legend == ()

    def test_legend(self, two_lanes, config):
        legend = TimelineChart(two_lanes, config).layout().legend
        assert [(e.slug, e.metric) for e in legend] == [("occupied", 1), ("sovereign", 2)]

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            LayoutConfig(lane_height=0)
        with pytest.raises(ValueError):
            LayoutConfig(chart_width=150, label_width=200, show_entity_labels=True)
        with pytest.raises(ValueError):
            LayoutConfig(bar_fraction=1.5)


class TestMemoization:
    """Interaction must not recompute lanes or legend."""

    def test_hover_and_filter_reuse_layout(self, two_lanes, config, count_lane_calls):
        chart = TimelineChart(two_lanes, config)
        layout = chart.layout()

        chart.pointer_enter(two_lanes.links[0])
        chart.click_legend_item("occupied")
        chart.view()
        chart.pointer_leave()

        assert chart.layout() is layout
        assert len(count_lane_calls) == 1

    def test_new_dataset_recomputes_and_resets(self, two_lanes, scenario, config, count_lane_calls):
        chart = TimelineChart(two_lanes, config)
        chart.layout()
        chart.pointer_enter(two_lanes.links[0])
        chart.click_legend_item("occupied")

        chart.set_data(scenario)

        assert chart.state.hover is None
        assert chart.state.filter is None
        assert [lane.entity.id for lane in chart.layout().lanes] == ["X"]
        assert len(count_lane_calls) == 2

    def test_same_dataset_is_a_no_op(self, two_lanes, config, count_lane_calls):
        chart = TimelineChart(two_lanes, config)
        layout = chart.layout()
        chart.click_legend_item("occupied")

        chart.set_data(two_lanes)

        assert chart.state.filter == "occupied"
        assert chart.layout() is layout

    def test_resize_rescales_without_reordering(self, two_lanes, config, count_lane_calls):
        chart = TimelineChart(two_lanes, config)
        chart.layout()

        chart.resize(500)
        layout = chart.layout()

        assert layout.width == 500
        assert max(bar.x + bar.span for bar in layout.bars) == pytest.approx(500)
        assert chart.scale.range == (0, 500)
        assert len(count_lane_calls) == 1

    def test_resize_rejects_invalid_width(self, two_lanes, config):
        chart = TimelineChart(two_lanes, config)
        with pytest.raises(ValueError):
            chart.resize(0)
        assert chart.config.chart_width == 1000


class TestView:
    """Test state-derived styling and tooltip."""

    def test_idle_view(self, scenario, config):
        view = TimelineChart(scenario, config).view()

        assert view.tooltip is None
        assert view.filter is None
        assert [b.fill for b in view.bars][1] == HATCH_FILL
        assert view.bars[0].fill == view.bars[0].bar.color
        assert not any(b.dimmed for b in view.bars)
        assert not any(item.hidden for item in view.legend)

    def test_filter_dims_other_statuses(self, two_lanes, config):
        chart = TimelineChart(two_lanes, config)
        chart.click_legend_item("occupied")
        view = chart.view()

        dimmed = {b.bar.link.status_slug: b.dimmed for b in view.bars}
        assert dimmed == {"occupied": False, "sovereign": True}
        assert {i.entry.slug: i.hidden for i in view.legend} == {"occupied": False, "sovereign": True}

    def test_hover_tooltip(self, scenario, config):
        chart = TimelineChart(scenario, config)
        sovereign, occupied = scenario.links

        chart.pointer_enter(sovereign)
        view = chart.view()

        assert view.tooltip.text == "Xland was a Sovereign from 1900 to 1950"
        assert view.tooltip.x == 0
        assert view.tooltip.y == 20
        assert view.tooltip.min_width == pytest.approx(500)
        assert view.bars[0].hovered
        assert view.bars[0].stroke == HOVER_STROKE

        chart.pointer_enter(occupied)
        assert chart.tooltip().text == "Xland was a Occupied from 1950 to ?"

    def test_shared_palette_across_charts(self, two_lanes, config):
        palette = Palette.for_grouping(two_lanes)
        subset = Grouping([pair for pair in two_lanes if pair[0].id == "A"])

        full = TimelineChart(two_lanes, config, palette=palette).layout()
        partial = TimelineChart(subset, config, palette=palette).layout()

        full_colors = {b.link.status_slug: b.color for b in full.bars}
        partial_colors = {b.link.status_slug: b.color for b in partial.bars}
        assert partial_colors["sovereign"] == full_colors["sovereign"]


class TestPointer:
    """Test hit testing and activation."""

    def test_hit_test(self, two_lanes, config):
        chart = TimelineChart(two_lanes, config)
        a_link = two_lanes[0][1][0]
        # B is lane 0 (longer coverage), A is lane 1; A spans 1900-1940 -> x 0..400
        assert chart.hit_test(250, 30) is a_link
        assert chart.hit_test(250, 10) is None
        assert chart.hit_test(250, 500) is None

    def test_pointer_move(self, two_lanes, config):
        chart = TimelineChart(two_lanes, config)
        a_link = two_lanes[0][1][0]

        chart.pointer_move(250, 30)
        assert chart.state.hover is a_link

        chart.pointer_move(None, None)
        assert chart.state.hover is None

    def test_activation(self, scenario, config):
        chart = TimelineChart(scenario, config)
        received = []
        chart.on_link_activated(received.append)

        chart.activate(scenario.links[0])

        assert [e.link for e in received] == [scenario.links[0]]
