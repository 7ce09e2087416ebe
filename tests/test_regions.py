"""Tests for the visibility monitor and region registrar."""

import asyncio
import pytest

from pagevault.events import EventChannel, RegionVisible
from pagevault.regions.model import StaticRegion, walk_regions
from pagevault.regions.registrar import RegionRegistrar
from pagevault.regions.visibility import VisibilityMonitor
from tests.helpers.page_factory import make_region


def drain(channel: EventChannel) -> list:
    """Collect every event currently queued on the channel."""
    async def collect():
        channel.close()
        events = []
        while True:
            event = await channel.get()
            if event is None:
                return events
            events.append(event)
    return asyncio.run(collect())


class TestVisibilityMonitor:
    def test_threshold_must_be_in_range(self):
        channel = EventChannel()
        for threshold in (0.0, -0.5, 1.5):
            with pytest.raises(ValueError):
                VisibilityMonitor(channel, threshold)

    def test_crossing_threshold_raises_trigger(self):
        channel = EventChannel()
        monitor = VisibilityMonitor(channel, threshold=0.5)
        region = make_region(1)
        monitor.observe(region)

        assert monitor.update(region.region_id, 0.2) is False
        assert monitor.update(region.region_id, 0.5) is True

        events = drain(channel)
        assert events == [RegionVisible(region)]

    def test_staying_visible_does_not_retrigger(self):
        channel = EventChannel()
        monitor = VisibilityMonitor(channel)
        region = make_region(1)
        monitor.observe(region)

        monitor.update(region.region_id, 0.6)
        monitor.update(region.region_id, 0.9)
        monitor.update(region.region_id, 1.0)

        assert len(drain(channel)) == 1

    def test_recrossing_fires_again(self):
        """Visibility is not once-only: scrolling away and back fires again."""
        channel = EventChannel()
        monitor = VisibilityMonitor(channel)
        region = make_region(1)
        monitor.observe(region)

        monitor.update(region.region_id, 0.8)
        monitor.update(region.region_id, 0.1)
        monitor.update(region.region_id, 0.8)

        assert len(drain(channel)) == 2

    def test_unobserved_region_never_fires(self):
        channel = EventChannel()
        monitor = VisibilityMonitor(channel)

        assert monitor.update("mainPageContainer_1", 1.0) is False
        assert drain(channel) == []

    def test_observe_is_idempotent(self):
        monitor = VisibilityMonitor(EventChannel())
        region = make_region(3)
        monitor.observe(region)
        monitor.observe(region)
        assert monitor.observed_count == 1
        assert monitor.is_observed(region.region_id)

    def test_replacement_region_starts_hidden(self):
        """A new region under a known id replaces the old one and can fire at once."""
        channel = EventChannel()
        monitor = VisibilityMonitor(channel)
        placeholder = StaticRegion("mainPageContainer_1")
        monitor.observe(placeholder)
        monitor.update(placeholder.region_id, 1.0)

        real = make_region(1)
        assert monitor.observe(real) is True
        assert monitor.region("mainPageContainer_1") is real
        assert monitor.update(real.region_id, 1.0) is True

        assert drain(channel) == [RegionVisible(placeholder), RegionVisible(real)]
        assert monitor.observed_count == 1


class TestRegionRegistrar:
    def test_registers_existing_page_regions(self):
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor)

        added = registrar.register_existing([make_region(1), make_region(2)])

        assert added == 2
        assert monitor.is_observed("mainPageContainer_1")
        assert monitor.is_observed("mainPageContainer_2")

    def test_ignores_non_page_nodes(self):
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor)

        added = registrar.on_nodes_added([StaticRegion("toolbar"), StaticRegion("mainPageContainer_x")])

        assert added == 0
        assert monitor.observed_count == 0

    def test_discovers_nested_regions(self):
        """Page regions nested inside an added node are registered too."""
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor)
        wrapper = StaticRegion("pageWrapper", children=[
            make_region(4),
            StaticRegion("inner", children=[make_region(5)]),
        ])

        added = registrar.on_nodes_added([wrapper])

        assert added == 2
        assert registrar.registered_ids == {"mainPageContainer_4", "mainPageContainer_5"}

    def test_added_node_that_is_itself_a_page(self):
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor)

        assert registrar.on_nodes_added([make_region(9)]) == 1
        assert monitor.is_observed("mainPageContainer_9")

    def test_each_region_registered_once(self):
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor)
        region = make_region(1)

        registrar.register_existing([region])
        assert registrar.on_nodes_added([region]) == 0
        assert registrar.on_nodes_added([StaticRegion("wrapper", children=[region])]) == 0
        assert monitor.observed_count == 1

    def test_replaced_region_is_reregistered(self):
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor)
        placeholder = StaticRegion("mainPageContainer_2")
        real = make_region(2)

        registrar.register_existing([placeholder])
        assert registrar.on_nodes_added([real]) == 1
        assert registrar.on_nodes_added([real]) == 0
        assert monitor.region("mainPageContainer_2") is real
        assert registrar.registered_ids == {"mainPageContainer_2"}

    def test_custom_prefix(self):
        monitor = VisibilityMonitor(EventChannel())
        registrar = RegionRegistrar(monitor, prefix="page")

        added = registrar.on_nodes_added([make_region(1, prefix="page"), make_region(2)])

        assert added == 1
        assert monitor.is_observed("page_1")


class TestWalkRegions:
    def test_depth_first_order(self):
        tree = StaticRegion("root", children=[
            StaticRegion("a", children=[StaticRegion("a1")]),
            StaticRegion("b"),
        ])
        assert [r.region_id for r in walk_regions(tree)] == ["root", "a", "a1", "b"]
