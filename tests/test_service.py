"""Tests for the query surfaces, selection model and service cache."""

import logging
from datetime import date

import pytest
from pydantic import ValidationError

from cdp_dashboard import (
    DashboardDataService,
    DashboardSelection,
    get_daily_series,
    get_data_quality_series,
    get_journey_funnel,
    get_segment_stats,
)
from cdp_dashboard.analyses.aggregator import ChannelSlice
from cdp_dashboard.config import DashboardSettings
from cdp_dashboard.foundation.dimensions import Segment
from cdp_dashboard.synthetic import DailyPoint, generate_daily_series

END_DATE = date(2024, 6, 30)


@pytest.fixture
def service():
    return DashboardDataService(DashboardSettings(), end_date=END_DATE)


class TestModuleQueries:
    """Test the module-level query functions."""

    def test_get_daily_series(self):
        series = get_daily_series(30, 42, end_date=END_DATE)
        assert series == generate_daily_series(30, 42, end_date=END_DATE)

    def test_get_daily_series_empty_range(self):
        assert get_daily_series(0, 42) == []

    def test_get_segment_stats(self):
        assert [s.name for s in get_segment_stats()] == list(Segment)

    def test_get_journey_funnel(self):
        assert get_journey_funnel(0).counts[0] == 10000

    def test_get_data_quality_series(self):
        points = get_data_quality_series(30, 42, end_date=END_DATE)
        assert len(points) == 30
        assert points[-1].date == END_DATE

    def test_data_quality_series_is_window_independent(self):
        long_window = get_data_quality_series(180, 42, end_date=END_DATE)
        assert get_data_quality_series(30, 42, end_date=END_DATE) == long_window[-30:]


class TestDashboardSelection:
    """Test DashboardSelection validation."""

    def test_defaults(self):
        selection = DashboardSelection()
        assert selection.date_range_days == 90
        assert selection.channel == "All"
        assert selection.segment is Segment.PROSPECTS

    def test_segment_by_name(self):
        assert DashboardSelection(segment="At-Risk").segment is Segment.AT_RISK

    def test_unknown_segment_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            selection = DashboardSelection(segment="Lurkers")
        assert selection.segment is Segment.PROSPECTS
        assert any("Lurkers" in r.message for r in caplog.records)

    def test_invalid_date_range_rejected(self):
        with pytest.raises(ValidationError):
            DashboardSelection(date_range_days=45)

    def test_invalid_channel_rejected(self):
        with pytest.raises(ValidationError):
            DashboardSelection(channel="TV")


class TestDashboardDataService:
    """Test DashboardDataService."""

    def test_daily_series_matches_generator(self, service):
        assert service.get_daily_series(90) == generate_daily_series(
            90, 42, end_date=END_DATE
        )

    def test_cache_hit_returns_equal_fresh_list(self, service):
        first = service.get_daily_series(30)
        second = service.get_daily_series(30)
        assert first == second
        assert first is not second
        stats = service.cache_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["size"] == 1

    def test_caller_mutation_does_not_leak(self, service):
        series = service.get_daily_series(30)
        series.clear()
        assert len(service.get_daily_series(30)) == 30

    def test_separate_services_do_not_share_cache(self):
        a = DashboardDataService(DashboardSettings(), end_date=END_DATE)
        b = DashboardDataService(DashboardSettings(), end_date=END_DATE)
        a.get_daily_series(30)
        assert b.cache_stats()["size"] == 0

    def test_seed_base_is_part_of_cache_key(self, service):
        assert service.get_daily_series(30, 7) != service.get_daily_series(30, 8)
        assert service.cache_stats()["size"] == 2

    def test_lru_eviction(self):
        service = DashboardDataService(
            DashboardSettings(cache_size=2), end_date=END_DATE
        )
        for days in (30, 90, 180):
            service.get_daily_series(days)
        assert service.cache_stats()["size"] == 2

    def test_cache_disabled(self):
        service = DashboardDataService(
            DashboardSettings(cache_size=0), end_date=END_DATE
        )
        service.get_daily_series(30)
        service.get_daily_series(30)
        stats = service.cache_stats()
        assert stats["size"] == 0
        assert stats["misses"] == 2

    def test_range_capped_at_max(self):
        service = DashboardDataService(
            DashboardSettings(max_range_days=60), end_date=END_DATE
        )
        assert len(service.get_daily_series(365)) == 60

    def test_empty_range(self, service):
        assert service.get_daily_series(0) == []
        assert service.get_data_quality_series(0) == []

    def test_clear(self, service):
        service.get_daily_series(30)
        service.clear()
        assert service.cache_stats() == {
            "size": 0,
            "max_size": 32,
            "hits": 0,
            "misses": 0,
            "hit_rate": 0.0,
        }

    def test_data_quality_series(self, service):
        points = service.get_data_quality_series(30)
        assert [p.date for p in points] == [d.date for d in service.get_daily_series(30)]

    def test_data_quality_series_matches_longest_window(self, service):
        long_window = service.get_data_quality_series(180)
        for days in (30, 90):
            assert service.get_data_quality_series(days) == long_window[-days:]


class TestBuildSnapshot:
    """Test DashboardDataService.build_snapshot."""

    def test_default_selection(self, service):
        snapshot = service.build_snapshot()
        assert snapshot.selection.date_range_days == 90
        assert len(snapshot.performance_series) == 90
        assert len(snapshot.data_quality) == 90
        assert snapshot.segment.name is Segment.PROSPECTS
        assert snapshot.funnel.counts[0] == 10000
        assert len(snapshot.heatmap) == 20
        assert len(snapshot.source_coverage) == 6

    def test_data_quality_kpis_do_not_change_with_range(self, service):
        summaries = {
            days: service.build_snapshot(
                DashboardSelection(date_range_days=days)
            ).data_quality_summary
            for days in (30, 90, 180)
        }
        assert summaries[30] == summaries[90] == summaries[180]

    def test_channel_selection_projects_series(self, service):
        snapshot = service.build_snapshot(
            DashboardSelection(date_range_days=30, channel="Email", segment="Alumni")
        )
        assert all(isinstance(p, ChannelSlice) for p in snapshot.performance_series)
        assert snapshot.performance.channel_filter == "Email"
        assert snapshot.segment.name is Segment.ALUMNI
        assert snapshot.funnel.segment_index == 4

    def test_all_channels_keeps_daily_points(self, service):
        snapshot = service.build_snapshot(DashboardSelection(date_range_days=30))
        assert all(isinstance(p, DailyPoint) for p in snapshot.performance_series)
        assert snapshot.performance.totals.conversions == sum(
            p.conversions for p in snapshot.performance_series
        )

    def test_as_dict_is_json_ready(self, service):
        import json

        payload = service.build_snapshot(DashboardSelection(date_range_days=30)).as_dict()
        encoded = json.loads(json.dumps(payload))
        assert encoded["selection"] == {
            "date_range_days": 30,
            "channel": "All",
            "segment": "Prospects",
        }
        assert len(encoded["performance"]["series"]) == 30
        assert encoded["performance"]["series"][-1]["date"] == "2024-06-30"
        assert encoded["journey"]["counts"] == [10000, 6200, 3720, 2977]
        assert encoded["data_quality"]["source_coverage"]["CRM"] == 94

    def test_snapshot_is_deterministic(self, service):
        selection = DashboardSelection(date_range_days=180, channel="SMS")
        other = DashboardDataService(DashboardSettings(), end_date=END_DATE)
        assert service.build_snapshot(selection).as_dict() == other.build_snapshot(
            selection
        ).as_dict()
