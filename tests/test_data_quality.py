"""Tests for the data quality generator."""

import math
from datetime import date

import pytest

from cdp_dashboard.foundation.dimensions import Channel
from cdp_dashboard.synthetic import (
    DailyPoint,
    DataQualityPoint,
    check_match_rate_bounds,
    derive_data_quality,
    generate_daily_series,
    stitch_match_rate,
)

END_DATE = date(2024, 6, 30)


@pytest.fixture
def single_day():
    volumes = {Channel.WEB: 100, Channel.EMAIL: 60, Channel.PAID: 80, Channel.SMS: 20}
    return [DailyPoint(END_DATE, volumes, 20, 40 * 260, 80.5)]


class TestDataQualityPoint:
    """Test DataQualityPoint validation."""

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="invalid_count cannot be negative"):
            DataQualityPoint(END_DATE, 10, -1, 5, 0, 0.5)

    def test_match_rate_out_of_range_raises(self):
        with pytest.raises(ValueError, match="Match rate must be 0-1"):
            DataQualityPoint(END_DATE, 10, 1, 5, 0, 1.2)


class TestDeriveDataQuality:
    """Test derive_data_quality."""

    def test_first_day_values(self, single_day):
        point = derive_data_quality(single_day, horizon=1)[0]
        # i = 0: sin terms vanish, cos terms are 1
        assert point.date == END_DATE
        assert point.valid_count == 239  # floor(260 * 0.92)
        assert point.invalid_count == 19  # floor(239 * 0.08)
        assert point.stitched_count == 131  # floor(239 * 0.55)
        assert point.duplicate_count == 7  # floor(258 * 0.03)
        assert point.match_rate == pytest.approx(131 / 258)
        assert point.total_events == 258

    def test_aligned_one_to_one(self):
        series = generate_daily_series(90, 42, end_date=END_DATE)
        points = derive_data_quality(series)
        assert len(points) == len(series)
        assert [p.date for p in points] == [d.date for d in series]

    def test_match_rate_bounds(self):
        points = derive_data_quality(generate_daily_series(180, 42, end_date=END_DATE))
        assert check_match_rate_bounds(points).ok
        for point in points:
            assert point.valid_count > 0
            assert point.stitched_count <= point.valid_count

    def test_empty_series(self):
        assert derive_data_quality([]) == []

    def test_last_day_sits_at_end_of_horizon(self, single_day):
        # default horizon: the only day is position 179
        point = derive_data_quality(single_day)[0]
        valid = math.floor(260 * (0.92 + 0.03 * math.sin(179 / 12)))
        assert point.valid_count == valid

    def test_day_metrics_do_not_depend_on_window(self):
        long_window = derive_data_quality(generate_daily_series(180, 42, end_date=END_DATE))
        for days in (30, 90):
            window = derive_data_quality(generate_daily_series(days, 42, end_date=END_DATE))
            assert window == long_window[-days:]

    def test_window_longer_than_horizon(self):
        long_window = derive_data_quality(generate_daily_series(200, 42, end_date=END_DATE))
        assert long_window[-180:] == derive_data_quality(
            generate_daily_series(180, 42, end_date=END_DATE)
        )
        assert check_match_rate_bounds(long_window).ok


class TestStitchMatchRate:
    """Test the match rate clamp on raw counts."""

    def test_ratio(self):
        assert stitch_match_rate(50, 90, 10) == pytest.approx(0.5)

    def test_oversized_stitched_count_clamps_to_one(self):
        assert stitch_match_rate(300, 100, 20) == 1.0

    def test_no_events(self):
        assert stitch_match_rate(0, 0, 0) == 0.0

    def test_as_dict_keys(self, single_day):
        payload = derive_data_quality(single_day)[0].as_dict()
        assert list(payload) == [
            "date",
            "valid",
            "invalid",
            "stitched",
            "match_rate",
            "duplicates",
        ]
        assert payload["date"] == "2024-06-30"
