"""Tests for segment dimensions and segment statistics."""

import logging
import math

import pytest

from cdp_dashboard.foundation.dimensions import (
    Channel,
    Segment,
    UnknownSegmentError,
    parse_channel_filter,
    parse_segment,
    resolve_segment,
)
from cdp_dashboard.synthetic import (
    PREDICTIVE_ATTRIBUTES,
    ChannelScore,
    PredictiveAttribute,
    SegmentStat,
    check_segment_ordering,
    find_segment_stat,
    generate_segment_stats,
    get_segment_stat,
)


class TestDimensions:
    """Test segment and channel lookups."""

    def test_fixed_orders(self):
        assert [s.value for s in Segment] == [
            "Prospects",
            "Applicants",
            "Enrolled",
            "At-Risk",
            "Alumni",
        ]
        assert [c.value for c in Channel] == ["Web", "Email", "Paid", "SMS"]
        assert Segment.AT_RISK.index == 3

    def test_parse_segment_by_name(self):
        assert parse_segment("At-Risk") is Segment.AT_RISK
        assert parse_segment(Segment.ALUMNI) is Segment.ALUMNI

    def test_parse_unknown_segment_raises(self):
        with pytest.raises(UnknownSegmentError, match="Unknown segment 'VIP'"):
            parse_segment("VIP")

    def test_unknown_segment_error_is_lookup_error(self):
        assert issubclass(UnknownSegmentError, LookupError)

    def test_resolve_segment_falls_back_to_first(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert resolve_segment("VIP") is Segment.PROSPECTS
        assert any("falling back to Prospects" in r.message for r in caplog.records)
        assert resolve_segment(None) is Segment.PROSPECTS

    def test_parse_channel_filter(self):
        assert parse_channel_filter("All") is None
        assert parse_channel_filter(None) is None
        assert parse_channel_filter("SMS") is Channel.SMS
        with pytest.raises(ValueError, match="Unknown channel filter"):
            parse_channel_filter("Fax")


class TestSegmentRecords:
    """Test record validation."""

    def test_channel_score_out_of_range(self):
        with pytest.raises(ValueError, match="Channel score must be 0-100"):
            ChannelScore(Channel.WEB, 101)

    def test_lift_below_one_raises(self):
        with pytest.raises(ValueError, match="Lift multiplier must be >= 1"):
            PredictiveAttribute("Bounced", 0.8)

    def test_invalid_engagement_rate(self):
        mix = tuple(ChannelScore(c, 10) for c in Channel)
        with pytest.raises(ValueError, match="Engagement rate must be 0-1"):
            SegmentStat(Segment.PROSPECTS, 100, 1.5, 0.1, 900, mix, ())

    def test_incomplete_channel_mix(self):
        mix = (ChannelScore(Channel.WEB, 10),)
        with pytest.raises(ValueError, match="channel_mix must hold one score"):
            SegmentStat(Segment.PROSPECTS, 100, 0.2, 0.1, 900, mix, ())


class TestGenerateSegmentStats:
    """Test generate_segment_stats."""

    def test_one_record_per_segment_in_order(self):
        stats = generate_segment_stats()
        assert [s.name for s in stats] == list(Segment)

    def test_sizes_and_lifetime_values(self):
        stats = generate_segment_stats()
        assert [s.size for s in stats] == [20000, 17500, 15000, 12500, 10000]
        assert [s.lifetime_value for s in stats] == [900, 1150, 1400, 1650, 1900]
        assert check_segment_ordering(stats).ok

    def test_rates_follow_closed_form(self):
        for idx, stat in enumerate(generate_segment_stats()):
            assert stat.engagement_rate == pytest.approx(0.25 + 0.08 * math.sin(idx + 1))
            assert stat.conversion_rate == pytest.approx(0.03 + 0.015 * math.cos(idx + 0.5))
            assert 0 <= stat.engagement_rate <= 1
            assert 0 <= stat.conversion_rate <= 1

    def test_channel_mix_for_first_segment(self):
        prospects = generate_segment_stats()[0]
        assert [score.channel for score in prospects.channel_mix] == list(Channel)
        assert [score.value for score in prospects.channel_mix] == [33, 34, 22, 9]

    def test_channel_mix_scores_in_range(self):
        for stat in generate_segment_stats():
            for score in stat.channel_mix:
                assert 0 <= score.value <= 100

    def test_predictive_attributes_shared_and_ranked(self):
        stats = generate_segment_stats()
        for stat in stats:
            assert stat.predictive_attributes == PREDICTIVE_ATTRIBUTES
        lifts = [a.lift_multiplier for a in PREDICTIVE_ATTRIBUTES]
        assert lifts == sorted(lifts, reverse=True)
        assert PREDICTIVE_ATTRIBUTES[0].label == "Clicked SMS"

    def test_repeated_generation_is_identical(self):
        assert generate_segment_stats() == generate_segment_stats()


class TestSegmentLookup:
    """Test strict and lenient segment lookup."""

    def test_get_segment_stat(self):
        stat = get_segment_stat("Enrolled")
        assert stat.name is Segment.ENROLLED
        assert stat.size == 15000

    def test_get_unknown_segment_raises(self):
        with pytest.raises(UnknownSegmentError):
            get_segment_stat("Dropouts")

    def test_find_unknown_segment_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            stat = find_segment_stat("Dropouts")
        assert stat.name is Segment.PROSPECTS
        assert any("Dropouts" in r.message for r in caplog.records)

    def test_find_none_returns_first(self):
        assert find_segment_stat(None).name is Segment.PROSPECTS

    def test_as_dict(self):
        payload = get_segment_stat("Alumni").as_dict()
        assert payload["name"] == "Alumni"
        assert payload["channel_mix"][0]["channel"] == "Web"
        assert payload["predictive_attributes"][0] == {
            "label": "Clicked SMS",
            "lift_multiplier": 2.2,
        }
