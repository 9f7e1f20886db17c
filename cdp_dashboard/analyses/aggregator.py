"""Roll-ups of synthetic series into dashboard KPIs.

All functions here are pure: the same series and parameters always give
the same result, so callers may memoize them by selection.

Answers the questions the dashboard tabs ask:
- How many conversions, impressions and how much spend in the range?
- What is the conversion rate and estimated return on ad spend?
- Which channels contribute the most activity?
- How well is each event source covered?
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Sequence, Union

from cdp_dashboard.foundation.dimensions import (
    ALL_CHANNELS,
    SOURCES,
    Channel,
    Segment,
    parse_channel_filter,
)
from cdp_dashboard.synthetic._utils import round_half_up, round_to_tenth, safe_ratio
from cdp_dashboard.synthetic.data_quality import DataQualityPoint
from cdp_dashboard.synthetic.generator import (
    CONVERSION_WEIGHTS,
    IMPRESSIONS_PER_UNIT,
    DailyPoint,
)

logger = logging.getLogger(__name__)

# Modeled revenue per conversion used for ROAS
DEFAULT_CONVERSION_VALUE = 150.0

# ROAS never divides by less than one currency unit of spend
MIN_ROAS_SPEND = 1.0

BASE_PROFILE_COMPLETION = 78
BASE_CONVERSION_LIFT = 12
CHANNEL_CONVERSION_LIFT_BONUS = 2

# Flat daily spend for non-paid channels when a single channel is selected
NON_PAID_BASE_SPEND = 10.0
PAID_BASE_SPEND = 20.0


@dataclass(frozen=True)
class ChannelSlice:
    """A daily point projected onto a single channel."""

    date: date
    channel: Channel
    volume: int
    conversions: int
    impressions: int
    spend: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "channel": self.channel.value,
            "volume": self.volume,
            "conversions": self.conversions,
            "impressions": self.impressions,
            "spend": self.spend,
        }


SeriesPoint = Union[DailyPoint, ChannelSlice]


@dataclass(frozen=True)
class Totals:
    conversions: int
    impressions: int
    spend: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "conversions": self.conversions,
            "impressions": self.impressions,
            "spend": self.spend,
        }


def totals(series: Sequence[SeriesPoint]) -> Totals:
    """Sum conversions, impressions and spend over ``series``.

    Examples
    --------
    >>> totals([]).conversions
    0
    """
    return Totals(
        conversions=sum(point.conversions for point in series),
        impressions=sum(point.impressions for point in series),
        spend=round_to_tenth(sum(point.spend for point in series)),
    )


def conversion_rate(summary: Totals) -> float:
    """Conversions per impression; 0.0 when there are no impressions."""
    return safe_ratio(summary.conversions, summary.impressions)


def roas(summary: Totals, per_conversion_value: float = DEFAULT_CONVERSION_VALUE) -> float:
    """Estimated return on ad spend: modeled revenue over spend.

    Spend below one currency unit is treated as one so that a near-zero
    spend cannot blow the ratio up.
    """
    return (summary.conversions * per_conversion_value) / max(
        summary.spend, MIN_ROAS_SPEND
    )


def channel_contribution(series: Sequence[DailyPoint]) -> dict[Channel, int]:
    """Total activity volume per channel over ``series``."""
    contribution = {channel: 0 for channel in Channel}
    for point in series:
        for channel in Channel:
            contribution[channel] += point.volume(channel)
    return contribution


def source_coverage(sources: Sequence[str] = SOURCES) -> dict[str, int]:
    """Percentage of expected events received per source, in [60, 95]."""
    return {
        source: 60 + round_half_up(35 * abs(math.sin(i + 0.4)))
        for i, source in enumerate(sources)
    }


def _project(point: DailyPoint, channel: Channel) -> ChannelSlice:
    volume = point.volume(channel)
    if channel is Channel.PAID:
        spend = round_to_tenth(volume * 0.9 + PAID_BASE_SPEND)
    else:
        spend = round_to_tenth(NON_PAID_BASE_SPEND + volume * 0.02)
    return ChannelSlice(
        date=point.date,
        channel=channel,
        volume=volume,
        conversions=round_half_up(volume * CONVERSION_WEIGHTS[channel]),
        impressions=volume * IMPRESSIONS_PER_UNIT,
        spend=spend,
    )


def filter_by_channel(
    series: Sequence[DailyPoint], channel_filter: str | Channel | None = ALL_CHANNELS
) -> list[SeriesPoint]:
    """Restrict ``series`` to one channel.

    With ``"All"`` the daily points are returned unchanged. For a single
    channel, conversions, impressions and spend are re-estimated from that
    channel's volume alone.
    """
    channel = parse_channel_filter(channel_filter)
    if channel is None:
        return list(series)
    return [_project(point, channel) for point in series]


def profile_completion(series: Sequence[SeriesPoint]) -> int:
    """Percentage of known profiles carrying the key attributes."""
    if not series:
        return BASE_PROFILE_COMPLETION
    return BASE_PROFILE_COMPLETION + series[-1].conversions % 5


def conversion_lift(channel_filter: str | Channel | None = ALL_CHANNELS) -> int:
    """Conversion lift (percent) attributed to activated audiences."""
    if parse_channel_filter(channel_filter) is None:
        return BASE_CONVERSION_LIFT
    return BASE_CONVERSION_LIFT + CHANNEL_CONVERSION_LIFT_BONUS


@dataclass(frozen=True)
class PerformanceSummary:
    """KPI block of the performance tab.

    Attributes
    ----------
    channel_filter:
        ``"All"`` or the selected channel name.
    totals:
        Summed conversions, impressions and spend of the filtered series.
    conversion_rate:
        Conversions per impression.
    roas:
        Estimated return on ad spend.
    profile_completion:
        Percentage of profiles with key attributes.
    active_segments:
        Number of segments with activity.
    conversion_lift:
        Lift percentage from activated audiences.
    channel_contribution:
        Activity volume per channel over the unfiltered range.
    """

    channel_filter: str
    totals: Totals
    conversion_rate: float
    roas: float
    profile_completion: int
    active_segments: int
    conversion_lift: int
    channel_contribution: dict[Channel, int] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "channel_filter": self.channel_filter,
            "totals": self.totals.as_dict(),
            "conversion_rate": self.conversion_rate,
            "roas": self.roas,
            "profile_completion": self.profile_completion,
            "active_segments": self.active_segments,
            "conversion_lift": self.conversion_lift,
            "channel_contribution": {
                channel.value: volume
                for channel, volume in self.channel_contribution.items()
            },
        }


def summarize_performance(
    series: Sequence[DailyPoint],
    channel_filter: str | Channel | None = ALL_CHANNELS,
    per_conversion_value: float = DEFAULT_CONVERSION_VALUE,
) -> PerformanceSummary:
    """Compute the performance tab KPIs for a date range and channel filter."""
    channel = parse_channel_filter(channel_filter)
    filtered = filter_by_channel(series, channel)
    summary = totals(filtered)
    return PerformanceSummary(
        channel_filter=channel.value if channel else ALL_CHANNELS,
        totals=summary,
        conversion_rate=conversion_rate(summary),
        roas=roas(summary, per_conversion_value),
        profile_completion=profile_completion(filtered),
        active_segments=len(Segment),
        conversion_lift=conversion_lift(channel),
        channel_contribution=channel_contribution(series),
    )


@dataclass(frozen=True)
class DataQualitySummary:
    """Latest-snapshot KPIs of the data quality tab."""

    stitched_profiles: int
    duplicate_suspects: int
    match_rate_pct: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "stitched_profiles": self.stitched_profiles,
            "duplicate_suspects": self.duplicate_suspects,
            "match_rate_pct": self.match_rate_pct,
        }


def summarize_data_quality(points: Sequence[DataQualityPoint]) -> DataQualitySummary:
    if not points:
        return DataQualitySummary(0, 0, 0.0)
    last = points[-1]
    return DataQualitySummary(
        stitched_profiles=last.stitched_count,
        duplicate_suspects=last.duplicate_count,
        match_rate_pct=round_to_tenth(last.match_rate * 100),
    )
