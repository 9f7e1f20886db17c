"""Dashboard roll-ups over synthetic series.

The aggregator turns daily points and data quality points into the KPI
cards and chart series shown on the four dashboard tabs:

1. Performance - totals, conversion rate, ROAS, channel contribution
2. Segments - served directly from the segment generator
3. Journeys - served directly from the funnel calculator
4. Data quality - latest snapshot and source coverage
"""

from .aggregator import (
    DEFAULT_CONVERSION_VALUE,
    ChannelSlice,
    DataQualitySummary,
    PerformanceSummary,
    Totals,
    channel_contribution,
    conversion_lift,
    conversion_rate,
    filter_by_channel,
    profile_completion,
    roas,
    source_coverage,
    summarize_data_quality,
    summarize_performance,
    totals,
)

__all__ = [
    "DEFAULT_CONVERSION_VALUE",
    "ChannelSlice",
    "DataQualitySummary",
    "PerformanceSummary",
    "Totals",
    "channel_contribution",
    "conversion_lift",
    "conversion_rate",
    "filter_by_channel",
    "profile_completion",
    "roas",
    "source_coverage",
    "summarize_data_quality",
    "summarize_performance",
    "totals",
]
