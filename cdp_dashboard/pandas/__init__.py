"""Pandas DataFrame adapters for the CDP dashboard records.

Convert generated series and segment/funnel records into DataFrames for
notebooks, CSV export and charting.
"""

from .adapters import (
    daily_series_to_dataframe,
    data_quality_to_dataframe,
    funnel_to_dataframe,
    segment_stats_to_dataframe,
)

__all__ = [
    "daily_series_to_dataframe",
    "data_quality_to_dataframe",
    "funnel_to_dataframe",
    "segment_stats_to_dataframe",
]
