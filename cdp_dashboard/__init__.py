"""Deterministic synthetic data engine for a CDP analytics dashboard.

Generates daily channel activity, segment profiles, journey funnels and
identity-resolution quality metrics from integer seeds, and rolls them up
into the KPIs and chart series the dashboard displays.
"""

from cdp_dashboard.service import (
    DashboardDataService,
    DashboardSelection,
    DashboardSnapshot,
    get_daily_series,
    get_data_quality_series,
    get_journey_funnel,
    get_segment_stats,
)

__all__ = [
    "DashboardDataService",
    "DashboardSelection",
    "DashboardSnapshot",
    "get_daily_series",
    "get_data_quality_series",
    "get_journey_funnel",
    "get_segment_stats",
]
