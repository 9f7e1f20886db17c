"""Pandas DataFrame adapters for synthetic dashboard records."""

from typing import Sequence

import pandas as pd  # type: ignore

from cdp_dashboard.foundation.dimensions import Channel
from cdp_dashboard.synthetic.data_quality import DataQualityPoint
from cdp_dashboard.synthetic.generator import DailyPoint
from cdp_dashboard.synthetic.journey import JourneyFunnel
from cdp_dashboard.synthetic.segments import SegmentStat

DAILY_COLUMNS = ["date", *[c.value for c in Channel], "conversions", "impressions", "spend"]
DATA_QUALITY_COLUMNS = ["date", "valid", "invalid", "stitched", "match_rate", "duplicates"]


def daily_series_to_dataframe(series: Sequence[DailyPoint]) -> pd.DataFrame:
    """Convert daily points to a DataFrame with one column per channel.

    Args:
        series: Daily points, oldest first

    Returns:
        DataFrame with columns ``date, Web, Email, Paid, SMS, conversions,
        impressions, spend``; ``date`` is a datetime64 column

    Example:
        >>> df = daily_series_to_dataframe(generate_daily_series(30))
        >>> df[["Web", "Email"]].sum()
    """
    df = pd.DataFrame([point.as_dict() for point in series], columns=DAILY_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def data_quality_to_dataframe(points: Sequence[DataQualityPoint]) -> pd.DataFrame:
    df = pd.DataFrame([point.as_dict() for point in points], columns=DATA_QUALITY_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    return df


def segment_stats_to_dataframe(stats: Sequence[SegmentStat]) -> pd.DataFrame:
    """Convert segment records to one row per segment.

    Channel mix scores become ``mix_<channel>`` columns; predictive
    attributes are left out since they are shared by every segment.
    """
    rows = []
    for stat in stats:
        row = {
            "segment": stat.name.value,
            "size": stat.size,
            "engagement_rate": stat.engagement_rate,
            "conversion_rate": stat.conversion_rate,
            "lifetime_value": stat.lifetime_value,
        }
        for score in stat.channel_mix:
            row[f"mix_{score.channel.value}"] = score.value
        rows.append(row)
    return pd.DataFrame(rows)


def funnel_to_dataframe(funnel: JourneyFunnel) -> pd.DataFrame:
    """Convert a funnel to one row per stage.

    The first stage has no incoming transition, so its ``conversion_rate``,
    ``drop_off_count`` and ``drop_off_rate`` are NaN.
    """
    rows = [{"stage": funnel.stages[0].value, "count": funnel.counts[0]}]
    for transition, count in zip(funnel.drop_offs, funnel.counts[1:]):
        rows.append(
            {
                "stage": transition.to_stage.value,
                "count": count,
                "conversion_rate": transition.conversion_rate,
                "drop_off_count": transition.drop_off_count,
                "drop_off_rate": transition.drop_off_rate,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["stage", "count", "conversion_rate", "drop_off_count", "drop_off_rate"],
    )
