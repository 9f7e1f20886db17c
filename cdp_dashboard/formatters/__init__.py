"""Presentation-ready formatting for the CDP dashboard data.

This package converts generated series and roll-ups into:

- Plotly figure specifications for the dashboard charts
- Markdown tables for text reports and CLI output
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from cdp_dashboard.formatters.markdown_tables import (
    format_data_quality_table,
    format_funnel_table,
    format_performance_table,
    format_segment_table,
    format_snapshot_report,
)
from cdp_dashboard.formatters.plotly_charts import (
    create_channel_contribution_chart,
    create_channel_mix_chart,
    create_conversions_chart,
    create_funnel_chart,
    create_impressions_spend_chart,
    create_match_rate_chart,
    create_predictive_attributes_chart,
    create_source_coverage_chart,
    create_stage_heatmap,
    create_valid_invalid_chart,
    to_figure,
)


@dataclass(frozen=True)
class ChartConfig:
    """Chart size configuration.

    Attributes
    ----------
    width:
        Chart width in pixels (default: 800)
    height:
        Chart height in pixels (default: 400)
    quality:
        Size preset: 'high' (1200x600), 'medium' (800x400), 'low' (600x300)
    """

    width: int = 800
    height: int = 400
    quality: Literal["high", "medium", "low"] = "medium"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Chart dimensions must be positive: {self.width}x{self.height}"
            )

    @classmethod
    def from_quality(cls, quality: Literal["high", "medium", "low"]) -> ChartConfig:
        """Create config from quality preset.

        Examples
        --------
        >>> ChartConfig.from_quality("high").width
        1200
        """
        if quality == "high":
            return cls(width=1200, height=600, quality="high")
        elif quality == "low":
            return cls(width=600, height=300, quality="low")
        else:
            return cls(width=800, height=400, quality="medium")


_DEFAULT_CHART_CONFIG = ChartConfig.from_quality("medium")


def get_chart_config() -> ChartConfig:
    return _DEFAULT_CHART_CONFIG


def set_chart_config(config: ChartConfig) -> None:
    """Set global chart configuration.

    Examples
    --------
    >>> from cdp_dashboard.formatters import ChartConfig, set_chart_config
    >>> set_chart_config(ChartConfig.from_quality("high"))
    """
    global _DEFAULT_CHART_CONFIG
    _DEFAULT_CHART_CONFIG = config


__all__ = [
    # Configuration
    "ChartConfig",
    "get_chart_config",
    "set_chart_config",
    # Markdown tables
    "format_data_quality_table",
    "format_funnel_table",
    "format_performance_table",
    "format_segment_table",
    "format_snapshot_report",
    # Plotly charts
    "create_channel_contribution_chart",
    "create_channel_mix_chart",
    "create_conversions_chart",
    "create_funnel_chart",
    "create_impressions_spend_chart",
    "create_match_rate_chart",
    "create_predictive_attributes_chart",
    "create_source_coverage_chart",
    "create_stage_heatmap",
    "create_valid_invalid_chart",
    "to_figure",
]
