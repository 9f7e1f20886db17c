"""Plotly chart generators for the CDP dashboard tabs.

Each ``create_*`` function returns a dict holding a JSON-serializable
Plotly figure specification under ``plotly_json`` plus its dimensions, so
any Plotly front end can render it without further processing.
Use :func:`to_figure` to get a ``plotly.graph_objects.Figure``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Sequence

if TYPE_CHECKING:
    import plotly.graph_objects as go

    from cdp_dashboard.analyses.aggregator import SeriesPoint
    from cdp_dashboard.foundation.dimensions import Channel
    from cdp_dashboard.synthetic.data_quality import DataQualityPoint
    from cdp_dashboard.synthetic.generator import DailyPoint
    from cdp_dashboard.synthetic.journey import HeatmapCell, JourneyFunnel
    from cdp_dashboard.synthetic.segments import SegmentStat


PRIMARY_COLOR = "rgb(55, 128, 191)"
SECONDARY_COLOR = "rgba(255, 165, 0, 0.6)"


def _chart(data: list[dict[str, Any]], layout: dict[str, Any]) -> dict[str, Any]:
    # Resolved per call so set_chart_config applies to later charts
    from cdp_dashboard.formatters import get_chart_config

    config = get_chart_config()
    width, height = config.width, config.height
    layout = {**layout, "width": width, "height": height}
    return {
        "plotly_json": {"data": data, "layout": layout},
        "width": width,
        "height": height,
    }


def _title(text: str) -> dict[str, Any]:
    return {"text": text, "x": 0.5, "xanchor": "center"}


def to_figure(chart: Mapping[str, Any]) -> go.Figure:
    """Build a Plotly figure from a chart returned by a ``create_*`` function.

    Raises
    ------
    ValueError:
        If the specification contains properties Plotly does not know.
    """
    import plotly.graph_objects as go

    return go.Figure(chart["plotly_json"])


def create_conversions_chart(
    series: Sequence[SeriesPoint], channel_filter: str = "All"
) -> dict[str, Any]:
    """Line chart of daily conversions.

    Parameters
    ----------
    series:
        Daily points or single-channel slices, oldest first
    channel_filter:
        Shown in the title when a single channel is selected

    Returns
    -------
    dict:
        Chart with Plotly figure specification under ``plotly_json``
    """
    title = "Conversions Over Time"
    if channel_filter != "All":
        title += f" ({channel_filter})"
    trace = {
        "type": "scatter",
        "mode": "lines",
        "name": "Conversions",
        "x": [point.date.isoformat() for point in series],
        "y": [point.conversions for point in series],
        "line": {"color": PRIMARY_COLOR, "width": 2},
        "hovertemplate": "%{x}<br>Conversions: %{y}<extra></extra>",
    }
    layout = {
        "title": _title(title),
        "xaxis": {"title": {"text": "Date"}, "showticklabels": False},
        "yaxis": {"title": {"text": "Conversions"}},
        "hovermode": "x unified",
    }
    return _chart([trace], layout)


def create_channel_contribution_chart(
    contribution: Mapping[Channel, int],
) -> dict[str, Any]:
    """Bar chart of activity volume per channel over the selected range."""
    trace = {
        "type": "bar",
        "name": "Volume",
        "x": [channel.value for channel in contribution],
        "y": list(contribution.values()),
        "marker": {"color": PRIMARY_COLOR},
        "hovertemplate": "%{x}: %{y:,}<extra></extra>",
    }
    layout = {
        "title": _title("Channel Contribution"),
        "xaxis": {"title": {"text": "Channel"}},
        "yaxis": {"title": {"text": "Activity Units"}},
        "showlegend": False,
    }
    return _chart([trace], layout)


def create_impressions_spend_chart(series: Sequence[SeriesPoint]) -> dict[str, Any]:
    """Area chart of impressions with spend on a secondary axis."""
    dates = [point.date.isoformat() for point in series]
    impressions_trace = {
        "type": "scatter",
        "mode": "lines",
        "name": "Impressions",
        "x": dates,
        "y": [point.impressions for point in series],
        "fill": "tozeroy",
        "line": {"color": PRIMARY_COLOR, "width": 2},
    }
    spend_trace = {
        "type": "scatter",
        "mode": "lines",
        "name": "Spend",
        "x": dates,
        "y": [point.spend for point in series],
        "yaxis": "y2",
        "line": {"color": SECONDARY_COLOR, "width": 2},
        "hovertemplate": "%{x}<br>Spend: $%{y:,.1f}<extra></extra>",
    }
    layout = {
        "title": _title("Impressions & Spend"),
        "xaxis": {"showticklabels": False},
        "yaxis": {"title": {"text": "Impressions"}, "side": "left"},
        "yaxis2": {"title": {"text": "Spend ($)"}, "overlaying": "y", "side": "right"},
        "hovermode": "x unified",
        "legend": {"x": 0.01, "y": 0.99, "xanchor": "left", "yanchor": "top"},
    }
    return _chart([impressions_trace, spend_trace], layout)


def create_channel_mix_chart(stat: SegmentStat) -> dict[str, Any]:
    """Bar chart of a segment's engagement score per channel."""
    trace = {
        "type": "bar",
        "name": stat.name.value,
        "x": [score.channel.value for score in stat.channel_mix],
        "y": [score.value for score in stat.channel_mix],
        "marker": {"color": PRIMARY_COLOR},
        "hovertemplate": "%{x}: %{y}<extra></extra>",
    }
    layout = {
        "title": _title(f"Channel Mix: {stat.name.value}"),
        "yaxis": {"title": {"text": "Engagement Score"}, "range": [0, 100]},
        "showlegend": False,
    }
    return _chart([trace], layout)


def create_predictive_attributes_chart(stat: SegmentStat) -> dict[str, Any]:
    """Horizontal bars of predictive attribute lift, strongest on top."""
    attributes = list(reversed(stat.predictive_attributes))
    trace = {
        "type": "bar",
        "orientation": "h",
        "name": "Lift",
        "x": [attribute.lift_multiplier for attribute in attributes],
        "y": [attribute.label for attribute in attributes],
        "marker": {"color": SECONDARY_COLOR},
        "hovertemplate": "%{y}: %{x:.1f}x<extra></extra>",
    }
    layout = {
        "title": _title("Top Predictive Attributes"),
        "xaxis": {"title": {"text": "Lift Multiplier"}},
        "showlegend": False,
    }
    return _chart([trace], layout)


def create_funnel_chart(funnel: JourneyFunnel, segment_name: str) -> dict[str, Any]:
    """Funnel chart of lifecycle stage counts.

    Examples
    --------
    >>> from cdp_dashboard.synthetic.journey import compute_funnel
    >>> chart = create_funnel_chart(compute_funnel(0), "Prospects")
    >>> chart["plotly_json"]["data"][0]["type"]
    'funnel'
    """
    trace = {
        "type": "funnel",
        "name": segment_name,
        "y": [stage.value for stage in funnel.stages],
        "x": list(funnel.counts),
        "textinfo": "value+percent previous",
        "marker": {"color": PRIMARY_COLOR},
    }
    layout = {"title": _title(f"Lifecycle Funnel: {segment_name}")}
    return _chart([trace], layout)


def create_stage_heatmap(cells: Sequence[HeatmapCell]) -> dict[str, Any]:
    """Heatmap of engagement-signal intensity per funnel stage."""
    signals: list[str] = []
    stages: list[str] = []
    for cell in cells:
        if cell.signal not in signals:
            signals.append(cell.signal)
        if cell.stage.value not in stages:
            stages.append(cell.stage.value)
    intensity = {(cell.signal, cell.stage.value): cell.intensity for cell in cells}
    z = [[intensity.get((signal, stage)) for stage in stages] for signal in signals]

    trace = {
        "type": "heatmap",
        "x": stages,
        "y": signals,
        "z": z,
        "colorscale": "Blues",
        "zmin": 0,
        "zmax": 1,
        "hovertemplate": "%{y} @ %{x}: %{z:.2f}<extra></extra>",
    }
    layout = {
        "title": _title("Stage Heatmap (Engagement Signals)"),
        "yaxis": {"autorange": "reversed"},
    }
    return _chart([trace], layout)


def create_match_rate_chart(points: Sequence[DataQualityPoint]) -> dict[str, Any]:
    """Line chart of daily identity match rate on a 0-100% axis."""
    trace = {
        "type": "scatter",
        "mode": "lines",
        "name": "Match Rate",
        "x": [point.date.isoformat() for point in points],
        "y": [point.match_rate for point in points],
        "line": {"color": PRIMARY_COLOR, "width": 2},
        "hovertemplate": "%{x}<br>Match rate: %{y:.1%}<extra></extra>",
    }
    layout = {
        "title": _title("Identity Match Rate"),
        "xaxis": {"showticklabels": False},
        "yaxis": {"range": [0, 1], "tickformat": ".0%"},
    }
    return _chart([trace], layout)


def create_valid_invalid_chart(points: Sequence[DataQualityPoint]) -> dict[str, Any]:
    """Stacked area chart of valid and invalid event counts."""
    dates = [point.date.isoformat() for point in points]
    traces = [
        {
            "type": "scatter",
            "mode": "lines",
            "name": "Valid",
            "x": dates,
            "y": [point.valid_count for point in points],
            "stackgroup": "events",
            "line": {"color": PRIMARY_COLOR},
        },
        {
            "type": "scatter",
            "mode": "lines",
            "name": "Invalid",
            "x": dates,
            "y": [point.invalid_count for point in points],
            "stackgroup": "events",
            "line": {"color": SECONDARY_COLOR},
        },
    ]
    layout = {
        "title": _title("Event Validation"),
        "xaxis": {"showticklabels": False},
        "yaxis": {"title": {"text": "Events"}},
        "hovermode": "x unified",
    }
    return _chart(traces, layout)


def create_source_coverage_chart(coverage: Mapping[str, int]) -> dict[str, Any]:
    """Bar chart of expected-event coverage per source."""
    trace = {
        "type": "bar",
        "name": "Coverage",
        "x": list(coverage.keys()),
        "y": list(coverage.values()),
        "marker": {"color": PRIMARY_COLOR},
        "hovertemplate": "%{x}: %{y}%<extra></extra>",
    }
    layout = {
        "title": _title("Source Coverage (Last Snapshot)"),
        "yaxis": {"title": {"text": "% of Expected Events"}, "range": [0, 100]},
        "showlegend": False,
    }
    return _chart([trace], layout)
