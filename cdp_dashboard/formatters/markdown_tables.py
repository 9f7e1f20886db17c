"""Markdown table formatters for dashboard KPIs.

Formats roll-ups and segment/funnel records as markdown tables suitable
for text reports and terminal output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from cdp_dashboard.analyses.aggregator import DataQualitySummary, PerformanceSummary
    from cdp_dashboard.service import DashboardSnapshot
    from cdp_dashboard.synthetic.journey import JourneyFunnel
    from cdp_dashboard.synthetic.segments import SegmentStat


def format_performance_table(summary: PerformanceSummary) -> str:
    """Format performance tab KPIs as a markdown table.

    Parameters
    ----------
    summary:
        Output of :func:`~cdp_dashboard.analyses.aggregator.summarize_performance`

    Returns
    -------
    str:
        Markdown KPI table followed by a channel contribution table
    """
    totals = summary.totals
    table = f"""## Performance ({summary.channel_filter})

| Metric | Value |
|--------|-------|
| Total Conversions | {totals.conversions:,} |
| Impressions | {totals.impressions:,} |
| Spend | ${totals.spend:,.2f} |
| Conversion Rate | {summary.conversion_rate:.2%} |
| Estimated ROAS | {summary.roas:.1f}x |
| Profile Completion | {summary.profile_completion}% |
| Active Segments | {summary.active_segments} |
| Conversion Lift | +{summary.conversion_lift}% |
"""

    if summary.channel_contribution:
        table += "\n### Channel Contribution\n\n"
        table += "| Channel | Volume |\n"
        table += "|---------|--------|\n"
        for channel, volume in summary.channel_contribution.items():
            table += f"| {channel.value} | {volume:,} |\n"

    return table


def format_segment_table(stat: SegmentStat) -> str:
    table = f"""## Segment: {stat.name.value}

| Metric | Value |
|--------|-------|
| Segment Size | {stat.size:,} |
| Engagement Rate | {stat.engagement_rate:.0%} |
| Conversion Rate | {stat.conversion_rate:.1%} |
| Lifetime Value | ${stat.lifetime_value:,.0f} |
"""

    table += "\n### Channel Mix\n\n"
    table += "| Channel | Score |\n"
    table += "|---------|-------|\n"
    for score in stat.channel_mix:
        table += f"| {score.channel.value} | {score.value} |\n"

    table += "\n### Predictive Attributes\n\n"
    table += "| Attribute | Lift |\n"
    table += "|-----------|------|\n"
    for attribute in stat.predictive_attributes:
        table += f"| {attribute.label} | {attribute.lift_multiplier:.1f}x |\n"

    return table


def format_funnel_table(funnel: JourneyFunnel, segment_name: str) -> str:
    """Format funnel stage counts and drop-offs as markdown tables.

    Examples
    --------
    >>> from cdp_dashboard.synthetic.journey import compute_funnel
    >>> "10,000" in format_funnel_table(compute_funnel(0), "Prospects")
    True
    """
    table = f"## Lifecycle Funnel: {segment_name}\n\n"
    table += "| Stage | Count | Stage CVR |\n"
    table += "|-------|-------|-----------|\n"
    rates = (None, *funnel.stage_conversion_rates)
    for stage, count, rate in zip(funnel.stages, funnel.counts, rates):
        cvr = "-" if rate is None else f"{rate:.1%}"
        table += f"| {stage.value} | {count:,} | {cvr} |\n"

    table += "\n### Drop-off Analysis\n\n"
    table += "| Transition | Drop-off | Rate |\n"
    table += "|------------|----------|------|\n"
    for transition in funnel.drop_offs:
        table += (
            f"| {transition.from_stage.value} → {transition.to_stage.value} "
            f"| -{transition.drop_off_count:,} | {transition.drop_off_rate:.1%} |\n"
        )
    return table


def format_data_quality_table(
    summary: DataQualitySummary, coverage: Mapping[str, int]
) -> str:
    table = f"""## Data Quality (Latest Snapshot)

| Metric | Value |
|--------|-------|
| Stitched Profiles | {summary.stitched_profiles:,} |
| Duplicate Suspects | {summary.duplicate_suspects:,} |
| Match Rate | {summary.match_rate_pct}% |
"""
    if coverage:
        table += "\n### Source Coverage\n\n"
        table += "| Source | Coverage |\n"
        table += "|--------|----------|\n"
        for source, pct in coverage.items():
            table += f"| {source} | {pct}% |\n"
    return table


def format_snapshot_report(snapshot: DashboardSnapshot) -> str:
    """Combine all tab tables for a snapshot into one markdown report."""
    selection = snapshot.selection
    header = (
        "# CDP Dashboard Snapshot\n\n"
        f"**Date Range:** last {selection.date_range_days} days  \n"
        f"**Channel:** {selection.channel}  \n"
        f"**Segment:** {selection.segment.value}\n"
    )
    sections = [
        header,
        format_performance_table(snapshot.performance),
        format_segment_table(snapshot.segment),
        format_funnel_table(snapshot.funnel, selection.segment.value),
        format_data_quality_table(
            snapshot.data_quality_summary, snapshot.source_coverage
        ),
    ]
    return "\n".join(sections)
