"""Command line entry points for exporting synthetic dashboard data."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from cdp_dashboard.config import get_settings
from cdp_dashboard.foundation.dimensions import (
    ALL_CHANNELS,
    DATE_RANGE_OPTIONS,
    Channel,
    Segment,
)
from cdp_dashboard.formatters.markdown_tables import format_snapshot_report
from cdp_dashboard.observability import configure_logging
from cdp_dashboard.pandas.adapters import (
    daily_series_to_dataframe,
    data_quality_to_dataframe,
)
from cdp_dashboard.service import DashboardDataService, DashboardSelection
from cdp_dashboard.synthetic.data_quality import derive_data_quality
from cdp_dashboard.synthetic.generator import generate_daily_series
from cdp_dashboard.synthetic.validation import (
    check_date_contiguity,
    check_impressions_identity,
    check_match_rate_bounds,
)

logger = logging.getLogger(__name__)


def _parse_end_date(value: str | None) -> date | None:
    if value is None:
        return None
    return date.fromisoformat(value)


def export_snapshot_cli(argv: list[str] | None = None) -> int:
    """Export the dashboard snapshot for one filter selection.

    Writes JSON (default) or a Markdown report to ``--output`` or stdout.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Export synthetic CDP dashboard data for one selection"
    )
    parser.add_argument(
        "--days",
        type=int,
        choices=DATE_RANGE_OPTIONS,
        default=settings.default_range_days,
        help=f"Trailing date range in days (default: {settings.default_range_days})",
    )
    parser.add_argument(
        "--channel",
        choices=[ALL_CHANNELS, *[c.value for c in Channel]],
        default=ALL_CHANNELS,
        help="Channel filter for performance KPIs (default: All)",
    )
    parser.add_argument(
        "--segment",
        default=Segment.PROSPECTS.value,
        help="Segment for segment and journey data; unknown names fall back to Prospects",
    )
    parser.add_argument(
        "--end-date",
        type=str,
        help="Most recent day (ISO format: YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "markdown"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output", type=Path, help="Optional output file; defaults to stdout"
    )

    args = parser.parse_args(argv)
    configure_logging(settings)

    try:
        end_date = _parse_end_date(args.end_date)
    except ValueError:
        logger.error(f"Invalid --end-date {args.end_date!r}; expected YYYY-MM-DD")
        return 2

    service = DashboardDataService(settings, end_date=end_date)
    selection = DashboardSelection(
        date_range_days=args.days, channel=args.channel, segment=args.segment
    )
    snapshot = service.build_snapshot(selection)

    if args.output_format == "markdown":
        content = format_snapshot_report(snapshot)
    else:
        content = json.dumps(snapshot.as_dict(), indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open("w", encoding="utf-8") as fh:
            fh.write(content)
            fh.write("\n")
        logger.info(f"Snapshot exported to {args.output}")
    else:  # stdout fallback enables piping in shell usage.
        sys.stdout.write(content)
        sys.stdout.write("\n")

    return 0


def export_series_cli(argv: list[str] | None = None) -> int:
    """Export the daily series and its data quality series as CSV files.

    The generated data is checked for date contiguity, the impressions
    identity and match-rate bounds before anything is written.

    Returns:
        Exit code (0 for success, 1 for a non-positive range, 2 for a bad
        end date, 3 when the generated data fails validation)
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Export synthetic daily and data quality series as CSV"
    )
    parser.add_argument(
        "output_dir", type=Path, help="Directory for daily.csv and data_quality.csv"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=max(DATE_RANGE_OPTIONS),
        help=f"Number of days to generate (default: {max(DATE_RANGE_OPTIONS)})",
    )
    parser.add_argument(
        "--seed-base",
        type=int,
        default=settings.seed_base,
        help=f"Base seed (default: {settings.seed_base})",
    )
    parser.add_argument(
        "--end-date",
        type=str,
        help="Most recent day (ISO format: YYYY-MM-DD). Defaults to today.",
    )

    args = parser.parse_args(argv)
    configure_logging(settings)

    if args.days <= 0:
        logger.error(f"--days must be positive, got {args.days}")
        return 1
    try:
        end_date = _parse_end_date(args.end_date)
    except ValueError:
        logger.error(f"Invalid --end-date {args.end_date!r}; expected YYYY-MM-DD")
        return 2

    series = generate_daily_series(args.days, args.seed_base, end_date=end_date)
    quality = derive_data_quality(series, settings.max_range_days)

    failures = [
        result
        for result in (
            check_date_contiguity(series),
            check_impressions_identity(series),
            check_match_rate_bounds(quality),
        )
        if not result.ok
    ]
    if failures:
        for result in failures:
            logger.error(f"Generated data failed validation: {result.message}")
        return 3

    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    daily_series_to_dataframe(series).to_csv(output_dir / "daily.csv", index=False)
    data_quality_to_dataframe(quality).to_csv(
        output_dir / "data_quality.csv", index=False
    )
    logger.info(
        f"Exported {len(series)} days (seed_base={args.seed_base}) to {output_dir}"
    )
    return 0


def main() -> None:
    raise SystemExit(export_snapshot_cli())


def series_main() -> None:
    raise SystemExit(export_series_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
