"""Read-only query surfaces consumed by the dashboard presentation layer.

The module-level functions compute everything on demand. The
``DashboardDataService`` adds an explicitly scoped LRU cache keyed by
``(days, seed_base, end_date)``; two services never share cached series,
and caching has no effect on the values returned.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

import structlog
from pydantic import BaseModel, Field, field_validator

from cdp_dashboard.analyses.aggregator import (
    DataQualitySummary,
    PerformanceSummary,
    SeriesPoint,
    filter_by_channel,
    source_coverage,
    summarize_data_quality,
    summarize_performance,
)
from cdp_dashboard.config import DashboardSettings, get_settings
from cdp_dashboard.foundation.dimensions import Segment, resolve_segment
from cdp_dashboard.synthetic.data_quality import DataQualityPoint, derive_data_quality
from cdp_dashboard.synthetic.generator import (
    DEFAULT_SEED_BASE,
    DailyPoint,
    generate_daily_series,
)
from cdp_dashboard.synthetic.journey import (
    HeatmapCell,
    JourneyFunnel,
    compute_funnel,
    stage_heatmap,
)
from cdp_dashboard.synthetic.segments import (
    SegmentStat,
    find_segment_stat,
    generate_segment_stats,
)

logger = structlog.get_logger(__name__)


def get_daily_series(
    days: int, seed_base: int = DEFAULT_SEED_BASE, *, end_date: date | None = None
) -> list[DailyPoint]:
    return generate_daily_series(days, seed_base, end_date=end_date)


def get_segment_stats() -> list[SegmentStat]:
    return generate_segment_stats()


def get_journey_funnel(segment_index: int) -> JourneyFunnel:
    return compute_funnel(segment_index)


def get_data_quality_series(
    days: int, seed_base: int = DEFAULT_SEED_BASE, *, end_date: date | None = None
) -> list[DataQualityPoint]:
    return derive_data_quality(generate_daily_series(days, seed_base, end_date=end_date))


class DashboardSelection(BaseModel):
    """Filter bar state: date range, channel and segment."""

    date_range_days: Literal[30, 90, 180] = Field(
        default=90, description="Trailing window in days"
    )
    channel: Literal["All", "Web", "Email", "Paid", "SMS"] = Field(
        default="All", description="Channel filter for the performance tab"
    )
    segment: Segment = Field(
        default=Segment.PROSPECTS,
        description="Segment for the segment and journey tabs",
    )

    @field_validator("segment", mode="before")
    @classmethod
    def _fallback_segment(cls, value: Any) -> Segment:
        # Unrecognised selections fall back to the first segment
        return resolve_segment(value)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the four dashboard tabs render for one selection."""

    selection: DashboardSelection
    performance: PerformanceSummary
    performance_series: list[SeriesPoint]
    segment: SegmentStat
    funnel: JourneyFunnel
    heatmap: list[HeatmapCell]
    data_quality: list[DataQualityPoint]
    data_quality_summary: DataQualitySummary
    source_coverage: dict[str, int]

    def as_dict(self) -> dict[str, Any]:
        return {
            "selection": self.selection.model_dump(mode="json"),
            "performance": {
                **self.performance.as_dict(),
                "series": [point.as_dict() for point in self.performance_series],
            },
            "segment": self.segment.as_dict(),
            "journey": {
                **self.funnel.as_dict(),
                "heatmap": [
                    {
                        "signal": cell.signal,
                        "stage": cell.stage.value,
                        "intensity": cell.intensity,
                    }
                    for cell in self.heatmap
                ],
            },
            "data_quality": {
                **self.data_quality_summary.as_dict(),
                "series": [point.as_dict() for point in self.data_quality],
                "source_coverage": dict(self.source_coverage),
            },
        }


class DashboardDataService:
    """Query surfaces with a per-instance series cache.

    Thread-safe: the cache is guarded by a lock, and cached series are
    stored as tuples of frozen records so callers always get a fresh list.
    """

    def __init__(
        self,
        settings: DashboardSettings | None = None,
        *,
        end_date: date | None = None,
    ):
        """Initialize the service.

        Args:
            settings: Settings to use (default: active settings)
            end_date: Pin the most recent day of every series (default: today)
        """
        self.settings = settings or get_settings()
        self.end_date = end_date
        self._cache: OrderedDict[tuple[int, int, date], tuple[DailyPoint, ...]] = (
            OrderedDict()
        )
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _resolve_days(self, days: int) -> int:
        if days > self.settings.max_range_days:
            logger.warning(
                "date_range_capped",
                requested_days=days,
                max_range_days=self.settings.max_range_days,
            )
            return self.settings.max_range_days
        return days

    def _series(self, days: int, seed_base: int | None) -> tuple[DailyPoint, ...]:
        days = self._resolve_days(days)
        seed = self.settings.seed_base if seed_base is None else seed_base
        end = self.end_date or date.today()
        key = (days, seed, end)

        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                logger.debug("series_cache_hit", days=days, seed_base=seed)
                return cached
            self._misses += 1

        series = tuple(generate_daily_series(days, seed, end_date=end))
        logger.debug(
            "series_generated", days=days, seed_base=seed, end_date=end.isoformat()
        )

        if self.settings.cache_size > 0:
            with self._lock:
                self._cache[key] = series
                while len(self._cache) > self.settings.cache_size:
                    self._cache.popitem(last=False)
        return series

    def get_daily_series(self, days: int, seed_base: int | None = None) -> list[DailyPoint]:
        return list(self._series(days, seed_base))

    def get_segment_stats(self) -> list[SegmentStat]:
        return generate_segment_stats()

    def get_journey_funnel(self, segment_index: int) -> JourneyFunnel:
        return compute_funnel(segment_index)

    def get_data_quality_series(
        self, days: int, seed_base: int | None = None
    ) -> list[DataQualityPoint]:
        return derive_data_quality(
            self._series(days, seed_base), self.settings.max_range_days
        )

    def build_snapshot(self, selection: DashboardSelection | None = None) -> DashboardSnapshot:
        """Assemble the data for all four tabs for ``selection``."""
        selection = selection or DashboardSelection(
            date_range_days=self.settings.default_range_days
        )
        series = self._series(selection.date_range_days, None)
        data_quality = derive_data_quality(series, self.settings.max_range_days)
        segment = selection.segment

        snapshot = DashboardSnapshot(
            selection=selection,
            performance=summarize_performance(
                series, selection.channel, self.settings.per_conversion_value
            ),
            performance_series=filter_by_channel(series, selection.channel),
            segment=find_segment_stat(segment),
            funnel=compute_funnel(segment.index),
            heatmap=stage_heatmap(),
            data_quality=data_quality,
            data_quality_summary=summarize_data_quality(data_quality),
            source_coverage=source_coverage(),
        )
        logger.info(
            "snapshot_built",
            date_range_days=selection.date_range_days,
            channel=selection.channel,
            segment=segment.value,
        )
        return snapshot

    def cache_stats(self) -> dict[str, Any]:
        """Return cache size and hit/miss counters."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._cache),
                "max_size": self.settings.cache_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
