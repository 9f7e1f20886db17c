from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
import math
from typing import Any, List, Sequence

from cdp_dashboard.foundation.dimensions import DATE_RANGE_OPTIONS
from .generator import DailyPoint
from ._utils import clamp, safe_ratio

logger = logging.getLogger(__name__)

# Days on the shared data quality timeline: the longest date range
DATA_QUALITY_HORIZON = max(DATE_RANGE_OPTIONS)


@dataclass(frozen=True)
class DataQualityPoint:
    """Identity-resolution metrics for one day.

    Attributes
    ----------
    date:
        Day of the aligned :class:`DailyPoint`.
    valid_count, invalid_count:
        Events passing and failing validation.
    stitched_count:
        Valid events stitched into a unified profile.
    duplicate_count:
        Events flagged as suspected duplicates.
    match_rate:
        ``stitched / (valid + invalid)`` clamped to [0, 1].
    """

    date: date
    valid_count: int
    invalid_count: int
    stitched_count: int
    duplicate_count: int
    match_rate: float

    def __post_init__(self) -> None:
        for name in ("valid_count", "invalid_count", "stitched_count", "duplicate_count"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")
        if not 0 <= self.match_rate <= 1:
            raise ValueError(f"Match rate must be 0-1: {self.match_rate}")

    @property
    def total_events(self) -> int:
        return self.valid_count + self.invalid_count

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "valid": self.valid_count,
            "invalid": self.invalid_count,
            "stitched": self.stitched_count,
            "match_rate": self.match_rate,
            "duplicates": self.duplicate_count,
        }


def stitch_match_rate(stitched: int, valid: int, invalid: int) -> float:
    """Share of validated events stitched into a profile, clamped to [0, 1].

    Returns 0.0 when there are no events at all.

    Example:
        >>> stitch_match_rate(300, 100, 20)
        1.0
    """
    return clamp(safe_ratio(stitched, valid + invalid))


def _derive_point(index: int, point: DailyPoint) -> DataQualityPoint:
    valid = math.floor(point.total_volume * (0.92 + 0.03 * math.sin(index / 12)))
    invalid = math.floor(valid * (0.06 + 0.02 * math.cos(index / 9)))
    stitched = math.floor(valid * (0.55 + 0.1 * math.sin(index / 20)))
    duplicates = math.floor((valid + invalid) * (0.02 + 0.01 * math.cos(index / 7)))
    return DataQualityPoint(
        date=point.date,
        valid_count=valid,
        invalid_count=invalid,
        stitched_count=stitched,
        duplicate_count=duplicates,
        match_rate=stitch_match_rate(stitched, valid, invalid),
    )


def derive_data_quality(
    series: Sequence[DailyPoint], horizon: int = DATA_QUALITY_HORIZON
) -> List[DataQualityPoint]:
    """Derive one :class:`DataQualityPoint` per daily point.

    The shaping terms use each day's position on a fixed ``horizon``-day
    timeline ending on the last point of ``series``, so a day keeps the
    same metrics whatever window it is requested in: the last 30 points
    of a 180-day derivation equal the 30-day derivation. Windows longer
    than ``horizon`` give their oldest days negative positions.
    """

    offset = horizon - len(series)
    points = [_derive_point(offset + i, point) for i, point in enumerate(series)]
    logger.debug(f"Derived {len(points)} data quality points (horizon={horizon})")
    return points
