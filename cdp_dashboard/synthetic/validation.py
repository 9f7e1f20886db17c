from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Sequence

from .data_quality import DataQualityPoint
from .generator import IMPRESSIONS_PER_UNIT, DailyPoint
from .journey import JourneyFunnel
from .segments import SegmentStat


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str = ""


def check_date_contiguity(series: Sequence[DailyPoint]) -> ValidationResult:
    if not series:
        return ValidationResult(True, "no points to validate")
    for idx in range(1, len(series)):
        gap = series[idx].date - series[idx - 1].date
        if gap != timedelta(days=1):
            return ValidationResult(
                False,
                f"dates not contiguous at index {idx}: "
                f"{series[idx - 1].date.isoformat()} -> {series[idx].date.isoformat()}",
            )
    return ValidationResult(True, f"{len(series)} contiguous days")


def check_impressions_identity(series: Sequence[DailyPoint]) -> ValidationResult:
    for idx, point in enumerate(series):
        expected = IMPRESSIONS_PER_UNIT * point.total_volume
        if point.impressions != expected:
            return ValidationResult(
                False,
                f"impressions {point.impressions} != {expected} at index {idx}",
            )
    return ValidationResult(True, "impressions match channel volume")


def check_match_rate_bounds(points: Sequence[DataQualityPoint]) -> ValidationResult:
    for idx, point in enumerate(points):
        if not 0 <= point.match_rate <= 1:
            return ValidationResult(
                False, f"match rate out of bounds at index {idx}: {point.match_rate}"
            )
    return ValidationResult(True, "match rates within [0, 1]")


def check_segment_ordering(stats: Sequence[SegmentStat]) -> ValidationResult:
    """Sizes must strictly decrease and lifetime values strictly increase."""
    for idx in range(1, len(stats)):
        prev, cur = stats[idx - 1], stats[idx]
        if cur.size >= prev.size:
            return ValidationResult(
                False,
                f"size does not decrease from {prev.name.value} to {cur.name.value}",
            )
        if cur.lifetime_value <= prev.lifetime_value:
            return ValidationResult(
                False,
                f"lifetime value does not increase from {prev.name.value} "
                f"to {cur.name.value}",
            )
    return ValidationResult(True, "segment ordering ok")


def check_funnel_non_negative(funnel: JourneyFunnel) -> ValidationResult:
    for stage, count in zip(funnel.stages, funnel.counts):
        if count < 0:
            return ValidationResult(False, f"{stage.value} count is negative: {count}")
    return ValidationResult(True, "funnel counts non-negative")
