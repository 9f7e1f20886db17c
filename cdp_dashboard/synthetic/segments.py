"""Synthetic audience segment statistics.

Each of the five lifecycle segments gets a size, engagement and
conversion rates, a lifetime value, a per-channel engagement mix and a
ranked list of predictive attributes. Values are trigonometric functions
of the segment index, so they are stable across runs without any seed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from cdp_dashboard.foundation.dimensions import (
    DEFAULT_SEGMENT,
    Channel,
    Segment,
    UnknownSegmentError,
    parse_segment,
)
from ._utils import round_half_up

logger = logging.getLogger(__name__)

BASE_SEGMENT_SIZE = 20000
SEGMENT_SIZE_STEP = 2500
BASE_LIFETIME_VALUE = 900
LIFETIME_VALUE_STEP = 250


@dataclass(frozen=True)
class ChannelScore:
    """Engagement score (0-100) of a segment on one channel."""

    channel: Channel
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 100:
            raise ValueError(
                f"Channel score must be 0-100 for {self.channel.value}: {self.value}"
            )


@dataclass(frozen=True)
class PredictiveAttribute:
    """Behavioural attribute and its conversion lift multiplier."""

    label: str
    lift_multiplier: float

    def __post_init__(self) -> None:
        if self.lift_multiplier < 1:
            raise ValueError(
                f"Lift multiplier must be >= 1 for {self.label!r}: {self.lift_multiplier}"
            )


# Shared by every segment, ranked by lift
PREDICTIVE_ATTRIBUTES: tuple[PredictiveAttribute, ...] = tuple(
    sorted(
        (
            PredictiveAttribute("Visited Learning Pages ≥3", 1.9),
            PredictiveAttribute("Opened Email in 7d", 1.6),
            PredictiveAttribute("Clicked SMS", 2.2),
            PredictiveAttribute("Viewed Scholarship Info", 1.4),
            PredictiveAttribute("Returning Visitor", 1.7),
        ),
        key=lambda attribute: attribute.lift_multiplier,
        reverse=True,
    )
)


@dataclass(frozen=True)
class SegmentStat:
    """Synthetic profile of one audience segment.

    Attributes
    ----------
    name:
        Segment this record describes.
    size:
        Number of profiles in the segment.
    engagement_rate:
        Share of profiles active in the last 30 days, in [0, 1].
    conversion_rate:
        Share of profiles reaching the primary goal, in [0, 1].
    lifetime_value:
        Average lifetime value per profile.
    channel_mix:
        One engagement score per channel, in channel order.
    predictive_attributes:
        Attributes ranked by lift multiplier, highest first.
    """

    name: Segment
    size: int
    engagement_rate: float
    conversion_rate: float
    lifetime_value: float
    channel_mix: tuple[ChannelScore, ...]
    predictive_attributes: tuple[PredictiveAttribute, ...]

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Segment size must be positive: {self.size}")
        if not 0 <= self.engagement_rate <= 1:
            raise ValueError(
                f"Engagement rate must be 0-1: {self.engagement_rate}"
            )
        if not 0 <= self.conversion_rate <= 1:
            raise ValueError(
                f"Conversion rate must be 0-1: {self.conversion_rate}"
            )
        if self.lifetime_value <= 0:
            raise ValueError(
                f"Lifetime value must be positive: {self.lifetime_value}"
            )
        if [score.channel for score in self.channel_mix] != list(Channel):
            raise ValueError("channel_mix must hold one score per channel in order")

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name.value,
            "size": self.size,
            "engagement_rate": self.engagement_rate,
            "conversion_rate": self.conversion_rate,
            "lifetime_value": self.lifetime_value,
            "channel_mix": [
                {"channel": score.channel.value, "value": score.value}
                for score in self.channel_mix
            ],
            "predictive_attributes": [
                {"label": a.label, "lift_multiplier": a.lift_multiplier}
                for a in self.predictive_attributes
            ],
        }


def _build_segment(segment: Segment) -> SegmentStat:
    idx = segment.index
    channel_mix = tuple(
        ChannelScore(
            channel=channel,
            value=round_half_up(
                (0.2 + 0.15 * math.sin((idx + 1) * (j + 1))) * 100
            ),
        )
        for j, channel in enumerate(Channel)
    )
    return SegmentStat(
        name=segment,
        size=BASE_SEGMENT_SIZE - idx * SEGMENT_SIZE_STEP,
        engagement_rate=0.25 + 0.08 * math.sin(idx + 1),
        conversion_rate=0.03 + 0.015 * math.cos(idx + 0.5),
        lifetime_value=BASE_LIFETIME_VALUE + idx * LIFETIME_VALUE_STEP,
        channel_mix=channel_mix,
        predictive_attributes=PREDICTIVE_ATTRIBUTES,
    )


def generate_segment_stats() -> list[SegmentStat]:
    """Return one record per segment, in fixed segment order."""
    return [_build_segment(segment) for segment in Segment]


def get_segment_stat(name: str | Segment) -> SegmentStat:
    """Return the record for ``name``.

    Raises
    ------
    UnknownSegmentError
        If ``name`` is not a known segment.
    """
    return _build_segment(parse_segment(name))


def find_segment_stat(name: str | Segment | None) -> SegmentStat:
    """Like :func:`get_segment_stat`, but unknown names fall back to the first segment."""
    if name is None:
        return _build_segment(DEFAULT_SEGMENT)
    try:
        return get_segment_stat(name)
    except UnknownSegmentError as exc:
        logger.warning(f"{exc}; showing {DEFAULT_SEGMENT.value} instead")
        return _build_segment(DEFAULT_SEGMENT)
