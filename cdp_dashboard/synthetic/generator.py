from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
import logging
import math
from typing import Any, List, Mapping, Optional

from cdp_dashboard.foundation.dimensions import Channel
from ._utils import round_to_tenth

logger = logging.getLogger(__name__)

DEFAULT_SEED_BASE = 42

# Each day owns a block of 7 consecutive sub-seeds
DAY_SEED_STRIDE = 7

# Impressions served per unit of channel activity
IMPRESSIONS_PER_UNIT = 40

# (sub-seed offset, floor, spread) per channel: volume = floor(floor + spread * r)
CHANNEL_VOLUME_SHAPES: Mapping[Channel, tuple[int, int, int]] = {
    Channel.WEB: (1, 100, 200),
    Channel.EMAIL: (2, 60, 120),
    Channel.PAID: (3, 80, 220),
    Channel.SMS: (4, 20, 70),
}

# Conversions per unit of channel activity
CONVERSION_WEIGHTS: Mapping[Channel, float] = {
    Channel.WEB: 0.06,
    Channel.EMAIL: 0.09,
    Channel.PAID: 0.04,
    Channel.SMS: 0.12,
}

CONVERSION_NOISE_OFFSET = 5
SPEND_NOISE_OFFSET = 6


def seeded_scalar(seed: float) -> float:
    """Map ``seed`` to a reproducible pseudo-random value in [0, 1).

    This is the fractional part of ``sin(seed) * 10000``: not a quality
    random source, but identical seeds give bit-identical values across
    runs without any persisted state.

    Examples
    --------
    >>> seeded_scalar(0)
    0.0
    >>> seeded_scalar(42) == seeded_scalar(42)
    True
    """
    x = math.sin(seed) * 10000
    return x - math.floor(x)


@dataclass(frozen=True)
class DailyPoint:
    """One calendar day of synthetic channel activity.

    Attributes
    ----------
    date:
        Calendar day this point describes.
    channel_volume:
        Activity units for every channel; keys are exactly the four channels.
    conversions:
        Weighted combination of channel volumes plus a small noise term.
    impressions:
        Always ``40 * total_volume``.
    spend:
        Spend in currency units, rounded to one decimal place.
    """

    date: date
    channel_volume: Mapping[Channel, int]
    conversions: int
    impressions: int
    spend: float

    def __post_init__(self) -> None:
        missing = [c.value for c in Channel if c not in self.channel_volume]
        if missing or len(self.channel_volume) != len(Channel):
            raise ValueError(
                f"channel_volume must cover exactly {[c.value for c in Channel]}, "
                f"missing {missing}"
            )
        for channel, volume in self.channel_volume.items():
            if volume < 0:
                raise ValueError(
                    f"{channel.value} volume cannot be negative: {volume}"
                )
        if self.conversions < 0:
            raise ValueError(f"Conversions cannot be negative: {self.conversions}")
        if self.impressions != IMPRESSIONS_PER_UNIT * self.total_volume:
            raise ValueError(
                f"Impressions ({self.impressions}) must equal "
                f"{IMPRESSIONS_PER_UNIT} x total volume ({self.total_volume})"
            )
        if self.spend < 0:
            raise ValueError(f"Spend cannot be negative: {self.spend}")

    @property
    def total_volume(self) -> int:
        return sum(self.channel_volume.values())

    def volume(self, channel: Channel) -> int:
        return self.channel_volume[channel]

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"date": self.date.isoformat()}
        for channel in Channel:
            payload[channel.value] = self.channel_volume[channel]
        payload["conversions"] = self.conversions
        payload["impressions"] = self.impressions
        payload["spend"] = self.spend
        return payload


def _build_day(day: date, days_ago: int, seed_base: int) -> DailyPoint:
    def r(offset: int) -> float:
        return seeded_scalar(seed_base + days_ago * DAY_SEED_STRIDE + offset)

    volumes = {
        channel: math.floor(floor + spread * r(offset))
        for channel, (offset, floor, spread) in CHANNEL_VOLUME_SHAPES.items()
    }
    conversions = math.floor(
        sum(volumes[c] * weight for c, weight in CONVERSION_WEIGHTS.items())
        + 10 * r(CONVERSION_NOISE_OFFSET)
    )
    spend = round_to_tenth(
        volumes[Channel.PAID] * 0.9
        + volumes[Channel.SMS] * 0.2
        + 25 * r(SPEND_NOISE_OFFSET)
    )
    return DailyPoint(
        date=day,
        channel_volume=volumes,
        conversions=conversions,
        impressions=IMPRESSIONS_PER_UNIT * sum(volumes.values()),
        spend=spend,
    )


def generate_daily_series(
    days: int,
    seed_base: int = DEFAULT_SEED_BASE,
    *,
    end_date: Optional[date] = None,
) -> List[DailyPoint]:
    """Generate ``days`` consecutive daily points ending on ``end_date``.

    Points are ordered oldest to newest. Each day's values depend only on
    ``seed_base`` and how many days before ``end_date`` it falls, so the
    last ``n`` points of a longer series match the ``n``-day series.

    Parameters
    ----------
    days:
        Number of days to generate. Non-positive values yield an empty list.
    seed_base:
        Base seed shared by all sub-seeds.
    end_date:
        Most recent day in the series; defaults to today.
    """

    if days <= 0:
        return []

    end = end_date or date.today()
    series: List[DailyPoint] = []
    for days_ago in range(days - 1, -1, -1):
        series.append(
            _build_day(end - timedelta(days=days_ago), days_ago, seed_base)
        )
    logger.debug(
        f"Generated {len(series)} daily points ending {end.isoformat()} "
        f"(seed_base={seed_base})"
    )
    return series
