"""Journey funnel and stage heatmap for a segment.

The funnel follows a fixed template of four lifecycle stages. Only the
registration count is independent; each later stage is a trigonometrically
shaped fraction of the previous one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Sequence

from cdp_dashboard.foundation.dimensions import SIGNALS, FunnelStage
from ._utils import safe_ratio

logger = logging.getLogger(__name__)

BASE_REGISTRATIONS = 10000
REGISTRATION_STEP = 1200

JOURNEY_STAGES: tuple[FunnelStage, ...] = tuple(FunnelStage)


@dataclass(frozen=True)
class StageTransition:
    """Movement between two consecutive funnel stages.

    Attributes
    ----------
    from_stage, to_stage:
        The consecutive stages being compared.
    conversion_rate:
        ``to_count / from_count``; 0.0 when ``from_count`` is 0.
    drop_off_count:
        ``from_count - to_count``.
    drop_off_rate:
        ``drop_off_count / from_count``; 0.0 when ``from_count`` is 0.
    """

    from_stage: FunnelStage
    to_stage: FunnelStage
    conversion_rate: float
    drop_off_count: int
    drop_off_rate: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "from_stage": self.from_stage.value,
            "to_stage": self.to_stage.value,
            "conversion_rate": self.conversion_rate,
            "drop_off_count": self.drop_off_count,
            "drop_off_rate": self.drop_off_rate,
        }


@dataclass(frozen=True)
class JourneyFunnel:
    """Stage-by-stage counts for one segment's lifecycle funnel."""

    segment_index: int
    stages: tuple[FunnelStage, ...]
    counts: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.stages) != len(self.counts):
            raise ValueError(
                f"stages ({len(self.stages)}) and counts ({len(self.counts)}) must align"
            )
        for stage, count in zip(self.stages, self.counts):
            if count < 0:
                raise ValueError(f"{stage.value} count cannot be negative: {count}")

    @property
    def stage_conversion_rates(self) -> tuple[float, ...]:
        return tuple(
            safe_ratio(self.counts[i + 1], self.counts[i])
            for i in range(len(self.counts) - 1)
        )

    @property
    def drop_offs(self) -> tuple[StageTransition, ...]:
        transitions = []
        for i in range(len(self.counts) - 1):
            current, following = self.counts[i], self.counts[i + 1]
            drop = current - following
            transitions.append(
                StageTransition(
                    from_stage=self.stages[i],
                    to_stage=self.stages[i + 1],
                    conversion_rate=safe_ratio(following, current),
                    drop_off_count=drop,
                    drop_off_rate=safe_ratio(drop, current),
                )
            )
        return tuple(transitions)

    def count_for(self, stage: FunnelStage) -> int:
        return self.counts[self.stages.index(stage)]

    def as_dict(self) -> dict[str, Any]:
        return {
            "segment_index": self.segment_index,
            "stages": [stage.value for stage in self.stages],
            "counts": list(self.counts),
            "stage_conversion_rates": list(self.stage_conversion_rates),
            "drop_offs": [transition.as_dict() for transition in self.drop_offs],
        }


def compute_funnel(segment_index: int) -> JourneyFunnel:
    """Compute the journey funnel for the segment at ``segment_index``.

    Registration shrinks by 1,200 per segment index and is clamped at
    zero, so indices past the fixed segment set yield an all-zero funnel
    rather than negative counts.

    Parameters
    ----------
    segment_index:
        0-based segment position.

    Raises
    ------
    ValueError
        If ``segment_index`` is negative.

    Examples
    --------
    >>> compute_funnel(0).counts
    (10000, 6200, 3720, 2977)
    """
    if segment_index < 0:
        raise ValueError(f"Segment index cannot be negative: {segment_index}")

    registration = max(0, BASE_REGISTRATIONS - REGISTRATION_STEP * segment_index)
    application = math.floor(registration * (0.62 + 0.06 * math.sin(segment_index)))
    enrollment = math.floor(application * (0.55 + 0.05 * math.cos(segment_index)))
    engagement = math.floor(enrollment * (0.75 + 0.06 * math.sin(segment_index + 1)))

    if registration == 0:
        logger.debug(f"Segment index {segment_index} has no registrations")

    return JourneyFunnel(
        segment_index=segment_index,
        stages=JOURNEY_STAGES,
        counts=(registration, application, enrollment, engagement),
    )


@dataclass(frozen=True)
class HeatmapCell:
    signal: str
    stage: FunnelStage
    intensity: float


def stage_heatmap(signals: Sequence[str] = SIGNALS) -> list[HeatmapCell]:
    """Engagement-signal intensity per funnel stage, in [0.25, 0.95].

    Cells are ordered row by row: every stage of the first signal, then
    the next signal.
    """
    return [
        HeatmapCell(
            signal=signal,
            stage=stage,
            intensity=0.25 + 0.7 * abs(math.sin(row + col + 0.7)),
        )
        for row, signal in enumerate(signals)
        for col, stage in enumerate(JOURNEY_STAGES)
    ]
