"""Deterministic synthetic data for the CDP dashboard.

Every value here is a closed-form function of integer seeds or segment
indices, so the dashboard shows the same numbers on every reload without
storing anything.
"""

from .generator import (
    DEFAULT_SEED_BASE,
    DailyPoint,
    generate_daily_series,
    seeded_scalar,
)
from .segments import (
    PREDICTIVE_ATTRIBUTES,
    ChannelScore,
    PredictiveAttribute,
    SegmentStat,
    find_segment_stat,
    generate_segment_stats,
    get_segment_stat,
)
from .journey import (
    JOURNEY_STAGES,
    HeatmapCell,
    JourneyFunnel,
    StageTransition,
    compute_funnel,
    stage_heatmap,
)
from .data_quality import (
    DATA_QUALITY_HORIZON,
    DataQualityPoint,
    derive_data_quality,
    stitch_match_rate,
)
from .validation import (
    ValidationResult,
    check_date_contiguity,
    check_funnel_non_negative,
    check_impressions_identity,
    check_match_rate_bounds,
    check_segment_ordering,
)

__all__ = [
    "DEFAULT_SEED_BASE",
    "DailyPoint",
    "generate_daily_series",
    "seeded_scalar",
    "PREDICTIVE_ATTRIBUTES",
    "ChannelScore",
    "PredictiveAttribute",
    "SegmentStat",
    "find_segment_stat",
    "generate_segment_stats",
    "get_segment_stat",
    "JOURNEY_STAGES",
    "HeatmapCell",
    "JourneyFunnel",
    "StageTransition",
    "compute_funnel",
    "stage_heatmap",
    "DataQualityPoint",
    "derive_data_quality",
    "stitch_match_rate",
    "DATA_QUALITY_HORIZON",
    "ValidationResult",
    "check_date_contiguity",
    "check_funnel_non_negative",
    "check_impressions_identity",
    "check_match_rate_bounds",
    "check_segment_ordering",
]
