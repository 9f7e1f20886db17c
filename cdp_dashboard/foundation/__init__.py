"""Foundational dimensions shared by every generator and aggregator.

This package exposes the closed sets the dashboard is sliced by:
channels, audience segments, funnel stages, date ranges, event sources
and engagement signals.
"""

from .dimensions import (
    ALL_CHANNELS,
    DATE_RANGE_OPTIONS,
    DEFAULT_SEGMENT,
    SIGNALS,
    SOURCES,
    Channel,
    ChannelFilter,
    FunnelStage,
    Segment,
    UnknownSegmentError,
    parse_channel_filter,
    parse_segment,
    resolve_segment,
)

__all__ = [
    "ALL_CHANNELS",
    "DATE_RANGE_OPTIONS",
    "DEFAULT_SEGMENT",
    "SIGNALS",
    "SOURCES",
    "Channel",
    "ChannelFilter",
    "FunnelStage",
    "Segment",
    "UnknownSegmentError",
    "parse_channel_filter",
    "parse_segment",
    "resolve_segment",
]
