"""Fixed dimensions of the CDP dashboard.

Channels, audience segments and funnel stages are closed sets. Every
generator and aggregator indexes into them by enum member rather than by
free-form string so that channel-keyed mappings are always complete.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Literal

logger = logging.getLogger(__name__)


class Channel(str, Enum):
    """Synthetic marketing channels, in display order."""

    WEB = "Web"
    EMAIL = "Email"
    PAID = "Paid"
    SMS = "SMS"

    @property
    def index(self) -> int:
        return list(Channel).index(self)


class Segment(str, Enum):
    """Audience lifecycle segments, in display order."""

    PROSPECTS = "Prospects"
    APPLICANTS = "Applicants"
    ENROLLED = "Enrolled"
    AT_RISK = "At-Risk"
    ALUMNI = "Alumni"

    @property
    def index(self) -> int:
        return list(Segment).index(self)


class FunnelStage(str, Enum):
    """Lifecycle milestones of the journey funnel."""

    REGISTRATION = "Registration"
    APPLICATION = "Application"
    ENROLLMENT = "Enrollment"
    COURSE_ENGAGEMENT = "Course Engagement"


class UnknownSegmentError(LookupError):
    """Raised when a segment name is outside the fixed segment set."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Unknown segment {name!r}; expected one of "
            f"{[segment.value for segment in Segment]}"
        )
        self.name = name


ALL_CHANNELS = "All"

ChannelFilter = Literal["All", "Web", "Email", "Paid", "SMS"]

# Date ranges offered by the filter bar, in days
DATE_RANGE_OPTIONS = (30, 90, 180)

DEFAULT_SEGMENT = Segment.PROSPECTS

# Event sources shown on the data quality coverage panel
SOURCES = ("Web", "CRM", "LMS", "Ad Platforms", "Email", "SMS")

# Engagement signals shown as heatmap rows on the journey tab
SIGNALS = ("Email", "Web", "Paid", "SMS", "Chat")


def parse_segment(name: str | Segment) -> Segment:
    """Return the segment called ``name``.

    Raises
    ------
    UnknownSegmentError
        If ``name`` is not one of the five fixed segments.
    """
    if isinstance(name, Segment):
        return name
    try:
        return Segment(name)
    except ValueError:
        raise UnknownSegmentError(name) from None


def resolve_segment(name: str | Segment | None) -> Segment:
    """Lenient segment lookup that falls back to the first segment."""
    if name is None:
        return DEFAULT_SEGMENT
    try:
        return parse_segment(name)
    except UnknownSegmentError:
        logger.warning(
            f"Unknown segment {name!r}, falling back to {DEFAULT_SEGMENT.value}"
        )
        return DEFAULT_SEGMENT


def parse_channel_filter(value: str | Channel | None) -> Channel | None:
    """Map a channel filter selection to a channel, or None for all channels.

    Raises
    ------
    ValueError
        If ``value`` is neither ``"All"`` nor a known channel.
    """
    if value is None or value == ALL_CHANNELS:
        return None
    if isinstance(value, Channel):
        return value
    try:
        return Channel(value)
    except ValueError:
        raise ValueError(
            f"Unknown channel filter {value!r}; expected 'All' or one of "
            f"{[channel.value for channel in Channel]}"
        ) from None
