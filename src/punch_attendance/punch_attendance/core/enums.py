from __future__ import annotations

from enum import Enum


class ShiftStatus(str, Enum):
    """Trạng thái ca làm việc sau khi ghép check-in/check-out."""

    NOT_STARTED = "not-started"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    COMPLETED = "completed"


class PipelineStage(str, Enum):
    """Stage of the acquisition/resolution pipeline an error belongs to."""

    CONFIG = "config"
    FETCH = "fetch"
    GROUP = "group"
    RESOLVE = "resolve"
    AGGREGATE = "aggregate"


class ConfidenceFlag(str, Enum):
    """Why a successful fetch should be treated as lower-confidence."""

    IDENTITY_LOOKUP_FAILED = "identity-lookup-failed"
    BELOW_ACCEPTABLE_COUNT = "below-acceptable-count"
