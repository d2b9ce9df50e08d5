"""Domain models for scores and statistics."""

from dataclasses import dataclass, field

from prayer_tracker.domain.prayers import PrayerStatus, PrayerType


@dataclass(frozen=True)
class ScoreEntry:
    """Points earned by one qualifying prayer instance."""

    prayer: PrayerType
    status: PrayerStatus
    points: int


@dataclass(frozen=True)
class Score:
    """Point score for a day or a range of days."""

    total_points: int
    max_points: int
    percentage: int
    normalized_score: float
    breakdown: list[ScoreEntry] = field(default_factory=list)


@dataclass
class PrayerCounts:
    """Counts of categorical outcomes."""

    on_time: int = 0
    late: int = 0
    missed: int = 0


@dataclass
class RangeStats:
    """Outcome counts over a date range, overall and per prayer."""

    total: PrayerCounts
    by_prayer: dict[PrayerType, PrayerCounts]


@dataclass(frozen=True)
class RiskStatus:
    """Consecutive-inactivity result for one individual."""

    is_at_risk: bool
    consecutive_inactive_days: int
