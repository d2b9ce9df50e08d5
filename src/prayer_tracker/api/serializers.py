"""JSON serialization of domain results."""

from prayer_tracker.domain.prayers import PrayerSlot
from prayer_tracker.domain.stats import PrayerCounts, RangeStats, RiskStatus, Score
from prayer_tracker.services.windows import format_window


def serialize_score(score: Score) -> dict[str, object]:
    """Convert a score to JSON with its per-prayer breakdown."""
    return {
        "total_points": score.total_points,
        "max_points": score.max_points,
        "percentage": score.percentage,
        "normalized_score": score.normalized_score,
        "breakdown": [
            {
                "prayer": entry.prayer.value,
                "status": entry.status.value,
                "points": entry.points,
            }
            for entry in score.breakdown
        ],
    }


def serialize_slot(slot: PrayerSlot) -> dict[str, object]:
    """Convert a prayer slot to JSON with its window rendered as text."""
    return {
        "prayer": slot.prayer.value,
        "window": format_window(slot.window),
        "stored_status": slot.stored_status.value,
        "effective_status": slot.effective_status.value,
        "window_state": slot.window_state.value,
    }


def _serialize_counts(counts: PrayerCounts) -> dict[str, int]:
    return {"on_time": counts.on_time, "late": counts.late, "missed": counts.missed}


def serialize_stats(stats: RangeStats) -> dict[str, object]:
    """Convert range statistics to JSON totals and per-prayer counts."""
    return {
        "total": _serialize_counts(stats.total),
        "by_prayer": {
            prayer.value: _serialize_counts(counts)
            for prayer, counts in stats.by_prayer.items()
        },
    }


def serialize_risk(risk: RiskStatus) -> dict[str, object]:
    """Convert a risk status to JSON."""
    return {
        "is_at_risk": risk.is_at_risk,
        "consecutive_inactive_days": risk.consecutive_inactive_days,
    }
