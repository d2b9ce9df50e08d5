"""Narrative progress reports generated by an LLM."""

import logging
from dataclasses import dataclass
from typing import Protocol

from prayer_tracker.domain.prayers import PRAYER_ORDER, StudentRecords
from prayer_tracker.domain.stats import RangeStats, Score
from prayer_tracker.services.clock import Clock, freeze
from prayer_tracker.services.scoring import range_score
from prayer_tracker.services.stats import range_stats
from prayer_tracker.services.windows import parse_date_key

logger = logging.getLogger(__name__)

NO_REPORT_TEXT = "No report generated."

PRAYER_DISPLAY_NAMES = {
    "fajr": "Fajr (الفجر)",
    "dhuhr": "Dhuhr (الظهر)",
    "asr": "Asr (العصر)",
    "maghrib": "Maghrib (المغرب)",
    "isha": "Isha (العشاء)",
}


class ReportGenerationError(RuntimeError):
    """Raised when the report provider fails to produce a report."""


class ReportClient(Protocol):
    """Interface for text generation."""

    async def generate(self, *, model: str, prompt: str, store: bool) -> str:
        """Return generated text for the prompt."""


@dataclass
class ReportService:
    """Service that turns prayer statistics into a narrative report."""

    client: ReportClient
    model: str
    store: bool

    async def generate(  # noqa: PLR0913
        self,
        student_name: str,
        records: StudentRecords,
        start_key: str,
        end_key: str,
        clock: Clock,
        *,
        for_admin: bool = False,
    ) -> str:
        """Generate a progress report for the given period."""
        parse_date_key(start_key)
        parse_date_key(end_key)
        clock = freeze(clock)
        stats = range_stats(records, start_key, end_key, clock)
        score = range_score(records, start_key, end_key, clock)
        prompt = build_prompt(
            student_name, start_key, end_key, stats, score, for_admin=for_admin
        )
        try:
            text = await self.client.generate(
                model=self.model, prompt=prompt, store=self.store
            )
        except ReportGenerationError:
            logger.exception("Report generation failed for %s", student_name)
            raise
        return text.strip() or NO_REPORT_TEXT


def build_prompt(  # noqa: PLR0913
    student_name: str,
    start_key: str,
    end_key: str,
    stats: RangeStats,
    score: Score,
    *,
    for_admin: bool,
) -> str:
    """Render the LLM prompt from computed statistics."""
    breakdown = "\n".join(
        f"- {PRAYER_DISPLAY_NAMES[prayer.value]}: "
        f"on time {stats.by_prayer[prayer].on_time}, "
        f"late {stats.by_prayer[prayer].late}, "
        f"missed {stats.by_prayer[prayer].missed}"
        for prayer in PRAYER_ORDER
    )
    word_limit = 300 if for_admin else 200
    sections = []
    if for_admin:
        sections.append(
            "**Statistical Breakdown**: a bulleted list of the on time, late and "
            "missed counts for each prayer, taken from the breakdown above."
        )
    sections.extend(
        [
            "**Detailed Analysis**: which prayers are kept well and which "
            "are a struggle, based on the breakdown.",
            "**Specific Advice**: targeted advice for the weakest prayers.",
            "**Encouragement**: close with a motivating dua or quote in English "
            "about consistency.",
        ]
    )
    structure = "\n".join(
        f"{index}. {section}" for index, section in enumerate(sections, start=1)
    )
    audience = "This report is for the teacher.\n" if for_admin else ""
    return (
        "You are a compassionate and wise spiritual mentor for students.\n"
        f"Student name: {student_name}\n"
        f"Period: {start_key} to {end_key}\n"
        f"{audience}\n"
        "Overall summary:\n"
        f"- Prayers on time: {stats.total.on_time}\n"
        f"- Prayers late: {stats.total.late}\n"
        f"- Prayers missed: {stats.total.missed}\n"
        f"- Period score: {score.total_points}/{score.max_points} points "
        f"({score.percentage}%, {score.normalized_score}/10)\n\n"
        "Breakdown by prayer:\n"
        f"{breakdown}\n\n"
        f"Write a spiritual progress report of at most {word_limit} words.\n"
        "Structure:\n"
        f"{structure}\n\n"
        "Tone: gentle, inspiring, non-judgmental and constructive."
    )
