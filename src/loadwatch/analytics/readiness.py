"""Logging-history readiness for ratio analysis.

A ratio needs a populated chronic window, so an athlete's first weeks of
records produce little or misleading output. This module reports how far a
history is from usable analysis and the progress messages shown while an
athlete builds it up.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from loadwatch.analytics.models import (
    DataReadiness,
    FeedbackKind,
    ProgressFeedback,
    WorkloadRecord,
)

MINIMUM_DAYS = 21
RECOMMENDED_DAYS = 28

WEEKLY_PROGRESS: dict[int, tuple[str, str]] = {
    1: (
        "Recording this week's training load",
        "Log every session to build up your weekly load.",
    ),
    2: (
        "Week-over-week comparison available",
        "Two weeks of data start to show how your load changes.",
    ),
    3: (
        "Ratio analysis almost ready",
        "From next week the ratio can track your injury risk.",
    ),
    4: (
        "Full ratio analysis available",
        "Four weeks of data give the most accurate analysis.",
    ),
}


def _consecutive_days(days: list[date]) -> int:
    """Length of the run of consecutive dates ending at the latest one."""
    if not days:
        return 0
    streak = 1
    for newer, older in zip(reversed(days), reversed(days[:-1])):
        if newer - older != timedelta(days=1):
            break
        streak += 1
    return streak


def readiness_message(days_with_data: int) -> tuple[int, str]:
    """Days still needed and the matching status message."""
    if days_with_data >= RECOMMENDED_DAYS:
        return 0, "Ratio analysis is available at full accuracy."
    if days_with_data >= MINIMUM_DAYS:
        remaining = RECOMMENDED_DAYS - days_with_data
        return remaining, f"{remaining} more days until the recommended history length."
    remaining = MINIMUM_DAYS - days_with_data
    return remaining, f"{remaining} more days until ratio analysis starts."


def assess_readiness(records: Iterable[WorkloadRecord], today: date) -> DataReadiness:
    """Summarize how complete an athlete's logging history is.

    Args:
        records: Workload records in any order.
        today: Civil date the assessment is made on.
    """
    days = sorted({r.date for r in records})
    remaining, message = readiness_message(len(days))
    return DataReadiness(
        days_with_data=len(days),
        consecutive_days=_consecutive_days(days),
        days_remaining=remaining,
        is_minimum_reached=len(days) >= MINIMUM_DAYS,
        is_recommended_reached=len(days) >= RECOMMENDED_DAYS,
        days_since_last_record=(today - days[-1]).days if days else None,
        message=message,
    )


def entry_feedback(days_with_data: int, consecutive_days: int) -> ProgressFeedback | None:
    """Feedback to show right after a record is logged, if any.

    Milestones on total days take priority over streaks, and streaks over
    the periodic encouragement.
    """
    if days_with_data == MINIMUM_DAYS:
        return ProgressFeedback(
            title="Ratio analysis unlocked!",
            message="Three weeks of data collected. You can now manage injury risk with the ratio.",
            kind=FeedbackKind.MILESTONE,
            celebrate=True,
        )
    if days_with_data == RECOMMENDED_DAYS:
        return ProgressFeedback(
            title="Recommended history reached!",
            message="Four full weeks of data. The ratio analysis is now at its most accurate.",
            kind=FeedbackKind.MILESTONE,
            celebrate=True,
        )
    if days_with_data == 7:
        return ProgressFeedback(
            title="Week one complete!",
            message="Good start. Two more weeks until ratio analysis begins.",
            kind=FeedbackKind.MILESTONE,
        )
    if days_with_data == 14:
        return ProgressFeedback(
            title="Week two complete!",
            message="Halfway there. One more week until ratio analysis begins.",
            kind=FeedbackKind.MILESTONE,
        )

    streak_messages = {
        3: ("3-day streak!", "Consistency pays off. Keep building your history."),
        7: ("One-week streak!", "Great habit. Continuous records make the analysis accurate."),
        14: ("Two-week streak!", "Impressive consistency. Ratio analysis is almost here."),
    }
    if consecutive_days in streak_messages:
        title, message = streak_messages[consecutive_days]
        return ProgressFeedback(title=title, message=message, kind=FeedbackKind.SUCCESS)

    if 0 < days_with_data < MINIMUM_DAYS and days_with_data % 5 == 0:
        return ProgressFeedback(
            title="Keep it going",
            message=(
                f"Day {days_with_data} logged. "
                f"{MINIMUM_DAYS - days_with_data} days until ratio analysis."
            ),
            kind=FeedbackKind.ENCOURAGEMENT,
        )

    return None


def weekly_progress(days_with_data: int) -> tuple[int, str, str]:
    """Current logging week with its description and tip.

    Weeks past the fourth reuse the fourth week's text.
    """
    week = days_with_data // 7 + 1
    description, tip = WEEKLY_PROGRESS.get(week, WEEKLY_PROGRESS[4])
    return week, description, tip
