"""Acute:chronic workload ratio calculation.

For every training date D the acute window is the 7 calendar days ending at
D and the chronic window the 28 days ending at D, both inclusive. Loads are
summed over the records that fall in each window and divided by the full
window length, so missing days count as zero load.
"""

from collections.abc import Iterable
from datetime import timedelta

from loadwatch.analytics.models import RatioPoint, RiskLevel, WorkloadRecord
from loadwatch.core.logging import get_logger
from loadwatch.utils.rounding import round_half_up

logger = get_logger(__name__)

ACUTE_WINDOW_DAYS = 7
CHRONIC_WINDOW_DAYS = 28

# Lower bounds, checked top-down; HIGH is strict, the others inclusive
HIGH_RISK_ABOVE = 1.5
CAUTION_FROM = 1.3
GOOD_FROM = 0.8


def classify_risk(ratio: float) -> RiskLevel:
    """Map a ratio to its risk band."""
    if ratio > HIGH_RISK_ABOVE:
        return RiskLevel.HIGH
    elif ratio >= CAUTION_FROM:
        return RiskLevel.CAUTION
    elif ratio >= GOOD_FROM:
        return RiskLevel.GOOD
    else:
        return RiskLevel.LOW


class RatioCalculator:
    """Converts daily workload records into ratio points.

    Example:
        calculator = RatioCalculator()
        points = calculator.calculate(records)
    """

    def calculate(self, records: Iterable[WorkloadRecord]) -> list[RatioPoint]:
        """Calculate one ratio point per qualifying record date.

        Args:
            records: Workload records in any order, one per date.

        Returns:
            Ratio points ascending by date. Dates whose chronic window holds
            no load are omitted.
        """
        ordered = sorted(records, key=lambda r: r.date)
        points: list[RatioPoint] = []

        # Trailing window starts only move forward as the dates ascend
        acute_start = chronic_start = 0
        skipped = 0

        for index, record in enumerate(ordered):
            acute_floor = record.date - timedelta(days=ACUTE_WINDOW_DAYS - 1)
            while ordered[acute_start].date < acute_floor:
                acute_start += 1

            chronic_floor = record.date - timedelta(days=CHRONIC_WINDOW_DAYS - 1)
            while ordered[chronic_start].date < chronic_floor:
                chronic_start += 1

            acute_total = sum(r.load for r in ordered[acute_start : index + 1])
            chronic_total = sum(r.load for r in ordered[chronic_start : index + 1])

            chronic_load = chronic_total / CHRONIC_WINDOW_DAYS
            if chronic_load <= 0:
                skipped += 1
                continue

            acute_load = acute_total / ACUTE_WINDOW_DAYS
            ratio = round_half_up(acute_load / chronic_load, 2)
            points.append(
                RatioPoint(
                    date=record.date,
                    ratio=ratio,
                    acute_load=round_half_up(acute_load, 1),
                    chronic_load=round_half_up(chronic_load, 1),
                    risk_level=classify_risk(ratio),
                )
            )

        logger.debug(
            "Workload ratios calculated",
            records=len(ordered),
            points=len(points),
            skipped=skipped,
        )
        return points
