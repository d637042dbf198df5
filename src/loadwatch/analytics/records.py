"""Workload record intake.

This module handles:
- Normalizing raw supplier rows into WorkloadRecord objects
- Falling back to session RPE (rpe x duration) when no load is given;
  missing session parts count as zero
- Resolving records that share a date
"""

import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from loadwatch.analytics.models import WorkloadRecord
from loadwatch.config.settings import DuplicatePolicy
from loadwatch.core.clock import parse_civil_date
from loadwatch.core.logging import get_logger
from loadwatch.utils.exceptions import DuplicateRecordError, RecordValidationError

logger = get_logger(__name__)


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalize_record(raw: Mapping[str, Any] | WorkloadRecord) -> WorkloadRecord:
    """Convert one supplier row into a WorkloadRecord.

    Raises:
        RecordValidationError: If the date or load cannot be interpreted.
    """
    if isinstance(raw, WorkloadRecord):
        day, load = parse_civil_date(raw.date), _as_number(raw.load)
    else:
        day = parse_civil_date(raw.get("date"))
        if raw.get("load") is None:
            # Absent session parts count as zero
            load = (_as_number(raw.get("rpe")) or 0.0) * (
                _as_number(raw.get("duration_min")) or 0.0
            )
        else:
            load = _as_number(raw.get("load"))

    if day is None:
        raise RecordValidationError(f"Unparsable date: {raw!r}")
    if load is None or not math.isfinite(load):
        raise RecordValidationError(f"Non-numeric load for {day.isoformat()}")
    if load < 0:
        raise RecordValidationError(f"Negative load {load} for {day.isoformat()}")

    return WorkloadRecord(date=day, load=load)


def parse_records(rows: Iterable[Mapping[str, Any] | WorkloadRecord]) -> list[WorkloadRecord]:
    """Normalize supplier rows, skipping the ones that cannot be used.

    Skipped rows are logged, never raised.
    """
    records: list[WorkloadRecord] = []
    skipped = 0
    for index, row in enumerate(rows):
        try:
            records.append(normalize_record(row))
        except RecordValidationError as e:
            skipped += 1
            logger.debug("Workload record skipped", index=index, reason=str(e))

    if skipped:
        logger.warning("Skipped invalid workload records", skipped=skipped, kept=len(records))

    return records


def merge_daily_records(
    records: Iterable[WorkloadRecord],
    policy: DuplicatePolicy = DuplicatePolicy.SUM,
) -> list[WorkloadRecord]:
    """Collapse records to one per date, ascending by date.

    Args:
        records: Normalized records in any order.
        policy: ``SUM`` adds the loads of a shared date; ``REJECT`` raises.

    Raises:
        DuplicateRecordError: With ``REJECT`` when any date repeats.
    """
    by_day: dict[date, list[float]] = defaultdict(list)
    for record in records:
        by_day[record.date].append(record.load)

    duplicated = sorted(day for day, loads in by_day.items() if len(loads) > 1)
    if duplicated:
        if policy == DuplicatePolicy.REJECT:
            raise DuplicateRecordError("Multiple records share a date", duplicated)
        logger.debug("Merged same-day records", dates=len(duplicated))

    return [WorkloadRecord(date=day, load=sum(by_day[day])) for day in sorted(by_day)]
