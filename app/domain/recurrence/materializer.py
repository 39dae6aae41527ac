"""
Recurrence materialization.

Expands a task's recurrence rule into concrete future task rows. The routine
is pure: it receives the seed rows and the run date and returns the rows to
insert. Reading seeds and writing the batch is RecurrenceService's job.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Iterable, Optional

from dateutil.relativedelta import relativedelta

from ...utils.dates import as_date

DEFAULT_INTERVAL = 1
DEFAULT_COUNT = 6
DEFAULT_PRIORITY = "medium"


class RecurRule(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


@dataclass
class GeneratedTask:
    """A task row produced from a seed, ready to insert."""

    org_id: str
    title: str
    due_date: date
    priority: str = DEFAULT_PRIORITY
    status: str = "todo"
    position: int = 0
    seed_id: Optional[str] = None

    def as_row(self) -> dict:
        row = asdict(self)
        row.pop("seed_id")
        return row


@dataclass
class MaterializationResult:
    instances: list[GeneratedTask] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.instances)


def step(cursor: date, rule: Any, interval: int) -> Optional[date]:
    """Advance ``cursor`` by one recurrence step.

    Months are added from the first of the month and the day of month is
    then re-applied as an offset, so a day the target month lacks rolls over
    into the next one (Jan 31 + 1 month is Mar 2 in a leap year).

    Returns None for an unknown rule or when the step leaves the supported
    date range.
    """
    try:
        if rule == RecurRule.WEEKLY.value:
            return cursor + timedelta(days=7 * interval)
        if rule == RecurRule.MONTHLY.value:
            first = cursor.replace(day=1) + relativedelta(months=interval)
            return first + timedelta(days=cursor.day - 1)
    except (OverflowError, ValueError):
        return None
    return None


def occurrences_for_seed(
    seed: Any,
    today: date,
    materialized_until: Optional[date] = None,
) -> list[GeneratedTask]:
    """Future occurrences of one seed.

    Past occurrences are skipped without counting toward the seed's count, so
    a seed anchored far in the past steps forward until it reaches ``today``.
    With ``materialized_until`` set, occurrences up to that date count toward
    the target but are not emitted again.
    """
    if seed.due_date is None:
        return []

    interval = max(1, seed.recur_interval or DEFAULT_INTERVAL)
    target_count = max(1, seed.recur_count or DEFAULT_COUNT)
    until = as_date(seed.recur_until) if seed.recur_until else None

    cursor = as_date(seed.due_date)
    created = 0
    emitted: list[GeneratedTask] = []

    while created < target_count:
        cursor = step(cursor, seed.recur_rule, interval)
        if cursor is None:
            break
        if until is not None and cursor > until:
            break
        if cursor < today:
            continue

        created += 1
        if materialized_until is not None and cursor <= materialized_until:
            continue

        emitted.append(
            GeneratedTask(
                org_id=seed.org_id,
                title=seed.title,
                due_date=cursor,
                priority=seed.priority or DEFAULT_PRIORITY,
                seed_id=getattr(seed, "id", None),
            )
        )

    return emitted


def materialize(
    seeds: Iterable[Any],
    today: date,
    org_id: Optional[str] = None,
    track_high_water: bool = False,
) -> MaterializationResult:
    """Generate the batch of task rows for every eligible seed.

    Seeds only need the task attributes (``org_id``, ``title``, ``priority``,
    ``due_date`` and the ``recur_*`` fields), so ORM rows and plain objects
    both work.
    """
    result = MaterializationResult()
    for seed in seeds:
        if org_id and seed.org_id != org_id:
            continue
        if not seed.recur_rule:
            continue

        materialized_until = None
        if track_high_water:
            marker = getattr(seed, "recur_materialized_until", None)
            materialized_until = as_date(marker) if marker else None

        result.instances.extend(occurrences_for_seed(seed, today, materialized_until))
    return result
