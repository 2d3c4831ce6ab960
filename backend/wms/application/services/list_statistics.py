"""Summary figures shown above a list view."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any

from wms.application.services.filter_engine import parse_date
from wms.domain.entities import EntityProfile, Record


@dataclass
class ListStatistics:
    total: int = 0
    archived: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    sums: dict[str, float] = field(default_factory=dict)
    new_this_week: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "archived": self.archived,
            "by_status": dict(self.by_status),
            "sums": dict(self.sums),
            "new_this_week": self.new_this_week,
        }


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def compute_statistics(
    profile: EntityProfile,
    records: Iterable[Record],
    today: date | None = None,
) -> ListStatistics:
    """Aggregate over active records; archived ones are only counted."""
    today = today or datetime.now(timezone.utc).date()
    week_ago = today - timedelta(days=7)

    active: list[Record] = []
    archived = 0
    for record in records:
        if record.archived:
            archived += 1
        else:
            active.append(record)

    by_status: Counter[str] = Counter()
    if profile.status_field:
        by_status.update(
            str(value)
            for value in (r.get(profile.status_field) for r in active)
            if value is not None
        )

    sums = {
        name: round(sum(_number(r.get(name)) for r in active), 2)
        for name in profile.stat_sum_fields
    }

    new_this_week = 0
    for record in active:
        created = (
            parse_date(record.get(profile.date_field)) if profile.date_field else None
        ) or parse_date(record.created_at)
        if created is not None and created >= week_ago:
            new_this_week += 1

    return ListStatistics(
        total=len(active),
        archived=archived,
        by_status=dict(by_status),
        sums=sums,
        new_this_week=new_this_week,
    )
