"""CSV export of the filtered (never paginated) rows of a list view."""

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any

from wms.domain.entities import EntityProfile, Record


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, list):
        # Line items read as "Laptop Computer (2); USB Cable (10)".
        parts = []
        for entry in value:
            if isinstance(entry, dict) and "itemName" in entry:
                parts.append(f"{entry['itemName']} ({entry.get('quantity', 0)})")
            else:
                parts.append(str(entry))
        return "; ".join(parts)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def export_csv(profile: EntityProfile, records: Iterable[Record]) -> str:
    """Header row from the profile's column labels, then one quoted row per record."""
    columns = profile.csv_columns or (("id", "ID"),)
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([label for _, label in columns])
    for record in records:
        writer.writerow([_cell(record.get(path)) for path, _ in columns])
    return buffer.getvalue()


def export_filename(profile: EntityProfile, today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"{profile.entity_type.replace('_', '-')}-{today.isoformat()}.csv"
