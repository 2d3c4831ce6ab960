"""Unit tests for list statistics and CSV export."""

import csv
import io
from datetime import date, datetime, timezone

from wms.application.services import compute_statistics, export_csv, export_filename
from wms.domain.entities import Record
from wms.domain.entities.entity_profile import INVENTORY, SALES_ORDERS


def _order(record_id: str, so_date: str, total: float, received: float, status: str,
           archived: bool = False, **extra) -> Record:
    return Record(
        id=record_id,
        entity_type="sales_orders",
        data={
            "soDate": so_date,
            "totalAmount": total,
            "totalReceived": received,
            "receiptStatus": status,
            **extra,
        },
        archived=archived,
    )


ORDERS = [
    _order("SO-001", "2025-10-14", 1799.98, 1799.98, "Paid"),
    _order("SO-002", "2025-10-01", 250.5, 0, "Unpaid"),
    _order("SO-003", "2025-10-12", 100.0, 50, "Partially Paid"),
    _order("SO-004", "2025-10-13", 999.0, 0, "Unpaid", archived=True),
]


def test_statistics_aggregate_active_records_only():
    stats = compute_statistics(SALES_ORDERS, ORDERS, today=date(2025, 10, 15))

    assert stats.total == 3
    assert stats.archived == 1
    assert stats.by_status == {"Paid": 1, "Unpaid": 1, "Partially Paid": 1}
    assert stats.sums == {"totalAmount": 2150.48, "totalReceived": 1849.98}
    assert stats.new_this_week == 2


def test_statistics_fall_back_to_created_at_without_a_date_field():
    fresh = Record(id="INV-001", entity_type="inventory", data={"status": "In Stock", "quantity": 4})
    old = Record(
        id="INV-002",
        entity_type="inventory",
        data={"status": "Critical", "quantity": "n/a"},
        created_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
    )

    stats = compute_statistics(INVENTORY, [fresh, old])

    assert stats.new_this_week == 1
    assert stats.sums == {"quantity": 4.0}
    assert stats.to_dict()["by_status"] == {"In Stock": 1, "Critical": 1}


def test_statistics_of_an_empty_list():
    stats = compute_statistics(SALES_ORDERS, [])
    assert stats.total == 0
    assert stats.sums == {"totalAmount": 0, "totalReceived": 0}


def test_csv_header_and_quoting():
    content = export_csv(SALES_ORDERS, ORDERS[:1])
    rows = list(csv.reader(io.StringIO(content)))

    assert rows[0][:4] == ["Date", "SO ID", "Customer ID", "Customer Name"]
    assert len(rows) == 2
    assert rows[1][1] == "SO-001"
    assert content.startswith('"Date","SO ID"')


def test_csv_formats_items_numbers_and_blanks():
    order = _order(
        "SO-009", "2025-10-14", 1234.5, 0, "Unpaid",
        customerName='Acme "West", Inc.',
        items=[
            {"itemName": "Laptop Computer", "quantity": 2},
            {"itemName": "USB Cable", "quantity": 10},
        ],
    )
    rows = list(csv.DictReader(io.StringIO(export_csv(SALES_ORDERS, [order]))))

    assert rows[0]["Items"] == "Laptop Computer (2); USB Cable (10)"
    assert rows[0]["Total Amount"] == "1234.50"
    assert rows[0]["Customer Name"] == 'Acme "West", Inc.'
    assert rows[0]["Notes"] == ""


def test_export_filename_uses_the_collection_and_date():
    assert export_filename(SALES_ORDERS, date(2025, 10, 15)) == "sales-orders-2025-10-15.csv"
