"""Unit tests for per-collection record input validation."""

import pytest

from wms.application.schemas.entity_inputs import (
    REQUIRED_FIELDS_MESSAGE,
    validate_record_changes,
    validate_record_input,
)
from wms.domain.entities.entity_profile import INVENTORY, PURCHASE_ORDERS, SALES_ORDERS
from wms.domain.exceptions import RecordValidationError

ITEM = {
    "name": "Office Chair",
    "category": "Furniture",
    "brand": "Herman Miller",
    "location": "B-05",
    "pricePerPiece": 299.99,
    "supplierId": "SUP-002",
    "quantity": 23,
}

LINE = {
    "inventoryItemId": "INV-002",
    "itemName": "Office Chair",
    "quantity": 4,
    "unitPrice": 299.99,
    "totalPrice": 1199.96,
}


def test_blank_required_field_gives_the_generic_message():
    with pytest.raises(RecordValidationError) as exc_info:
        validate_record_input(
            "inventory", {**ITEM, "name": ""}, required_fields=INVENTORY.required_fields
        )
    assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE


def test_inventory_status_is_derived_from_stock():
    assert validate_record_input("inventory", ITEM)["status"] == "In Stock"
    assert validate_record_input("inventory", {**ITEM, "quantity": 0})["status"] == "Critical"
    assert (
        validate_record_input("inventory", {**ITEM, "reorderRequired": True})["status"]
        == "Low Stock"
    )


def test_snake_case_keys_are_accepted_and_dumped_as_camel_case():
    data = validate_record_input(
        "inventory",
        {**{k: v for k, v in ITEM.items() if k not in ("pricePerPiece", "supplierId")},
         "price_per_piece": 10.0, "supplier_id": "SUP-001"},
    )
    assert data["pricePerPiece"] == 10.0
    assert data["supplierId"] == "SUP-001"
    assert "price_per_piece" not in data


def test_required_fields_are_found_under_snake_case_keys():
    data = validate_record_input(
        "inventory",
        {**{k: v for k, v in ITEM.items() if k != "supplierId"}, "supplier_id": "SUP-002"},
        required_fields=INVENTORY.required_fields,
    )
    assert data["supplierId"] == "SUP-002"


def test_record_changes_are_checked_only_on_the_changed_fields():
    stored = {"name": "Old Stock", "location": "B-05"}

    assert validate_record_changes("inventory", stored, {"price_per_piece": 5.0}) == {
        "pricePerPiece": 5.0
    }
    with pytest.raises(RecordValidationError) as exc_info:
        validate_record_changes("shipments", {"orderId": "SO-001"}, {"status": "Bogus"})
    assert exc_info.value.message.startswith("status")


@pytest.mark.parametrize(
    "patch",
    [
        {"location": "shelf 4"},
        {"supplierId": "ACME"},
        {"pricePerPiece": 0},
        {"maintainStockAt": 5, "minimumStock": 10},
    ],
)
def test_inventory_constraints(patch):
    with pytest.raises(RecordValidationError) as exc_info:
        validate_record_input("inventory", {**ITEM, **patch})
    assert exc_info.value.errors


def test_purchase_order_delivery_date_checked_only_on_create():
    order = {
        "supplierId": "SUP-001",
        "supplierName": "TechSupply Co.",
        "items": [LINE],
        "expectedDeliveryDate": "2020-01-01",
    }
    with pytest.raises(RecordValidationError):
        validate_record_input("purchase_orders", order, creating=True)

    data = validate_record_input("purchase_orders", order, creating=False)
    assert data["totalAmount"] == 1199.96
    assert data["status"] == "Draft"


def test_sales_order_receipt_status_and_balance():
    base = {
        "customerId": "CUS-001",
        "customerName": "Acme Corp",
        "items": [LINE],
        "expectedDeliveryDate": "2099-01-01",
    }

    unpaid = validate_record_input(
        "sales_orders", base, required_fields=SALES_ORDERS.required_fields
    )
    partial = validate_record_input("sales_orders", {**base, "totalReceived": 100})
    paid = validate_record_input("sales_orders", {**base, "totalReceived": 1199.96})

    assert unpaid["receiptStatus"] == "Unpaid"
    assert partial["receiptStatus"] == "Partially Paid"
    assert partial["soBalance"] == 1099.96
    assert paid["receiptStatus"] == "Paid"


def test_order_without_items_is_missing_required_fields():
    with pytest.raises(RecordValidationError) as exc_info:
        validate_record_input(
            "purchase_orders",
            {"supplierId": "SUP-001", "supplierName": "X", "items": [],
             "expectedDeliveryDate": "2099-01-01"},
            required_fields=PURCHASE_ORDERS.required_fields,
        )
    assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE


def test_party_email_is_checked():
    with pytest.raises(RecordValidationError):
        validate_record_input(
            "customers", {"name": "Acme", "contact": "John", "email": "not-an-email"}
        )


def test_unknown_collections_pass_through():
    assert validate_record_input("notifications", {"title": "Hi"}) == {"title": "Hi"}
