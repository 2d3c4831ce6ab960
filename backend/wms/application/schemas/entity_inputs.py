"""Pydantic input models validating record fields before any remote call.

Records travel as camelCase dicts (the wire shape of the remote store);
models accept either camelCase or snake_case keys and always dump camelCase.
"""

from datetime import date, datetime, timezone
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from wms.domain.exceptions import RecordValidationError

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"

_ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"
_EMAIL = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class RecordInput(BaseModel):
    """Base for per-collection input models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        str_strip_whitespace=True,
    )

    def to_record_data(self) -> dict[str, Any]:
        """Field dict stored on the record (derived fields included)."""
        return self.model_dump(by_alias=True)


class LineItem(RecordInput):
    inventory_item_id: str = Field(..., min_length=1)
    item_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., gt=0)
    total_price: float = Field(..., gt=0)


class SalesOrderLineItem(LineItem):
    quantity_shipped: int = Field(0, ge=0)


class InventoryItemInput(RecordInput):
    name: str = Field(..., min_length=3, max_length=100)
    category: str = Field(..., min_length=1, max_length=100)
    subcategory: str | None = None
    quantity: int = Field(0, ge=0)
    location: str = Field(..., min_length=1, pattern=r"^[A-Z]-\d+$")
    reorder_level: int = Field(0, ge=0, le=10000)
    brand: str = Field(..., min_length=2, max_length=100)
    price_per_piece: float = Field(..., gt=0, le=1_000_000)
    supplier_id: str = Field(..., min_length=1, pattern=r"^SUP-\d+$")
    maintain_stock_at: int = Field(0, ge=0, le=100_000)
    minimum_stock: int = Field(0, ge=0, le=100_000)
    reorder_required: bool = False
    description: str = ""

    @model_validator(mode="after")
    def _stock_levels_consistent(self) -> "InventoryItemInput":
        if self.maintain_stock_at < self.minimum_stock:
            raise ValueError("Maintain stock at must be greater than or equal to minimum stock")
        return self

    def to_record_data(self) -> dict[str, Any]:
        data = super().to_record_data()
        if self.quantity <= 0:
            data["status"] = "Critical"
        elif self.reorder_required:
            data["status"] = "Low Stock"
        else:
            data["status"] = "In Stock"
        return data


class PurchaseOrderInput(RecordInput):
    supplier_id: str = Field(..., min_length=1, pattern=r"^SUP-\d+$")
    supplier_name: str = Field(..., min_length=1)
    items: list[LineItem] = Field(..., min_length=1)
    expected_delivery_date: str = Field(..., pattern=_ISO_DATE)
    status: str = "Draft"
    created_date: str = Field(default_factory=_today)
    notes: str = ""

    @field_validator("expected_delivery_date")
    @classmethod
    def _delivery_not_in_past(cls, value: str, info: ValidationInfo) -> str:
        # Only new orders must be dated today or later; edits keep old dates.
        if info.context and info.context.get("creating"):
            if date.fromisoformat(value) < datetime.now(timezone.utc).date():
                raise ValueError("Expected delivery date must be today or in the future")
        return value

    def to_record_data(self) -> dict[str, Any]:
        data = super().to_record_data()
        data["totalAmount"] = round(sum(item.total_price for item in self.items), 2)
        return data


class SalesOrderInput(RecordInput):
    so_date: str = Field(default_factory=_today, pattern=_ISO_DATE)
    customer_id: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    customer_country: str = ""
    customer_city: str = ""
    invoice_number: str = ""
    items: list[SalesOrderLineItem] = Field(..., min_length=1)
    expected_delivery_date: str = Field(..., pattern=_ISO_DATE)
    total_received: float = Field(0, ge=0)
    receipt_status: str | None = None
    shipping_status: str = "Pending"
    notes: str = ""

    def to_record_data(self) -> dict[str, Any]:
        data = super().to_record_data()
        total_amount = round(sum(item.total_price for item in self.items), 2)
        data["totalAmount"] = total_amount
        data["soBalance"] = round(total_amount - self.total_received, 2)
        data.setdefault("createdDate", self.so_date)
        if not self.receipt_status:
            if self.total_received >= total_amount:
                data["receiptStatus"] = "Paid"
            elif self.total_received > 0:
                data["receiptStatus"] = "Partially Paid"
            else:
                data["receiptStatus"] = "Unpaid"
        return data


class ShipmentInput(RecordInput):
    order_id: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    carrier: str = Field(..., min_length=1)
    status: Literal["Pending", "Processing", "In Transit", "Delivered"] = "Pending"
    eta: str = ""


class PartyInput(RecordInput):
    """Suppliers and customers share the same contact card."""

    name: str = Field(..., min_length=1, max_length=200)
    contact: str = Field(..., min_length=1)
    email: str = Field(..., pattern=_EMAIL)
    phone: str = ""
    category: str = ""
    status: Literal["Active", "Inactive"] = "Active"
    country: str = ""
    city: str = ""
    address: str = ""


INPUT_SCHEMAS: dict[str, type[RecordInput]] = {
    "inventory": InventoryItemInput,
    "purchase_orders": PurchaseOrderInput,
    "sales_orders": SalesOrderInput,
    "shipments": ShipmentInput,
    "suppliers": PartyInput,
    "customers": PartyInput,
}


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def to_record_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Rename snake_case keys to the camelCase names records are stored under."""
    return {(to_camel(key) if "_" in key.strip("_") else key): value for key, value in data.items()}


def validate_record_input(
    entity_type: str,
    data: dict[str, Any],
    *,
    required_fields: tuple[str, ...] = (),
    creating: bool = True,
) -> dict[str, Any]:
    """Validate ``data`` for a collection and return the normalised field dict.

    Raises RecordValidationError with the "required fields" message when any
    required field is blank, otherwise with the first constraint violation.
    """
    data = to_record_keys(data)
    if any(_is_blank(data.get(name)) for name in required_fields):
        raise RecordValidationError(REQUIRED_FIELDS_MESSAGE)

    schema = INPUT_SCHEMAS.get(entity_type)
    if schema is None:
        return dict(data)

    try:
        model = schema.model_validate(data, context={"creating": creating})
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
            for err in exc.errors()
        ]
        if any(err["type"] == "missing" for err in exc.errors()):
            raise RecordValidationError(REQUIRED_FIELDS_MESSAGE, errors) from exc
        raise RecordValidationError(errors[0], errors) from exc

    return model.to_record_data()


def validate_record_changes(
    entity_type: str, current: dict[str, Any], changes: dict[str, Any]
) -> dict[str, Any]:
    """Check a partial update against an existing record.

    Only violations on the changed fields (or record-level rules) count, so a
    bulk status change is not blocked by gaps elsewhere in older rows.
    Returns ``changes`` keyed the way records are stored.
    """
    changes = to_record_keys(changes)
    schema = INPUT_SCHEMAS.get(entity_type)
    if schema is None:
        return changes

    try:
        schema.model_validate({**current, **changes}, context={"creating": False})
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'record'}: {err['msg']}"
            for err in exc.errors()
            if not err["loc"] or err["loc"][0] in changes
        ]
        if errors:
            raise RecordValidationError(errors[0], errors) from exc
    return changes
