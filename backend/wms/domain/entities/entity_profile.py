"""Per-collection configuration injected into the generic list core.

Each warehouse collection reuses the same filter / sort / paginate / select /
mutate machinery; the profile supplies what differs: which fields are
searched, which field carries the status, who may act on it, and how rows
are exported.
"""

from dataclasses import dataclass, field

from wms.domain.exceptions import UnknownEntityTypeError


@dataclass(frozen=True)
class EntityProfile:
    entity_type: str
    label: str
    plural_label: str
    id_prefix: str
    permission_scope: str
    search_fields: tuple[str, ...] = ("id",)
    status_field: str | None = "status"
    date_field: str | None = None
    owner_scoped: bool = False
    notify_on_customer_create: bool = False
    required_fields: tuple[str, ...] = ()
    csv_columns: tuple[tuple[str, str], ...] = ()
    stat_sum_fields: tuple[str, ...] = ()
    # Extra exact-match filters offered next to the status filter.
    filter_fields: tuple[str, ...] = ()
    listable: bool = True
    secondary_sources: tuple[str, ...] = field(default_factory=tuple)


SALES_ORDERS = EntityProfile(
    entity_type="sales_orders",
    label="Sales Order",
    plural_label="sales orders",
    id_prefix="SO",
    # Sales orders share the purchase-order permission set.
    permission_scope="purchase_orders",
    search_fields=("id", "customerName", "items[].itemName"),
    status_field="receiptStatus",
    date_field="soDate",
    owner_scoped=True,
    notify_on_customer_create=True,
    required_fields=("customerId", "items", "expectedDeliveryDate"),
    csv_columns=(
        ("soDate", "Date"),
        ("id", "SO ID"),
        ("customerId", "Customer ID"),
        ("customerName", "Customer Name"),
        ("invoiceNumber", "Invoice #"),
        ("customerCountry", "Country"),
        ("customerCity", "City"),
        ("items", "Items"),
        ("totalAmount", "Total Amount"),
        ("totalReceived", "Total Received"),
        ("receiptStatus", "Receipt Status"),
        ("shippingStatus", "Shipping Status"),
        ("expectedDeliveryDate", "Expected Delivery"),
        ("notes", "Notes"),
    ),
    stat_sum_fields=("totalAmount", "totalReceived"),
    secondary_sources=("customers", "inventory"),
)

PURCHASE_ORDERS = EntityProfile(
    entity_type="purchase_orders",
    label="Purchase Order",
    plural_label="purchase orders",
    id_prefix="PO",
    permission_scope="purchase_orders",
    search_fields=("id", "supplierName", "items[].itemName"),
    status_field="status",
    date_field="createdDate",
    required_fields=("supplierId", "items", "expectedDeliveryDate"),
    csv_columns=(
        ("id", "PO ID"),
        ("supplierId", "Supplier ID"),
        ("supplierName", "Supplier"),
        ("status", "Status"),
        ("totalAmount", "Total Amount"),
        ("createdDate", "Created"),
        ("expectedDeliveryDate", "Expected Delivery"),
        ("notes", "Notes"),
    ),
    stat_sum_fields=("totalAmount",),
    secondary_sources=("suppliers", "inventory"),
)

INVENTORY = EntityProfile(
    entity_type="inventory",
    label="Inventory Item",
    plural_label="inventory items",
    id_prefix="INV",
    permission_scope="inventory",
    search_fields=("name", "id"),
    status_field="status",
    required_fields=("name", "category", "location", "supplierId"),
    csv_columns=(
        ("id", "ID"),
        ("name", "Name"),
        ("category", "Category"),
        ("brand", "Brand"),
        ("quantity", "Quantity"),
        ("location", "Location"),
        ("pricePerPiece", "Price Per Piece"),
        ("supplierId", "Supplier ID"),
        ("status", "Status"),
    ),
    stat_sum_fields=("quantity",),
    filter_fields=("category", "subcategory"),
    secondary_sources=("suppliers",),
)

SHIPMENTS = EntityProfile(
    entity_type="shipments",
    label="Shipment",
    plural_label="shipments",
    id_prefix="SHP",
    permission_scope="shipments",
    search_fields=("id", "orderId", "destination"),
    status_field="status",
    date_field="eta",
    required_fields=("orderId", "destination", "carrier"),
    csv_columns=(
        ("id", "Shipment ID"),
        ("orderId", "Order ID"),
        ("destination", "Destination"),
        ("carrier", "Carrier"),
        ("status", "Status"),
        ("eta", "ETA"),
    ),
)

SUPPLIERS = EntityProfile(
    entity_type="suppliers",
    label="Supplier",
    plural_label="suppliers",
    id_prefix="SUP",
    permission_scope="suppliers",
    search_fields=("name", "id", "category"),
    status_field="status",
    required_fields=("name", "contact", "email"),
    csv_columns=(
        ("id", "ID"),
        ("name", "Company"),
        ("contact", "Contact"),
        ("email", "Email"),
        ("phone", "Phone"),
        ("category", "Category"),
        ("status", "Status"),
    ),
    stat_sum_fields=("purchases", "payments", "balance"),
    secondary_sources=("purchase_orders", "inventory"),
)

CUSTOMERS = EntityProfile(
    entity_type="customers",
    label="Customer",
    plural_label="customers",
    id_prefix="CUS",
    permission_scope="customers",
    search_fields=("name", "id", "contact", "email"),
    status_field="status",
    required_fields=("name", "contact", "email"),
    csv_columns=(
        ("id", "ID"),
        ("name", "Name"),
        ("contact", "Contact"),
        ("email", "Email"),
        ("phone", "Phone"),
        ("category", "Category"),
        ("status", "Status"),
        ("balance", "Balance"),
    ),
    stat_sum_fields=("purchases", "payments", "balance"),
)

NOTIFICATIONS = EntityProfile(
    entity_type="notifications",
    label="Notification",
    plural_label="notifications",
    id_prefix="NTF",
    permission_scope="notifications",
    search_fields=("title", "message"),
    status_field=None,
    listable=False,
)

PROFILES: dict[str, EntityProfile] = {
    profile.entity_type: profile
    for profile in (
        SALES_ORDERS,
        PURCHASE_ORDERS,
        INVENTORY,
        SHIPMENTS,
        SUPPLIERS,
        CUSTOMERS,
        NOTIFICATIONS,
    )
}


def get_profile(entity_type: str, *, listable_only: bool = False) -> EntityProfile:
    """Look up a registered profile by collection name."""
    profile = PROFILES.get(entity_type)
    if profile is None or (listable_only and not profile.listable):
        raise UnknownEntityTypeError(entity_type)
    return profile


def id_prefix_for(entity_type: str) -> str:
    profile = PROFILES.get(entity_type)
    if profile is not None:
        return profile.id_prefix
    return entity_type[:3].upper()
