from .records import (
    BulkIdsRequest,
    BulkOperationResponse,
    BulkUpdateRequest,
    RecordCreate,
    RecordResponse,
    RecordUpdate,
)
from .lists import (
    ErrorReportResponse,
    ListBulkRequest,
    ListFiltersSchema,
    ListMutationRequest,
    ListMutationResponse,
    ListPageResponse,
    ListStatisticsSchema,
    NoticeSchema,
    NotificationResponse,
    PermissionsSchema,
)
from .entity_inputs import INPUT_SCHEMAS, REQUIRED_FIELDS_MESSAGE, validate_record_input

__all__ = [
    "BulkIdsRequest",
    "BulkOperationResponse",
    "BulkUpdateRequest",
    "RecordCreate",
    "RecordResponse",
    "RecordUpdate",
    "ErrorReportResponse",
    "ListBulkRequest",
    "ListFiltersSchema",
    "ListMutationRequest",
    "ListMutationResponse",
    "ListPageResponse",
    "ListStatisticsSchema",
    "NoticeSchema",
    "NotificationResponse",
    "PermissionsSchema",
    "INPUT_SCHEMAS",
    "REQUIRED_FIELDS_MESSAGE",
    "validate_record_input",
]
