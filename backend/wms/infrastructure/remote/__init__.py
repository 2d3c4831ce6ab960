from .http_record_service import HttpRecordService

__all__ = [
    "HttpRecordService",
]
