from .record_repository import SQLAlchemyRecordService

__all__ = [
    "SQLAlchemyRecordService",
]
