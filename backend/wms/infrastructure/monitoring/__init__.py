from .error_reporter import ErrorReport, ErrorReporter

__all__ = [
    "ErrorReport",
    "ErrorReporter",
]
