"""
Analytics error types
"""

from __future__ import annotations


class AnalyticsError(Exception):
    """Base exception for analytics errors"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidWorkRecordError(AnalyticsError):
    """Raised when a raw work record fails boundary validation"""

    def __init__(self, index: int, detail: str):
        self.index = index
        self.detail = detail
        message = f"Work record at index {index} is invalid: {detail}"
        super().__init__(message, "INVALID_WORK_RECORD")


class UnknownInsightError(AnalyticsError):
    """Raised when an insight scope name is not recognized"""

    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Unknown insight scope: {scope}", "UNKNOWN_INSIGHT")
