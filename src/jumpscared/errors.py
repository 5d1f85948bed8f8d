from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    URL_NOT_ALLOWED = "URL_NOT_ALLOWED"
    UPSTREAM_FAILED = "UPSTREAM_FAILED"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    PAGE_BLOCKED = "PAGE_BLOCKED"
    PARSE_FAILED = "PARSE_FAILED"


_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.URL_NOT_ALLOWED: 400,
    ErrorCode.UPSTREAM_FAILED: 502,
    ErrorCode.PAGE_BLOCKED: 502,
    ErrorCode.UPSTREAM_TIMEOUT: 500,
    ErrorCode.PARSE_FAILED: 500,
}


class JumpScaredError(Exception):
    """Raised by resolvers and handlers for all expected failure conditions.

    Caught by server.py and serialised into the JSON error body. Never catch
    this inside business logic except where a fallback tier explicitly
    consumes it — let it propagate so the client receives a structured error.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self.code]

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
        }
