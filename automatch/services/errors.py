"""
Auto-matching error handling

Specific error types with user-friendly messages and debugging context.
The matcher itself degrades missing optional data to a zero score; these
errors cover caller contract violations only.
"""
from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for client handling."""
    INVALID_TRANSACTION = "INVALID_TRANSACTION"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_CONFIG = "INVALID_CONFIG"


class AutoMatchError(Exception):
    """Base exception with structured error info."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.detail = detail
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serializable error payload."""
        result = {
            "error": self.code.value,
            "message": self.message
        }
        if self.detail:
            result["detail"] = self.detail
        if self.context:
            result["context"] = self.context
        return result


class InvalidTransactionError(AutoMatchError):
    """A transaction record could not be validated."""

    def __init__(self, kind: str, detail: str, index: Optional[int] = None):
        context: Dict[str, Any] = {"kind": kind}
        if index is not None:
            context["index"] = index
        super().__init__(
            code=ErrorCode.INVALID_TRANSACTION,
            message=f"Invalid {kind} transaction",
            detail=detail,
            context=context
        )


class InvalidInputError(AutoMatchError):
    """Caller passed an argument outside the function's contract."""

    def __init__(self, argument: str, detail: str):
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=f"Invalid value for '{argument}'",
            detail=detail,
            context={"argument": argument}
        )


class ConfigError(AutoMatchError):
    """Error in configuration."""

    def __init__(self, field: str, detail: str):
        super().__init__(
            code=ErrorCode.INVALID_CONFIG,
            message=f"Invalid configuration for '{field}'",
            detail=detail,
            context={"field": field}
        )
