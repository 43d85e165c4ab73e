"""
Shared error handling for the simple-acl decision engine.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class AclException(Exception):
    """Base exception for the ACL engine."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidArgumentError(AclException):
    """Malformed call shape or unsupported role/resource/rule argument."""

    def __init__(self, message: str = "Invalid argument", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_ARGUMENT", message, details)


class AclRuntimeError(AclException):
    """Invalid engine configuration, e.g. an unusable rule class."""

    def __init__(self, message: str = "Runtime error", details: Optional[Dict[str, Any]] = None):
        super().__init__("RUNTIME_ERROR", message, details)
