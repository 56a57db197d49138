"""
Tool Errors
Structured error taxonomy returned to callers of the dispatcher
"""

from typing import Any, Optional


class ToolError(Exception):
    """Base exception for every failure the dispatcher reports to a caller"""
    code = "tool_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(ToolError):
    """Raised when caller input does not match a tool's input schema"""
    code = "validation_error"

    def __init__(self, message: str, violations: list[dict]):
        super().__init__(message, {"violations": violations})
        self.violations = violations


class InvalidArgument(ToolError):
    """Raised for schema-valid input that makes no sense (negative amount, bad limits)"""
    code = "invalid_argument"


class NotFound(ToolError):
    """Raised when a tool name is not registered"""
    code = "not_found"


class InternalContractViolation(ToolError):
    """Raised when a handler returns output that breaks its own schema"""
    code = "internal_contract_violation"


class ExternalCollaboratorFailure(ToolError):
    """Wraps failures from the recipe source or the favorites store"""
    code = "external_collaborator_failure"
