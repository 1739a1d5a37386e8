"""
Custom exceptions for the parcel store.

Provides standardized error codes so callers can tell a missing parcel
apart from a failed storage operation.
"""

from typing import Any, Dict


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ParcelNotFoundError(AppException):
    """Raised when no parcel row matches the requested number."""
    
    def __init__(self, number: int):
        super().__init__(
            message=f"Parcel with number {number} not found",
            error_code="ERR_NOT_FOUND_001",
            details={"resource": "parcel", "number": number}
        )
        self.number = number


class ParcelStateError(AppException):
    """Raised when a parcel's current status forbids the requested change."""
    
    def __init__(self, number: int, status: Any, action: str):
        status_value = getattr(status, "value", status)
        super().__init__(
            message=f"Cannot {action} parcel {number} in status '{status_value}'",
            error_code="ERR_PARCEL_STATE_001",
            details={"number": number, "status": status_value, "action": action}
        )
        self.number = number
        self.status = status


class InvalidStatusTransitionError(AppException):
    """Raised when a status change skips or reverses the parcel workflow."""
    
    def __init__(self, number: int, current: Any, target: Any):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(
            message=f"Parcel {number} cannot move from '{current_value}' to '{target_value}'",
            error_code="ERR_PARCEL_STATE_002",
            details={"number": number, "current": current_value, "target": target_value}
        )
        self.number = number
        self.current = current
        self.target = target


class StorageError(AppException):
    """Raised when the underlying database operation fails."""
    
    def __init__(self, operation: str, original: Exception):
        super().__init__(
            message=f"Storage failure during {operation}: {original}",
            error_code="ERR_STORAGE_001",
            details={"operation": operation, "error_type": type(original).__name__}
        )
        self.operation = operation
        self.original = original
