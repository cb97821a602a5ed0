"""Exception types for adapters and the migration object runtime."""

from typing import Any, Dict, Optional


class ErpMigrationError(Exception):
    """Base class for all errors raised by the package."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class InforError(ErpMigrationError):
    """Adapter contract violation: missing config, unimplemented method, bad endpoint."""

    def __init__(
        self,
        message: str,
        code: str = "INFOR_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["code"] = self.code
        return result


class InforDbError(InforError):
    """Database adapter error. `kind` tells read-only violations from driver or I/O failures."""

    READ_ONLY_VIOLATION = "read-only-violation"
    DRIVER_MISSING = "driver-missing"
    CONNECTION_FAILED = "connection-failed"
    QUERY_FAILED = "query-failed"
    NOT_CONNECTED = "not-connected"
    UNSUPPORTED_DIALECT = "unsupported-dialect"

    def __init__(
        self,
        message: str,
        kind: str = QUERY_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code="ERR_INFOR_DB", details=details)
        self.kind = kind

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["kind"] = self.kind
        return result


class CircuitOpenError(ErpMigrationError):
    """Raised when a circuit breaker refuses a call."""

    code = "CIRCUIT_OPEN"


class MigrationObjectError(ErpMigrationError):
    """Unknown object id, invalid mapping rule, or unknown converter tag."""

    def __init__(
        self,
        message: str,
        code: str = "MIGOBJ_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["code"] = self.code
        return result
