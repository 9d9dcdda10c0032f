"""Error Hierarchy — typed, categorized exceptions for all Attune failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Device command errors never escape an orchestration: the executor records them inline

Design Decisions:
    - Single hierarchy with AttuneError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    DEVICE = "device"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    device_id: str | None = None
    policy_id: str | None = None
    debug_info: dict[str, Any] | None = None


class AttuneError(Exception):
    """Base exception for all Attune errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "device_id": self.context.device_id,
                    "policy_id": self.context.policy_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(AttuneError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class FeatureDisabledError(AttuneError):
    """Feature switched off by configuration."""
    def __init__(self, feature: str, context: ErrorContext | None = None):
        super().__init__(
            f"Feature '{feature}' is disabled",
            "FEATURE_DISABLED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 404,
        )
        self.feature = feature


# ─── Device Errors (recorded inline, never surfaced over HTTP) ──

class DeviceCommandError(AttuneError):
    """Device adapter rejected or failed a command."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DEVICE_COMMAND_FAILED", ErrorCategory.DEVICE,
            ErrorSeverity.WARNING, context, 502,
        )


class DeviceCommandTimeoutError(AttuneError):
    """Device adapter did not answer within the command deadline."""
    def __init__(self, timeout_ms: int, context: ErrorContext | None = None):
        super().__init__(
            f"Device command timed out after {timeout_ms}ms",
            "DEVICE_COMMAND_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, context, 504,
        )
        self.timeout_ms = timeout_ms


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AttuneError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
