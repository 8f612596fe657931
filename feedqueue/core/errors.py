"""Error Hierarchy — typed, categorized exceptions for feedqueue failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration errors are fatal: raised before any state is built, never swallowed
    - Not-found and empty-pool conditions are NOT errors (silent no-ops in the engine)

Design Decisions:
    - Single hierarchy with FeedQueueError base: callers catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class FeedQueueError(Exception):
    """Base exception for all feedqueue errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a JSON-safe error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "field": self.context.field,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Configuration Errors (fatal) ───────────────────────────────

class ConfigurationError(FeedQueueError):
    """Queue configuration is invalid — programmer/config error, not recoverable."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "INVALID_QUEUE_CONFIG", ErrorCategory.VALIDATION,
            ErrorSeverity.CRITICAL, ctx,
        )
        self.field = field


# ─── Navigation Errors ──────────────────────────────────────────

class QueueIndexError(FeedQueueError):
    """Requested render-queue position does not exist."""
    def __init__(self, index: int, length: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = {"index": index, "length": length}
        super().__init__(
            f"Index {index} is outside the render queue (length {length})",
            "QUEUE_INDEX_OUT_OF_RANGE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx,
        )
        self.index = index
        self.length = length
