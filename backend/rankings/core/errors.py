"""Ranking Errors — typed failures raised by the update and read paths.

Invariants:
    - Each subclass fixes its code, category, severity and HTTP status as class attributes
    - Caller mistakes map to 4xx; store and contest-service failures map to 503
    - to_response() is the only shape clients ever see; log_extra() is the only
      shape the JSON log formatter sees
    - An unknown athlete, a missing ranking record and an empty eligible contest
      set are ordinary outcomes, not errors

Design Decisions:
    - ErrorContext names the ranking bucket (athlete, discipline, year, ranking type)
      so a failed fan-out branch can be traced to the exact record
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_SERVICE = "external_service"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Which ranking bucket the failure belongs to, when known."""
    athlete_id: str | None = None
    discipline: str | None = None
    year: int | None = None
    ranking_type: str | None = None
    debug_info: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def bucket_fields(self) -> dict[str, Any]:
        return {
            "athlete_id": self.athlete_id,
            "discipline": self.discipline,
            "year": self.year,
            "ranking_type": self.ranking_type,
        }


class RankingsError(Exception):
    """Base for every failure the rankings engine raises on purpose."""

    code = "RANKINGS_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.bucket_fields(),
            }
        }

    def log_extra(self) -> dict[str, Any]:
        """`extra=` payload for logger calls; None fields dropped."""
        fields = {"error_code": self.code, **self.context.bucket_fields()}
        return {k: v for k, v in fields.items() if v is not None}


# ─── Caller mistakes (4xx) ──────────────────────────────────────

class InvalidRankingUpdateError(RankingsError):
    """A scoring event that cannot be applied to the targeted bucket."""
    code = "INVALID_RANKING_UPDATE"
    category = ErrorCategory.VALIDATION
    http_status = 400


class ResourceNotFoundError(RankingsError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure failures (503) ──────────────────────────────

class DatabaseError(RankingsError):
    """The ranking store could not complete an operation."""
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation


class ExternalServiceError(RankingsError):
    """The athlete-contest service returned or received something unusable."""
    code = "EXTERNAL_SERVICE_ERROR"
    category = ErrorCategory.EXTERNAL_SERVICE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(
        self, message: str, service: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"{service} error: {message}", context)
        self.service = service
