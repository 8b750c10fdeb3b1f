"""Error Hierarchy — typed, tagged exceptions for every foopoc failure mode.

Invariants:
    - Every error carries a six-character diagnostic code naming its origin
    - Each layer re-raises the same exception after annotate(); the type never changes
    - The outermost annotation is the user-facing message; the full trail is logged only
    - Identity-flow errors never expose verification internals to the client

Design Decisions:
    - annotate() over re-wrapping in a new exception: a NotFoundError raised in the
      repository stays a NotFoundError at the HTTP boundary
    - Library exceptions chained with `raise ... from exc` at the origin
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


def format_tag(code: str, text: str) -> str:
    return f"Error {code} - {text}"


@dataclass
class ErrorContext:
    """Context carried alongside an error for log correlation."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    trail: list[str] = field(default_factory=list)


class FooPocError(Exception):
    """Base exception for all foopoc errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.context = ErrorContext(trail=[format_tag(code, message)])

    def annotate(self, code: str, text: str) -> "FooPocError":
        """Push a call-site tag onto the trail and return self for re-raising."""
        self.context.trail.append(format_tag(code, text))
        return self

    @property
    def trail(self) -> list[str]:
        return list(self.context.trail)

    @property
    def outer_tag(self) -> str:
        return self.context.trail[-1]

    def __str__(self) -> str:
        return " <- ".join(reversed(self.context.trail))

    def to_response(self) -> dict:
        """Convert to the JSON error envelope returned by the API."""
        return {
            "message": self.outer_tag,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class BadRequestError(FooPocError):
    """Malformed input: path id, JSON body or authorization header."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )


class UnauthorizedError(FooPocError):
    """Bearer assertion rejected by the access guard."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class VerificationError(UnauthorizedError):
    """Assertion signature or standard claims (iss, aud, exp) did not verify."""


class NotFoundError(FooPocError):
    """No record with the requested identity."""
    def __init__(self, resource_type: str, resource_id: object, code: str):
        super().__init__(
            f"No {resource_type} found with id {resource_id}", code,
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(FooPocError):
    """Database operation failed."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )


class ExchangeError(FooPocError):
    """Authorization code could not be exchanged at the token endpoint."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, 500,
        )


class MissingAssertionError(FooPocError):
    """Token response carried no id_token."""
    def __init__(self, code: str):
        super().__init__(
            "Token response has no id_token", code,
            ErrorCategory.EXTERNAL_API, ErrorSeverity.ERROR, 500,
        )


class DiscoveryError(FooPocError):
    """Provider discovery document or signing keys could not be loaded."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, 500,
        )


class ClaimsError(FooPocError):
    """Verified assertion payload has malformed display claims."""
    def __init__(self, message: str, code: str = "C4LM5X"):
        super().__init__(
            message, code, ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, 500,
        )


class ConfigError(FooPocError):
    """Environment configuration is missing or invalid."""
    def __init__(self, fields: list[str], code: str = "CF9R2Q"):
        super().__init__(
            f"Invalid configuration: {', '.join(fields)}", code,
            ErrorCategory.CONFIGURATION, ErrorSeverity.CRITICAL, 500,
        )
        self.fields = fields


class StateError(FooPocError):
    """Anti-forgery state could not be generated."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )
