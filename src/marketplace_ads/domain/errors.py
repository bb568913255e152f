"""Domain error classes.

Protocol-agnostic errors raised by the ads core. Protocol adapters (the FastAPI
exception handlers today) translate them into wire responses.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Carries a human-readable message, a stable error code and free-form
    context that adapters may surface to the caller.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message
            **context: Additional context (field names, identifiers, ...)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Malformed or missing input.

    Examples:
        - price_min > price_max
        - limit outside [1, 100]
        - Vehicle ad without manufacturerId
        - Several inventory references that do not resolve

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: Field-specific errors, each with 'field', 'message' and 'code'
                   Example: [{"field": "areaSqft", "message": "Required", "code": "REQUIRED"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class FilterValidationError(ValidationError):
    """Raised when search filter parameters are invalid."""


class PagingValidationError(ValidationError):
    """Raised when page, limit or sort parameters are invalid."""


class ReferenceNotFoundError(DomainError):
    """An inventory reference does not resolve.

    Raised by the inventory resolver when the id is malformed, unknown, or
    points at an inactive/deleted entity. Write paths collect these and
    re-raise them as a single ValidationError.

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "REFERENCE_NOT_FOUND"

    def __init__(self, reference: str, identifier: str | None = None, **context: Any) -> None:
        """Create a reference error.

        Args:
            reference: Kind of inventory entity (e.g., "Manufacturer", "VehicleModel")
            identifier: The id that failed to resolve
            **context: Additional context
        """
        self.reference = reference
        self.identifier = identifier
        super().__init__(
            f"{reference} '{identifier}' not found or inactive",
            reference=reference,
            identifier=identifier,
            **context,
        )


class NotFoundError(DomainError):
    """Resource not found.

    Also used when the ad exists but the caller may not act on it, so that
    non-owners cannot probe for existence.

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Ad")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class ConflictError(DomainError):
    """Business constraint conflict.

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"


class UnauthorizedError(DomainError):
    """Authentication required or failed.

    Protocol mappings:
        - REST: 401 Unauthorized
    """

    error_code: str = "UNAUTHORIZED"


class ForbiddenError(DomainError):
    """Authenticated but insufficient permissions.

    Protocol mappings:
        - REST: 403 Forbidden
    """

    error_code: str = "FORBIDDEN"


class OrphanDataError(DomainError):
    """An ad lacks its detail record, or a detail record lacks its ad.

    Raised by the consistency maintenance report, and by updates that carry
    detail fields for an ad whose detail record is missing. Reads never
    raise it.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "ORPHAN_DATA"


class InfrastructureError(DomainError):
    """Store, resolver or cache unreachable or timed out.

    Retryable. Read paths retry a bounded number of times before
    surfacing it.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "INFRASTRUCTURE_ERROR"


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
