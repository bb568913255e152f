"""REST error bodies.

Every error leaving the API has the shape ``{detail, code, errors?}``; the
exception handlers build it from domain errors and request validation errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One field-level problem inside a validation error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "areaSqft",
                "message": "Property ads require areaSqft",
                "code": "REQUIRED",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response.

    ``code`` is the stable domain error code (NOT_FOUND, VALIDATION_ERROR,
    INFRASTRUCTURE_ERROR, ...). ``errors`` is only present for validation
    failures that name individual fields.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Ad with identifier '8d4f...' not found", "code": "NOT_FOUND"},
                {"detail": "Ads store unavailable", "code": "INFRASTRUCTURE_ERROR"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "bedrooms",
                            "message": "Required for apartment, house and villa",
                            "code": "REQUIRED",
                        },
                        {
                            "field": "manufacturerId",
                            "message": "Manufacturer '42' not found or inactive",
                            "code": "REFERENCE_NOT_FOUND",
                        },
                    ],
                },
            ]
        }
    )
