"""Payload Validation: turns raw request bodies into typed create/update inputs.

Invariants:
    - Pure: no IO, no store access; failure raises ValidationError (400)
    - Create requires name, brand, category (non-empty) and price (present, 0 allowed)
    - Update accepts any subset of fields; an absent body is an empty update
    - The first failing field names the message; the full list goes to the log context

Design Decisions:
    - Presence check before typed construction: keeps the long-standing
      "Name, brand, category, and price are required" message for the common case
    - Pydantic errors flattened to one sentence: clients get a message, not a schema dump
"""

from pydantic import ValidationError as PydanticValidationError

from product_api.core.errors import ErrorContext, ValidationError
from product_api.schemas.product import ProductCreate, ProductUpdate


REQUIRED_TEXT_FIELDS: tuple[str, ...] = ("name", "brand", "category")
REQUIRED_FIELDS_MESSAGE = "Name, brand, category, and price are required"


def validate_create_payload(payload: object) -> ProductCreate:
    """Validate a create body. Raises ValidationError before any store call."""
    if payload is None:
        raise ValidationError("Product data is required")
    if not isinstance(payload, dict):
        raise ValidationError("Product data must be a JSON object")

    missing = [f for f in REQUIRED_TEXT_FIELDS if not payload.get(f)]
    if payload.get("price") is None:
        missing.append("price")
    if missing:
        raise ValidationError(
            REQUIRED_FIELDS_MESSAGE,
            field=missing[0],
            context=ErrorContext(debug_info={"missing": missing}),
        )

    try:
        return ProductCreate.model_validate(payload)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e


def validate_update_payload(payload: object) -> ProductUpdate:
    """Validate a partial update body."""
    if payload is None:
        return ProductUpdate()
    if not isinstance(payload, dict):
        raise ValidationError("Product data must be a JSON object")

    try:
        return ProductUpdate.model_validate(payload)
    except PydanticValidationError as e:
        raise _to_validation_error(e) from e


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    errors = exc.errors()
    first = errors[0]
    field = ".".join(str(loc) for loc in first["loc"]) or None
    return ValidationError(
        _describe(first, field),
        field=field,
        context=ErrorContext(debug_info={"errors": [
            {"field": ".".join(str(loc) for loc in e["loc"]), "type": e["type"]}
            for e in errors
        ]}),
    )


def _describe(error: dict, field: str | None) -> str:
    if error["type"] == "value_error":
        # Raised by our own validators: the message already names the field
        return str(error["ctx"]["error"])
    if error["type"] == "extra_forbidden":
        return f"Unknown product field: {field}"
    if error["type"] == "string_too_short":
        return f"{field} cannot be empty"
    return f"Invalid {field}: {error['msg']}"
